# Snake - Dark Mode
# The mouse: a small 8-way runner that forages for fruit and bolts from the snake.

from collections import deque

from snakedark.grid import (
    NEIGHBORS_8,
    STAY,
    chebyshev,
    edge_distance,
    in_bounds,
    sign,
    torus_delta,
    wrap_cell,
)


class Mouse:
    """Mouse state: position, spare lives, banana boost and the cherry wrap."""

    def __init__(self, x=0, y=0):
        self.x = x
        self.y = y
        self.hp = 0
        self.boost_amount = 0
        self.boost_until = 0.0
        self.cherry_armed = False
        self.alert = False
        # Set when the mouse held still on top of an item last cycle.
        self.grazing = False

    @property
    def cell(self):
        return (self.x, self.y)

    def move_to(self, cell):
        self.x, self.y = cell

    # Boost only counts until its expiry timestamp.
    def active_boost(self, now):
        if self.boost_until and now < self.boost_until:
            return self.boost_amount
        return 0

    def clear_effects(self):
        self.cherry_armed = False
        self.boost_amount = 0
        self.boost_until = 0.0
        self.grazing = False


class MouseAgent:
    """Move picker for the mouse.

    Priority per step: cherry escape over the edge, flee when the snake head is
    close, walk the shortest path to the nearest item, otherwise a random safe
    neighbour (or stay put when boxed in).
    """

    def __init__(self, config, rng):
        self.config = config
        self.rng = rng

    # ----------------------------
    # Safety checks
    # ----------------------------
    def is_safe(self, x, y, snake_cells, wrap):
        n = self.config.grid
        if not wrap and not in_bounds(x, y, n):
            return False
        return wrap_cell(x, y, n) not in snake_cells

    def _target(self, mouse, d, wrap):
        nx, ny = mouse.x + d[0], mouse.y + d[1]
        if wrap:
            nx, ny = wrap_cell(nx, ny, self.config.grid)
        return nx, ny

    def safe_moves(self, mouse, snake_cells, wrap):
        moves = []
        for d in NEIGHBORS_8:
            nx, ny = self._target(mouse, d, wrap)
            if self.is_safe(nx, ny, snake_cells, wrap):
                moves.append(d)
        return moves

    # ----------------------------
    # Decision
    # ----------------------------
    def choose_move(self, mouse, snake_body, item_cells, wrap):
        """Pick a unit step (dx, dy) for this mouse tick. Also refreshes mouse.alert."""
        snake_cells = frozenset(snake_body)
        head = snake_body[0] if snake_body else None
        n = self.config.grid

        if head is not None:
            dist = chebyshev(mouse.x, mouse.y, head[0], head[1], n, wrap)
        else:
            dist = n * 2
        mouse.alert = dist <= self.config.mouse_alert_dist

        if not wrap and mouse.cherry_armed:
            move = self.escape_move(mouse, snake_cells)
            if move is not None:
                return move

        if mouse.alert and head is not None:
            move = self.flee_move(mouse, head, snake_cells, wrap)
            if move is not None:
                return move

        step = self.path_step(mouse, snake_cells, item_cells, wrap)
        if step == STAY:
            # Already standing on the nearest item.
            return STAY
        if step is not None:
            nx, ny = self._target(mouse, step, wrap)
            if self.is_safe(nx, ny, snake_cells, wrap):
                return step

        options = self.safe_moves(mouse, snake_cells, wrap)
        if not options:
            return STAY
        return self.rng.choice(options)

    def escape_move(self, mouse, snake_cells):
        """Cherry armed with solid walls: head for the way out."""
        n = self.config.grid
        exits = [
            d for d in NEIGHBORS_8
            if not in_bounds(mouse.x + d[0], mouse.y + d[1], n)
        ]
        if exits:
            cardinal = [d for d in exits if d[0] == 0 or d[1] == 0]
            pool = cardinal or exits
            on_side = mouse.x == 0 or mouse.x == n - 1
            preferred = [d for d in pool if (d[1] == 0 if on_side else d[0] == 0)]
            if preferred:
                pool = preferred
            return self.rng.choice(pool)

        best = None
        best_dist = None
        for d in NEIGHBORS_8:
            nx, ny = mouse.x + d[0], mouse.y + d[1]
            if not self.is_safe(nx, ny, snake_cells, False):
                continue
            dist = edge_distance(nx, ny, n)
            if best_dist is None or dist < best_dist:
                best = d
                best_dist = dist
        return best

    def flee_move(self, mouse, head, snake_cells, wrap):
        """Safe neighbour farthest from the snake head. First one wins on ties."""
        n = self.config.grid
        best = None
        best_score = -1
        for d in NEIGHBORS_8:
            nx, ny = self._target(mouse, d, wrap)
            if not self.is_safe(nx, ny, snake_cells, wrap):
                continue
            score = chebyshev(nx, ny, head[0], head[1], n, wrap)
            if score > best_score:
                best = d
                best_score = score
        return best

    def path_step(self, mouse, snake_cells, item_cells, wrap):
        """BFS to the nearest item cell; returns the first unit step, STAY, or None."""
        goals = set(item_cells)
        if not goals:
            return None
        n = self.config.grid
        start = wrap_cell(mouse.x, mouse.y, n) if wrap else (mouse.x, mouse.y)
        if start in goals:
            return STAY

        prev = {start: None}
        queue = deque([start])
        while queue:
            cur = queue.popleft()
            if cur in goals:
                # Walk back until the node right after start.
                node = cur
                while prev[node] != start:
                    node = prev[node]
                dx = node[0] - start[0]
                dy = node[1] - start[1]
                if wrap:
                    dx = torus_delta(dx, n)
                    dy = torus_delta(dy, n)
                return sign(dx), sign(dy)
            for d in NEIGHBORS_8:
                nx, ny = cur[0] + d[0], cur[1] + d[1]
                if wrap:
                    nx, ny = wrap_cell(nx, ny, n)
                elif not in_bounds(nx, ny, n):
                    continue
                nxt = (nx, ny)
                if nxt in prev or nxt in snake_cells:
                    continue
                prev[nxt] = cur
                queue.append(nxt)
        return None

    # ----------------------------
    # Applying a move
    # ----------------------------
    def destination(self, mouse, move, wrap):
        """Where a move lands: ((x, y), used_cherry), or (None, False) if walls stop it.

        A cherry crossing is axis-locked: the coordinate that left the board
        wraps, the other one holds.
        """
        n = self.config.grid
        nx, ny = mouse.x + move[0], mouse.y + move[1]
        if in_bounds(nx, ny, n):
            return (nx, ny), False
        if wrap:
            return wrap_cell(nx, ny, n), False
        if not mouse.cherry_armed:
            return None, False
        tx = mouse.x if 0 <= nx < n else nx % n
        ty = mouse.y if 0 <= ny < n else ny % n
        return (tx, ty), True
