# Snake - Dark Mode
# Grid helpers: bounded vs wrap-around coordinates and 8-way distances.

# ----------------------------
# Direction vectors
# Grid space: x grows to the right, y grows downward (row 0 is the top row).
# ----------------------------
UP = (0, -1)
DOWN = (0, 1)
LEFT = (-1, 0)
RIGHT = (1, 0)
STAY = (0, 0)

CARDINALS = (UP, DOWN, LEFT, RIGHT)

# Fixed neighbour order (NW, N, NE, W, E, SW, S, SE).
# The mouse BFS and its flee scan depend on this order for deterministic picks.
NEIGHBORS_8 = (
    (-1, -1),
    (0, -1),
    (1, -1),
    (-1, 0),
    (1, 0),
    (-1, 1),
    (0, 1),
    (1, 1),
)


def in_bounds(x, y, n):
    return 0 <= x < n and 0 <= y < n


# Wrap a cell onto the torus, or report that it left a bounded board.
def wrap_or_reject(x, y, n, torus):
    """Return ((x, y), out_of_bounds).

    Toroidal mode always lands inside the board, so the flag is False.
    Clamped mode hands the cell back untouched and flags it when outside.
    """
    if torus:
        return (x % n, y % n), False
    return (x, y), not in_bounds(x, y, n)


def wrap_cell(x, y, n):
    return x % n, y % n


def torus_distance_1d(a, b, n):
    d = abs(a - b)
    return min(d, n - d)


# Shortest signed delta on a ring of size n, in (-n/2, n/2].
def torus_delta(d, n):
    d %= n
    if d > n // 2:
        d -= n
    return d


def chebyshev(ax, ay, bx, by, n, torus):
    """8-directional distance. Uses the shorter way around each axis when torus is set."""
    if torus:
        return max(torus_distance_1d(ax, bx, n), torus_distance_1d(ay, by, n))
    return max(abs(ax - bx), abs(ay - by))


# Distance from a cell to the closest board edge (0 when standing on one).
def edge_distance(x, y, n):
    return min(x, n - 1 - x, y, n - 1 - y)


def sign(v):
    if v > 0:
        return 1
    if v < 0:
        return -1
    return 0


def is_reverse(a, b):
    return a[0] == -b[0] and a[1] == -b[1]
