# Snake - Dark Mode
# Snake body + heading. Movement itself is driven by the engine's tick.

from snakedark.grid import RIGHT, CARDINALS, is_reverse


class Snake:
    """Body cells (head first) with a committed and a buffered heading."""

    def __init__(self):
        self.body = []
        self.direction = RIGHT
        self.pending_direction = RIGHT

    # Three cells in a row facing right, centred on (cx, cy).
    def reset(self, center):
        cx, cy = center
        self.body = [(cx + 1, cy), (cx, cy), (cx - 1, cy)]
        self.direction = RIGHT
        self.pending_direction = RIGHT

    def __len__(self):
        return len(self.body)

    @property
    def head(self):
        return self.body[0]

    @property
    def tail(self):
        return self.body[-1]

    def request_direction(self, direction):
        """Buffer a turn. A straight reversal is ignored once the body is longer than 1."""
        direction = tuple(direction)
        if direction not in CARDINALS:
            return False
        if len(self.body) > 1 and is_reverse(direction, self.direction):
            return False
        self.pending_direction = direction
        return True

    def commit_direction(self):
        self.direction = self.pending_direction
        return self.direction

    def next_head(self):
        hx, hy = self.head
        dx, dy = self.direction
        return hx + dx, hy + dy

    def occupies(self, cell):
        return cell in self.body

    # First body index (from start) sitting on cell, or -1.
    def index_of(self, cell, start=1):
        for i in range(start, len(self.body)):
            if self.body[i] == cell:
                return i
        return -1

    def truncate(self, index):
        """Drop the segments from index onward."""
        self.body = self.body[:index]

    def push_head(self, cell):
        self.body.insert(0, cell)

    def pop_tail(self):
        return self.body.pop()

    def cells(self):
        return frozenset(self.body)
