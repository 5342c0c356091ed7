# Snake - Dark Mode
# Item registry: apples, specials, spawn placement and what eating them does.
#
# The registry never touches score/HP itself. consume() hands back an Effect
# and the engine decides how it lands on the snake or on the mouse.

import itertools
import logging
from dataclasses import dataclass
from enum import Enum

logger = logging.getLogger(__name__)


class ItemKind(Enum):
    APPLE = "apple"
    BANANA = "banana"
    ORANGE = "orange"
    PEAR = "pear"
    CHERRY = "cherry"

    @property
    def special(self):
        return self is not ItemKind.APPLE


# Pick order for maybe_spawn_special: one roll out of four, pear counted once.
SPECIAL_PICKS = (ItemKind.BANANA, ItemKind.ORANGE, ItemKind.PEAR, ItemKind.CHERRY)


class Consumer(Enum):
    SNAKE = "snake"
    MOUSE = "mouse"


@dataclass(frozen=True)
class Item:
    item_id: int
    kind: ItemKind
    x: int
    y: int
    pair: int | None = None

    @property
    def cell(self):
        return (self.x, self.y)


@dataclass(frozen=True)
class ConsumeContext:
    """Who is eating, plus what the registry needs to know to respawn and size effects."""

    consumer: Consumer
    occupied: frozenset = frozenset()
    high_score: int = 0
    wrap_walls: bool = False


@dataclass(frozen=True)
class Effect:
    """What one bite did. The engine applies the deltas to the eater."""

    kind: ItemKind
    score: int = 0
    hp: int = 0
    speed_amount: float = 0
    speed_ms: int = 0
    arm_wrap: bool = False
    teleport: tuple | None = None


class ItemRegistry:
    """Arena of live items keyed by id."""

    def __init__(self, config, rng):
        self.config = config
        self.rng = rng
        self._items = {}
        self._ids = itertools.count(1)
        self._pairs = itertools.count(1)

    # ----------------------------
    # Queries
    # ----------------------------
    @property
    def items(self):
        return tuple(self._items.values())

    def __len__(self):
        return len(self._items)

    def clear(self):
        self._items = {}

    def item_at(self, cell):
        for item in self._items.values():
            if item.cell == cell:
                return item
        return None

    def count(self, kind):
        return sum(1 for it in self._items.values() if it.kind is kind)

    def special_present(self):
        return any(it.kind.special for it in self._items.values())

    def occupied_cells(self, snake_cells=()):
        """Cells taken by items plus whatever the caller adds (normally the snake body)."""
        occ = {it.cell for it in self._items.values()}
        occ.update(snake_cells)
        return occ

    # ----------------------------
    # Spawn placement
    # ----------------------------
    def random_cell(self):
        n = self.config.grid
        return self.rng.randrange(n), self.rng.randrange(n)

    # Rejection sampling capped at N*N tries; the last sample wins if the board is full.
    def random_empty_cell(self, occupied):
        occ = self.occupied_cells(occupied)
        cell = self.random_cell()
        guard = 1
        while cell in occ and guard < self.config.cells:
            cell = self.random_cell()
            guard += 1
        return cell

    def random_edge_cell(self, occupied):
        """Empty cell on one of the four borders, or any empty cell if none turns up."""
        occ = self.occupied_cells(occupied)
        n = self.config.grid
        for _ in range(self.config.cells):
            side = self.rng.randrange(4)
            along = self.rng.randrange(n)
            if side == 0:
                cell = (0, along)
            elif side == 1:
                cell = (n - 1, along)
            elif side == 2:
                cell = (along, 0)
            else:
                cell = (along, n - 1)
            if cell not in occ:
                return cell
        return self.random_empty_cell(occupied)

    def place(self, kind, cell, pair=None):
        item = Item(next(self._ids), kind, cell[0], cell[1], pair)
        self._items[item.item_id] = item
        logger.debug("spawned %s at %s", kind.value, cell)
        return item

    def ensure_apple(self, occupied=()):
        """Make sure exactly one apple is on the board."""
        if self.count(ItemKind.APPLE) == 0:
            self.place(ItemKind.APPLE, self.random_empty_cell(occupied))

    def maybe_spawn_special(self, occupied=()):
        """Roll a new special unless one is already out."""
        if self.special_present():
            return None
        kind = SPECIAL_PICKS[self.rng.randrange(len(SPECIAL_PICKS))]
        if kind is ItemKind.PEAR:
            pair = next(self._pairs)
            a = self.random_empty_cell(occupied)
            b = self.random_empty_cell(set(occupied) | {a})
            self.place(ItemKind.PEAR, a, pair)
            self.place(ItemKind.PEAR, b, pair)
        elif kind is ItemKind.CHERRY:
            self.place(ItemKind.CHERRY, self.random_edge_cell(occupied))
        else:
            self.place(kind, self.random_empty_cell(occupied))
        return kind

    # ----------------------------
    # Consumption
    # ----------------------------
    def consume(self, cell, ctx):
        """Eat whatever sits on cell. Returns an Effect, or None if the cell is empty."""
        item = self.item_at(cell)
        if item is None:
            return None

        if item.kind is ItemKind.PEAR:
            partner = None
            for other in self._items.values():
                if other.pair == item.pair and other.item_id != item.item_id:
                    partner = other
                    break
            # Both halves go in one rebuild.
            self._items = {
                iid: it for iid, it in self._items.items() if it.pair != item.pair
            }
            target = partner.cell if partner is not None else item.cell
            return Effect(ItemKind.PEAR, teleport=target)

        del self._items[item.item_id]
        snake = ctx.consumer is Consumer.SNAKE

        if item.kind is ItemKind.APPLE:
            self.ensure_apple(ctx.occupied)
            self.maybe_spawn_special(ctx.occupied)
            return Effect(ItemKind.APPLE, score=1 if snake else 0)

        if item.kind is ItemKind.BANANA:
            return Effect(
                ItemKind.BANANA,
                speed_amount=self.config.banana_slow,
                speed_ms=self.config.banana_duration_ms(ctx.high_score),
            )

        if item.kind is ItemKind.ORANGE:
            return Effect(ItemKind.ORANGE, hp=1)

        # Cherry: the one-step wrap only means something while walls are solid.
        return Effect(
            ItemKind.CHERRY,
            score=1 if snake else 0,
            arm_wrap=not ctx.wrap_walls,
        )
