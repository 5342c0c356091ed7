# Snake - Dark Mode
# Simulation engine: session state, the snake tick, the mouse tick, speeds, game over.
#
# High level states:
#   idle -> playing <-> paused
#   playing -> game_over -> playing (restart)
# Transitions live in start/new_game/toggle_pause/game_over.

import logging
import random
import time
from dataclasses import dataclass
from enum import Enum
from typing import Callable

from snakedark.config import GameConfig
from snakedark.grid import STAY, wrap_or_reject
from snakedark.hud import HudReadout, slow_text, speed_text
from snakedark.items import ConsumeContext, Consumer, ItemKind, ItemRegistry
from snakedark.mouse import Mouse, MouseAgent
from snakedark.snake import Snake
from snakedark.storage import MemoryStore, StorageService

logger = logging.getLogger(__name__)


class Phase(Enum):
    IDLE = "idle"
    PLAYING = "playing"
    PAUSED = "paused"
    GAME_OVER = "game_over"


@dataclass(frozen=True)
class GameOverReport:
    """Handed to the overlay when a run ends."""

    score: int
    best: int
    hp: int
    wrap_walls: bool
    restart: Callable[[], None]
    toggle_wrap: Callable[[], bool]


@dataclass(frozen=True)
class Frame:
    """Everything the renderer and HUD need for one frame."""

    items: tuple
    mouse: tuple
    mouse_alert: bool
    snake: tuple
    heading: tuple
    hud: HudReadout
    wrap_walls: bool
    phase: Phase


class SimulationEngine:
    """Owns one game session and advances it one tick at a time.

    Collaborators are injected: storage for the high score, a seedable RNG for
    spawns and mouse tie-breaks, and a clock returning seconds for the timed
    banana effects.
    """

    def __init__(self, config=None, storage=None, rng=None, clock=None, on_game_over=None):
        self.config = config or GameConfig()
        self.storage = storage or StorageService(MemoryStore())
        self.rng = rng or random.Random()
        self.clock = clock or time.monotonic
        self.on_game_over = on_game_over

        self.items = ItemRegistry(self.config, self.rng)
        self.agent = MouseAgent(self.config, self.rng)
        self.snake = Snake()
        self.mouse = Mouse()

        self.phase = Phase.IDLE
        self.wrap_walls = False
        self.score = 0
        self.hp = 0
        self.slow_amount = 0
        self.slow_until = 0.0
        self.cherry_steps = 0
        # Bumped on every start so the frame loop knows to drop stale accumulated time.
        self.runs = 0
        self.high_score = self.storage.get_high_score()

        self.set_initial_idle_state()

    # ----------------------------
    # Lifecycle
    # ----------------------------
    @property
    def playing(self):
        return self.phase is Phase.PLAYING

    def set_initial_idle_state(self):
        """Fresh board: centred snake, one apple, a mouse, zeroed session numbers."""
        center = self.config.grid // 2
        self.snake.reset((center, center))
        self.score = 0
        self.hp = 0
        self.slow_amount = 0
        self.slow_until = 0.0
        self.cherry_steps = 0
        self.items.clear()
        self.items.ensure_apple(self.snake.body)
        self.mouse = self.spawn_mouse()
        self.phase = Phase.IDLE

    def start(self):
        self.phase = Phase.PLAYING
        self.runs += 1
        logger.info("Run %d started (wrap=%s)", self.runs, self.wrap_walls)

    def new_game(self):
        self.set_initial_idle_state()
        self.start()

    def toggle_pause(self):
        """Flip playing/paused. Returns True when the game is now running."""
        if self.phase is Phase.PLAYING:
            self.phase = Phase.PAUSED
        elif self.phase is Phase.PAUSED:
            self.phase = Phase.PLAYING
        return self.playing

    def toggle_wrap(self):
        self.wrap_walls = not self.wrap_walls
        return self.wrap_walls

    def request_direction(self, direction):
        return self.snake.request_direction(direction)

    def game_over(self):
        self.phase = Phase.GAME_OVER
        best = max(self.score, self.storage.get_high_score())
        self.storage.set_high_score(best)
        self.high_score = best
        logger.info("Game over: score=%d best=%d hp=%d", self.score, best, self.hp)
        if self.on_game_over is not None:
            self.on_game_over(
                GameOverReport(
                    score=self.score,
                    best=best,
                    hp=self.hp,
                    wrap_walls=self.wrap_walls,
                    restart=self.new_game,
                    toggle_wrap=self.toggle_wrap,
                )
            )

    def spawn_mouse(self):
        cell = self.items.random_empty_cell(self.snake.body)
        logger.debug("mouse spawned at %s", cell)
        return Mouse(*cell)

    # ----------------------------
    # Speed model
    # ----------------------------
    def base_cps(self):
        c = self.config
        return min(c.max_cps, c.base_cps + self.score * c.cps_inc)

    def active_slow(self, now=None):
        now = self.clock() if now is None else now
        if self.slow_until and now < self.slow_until:
            return self.slow_amount
        return 0

    def snake_cps(self, now=None):
        return max(self.config.min_cps, self.base_cps() - self.active_slow(now))

    def mouse_cps(self, now=None):
        now = self.clock() if now is None else now
        c = self.config
        rate = c.base_mouse_cps + self.mouse.active_boost(now)
        return max(c.min_mouse_cps, min(c.max_mouse_cps, rate))

    # ----------------------------
    # Effects
    # ----------------------------
    # Respawns must avoid the snake, the mouse, and the cell being moved into.
    def _context(self, consumer, target):
        return ConsumeContext(
            consumer=consumer,
            occupied=self.snake.cells() | {self.mouse.cell, target},
            high_score=self.storage.get_high_score(),
            wrap_walls=self.wrap_walls,
        )

    def _apply_snake_effect(self, effect):
        if effect.score:
            self.score += effect.score
        if effect.hp and self.hp < self.config.max_hp:
            self.hp = min(self.config.max_hp, self.hp + effect.hp)
        if effect.kind is ItemKind.BANANA:
            self.slow_amount = effect.speed_amount
            self.slow_until = self.clock() + effect.speed_ms / 1000.0
        if effect.kind is ItemKind.CHERRY:
            self.cherry_steps = 1 if effect.arm_wrap else 0

    def _apply_mouse_effect(self, effect):
        m = self.mouse
        if effect.hp:
            m.hp += effect.hp
        if effect.kind is ItemKind.BANANA:
            m.boost_amount = effect.speed_amount
            m.boost_until = self.clock() + effect.speed_ms / 1000.0
        if effect.arm_wrap:
            m.cherry_armed = True

    # ----------------------------
    # Snake tick
    # ----------------------------
    def tick(self):
        """One snake step. Does nothing unless the game is playing."""
        if not self.playing:
            return
        n = self.config.grid
        self.snake.commit_direction()
        had_cherry = self.cherry_steps > 0

        nx, ny = self.snake.next_head()
        (nx, ny), outside = wrap_or_reject(nx, ny, n, self.wrap_walls)
        if outside:
            if not had_cherry:
                self.game_over()
                return
            nx, ny = nx % n, ny % n

        ate = False
        pre = self.items.consume((nx, ny), self._context(Consumer.SNAKE, (nx, ny)))
        if pre is not None:
            ate = True
            if pre.teleport is not None:
                nx, ny = pre.teleport
            self._apply_snake_effect(pre)

        hit = self.snake.index_of((nx, ny))
        if hit >= 0:
            if self.hp > 0:
                self.hp -= 1
                self.snake.truncate(hit)
            else:
                self.game_over()
                return

        self.snake.push_head((nx, ny))

        if self.mouse.cell == (nx, ny):
            if self.mouse.hp > 0:
                self.mouse.hp -= 1
                self.mouse.move_to(self.items.random_empty_cell(self.snake.body))
                self.mouse.clear_effects()
            else:
                self.score += self.config.mouse_eat_score
                self.mouse = self.spawn_mouse()
                ate = True

        if not ate:
            post = self.items.consume((nx, ny), self._context(Consumer.SNAKE, (nx, ny)))
            if post is not None:
                self._apply_snake_effect(post)
            else:
                self.snake.pop_tail()

        if had_cherry:
            self.cherry_steps = 0

    # ----------------------------
    # Mouse tick
    # ----------------------------
    def tick_mouse(self):
        """One mouse decision + move. Does nothing unless the game is playing."""
        if not self.playing:
            return
        m = self.mouse
        item_cells = [it.cell for it in self.items.items]
        move = self.agent.choose_move(m, self.snake.body, item_cells, self.wrap_walls)
        if move == STAY:
            self._graze()
            return
        m.grazing = False

        dest, used_cherry = self.agent.destination(m, move, self.wrap_walls)
        if dest is None:
            return
        snake_cells = self.snake.cells()
        if not self.agent.is_safe(dest[0], dest[1], snake_cells, self.wrap_walls):
            return

        effect = self.items.consume(dest, self._context(Consumer.MOUSE, dest))
        if effect is not None:
            if effect.teleport is not None:
                dest = effect.teleport
            self._apply_mouse_effect(effect)
        if not self.agent.is_safe(dest[0], dest[1], snake_cells, self.wrap_walls):
            return

        m.move_to(dest)
        if used_cherry:
            m.cherry_armed = False

    # Holding still on an item: the bite lands on the following decision cycle.
    def _graze(self):
        m = self.mouse
        if not m.grazing:
            m.grazing = self.items.item_at(m.cell) is not None
            return
        m.grazing = False
        effect = self.items.consume(m.cell, self._context(Consumer.MOUSE, m.cell))
        if effect is None:
            return
        self._apply_mouse_effect(effect)
        if effect.teleport is not None:
            tx, ty = effect.teleport
            if self.agent.is_safe(tx, ty, self.snake.cells(), self.wrap_walls):
                m.move_to(effect.teleport)

    # ----------------------------
    # Presentation
    # ----------------------------
    def hud(self, now=None):
        now = self.clock() if now is None else now
        base = self.base_cps()
        return HudReadout(
            score=self.score,
            high_score=self.high_score,
            hp=self.hp,
            speed_text=speed_text(base, self.snake_cps(now), self.config.base_cps),
            slow_text=slow_text((self.slow_until or 0) - now),
        )

    def snapshot(self, now=None):
        return Frame(
            items=self.items.items,
            mouse=self.mouse.cell,
            mouse_alert=self.mouse.alert,
            snake=tuple(self.snake.body),
            heading=self.snake.direction,
            hud=self.hud(now),
            wrap_walls=self.wrap_walls,
            phase=self.phase,
        )
