"""Tests for snakedark.engine: snake tick, mouse tick, speeds and game over."""

from __future__ import annotations

from random import Random

from snakedark.config import GameConfig
from snakedark.engine import Phase, SimulationEngine
from snakedark.grid import DOWN, LEFT
from snakedark.items import ItemKind
from snakedark.storage import MemoryStore, StorageService


def clear_board(engine: SimulationEngine, mouse_cell=(0, 23)) -> None:
    """Empty the board and park the mouse out of the way."""
    engine.items.clear()
    engine.mouse.move_to(mouse_cell)


def at_right_edge(engine: SimulationEngine, row: int = 5) -> None:
    engine.snake.body = [(23, row), (22, row), (21, row)]


class TestIdleState:
    def test_fresh_engine(self, engine) -> None:
        assert engine.phase is Phase.IDLE
        assert engine.snake.body == [(13, 12), (12, 12), (11, 12)]
        assert engine.items.count(ItemKind.APPLE) == 1
        assert engine.mouse.cell not in engine.snake.body
        assert engine.score == 0 and engine.hp == 0

    def test_ticks_do_nothing_until_started(self, engine) -> None:
        body = list(engine.snake.body)
        mouse = engine.mouse.cell
        engine.tick()
        engine.tick_mouse()
        assert engine.snake.body == body
        assert engine.mouse.cell == mouse

    def test_high_score_loaded_from_storage(self, clock) -> None:
        store = MemoryStore({"snake_highscore_v1": 12})
        eng = SimulationEngine(GameConfig(), StorageService(store), Random(0), clock)
        assert eng.high_score == 12
        assert eng.hud().high_score == 12


class TestSnakeTick:
    def test_plain_step_keeps_length(self, engine) -> None:
        clear_board(engine)
        engine.start()
        engine.tick()
        assert engine.snake.body == [(14, 12), (13, 12), (12, 12)]

    def test_apple_eat(self, engine) -> None:
        clear_board(engine)
        engine.items.place(ItemKind.APPLE, (14, 12))
        engine.start()
        engine.tick()
        assert engine.score == 1
        assert len(engine.snake) == 4
        assert engine.snake.head == (14, 12)
        apples = [it for it in engine.items.items if it.kind is ItemKind.APPLE]
        assert len(apples) == 1
        assert apples[0].cell not in engine.snake.body

    def test_turn_applies_on_next_tick(self, engine) -> None:
        clear_board(engine)
        engine.start()
        assert engine.request_direction(DOWN)
        assert not engine.request_direction((0, 0))
        engine.tick()
        assert engine.snake.head == (13, 13)

    def test_reverse_request_ignored(self, engine) -> None:
        clear_board(engine)
        engine.start()
        assert not engine.request_direction(LEFT)
        engine.tick()
        assert engine.snake.head == (14, 12)

    def test_wall_is_game_over_even_with_hp(self, engine) -> None:
        clear_board(engine)
        engine.start()
        at_right_edge(engine)
        engine.hp = 2
        engine.tick()
        assert engine.phase is Phase.GAME_OVER
        assert engine.snake.head == (23, 5)

    def test_wrap_walls_crosses(self, engine) -> None:
        clear_board(engine)
        engine.toggle_wrap()
        engine.start()
        at_right_edge(engine)
        engine.tick()
        assert engine.phase is Phase.PLAYING
        assert engine.snake.head == (0, 5)

    def test_cherry_allows_one_crossing(self, engine) -> None:
        clear_board(engine)
        engine.start()
        at_right_edge(engine)
        engine.cherry_steps = 1
        engine.tick()
        assert engine.snake.head == (0, 5)
        assert engine.cherry_steps == 0
        engine.snake.body = [(23, 8), (22, 8), (21, 8)]
        engine.tick()
        assert engine.phase is Phase.GAME_OVER


class TestSelfCollision:
    def coil(self, engine: SimulationEngine) -> None:
        clear_board(engine, mouse_cell=(20, 20))
        engine.start()
        engine.snake.body = [(5, 5), (6, 5), (6, 6), (5, 6), (4, 6)]
        engine.snake.direction = DOWN
        engine.snake.pending_direction = DOWN

    def test_zero_hp_is_game_over(self, engine) -> None:
        reports = []
        engine.on_game_over = reports.append
        engine.storage.set_high_score(3)
        self.coil(engine)
        engine.score = 7
        engine.tick()
        assert engine.phase is Phase.GAME_OVER
        assert engine.storage.get_high_score() == 7
        assert len(reports) == 1
        assert (reports[0].score, reports[0].best, reports[0].hp) == (7, 7, 0)

    def test_game_over_never_lowers_high_score(self, engine) -> None:
        engine.storage.set_high_score(10)
        self.coil(engine)
        engine.score = 7
        engine.tick()
        assert engine.storage.get_high_score() == 10
        assert engine.high_score == 10

    def test_hp_absorbs_hit_and_truncates(self, engine) -> None:
        self.coil(engine)
        engine.hp = 1
        engine.tick()
        assert engine.phase is Phase.PLAYING
        assert engine.hp == 0
        assert engine.snake.body == [(5, 6), (5, 5), (6, 5)]


class TestItemsOnTick:
    def eat(self, engine: SimulationEngine, kind: ItemKind) -> None:
        clear_board(engine)
        engine.items.place(kind, (14, 12))
        engine.start()
        engine.tick()

    def test_banana_slows_then_expires(self, engine, clock) -> None:
        self.eat(engine, ItemKind.BANANA)
        assert len(engine.snake) == 4
        assert engine.snake_cps() == 4
        assert engine.hud().speed_text == "1.0x (×0.67)"
        assert engine.hud().slow_text == "3.0s"
        clock.advance(3.0)
        assert engine.snake_cps() == 6
        assert engine.hud().speed_text == "1.0x"

    def test_orange_adds_hp_up_to_cap(self, engine) -> None:
        engine.hp = engine.config.max_hp
        self.eat(engine, ItemKind.ORANGE)
        assert engine.hp == engine.config.max_hp
        engine.hp = 0
        engine.items.place(ItemKind.ORANGE, (15, 12))
        engine.tick()
        assert engine.hp == 1

    def test_cherry_scores_and_arms(self, engine) -> None:
        self.eat(engine, ItemKind.CHERRY)
        assert engine.score == 1
        assert engine.cherry_steps == 1

    def test_pear_teleports_head(self, engine) -> None:
        clear_board(engine)
        engine.items.place(ItemKind.PEAR, (14, 12), pair=7)
        engine.items.place(ItemKind.PEAR, (3, 3), pair=7)
        engine.start()
        engine.tick()
        assert engine.snake.head == (3, 3)
        assert len(engine.snake) == 4
        assert engine.items.count(ItemKind.PEAR) == 0


class TestSnakeMeetsMouse:
    def test_mouse_with_hp_escapes(self, engine) -> None:
        clear_board(engine, mouse_cell=(14, 12))
        engine.mouse.hp = 1
        engine.mouse.cherry_armed = True
        engine.start()
        engine.tick()
        assert engine.mouse.hp == 0
        assert not engine.mouse.cherry_armed
        assert engine.mouse.cell not in engine.snake.body
        assert engine.score == 0
        assert len(engine.snake) == 3

    def test_mouse_without_hp_is_eaten(self, engine) -> None:
        clear_board(engine, mouse_cell=(14, 12))
        engine.start()
        engine.tick()
        assert engine.score == 5
        assert len(engine.snake) == 4
        assert engine.mouse.cell not in engine.snake.body


class TestMouseTick:
    def test_forages_toward_item(self, engine) -> None:
        clear_board(engine, mouse_cell=(4, 2))
        engine.items.place(ItemKind.APPLE, (5, 2))
        engine.start()
        engine.tick_mouse()
        assert engine.mouse.cell == (5, 2)
        assert engine.score == 0
        assert engine.items.count(ItemKind.APPLE) == 1
        assert engine.items.item_at((5, 2)) is None

    def test_grazes_on_second_cycle(self, engine) -> None:
        clear_board(engine, mouse_cell=(5, 5))
        engine.items.place(ItemKind.ORANGE, (5, 5))
        engine.start()
        engine.tick_mouse()
        assert engine.mouse.cell == (5, 5)
        assert engine.mouse.hp == 0
        engine.tick_mouse()
        assert engine.mouse.hp == 1
        assert engine.items.item_at((5, 5)) is None

    def test_orange_hp_is_uncapped_for_mouse(self, engine) -> None:
        clear_board(engine, mouse_cell=(4, 2))
        engine.mouse.hp = 10
        engine.items.place(ItemKind.ORANGE, (5, 2))
        engine.start()
        engine.tick_mouse()
        assert engine.mouse.hp == 11

    def test_banana_boosts_mouse(self, engine, clock) -> None:
        clear_board(engine, mouse_cell=(4, 2))
        engine.items.place(ItemKind.BANANA, (5, 2))
        engine.start()
        engine.tick_mouse()
        assert engine.mouse_cps() == 6
        clock.advance(10)
        assert engine.mouse_cps() == 4

    def test_pear_teleports_mouse(self, engine) -> None:
        clear_board(engine, mouse_cell=(4, 2))
        engine.items.place(ItemKind.PEAR, (5, 2), pair=1)
        engine.items.place(ItemKind.PEAR, (10, 3), pair=1)
        engine.start()
        engine.tick_mouse()
        assert engine.mouse.cell == (10, 3)
        assert engine.items.count(ItemKind.PEAR) == 0

    def test_pear_onto_snake_keeps_mouse_put(self, engine) -> None:
        clear_board(engine, mouse_cell=(4, 2))
        engine.items.place(ItemKind.PEAR, (5, 2), pair=1)
        engine.items.place(ItemKind.PEAR, (12, 12), pair=1)
        engine.start()
        engine.tick_mouse()
        assert engine.mouse.cell == (4, 2)
        assert engine.items.count(ItemKind.PEAR) == 0

    def test_cherry_escape_through_wall(self, engine) -> None:
        clear_board(engine, mouse_cell=(0, 5))
        engine.mouse.cherry_armed = True
        engine.start()
        engine.tick_mouse()
        assert engine.mouse.cell == (23, 5)
        assert not engine.mouse.cherry_armed


class TestSpeeds:
    def test_snake_rate_bounds(self, engine) -> None:
        for score in range(0, 200, 7):
            engine.score = score
            assert engine.config.min_cps <= engine.snake_cps() <= engine.config.max_cps
        engine.score = 1000
        assert engine.snake_cps() == 16

    def test_slow_floor(self, clock) -> None:
        eng = SimulationEngine(GameConfig(banana_slow=10), rng=Random(0), clock=clock)
        eng.slow_amount = 10
        eng.slow_until = clock() + 5
        assert eng.snake_cps() == 3

    def test_mouse_rate_clamped(self, engine, clock) -> None:
        engine.mouse.boost_amount = 100
        engine.mouse.boost_until = clock() + 1
        assert engine.mouse_cps() == 14
        clock.advance(1)
        assert engine.mouse_cps() == 4


class TestLifecycle:
    def test_pause_freezes_ticks(self, engine) -> None:
        clear_board(engine)
        engine.start()
        assert engine.toggle_pause() is False
        assert engine.phase is Phase.PAUSED
        body = list(engine.snake.body)
        engine.tick()
        assert engine.snake.body == body
        assert engine.toggle_pause() is True

    def test_restart_from_report(self, engine) -> None:
        reports = []
        engine.on_game_over = reports.append
        clear_board(engine)
        engine.start()
        at_right_edge(engine)
        engine.score = 4
        engine.tick()
        report = reports[0]
        assert report.wrap_walls is False
        assert report.toggle_wrap() is True
        report.restart()
        assert engine.phase is Phase.PLAYING
        assert engine.score == 0
        assert len(engine.snake) == 3
        assert engine.wrap_walls is True
        assert engine.runs == 2

    def test_snapshot(self, engine) -> None:
        frame = engine.snapshot()
        assert frame.snake == tuple(engine.snake.body)
        assert frame.heading == (1, 0)
        assert frame.mouse == engine.mouse.cell
        assert frame.phase is Phase.IDLE
        assert frame.hud.speed_text == "1.0x"
        assert frame.hud.slow_text == "0.0s"
