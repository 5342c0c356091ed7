# Snake - Dark Mode
# arcade front end: window, input, HUD, overlays and drawing.
# The simulation lives in snakedark.engine; this module only drives and draws it.

import logging
import math
import string
import time

import arcade

from snakedark.clock import ErrorSink, FrameLoop
from snakedark.config import GameConfig
from snakedark.controls import KeyMap, apply_scheme, next_scheme, resolve_keys
from snakedark.engine import Phase, SimulationEngine
from snakedark.items import ItemKind
from snakedark.storage import StorageService

logger = logging.getLogger(__name__)

# ----------------------------
# Window layout
# ----------------------------
CELL = 28                     # Size of one grid cell in pixels
HUD_HEIGHT = 56
HUD_PADDING = 8
HINT_SECONDS = 2.0            # How long a hint banner stays up
TITLE = "Snake - Dark Mode"

# ----------------------------
# HUD styling
# ----------------------------
HUD_BG = (8, 12, 24)
HUD_PANEL = (16, 20, 36)
HUD_BORDER = (90, 110, 160)
HUD_LABEL = (170, 210, 255)
HUD_VALUE = (255, 230, 150)
HUD_SUBTEXT = (200, 200, 200)
HUD_FONT = ("Consolas", "Courier New", "Arial")

# ----------------------------
# Board styling
# ----------------------------
FLOOR_BASE = (11, 15, 25)
FLOOR_ALT = (13, 17, 28)      # ultra-subtle checker tint
GRID_LINE = (255, 255, 255, 10)
WALL_EDGE = (70, 140, 235, 90)
WRAP_EDGE = (52, 211, 153, 90)
SNAKE_HEAD = (134, 239, 172)
SNAKE_TAIL = (22, 101, 52)
MOUSE_BODY = (209, 213, 219)
MOUSE_ALERT = (248, 113, 113)
DANGER = (248, 113, 113)

ITEM_COLORS = {
    ItemKind.APPLE: (248, 113, 113),
    ItemKind.BANANA: (253, 224, 71),
    ItemKind.ORANGE: (251, 146, 60),
    ItemKind.PEAR: (134, 239, 172),
    ItemKind.CHERRY: (239, 68, 68),
}

LEGEND = (
    (ItemKind.APPLE, "Apple", "+1 score, grow by 1, speeds you up a little."),
    (ItemKind.BANANA, "Banana", "Slows time briefly; longer with a higher best."),
    (ItemKind.ORANGE, "Orange", "+1 hitpoint, up to a small maximum."),
    (ItemKind.PEAR, "Pear", "Comes in pairs; eat one to teleport to the other."),
    (ItemKind.CHERRY, "Cherry", "On the edges; +1 and one wall wrap when wrap is off."),
)

# ----------------------------
# arcade key symbol -> stored key code
# ----------------------------
KEY_CODES = {getattr(arcade.key, c): "Key" + c for c in string.ascii_uppercase}
KEY_CODES.update({getattr(arcade.key, "KEY_" + d): "Digit" + d for d in string.digits})
KEY_CODES.update({
    arcade.key.UP: "ArrowUp",
    arcade.key.DOWN: "ArrowDown",
    arcade.key.LEFT: "ArrowLeft",
    arcade.key.RIGHT: "ArrowRight",
    arcade.key.SPACE: "Space",
    arcade.key.ENTER: "Enter",
    arcade.key.ESCAPE: "Escape",
})


def key_code(symbol):
    return KEY_CODES.get(symbol)


def _with_alpha(color, alpha):
    return (color[0], color[1], color[2], alpha)


def _mix(a, b, t):
    return tuple(int(a[i] + (b[i] - a[i]) * t) for i in range(3))


class SnakeWindow(arcade.Window):
    """Main game window: wires input and drawing around one SimulationEngine."""

    def __init__(self, config=None, storage=None):
        self.config = config or GameConfig()
        self.board_px = self.config.grid * CELL
        self.screen_w = self.board_px
        self.screen_h = self.board_px + HUD_HEIGHT
        super().__init__(self.screen_w, self.screen_h, TITLE)
        arcade.set_background_color(FLOOR_BASE)

        self.storage = storage or StorageService()
        self.engine = SimulationEngine(self.config, self.storage, on_game_over=self._on_game_over)
        self.errors = ErrorSink(self._on_error)
        self.loop = FrameLoop(self.engine, present=self._present, errors=self.errors)

        self.frame = self.engine.snapshot()
        self.report = None
        self.error_text = None
        self.hint_text = ""
        self.hint_timer = 0.0
        self.anim_time = 0.0

        self.controls = self.storage.get_controls()
        self.keymap = KeyMap.from_record(self.controls)

    # ----------------------------
    # Engine callbacks
    # ----------------------------
    def _present(self, frame):
        self.frame = frame

    def _on_game_over(self, report):
        self.report = report

    def _on_error(self, message):
        self.error_text = message

    def _hint(self, text):
        self.hint_text = text
        self.hint_timer = HINT_SECONDS

    # ----------------------------
    # Controls
    # ----------------------------
    # Menu shortcut: step through the preset schemes and save the choice.
    def _cycle_scheme(self):
        scheme = (self.controls or {}).get("scheme", "wasd")
        scheme = next_scheme(scheme)
        keys = apply_scheme(resolve_keys(self.controls), scheme)
        self.controls = {"scheme": scheme, "keys": keys}
        self.storage.set_controls(self.controls)
        self.keymap = KeyMap(keys)
        self._hint("Controls: " + scheme.upper())

    def _start(self):
        self.report = None
        if self.engine.phase is Phase.IDLE:
            self.engine.start()
        else:
            self.engine.new_game()
        self._hint("Pause with {} · Toggle wrap with {}".format(
            self.keymap.label("pause"), self.keymap.label("wrap")))

    def _toggle_wrap(self):
        on = self.engine.toggle_wrap()
        self._hint("Wrap: {}".format("On" if on else "Off"))

    # ----------------------------
    # Input handling
    # ----------------------------
    def on_key_press(self, symbol: int, modifiers: int):
        """Keyboard input: directions, pause/restart/wrap, menu keys."""
        code = key_code(symbol)
        if self.error_text is not None:
            if symbol == arcade.key.ESCAPE:
                self.close()
            return

        phase = self.engine.phase
        action = self.keymap.action_for(code)

        if phase in (Phase.IDLE, Phase.GAME_OVER):
            if symbol == arcade.key.ENTER or (phase is Phase.GAME_OVER and action == "restart"):
                self._start()
            elif action == "wrap":
                self._toggle_wrap()
            elif phase is Phase.IDLE and symbol == arcade.key.C:
                self._cycle_scheme()
            elif symbol == arcade.key.ESCAPE:
                self.close()
            return

        direction = self.keymap.direction_for(code)
        if direction is not None:
            self.engine.request_direction(direction)
        elif action == "pause":
            if self.engine.toggle_pause():
                self.hint_timer = 0.0
            else:
                self._hint("Paused - press {} to resume".format(self.keymap.label("pause")))
        elif action == "restart":
            self._start()
        elif action == "wrap":
            self._toggle_wrap()

    # ----------------------------
    # Main update loop
    # ----------------------------
    def on_update(self, delta_time: float):
        """Feed the frame loop a monotonic timestamp; it runs the ticks."""
        self.anim_time += delta_time
        if self.hint_timer > 0:
            self.hint_timer -= delta_time
        self.loop.on_frame(time.monotonic())

    # ----------------------------
    # Rendering
    # ----------------------------
    def on_draw(self):
        self.clear()
        if self.error_text is not None:
            self._draw_error()
            return
        try:
            self._draw_board()
            self._draw_hud()
            if self.frame.phase is Phase.IDLE:
                self._draw_start_menu()
            elif self.frame.phase is Phase.GAME_OVER and self.report is not None:
                self._draw_game_over()
            elif self.hint_timer > 0 or self.frame.phase is Phase.PAUSED:
                self._draw_hint()
        except Exception as exc:
            logger.exception("Render failed, stopping the loop")
            self.loop.fail(exc)

    # Convert a grid cell (col,row) into the pixel center. Row 0 is the top row.
    def _cell_center(self, c, r):
        x = c * CELL + CELL / 2
        y = (self.config.grid - 1 - r) * CELL + CELL / 2
        return x, y

    def _draw_board(self):
        n = self.config.grid
        for r in range(n):
            for c in range(n):
                if (r + c) % 2:
                    x, y = self._cell_center(c, r)
                    arcade.draw_rect_filled(arcade.XYWH(x, y, CELL, CELL), FLOOR_ALT)
        for i in range(1, n):
            p = i * CELL
            arcade.draw_line(p, 0, p, self.board_px, GRID_LINE, 1)
            arcade.draw_line(0, p, self.board_px, p, GRID_LINE, 1)

        edge = WRAP_EDGE if self.frame.wrap_walls else WALL_EDGE
        board_rect = arcade.XYWH(self.board_px / 2, self.board_px / 2, self.board_px, self.board_px)
        arcade.draw_rect_outline(board_rect, edge, border_width=2)

        for item in self.frame.items:
            self._draw_item(item)
        self._draw_mouse()
        self._draw_snake()

    def _draw_item(self, item):
        """Fruit: a coloured disc with a little stem or pair marker."""
        x, y = self._cell_center(item.x, item.y)
        col = ITEM_COLORS[item.kind]
        r = CELL * 0.32
        if item.kind is ItemKind.BANANA:
            arcade.draw_ellipse_filled(x, y, CELL * 0.7, CELL * 0.36, col, tilt_angle=20)
        elif item.kind is ItemKind.CHERRY:
            arcade.draw_circle_filled(x - CELL * 0.12, y - CELL * 0.1, CELL * 0.16, col)
            arcade.draw_circle_filled(x + CELL * 0.16, y - CELL * 0.04, CELL * 0.16, col)
            arcade.draw_line(x - CELL * 0.12, y - CELL * 0.1, x, y + CELL * 0.25, (16, 185, 129), 2)
            arcade.draw_line(x + CELL * 0.16, y - CELL * 0.04, x, y + CELL * 0.25, (16, 185, 129), 2)
        else:
            arcade.draw_circle_filled(x, y, r, col)
            arcade.draw_line(x, y + r * 0.8, x + CELL * 0.12, y + CELL * 0.44, (52, 211, 153), 2)
        if item.kind is ItemKind.PEAR:
            # Pulse so the two halves of a pair read as linked.
            pulse = 0.5 + 0.5 * math.sin(self.anim_time * 4.0)
            arcade.draw_circle_outline(x, y, r + 3 + pulse * 2, _with_alpha(col, 120), 1.5)

    def _draw_mouse(self):
        """Grey blob with eyes; a red bar over it while it is alerted."""
        c, r = self.frame.mouse
        x, y = self._cell_center(c, r)
        w = CELL - 6
        arcade.draw_rect_filled(arcade.XYWH(x, y, w, w), MOUSE_BODY)
        eye_r = max(1.2, CELL * 0.06)
        arcade.draw_circle_filled(x - CELL * 0.15, y + CELL * 0.12, eye_r, (17, 24, 39))
        arcade.draw_circle_filled(x + CELL * 0.15, y + CELL * 0.12, eye_r, (17, 24, 39))
        if self.frame.mouse_alert:
            ax = x + CELL * 0.3
            ay = y + CELL * 0.32
            arcade.draw_rect_filled(arcade.XYWH(ax, ay, 3, CELL * 0.2), MOUSE_ALERT)
            arcade.draw_circle_filled(ax, ay - CELL * 0.17, 1.6, MOUSE_ALERT)

    def _draw_snake(self):
        """Body fades from head colour to tail colour; the head gets eyes facing the heading."""
        body = self.frame.snake
        if not body:
            return
        last = max(1, len(body) - 1)
        for i in range(len(body) - 1, -1, -1):
            c, r = body[i]
            x, y = self._cell_center(c, r)
            col = _mix(SNAKE_HEAD, SNAKE_TAIL, i / last)
            arcade.draw_rect_filled(arcade.XYWH(x, y, CELL - 2, CELL - 2), col)

        hx, hy = self._cell_center(*body[0])
        dx, dy = self.frame.heading
        # Grid y grows downward, screen y grows upward.
        fx, fy = dx, -dy
        side_x, side_y = -fy, fx
        for s in (-1, 1):
            ex = hx + fx * CELL * 0.18 + side_x * s * CELL * 0.14
            ey = hy + fy * CELL * 0.18 + side_y * s * CELL * 0.14
            arcade.draw_circle_filled(ex, ey, max(1.5, CELL * 0.08), (17, 24, 39))

    # HUD: score, best, HP, speed and slow countdown.
    def _draw_hud(self):
        hud = self.frame.hud
        hud_center_y = self.screen_h - HUD_HEIGHT / 2
        arcade.draw_rect_filled(arcade.XYWH(self.screen_w / 2, hud_center_y, self.screen_w, HUD_HEIGHT), HUD_BG)
        inner_rect = arcade.XYWH(
            self.screen_w / 2, hud_center_y, self.screen_w - HUD_PADDING * 2, HUD_HEIGHT - HUD_PADDING * 2
        )
        arcade.draw_rect_filled(inner_rect, HUD_PANEL)
        arcade.draw_rect_outline(inner_rect, HUD_BORDER, border_width=2)

        label_y = self.screen_h - 22
        value_y = self.screen_h - HUD_HEIGHT + 12
        fields = (
            ("SCORE", str(hud.score)),
            ("BEST", str(hud.high_score)),
            ("HP", str(hud.hp)),
            ("SPEED", hud.speed_text),
            ("SLOW", hud.slow_text),
        )
        slot = (self.screen_w - HUD_PADDING * 2) / len(fields)
        for i, (label, value) in enumerate(fields):
            cx = HUD_PADDING + slot * i + slot / 2
            arcade.draw_text(label, cx, label_y, HUD_LABEL, 10, font_name=HUD_FONT, anchor_x="center")
            arcade.draw_text(value, cx, value_y, HUD_VALUE, 14, font_name=HUD_FONT, anchor_x="center")

    def _draw_overlay_panel(self):
        overlay_rect = arcade.XYWH(self.screen_w / 2, self.board_px / 2, self.screen_w, self.board_px)
        arcade.draw_rect_filled(overlay_rect, (0, 0, 0, 190))

    # Start menu screen (title, legend, controls).
    def _draw_start_menu(self):
        self._draw_overlay_panel()
        mid_x = self.screen_w / 2
        top = self.board_px - 70
        arcade.draw_text(TITLE, mid_x, top, arcade.color.WHITE, 28, font_name=HUD_FONT, anchor_x="center")

        y = top - 50
        for kind, name, desc in LEGEND:
            arcade.draw_circle_filled(60, y + 6, CELL * 0.3, ITEM_COLORS[kind])
            arcade.draw_text(name, 84, y, HUD_VALUE, 13, font_name=HUD_FONT)
            arcade.draw_text(desc, 170, y, HUD_SUBTEXT, 11, font_name=HUD_FONT)
            y -= 30
        arcade.draw_rect_filled(arcade.XYWH(60, y + 6, CELL - 6, CELL - 6), MOUSE_BODY)
        arcade.draw_text("Mouse", 84, y, HUD_VALUE, 13, font_name=HUD_FONT)
        arcade.draw_text("Runs in 8 directions, eats fruit; +5 if eaten.", 170, y, HUD_SUBTEXT, 11, font_name=HUD_FONT)

        keys = self.keymap
        move_keys = " ".join(keys.label(k) for k in ("up", "left", "down", "right"))
        lines = (
            ("[ ENTER ]  PLAY", arcade.color.WHITE, 18),
            ("[ {} ]  WRAP: {}".format(keys.label("wrap"), "ON" if self.frame.wrap_walls else "OFF"), HUD_SUBTEXT, 14),
            ("[ C ]  CONTROLS: {}".format(move_keys), HUD_SUBTEXT, 14),
            ("[ ESC ]  EXIT", HUD_SUBTEXT, 14),
        )
        y -= 60
        for text, color, size in lines:
            arcade.draw_text(text, mid_x, y, color, size, font_name=HUD_FONT, anchor_x="center")
            y -= 30

    # Game over screen (score, best, HP + restart/wrap).
    def _draw_game_over(self):
        self._draw_overlay_panel()
        mid_x = self.screen_w / 2
        mid_y = self.board_px / 2
        report = self.report
        arcade.draw_text("GAME OVER", mid_x, mid_y + 60, DANGER, 34, font_name=HUD_FONT, anchor_x="center")
        arcade.draw_text(
            "Score: {}  ·  Best: {}  ·  HP: {}".format(report.score, report.best, report.hp),
            mid_x, mid_y + 20, arcade.color.WHITE, 16, font_name=HUD_FONT, anchor_x="center",
        )
        arcade.draw_text(
            "[ ENTER / {} ]  RESTART".format(self.keymap.label("restart")),
            mid_x, mid_y - 20, arcade.color.WHITE, 16, font_name=HUD_FONT, anchor_x="center",
        )
        arcade.draw_text(
            "[ {} ]  WRAP: {}".format(self.keymap.label("wrap"), "ON" if self.frame.wrap_walls else "OFF"),
            mid_x, mid_y - 48, HUD_SUBTEXT, 14, font_name=HUD_FONT, anchor_x="center",
        )
        arcade.draw_text("[ ESC ]  EXIT", mid_x, mid_y - 74, HUD_SUBTEXT, 14, font_name=HUD_FONT, anchor_x="center")

    def _draw_hint(self):
        mid_x = self.screen_w / 2
        y = self.board_px / 2
        arcade.draw_rect_filled(arcade.XYWH(mid_x, y + 8, self.screen_w * 0.8, 44), (0, 0, 0, 170))
        arcade.draw_text(self.hint_text, mid_x, y, arcade.color.WHITE, 14, font_name=HUD_FONT, anchor_x="center")

    def _draw_error(self):
        mid_x = self.screen_w / 2
        mid_y = self.screen_h / 2
        arcade.draw_text("Oops - something went wrong", mid_x, mid_y + 40, DANGER, 22, font_name=HUD_FONT, anchor_x="center")
        arcade.draw_text(
            self.error_text, mid_x, mid_y, HUD_SUBTEXT, 12, font_name=HUD_FONT,
            anchor_x="center", multiline=True, width=int(self.screen_w * 0.85), align="center",
        )
        arcade.draw_text("[ ESC ]  EXIT", mid_x, mid_y - 80, HUD_SUBTEXT, 14, font_name=HUD_FONT, anchor_x="center")


# ----------------------------
# Entry point
# ----------------------------
def main():
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    SnakeWindow()
    arcade.run()


if __name__ == "__main__":
    main()
