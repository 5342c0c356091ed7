# Snake - Dark Mode
# Tuning constants and the immutable config handed to the simulation engine.

from dataclasses import dataclass

# ----------------------------
# Core tuning constants
# ----------------------------
GRID = 24                     # Board side length in cells
BASE_CPS = 6                  # Snake cells per second at score 0
MAX_CPS = 16                  # Snake speed cap from score
MIN_CPS = 3                   # Floor after a banana slow
CPS_INC = 0.5                 # Extra cells per second per point

MAX_HP = 3                    # Snake hit points cap (oranges)
BANANA_SLOW = 2               # Cells per second removed by a banana
BANANA_BASE_MS = 3000         # Banana effect length at high score 0
BANANA_PER_HS_MS = 150        # Extra banana time per high score point
BANANA_MAX_MS = 10000         # Banana effect length cap

BASE_MOUSE_CPS = 4
MIN_MOUSE_CPS = 2
MAX_MOUSE_CPS = 14

MOUSE_ALERT_DIST = 3          # Chebyshev distance at or below which the mouse panics
MOUSE_EAT_SCORE = 5           # Points for eating a mouse with no hit points left

# ----------------------------
# Storage keys
# ----------------------------
HS_KEY = "snake_highscore_v1"
CONTROLS_KEY = "snake_controls_v1"


@dataclass(frozen=True)
class GameConfig:
    """Immutable tuning for one engine. Defaults mirror the module constants."""

    grid: int = GRID
    base_cps: float = BASE_CPS
    max_cps: float = MAX_CPS
    min_cps: float = MIN_CPS
    cps_inc: float = CPS_INC
    max_hp: int = MAX_HP
    banana_slow: float = BANANA_SLOW
    banana_base_ms: int = BANANA_BASE_MS
    banana_per_hs_ms: int = BANANA_PER_HS_MS
    banana_max_ms: int = BANANA_MAX_MS
    base_mouse_cps: float = BASE_MOUSE_CPS
    min_mouse_cps: float = MIN_MOUSE_CPS
    max_mouse_cps: float = MAX_MOUSE_CPS
    mouse_alert_dist: int = MOUSE_ALERT_DIST
    mouse_eat_score: int = MOUSE_EAT_SCORE

    def __post_init__(self) -> None:
        if self.grid < 3:
            raise ValueError("grid must be >= 3")
        if self.min_cps <= 0:
            raise ValueError("min_cps must be > 0")
        if not self.min_cps <= self.base_cps <= self.max_cps:
            raise ValueError("base_cps must be within [min_cps, max_cps]")
        if self.cps_inc < 0:
            raise ValueError("cps_inc must be >= 0")
        if self.min_mouse_cps <= 0:
            raise ValueError("min_mouse_cps must be > 0")
        if not self.min_mouse_cps <= self.base_mouse_cps <= self.max_mouse_cps:
            raise ValueError("base_mouse_cps must be within [min_mouse_cps, max_mouse_cps]")
        if self.max_hp < 0:
            raise ValueError("max_hp must be >= 0")
        if min(self.banana_base_ms, self.banana_per_hs_ms, self.banana_max_ms) < 0:
            raise ValueError("banana durations must be >= 0")
        if self.mouse_alert_dist < 0:
            raise ValueError("mouse_alert_dist must be >= 0")

    @property
    def cells(self):
        return self.grid * self.grid

    # Banana slow/boost length grows with the stored best score, up to a cap.
    def banana_duration_ms(self, high_score):
        return min(self.banana_max_ms, self.banana_base_ms + high_score * self.banana_per_hs_ms)
