# Snake - Dark Mode
# HUD readout: the numbers and strings shown in the top bar each frame.

from dataclasses import dataclass


@dataclass(frozen=True)
class HudReadout:
    score: int
    high_score: int
    hp: int
    speed_text: str
    slow_text: str


# "1.5x" normally, "1.5x (×0.67)" while a banana slow drags the speed down.
def speed_text(base_cps, cps, reference_cps):
    base_factor = base_cps / reference_cps
    effect_factor = min(1.0, cps / base_cps)
    if effect_factor < 1:
        return "{:.1f}x (×{:.2f})".format(base_factor, effect_factor)
    return "{:.1f}x".format(base_factor)


def slow_text(remaining_seconds):
    return "{:.1f}s".format(max(0.0, remaining_seconds))
