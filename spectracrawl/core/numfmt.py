# spectracrawl/core/numfmt.py
from __future__ import annotations
from dataclasses import dataclass
import math
from typing import Literal

Notation = Literal["fixed", "scientific"]

# notation switch boundaries
_SMALL = 1e-3
_LARGE = 1e3


@dataclass(frozen=True)
class Rendering:
    notation: Notation
    decimals: int             # 0 or 3

    def render(self, value: float) -> str:
        kind = "e" if self.notation == "scientific" else "f"
        return f"{value:.{self.decimals}{kind}}"


def resolve(value: float) -> tuple[Rendering, float]:
    """
    Decide how a non-negative magnitude is shown.

    Returns the rendering and the corrected magnitude it applies to:
      - nudge the value up (1e-3 near the upper switch, 1e-7 elsewhere) so
        representation error does not flip the result just below a boundary
      - drop the fractional part of magnitudes >= 1000
      - 3 decimals when the fraction is visible at 1e-3, else 0
      - scientific below/at 1e-3 and from 1000 upwards, fixed otherwise;
        a scientific mantissa with fewer than three literal zeros at 3 decimals
        keeps its 3 decimals
    """
    if value + 0.001 > _LARGE:
        value = value + 0.001
    elif value + 1e-7 > _SMALL:
        value = value + 1e-7
    if value >= _LARGE:
        value = float(math.floor(value))

    frac = value - math.floor(value)
    decimals = 3 if frac > 0 and frac >= _SMALL else 0

    if value <= _SMALL or value >= _LARGE:
        if f"{value:.3e}".count("0") < 3:
            decimals = 3
        return Rendering("scientific", decimals), value
    return Rendering("fixed", decimals), value


def pretty(value: float) -> str:
    """Canonical short string for a finite float, used in file names and headers."""
    negative = value < 0
    value = abs(value)
    if value == 0:
        return "0"
    rendering, value = resolve(value)
    out = rendering.render(value)
    return "-" + out if negative else out
