from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Iterable, List, Optional, Tuple

from plotly.colors import sample_colorscale

from .config import DEFAULT_CONFIG
from .monthly import MonthCell
from .scales import extent, ticks

Domain = Optional[Tuple[float, float]]

COLORSCALE = "Turbo"


class Mode(str, Enum):
    MAX = "MAX"
    MIN = "MIN"

    def toggled(self) -> "Mode":
        return Mode.MIN if self is Mode.MAX else Mode.MAX


def aggregate_value(cell: MonthCell, mode: Mode) -> Optional[float]:
    return cell.month_max if mode is Mode.MAX else cell.month_min


def color_domain(cells: Iterable[MonthCell], mode: Mode) -> Domain:
    """[min, max] of the non-null aggregates for ``mode``; None if there are none."""
    return extent([aggregate_value(c, mode) for c in cells])


@dataclass(frozen=True)
class ColorScale:
    """Sequential colour scale clamped to ``domain``.

    A degenerate domain (None, or equal endpoints) maps every value to the
    middle of the colorscale. ``None`` values get the missing fill.
    """

    domain: Domain
    colorscale: str = COLORSCALE
    missing: str = DEFAULT_CONFIG.missing_fill

    def fraction(self, value: float) -> float:
        if self.domain is None:
            return 0.5
        lo, hi = self.domain
        if hi == lo:
            return 0.5
        t = (value - lo) / (hi - lo)
        return min(1.0, max(0.0, t))

    def at(self, t: float) -> str:
        return sample_colorscale(self.colorscale, [min(1.0, max(0.0, t))])[0]

    def __call__(self, value: Optional[float]) -> str:
        if value is None:
            return self.missing
        return self.at(self.fraction(value))

    def value_at(self, t: float) -> Optional[float]:
        if self.domain is None:
            return None
        lo, hi = self.domain
        return lo + t * (hi - lo)


def legend_stops(scale: ColorScale, n: int = DEFAULT_CONFIG.legend_samples) -> List[Tuple[float, str]]:
    """``n`` evenly spaced (fraction, colour) pairs spanning the domain."""
    if n < 2:
        return [(0.0, scale.at(0.5))]
    out = []
    for i in range(n):
        t = i / (n - 1)
        value = scale.value_at(t)
        out.append((t, scale(value) if value is not None else scale.at(0.5)))
    return out


def legend_ticks(domain: Domain, count: int = 5) -> List[Tuple[float, float, str]]:
    """Labelled ticks for the legend axis as (fraction, value, label)."""
    if domain is None:
        return []
    lo, hi = domain
    values = ticks(lo, hi, count)
    out = []
    for v in values:
        t = 0.5 if hi == lo else (v - lo) / (hi - lo)
        out.append((t, v, f"{v:g}"))
    return out


__all__ = [
    "Mode",
    "Domain",
    "aggregate_value",
    "color_domain",
    "ColorScale",
    "legend_stops",
    "legend_ticks",
]
