"""Positional scales used by the matrix layout and the legend.

Semantics follow the usual charting conventions:

- ``BandScale``: a discrete domain split into equal, padded slots. With ``n``
  categories the step is ``span / (n - padding_inner + 2 * padding_outer)``,
  the bandwidth is ``step * (1 - padding_inner)`` and the leftover space is
  centred.
- ``LinearScale``: affine map from a numeric domain onto a range. A
  zero-width domain maps everything to the middle of the range.
- ``tick_step`` / ``nice_domain`` / ``ticks``: "nice" round steps of 1, 2 or 5
  times a power of ten.
"""
from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Dict, Hashable, List, Optional, Sequence, Tuple

import numpy as np

__all__ = [
    "BandScale",
    "LinearScale",
    "tick_step",
    "nice_domain",
    "ticks",
    "extent",
]

_E10 = math.sqrt(50)
_E5 = math.sqrt(10)
_E2 = math.sqrt(2)


@dataclass(frozen=True)
class BandScale:
    domain: Tuple[Hashable, ...]
    start: float
    stop: float
    padding_inner: float = 0.0
    padding_outer: float = 0.0

    @property
    def step(self) -> float:
        n = len(self.domain)
        return (self.stop - self.start) / max(1.0, n - self.padding_inner + 2 * self.padding_outer)

    @property
    def bandwidth(self) -> float:
        return self.step * (1 - self.padding_inner)

    def _offset(self) -> float:
        n = len(self.domain)
        return self.start + (self.stop - self.start - self.step * (n - self.padding_inner)) * 0.5

    def positions(self) -> Dict[Hashable, float]:
        origin = self._offset()
        return {key: origin + i * self.step for i, key in enumerate(self.domain)}

    def __call__(self, key: Hashable) -> Optional[float]:
        return self.positions().get(key)


@dataclass(frozen=True)
class LinearScale:
    domain: Tuple[float, float]
    range: Tuple[float, float]

    def __call__(self, value: float) -> float:
        d0, d1 = self.domain
        r0, r1 = self.range
        span = d1 - d0
        t = 0.5 if span == 0 else (value - d0) / span
        return r0 + t * (r1 - r0)


def tick_step(lo: float, hi: float, count: int) -> float:
    """Round step (1, 2 or 5 x 10^k) giving roughly ``count`` intervals."""
    if count <= 0 or hi == lo:
        return 0.0
    raw = abs(hi - lo) / count
    power = math.floor(math.log10(raw))
    step = 10.0 ** power
    err = raw / step
    if err >= _E10:
        step *= 10
    elif err >= _E5:
        step *= 5
    elif err >= _E2:
        step *= 2
    return step


def nice_domain(lo: float, hi: float, count: int = 10) -> Tuple[float, float]:
    """Extend [lo, hi] outward to multiples of the tick step."""
    if hi < lo:
        lo, hi = hi, lo
    prev = None
    # Two passes settle the step once the bounds have moved.
    for _ in range(2):
        step = tick_step(lo, hi, count)
        if step == 0 or step == prev:
            break
        lo = math.floor(lo / step) * step
        hi = math.ceil(hi / step) * step
        prev = step
    return lo, hi


def ticks(lo: float, hi: float, count: int = 5) -> List[float]:
    if hi < lo:
        lo, hi = hi, lo
    if hi == lo:
        return [lo]
    step = tick_step(lo, hi, count)
    first = math.ceil(lo / step)
    last = math.floor(hi / step)
    return [round(float(v) * step, 12) for v in np.arange(first, last + 1)]


def extent(values: Sequence[Optional[float]]) -> Optional[Tuple[float, float]]:
    vals = [v for v in values if v is not None]
    if not vals:
        return None
    return min(vals), max(vals)
