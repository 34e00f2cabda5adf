from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional, Sequence, Tuple

import pandas as pd

from .data import DailyObservation, observations_from_frame

# Width of the horizontal axis in years. The layout is sized from it.
YEAR_WINDOW = 10


@dataclass(frozen=True)
class SeriesPoint:
    day: int
    value: Optional[float]


@dataclass(frozen=True)
class MonthCell:
    year: int
    month: int  # 0..11
    days: Tuple[DailyObservation, ...]
    month_max: Optional[float]
    month_min: Optional[float]
    max_series: Tuple[SeriesPoint, ...]
    min_series: Tuple[SeriesPoint, ...]

    @property
    def key(self) -> Tuple[int, int]:
        return self.year, self.month


def clamp_to_last_years(daily: pd.DataFrame, n_years: int = YEAR_WINDOW) -> pd.DataFrame:
    """Keep observations from the ``n_years`` most recent distinct years."""
    if daily.empty:
        return daily
    years = sorted(daily["year"].unique())
    keep = years[-n_years:]
    return daily[daily["year"].isin(keep)].reset_index(drop=True)


def _extreme(values: pd.Series, how: str) -> Optional[float]:
    v = values.dropna()
    if v.empty:
        return None
    return float(v.max() if how == "max" else v.min())


def build_monthly_cells(daily: pd.DataFrame) -> List[MonthCell]:
    """Group daily observations into one MonthCell per (year, month) present.

    Months without observations produce no cell. A month whose readings are all
    missing still produces a cell, with month_max / month_min left as None.
    """
    cells: List[MonthCell] = []
    if daily.empty:
        return cells
    for (year, month), group in daily.groupby(["year", "month"], sort=True):
        group = group.sort_values("date", kind="mergesort")
        days = tuple(observations_from_frame(group))
        cells.append(MonthCell(
            year=int(year),
            month=int(month),
            days=days,
            month_max=_extreme(group["tmax"], "max"),
            month_min=_extreme(group["tmin"], "min"),
            max_series=tuple(SeriesPoint(d.date.day, d.tmax) for d in days),
            min_series=tuple(SeriesPoint(d.date.day, d.tmin) for d in days),
        ))
    return cells


def cell_years(cells: Sequence[MonthCell]) -> List[int]:
    return sorted({c.year for c in cells})


def cells_frame(cells: Sequence[MonthCell]) -> pd.DataFrame:
    """One row per cell: year, month (1..12 for display), days, month_max, month_min."""
    return pd.DataFrame(
        [
            {
                "year": c.year,
                "month": c.month + 1,
                "days": len(c.days),
                "month_max": c.month_max,
                "month_min": c.month_min,
            }
            for c in cells
        ],
        columns=["year", "month", "days", "month_max", "month_min"],
    )


__all__ = [
    "YEAR_WINDOW",
    "SeriesPoint",
    "MonthCell",
    "clamp_to_last_years",
    "build_monthly_cells",
    "cell_years",
    "cells_frame",
]
