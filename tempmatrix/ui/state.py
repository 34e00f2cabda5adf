from __future__ import annotations
from dataclasses import dataclass
from typing import Tuple

from tempmatrix.colors import Mode
from tempmatrix.columns import ColumnMapping
from tempmatrix.monthly import MonthCell

__all__ = [
    "MatrixData",
    "ViewState",
]

@dataclass(frozen=True)
class MatrixData:
    cells: Tuple[MonthCell, ...]
    years: Tuple[int, ...]
    columns: ColumnMapping
    row_count: int
    dropped_rows: int
    kept_rows: int

@dataclass(frozen=True)
class ViewState:
    mode: Mode = Mode.MAX

    def toggled(self) -> "ViewState":
        return ViewState(self.mode.toggled())
