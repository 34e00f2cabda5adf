from __future__ import annotations

from pathlib import Path

import pandas as pd
import pytest

from tempmatrix.columns import ColumnMapping


@pytest.fixture
def write_csv(tmp_path: Path):
    def _write(text: str, name: str = "daily.csv") -> Path:
        path = tmp_path / name
        path.write_text(text, encoding="utf-8")
        return path

    return _write


@pytest.fixture
def tmax_tmin_columns() -> ColumnMapping:
    return ColumnMapping(date_key="Date", max_key="TMAX", min_key="TMIN")


@pytest.fixture
def raw_frame() -> pd.DataFrame:
    return pd.DataFrame(
        {
            "Date": ["2020-01-02", "2020-01-01", "not a date", "2020-02-10"],
            "TMAX": ["12", "10", "9", ""],
            "TMIN": ["3", "2", "1", "N/A"],
        }
    )
