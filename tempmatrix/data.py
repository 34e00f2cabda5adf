from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from datetime import date
from pathlib import Path
from typing import IO, Any, List, Mapping, Optional, Union

import numpy as np
import pandas as pd

from .columns import ColumnMapping

CsvSource = Union[str, Path, IO[Any]]

FALLBACK_DATE_FORMAT = "%Y-%m-%d"
DAILY_COLUMNS = ["date", "year", "month", "tmax", "tmin"]


class DataLoadError(RuntimeError):
    """The input CSV is missing, unreadable or has no data rows."""


@dataclass(frozen=True)
class DailyObservation:
    date: date
    year: int
    month: int  # 0..11
    tmax: Optional[float]
    tmin: Optional[float]


def parse_date(text: Any) -> Optional[pd.Timestamp]:
    """Tolerant date parse: general parser first, then ``%Y-%m-%d``.

    Returns None for blank text or when neither attempt gives a valid date.
    Timezone-aware values keep their wall-clock time.
    """
    if text is None:
        return None
    s = str(text).strip()
    if not s:
        return None
    try:
        ts = pd.to_datetime(s, errors="coerce")
    except (ValueError, TypeError, OverflowError):
        ts = pd.NaT
    if pd.isna(ts):
        ts = pd.to_datetime(s, format=FALLBACK_DATE_FORMAT, errors="coerce")
    if pd.isna(ts):
        return None
    if ts.tzinfo is not None:
        ts = ts.tz_localize(None)
    return ts


def to_number(text: Any) -> Optional[float]:
    """Blank / missing / non-numeric / non-finite text -> None."""
    if text is None:
        return None
    s = str(text).strip()
    # float() accepts digit separators ("1_000"); they are not numbers here
    if not s or "_" in s:
        return None
    try:
        value = float(s)
    except ValueError:
        return None
    return value if math.isfinite(value) else None


def parse_dates(values: pd.Series) -> pd.Series:
    """Column version of :func:`parse_date`; unparseable entries become NaT.

    The column is parsed in one ``pd.to_datetime`` call and only the rows that
    came back NaT are retried with ``%Y-%m-%d``. Columns mixing UTC offsets do
    not fit a single datetime dtype and are parsed value by value instead.
    """
    text = values.astype(str).str.strip()
    text = text.where(values.notna() & (text != ""))
    try:
        parsed = pd.to_datetime(text, errors="coerce", format="mixed")
    except (ValueError, TypeError, OverflowError):
        parsed = None
    if parsed is None or not pd.api.types.is_datetime64_any_dtype(parsed):
        return pd.to_datetime(text.map(parse_date), errors="coerce")
    if parsed.dt.tz is not None:
        parsed = parsed.dt.tz_localize(None)

    retry = parsed.isna() & text.notna()
    if retry.any():
        parsed.loc[retry] = pd.to_datetime(text.loc[retry], format=FALLBACK_DATE_FORMAT, errors="coerce")
    return parsed


def _numeric_column(frame: pd.DataFrame, key: Optional[str]) -> pd.Series:
    if key is None or key not in frame.columns:
        return pd.Series(np.nan, index=frame.index, dtype=float)
    return frame[key].map(to_number).astype(float)


def parse_daily_rows(frame: pd.DataFrame, columns: ColumnMapping) -> pd.DataFrame:
    """Convert raw text records into daily observations.

    Returns a DataFrame with columns date, year, month (0..11), tmax, tmin.
    Rows whose date cannot be parsed are dropped. ``tmax`` falls back to the
    single temperature column when no max column was detected (same for
    ``tmin``), so a one-column dataset yields identical tmax and tmin.
    """
    if frame.empty or columns.date_key is None or columns.date_key not in frame.columns:
        return pd.DataFrame({
            "date": pd.Series(dtype="datetime64[ns]"),
            "year": pd.Series(dtype=int),
            "month": pd.Series(dtype=int),
            "tmax": pd.Series(dtype=float),
            "tmin": pd.Series(dtype=float),
        })

    parsed = parse_dates(frame[columns.date_key])
    ok = parsed.notna()
    dropped = int((~ok).sum())
    if dropped:
        logging.getLogger(__name__).debug("Dropped %d rows with unparseable dates", dropped)

    rows = frame.loc[ok]
    out = pd.DataFrame({
        "date": parsed.loc[ok].astype("datetime64[ns]"),
        "tmax": _numeric_column(rows, columns.tmax_source()),
        "tmin": _numeric_column(rows, columns.tmin_source()),
    })
    out["year"] = out["date"].dt.year.astype(int)
    out["month"] = (out["date"].dt.month - 1).astype(int)
    return out[DAILY_COLUMNS].reset_index(drop=True)


def _optional(value: Any) -> Optional[float]:
    return None if value is None or pd.isna(value) else float(value)


def observations_from_frame(daily: pd.DataFrame) -> List[DailyObservation]:
    return [
        DailyObservation(
            date=row.date.date(),
            year=int(row.year),
            month=int(row.month),
            tmax=_optional(row.tmax),
            tmin=_optional(row.tmin),
        )
        for row in daily.itertuples(index=False)
    ]


def parse_row(record: Mapping[str, Any], columns: ColumnMapping) -> Optional[DailyObservation]:
    """Parse one raw record; None when its date is unparseable."""
    daily = parse_daily_rows(pd.DataFrame([dict(record)]), columns)
    if daily.empty:
        return None
    return observations_from_frame(daily)[0]


def read_raw_records(source: CsvSource) -> pd.DataFrame:
    """Read a CSV as raw text records (all columns str, blanks kept as '')."""
    if isinstance(source, (str, Path)) and not Path(source).exists():
        raise DataLoadError(f"Data file not found: {source}")
    try:
        df = pd.read_csv(source, dtype=str, keep_default_na=False)
    except pd.errors.EmptyDataError:
        raise DataLoadError("CSV is empty or could not be loaded.")
    except (OSError, UnicodeDecodeError, pd.errors.ParserError) as exc:
        raise DataLoadError(f"Could not read CSV: {exc}") from exc
    if df.empty:
        raise DataLoadError("CSV is empty or could not be loaded.")
    df.columns = [str(c).strip() for c in df.columns]
    return df


__all__ = [
    "CsvSource",
    "DataLoadError",
    "DailyObservation",
    "parse_date",
    "parse_dates",
    "to_number",
    "parse_daily_rows",
    "observations_from_frame",
    "parse_row",
    "read_raw_records",
]
