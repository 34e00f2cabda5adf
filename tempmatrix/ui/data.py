from __future__ import annotations

import logging

from .state import MatrixData
from tempmatrix.columns import detect_columns
from tempmatrix.data import CsvSource, parse_daily_rows, read_raw_records
from tempmatrix.monthly import build_monthly_cells, cell_years, clamp_to_last_years

__all__ = ["load_all"]


def load_all(source: CsvSource) -> MatrixData:
    """Load a daily temperature CSV and compute the month cells.

    Raises DataLoadError when the source is missing, unreadable or empty.
    """
    raw = read_raw_records(source)
    columns = detect_columns(raw.iloc[0].to_dict())
    log = logging.getLogger(__name__)
    log.debug("Detected columns: %s", columns)
    if not columns.has_temperature:
        log.warning("No temperature column detected among %s", list(raw.columns))

    daily = parse_daily_rows(raw, columns)
    recent = clamp_to_last_years(daily)
    cells = build_monthly_cells(recent)
    years = tuple(cell_years(cells))
    log.info(
        "Loaded %d rows (%d dropped), kept %d in %d years, %d month cells",
        len(raw), len(raw) - len(daily), len(recent), len(years), len(cells),
    )
    return MatrixData(
        cells=tuple(cells),
        years=years,
        columns=columns,
        row_count=len(raw),
        dropped_rows=len(raw) - len(daily),
        kept_rows=len(recent),
    )
