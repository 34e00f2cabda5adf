from datetime import date

import numpy as np
import pandas as pd

from tempmatrix.monthly import (
    SeriesPoint,
    build_monthly_cells,
    cells_frame,
    clamp_to_last_years,
)


def _daily(rows):
    df = pd.DataFrame(rows, columns=["date", "tmax", "tmin"])
    df["date"] = pd.to_datetime(df["date"])
    df["year"] = df["date"].dt.year
    df["month"] = df["date"].dt.month - 1
    return df[["date", "year", "month", "tmax", "tmin"]]


def test_scenario_c_keeps_most_recent_ten_years():
    daily = _daily([(f"{y}-06-15", 20.0, 10.0) for y in range(1995, 2010)])
    kept = clamp_to_last_years(daily)
    assert sorted(kept["year"].unique()) == list(range(2000, 2010))


def test_fewer_than_ten_years_all_kept():
    daily = _daily([("2018-01-01", 1.0, 0.0), ("2020-01-01", 2.0, 1.0)])
    assert len(clamp_to_last_years(daily)) == 2


def test_range_filter_on_unsorted_input():
    years = [2009, 1990, 2015, 2001, 2003, 2011, 1999, 2020, 2005, 2012, 2007, 2018]
    daily = _daily([(f"{y}-03-01", 1.0, 0.0) for y in years])
    kept = set(clamp_to_last_years(daily)["year"])
    assert kept == set(sorted(years)[-10:])


def test_scenario_a_single_month_cell():
    daily = _daily([("2020-01-02", 12.0, 3.0), ("2020-01-01", 10.0, 2.0)])
    (cell,) = build_monthly_cells(daily)
    assert (cell.year, cell.month) == (2020, 0)
    assert cell.month_max == 12.0
    assert cell.month_min == 2.0
    assert cell.max_series == (SeriesPoint(1, 10.0), SeriesPoint(2, 12.0))
    assert cell.min_series == (SeriesPoint(1, 2.0), SeriesPoint(2, 3.0))
    assert [d.date for d in cell.days] == [date(2020, 1, 1), date(2020, 1, 2)]


def test_all_null_month_still_produces_cell():
    daily = _daily([("2020-05-01", np.nan, np.nan), ("2020-05-02", np.nan, np.nan)])
    (cell,) = build_monthly_cells(daily)
    assert cell.month_max is None and cell.month_min is None
    assert [p.value for p in cell.max_series] == [None, None]


def test_gaps_are_kept_not_interpolated():
    daily = _daily([("2021-02-01", 5.0, 1.0), ("2021-02-02", np.nan, 0.5), ("2021-02-03", 7.0, np.nan)])
    (cell,) = build_monthly_cells(daily)
    assert [p.value for p in cell.max_series] == [5.0, None, 7.0]
    assert [p.value for p in cell.min_series] == [1.0, 0.5, None]
    assert cell.month_max == 7.0 and cell.month_min == 0.5


def test_sparse_months_and_aggregate_invariants():
    daily = _daily([
        ("2019-12-31", 4.0, -2.0),
        ("2020-03-10", 11.0, 1.0),
        ("2020-03-11", 9.0, np.nan),
    ])
    cells = build_monthly_cells(daily)
    assert {c.key for c in cells} == {(2019, 11), (2020, 2)}
    for c in cells:
        tmax = [d.tmax for d in c.days if d.tmax is not None]
        tmin = [d.tmin for d in c.days if d.tmin is not None]
        assert c.month_max == (max(tmax) if tmax else None)
        assert c.month_min == (min(tmin) if tmin else None)


def test_aggregation_is_idempotent():
    daily = _daily([("2020-01-03", 1.0, 0.0), ("2020-02-01", 2.0, 1.0), ("2020-01-01", 3.0, -1.0)])
    assert set(build_monthly_cells(daily)) == set(build_monthly_cells(daily.sample(frac=1, random_state=1)))


def test_empty_input():
    assert build_monthly_cells(_daily([])) == []
    assert cells_frame([]).empty


def test_cells_frame_uses_calendar_month_numbers():
    daily = _daily([("2020-01-01", 3.0, 1.0)])
    table = cells_frame(build_monthly_cells(daily))
    assert table.to_dict("records") == [
        {"year": 2020, "month": 1, "days": 1, "month_max": 3.0, "month_min": 1.0}
    ]
