from tempmatrix.colors import (
    ColorScale,
    Mode,
    aggregate_value,
    color_domain,
    legend_stops,
    legend_ticks,
)
from tempmatrix.monthly import MonthCell


def _cell(year, month, mx, mn):
    return MonthCell(year=year, month=month, days=(), month_max=mx, month_min=mn, max_series=(), min_series=())


CELLS = [_cell(2020, 0, 12.0, 2.0), _cell(2020, 1, 20.0, None), _cell(2020, 2, None, -4.0)]


def test_mode_toggle_round_trip():
    assert Mode.MAX.toggled() is Mode.MIN
    assert Mode.MAX.toggled().toggled() is Mode.MAX


def test_aggregate_value_by_mode():
    assert aggregate_value(CELLS[0], Mode.MAX) == 12.0
    assert aggregate_value(CELLS[0], Mode.MIN) == 2.0


def test_domain_per_mode_skips_missing():
    assert color_domain(CELLS, Mode.MAX) == (12.0, 20.0)
    assert color_domain(CELLS, Mode.MIN) == (-4.0, 2.0)


def test_degenerate_domain_still_gives_colours():
    empty = [_cell(2020, 0, None, None)]
    domain = color_domain(empty, Mode.MAX)
    assert domain is None
    scale = ColorScale(domain)
    assert scale(5.0) == scale.at(0.5)
    assert scale(None) == scale.missing
    assert legend_ticks(domain) == []
    assert len(legend_stops(scale, 11)) == 11
    assert ColorScale((3.0, 3.0))(3.0) == scale.at(0.5)


def test_scale_clamps_and_is_ordered():
    scale = ColorScale((0.0, 10.0))
    assert scale(-50.0) == scale(0.0)
    assert scale(99.0) == scale(10.0)
    fractions = [scale.fraction(v) for v in (-1, 0, 2.5, 5, 7.5, 10, 11)]
    assert fractions == sorted(fractions)
    assert scale(0.0).startswith("rgb")


def test_legend_stops_span_domain():
    scale = ColorScale((0.0, 10.0))
    stops = legend_stops(scale, 11)
    assert stops[0] == (0.0, scale(0.0))
    assert stops[-1] == (1.0, scale(10.0))
    assert [round(t, 6) for t, _ in stops] == [round(i / 10, 6) for i in range(11)]


def test_legend_ticks_labels_and_positions():
    ticks = legend_ticks((-3.2, 31.7))
    assert [label for _, _, label in ticks] == ["0", "5", "10", "15", "20", "25", "30"]
    assert all(0.0 <= t <= 1.0 for t, _, _ in ticks)
