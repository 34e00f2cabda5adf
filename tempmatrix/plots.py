from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Callable, List, Optional, Sequence, Tuple

import plotly.graph_objects as go

from .colors import ColorScale, Mode, aggregate_value, color_domain, legend_stops, legend_ticks
from .columns import ColumnMapping
from .config import DEFAULT_CONFIG, MONTH_NAMES, MatrixConfig
from .monthly import MonthCell, SeriesPoint, cell_years
from .scales import BandScale, LinearScale, extent, nice_domain

Point = Optional[Tuple[float, float]]
Rect = Tuple[float, float, float, float]

MONTHS = tuple(range(12))
LEGEND_BAR_SEGMENTS = 44


@dataclass(frozen=True)
class CellGeometry:
    cell: MonthCell
    rect: Rect  # x0, y0, x1, y1 in canvas pixels
    max_line: Tuple[Point, ...]
    min_line: Tuple[Point, ...]


@dataclass(frozen=True)
class MatrixLayout:
    """Mode-independent geometry; computed once per load."""

    config: MatrixConfig
    columns: ColumnMapping
    years: Tuple[int, ...]
    width: float
    height: float
    inner_width: float
    inner_height: float
    x: BandScale
    y: BandScale
    cells: Tuple[CellGeometry, ...]
    empty_slots: Tuple[Rect, ...]

    @property
    def month_cells(self) -> List[MonthCell]:
        return [g.cell for g in self.cells]


def format_month_year(year: int, month: int) -> str:
    return f"{MONTH_NAMES[month]} {year}"


def format_temperature(value: Optional[float], unit: str = DEFAULT_CONFIG.unit) -> str:
    return "N/A" if value is None else f"{value:.1f}{unit}"


def tooltip_text(cell: MonthCell, mode: Mode, unit: str = DEFAULT_CONFIG.unit) -> str:
    mode_label = "Monthly Max (background)" if mode is Mode.MAX else "Monthly Min (background)"
    return "<br>".join([
        f"<b>{format_month_year(cell.year, cell.month)}</b>",
        f"{mode_label}: <b>{format_temperature(aggregate_value(cell, mode), unit)}</b>",
        f"Monthly Max: <b>{format_temperature(cell.month_max, unit)}</b>",
        f"Monthly Min: <b>{format_temperature(cell.month_min, unit)}</b>",
    ])


def sparkline_points(
    series: Sequence[SeriesPoint],
    x: Callable[[float], float],
    y: Callable[[float], float],
) -> Tuple[Point, ...]:
    """Project a series; None marks a gap (missing value), not an interpolated point."""
    return tuple(None if p.value is None else (x(p.day), y(p.value)) for p in series)


def cell_sparklines(cell: MonthCell, rect: Rect, pad: float) -> Tuple[Tuple[Point, ...], Tuple[Point, ...]]:
    """Both polylines of one cell, sharing a vertical scale.

    Returns empty lines when the cell has fewer than 2 non-null values in
    total, where the scale would be undefined.
    """
    both = cell.max_series + cell.min_series
    span = extent([p.value for p in both])
    if span is None or sum(p.value is not None for p in both) < 2:
        return (), ()
    x0, y0, x1, y1 = rect
    left, top = x0 + pad, y0 + pad
    w, h = (x1 - x0) - 2 * pad, (y1 - y0) - 2 * pad
    days = [p.day for p in both]
    xs = LinearScale((min(days), max(days)), (left, left + w))
    ys = LinearScale(nice_domain(*span), (top + h, top))
    return sparkline_points(cell.max_series, xs, ys), sparkline_points(cell.min_series, xs, ys)


def build_layout(
    cells: Sequence[MonthCell],
    columns: ColumnMapping,
    config: MatrixConfig = DEFAULT_CONFIG,
) -> MatrixLayout:
    m = config.margins
    years = tuple(cell_years(list(cells)))
    inner_w = len(years) * config.cell_width
    inner_h = len(MONTHS) * config.cell_height
    x = BandScale(years, m.left, m.left + inner_w, config.padding_inner, config.padding_outer)
    y = BandScale(MONTHS, m.top, m.top + inner_h, config.padding_inner, config.padding_outer)
    xpos, ypos = x.positions(), y.positions()
    bw, bh = x.bandwidth, y.bandwidth

    geoms = []
    for cell in sorted(cells, key=lambda c: c.key):
        rect = (xpos[cell.year], ypos[cell.month], xpos[cell.year] + bw, ypos[cell.month] + bh)
        max_line, min_line = cell_sparklines(cell, rect, config.spark_pad)
        geoms.append(CellGeometry(cell, rect, max_line, min_line))

    present = {c.key for c in cells}
    empty = tuple(
        (xpos[yr], ypos[mo], xpos[yr] + bw, ypos[mo] + bh)
        for yr in years for mo in MONTHS if (yr, mo) not in present
    )

    width = inner_w + m.left + m.right
    # Keep the legend on canvas for narrow matrices.
    width = max(width, m.left + config.legend_width + 40 + m.right)
    return MatrixLayout(
        config=config,
        columns=columns,
        years=years,
        width=float(width),
        height=float(inner_h + m.top + m.bottom),
        inner_width=float(inner_w),
        inner_height=float(inner_h),
        x=x,
        y=y,
        cells=tuple(geoms),
        empty_slots=empty,
    )


def rounded_rect(rect: Rect, radius: float, arc_points: int = 6) -> Tuple[List[float], List[float]]:
    """Closed polygon approximating a rounded rectangle."""
    x0, y0, x1, y1 = rect
    r = max(0.0, min(radius, (x1 - x0) / 2, (y1 - y0) / 2))
    corners = [
        (x1 - r, y0 + r, -90.0),
        (x1 - r, y1 - r, 0.0),
        (x0 + r, y1 - r, 90.0),
        (x0 + r, y0 + r, 180.0),
    ]
    xs: List[float] = []
    ys: List[float] = []
    for cx, cy, start in corners:
        for i in range(arc_points + 1):
            a = math.radians(start + 90.0 * i / arc_points)
            xs.append(cx + r * math.cos(a))
            ys.append(cy + r * math.sin(a))
    xs.append(xs[0])
    ys.append(ys[0])
    return xs, ys


def _center(rect: Rect) -> Point:
    return (rect[0] + rect[2]) / 2, (rect[1] + rect[3]) / 2


def _flatten(lines: Sequence[Tuple[Point, ...]]) -> Tuple[List[Optional[float]], List[Optional[float]]]:
    xs: List[Optional[float]] = []
    ys: List[Optional[float]] = []
    for line in lines:
        if not line:
            continue
        for p in line:
            xs.append(None if p is None else p[0])
            ys.append(None if p is None else p[1])
        xs.append(None)
        ys.append(None)
    return xs, ys


def title_text(mode: Mode) -> str:
    label = "Monthly MAX temperature" if mode is Mode.MAX else "Monthly MIN temperature"
    return f"Matrix View: {label} (last 10 years)"


def subtitle_text(columns: ColumnMapping) -> str:
    def show(key: Optional[str]) -> str:
        return key if key is not None else "N/A"

    return (
        "Click to toggle background. Columns detected: "
        f"max={show(columns.max_key)}, min={show(columns.min_key)}, temp={show(columns.single_temp_key)}"
    )


def _legend(fig: go.Figure, layout: MatrixLayout, scale: ColorScale, mode: Mode) -> None:
    cfg = layout.config
    m = cfg.margins
    lx = max(float(m.left), m.left + layout.inner_width - 260)
    ly = 18.0
    bar_top = ly + 18
    bar_bottom = bar_top + cfg.legend_height
    title = "Background: Monthly Max" if mode is Mode.MAX else "Background: Monthly Min"
    fig.add_annotation(x=lx, y=ly, text=f"{title} ({cfg.unit})", xanchor="left", yanchor="top",
                       showarrow=False, font=dict(color=cfg.text_color, size=11))

    seg = cfg.legend_width / LEGEND_BAR_SEGMENTS
    stops = legend_stops(scale, LEGEND_BAR_SEGMENTS)
    for i, (_, color) in enumerate(stops):
        fig.add_shape(type="rect", x0=lx + i * seg, x1=lx + (i + 1) * seg, y0=bar_top, y1=bar_bottom,
                      line=dict(width=0), fillcolor=color, layer="above")
    fig.add_shape(type="rect", x0=lx, x1=lx + cfg.legend_width, y0=bar_top, y1=bar_bottom,
                  line=dict(color="rgba(255,255,255,0.18)", width=1), fillcolor="rgba(0,0,0,0)", layer="above")

    for t, _, label in legend_ticks(scale.domain):
        tx = lx + t * cfg.legend_width
        fig.add_shape(type="line", x0=tx, x1=tx, y0=bar_bottom, y1=bar_bottom + 3,
                      line=dict(color="rgba(255,255,255,0.22)", width=1))
        fig.add_annotation(x=tx, y=bar_bottom + 4, text=label, xanchor="center", yanchor="top",
                           showarrow=False, font=dict(color=cfg.muted_color, size=9))

    fig.add_annotation(x=lx, y=ly + 50, text="Sparklines: red = daily highs, blue = daily lows",
                       xanchor="left", yanchor="middle", showarrow=False,
                       font=dict(color=cfg.muted_color, size=10))


def matrix_figure(layout: MatrixLayout, mode: Mode = Mode.MAX) -> go.Figure:
    """Render the matrix for ``mode``.

    Only background colours, legend and titles depend on ``mode``; geometry
    and sparklines come from ``layout`` unchanged.
    """
    cfg = layout.config
    m = cfg.margins
    scale = ColorScale(color_domain(layout.month_cells, mode), missing=cfg.missing_fill)
    fig = go.Figure()

    for rect in layout.empty_slots:
        xs, ys = rounded_rect(rect, cfg.corner_radius)
        fig.add_trace(go.Scatter(x=xs, y=ys, mode="lines", line=dict(color=cfg.empty_outline, width=1),
                                 hoverinfo="skip", showlegend=False))

    for g in layout.cells:
        xs, ys = rounded_rect(g.rect, cfg.corner_radius)
        fig.add_trace(go.Scatter(
            x=xs, y=ys, mode="lines", fill="toself",
            fillcolor=scale(aggregate_value(g.cell, mode)),
            line=dict(width=0), hoverinfo="skip", showlegend=False,
        ))

    for name, lines, color in (
        ("Daily highs", [g.max_line for g in layout.cells], cfg.max_line_color),
        ("Daily lows", [g.min_line for g in layout.cells], cfg.min_line_color),
    ):
        xs, ys = _flatten(lines)
        fig.add_trace(go.Scatter(x=xs, y=ys, mode="lines", name=name, connectgaps=False,
                                 line=dict(color=color, width=1.4), hoverinfo="skip", showlegend=False))

    # Invisible markers carry the tooltip and the click selection. They stay
    # inside the cell, so the marker is sized from its shorter side.
    marker_size = min(layout.x.bandwidth, layout.y.bandwidth)
    centers = [_center(g.rect) for g in layout.cells]
    fig.add_trace(go.Scatter(
        x=[c[0] for c in centers],
        y=[c[1] for c in centers],
        mode="markers",
        name="cells",
        marker=dict(symbol="square", size=marker_size, opacity=0),
        selected=dict(marker=dict(opacity=0)),
        unselected=dict(marker=dict(opacity=0)),
        customdata=[[g.cell.year, g.cell.month] for g in layout.cells],
        text=[tooltip_text(g.cell, mode, cfg.unit) for g in layout.cells],
        hovertemplate="%{text}<extra></extra>",
        showlegend=False,
    ))
    # Empty slots have no tooltip but still take clicks ("skip" would drop them).
    slots = [_center(rect) for rect in layout.empty_slots]
    fig.add_trace(go.Scatter(
        x=[c[0] for c in slots],
        y=[c[1] for c in slots],
        mode="markers",
        name="empty slots",
        marker=dict(symbol="square", size=marker_size, opacity=0),
        selected=dict(marker=dict(opacity=0)),
        unselected=dict(marker=dict(opacity=0)),
        hoverinfo="none",
        showlegend=False,
    ))

    xpos, ypos = layout.x.positions(), layout.y.positions()
    axis_y = m.top + layout.inner_height + 6
    for yr in layout.years:
        fig.add_annotation(x=xpos[yr] + layout.x.bandwidth / 2, y=axis_y, text=str(yr), xanchor="center",
                           yanchor="top", showarrow=False, font=dict(color=cfg.muted_color, size=11))
    for mo in MONTHS:
        fig.add_annotation(x=m.left - 8, y=ypos[mo] + layout.y.bandwidth / 2, text=MONTH_NAMES[mo],
                           xanchor="right", yanchor="middle", showarrow=False,
                           font=dict(color=cfg.muted_color, size=11))

    fig.add_annotation(x=m.left, y=32, text=f"<b>{title_text(mode)}</b>", xanchor="left", yanchor="middle",
                       showarrow=False, font=dict(color=cfg.text_color, size=16))
    fig.add_annotation(x=m.left, y=54, text=subtitle_text(layout.columns), xanchor="left", yanchor="middle",
                       showarrow=False, font=dict(color=cfg.muted_color, size=12))
    _legend(fig, layout, scale, mode)

    fig.update_layout(
        template="plotly_dark",
        width=layout.width,
        height=layout.height,
        autosize=False,
        margin=dict(l=0, r=0, t=0, b=0, pad=0),
        paper_bgcolor=cfg.background,
        plot_bgcolor=cfg.background,
        showlegend=False,
        hovermode="closest",
        dragmode=False,
        clickmode="event+select",
        hoverlabel=dict(bgcolor="rgba(20,22,30,0.95)", align="left", font=dict(size=12)),
        xaxis=dict(range=[0, layout.width], visible=False, fixedrange=True),
        yaxis=dict(range=[layout.height, 0], visible=False, fixedrange=True),
    )
    return fig


__all__ = [
    "CellGeometry",
    "MatrixLayout",
    "format_month_year",
    "format_temperature",
    "tooltip_text",
    "sparkline_points",
    "cell_sparklines",
    "build_layout",
    "rounded_rect",
    "title_text",
    "subtitle_text",
    "matrix_figure",
]
