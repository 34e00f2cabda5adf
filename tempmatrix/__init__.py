"""Temperature matrix (tempmatrix) package.

Year x month matrix of daily temperature records with per-cell sparklines.

Modules:
  columns: heuristic detection of date / max / min / temperature columns
  data: tolerant row parsing and CSV loading
  monthly: ten-year range filter and per-month aggregation
  scales: band / linear scales and nice ticks
  colors: colour domain, colour scale and gradient legend
  plots: matrix layout and Plotly figure
  export: command line export to standalone HTML
"""

from . import columns, data, monthly, scales, colors, plots  # noqa: F401

__all__ = [
	"columns",
	"data",
	"monthly",
	"scales",
	"colors",
	"plots",
]
