"""Export the temperature matrix as a standalone interactive HTML file.

Usage:
  python -m tempmatrix.export data/temperature_daily.csv -o matrix.html [--mode min] [--table cells.csv]
"""
from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import Sequence

from tempmatrix.colors import Mode
from tempmatrix.data import DataLoadError
from tempmatrix.monthly import cells_frame
from tempmatrix.paths import default_csv_path
from tempmatrix.plots import build_layout, matrix_figure
from tempmatrix.ui.data import load_all


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Render the year x month temperature matrix to HTML.")
    parser.add_argument(
        "input",
        type=Path,
        nargs="?",
        default=None,
        help="Daily temperature CSV (defaults to the project data file or $TEMPMATRIX_CSV).",
    )
    parser.add_argument(
        "-o",
        "--output",
        type=Path,
        default=Path("temperature_matrix.html"),
        help="Target HTML file.",
    )
    parser.add_argument(
        "--mode",
        choices=["max", "min"],
        default="max",
        help="Aggregate driving the cell background.",
    )
    parser.add_argument(
        "--table",
        type=Path,
        default=None,
        help="Optional CSV with one row per month cell (year, month, days, month_max, month_min).",
    )
    parser.add_argument(
        "--log-level",
        default="WARNING",
        help="Logging level (DEBUG, INFO, WARNING, ...).",
    )
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(level=getattr(logging, args.log_level.upper(), logging.WARNING))

    source = args.input if args.input is not None else default_csv_path()
    try:
        md = load_all(source)
    except DataLoadError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1

    layout = build_layout(md.cells, md.columns)
    fig = matrix_figure(layout, Mode(args.mode.upper()))
    args.output.parent.mkdir(parents=True, exist_ok=True)
    fig.write_html(str(args.output), include_plotlyjs="cdn", config={"displaylogo": False})
    logging.getLogger(__name__).info("Wrote %s (%d cells, %d years)", args.output, len(md.cells), len(md.years))

    if args.table is not None:
        args.table.parent.mkdir(parents=True, exist_ok=True)
        cells_frame(md.cells).to_csv(args.table, index=False)
        logging.getLogger(__name__).info("Wrote %s", args.table)

    print(f"Matrix written to {args.output} ({len(md.cells)} cells, years {_year_span(md.years)}).")
    return 0


def _year_span(years: Sequence[int]) -> str:
    if not years:
        return "none"
    return f"{years[0]}-{years[-1]}"


if __name__ == "__main__":  # pragma: no cover
    sys.exit(main())
