"""Path utilities.

 - project_root(): repo root (directory containing this file's parent)
 - default_csv_path(): CSV read by the app when nothing is uploaded

Environment variable override:
  TEMPMATRIX_CSV  path of the daily temperature CSV
"""

from __future__ import annotations

import os
from pathlib import Path

CSV_ENV_VAR = "TEMPMATRIX_CSV"
DEFAULT_CSV_NAME = Path("data") / "temperature_daily.csv"


def project_root() -> Path:
    # Assume this file is at <root>/tempmatrix/paths.py
    return Path(__file__).resolve().parent.parent


def default_csv_path() -> Path:
    env = os.environ.get(CSV_ENV_VAR)
    if env:
        return Path(env).expanduser()
    return project_root() / DEFAULT_CSV_NAME


__all__ = [
    "CSV_ENV_VAR",
    "project_root",
    "default_csv_path",
]
