from __future__ import annotations

from dataclasses import dataclass, field

MONTH_NAMES = ("Jan", "Feb", "Mar", "Apr", "May", "Jun", "Jul", "Aug", "Sep", "Oct", "Nov", "Dec")


@dataclass(frozen=True)
class Margins:
    top: int = 74
    right: int = 24
    bottom: int = 40
    left: int = 70


@dataclass(frozen=True)
class MatrixConfig:
    """Presentation constants for the matrix figure (pixels unless noted)."""

    cell_width: int = 92
    cell_height: int = 56
    spark_pad: int = 6
    margins: Margins = field(default_factory=Margins)
    padding_inner: float = 0.08
    padding_outer: float = 0.03
    corner_radius: float = 10.0
    legend_width: int = 220
    legend_height: int = 10
    legend_samples: int = 11
    unit: str = "°C"
    missing_fill: str = "rgba(255,255,255,0.06)"
    empty_outline: str = "rgba(255,255,255,0.08)"
    max_line_color: str = "#ff5a5f"
    min_line_color: str = "#4ea8ff"
    background: str = "#0f1117"
    text_color: str = "rgba(255,255,255,0.92)"
    muted_color: str = "rgba(255,255,255,0.65)"


DEFAULT_CONFIG = MatrixConfig()

__all__ = ["MONTH_NAMES", "Margins", "MatrixConfig", "DEFAULT_CONFIG"]
