from .matrix import render_matrix
from .summary import render_summary

__all__ = [
    "render_matrix",
    "render_summary",
]
