"""Streamlit orchestrator app.

Responsibilities are delegated to modules under `tempmatrix`:

  tempmatrix.ui.data.load_all        -> read CSV, detect columns, filter, aggregate
  tempmatrix.plots.build_layout      -> mode-independent geometry (cached with the data)
  tempmatrix.ui.sections.*           -> matrix chart (with mode toggle) and data summary

This file only sequences loading, error display and layout.

Run: streamlit run app.py
"""
from __future__ import annotations

import io
from typing import Optional

import streamlit as st

from tempmatrix.data import DataLoadError
from tempmatrix.paths import CSV_ENV_VAR, default_csv_path
from tempmatrix.plots import MatrixLayout, build_layout
from tempmatrix.ui.data import load_all
from tempmatrix.ui.sections import render_matrix, render_summary
from tempmatrix.ui.state import MatrixData


@st.cache_data(show_spinner=False)
def _load_path(path: str) -> tuple[MatrixData, MatrixLayout]:
    md = load_all(path)
    return md, build_layout(md.cells, md.columns)


@st.cache_data(show_spinner=False)
def _load_bytes(content: bytes) -> tuple[MatrixData, MatrixLayout]:
    md = load_all(io.BytesIO(content))
    return md, build_layout(md.cells, md.columns)


st.set_page_config(page_title="Temperature Matrix", layout="wide")

st.sidebar.header("Data")
uploaded = st.sidebar.file_uploader("Daily temperature CSV", type=["csv", "txt"])
csv_path = default_csv_path()
if uploaded is None:
    st.sidebar.caption(f"Source: {csv_path} (override with {CSV_ENV_VAR})")

loaded: Optional[tuple[MatrixData, MatrixLayout]] = None
try:
    with st.spinner("Loading data..."):
        if uploaded is not None:
            loaded = _load_bytes(uploaded.getvalue())
        else:
            loaded = _load_path(str(csv_path))
except DataLoadError as exc:
    st.error(str(exc))
    st.stop()

md, layout = loaded
render_matrix(layout)
render_summary(md)
