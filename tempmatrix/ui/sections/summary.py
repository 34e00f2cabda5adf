from __future__ import annotations
import streamlit as st
from tempmatrix.monthly import cells_frame
from tempmatrix.ui.state import MatrixData

__all__ = ["render_summary"]

def render_summary(md: MatrixData):
    with st.expander("Data summary", expanded=False):
        c = md.columns
        col1, col2, col3 = st.columns(3)
        with col1:
            st.metric("Rows read", f"{md.row_count}")
        with col2:
            st.metric("Rows kept (last 10 years)", f"{md.kept_rows}")
        with col3:
            st.metric("Month cells", f"{len(md.cells)}")
        st.caption(
            f"date={c.date_key or 'N/A'} | max={c.max_key or 'N/A'} | "
            f"min={c.min_key or 'N/A'} | temp={c.single_temp_key or 'N/A'}"
        )
        if not c.has_temperature:
            st.warning("No temperature column detected; all cells show N/A.")
        elif c.max_key is None and c.min_key is None:
            st.caption("Single temperature column: highs and lows share one series.")
        table = cells_frame(md.cells)
        if table.empty:
            st.info("No month cells.")
            return
        st.dataframe(table, hide_index=True, use_container_width=True)
