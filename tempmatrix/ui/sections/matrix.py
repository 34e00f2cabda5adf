from __future__ import annotations
import streamlit as st
from tempmatrix.plots import MatrixLayout, matrix_figure
from tempmatrix.ui.state import ViewState

__all__ = ["render_matrix", "VIEW_STATE_KEY"]

VIEW_STATE_KEY = "view_state"
CHART_KEY = "matrix_chart"


def current_view() -> ViewState:
    return st.session_state.setdefault(VIEW_STATE_KEY, ViewState())


def _toggle_view():
    st.session_state[VIEW_STATE_KEY] = current_view().toggled()


def render_matrix(layout: MatrixLayout):
    """Draw the matrix; a click on any grid slot or the sidebar button flips the mode."""
    st.sidebar.button("Toggle background (max / min)", on_click=_toggle_view, key="toggle_mode")
    view = current_view()
    st.sidebar.caption(f"Background: monthly {view.mode.value.lower()}")
    if not layout.cells:
        st.info("No dated rows in the last 10 years of data.")
        return
    fig = matrix_figure(layout, view.mode)
    st.plotly_chart(
        fig,
        key=CHART_KEY,
        on_select=_toggle_view,
        selection_mode="points",
        use_container_width=False,
        config={"displaylogo": False, "displayModeBar": False, "scrollZoom": False},
    )
