"""Streamlit-facing helpers: view state, cached loading and page sections."""
