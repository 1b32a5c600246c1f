"""Session state helpers for the Streamlit app."""

from __future__ import annotations

import streamlit as st

from sales_insights.messages import MessageBoard
from sales_insights.pipeline import UploadSlot
from sales_insights.settings import Settings, load_settings

from .charts import ChartRegistry


def bootstrap_state(settings_path: str | None = None) -> Settings:
    """Ensure key session state entries exist and return the settings."""

    if "settings" not in st.session_state:
        st.session_state.settings = load_settings(settings_path)
    settings = st.session_state.settings
    if "upload_slot" not in st.session_state:
        st.session_state.upload_slot = UploadSlot()
    if "charts" not in st.session_state:
        st.session_state.charts = ChartRegistry()
    if "messages" not in st.session_state:
        st.session_state.messages = MessageBoard(settings.message_timeout_seconds)
    if "theme_mode" not in st.session_state:
        st.session_state.theme_mode = "light"
    return settings


def clear_results() -> None:
    """Drop the shown analysis and release every chart handle."""

    st.session_state.upload_slot.result = None
    st.session_state.charts.release_all()
