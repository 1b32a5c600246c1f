"""Theme utilities for light/dark display."""

from __future__ import annotations

from dataclasses import dataclass

import plotly.io as pio
import streamlit as st


@dataclass(frozen=True)
class ThemePalette:
    background: str
    surface: str
    text: str
    accent: str
    error: str
    success: str


LIGHT_THEME = ThemePalette(
    background="#f4f6f8",
    surface="#ffffff",
    text="#2c3e50",
    accent="#3498db",
    error="#e74c3c",
    success="#27ae60",
)

DARK_THEME = ThemePalette(
    background="#111a24",
    surface="#1b2836",
    text="#ecf0f1",
    accent="#5dade2",
    error="#ff7b6b",
    success="#58d68d",
)


def palette_for(mode: str) -> ThemePalette:
    return DARK_THEME if mode == "dark" else LIGHT_THEME


def apply_streamlit_theme(mode: str) -> None:
    """Inject CSS variables and register the Plotly template for ``mode``."""

    palette = palette_for(mode)
    st.markdown(
        f"""
        <style>
        :root {{
            --bg: {palette.background};
            --surface: {palette.surface};
            --text: {palette.text};
            --accent: {palette.accent};
        }}
        body, .stApp, [data-testid="stAppViewContainer"] {{
            background-color: var(--bg) !important;
            color: var(--text) !important;
        }}
        .stMetric {{
            border-radius: 12px;
            background-color: var(--surface);
            padding: .5rem .75rem;
        }}
        </style>
        """,
        unsafe_allow_html=True,
    )

    pio.templates["ventas_theme"] = {
        "layout": {
            "font": {"color": palette.text},
            "paper_bgcolor": "rgba(0,0,0,0)",
            "plot_bgcolor": "rgba(0,0,0,0)",
        }
    }
    base = "plotly_dark" if mode == "dark" else "plotly_white"
    pio.templates.default = f"{base}+ventas_theme"


def sidebar_mode_toggle() -> str:
    """Render the light/dark switcher in the sidebar."""

    default = st.session_state.get("theme_mode", "light")
    mode = st.sidebar.radio(
        "Modo de visualización",
        options=["light", "dark"],
        format_func=lambda v: "Claro" if v == "light" else "Oscuro",
        index=["light", "dark"].index(default if default in ("light", "dark") else "light"),
    )
    st.session_state["theme_mode"] = mode
    return mode
