"""Streamlit projection of analysed sales data."""

from .charts import ChartHandle, ChartRegistry, build_charts

__all__ = ["ChartHandle", "ChartRegistry", "build_charts"]
