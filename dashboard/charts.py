"""Plotly figures for the analysed sales records and their live handles."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Dict, Optional, Sequence

import pandas as pd
import plotly.express as px
import plotly.graph_objects as go

from sales_insights.insights import daily_sales, sales_by_product
from sales_insights.normalizer import SalesRecord, records_to_frame

logger = logging.getLogger(__name__)

BAR_CHART = "salesBarChart"
LINE_CHART = "salesLineChart"
SCATTER_CHART = "salesScatterChart"

BAR_COLOR = "rgba(52, 152, 219, 0.6)"
BAR_EDGE = "rgba(52, 152, 219, 1)"
LINE_COLOR = "rgba(231, 76, 60, 1)"
SCATTER_COLOR = "rgba(44, 62, 80, 0.6)"
DAY_FORMAT = "%d-%b"
AMOUNT_LABEL = "Ventas ($)"


def _titled(fig: go.Figure, title: str) -> go.Figure:
    fig.update_layout(title={"text": title, "font": {"size": 18}})
    fig.update_yaxes(rangemode="tozero", title_text=AMOUNT_LABEL)
    return fig


def sales_bar_chart(records: Sequence[SalesRecord]) -> go.Figure:
    """Total sales per product."""

    totals = sales_by_product(records)
    fig = go.Figure(
        go.Bar(
            x=list(totals.keys()),
            y=list(totals.values()),
            name="Ventas por Producto",
            marker=dict(color=BAR_COLOR, line=dict(color=BAR_EDGE, width=1)),
        )
    )
    fig.update_layout(showlegend=False)
    fig.update_xaxes(title_text="Productos")
    return _titled(fig, "Ventas por Producto")


def sales_line_chart(records: Sequence[SalesRecord]) -> go.Figure:
    """Sales summed per day, in date order."""

    totals = daily_sales(records)
    fig = go.Figure(
        go.Scatter(
            x=pd.to_datetime(list(totals.keys())),
            y=list(totals.values()),
            mode="lines+markers",
            name="Ventas Diarias",
            line=dict(color=LINE_COLOR, shape="spline", smoothing=0.1),
            fill="tozeroy",
            fillcolor="rgba(231, 76, 60, 0.2)",
            hovertemplate="%{x|" + DAY_FORMAT + "}: $%{y:,.2f}<extra></extra>",
        )
    )
    fig.update_xaxes(title_text="Fecha", tickformat=DAY_FORMAT)
    return _titled(fig, "Ventas Diarias")


def sales_scatter_chart(records: Sequence[SalesRecord]) -> go.Figure:
    """Every record as a point of date against amount."""

    df = records_to_frame(list(records))
    fig = px.scatter(
        df,
        x="date",
        y="amount",
        hover_data=["product"],
        labels={"date": "Fecha", "amount": AMOUNT_LABEL, "product": "Producto"},
    )
    fig.update_traces(marker=dict(color=SCATTER_COLOR), name="Ventas vs Tiempo")
    fig.update_xaxes(tickformat=DAY_FORMAT)
    return _titled(fig, "Distribución de Ventas en el Tiempo")


CHART_BUILDERS = {
    BAR_CHART: sales_bar_chart,
    LINE_CHART: sales_line_chart,
    SCATTER_CHART: sales_scatter_chart,
}


@dataclass
class ChartHandle:
    """A rendered figure that must be released before it is replaced."""

    chart_id: str
    figure: go.Figure
    released: bool = False

    def release(self) -> None:
        if self.released:
            return
        self.figure.data = []
        self.released = True


@dataclass
class ChartRegistry:
    """Chart id to live handle; at most one live handle per id."""

    _handles: Dict[str, ChartHandle] = field(default_factory=dict)

    def replace(self, chart_id: str, handle: ChartHandle) -> ChartHandle:
        previous = self._handles.pop(chart_id, None)
        if previous is not None:
            previous.release()
        self._handles[chart_id] = handle
        return handle

    def get(self, chart_id: str) -> Optional[ChartHandle]:
        return self._handles.get(chart_id)

    def release_all(self) -> None:
        for handle in self._handles.values():
            handle.release()
        self._handles.clear()
        logger.debug("Released all chart handles")

    def __len__(self) -> int:
        return len(self._handles)


def build_charts(registry: ChartRegistry, records: Sequence[SalesRecord]) -> Dict[str, ChartHandle]:
    """Build every chart for ``records`` and install it in ``registry``."""

    handles = {}
    for chart_id, builder in CHART_BUILDERS.items():
        handles[chart_id] = registry.replace(chart_id, ChartHandle(chart_id, builder(records)))
    return handles
