"""Helpers for converting insights into natural language."""

from __future__ import annotations

from typing import List, Optional

from .insights import Insights


def format_currency(value: float) -> str:
    """Render an amount as dollars with thousands separators and two decimals."""

    return f"${value:,.2f}"


def build_recommendations(insights: Insights) -> List[str]:
    """Return the action items shown under the results."""

    product = insights.top_product
    return [
        f"Considere aumentar el inventario de {product}.",
        "Analice los productos con ventas por debajo del promedio para posibles promociones.",
        f"Implemente estrategias de venta cruzada con {product}.",
    ]


def generate_summary(insights: Insights, record_count: Optional[int] = None) -> str:
    """Create a markdown summary of the analysed upload.

    Parameters
    ----------
    insights:
        Aggregates returned by :func:`sales_insights.insights.generate_insights`.
    record_count:
        Optional number of records kept after normalisation; mentioned in the
        first line when given.
    """

    lines = ["### Resultados del Análisis"]
    if record_count is not None:
        lines.append(f"Se analizaron {record_count} registros de ventas.")
    lines.append(f"**Ventas totales:** {format_currency(insights.total_sales)}")
    lines.append(f"**Ventas promedio:** {format_currency(insights.average_sales)}")
    lines.append(
        f"**Producto más vendido:** {insights.top_product} "
        f"(Ventas: {format_currency(insights.top_product_sales)})"
    )
    lines.append("#### Recomendaciones:")
    bullets = "\n".join(f"- {item}" for item in build_recommendations(insights))
    return "\n\n".join(lines + [bullets])
