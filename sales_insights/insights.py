"""Summary statistics over normalised sales records."""

from __future__ import annotations

from collections import OrderedDict
from dataclasses import dataclass
from typing import Dict, Sequence

from .normalizer import SalesRecord


@dataclass(frozen=True)
class Insights:
    """Aggregates of one upload, kept at full precision."""

    total_sales: float
    average_sales: float
    top_product: str
    top_product_sales: float

    def formatted(self) -> Dict[str, str]:
        """Return the values as display strings with two decimals."""

        return {
            "total_sales": f"{self.total_sales:.2f}",
            "average_sales": f"{self.average_sales:.2f}",
            "top_product": self.top_product,
            "top_product_sales": f"{self.top_product_sales:.2f}",
        }


def generate_insights(records: Sequence[SalesRecord]) -> Insights:
    """Reduce ``records`` to totals, mean and the best-selling single record.

    The best record is the one with the largest amount; on ties the later
    record wins.
    """

    if not records:
        raise ValueError("generate_insights requires at least one record")

    total = 0.0
    best = records[0]
    for record in records:
        total += record.sales_amount
        if not best.sales_amount > record.sales_amount:
            best = record

    return Insights(
        total_sales=total,
        average_sales=total / len(records),
        top_product=best.product,
        top_product_sales=best.sales_amount,
    )


def sales_by_product(records: Sequence[SalesRecord]) -> "OrderedDict[str, float]":
    """Sum amounts per product in order of first appearance."""

    totals: "OrderedDict[str, float]" = OrderedDict()
    for record in records:
        totals[record.product] = totals.get(record.product, 0.0) + record.sales_amount
    return totals


def daily_sales(records: Sequence[SalesRecord]) -> "OrderedDict[str, float]":
    """Sum amounts per ISO date (``YYYY-MM-DD``), sorted by date."""

    totals: Dict[str, float] = {}
    for record in records:
        key = record.date.isoformat()
        totals[key] = totals.get(key, 0.0) + record.sales_amount
    return OrderedDict(sorted(totals.items()))
