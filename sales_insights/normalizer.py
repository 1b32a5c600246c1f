"""Coerce raw rows into validated sales records."""

from __future__ import annotations

import datetime as dt
import logging
import numbers
import re
import warnings
from dataclasses import dataclass
from typing import Any, List, Optional

import numpy as np
import pandas as pd

from .columns import ColumnMapping
from .tables import RawTable

logger = logging.getLogger(__name__)

EXCEL_EPOCH = dt.date(1899, 12, 30)
DEFAULT_MISSING_PRODUCT = "Sin producto"

# Longest decimal prefix, e.g. "12.5kg" -> "12.5", "-3e2 units" -> "-3e2".
NUMERIC_PREFIX = re.compile(r"^[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?")


@dataclass(frozen=True)
class SalesRecord:
    date: dt.date
    product: str
    sales_amount: float


def parse_date(value: Any) -> Optional[dt.date]:
    """Interpret ``value`` as a calendar date, returning ``None`` when invalid.

    Datetime values (as produced by Excel cells) are truncated to their date,
    numbers are read as Excel serial day counts and text is handed to
    :func:`pandas.to_datetime`.
    """

    if value is None or value is pd.NaT or isinstance(value, bool):
        return None
    if isinstance(value, pd.Timestamp):
        return None if pd.isna(value) else value.date()
    if isinstance(value, dt.datetime):
        return value.date()
    if isinstance(value, dt.date):
        return value
    if isinstance(value, numbers.Real):
        number = float(value)
        if not np.isfinite(number):
            return None
        try:
            return EXCEL_EPOCH + dt.timedelta(days=int(number))
        except OverflowError:
            return None
    text = str(value).strip()
    if not text:
        return None
    with warnings.catch_warnings():
        # month-first is tried first; unambiguous day-first text such as
        # "31/12/2024" still parses through the pandas fallback
        warnings.simplefilter("ignore", UserWarning)
        parsed = pd.to_datetime(text, errors="coerce")
    if pd.isna(parsed):
        return None
    return parsed.date()


def parse_amount(value: Any) -> Optional[float]:
    """Return the finite number at the start of ``value`` or ``None``."""

    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, numbers.Real):
        number = float(value)
        return number if np.isfinite(number) else None
    match = NUMERIC_PREFIX.match(str(value).strip())
    if match is None:
        return None
    number = float(match.group(0))
    return number if np.isfinite(number) else None


def parse_product(value: Any, missing_label: str = DEFAULT_MISSING_PRODUCT) -> str:
    if value is None:
        return missing_label
    if isinstance(value, float) and value.is_integer():
        value = int(value)
    text = str(value).strip()
    return text or missing_label


def normalize_records(
    table: RawTable,
    mapping: ColumnMapping,
    missing_product_label: str = DEFAULT_MISSING_PRODUCT,
) -> List[SalesRecord]:
    """Walk the data rows of ``table`` and keep those with a valid date and amount.

    Invalid rows are dropped without raising; the caller decides what an
    empty result means.
    """

    records: List[SalesRecord] = []
    dropped = 0
    for index, row in enumerate(table.data_rows()):
        date = parse_date(table.cell(row, mapping.date))
        amount = parse_amount(table.cell(row, mapping.sales))
        if date is None or amount is None:
            dropped += 1
            logger.debug("Dropping data row %d (date=%r, amount=%r)", index, date, amount)
            continue
        product = parse_product(table.cell(row, mapping.product), missing_product_label)
        records.append(SalesRecord(date=date, product=product, sales_amount=amount))
    if dropped:
        logger.info("Dropped %d of %d rows with an invalid date or amount", dropped, dropped + len(records))
    return records


def records_to_frame(records: List[SalesRecord]) -> pd.DataFrame:
    """Return records as a dataframe with ``date``, ``product`` and ``amount`` columns."""

    return pd.DataFrame(
        {
            "date": pd.to_datetime([r.date for r in records]),
            "product": pd.Series([r.product for r in records], dtype="string"),
            "amount": pd.Series([r.sales_amount for r in records], dtype="float64"),
        }
    )
