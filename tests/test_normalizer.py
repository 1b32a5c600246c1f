import datetime as dt
import math
import warnings

import pandas as pd
import pytest

from sales_insights.columns import ColumnMapping
from sales_insights.normalizer import (
    SalesRecord,
    normalize_records,
    parse_amount,
    parse_date,
    records_to_frame,
)
from sales_insights.tables import KeyedTable, PositionalTable


@pytest.mark.parametrize(
    "value, expected",
    [
        ("100", 100.0),
        (" 42", 42.0),
        ("12.5kg", 12.5),
        ("-3e2 unidades", -300.0),
        ("1,234", 1.0),
        (".5", 0.5),
        (7, 7.0),
        (19.99, 19.99),
    ],
)
def test_parse_amount_uses_leading_number(value, expected):
    assert parse_amount(value) == pytest.approx(expected)


@pytest.mark.parametrize("value", ["abc", "", None, True, float("nan"), float("inf"), "Infinity", "$100"])
def test_parse_amount_rejects_invalid_values(value):
    assert parse_amount(value) is None


def test_parse_date_variants():
    assert parse_date("2024-01-15") == dt.date(2024, 1, 15)
    assert parse_date(dt.datetime(2024, 3, 1, 10, 30)) == dt.date(2024, 3, 1)
    assert parse_date(pd.Timestamp("2024-02-29")) == dt.date(2024, 2, 29)
    assert parse_date(dt.date(2023, 12, 31)) == dt.date(2023, 12, 31)
    assert parse_date(45292) == dt.date(2024, 1, 1)


@pytest.mark.parametrize("value", ["not a date", "", "   ", None, True, float("nan")])
def test_parse_date_invalid_values(value):
    assert parse_date(value) is None


def test_scenario_a_positional_rows():
    table = PositionalTable(
        headers=["Fecha", "Producto", "Ventas"],
        rows=[["2024-01-01", "Widget", "100"], ["2024-01-02", "Gadget", "50"]],
    )
    records = normalize_records(table, ColumnMapping(date=0, product=1, sales=2))
    assert records == [
        SalesRecord(dt.date(2024, 1, 1), "Widget", 100.0),
        SalesRecord(dt.date(2024, 1, 2), "Gadget", 50.0),
    ]


def test_invalid_rows_are_dropped_in_order():
    table = KeyedTable(
        headers=["Fecha", "Producto", "Ventas"],
        rows=[
            {"Fecha": "2024-01-01", "Producto": "A", "Ventas": "abc"},
            {"Fecha": "ayer", "Producto": "B", "Ventas": "10"},
            {"Fecha": "2024-01-03", "Producto": "C", "Ventas": "30"},
            {"Fecha": "2024-01-04", "Producto": "D", "Ventas": "40"},
        ],
    )
    records = normalize_records(table, ColumnMapping(date="Fecha", product="Producto", sales="Ventas"))
    assert [r.product for r in records] == ["C", "D"]
    assert len(records) <= len(table.rows)
    for record in records:
        assert isinstance(record.date, dt.date)
        assert math.isfinite(record.sales_amount)


def test_short_rows_and_blank_products():
    table = PositionalTable(
        headers=["Fecha", "Producto", "Ventas"],
        rows=[["2024-01-01", None, 5], ["2024-01-02", "X"], ["2024-01-03", 123.0, 7]],
    )
    records = normalize_records(table, ColumnMapping(0, 1, 2), missing_product_label="N/D")
    assert [r.product for r in records] == ["N/D", "123"]


def test_normalizing_twice_is_identical():
    table = PositionalTable(
        headers=["Fecha", "Producto", "Ventas"],
        rows=[["2024-01-01", "Widget", "100"], ["bad", "Gadget", "50"], ["2024-01-05", "Gizmo", "5.5"]],
    )
    mapping = ColumnMapping(0, 1, 2)
    assert normalize_records(table, mapping) == normalize_records(table, mapping)


def test_records_to_frame_columns():
    df = records_to_frame([SalesRecord(dt.date(2024, 1, 1), "A", 1.5)])
    assert list(df.columns) == ["date", "product", "amount"]
    assert df.loc[0, "amount"] == 1.5


def test_day_first_text_parses_without_warning():
    with warnings.catch_warnings():
        warnings.simplefilter("error")
        assert parse_date("31/12/2024") == dt.date(2024, 12, 31)
        assert parse_date("12/31/2024") == dt.date(2024, 12, 31)
