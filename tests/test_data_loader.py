import datetime as dt

import pytest

from sales_insights.data_loader import detect_format, load_raw_table
from sales_insights.errors import DecodeError, UnsupportedFormat
from sales_insights.tables import KeyedTable, PositionalTable


def test_detect_format_is_case_insensitive():
    assert detect_format("ventas.CSV") == "csv"
    assert detect_format("Ventas.Xlsx") == "excel"
    assert detect_format("old.xls") == "excel"


def test_detect_format_rejects_other_suffixes():
    with pytest.raises(UnsupportedFormat):
        detect_format("ventas.txt")
    with pytest.raises(UnsupportedFormat):
        detect_format("ventas.csv.bak")


def test_csv_yields_keyed_rows_with_raw_text():
    payload = "Fecha,Producto,Ventas\n2024-01-01,Widget,100\n2024-01-02,Gadget,abc\n".encode("utf-8")
    table = load_raw_table("ventas.csv", payload)
    assert isinstance(table, KeyedTable)
    assert table.headers == ["Fecha", "Producto", "Ventas"]
    assert table.rows[0] == {"Fecha": "2024-01-01", "Producto": "Widget", "Ventas": "100"}
    assert table.rows[1]["Ventas"] == "abc"
    assert table.row_count == 3


def test_csv_handles_bom_and_blank_lines():
    payload = "\ufeffFecha,Producto,Ventas\n\n2024-01-01,Café,10\n\n".encode("utf-8")
    table = load_raw_table("ventas.csv", payload)
    assert table.headers[0] == "Fecha"
    assert len(table.rows) == 1
    assert table.rows[0]["Producto"] == "Café"


def test_csv_short_row_has_missing_cells_as_none():
    payload = b"Fecha,Producto,Ventas\n2024-01-01,Widget\n"
    table = load_raw_table("ventas.csv", payload)
    assert table.cell(table.rows[0], "Ventas") is None


def test_csv_empty_payload_returns_empty_table():
    table = load_raw_table("ventas.csv", b"")
    assert table.row_count == 0


def test_csv_invalid_utf8_raises_decode_error():
    payload = b"Fecha,Producto,Ventas\n2024-01-01,\xff\xfe\xfa,100\n"
    with pytest.raises(DecodeError) as info:
        load_raw_table("ventas.csv", payload)
    assert info.value.__cause__ is not None


def test_excel_reads_first_sheet_as_positional(excel_bytes):
    payload = excel_bytes(
        {
            "Datos": [["Fecha", "Producto", "Ventas"], [dt.datetime(2024, 1, 1), "Widget", 100]],
            "Otra": [["Fecha", "Producto", "Ventas"], [dt.datetime(2030, 1, 1), "Ignorado", 1]],
        }
    )
    table = load_raw_table("ventas.xlsx", payload)
    assert isinstance(table, PositionalTable)
    assert table.headers == ["Fecha", "Producto", "Ventas"]
    assert len(table.rows) == 1
    assert table.rows[0][1] == "Widget"
    assert table.rows[0][2] == 100


def test_excel_skips_blank_rows(excel_bytes):
    payload = excel_bytes(
        {"Datos": [["Fecha", "Producto", "Ventas"], [None, None, None], ["2024-01-02", "Gadget", 50]]}
    )
    table = load_raw_table("ventas.xlsx", payload)
    assert table.rows == [["2024-01-02", "Gadget", 50]]


def test_corrupt_workbook_raises_decode_error():
    with pytest.raises(DecodeError):
        load_raw_table("ventas.xlsx", b"this is not a workbook")


@pytest.mark.parametrize("delimiter", [";", "\t", "|"])
def test_csv_delimiter_is_detected(delimiter):
    lines = ["Fecha", "Producto", "Ventas"], ["2024-01-01", "Widget", "100,5"], ["2024-01-02", "Gadget", "50"]
    payload = "\n".join(delimiter.join(line) for line in lines).encode("utf-8")
    table = load_raw_table("ventas.csv", payload)
    assert table.headers == ["Fecha", "Producto", "Ventas"]
    assert table.rows[0] == {"Fecha": "2024-01-01", "Producto": "Widget", "Ventas": "100,5"}
    assert len(table.rows) == 2


def test_csv_extra_fields_are_dropped_not_fatal():
    payload = b"Fecha,Producto,Ventas\n2024-01-01,Widget,100\n2024-01-02,Gadget,50,extra\n"
    table = load_raw_table("ventas.csv", payload)
    assert table.headers == ["Fecha", "Producto", "Ventas"]
    assert table.rows[1] == {"Fecha": "2024-01-02", "Producto": "Gadget", "Ventas": "50"}


def test_semicolon_csv_with_extra_fields_keeps_delimiter():
    payload = b"Fecha;Producto;Ventas\n2024-01-01;Widget;100\n2024-01-02;Gadget;50;x;y\n"
    table = load_raw_table("ventas.csv", payload)
    assert table.headers == ["Fecha", "Producto", "Ventas"]
    assert [row["Ventas"] for row in table.rows] == ["100", "50"]
