"""Decoders turning uploaded CSV/Excel payloads into raw tables.

The functions here only decode.  They do not check whether the table has
enough rows or the expected columns; that is the pipeline's job.
"""

from __future__ import annotations

import csv
import io
import logging
from typing import Any, List, Mapping, Optional

import pandas as pd

from .errors import DecodeError, UnsupportedFormat
from .settings import DEFAULT_EXTENSIONS
from .tables import KeyedTable, PositionalTable, RawTable

logger = logging.getLogger(__name__)


def detect_format(filename: str, extensions: Optional[Mapping[str, str]] = None) -> str:
    """Return ``"csv"`` or ``"excel"`` for ``filename``.

    The suffix match is case-insensitive.  Unknown suffixes raise
    :class:`UnsupportedFormat` so that no parsing is attempted.
    """

    extensions = extensions or DEFAULT_EXTENSIONS
    lower_name = str(filename).lower()
    # longest suffix first so ".xlsx" is never shadowed by a shorter entry
    for suffix in sorted(extensions, key=len, reverse=True):
        if lower_name.endswith(suffix):
            return extensions[suffix]
    raise UnsupportedFormat(filename)


def _is_blank(value: Any) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


def _frame_to_cells(df: pd.DataFrame) -> List[List[Any]]:
    """Return row lists with NaN/NaT replaced by ``None``."""

    cleaned = df.astype(object).where(pd.notna(df), None)
    return cleaned.values.tolist()


CSV_DELIMITERS = ",;\t|"
SNIFF_SAMPLE_SIZE = 4096


def _sniff_delimiter(text: str) -> str:
    """Guess the field delimiter among ``CSV_DELIMITERS``.

    When the sniffer cannot decide (for instance because one row is longer
    than the rest), the candidate appearing most often in the header line
    is used, defaulting to a comma.
    """

    try:
        return csv.Sniffer().sniff(text[:SNIFF_SAMPLE_SIZE], delimiters=CSV_DELIMITERS).delimiter
    except csv.Error:
        pass
    header_line = next((line for line in text.splitlines() if line.strip()), "")
    counts = {delim: header_line.count(delim) for delim in CSV_DELIMITERS}
    best = max(counts, key=counts.get)
    return best if counts[best] else ","


def _rectangularize(text: str, delimiter: str) -> str:
    """Re-serialise ``text`` as comma-separated rows no wider than the header.

    Extra trailing fields are dropped; short rows are left short so pandas
    fills the missing cells.
    """

    reader = csv.reader(io.StringIO(text, newline=""), delimiter=delimiter)
    out = io.StringIO(newline="")
    writer = csv.writer(out, delimiter=",", lineterminator="\n")
    width: Optional[int] = None
    truncated = 0
    for row in reader:
        if width is None and any(field.strip() for field in row):
            width = len(row)
        elif width is not None and len(row) > width:
            row = row[:width]
            truncated += 1
        writer.writerow(row)
    if truncated:
        logger.warning("Dropped extra fields from %d CSV rows", truncated)
    return out.getvalue()


def _load_csv(data: bytes) -> KeyedTable:
    """Parse delimited text with the first line as header, keeping raw strings."""

    if not data.strip():
        return KeyedTable(headers=[], rows=[])
    try:
        text = data.decode("utf-8-sig")
        delimiter = _sniff_delimiter(text)
        logger.debug("Using CSV delimiter %r", delimiter)
        df = pd.read_csv(
            io.StringIO(_rectangularize(text, delimiter)),
            sep=",",
            dtype=str,
            keep_default_na=False,
            skip_blank_lines=True,
            index_col=False,
        )
    except pd.errors.EmptyDataError:
        return KeyedTable(headers=[], rows=[])
    except (UnicodeDecodeError, csv.Error, pd.errors.ParserError) as exc:
        raise DecodeError(f"No se pudo leer el archivo CSV: {exc}") from exc

    headers = [str(col) for col in df.columns]
    rows = [dict(zip(headers, cells)) for cells in _frame_to_cells(df)]
    return KeyedTable(headers=headers, rows=rows)


def _load_excel(data: bytes) -> PositionalTable:
    """Decode the first worksheet of a workbook into positional rows."""

    try:
        df = pd.read_excel(io.BytesIO(data), sheet_name=0, header=None)
    except Exception as exc:
        raise DecodeError(f"No se pudo leer el archivo Excel: {exc}") from exc

    rows = [row for row in _frame_to_cells(df) if not all(_is_blank(v) for v in row)]
    if not rows:
        return PositionalTable(headers=[], rows=[])
    headers = ["" if v is None else str(v) for v in rows[0]]
    return PositionalTable(headers=headers, rows=rows[1:])


def load_raw_table(
    filename: str,
    payload: bytes,
    extensions: Optional[Mapping[str, str]] = None,
) -> RawTable:
    """Decode an uploaded file into a :class:`KeyedTable` or :class:`PositionalTable`.

    Parameters
    ----------
    filename:
        Name of the uploaded file; only its suffix is used.
    payload:
        Raw file content.
    extensions:
        Optional suffix → decoder table overriding the defaults.
    """

    source = detect_format(filename, extensions)
    logger.info("Decoding %s as %s (%d bytes)", filename, source, len(payload))
    if source == "csv":
        table: RawTable = _load_csv(payload)
    else:
        table = _load_excel(payload)
    logger.debug("Decoded %d rows from %s", table.row_count, filename)
    return table

