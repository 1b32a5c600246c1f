"""Raw table shapes produced by the decoders.

Delimited text yields a :class:`KeyedTable` (one mapping per row, keyed by
header).  Spreadsheets yield a :class:`PositionalTable` (one list per row with
the header row stored separately).  Both expose the same accessors so the
column resolver and the normaliser never branch on the row shape.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Iterator, List, Optional, Sequence, Union

Column = Union[int, str]


@dataclass(frozen=True)
class PositionalTable:
    """Rows as ordered cell lists; ``headers`` is the original row 0."""

    headers: List[str]
    rows: List[List[Any]] = field(default_factory=list)

    @property
    def row_count(self) -> int:
        """Number of rows including the header row."""

        if not self.headers and not self.rows:
            return 0
        return len(self.rows) + 1

    def data_rows(self) -> Iterator[List[Any]]:
        return iter(self.rows)

    def column_for(self, position: int) -> int:
        return position

    def cell(self, row: Sequence[Any], column: Column) -> Optional[Any]:
        index = int(column)
        if index < len(row):
            return row[index]
        return None


@dataclass(frozen=True)
class KeyedTable:
    """Rows as mappings from header name to raw text."""

    headers: List[str]
    rows: List[Dict[str, Any]] = field(default_factory=list)

    @property
    def row_count(self) -> int:
        """Number of rows including the (already consumed) header row."""

        if not self.headers and not self.rows:
            return 0
        return len(self.rows) + 1

    def data_rows(self) -> Iterator[Dict[str, Any]]:
        return iter(self.rows)

    def column_for(self, position: int) -> str:
        return self.headers[position]

    def cell(self, row: Dict[str, Any], column: Column) -> Optional[Any]:
        return row.get(str(column))


RawTable = Union[PositionalTable, KeyedTable]
