"""Column discovery by header substring tokens."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Mapping, Optional, Sequence, Tuple

from .errors import MissingRequiredColumn
from .settings import DEFAULT_COLUMN_TOKENS
from .tables import Column, RawTable

FIELD_ROLES: Tuple[str, ...] = ("date", "product", "sales")


@dataclass(frozen=True)
class ColumnMapping:
    """Resolved column per field role.

    Values are positions for positional tables and header names for keyed
    tables, so they can be passed straight to ``RawTable.cell``.
    """

    date: Column
    product: Column
    sales: Column


def find_header(headers: Sequence[str], tokens: Sequence[str]) -> Optional[int]:
    """Return the position of the first header containing any of ``tokens``."""

    for position, header in enumerate(headers):
        text = str(header).lower()
        if any(token in text for token in tokens):
            return position
    return None


def resolve_columns(
    table: RawTable,
    tokens: Optional[Mapping[str, Sequence[str]]] = None,
) -> ColumnMapping:
    """Locate the date, product and sales columns of ``table``.

    Each role is resolved independently, so one header may serve two roles.
    The first role without a matching header raises
    :class:`MissingRequiredColumn`.
    """

    tokens = tokens or DEFAULT_COLUMN_TOKENS
    resolved = {}
    for role in FIELD_ROLES:
        role_tokens = [t.lower() for t in tokens[role]]
        position = find_header(table.headers, role_tokens)
        if position is None:
            raise MissingRequiredColumn(role)
        resolved[role] = table.column_for(position)
    return ColumnMapping(**resolved)
