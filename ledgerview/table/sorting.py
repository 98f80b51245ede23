"""
Type-aware, stable row sorting.
"""
from __future__ import annotations

import locale
import math
from typing import Any, Callable, Sequence

import pandas as pd

from ledgerview.table.columns import ColumnSpec, ColumnType, cell_value, find_column
from ledgerview.table.state import TableState, SortDirection


def number_sort_key(value: Any) -> float:
    """Missing or non-numeric values compare as 0."""
    if value is None or isinstance(value, str) and not value.strip():
        return 0.0
    try:
        number = float(value)
    except (TypeError, ValueError):
        return 0.0
    return 0.0 if math.isnan(number) else number


def date_sort_key(value: Any) -> int:
    """Nanoseconds since the epoch; missing or unparseable dates are the epoch."""
    if value is None or isinstance(value, str) and not value.strip():
        return 0
    try:
        ts = pd.Timestamp(value)
    except (TypeError, ValueError, OverflowError):
        return 0
    if pd.isna(ts):
        return 0
    if ts.tzinfo is not None:
        ts = ts.tz_convert(None)
    return ts.value


def string_sort_key(value: Any) -> str:
    """Case-insensitive, collated by the active locale."""
    if value is None or isinstance(value, float) and math.isnan(value):
        text = ""
    else:
        text = str(value)
    return locale.strxfrm(text.casefold())


_KEY_FUNCS: dict[ColumnType, Callable[[Any], Any]] = {
    ColumnType.NUMBER: number_sort_key,
    ColumnType.DATE: date_sort_key,
    ColumnType.STRING: string_sort_key,
}


def sort_rows(rows: Sequence[Any], columns: Sequence[ColumnSpec], state: TableState) -> list[Any]:
    """Return a new list sorted by the state's key; unsorted state keeps input order.

    Equal values keep their input order in both directions.
    """
    if not state.is_sorted:
        return list(rows)

    col = find_column(columns, state.sort_key)
    key_func = _KEY_FUNCS[col.type]
    return sorted(
        rows,
        key=lambda row: key_func(cell_value(row, col.key)),
        reverse=state.direction == SortDirection.DESC,
    )
