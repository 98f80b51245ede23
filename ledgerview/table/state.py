"""
Sort state and its transitions.

The state only changes through ``apply_sort`` / ``clear_sort``; both return
a new ``TableState``.
"""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Sequence

from ledgerview.table.columns import ColumnSpec, ColumnType, find_column


class SortDirection(str, Enum):
    ASC = "asc"
    DESC = "desc"

    def flipped(self) -> "SortDirection":
        return SortDirection.DESC if self is SortDirection.ASC else SortDirection.ASC


@dataclass(frozen=True)
class TableState:
    sort_key: Optional[str] = None
    direction: SortDirection = SortDirection.ASC

    @property
    def is_sorted(self) -> bool:
        return self.sort_key is not None


def default_direction(col_type: ColumnType) -> SortDirection:
    """Numbers and dates start biggest/newest first, strings start A→Z."""
    if col_type in (ColumnType.NUMBER, ColumnType.DATE):
        return SortDirection.DESC
    return SortDirection.ASC


def initial_state(
    default_key: Optional[str] = None,
    direction: SortDirection | str | None = None,
    columns: Sequence[ColumnSpec] = (),
) -> TableState:
    """Unsorted, or sorted by the caller's default key."""
    if default_key is None:
        return TableState()
    if direction is None:
        direction = default_direction(find_column(columns, default_key).type)
    return TableState(default_key, SortDirection(direction))


def apply_sort(state: TableState, columns: Sequence[ColumnSpec], key: str) -> TableState:
    """Header activation: flip direction on the active key, else start with the type default."""
    col = find_column(columns, key)
    if state.sort_key == key:
        return TableState(key, state.direction.flipped())
    return TableState(key, default_direction(col.type))


def clear_sort(state: TableState) -> TableState:
    return TableState()
