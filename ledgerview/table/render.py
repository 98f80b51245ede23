"""
Row views for full and virtualized rendering.

Both modes go through ``render_rows``; the full mode simply asks for every
index, so sort order and per-row styling cannot diverge between them.
"""
from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Any, Callable, Optional, Sequence

import pandas as pd

from ledgerview.table.columns import ColumnSpec, cell_value


@dataclass(frozen=True)
class RowView:
    index: int                    # position in the sorted rows
    cells: tuple[str, ...]
    style: Optional[str] = None


def format_cell(row: Any, column: ColumnSpec) -> str:
    if column.render is not None:
        return column.render(row)
    value = cell_value(row, column.key)
    if value is None or (not isinstance(value, str) and pd.api.types.is_scalar(value) and pd.isna(value)):
        return ""
    return str(value)


def visible_window(
    total_rows: int,
    viewport_height: float,
    row_height: float,
    scroll_offset: float = 0,
    overscan: int = 0,
) -> range:
    """Indices of the rows that intersect a fixed-height viewport."""
    if row_height <= 0 or viewport_height <= 0:
        raise ValueError("viewport_height and row_height must be positive")
    if total_rows <= 0:
        return range(0)

    max_offset = max(0.0, total_rows * row_height - viewport_height)
    offset = min(max(0.0, float(scroll_offset)), max_offset)

    start = math.floor(offset / row_height)
    stop = math.ceil((offset + viewport_height) / row_height)
    return range(max(0, start - overscan), min(total_rows, stop + overscan))


def render_rows(
    rows: Sequence[Any],
    columns: Sequence[ColumnSpec],
    row_style: Callable[[Any], Optional[str]] | None,
    window: range,
) -> list[RowView]:
    """Row views for ``rows[i]`` for every i in ``window``."""
    views = []
    for idx in window:
        row = rows[idx]
        views.append(RowView(
            index=idx,
            cells=tuple(format_cell(row, col) for col in columns),
            style=row_style(row) if row_style else None,
        ))
    return views
