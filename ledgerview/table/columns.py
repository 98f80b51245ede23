"""
Column schema and virtualization settings for sortable tables.
"""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Mapping, Optional

from ledgerview.config import VIRTUAL_VIEWPORT_HEIGHT, VIRTUAL_ROW_HEIGHT


class ColumnType(str, Enum):
    STRING = "string"
    NUMBER = "number"
    DATE = "date"


@dataclass(frozen=True)
class ColumnSpec:
    """One table column.

    ``render(row) -> str`` replaces the default cell text. ``excel_format``
    is one of the workbook cell formats ("currency", "number", "percent",
    "decimal", "text"); when unset it follows the column type.
    """
    key: str
    header: str
    type: ColumnType = ColumnType.STRING
    render: Optional[Callable[[Any], str]] = None
    excel_format: Optional[str] = None

    @property
    def cell_format(self) -> str:
        if self.excel_format:
            return self.excel_format
        return "decimal" if self.type == ColumnType.NUMBER else "text"


@dataclass(frozen=True)
class VirtualizationConfig:
    enabled: bool = False
    viewport_height: int = VIRTUAL_VIEWPORT_HEIGHT
    row_height: int = VIRTUAL_ROW_HEIGHT
    overscan: int = 0


def cell_value(row: Any, key: str) -> Any:
    """Raw field of a row that is either a mapping or an object with attributes."""
    if isinstance(row, Mapping):
        return row.get(key)
    return getattr(row, key, None)


def find_column(columns: list[ColumnSpec] | tuple[ColumnSpec, ...], key: str) -> ColumnSpec:
    for col in columns:
        if col.key == key:
            return col
    raise KeyError(f"Unknown column: {key!r}")
