"""
Cell-level formatting for table sheets and the summary KPI cards.
"""
from __future__ import annotations

from typing import Any, Optional

from openpyxl.utils import get_column_letter
from openpyxl.worksheet.worksheet import Worksheet

from ledgerview.excel.styles import (
    HEADER_FONT, HEADER_FILL, HEADER_BORDER,
    DATA_FONT, TOTAL_FONT, GRID_BORDER, TOTAL_BORDER,
    STRIPE_FILL, HIGHLIGHT_FILLS,
    KPI_VALUE_FONT, KPI_LABEL_FONT,
    CENTER, LEFT, RIGHT,
)

# Column cell_format → Excel number format; anything else is written as text
NUMBER_FORMATS = {
    "currency": '"€"#,##0.00;[Red]-"€"#,##0.00',
    "percent": '0.0"%"',
    "number": "#,##0",
    "decimal": "#,##0.00",
}


def format_header_row(ws: Worksheet, row_num: int, labels: list[str]) -> None:
    """Write the header labels of a table and style them."""
    for col_num, label in enumerate(labels, 1):
        cell = ws.cell(row=row_num, column=col_num, value=label)
        cell.font = HEADER_FONT
        cell.fill = HEADER_FILL
        cell.border = HEADER_BORDER
        cell.alignment = CENTER


def format_data_cell(
    ws: Worksheet,
    row_num: int,
    col_num: int,
    value: Any,
    cell_format: str = "text",
    highlight: Optional[str] = None,
) -> None:
    """Write one table cell.

    ``highlight`` is a row style name ("green", "warning", "total"); rows
    without one are striped.
    """
    is_total = highlight == "total"
    numeric = cell_format in NUMBER_FORMATS

    cell = ws.cell(row=row_num, column=col_num, value=value)
    cell.font = TOTAL_FONT if is_total else DATA_FONT
    cell.border = TOTAL_BORDER if is_total else GRID_BORDER
    cell.alignment = RIGHT if numeric else LEFT
    if numeric:
        cell.number_format = NUMBER_FORMATS[cell_format]

    if highlight in HIGHLIGHT_FILLS:
        cell.fill = HIGHLIGHT_FILLS[highlight]
    elif row_num % 2 == 0:
        cell.fill = STRIPE_FILL


def auto_column_width(ws: Worksheet, min_width: int = 10, max_width: int = 50) -> None:
    """Size each column to its longest value."""
    for column in ws.iter_cols():
        longest = max((len(str(c.value)) for c in column if c.value is not None), default=0)
        letter = get_column_letter(column[0].column)
        ws.column_dimensions[letter].width = min(max(longest + 2, min_width), max_width)


def add_kpi_card(
    ws: Worksheet,
    row: int,
    col: int,
    value: Any,
    label: str,
    cell_format: str = "currency",
    font=None,
) -> None:
    """Large value with a small caption underneath."""
    value_cell = ws.cell(row=row, column=col, value=value)
    value_cell.font = font or KPI_VALUE_FONT
    value_cell.alignment = CENTER
    if cell_format in NUMBER_FORMATS:
        value_cell.number_format = NUMBER_FORMATS[cell_format]

    caption = ws.cell(row=row + 1, column=col, value=label)
    caption.font = KPI_LABEL_FONT
    caption.alignment = CENTER
