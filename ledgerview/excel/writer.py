"""
ExcelWriter: builds the styled workbook for a summary sheet and table sheets.
"""
from __future__ import annotations

from pathlib import Path
from typing import Any, Callable, Optional, Sequence

import pandas as pd
from openpyxl import Workbook
from openpyxl.utils import get_column_letter
from openpyxl.worksheet.worksheet import Worksheet

from ledgerview.excel.styles import (
    TITLE_FONT, SUBTITLE_FONT, SECTION_FONT,
    POSITIVE_KPI_FONT, NEGATIVE_KPI_FONT,
    INSIGHT_TITLE_FONT, INSIGHT_BODY_FONT,
)
from ledgerview.excel.formatters import format_header_row, format_data_cell, auto_column_width, add_kpi_card

ColSpec = tuple[str, str, str]  # (key, cell_format, header)

# Excel rejects these in sheet titles and caps titles at 31 characters
_BAD_TITLE_CHARS = str.maketrans({c: "_" for c in "[]:*?/\\"})


class ExcelWriter:
    """Workbook under construction; ``save`` writes it to disk."""

    def __init__(self) -> None:
        self.wb = Workbook()
        self._sheets = 0

    def add_sheet(self, title: str) -> Worksheet:
        """New worksheet; the first call takes over the workbook's default sheet."""
        title = title.translate(_BAD_TITLE_CHARS)[:31]
        if self._sheets == 0:
            ws = self.wb.active
            ws.title = title
        else:
            ws = self.wb.create_sheet(title=title)
        self._sheets += 1
        return ws

    # ------------------------------------------------------------------
    # Summary sheet blocks
    # ------------------------------------------------------------------

    def write_title(self, ws: Worksheet, title: str, subtitle: str, width: int = 8) -> int:
        """Title and subtitle across the first ``width`` columns. Returns the next free row."""
        for row, text, font in ((1, title, TITLE_FONT), (2, subtitle, SUBTITLE_FONT)):
            ws.cell(row=row, column=1, value=text).font = font
            ws.merge_cells(start_row=row, start_column=1, end_row=row, end_column=width)
        for col in range(1, width + 1):
            ws.column_dimensions[get_column_letter(col)].width = 18
        return 4

    def write_section(self, ws: Worksheet, row: int, title: str) -> int:
        ws.cell(row=row, column=1, value=title).font = SECTION_FONT
        return row + 2

    def write_kpi_row(self, ws: Worksheet, row: int, kpis: Sequence[tuple[Any, str, str]], spacing: int = 2) -> int:
        """KPI cards from ``(value, label, cell_format)`` triples, left to right."""
        for i, (value, label, cell_format) in enumerate(kpis):
            add_kpi_card(ws, row, 1 + i * spacing, value, label, cell_format)
        return row + 3

    def write_signed_kpi(self, ws: Worksheet, row: int, col: int, value: float, label: str) -> None:
        """Currency KPI in green when >= 0, red when negative."""
        font = POSITIVE_KPI_FONT if value >= 0 else NEGATIVE_KPI_FONT
        add_kpi_card(ws, row, col, value, label, "currency", font=font)

    def write_insights(self, ws: Worksheet, start_row: int, groups: Sequence[tuple[str, Sequence[str]]]) -> int:
        """Titled groups of bullet lines. Returns the next free row."""
        row = start_row
        for title, lines in groups:
            ws.cell(row=row, column=1, value=title).font = INSIGHT_TITLE_FONT
            row += 1
            for line in lines:
                ws.cell(row=row, column=1, value=f"• {line}").font = INSIGHT_BODY_FONT
                row += 1
            row += 1
        return row

    # ------------------------------------------------------------------
    # Table sheets
    # ------------------------------------------------------------------

    def write_table(
        self,
        ws: Worksheet,
        start_row: int,
        columns: Sequence[ColSpec],
        data: Sequence[dict],
        highlight_fn: Optional[Callable[[int, dict], Optional[str]]] = None,
        freeze: bool = True,
    ) -> int:
        """Header plus one row per dict in ``data``.

        ``highlight_fn(idx, row)`` returns a row style name or None.
        Returns the row after the last data row.
        """
        format_header_row(ws, start_row, [label for _, _, label in columns])

        row = start_row + 1
        for idx, record in enumerate(data):
            style = highlight_fn(idx, record) if highlight_fn else None
            for col_num, (key, cell_format, _) in enumerate(columns, 1):
                format_data_cell(ws, row, col_num, _cell(record.get(key)), cell_format, highlight=style)
            row += 1

        auto_column_width(ws)
        if freeze:
            ws.freeze_panes = ws.cell(row=start_row + 1, column=1)
        return row

    def save(self, path: str | Path) -> Path:
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)
        self.wb.save(path)
        return path


def _cell(value: Any) -> Any:
    """openpyxl cannot store NaN/NaT; write a blank cell instead."""
    if value is not None and pd.api.types.is_scalar(value) and pd.isna(value):
        return None
    return value
