"""
Serializing the current (sorted) table view: delimited text, JSON records,
and an Excel sheet.
"""
from __future__ import annotations

import datetime as dt
import json
import re
from typing import Any, Callable, Optional, Sequence

import pandas as pd
from openpyxl.utils.exceptions import IllegalCharacterError

from ledgerview.analytics.common import sanitize_for_json, iso_date
from ledgerview.errors import ExportError
from ledgerview.excel.writer import ExcelWriter
from ledgerview.table.columns import ColumnSpec, ColumnType, cell_value


def export_filename(table_name: str, extension: str, today: dt.date | None = None) -> str:
    """'Largest Inflows' → 'Largest_Inflows_2024-05-01.csv'."""
    today = today or dt.date.today()
    stem = re.sub(r"\s+", "_", table_name.strip())
    return f"{stem}_{today:%Y-%m-%d}.{extension}"


def _require_rows(rows: Sequence[Any]) -> None:
    if not rows:
        raise ExportError("No data to export")


def _flat_value(value: Any, column: ColumnSpec) -> Any:
    if value is None or (not isinstance(value, str) and pd.api.types.is_scalar(value) and pd.isna(value)):
        return None
    if column.type == ColumnType.DATE and isinstance(value, (pd.Timestamp, dt.date)):
        return iso_date(value)
    return value


def to_delimited_text(rows: Sequence[Any], columns: Sequence[ColumnSpec], delimiter: str = ",") -> str:
    """Header row of display names, then one line per row.

    Fields containing the delimiter, a quote or a line break are quoted;
    missing values become empty fields.
    """
    _require_rows(rows)
    data = [[_flat_value(cell_value(r, c.key), c) for c in columns] for r in rows]
    try:
        frame = pd.DataFrame(data, columns=[c.header for c in columns], dtype=object)
        return frame.to_csv(index=False, sep=delimiter, na_rep="", lineterminator="\n")
    except (TypeError, ValueError) as exc:
        raise ExportError(f"Failed to export data: {exc}") from exc


def to_records(rows: Sequence[Any], columns: Sequence[ColumnSpec]) -> list[dict]:
    """One dict per row keyed by column header, holding the raw (unrendered) value."""
    _require_rows(rows)
    return [
        {c.header: sanitize_for_json(cell_value(r, c.key)) for c in columns}
        for r in rows
    ]


def to_json_text(rows: Sequence[Any], columns: Sequence[ColumnSpec]) -> str:
    records = to_records(rows, columns)
    try:
        return json.dumps(records, indent=2, ensure_ascii=False)
    except (TypeError, ValueError) as exc:
        raise ExportError(f"Failed to export data: {exc}") from exc


def write_excel_sheet(
    writer: ExcelWriter,
    title: str,
    rows: Sequence[Any],
    columns: Sequence[ColumnSpec],
    row_style: Optional[Callable[[Any], Optional[str]]] = None,
) -> int:
    """Write the rows as a styled sheet. Returns the row after the last data row."""
    _require_rows(rows)
    data = [{c.key: _flat_value(cell_value(r, c.key), c) for c in columns} for r in rows]
    layout = [(c.key, c.cell_format, c.header) for c in columns]
    highlight = (lambda idx, _: row_style(rows[idx])) if row_style else None

    ws = writer.add_sheet(title)
    try:
        return writer.write_table(ws, 1, layout, data, highlight_fn=highlight)
    except (IllegalCharacterError, ValueError, TypeError) as exc:
        raise ExportError(f"Failed to export data: {exc}") from exc
