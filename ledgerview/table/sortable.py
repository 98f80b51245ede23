"""
SortableTable — one table instance: rows, column schema, its own sort state,
full or virtualized rendering, and exports of the sorted view.
"""
from __future__ import annotations

import datetime as dt
from pathlib import Path
from typing import Any, Callable, Iterable, Optional, Sequence

from ledgerview.config import EXPORT_FOLDER
from ledgerview.errors import ExportError
from ledgerview.excel.writer import ExcelWriter
from ledgerview.logging_setup import get_logger
from ledgerview.table.columns import ColumnSpec, VirtualizationConfig
from ledgerview.table.export import export_filename, to_delimited_text, to_json_text, write_excel_sheet
from ledgerview.table.render import RowView, render_rows, visible_window
from ledgerview.table.sorting import sort_rows
from ledgerview.table.state import SortDirection, TableState, apply_sort, clear_sort, initial_state

log = get_logger(__name__)

_INDICATORS = {None: "⬍", SortDirection.ASC: "↑", SortDirection.DESC: "↓"}


class SortableTable:
    """Sortable, optionally virtualized view over a row collection.

    Rows may be mappings or objects with attributes (e.g. result dataclasses).
    ``default_sort`` is a column key or a ``(key, direction)`` pair.
    """

    def __init__(
        self,
        rows: Iterable[Any],
        columns: Sequence[ColumnSpec],
        name: str = "Table",
        row_style: Optional[Callable[[Any], Optional[str]]] = None,
        default_sort: str | tuple[str, SortDirection | str] | None = None,
        virtualization: VirtualizationConfig | None = None,
    ) -> None:
        self.rows = tuple(rows)
        self.columns = tuple(columns)
        self.name = name
        self.row_style = row_style
        self.virtualization = virtualization or VirtualizationConfig()

        if isinstance(default_sort, tuple):
            key, direction = default_sort
        else:
            key, direction = default_sort, None
        self._state = initial_state(key, direction, self.columns)

    # ------------------------------------------------------------------
    # Sort state
    # ------------------------------------------------------------------

    @property
    def state(self) -> TableState:
        return self._state

    def request_sort(self, key: str) -> TableState:
        """Header activation for ``key``."""
        self._state = apply_sort(self._state, self.columns, key)
        return self._state

    def clear_sort(self) -> TableState:
        self._state = clear_sort(self._state)
        return self._state

    def sorted_rows(self) -> list[Any]:
        return sort_rows(self.rows, self.columns, self._state)

    def header_labels(self) -> list[str]:
        """Column headers with a sort indicator (⬍ inactive, ↑ asc, ↓ desc)."""
        labels = []
        for col in self.columns:
            direction = self._state.direction if col.key == self._state.sort_key else None
            labels.append(f"{col.header} {_INDICATORS[direction]}")
        return labels

    # ------------------------------------------------------------------
    # Rendering
    # ------------------------------------------------------------------

    def visible_range(self, scroll_offset: float = 0) -> range:
        total = len(self.rows)
        if not self.virtualization.enabled:
            return range(total)
        v = self.virtualization
        return visible_window(total, v.viewport_height, v.row_height, scroll_offset, v.overscan)

    def render(self, scroll_offset: float = 0) -> list[RowView]:
        """Row views for the rows currently in view (all rows when not virtualized)."""
        rows = self.sorted_rows()
        return render_rows(rows, self.columns, self.row_style, self.visible_range(scroll_offset))

    # ------------------------------------------------------------------
    # Export
    # ------------------------------------------------------------------

    def export_csv(self, directory: str | Path = EXPORT_FOLDER, today: dt.date | None = None) -> Path | None:
        return self._export_text("csv", lambda rows: to_delimited_text(rows, self.columns), directory, today)

    def export_json(self, directory: str | Path = EXPORT_FOLDER, today: dt.date | None = None) -> Path | None:
        return self._export_text("json", lambda rows: to_json_text(rows, self.columns), directory, today)

    def export_excel(self, directory: str | Path = EXPORT_FOLDER, today: dt.date | None = None) -> Path | None:
        rows = self.sorted_rows()
        path = Path(directory) / export_filename(self.name, "xlsx", today)
        try:
            writer = ExcelWriter()
            write_excel_sheet(writer, self.name, rows, self.columns, self.row_style)
            return writer.save(path)
        except ExportError as exc:
            log.warning("%s: %s", self.name, exc)
        except OSError as exc:
            log.error("Failed to export %s: %s", self.name, exc)
        return None

    def _export_text(
        self,
        extension: str,
        build: Callable[[list[Any]], str],
        directory: str | Path,
        today: dt.date | None,
    ) -> Path | None:
        """Serialize the sorted view; on failure log a notice and return None."""
        try:
            content = build(self.sorted_rows())
        except ExportError as exc:
            log.warning("%s: %s", self.name, exc)
            return None

        path = Path(directory) / export_filename(self.name, extension, today)
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(content, encoding="utf-8")
        except OSError as exc:
            log.error("Failed to export %s: %s", self.name, exc)
            return None
        log.info("Exported %d rows to %s", len(self.rows), path)
        return path
