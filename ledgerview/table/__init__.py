"""Generic sortable / virtualized table with CSV, JSON and Excel export."""
from .columns import ColumnSpec, ColumnType, VirtualizationConfig
from .state import SortDirection, TableState, initial_state, apply_sort, clear_sort
from .sorting import sort_rows
from .render import RowView, render_rows, visible_window
from .export import to_delimited_text, to_records, to_json_text, write_excel_sheet, export_filename
from .sortable import SortableTable
