"""Ledgerview — bank transaction analytics and sortable table exports."""
from .data.loader import parse_transactions, load_csv
from .data.schemas import AnalysisConfig, AnalysisResult, NoDataResult, TimeRange
from .analytics.engine import analyze
from .table.sortable import SortableTable
from .table.columns import ColumnSpec, ColumnType, VirtualizationConfig
from .errors import LedgerviewError, InputError, ComputationError, ExportError

__version__ = "0.1.0"
