"""Transaction loading, normalization, and result schemas."""
from .loader import parse_transactions, load_csv, records_to_frame
from .schemas import AnalysisConfig, AnalysisResult, NoDataResult, TimeRange, Insights, Highlight
from .normalize import normalize_columns, canonicalize_partners, apply_type_display_names, normalize_transactions
