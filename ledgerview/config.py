"""
Ledgerview — Configuration: paths, column mapping, aliases, display names.
"""
import os
from pathlib import Path

# ---------------------------------------------------------------------------
# Paths (override with LEDGERVIEW_EXPORT_DIR)
# ---------------------------------------------------------------------------
_export_dir = Path(os.environ.get("LEDGERVIEW_EXPORT_DIR", str(Path.home() / "Ledgerview" / "exports")))
EXPORT_FOLDER = _export_dir
REPORTS_FOLDER = _export_dir / "reports"

# ---------------------------------------------------------------------------
# Column mapping from raw bank export CSV → internal names
# ---------------------------------------------------------------------------
COLUMN_MAP = {
    "Booking Date": "booking_date",
    "Value Date": "value_date",
    "Partner Name": "partner_name",
    "Partner Iban": "partner_iban",
    "Type": "type",
    "Payment Reference": "payment_reference",
    "Account Name": "account_name",
    "Amount (EUR)": "amount",
    "Original Amount": "original_amount",
    "Original Currency": "original_currency",
    "Exchange Rate": "exchange_rate",
}

# Headers that must be present in every upload (case-sensitive)
REQUIRED_COLUMNS = ["Booking Date", "Partner Name", "Type", "Amount (EUR)"]

NUMERIC_COLUMNS = ["amount", "original_amount", "exchange_rate"]
DATE_COLUMNS = ["booking_date", "value_date"]
DATE_FORMAT = "%Y-%m-%d"

# ---------------------------------------------------------------------------
# Self-transfer consolidation
# Own-name spellings seen in the partner field are collapsed into one label.
# Override with a comma-separated LEDGERVIEW_SELF_ALIASES.
# ---------------------------------------------------------------------------
_env_aliases = os.environ.get("LEDGERVIEW_SELF_ALIASES", "")
SELF_TRANSFER_ALIASES = [a.strip() for a in _env_aliases.split(",") if a.strip()]
SELF_TRANSFER_LABEL = "My Transfers"

# ---------------------------------------------------------------------------
# Transaction type display names (raw label → user-facing label)
# ---------------------------------------------------------------------------
TYPE_DISPLAY_NAMES = {
    "Presentment": "Card Payment",
    "Presentment Refund": "Card Refund",
}

REFERENCE_CURRENCY = "EUR"

# ---------------------------------------------------------------------------
# Ranking cut-offs
# ---------------------------------------------------------------------------
TOP_PARTNERS = 10
TOP_CURRENCIES = 6
TOP_TYPES = 7
TOP_LARGEST = 10

# Every Nth day shown in the compact daily balance table
DAILY_TABLE_STRIDE = 30

# ---------------------------------------------------------------------------
# Table defaults
# ---------------------------------------------------------------------------
VIRTUAL_VIEWPORT_HEIGHT = 400
VIRTUAL_ROW_HEIGHT = 35
