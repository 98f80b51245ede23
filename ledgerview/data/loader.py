"""
Reading bank export text / files into a normalized transaction frame.
"""
from __future__ import annotations

import io
from pathlib import Path
from typing import Any, Iterable, Mapping

import pandas as pd

from ledgerview.config import REQUIRED_COLUMNS
from ledgerview.data.normalize import normalize_transactions
from ledgerview.data.schemas import AnalysisConfig
from ledgerview.errors import InputError
from ledgerview.logging_setup import get_logger

log = get_logger(__name__)


def _check_required(df: pd.DataFrame) -> None:
    missing = [c for c in REQUIRED_COLUMNS if c not in df.columns]
    if missing:
        raise InputError(
            f"Missing required column(s): {', '.join(missing)}. "
            f"Expected headers (case-sensitive): {', '.join(REQUIRED_COLUMNS)}"
        )


def parse_transactions(text: str | None, cfg: AnalysisConfig | None = None) -> pd.DataFrame:
    """Parse delimited text with a header row into normalized records.

    Numeric-looking cells become numbers and blank cells become null.
    Rows whose booking date does not parse are kept with a null date.
    """
    if text is None or not str(text).strip():
        raise InputError("No CSV data provided")
    cfg = cfg or AnalysisConfig.from_settings()

    try:
        raw = pd.read_csv(
            io.StringIO(text),
            skip_blank_lines=True,
            keep_default_na=False,
            na_values=[""],
        )
    except (pd.errors.ParserError, pd.errors.EmptyDataError, UnicodeDecodeError) as exc:
        raise InputError(f"Could not parse CSV data: {exc}") from exc

    _check_required(raw)
    df = normalize_transactions(raw, cfg)

    undated = int(df["booking_date"].isna().sum())
    log.info("Parsed %d transactions", len(df))
    if undated:
        log.warning("%d transaction(s) have an unparseable booking date; excluded from date aggregates", undated)
    return df


def load_csv(path: str | Path, cfg: AnalysisConfig | None = None) -> pd.DataFrame:
    """Read a CSV export from disk and normalize it."""
    path = Path(path)
    if not path.is_file():
        raise InputError(f"File not found: {path}")
    try:
        text = path.read_text(encoding="utf-8-sig")
    except (OSError, UnicodeDecodeError) as exc:
        raise InputError(f"Error reading file {path.name}: {exc}") from exc
    log.info("Loading %s", path.name)
    return parse_transactions(text, cfg)


def records_to_frame(records: pd.DataFrame | Iterable[Mapping[str, Any]], cfg: AnalysisConfig) -> pd.DataFrame:
    """Normalize a DataFrame or an iterable of row mappings (never mutates the input)."""
    if isinstance(records, pd.DataFrame):
        df = records
    else:
        df = pd.DataFrame([dict(r) for r in records])
    return normalize_transactions(df, cfg)
