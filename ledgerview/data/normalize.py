"""
Column mapping, type coercion, partner canonicalization, type display names.
"""
from __future__ import annotations

import datetime as dt
from typing import Iterable, Mapping

import pandas as pd

from ledgerview.config import COLUMN_MAP, NUMERIC_COLUMNS, DATE_COLUMNS, DATE_FORMAT
from ledgerview.data.schemas import AnalysisConfig


# ---------------------------------------------------------------------------
# Column normalisation
# ---------------------------------------------------------------------------

def _parse_dates(series: pd.Series) -> pd.Series:
    """YYYY-MM-DD strings or date objects → datetime64; anything else → NaT."""
    if pd.api.types.is_datetime64_any_dtype(series):
        return series.dt.normalize()

    def _as_text(value):
        if isinstance(value, dt.date):
            return value.isoformat()[:10]
        if isinstance(value, str):
            return value.strip()
        return None

    return pd.to_datetime(series.map(_as_text), format=DATE_FORMAT, errors="coerce")


def normalize_columns(df: pd.DataFrame) -> pd.DataFrame:
    """Rename raw export columns, add missing ones, parse numbers and dates."""
    df = df.rename(columns=COLUMN_MAP)

    for col in COLUMN_MAP.values():
        if col not in df.columns:
            df[col] = None

    # Amounts → float (unparseable → NaN)
    for col in NUMERIC_COLUMNS:
        df[col] = pd.to_numeric(df[col], errors="coerce")

    # Unparseable booking dates stay NaT; the row is kept for listings
    for col in DATE_COLUMNS:
        df[col] = _parse_dates(df[col])

    return df


# ---------------------------------------------------------------------------
# Partner canonicalization
# ---------------------------------------------------------------------------

def canonicalize_partners(
    df: pd.DataFrame,
    aliases: Iterable[str],
    label: str,
) -> pd.DataFrame:
    """Collapse own-name spellings of the partner field into one label.

    Matching is case-insensitive and exact; non-string partner values are
    left alone.
    """
    df = df.copy()
    targets = {a.casefold() for a in aliases}
    if not targets or df.empty:
        return df

    mask = df["partner_name"].map(lambda v: isinstance(v, str) and v.casefold() in targets).astype(bool)
    if mask.any():
        df["partner_name"] = df["partner_name"].astype(object)
        df.loc[mask, "partner_name"] = label
    return df


# ---------------------------------------------------------------------------
# Type display names
# ---------------------------------------------------------------------------

def apply_type_display_names(df: pd.DataFrame, display_names: Mapping[str, str]) -> pd.DataFrame:
    """Add ``type_display``: the user-facing label for each raw type."""
    df = df.copy()
    df["type_display"] = df["type"].map(
        lambda v: display_names.get(v, v) if isinstance(v, str) else v
    )
    return df


def normalize_transactions(df: pd.DataFrame, cfg: AnalysisConfig) -> pd.DataFrame:
    """Full normalization: columns, canonical partners, type display names."""
    df = normalize_columns(df)
    df = canonicalize_partners(df, cfg.self_aliases, cfg.self_label)
    df = apply_type_display_names(df, cfg.type_display_names)
    return df
