"""
Safe math and serialization helpers used across all analytics modules.
"""
from __future__ import annotations

import datetime as dt
import math

import numpy as np
import pandas as pd


def safe_divide(numerator: float, denominator: float, default: float = 0.0) -> float:
    """Divide safely, returning default if denominator is zero or NaN."""
    if denominator == 0 or pd.isna(denominator):
        return default
    result = numerator / denominator
    return default if pd.isna(result) else result


def pct_of_total(part: float, total: float) -> float:
    """Percentage of total."""
    return safe_divide(part, total) * 100


def signed_amounts(df: pd.DataFrame) -> pd.Series:
    """Amount column with missing values counted as 0."""
    return df["amount"].fillna(0.0).astype(float)


def month_label(period: pd.Period | pd.Timestamp | dt.date) -> str:
    """'Jan 2024' style label."""
    if isinstance(period, pd.Period):
        return period.strftime("%b %Y")
    return f"{period:%b %Y}"


def day_label(day: pd.Timestamp | dt.date) -> str:
    """'Jan 1' style label."""
    return f"{day:%b} {day.day}"


def iso_date(value) -> str | None:
    """YYYY-MM-DD for date-like values, None for missing ones."""
    if value is None or (not isinstance(value, str) and pd.isna(value)):
        return None
    if isinstance(value, (pd.Timestamp, dt.date)):
        return value.isoformat()[:10]
    return str(value)


def native(value):
    """numpy/pandas scalar → plain Python value (NaN/NaT → None)."""
    if isinstance(value, (pd.Timestamp, dt.date)) and not pd.isna(value):
        return iso_date(value)
    if isinstance(value, np.generic):
        value = value.item()
    if isinstance(value, float) and math.isnan(value):
        return None
    if value is not None and pd.api.types.is_scalar(value) and pd.isna(value):
        return None
    return value


def sanitize_for_json(obj):
    """Recursively convert numpy/pandas types to native Python for JSON serialization."""
    if isinstance(obj, dict):
        clean = {}
        for k, v in obj.items():
            if k is None:
                continue
            if isinstance(k, float) and (math.isnan(k) or math.isinf(k)):
                continue
            clean[str(k) if not isinstance(k, str) else k] = sanitize_for_json(v)
        return clean
    if isinstance(obj, (list, tuple)):
        return [sanitize_for_json(v) for v in obj]
    if isinstance(obj, (np.integer,)):
        return int(obj)
    if isinstance(obj, (np.floating,)):
        v = float(obj)
        return None if (math.isnan(v) or math.isinf(v)) else v
    if isinstance(obj, np.bool_):
        return bool(obj)
    if isinstance(obj, np.ndarray):
        return sanitize_for_json(obj.tolist())
    if isinstance(obj, float):
        return None if (math.isnan(obj) or math.isinf(obj)) else obj
    if isinstance(obj, (pd.Timestamp, dt.date)):
        return iso_date(obj)
    if pd.api.types.is_scalar(obj) and pd.isna(obj):
        return None
    return obj
