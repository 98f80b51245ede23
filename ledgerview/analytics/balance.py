"""
Balance analytics — running balance, gap-filled daily series, ISO-week and
monthly summaries, yearly average.

The daily series covers every calendar day between the first and last
booking date. A day without transactions carries the previous balance.
"""
from __future__ import annotations

from typing import Sequence

import pandas as pd

from ledgerview.analytics.common import signed_amounts, safe_divide, month_label, day_label, iso_date
from ledgerview.data.schemas import DailyBalance, PeriodBalance, YearlyBalance, TimeRange


# ---------------------------------------------------------------------------
# Running balance
# ---------------------------------------------------------------------------

def running_balances(df: pd.DataFrame) -> pd.Series:
    """Balance after the last record of each booking date, indexed by day.

    Records are accumulated in stable date order; undated records are skipped.
    """
    dated = df[df["booking_date"].notna()].reset_index(drop=True)
    if dated.empty:
        return pd.Series(dtype=float)

    ordered = dated.sort_values("booking_date", kind="stable")
    running = signed_amounts(ordered).cumsum()
    return running.groupby(ordered["booking_date"]).last()


def gap_fill(recorded: pd.Series) -> pd.Series:
    """Reindex onto every day from first to last, carrying the last balance forward."""
    if recorded.empty:
        return recorded
    days = pd.date_range(recorded.index.min(), recorded.index.max(), freq="D")
    return recorded.reindex(days).ffill().fillna(0.0)


def quarter_of(day: pd.Timestamp) -> int:
    return (day.month - 1) // 3 + 1


def daily_balances(df: pd.DataFrame) -> list[DailyBalance]:
    """Gap-filled daily balance series with a quarter tag per day."""
    recorded = running_balances(df)
    if recorded.empty:
        return []

    recorded_days = set(recorded.index)
    filled = gap_fill(recorded)
    return [
        DailyBalance(
            date=iso_date(day),
            label=day_label(day),
            balance=float(balance),
            has_transaction=day in recorded_days,
            quarter=quarter_of(day),
        )
        for day, balance in filled.items()
    ]


# ---------------------------------------------------------------------------
# Period summaries
# ---------------------------------------------------------------------------

def iso_week_key(day: pd.Timestamp) -> str:
    """ISO 8601 week key, e.g. '2025-W01' for 2024-12-30 (week-year, not calendar year)."""
    year, week, _ = day.isocalendar()
    return f"{year}-W{week:02d}"


def _summarize(frame: pd.DataFrame, key: str) -> pd.DataFrame:
    return frame.groupby(key).agg(
        avg_balance=("balance", "mean"),
        min_balance=("balance", "min"),
        max_balance=("balance", "max"),
        days=("balance", "size"),
        first_day=("date", "min"),
    ).sort_index()


def period_balances(daily: Sequence[DailyBalance]) -> tuple[list[PeriodBalance], list[PeriodBalance]]:
    """Weekly (ISO week) and monthly average/min/max balance, ascending by key."""
    if not daily:
        return [], []

    frame = pd.DataFrame({
        "date": pd.to_datetime([d.date for d in daily]),
        "balance": [d.balance for d in daily],
    })
    frame["week"] = frame["date"].map(iso_week_key)
    frame["month"] = frame["date"].dt.strftime("%Y-%m")

    weekly = []
    for period, row in _summarize(frame, "week").iterrows():
        first = row["first_day"]
        weekly.append(PeriodBalance(
            period=period,
            period_display=f"{day_label(first)} (W{period.split('-W')[1]})",
            avg_balance=float(row["avg_balance"]),
            min_balance=float(row["min_balance"]),
            max_balance=float(row["max_balance"]),
            days=int(row["days"]),
        ))

    monthly = []
    for period, row in _summarize(frame, "month").iterrows():
        monthly.append(PeriodBalance(
            period=period,
            period_display=month_label(row["first_day"]),
            avg_balance=float(row["avg_balance"]),
            min_balance=float(row["min_balance"]),
            max_balance=float(row["max_balance"]),
            days=int(row["days"]),
        ))

    return weekly, monthly


def yearly_balance(daily: Sequence[DailyBalance]) -> YearlyBalance:
    """Mean of every daily balance (not a mean of monthly means)."""
    total_days = len(daily)
    total = float(sum(d.balance for d in daily))
    return YearlyBalance(
        total_days=total_days,
        sum_of_daily_balances=total,
        yearly_avg_balance=safe_divide(total, total_days),
    )


# ---------------------------------------------------------------------------
# Daily table helpers
# ---------------------------------------------------------------------------

def filter_daily_by_range(daily: Sequence[DailyBalance], time_range: TimeRange | str = TimeRange.ALL) -> list[DailyBalance]:
    """Keep the days of one quarter (or all days)."""
    quarter = TimeRange(time_range).quarter
    if quarter is None:
        return list(daily)
    return [d for d in daily if d.quarter == quarter]


def sample_daily(daily: Sequence[DailyBalance], stride: int) -> list[DailyBalance]:
    """Every ``stride``-th day, starting with the first."""
    if stride < 1:
        raise ValueError(f"stride must be >= 1, got {stride}")
    return list(daily[::stride])
