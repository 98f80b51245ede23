"""Tests for the running balance, gap-filled daily series and period summaries."""

import pandas as pd
import pytest

from ledgerview.analytics.balance import (
    daily_balances,
    filter_daily_by_range,
    iso_week_key,
    period_balances,
    sample_daily,
    yearly_balance,
)
from ledgerview.data.normalize import normalize_columns
from ledgerview.data.schemas import TimeRange


def _frame(rows):
    return normalize_columns(pd.DataFrame(rows))


def test_gap_days_carry_the_previous_balance():
    df = _frame([
        {"booking_date": "2024-01-01", "amount": 100.0},
        {"booking_date": "2024-01-03", "amount": -50.0},
    ])
    daily = daily_balances(df)

    assert [d.date for d in daily] == ["2024-01-01", "2024-01-02", "2024-01-03"]
    assert [d.balance for d in daily] == [100.0, 100.0, 50.0]
    assert [d.has_transaction for d in daily] == [True, False, True]

    yearly = yearly_balance(daily)
    assert yearly.total_days == 3
    assert yearly.sum_of_daily_balances == pytest.approx(250.0)
    assert yearly.yearly_avg_balance == pytest.approx(83.3333, rel=1e-4)


def test_same_day_records_store_the_final_balance():
    df = _frame([
        {"booking_date": "2024-03-05", "amount": 10.0},
        {"booking_date": "2024-03-05", "amount": 5.0},
        {"booking_date": "2024-03-05", "amount": -2.0},
    ])
    daily = daily_balances(df)
    assert len(daily) == 1
    assert daily[0].balance == pytest.approx(13.0)


def test_records_out_of_order_accumulate_by_date():
    df = _frame([
        {"booking_date": "2024-01-05", "amount": -30.0},
        {"booking_date": "2024-01-01", "amount": 100.0},
    ])
    daily = daily_balances(df)
    assert daily[0].balance == 100.0
    assert daily[-1].balance == 70.0


def test_series_is_contiguous_and_ends_at_net_flow():
    df = _frame([
        {"booking_date": "2024-01-30", "amount": 10.0},
        {"booking_date": "2024-02-02", "amount": 20.0},
        {"booking_date": "2024-03-01", "amount": -5.0},
    ])
    daily = daily_balances(df)
    days = pd.to_datetime([d.date for d in daily])

    assert len(daily) == (days[-1] - days[0]).days + 1
    assert all((b - a).days == 1 for a, b in zip(days[:-1], days[1:]))
    assert daily[-1].balance == pytest.approx(df["amount"].sum())


def test_missing_amount_counts_as_zero_and_undated_rows_are_skipped():
    df = _frame([
        {"booking_date": "2024-01-01", "amount": 40.0},
        {"booking_date": "2024-01-02", "amount": None},
        {"booking_date": "garbage", "amount": 1000.0},
    ])
    daily = daily_balances(df)
    assert [d.balance for d in daily] == [40.0, 40.0]


def test_no_dated_records_gives_empty_series():
    df = _frame([{"booking_date": None, "amount": 1.0}])
    assert daily_balances(df) == []
    assert period_balances([]) == ([], [])
    assert yearly_balance([]).yearly_avg_balance == 0.0


@pytest.mark.parametrize("day, key", [
    ("2024-12-30", "2025-W01"),
    ("2021-01-03", "2020-W53"),
    ("2024-01-01", "2024-W01"),
    ("2023-01-01", "2022-W52"),
])
def test_iso_week_key_uses_week_year(day, key):
    assert iso_week_key(pd.Timestamp(day)) == key


def test_weighted_bucket_means_reconstruct_the_yearly_average():
    df = _frame([
        {"booking_date": "2024-12-20", "amount": 300.0},
        {"booking_date": "2024-12-31", "amount": -120.0},
        {"booking_date": "2025-01-04", "amount": 55.5},
        {"booking_date": "2025-02-11", "amount": -10.0},
    ])
    daily = daily_balances(df)
    weekly, monthly = period_balances(daily)
    yearly = yearly_balance(daily)

    for buckets in (weekly, monthly):
        assert sum(b.days for b in buckets) == len(daily)
        weighted = sum(b.avg_balance * b.days for b in buckets) / len(daily)
        assert weighted == pytest.approx(yearly.yearly_avg_balance)


def test_period_keys_ascend_across_year_boundary():
    df = _frame([
        {"booking_date": "2024-12-28", "amount": 10.0},
        {"booking_date": "2025-01-06", "amount": 10.0},
    ])
    weekly, monthly = period_balances(daily_balances(df))

    assert [w.period for w in weekly] == ["2024-W52", "2025-W01", "2025-W02"]
    assert weekly[1].period_display == "Dec 30 (W01)"
    assert [m.period for m in monthly] == ["2024-12", "2025-01"]
    assert monthly[0].period_display == "Dec 2024"


def test_period_min_max():
    df = _frame([
        {"booking_date": "2024-05-01", "amount": 100.0},
        {"booking_date": "2024-05-02", "amount": -150.0},
    ])
    _, monthly = period_balances(daily_balances(df))
    assert monthly[0].min_balance == -50.0
    assert monthly[0].max_balance == 100.0
    assert monthly[0].days == 2


def test_quarter_filter_and_sampling():
    df = _frame([
        {"booking_date": "2024-03-30", "amount": 1.0},
        {"booking_date": "2024-04-02", "amount": 1.0},
    ])
    daily = daily_balances(df)

    assert [d.quarter for d in daily] == [1, 1, 2, 2]
    assert [d.date for d in filter_daily_by_range(daily, TimeRange.Q2)] == ["2024-04-01", "2024-04-02"]
    assert filter_daily_by_range(daily, "all") == daily
    assert filter_daily_by_range(daily, TimeRange.Q3) == []

    assert [d.date for d in sample_daily(daily, 2)] == ["2024-03-30", "2024-04-01"]
    with pytest.raises(ValueError):
        sample_daily(daily, 0)
