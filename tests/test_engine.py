"""Tests for the aggregation engine and the result object."""

import dataclasses
import json

import pytest

from ledgerview.analytics import engine
from ledgerview.analytics.engine import analyze
from ledgerview.data.loader import parse_transactions
from ledgerview.data.schemas import AnalysisConfig, NoDataResult
from ledgerview.errors import ComputationError, InputError


@pytest.fixture
def result(sample_csv, alias_cfg):
    return analyze(parse_transactions(sample_csv, alias_cfg), alias_cfg)


def test_basic_stats(result):
    s = result.basic_stats
    assert s.start_date == "2024-01-01"
    assert s.end_date == "2024-02-02"
    assert s.total_transactions == 7
    assert s.inflows == pytest.approx(5220.0)
    assert s.outflows == pytest.approx(-524.5)
    assert s.net_flow == pytest.approx(4695.5)
    assert s.total_volume == pytest.approx(5744.5)


def test_net_flow_equals_final_balance(result):
    assert result.daily_balances[-1].balance == pytest.approx(result.basic_stats.net_flow)
    assert result.yearly_balance.total_days == 33
    assert len(result.daily_balances) == 33


def test_own_name_spellings_fold_into_one_partner(result):
    by_name = {p.name: p for p in result.partner_volumes}
    assert "Jane Doe" not in by_name
    assert "JANE DOE" not in by_name
    mine = by_name["My Transfers"]
    assert mine.count == 2
    assert mine.net == pytest.approx(-400.0)
    assert mine.total_in == pytest.approx(100.0)
    assert mine.total_out == pytest.approx(-500.0)


def test_partners_ranked_by_volume(result):
    names = [p.name for p in result.partner_volumes]
    assert names[0] == "ACME Corp"
    volumes = [p.total_volume for p in result.partner_volumes]
    assert volumes == sorted(volumes, reverse=True)


def test_partner_ranking_is_truncated():
    records = [{"booking_date": "2024-01-01", "partner_name": f"P{i}", "amount": float(i + 1)} for i in range(12)]
    result = analyze(records, AnalysisConfig.from_settings(top_partners=10))
    assert len(result.partner_volumes) == 10
    assert result.partner_volumes[0].name == "P11"


def test_unnamed_partner_is_its_own_group():
    records = [
        {"booking_date": "2024-01-01", "partner_name": None, "amount": 5.0},
        {"booking_date": "2024-01-02", "partner_name": None, "amount": 7.0},
        {"booking_date": "2024-01-02", "partner_name": "Shop", "amount": -1.0},
    ]
    result = analyze(records)
    unnamed = [p for p in result.partner_volumes if p.name is None]
    assert len(unnamed) == 1
    assert unnamed[0].count == 2


def test_type_display_names_in_distribution():
    records = [
        {"booking_date": "2024-01-01", "type": "Presentment" if i < 3 else "Credit Transfer", "amount": 1.0}
        for i in range(10)
    ]
    result = analyze(records)
    by_name = {t.name: t for t in result.type_distribution}
    assert by_name["Card Payment"].count == 3
    assert by_name["Card Payment"].percentage == 30.0
    assert result.type_distribution[0].name == "Credit Transfer"


def test_currency_distribution_defaults_blank_to_reference(result):
    by_name = {c.name: c for c in result.currency_distribution}
    assert by_name["EUR"].count == 5
    assert by_name["USD"].count == 2
    assert by_name["USD"].percentage == 28.6
    assert sum(c.count for c in result.currency_distribution) == 7


def test_largest_transactions(result):
    assert [t.value for t in result.largest_inflows] == [2600.0, 2500.0, 100.0, 20.0]
    assert [t.value for t in result.largest_outflows] == [500.0, 20.0, 4.5]
    assert result.largest_outflows[0].name == "My Transfers"
    assert all(t.flow == "outflow" for t in result.largest_outflows)


def test_monthly_stats(result):
    months = [m.month for m in result.monthly_stats]
    assert months == ["2024-01", "2024-02"]
    jan = result.monthly_stats[0]
    assert jan.month_display == "Jan 2024"
    assert jan.count == 5
    assert jan.inflow == pytest.approx(2520.0)
    assert jan.outflow == pytest.approx(524.5)
    assert jan.net == pytest.approx(1995.5)


def test_transactions_are_date_sorted_and_canonical(result):
    dates = [t["booking_date"] for t in result.transactions]
    assert dates == sorted(dates)
    assert result.transactions[2]["partner_name"] == "My Transfers"
    assert result.transactions[1]["type_display"] == "Card Payment"


def test_undated_rows_stay_in_listing_but_not_in_balances():
    records = [
        {"booking_date": "2024-01-01", "amount": 10.0},
        {"booking_date": "bad", "amount": 99.0},
    ]
    result = analyze(records)
    assert len(result.transactions) == 2
    assert result.transactions[-1]["booking_date"] is None
    assert result.basic_stats.total_transactions == 2
    assert [d.balance for d in result.daily_balances] == [10.0]


def test_missing_amount_is_zero():
    result = analyze([
        {"booking_date": "2024-01-01", "amount": 10.0},
        {"booking_date": "2024-01-02", "amount": None},
    ])
    assert result.basic_stats.net_flow == 10.0
    assert result.transactions[1]["amount"] is None


def test_empty_input_is_no_data():
    result = analyze([])
    assert isinstance(result, NoDataResult)
    assert not result
    assert result.to_dict()["no_data"] is True


def test_no_parseable_dates_is_no_data():
    result = analyze([{"booking_date": "n/a", "amount": 1.0}])
    assert isinstance(result, NoDataResult)
    assert "booking date" in result.reason


def test_result_is_read_only(result):
    with pytest.raises(dataclasses.FrozenInstanceError):
        result.basic_stats = None
    with pytest.raises(TypeError):
        result.transactions[0]["amount"] = 0


def test_to_dict_is_json_serializable(result):
    payload = result.to_dict()
    text = json.dumps(payload)
    assert "NaN" not in text
    assert payload["yearly_balance"]["total_days"] == 33


def test_unexpected_failure_is_one_computation_error(monkeypatch):
    def boom(_df):
        raise RuntimeError("kaput")

    monkeypatch.setattr(engine, "daily_balances", boom)
    with pytest.raises(ComputationError, match="Failed to process financial data: kaput"):
        analyze([{"booking_date": "2024-01-01", "amount": 1.0}])


def test_missing_input_is_input_error():
    with pytest.raises(InputError, match="No transactions provided"):
        analyze(None)


def test_transactions_frame_is_a_fresh_copy(result):
    frame = result.transactions_frame()
    assert len(frame) == 7
    assert frame.loc[2, "partner_name"] == "My Transfers"
    frame.loc[0, "amount"] = 0.0
    assert result.transactions[0]["amount"] == 2500.0
    assert result.transactions_frame() is not frame
