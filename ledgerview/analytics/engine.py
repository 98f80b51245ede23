"""
Aggregation engine — one pass from normalized records to an AnalysisResult.
"""
from __future__ import annotations

from types import MappingProxyType
from typing import Any, Iterable, Mapping

import pandas as pd

from ledgerview.analytics.common import native
from ledgerview.analytics.flows import basic_stats, monthly_stats, largest_transactions
from ledgerview.analytics.rankings import partner_volumes, currency_distribution, type_distribution
from ledgerview.analytics.balance import daily_balances, period_balances, yearly_balance
from ledgerview.data.loader import records_to_frame
from ledgerview.data.schemas import AnalysisConfig, AnalysisResult, NoDataResult
from ledgerview.errors import ComputationError, InputError, LedgerviewError
from ledgerview.logging_setup import get_logger

log = get_logger(__name__)


def _transaction_rows(ordered: pd.DataFrame) -> tuple[Mapping[str, Any], ...]:
    """Read-only plain-Python rows (dates as YYYY-MM-DD, NaN as None)."""
    return tuple(
        MappingProxyType({k: native(v) for k, v in row.items()})
        for row in ordered.to_dict("records")
    )


def analyze(
    records: pd.DataFrame | Iterable[Mapping[str, Any]],
    cfg: AnalysisConfig | None = None,
) -> AnalysisResult | NoDataResult:
    """Build the full analysis for one input load.

    Returns ``NoDataResult`` when there are no records or no record has a
    parseable booking date. Any unexpected failure is raised as a single
    ``ComputationError``; nothing partial is returned.
    """
    if records is None:
        raise InputError("No transactions provided")
    cfg = cfg or AnalysisConfig.from_settings()

    try:
        df = records_to_frame(records, cfg)
        if df.empty:
            return NoDataResult("No transactions to analyze")
        if not df["booking_date"].notna().any():
            return NoDataResult("No transaction has a parseable booking date")

        # Date-sorted, canonicalized listing; undated rows go last
        ordered = df.sort_values("booking_date", kind="stable", na_position="last").reset_index(drop=True)

        daily = daily_balances(ordered)
        weekly, monthly = period_balances(daily)
        inflows, outflows = largest_transactions(ordered, cfg.top_largest)

        result = AnalysisResult(
            basic_stats=basic_stats(ordered),
            monthly_stats=tuple(monthly_stats(ordered)),
            partner_volumes=tuple(partner_volumes(ordered, cfg.top_partners)),
            currency_distribution=tuple(currency_distribution(ordered, cfg.reference_currency, cfg.top_currencies)),
            type_distribution=tuple(type_distribution(ordered, cfg.top_types)),
            daily_balances=tuple(daily),
            weekly_balances=tuple(weekly),
            monthly_balances=tuple(monthly),
            yearly_balance=yearly_balance(daily),
            largest_inflows=tuple(inflows),
            largest_outflows=tuple(outflows),
            transactions=_transaction_rows(ordered),
        )
    except LedgerviewError:
        raise
    except Exception as exc:
        log.exception("Error processing data")
        raise ComputationError(f"Failed to process financial data: {exc}") from exc

    log.info(
        "Analyzed %d transactions over %d days (%s to %s)",
        result.basic_stats.total_transactions,
        result.yearly_balance.total_days,
        result.basic_stats.start_date,
        result.basic_stats.end_date,
    )
    return result
