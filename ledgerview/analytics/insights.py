"""
Key insights: the extremes and headline ratios of an AnalysisResult.
"""
from __future__ import annotations

from typing import Any, Callable, Optional, Sequence

from ledgerview.analytics.common import safe_divide, pct_of_total
from ledgerview.data.schemas import AnalysisResult, Highlight, Insights


def _pick(
    items: Sequence[Any],
    key: Callable[[Any], float],
    label: Callable[[Any], Any],
    lowest: bool = False,
) -> Optional[Highlight]:
    """Highlight for the max (or min) item; ties go to the earliest item."""
    if not items:
        return None
    chosen = (min if lowest else max)(items, key=key)
    return Highlight(label=label(chosen), value=key(chosen))


def insights(result: AnalysisResult) -> Insights:
    stats = result.basic_stats
    months = result.monthly_stats
    balances = result.monthly_balances
    partners = result.partner_volumes

    top3_share = None
    if len(partners) >= 3:
        top3_share = pct_of_total(sum(p.total_volume for p in partners[:3]), stats.total_volume)

    types = result.type_distribution
    currencies = result.currency_distribution

    return Insights(
        net_flow=stats.net_flow,
        highest_inflow_month=_pick(months, lambda m: m.inflow, lambda m: m.month_display),
        largest_outflow_month=_pick(months, lambda m: m.outflow, lambda m: m.month_display),
        most_positive_month=_pick(months, lambda m: m.net, lambda m: m.month_display),
        most_negative_month=_pick(months, lambda m: m.net, lambda m: m.month_display, lowest=True),
        busiest_month=_pick(months, lambda m: m.count, lambda m: m.month_display),
        yearly_avg_balance=result.yearly_balance.yearly_avg_balance,
        highest_avg_balance_month=_pick(balances, lambda b: b.avg_balance, lambda b: b.period_display),
        lowest_avg_balance_month=_pick(balances, lambda b: b.avg_balance, lambda b: b.period_display, lowest=True),
        ending_balance=result.daily_balances[-1].balance if result.daily_balances else 0.0,
        most_common_type=Highlight(types[0].name, types[0].percentage) if types else None,
        primary_currency=Highlight(currencies[0].name, currencies[0].percentage) if currencies else None,
        average_transaction_size=safe_divide(stats.total_volume, stats.total_transactions),
        top3_partner_share=top3_share,
        top_partner=Highlight(partners[0].name, partners[0].total_volume) if partners else None,
        most_frequent_partner=_pick(partners, lambda p: p.count, lambda p: p.name),
        largest_inflow=result.largest_inflows[0] if result.largest_inflows else None,
        largest_outflow=result.largest_outflows[0] if result.largest_outflows else None,
    )
