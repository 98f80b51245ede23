"""
Column schemas and table factories for every collection in an AnalysisResult.
"""
from __future__ import annotations

from typing import Any, Optional

from ledgerview.analytics.balance import filter_daily_by_range, sample_daily
from ledgerview.data.schemas import AnalysisConfig, AnalysisResult, Insights, NoDataResult, TimeRange
from ledgerview.table.columns import ColumnSpec, ColumnType, VirtualizationConfig, cell_value
from ledgerview.table.sortable import SortableTable
from ledgerview.table.state import SortDirection

STRING, NUMBER, DATE = ColumnType.STRING, ColumnType.NUMBER, ColumnType.DATE


def format_currency(value: Any) -> str:
    try:
        return f"€{float(value):.2f}"
    except (TypeError, ValueError):
        return ""


def _money(key: str):
    return lambda row: format_currency(cell_value(row, key))


def _percent(key: str):
    return lambda row: f"{cell_value(row, key)}%"


# ---------------------------------------------------------------------------
# Column schemas
# ---------------------------------------------------------------------------

LARGEST_COLS = [
    ColumnSpec("name", "Partner", STRING),
    ColumnSpec("date", "Date", DATE),
    ColumnSpec("value", "Amount", NUMBER, render=_money("value"), excel_format="currency"),
]

MONTHLY_FLOW_COLS = [
    ColumnSpec("month_display", "Month", STRING),
    ColumnSpec("count", "Transactions", NUMBER, excel_format="number"),
    ColumnSpec("inflow", "Inflows", NUMBER, render=_money("inflow"), excel_format="currency"),
    ColumnSpec("outflow", "Outflows", NUMBER, render=_money("outflow"), excel_format="currency"),
    ColumnSpec("net", "Net Flow", NUMBER, render=_money("net"), excel_format="currency"),
]

TYPE_COLS = [
    ColumnSpec("name", "Type", STRING),
    ColumnSpec("count", "Count", NUMBER, excel_format="number"),
    ColumnSpec("percentage", "Percentage", NUMBER, render=_percent("percentage"), excel_format="percent"),
    ColumnSpec("volume", "Volume", NUMBER, render=_money("volume"), excel_format="currency"),
    ColumnSpec("total_amount", "Net Amount", NUMBER, render=_money("total_amount"), excel_format="currency"),
]

TRANSACTION_COLS = [
    ColumnSpec("booking_date", "Date", DATE),
    ColumnSpec("partner_name", "Partner", STRING),
    ColumnSpec("payment_reference", "Reference", STRING),
    ColumnSpec("type_display", "Type", STRING),
    ColumnSpec("amount", "Amount (€)", NUMBER, render=_money("amount"), excel_format="currency"),
]

CURRENCY_COLS = [
    ColumnSpec("name", "Currency", STRING),
    ColumnSpec("count", "Count", NUMBER, excel_format="number"),
    ColumnSpec("percentage", "Percentage", NUMBER, render=_percent("percentage"), excel_format="percent"),
]

PARTNER_COLS = [
    ColumnSpec("name", "Partner", STRING),
    ColumnSpec("count", "Transactions", NUMBER, excel_format="number"),
    ColumnSpec("total_volume", "Total Volume", NUMBER, render=_money("total_volume"), excel_format="currency"),
    ColumnSpec("total_in", "Total Inflows", NUMBER, render=_money("total_in"), excel_format="currency"),
    ColumnSpec("total_out", "Total Outflows", NUMBER, render=_money("total_out"), excel_format="currency"),
    ColumnSpec("net", "Net Flow", NUMBER, render=_money("net"), excel_format="currency"),
]

DAILY_BALANCE_COLS = [
    ColumnSpec("date", "Date", DATE),
    ColumnSpec("balance", "Balance", NUMBER, render=_money("balance"), excel_format="currency"),
]

PERIOD_BALANCE_COLS = [
    ColumnSpec("period", "Period", STRING),
    ColumnSpec("avg_balance", "Average Balance", NUMBER, render=_money("avg_balance"), excel_format="currency"),
    ColumnSpec("min_balance", "Min Balance", NUMBER, render=_money("min_balance"), excel_format="currency"),
    ColumnSpec("max_balance", "Max Balance", NUMBER, render=_money("max_balance"), excel_format="currency"),
    ColumnSpec("days", "Days", NUMBER, excel_format="number"),
]

TRANSACTIONS_VIRTUALIZATION = VirtualizationConfig(enabled=True, viewport_height=600, row_height=40)


# ---------------------------------------------------------------------------
# Row styles (names match the workbook highlight fills)
# ---------------------------------------------------------------------------

def sign_style(key: str):
    """'warning' for negative values of ``key``, 'green' otherwise."""
    def _style(row: Any) -> Optional[str]:
        value = cell_value(row, key) or 0
        return "warning" if value < 0 else "green"
    return _style


def cash_flow_style(row: Any) -> Optional[str]:
    if cell_value(row, "is_total"):
        return "total"
    return sign_style("net")(row)


# ---------------------------------------------------------------------------
# Derived row collections
# ---------------------------------------------------------------------------

def monthly_cash_flow_rows(result: AnalysisResult) -> list[dict]:
    """Monthly flows plus a closing TOTAL row."""
    rows = [
        {
            "month": m.month,
            "month_display": m.month_display,
            "count": m.count,
            "inflow": m.inflow,
            "outflow": m.outflow,
            "net": m.net,
            "is_total": False,
        }
        for m in result.monthly_stats
    ]
    stats = result.basic_stats
    rows.append({
        "month": None,
        "month_display": "TOTAL",
        "count": stats.total_transactions,
        "inflow": stats.inflows,
        "outflow": abs(stats.outflows),
        "net": stats.net_flow,
        "is_total": True,
    })
    return rows


def _name(label: Any) -> str:
    return "(unnamed)" if label is None else str(label)


def insight_sections(ins: Insights) -> list[tuple[str, list[str]]]:
    """Key insights as titled groups of display lines."""
    cash_flow = [f"Total net flow: {format_currency(ins.net_flow)} for the period"]
    month_lines = [
        ("Highest inflows in", ins.highest_inflow_month),
        ("Largest outflows in", ins.largest_outflow_month),
        ("Most positive month:", ins.most_positive_month),
        ("Most negative month:", ins.most_negative_month),
    ]
    for text, h in month_lines:
        if h:
            cash_flow.append(f"{text} {h.label} ({format_currency(h.value)})")

    balance = [f"Yearly average balance: {format_currency(ins.yearly_avg_balance)}"]
    if ins.highest_avg_balance_month:
        h = ins.highest_avg_balance_month
        balance.append(f"Highest monthly average: {h.label} ({format_currency(h.value)})")
    if ins.lowest_avg_balance_month:
        h = ins.lowest_avg_balance_month
        balance.append(f"Lowest monthly average: {h.label} ({format_currency(h.value)})")
    balance.append(f"Ending balance: {format_currency(ins.ending_balance)}")

    patterns = []
    if ins.most_common_type:
        patterns.append(f"Most common transaction type: {_name(ins.most_common_type.label)} "
                        f"({ins.most_common_type.value}%)")
    if ins.primary_currency:
        patterns.append(f"Primary currency: {ins.primary_currency.label} ({ins.primary_currency.value}%)")
    patterns.append(f"Average transaction size: {format_currency(ins.average_transaction_size)}")
    if ins.top3_partner_share is not None:
        patterns.append(f"Top 3 partners account for {ins.top3_partner_share:.0f}% of volume")
    if ins.busiest_month:
        patterns.append(f"Transaction frequency peaks in {ins.busiest_month.label} "
                        f"({int(ins.busiest_month.value)} transactions)")

    partners = []
    if ins.top_partner:
        partners.append(f"Top partner by volume: {_name(ins.top_partner.label)} "
                        f"({format_currency(ins.top_partner.value)})")
    if ins.most_frequent_partner:
        partners.append(f"Most frequent partner: {_name(ins.most_frequent_partner.label)} "
                        f"({int(ins.most_frequent_partner.value)} transactions)")
    if ins.largest_inflow:
        partners.append(f"Largest single inflow: {format_currency(ins.largest_inflow.value)} "
                        f"from {_name(ins.largest_inflow.name)}")
    if ins.largest_outflow:
        partners.append(f"Largest single outflow: {format_currency(ins.largest_outflow.value)} "
                        f"to {_name(ins.largest_outflow.name)}")

    return [
        ("Cash Flow", cash_flow),
        ("Balance Trends", balance),
        ("Transaction Patterns", patterns),
        ("Partner Relationships", partners),
    ]


# ---------------------------------------------------------------------------
# Table factory
# ---------------------------------------------------------------------------

TABLE_TITLES = {
    "largest_inflows": "Largest Inflows",
    "largest_outflows": "Largest Outflows",
    "monthly_cash_flow": "Monthly Cash Flow",
    "transaction_types": "Transaction Types",
    "all_transactions": "All Transactions",
    "currency_distribution": "Currency Distribution",
    "top_partners": "Top Partners",
    "daily_balances": "Daily Balances",
    "weekly_balances": "Weekly Balances",
    "monthly_balances": "Monthly Balances",
}


def build_tables(
    result: AnalysisResult | NoDataResult,
    cfg: AnalysisConfig | None = None,
    time_range: TimeRange | str = TimeRange.ALL,
) -> dict[str, SortableTable]:
    """One SortableTable per result collection, keyed by the names in TABLE_TITLES."""
    if not result:
        return {}
    cfg = cfg or AnalysisConfig.from_settings()
    daily = sample_daily(filter_daily_by_range(result.daily_balances, time_range), cfg.daily_table_stride)

    return {
        "largest_inflows": SortableTable(result.largest_inflows, LARGEST_COLS, TABLE_TITLES["largest_inflows"]),
        "largest_outflows": SortableTable(result.largest_outflows, LARGEST_COLS, TABLE_TITLES["largest_outflows"]),
        "monthly_cash_flow": SortableTable(
            monthly_cash_flow_rows(result), MONTHLY_FLOW_COLS, TABLE_TITLES["monthly_cash_flow"],
            row_style=cash_flow_style,
        ),
        "transaction_types": SortableTable(result.type_distribution, TYPE_COLS, TABLE_TITLES["transaction_types"]),
        "all_transactions": SortableTable(
            result.transactions, TRANSACTION_COLS, "All_Transactions",
            row_style=sign_style("amount"),
            default_sort=("booking_date", SortDirection.DESC),
            virtualization=TRANSACTIONS_VIRTUALIZATION,
        ),
        "currency_distribution": SortableTable(
            result.currency_distribution, CURRENCY_COLS, TABLE_TITLES["currency_distribution"],
        ),
        "top_partners": SortableTable(
            result.partner_volumes, PARTNER_COLS, TABLE_TITLES["top_partners"],
            row_style=sign_style("net"),
        ),
        "daily_balances": SortableTable(
            daily, DAILY_BALANCE_COLS, TABLE_TITLES["daily_balances"], row_style=sign_style("balance"),
        ),
        "weekly_balances": SortableTable(
            result.weekly_balances, PERIOD_BALANCE_COLS, TABLE_TITLES["weekly_balances"],
            row_style=sign_style("avg_balance"),
        ),
        "monthly_balances": SortableTable(
            result.monthly_balances, PERIOD_BALANCE_COLS, TABLE_TITLES["monthly_balances"],
            row_style=sign_style("avg_balance"),
        ),
    }
