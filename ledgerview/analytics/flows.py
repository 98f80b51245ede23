"""
Cash-flow analytics — totals, monthly inflow/outflow, largest transactions.
"""
from __future__ import annotations

import pandas as pd

from ledgerview.analytics.common import signed_amounts, month_label, iso_date, native
from ledgerview.data.schemas import BasicStats, MonthlyFlow, LargeTransaction


def basic_stats(df: pd.DataFrame) -> BasicStats:
    """Date range, volume and in/out totals over every record."""
    amounts = signed_amounts(df)
    dates = df["booking_date"].dropna()

    inflows = float(amounts[amounts > 0].sum())
    outflows = float(amounts[amounts < 0].sum())

    return BasicStats(
        start_date=iso_date(dates.min()) if not dates.empty else None,
        end_date=iso_date(dates.max()) if not dates.empty else None,
        total_transactions=len(df),
        total_volume=float(amounts.abs().sum()),
        inflows=inflows,
        outflows=outflows,
        net_flow=inflows + outflows,
    )


def monthly_stats(df: pd.DataFrame) -> list[MonthlyFlow]:
    """Per-month count, inflow, outflow (as a magnitude) and net, oldest first."""
    dated = df[df["booking_date"].notna()]
    if dated.empty:
        return []

    amounts = signed_amounts(dated)
    work = pd.DataFrame({
        "month": dated["booking_date"].dt.to_period("M"),
        "amount": amounts,
        "inflow": amounts.where(amounts > 0, 0.0),
        "outflow": amounts.where(amounts < 0, 0.0),
    })
    monthly = work.groupby("month").agg(
        count=("amount", "size"),
        inflow=("inflow", "sum"),
        outflow=("outflow", "sum"),
        net=("amount", "sum"),
    ).sort_index()

    results = []
    for period, row in monthly.iterrows():
        results.append(MonthlyFlow(
            month=str(period),
            month_display=month_label(period),
            count=int(row["count"]),
            inflow=float(row["inflow"]),
            outflow=abs(float(row["outflow"])),
            net=float(row["net"]),
        ))
    return results


def _to_large(rows: pd.DataFrame, flow: str) -> list[LargeTransaction]:
    return [
        LargeTransaction(
            name=native(r["partner_name"]),
            date=iso_date(r["booking_date"]),
            value=abs(float(r["_amount"])),
            flow=flow,
        )
        for _, r in rows.iterrows()
    ]


def largest_transactions(df: pd.DataFrame, n: int = 10) -> tuple[list[LargeTransaction], list[LargeTransaction]]:
    """Top-n inflows (largest first) and top-n outflows (most negative first).

    Ties keep the order of ``df``.
    """
    work = df.assign(_amount=signed_amounts(df))

    inflows = work[work["_amount"] > 0].sort_values("_amount", ascending=False, kind="stable").head(n)
    outflows = work[work["_amount"] < 0].sort_values("_amount", ascending=True, kind="stable").head(n)

    return _to_large(inflows, "inflow"), _to_large(outflows, "outflow")
