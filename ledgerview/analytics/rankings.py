"""
Rankings — partners by volume, currency and transaction-type distributions.
"""
from __future__ import annotations

import pandas as pd

from ledgerview.analytics.common import signed_amounts, pct_of_total, native
from ledgerview.data.schemas import PartnerVolume, CurrencyShare, TypeShare


def partner_volumes(df: pd.DataFrame, n: int = 10) -> list[PartnerVolume]:
    """Partners ranked by total absolute volume. Unnamed partners form one group."""
    if df.empty:
        return []

    amounts = signed_amounts(df)
    work = pd.DataFrame({
        "name": df["partner_name"],
        "amount": amounts,
        "volume": amounts.abs(),
        "inflow": amounts.where(amounts > 0, 0.0),
        "outflow": amounts.where(amounts < 0, 0.0),
    })
    grouped = work.groupby("name", dropna=False, sort=False).agg(
        count=("amount", "size"),
        total_volume=("volume", "sum"),
        total_in=("inflow", "sum"),
        total_out=("outflow", "sum"),
        net=("amount", "sum"),
    ).reset_index()

    # stable: equal volumes keep first-appearance order
    grouped = grouped.sort_values("total_volume", ascending=False, kind="stable").head(n)

    return [
        PartnerVolume(
            name=native(r["name"]),
            count=int(r["count"]),
            total_volume=float(r["total_volume"]),
            total_in=float(r["total_in"]),
            total_out=float(r["total_out"]),
            net=float(r["net"]),
        )
        for _, r in grouped.iterrows()
    ]


def currency_distribution(df: pd.DataFrame, reference_currency: str = "EUR", n: int = 6) -> list[CurrencyShare]:
    """Share of records per original currency; blank currency counts as the reference one."""
    if df.empty:
        return []

    currency = df["original_currency"].map(lambda v: v.strip() if isinstance(v, str) else v)
    currency = currency.where(currency.notna() & (currency != ""), reference_currency).astype(str)

    counts = currency.groupby(currency, sort=False).size()
    counts = counts.sort_values(ascending=False, kind="stable").head(n)

    total = len(df)
    return [
        CurrencyShare(name=str(name), count=int(count), percentage=round(float(pct_of_total(count, total)), 1))
        for name, count in counts.items()
    ]


def type_distribution(df: pd.DataFrame, n: int = 7) -> list[TypeShare]:
    """Transaction types by record count, keyed by their display name."""
    if df.empty:
        return []

    amounts = signed_amounts(df)
    work = pd.DataFrame({
        "name": df["type_display"],
        "amount": amounts,
        "volume": amounts.abs(),
    })
    grouped = work.groupby("name", dropna=False, sort=False).agg(
        count=("amount", "size"),
        volume=("volume", "sum"),
        total_amount=("amount", "sum"),
    ).reset_index()
    grouped = grouped.sort_values("count", ascending=False, kind="stable").head(n)

    total = len(df)
    return [
        TypeShare(
            name=native(r["name"]),
            count=int(r["count"]),
            percentage=round(float(pct_of_total(r["count"], total)), 1),
            volume=float(r["volume"]),
            total_amount=float(r["total_amount"]),
        )
        for _, r in grouped.iterrows()
    ]
