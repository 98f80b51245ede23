"""
Analysis settings, time-range filter and the immutable result object.
"""
from __future__ import annotations

import dataclasses
from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Any, Mapping, Optional

import pandas as pd

from ledgerview import config


class TimeRange(str, Enum):
    ALL = "all"
    Q1 = "q1"
    Q2 = "q2"
    Q3 = "q3"
    Q4 = "q4"

    @property
    def quarter(self) -> Optional[int]:
        """Quarter number (1-4), or None for ALL."""
        if self is TimeRange.ALL:
            return None
        return int(self.value[1])


@dataclass(frozen=True)
class AnalysisConfig:
    """Settings that shape one analysis run."""
    self_aliases: tuple[str, ...] = ()
    self_label: str = config.SELF_TRANSFER_LABEL
    type_display_names: Mapping[str, str] = field(
        default_factory=lambda: MappingProxyType(dict(config.TYPE_DISPLAY_NAMES))
    )
    reference_currency: str = config.REFERENCE_CURRENCY
    top_partners: int = config.TOP_PARTNERS
    top_currencies: int = config.TOP_CURRENCIES
    top_types: int = config.TOP_TYPES
    top_largest: int = config.TOP_LARGEST
    daily_table_stride: int = config.DAILY_TABLE_STRIDE

    @classmethod
    def from_settings(cls, **overrides) -> "AnalysisConfig":
        """Build from the module-level settings, with keyword overrides."""
        values = {"self_aliases": tuple(config.SELF_TRANSFER_ALIASES)}
        values.update(overrides)
        if "self_aliases" in overrides:
            values["self_aliases"] = tuple(overrides["self_aliases"])
        return cls(**values)


# ---------------------------------------------------------------------------
# Result entries
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class BasicStats:
    start_date: Optional[str]
    end_date: Optional[str]
    total_transactions: int
    total_volume: float
    inflows: float
    outflows: float          # kept negative
    net_flow: float


@dataclass(frozen=True)
class MonthlyFlow:
    month: str               # YYYY-MM
    month_display: str
    count: int
    inflow: float
    outflow: float           # positive magnitude
    net: float


@dataclass(frozen=True)
class PartnerVolume:
    name: Any
    count: int
    total_volume: float
    total_in: float
    total_out: float
    net: float


@dataclass(frozen=True)
class CurrencyShare:
    name: str
    count: int
    percentage: float


@dataclass(frozen=True)
class TypeShare:
    name: Any
    count: int
    percentage: float
    volume: float
    total_amount: float


@dataclass(frozen=True)
class DailyBalance:
    date: str                # YYYY-MM-DD
    label: str
    balance: float
    has_transaction: bool
    quarter: int


@dataclass(frozen=True)
class PeriodBalance:
    period: str
    period_display: str
    avg_balance: float
    min_balance: float
    max_balance: float
    days: int


@dataclass(frozen=True)
class YearlyBalance:
    total_days: int
    sum_of_daily_balances: float
    yearly_avg_balance: float


@dataclass(frozen=True)
class LargeTransaction:
    name: Any
    date: Optional[str]
    value: float             # positive magnitude
    flow: str                # "inflow" | "outflow"


@dataclass(frozen=True)
class Highlight:
    """A labelled figure picked out of a result collection."""
    label: Any
    value: float


@dataclass(frozen=True)
class Insights:
    """Headline figures derived from an AnalysisResult.

    Month and partner highlights are None when their collection is empty;
    ``top3_partner_share`` is None with fewer than three partners.
    """
    net_flow: float
    highest_inflow_month: Optional[Highlight]
    largest_outflow_month: Optional[Highlight]
    most_positive_month: Optional[Highlight]
    most_negative_month: Optional[Highlight]
    busiest_month: Optional[Highlight]           # value is the transaction count
    yearly_avg_balance: float
    highest_avg_balance_month: Optional[Highlight]
    lowest_avg_balance_month: Optional[Highlight]
    ending_balance: float
    most_common_type: Optional[Highlight]        # value is a percentage
    primary_currency: Optional[Highlight]        # value is a percentage
    average_transaction_size: float
    top3_partner_share: Optional[float]          # percentage of total volume
    top_partner: Optional[Highlight]
    most_frequent_partner: Optional[Highlight]   # value is the transaction count
    largest_inflow: Optional[LargeTransaction]
    largest_outflow: Optional[LargeTransaction]


# ---------------------------------------------------------------------------
# Result objects
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class NoDataResult:
    """Returned by analyze() when there is nothing to aggregate."""
    reason: str = "No transactions to analyze"

    def __bool__(self) -> bool:
        return False

    def to_dict(self) -> dict:
        return {"no_data": True, "reason": self.reason}


@dataclass(frozen=True)
class AnalysisResult:
    """Everything derived from one input load. Never mutated after build."""
    basic_stats: BasicStats
    monthly_stats: tuple[MonthlyFlow, ...]
    partner_volumes: tuple[PartnerVolume, ...]
    currency_distribution: tuple[CurrencyShare, ...]
    type_distribution: tuple[TypeShare, ...]
    daily_balances: tuple[DailyBalance, ...]
    weekly_balances: tuple[PeriodBalance, ...]
    monthly_balances: tuple[PeriodBalance, ...]
    yearly_balance: YearlyBalance
    largest_inflows: tuple[LargeTransaction, ...]
    largest_outflows: tuple[LargeTransaction, ...]
    transactions: tuple[Mapping[str, Any], ...]

    def transactions_frame(self) -> pd.DataFrame:
        """Fresh DataFrame copy of the canonicalized, date-sorted transactions."""
        return pd.DataFrame([dict(t) for t in self.transactions])

    def to_dict(self) -> dict:
        """Plain dict of the whole result (dataclasses → dicts, tuples → lists)."""
        out: dict[str, Any] = {}
        for f in dataclasses.fields(self):
            value = getattr(self, f.name)
            if f.name == "transactions":
                out[f.name] = [dict(t) for t in value]
            elif isinstance(value, tuple):
                out[f.name] = [dataclasses.asdict(v) for v in value]
            else:
                out[f.name] = dataclasses.asdict(value)
        return out
