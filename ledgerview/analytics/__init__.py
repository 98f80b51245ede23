"""Aggregation engine and the analytics functions it composes."""
from .engine import analyze
from .balance import daily_balances, period_balances, yearly_balance, filter_daily_by_range, sample_daily, iso_week_key
from .flows import basic_stats, monthly_stats, largest_transactions
from .rankings import partner_volumes, currency_distribution, type_distribution
from .insights import insights
