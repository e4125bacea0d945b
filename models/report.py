"""Report view models produced by the report aggregator."""

from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal
from typing import List

CURRENT_MONTH = "current-month"
LAST_3_MONTHS = "last-3-months"
CURRENT_YEAR = "current-year"
ALL_TIME = "all-time"
REPORT_PERIODS = (CURRENT_MONTH, LAST_3_MONTHS, CURRENT_YEAR, ALL_TIME)


@dataclass
class ReportTotals:
    total_income: Decimal
    total_expenses: Decimal
    balance: Decimal


@dataclass
class CategorySlice:
    """Expense total of one category, with its share of all expenses."""

    category_id: str
    name: str
    color: str
    icon: str
    value: Decimal
    share: Decimal  # percent of total expenses, 0 when there are none


@dataclass
class MonthlyEntry:
    month: str  # "YYYY-MM"
    income: Decimal
    expense: Decimal


@dataclass
class BalancePoint:
    date: date
    balance: Decimal


@dataclass
class Report:
    period: str
    totals: ReportTotals
    category_distribution: List[CategorySlice] = field(default_factory=list)
    monthly_series: List[MonthlyEntry] = field(default_factory=list)
    balance_series: List[BalancePoint] = field(default_factory=list)


@dataclass
class DashboardSummary:
    """Headline figures for the dashboard."""

    balance: Decimal  # all-time income minus expenses
    month_income: Decimal
    month_expenses: Decimal
    recent_transactions: list = field(default_factory=list)
