"""Report aggregation tools."""

from datetime import date, datetime
from decimal import Decimal
from typing import Dict, Iterable, List, Union
from dateutil.relativedelta import relativedelta

from errors import ValidationError
from models.category import Category
from models.report import (
    Report,
    ReportTotals,
    CategorySlice,
    MonthlyEntry,
    BalancePoint,
    DashboardSummary,
    CURRENT_MONTH,
    LAST_3_MONTHS,
    CURRENT_YEAR,
    ALL_TIME,
    REPORT_PERIODS,
)
from models.transaction import Transaction, INCOME, EXPENSE
from tools.alerts import as_date

MONTHLY_SERIES_LENGTH = 6
BALANCE_SERIES_LENGTH = 30
TOP_CATEGORIES = 5


def filter_by_period(
    transactions: Iterable[Transaction],
    period: str,
    now: Union[date, datetime],
) -> List[Transaction]:
    """Keep the transactions that belong to a reporting period.

    Args:
        transactions: Transactions to filter.
        period: One of 'current-month', 'last-3-months', 'current-year',
            'all-time'.
        now: Reference time for the period.

    Returns:
        Filtered list, original order preserved.

    Raises:
        ValidationError: If the period selector is unknown.
    """
    today = as_date(now)

    if period == CURRENT_MONTH:
        return [
            t
            for t in transactions
            if t.date.year == today.year and t.date.month == today.month
        ]
    if period == LAST_3_MONTHS:
        # First day of the month three months back; no upper bound
        start = today + relativedelta(months=-3, day=1)
        return [t for t in transactions if t.date >= start]
    if period == CURRENT_YEAR:
        return [t for t in transactions if t.date.year == today.year]
    if period == ALL_TIME:
        return list(transactions)

    raise ValidationError(
        f"Unknown report period '{period}'. Expected one of: {', '.join(REPORT_PERIODS)}"
    )


def compute_totals(transactions: Iterable[Transaction]) -> ReportTotals:
    """Sum income and expenses and derive the balance."""
    income_total = Decimal("0")
    expense_total = Decimal("0")

    for transaction in transactions:
        if transaction.type == INCOME:
            income_total += transaction.amount
        elif transaction.type == EXPENSE:
            expense_total += transaction.amount

    return ReportTotals(
        total_income=income_total,
        total_expenses=expense_total,
        balance=income_total - expense_total,
    )


def category_distribution(
    transactions: Iterable[Transaction],
    categories: Iterable[Category],
) -> List[CategorySlice]:
    """Total the expenses of each category.

    Categories with nothing spent are dropped, the rest are sorted by value,
    largest first. Each slice carries its share of all expenses in percent.
    Expenses pointing at a deleted category count towards the share total
    but get no slice of their own.
    """
    expenses_by_category: Dict[str, Decimal] = {}
    expense_total = Decimal("0")

    for transaction in transactions:
        if transaction.type != EXPENSE:
            continue
        expense_total += transaction.amount
        expenses_by_category[transaction.category_id] = (
            expenses_by_category.get(transaction.category_id, Decimal("0"))
            + transaction.amount
        )

    slices = []
    for category in categories:
        value = expenses_by_category.get(category.id, Decimal("0"))
        if value <= 0:
            continue
        slices.append(
            CategorySlice(
                category_id=category.id,
                name=category.name,
                color=category.color,
                icon=category.icon,
                value=value,
                share=_share(value, expense_total),
            )
        )

    return sorted(slices, key=lambda s: s.value, reverse=True)


def monthly_series(
    transactions: Iterable[Transaction],
    length: int = MONTHLY_SERIES_LENGTH,
) -> List[MonthlyEntry]:
    """Group income and expenses by calendar month.

    Returns:
        One entry per month with any transaction, ascending by "YYYY-MM" key,
        keeping only the most recent ``length`` months.

    Example:
        [
            MonthlyEntry(month="2024-01", income=Decimal("1000"), expense=Decimal("350")),
            MonthlyEntry(month="2024-02", income=Decimal("0"), expense=Decimal("80")),
        ]
    """
    months: Dict[str, Dict[str, Decimal]] = {}

    for transaction in transactions:
        month_key = f"{transaction.date.year:04d}-{transaction.date.month:02d}"
        if month_key not in months:
            months[month_key] = {"income": Decimal("0"), "expense": Decimal("0")}

        if transaction.type == INCOME:
            months[month_key]["income"] += transaction.amount
        else:
            months[month_key]["expense"] += transaction.amount

    entries = [
        MonthlyEntry(month=key, income=sums["income"], expense=sums["expense"])
        for key, sums in sorted(months.items())
    ]
    return entries[-length:] if length > 0 else []


def balance_series(
    transactions: Iterable[Transaction],
    length: int = BALANCE_SERIES_LENGTH,
) -> List[BalancePoint]:
    """Track the running balance over time.

    Transactions are replayed in date order (stable for equal dates). Several
    transactions on the same date collapse into one point holding the running
    balance after the last of them.

    Returns:
        Points ascending by date, keeping only the most recent ``length`` dates.
    """
    running_balance = Decimal("0")
    balance_by_date: Dict[date, Decimal] = {}

    for transaction in sorted(transactions, key=lambda t: t.date):
        running_balance += transaction.signed_amount
        balance_by_date[transaction.date] = running_balance

    points = [BalancePoint(date=d, balance=b) for d, b in balance_by_date.items()]
    return points[-length:] if length > 0 else []


def aggregate_report(
    transactions: Iterable[Transaction],
    categories: Iterable[Category],
    period: str,
    now: Union[date, datetime],
) -> Report:
    """Build every report view for one period.

    Args:
        transactions: All transactions of one user.
        categories: All categories of that user.
        period: Period selector, see filter_by_period.
        now: Reference time for the period.

    Returns:
        Report with totals, category distribution, monthly series and
        balance series. An empty period yields zero totals and empty series.

    Raises:
        ValidationError: If the period selector is unknown.
    """
    filtered = filter_by_period(transactions, period, now)

    return Report(
        period=period,
        totals=compute_totals(filtered),
        category_distribution=category_distribution(filtered, categories),
        monthly_series=monthly_series(filtered),
        balance_series=balance_series(filtered),
    )


def top_categories(report: Report, limit: int = TOP_CATEGORIES) -> List[CategorySlice]:
    """Get the categories with the largest expenses in a report."""
    return report.category_distribution[:limit]


def dashboard_summary(
    transactions: Iterable[Transaction],
    now: Union[date, datetime],
    recent: int = 5,
) -> DashboardSummary:
    """Summarize all-time balance, this month's flows and recent activity.

    Args:
        transactions: All transactions of one user.
        now: Reference time for "this month".
        recent: How many of the latest transactions to include.

    Returns:
        DashboardSummary, recent transactions sorted by date, newest first.
    """
    transactions = list(transactions)
    overall = compute_totals(transactions)
    month = compute_totals(filter_by_period(transactions, CURRENT_MONTH, now))
    latest = sorted(transactions, key=lambda t: t.date, reverse=True)

    return DashboardSummary(
        balance=overall.balance,
        month_income=month.total_income,
        month_expenses=month.total_expenses,
        recent_transactions=latest[:recent] if recent > 0 else [],
    )


def _share(value: Decimal, total: Decimal) -> Decimal:
    if total <= 0:
        return Decimal("0")
    return value / total * 100
