"""Spending-limit alert evaluation.

Everything here is a pure function of the entities it is given and an
explicit ``now``. Callers re-fetch entities after a mutation and evaluate
again; nothing is cached.
"""

from datetime import date, datetime, timedelta
from decimal import Decimal
from typing import Iterable, List, Tuple, Union

from models.alert import Alert, LimitStatus, WARNING, DANGER, OK
from models.category import Category
from models.spending_limit import SpendingLimit, MONTHLY
from models.transaction import Transaction, EXPENSE
from logger import get_logger

logger = get_logger()

WARNING_THRESHOLD = Decimal("80")
DANGER_THRESHOLD = Decimal("100")


def as_date(now: Union[date, datetime]) -> date:
    """Reduce a datetime to its calendar date; dates pass through."""
    if isinstance(now, datetime):
        return now.date()
    return now


def period_window(period: str, now: Union[date, datetime]) -> Tuple[date, date]:
    """Get the inclusive date window of a limit period anchored at now.

    Args:
        period: 'monthly' or 'weekly'.
        now: Evaluation time.

    Returns:
        (start, end) tuple. Monthly runs from the first day of now's month,
        weekly is the trailing 7 days (not aligned to calendar weeks).
    """
    today = as_date(now)
    if period == MONTHLY:
        return today.replace(day=1), today
    return today - timedelta(days=7), today


def period_spending(
    transactions: Iterable[Transaction],
    category_id: str,
    start: date,
    end: date,
) -> Decimal:
    """Sum the expenses of a category dated within [start, end]."""
    return sum(
        (
            t.amount
            for t in transactions
            if t.type == EXPENSE
            and t.category_id == category_id
            and start <= t.date <= end
        ),
        Decimal("0"),
    )


def classify(percentage: Decimal) -> str:
    """Map a spend percentage to 'ok', 'warning' or 'danger'."""
    if percentage >= DANGER_THRESHOLD:
        return DANGER
    if percentage >= WARNING_THRESHOLD:
        return WARNING
    return OK


def limit_statuses(
    limits: Iterable[SpendingLimit],
    transactions: Iterable[Transaction],
    categories: Iterable[Category],
    now: Union[date, datetime],
) -> List[LimitStatus]:
    """Compute current-period progress for every limit, in input order.

    Limits whose category no longer exists are skipped.
    """
    transactions = list(transactions)
    categories_by_id = {c.id: c for c in categories}
    statuses = []

    for limit in limits:
        category = categories_by_id.get(limit.category_id)
        if category is None:
            logger.debug(
                f"Skipping limit {limit.id}: category {limit.category_id} not found"
            )
            continue

        start, end = period_window(limit.period, now)
        current = period_spending(transactions, limit.category_id, start, end)
        percentage = current / limit.limit_amount * 100

        statuses.append(
            LimitStatus(
                limit_id=limit.id,
                category_id=limit.category_id,
                category_name=category.name,
                category_icon=category.icon,
                limit_amount=limit.limit_amount,
                current_amount=current,
                percentage=percentage,
                period=limit.period,
                status=classify(percentage),
            )
        )

    return statuses


def evaluate_alerts(
    limits: Iterable[SpendingLimit],
    transactions: Iterable[Transaction],
    categories: Iterable[Category],
    now: Union[date, datetime],
) -> List[Alert]:
    """Get the limits whose current-period spend reached 80% or more.

    Args:
        limits: All spending limits of one user.
        transactions: All transactions of that user.
        categories: All categories of that user.
        now: Evaluation time; anchors the period windows.

    Returns:
        List of Alert objects sorted by percentage, highest first. Ties keep
        the order of the limits.
    """
    alerts = [
        Alert(
            id=status.limit_id,
            category_id=status.category_id,
            category_name=status.category_name,
            category_icon=status.category_icon,
            limit_amount=status.limit_amount,
            current_amount=status.current_amount,
            percentage=status.percentage,
            period=status.period,
            severity=status.status,
        )
        for status in limit_statuses(limits, transactions, categories, now)
        if status.status != OK
    ]

    return sorted(alerts, key=lambda alert: alert.percentage, reverse=True)
