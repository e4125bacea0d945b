"""Derived alert and limit status models. Never persisted."""

from dataclasses import dataclass
from decimal import Decimal

WARNING = "warning"
DANGER = "danger"
OK = "ok"


@dataclass
class Alert:
    """A spending limit that reached at least 80% in its current period.

    Attributes:
        id: Id of the spending limit that raised the alert.
        category_id: Category the limit applies to.
        category_name: Name of that category.
        category_icon: Icon of that category.
        limit_amount: Configured limit.
        current_amount: Expenses inside the current period window.
        percentage: current_amount / limit_amount * 100.
        period: 'weekly' or 'monthly'.
        severity: 'warning' (80-99%) or 'danger' (100% and above).
    """

    id: str
    category_id: str
    category_name: str
    category_icon: str
    limit_amount: Decimal
    current_amount: Decimal
    percentage: Decimal
    period: str
    severity: str


@dataclass
class LimitStatus:
    """Progress of any spending limit within its current period."""

    limit_id: str
    category_id: str
    category_name: str
    category_icon: str
    limit_amount: Decimal
    current_amount: Decimal
    percentage: Decimal
    period: str
    status: str  # 'ok', 'warning' or 'danger'

    @property
    def remaining(self) -> Decimal:
        """Amount still available; zero once the limit is reached."""
        return max(self.limit_amount - self.current_amount, Decimal("0"))

    @property
    def exceeded_by(self) -> Decimal:
        """Amount spent above the limit; zero while under it."""
        return max(self.current_amount - self.limit_amount, Decimal("0"))
