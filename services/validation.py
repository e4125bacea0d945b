"""Input checks shared by the entity services."""

from datetime import date, datetime
from decimal import Decimal, InvalidOperation
from typing import Iterable, Optional

from errors import ValidationError


def parse_amount(value, field: str = "Amount", allow_zero: bool = False) -> Decimal:
    """Convert a user supplied amount to a Decimal and check its sign.

    Args:
        value: Decimal, int, float or numeric string.
        field: Name used in the error message.
        allow_zero: Accept zero (for amounts that may be empty, like a goal's
            current amount).

    Returns:
        The amount as a Decimal.

    Raises:
        ValidationError: If the value is not a number or has the wrong sign.
    """
    try:
        amount = Decimal(str(value).strip())
    except (InvalidOperation, ValueError):
        raise ValidationError(f"{field} must be a number, got '{value}'")

    if not amount.is_finite():
        raise ValidationError(f"{field} must be a number, got '{value}'")
    if allow_zero and amount < 0:
        raise ValidationError(f"{field} must be zero or greater")
    if not allow_zero and amount <= 0:
        raise ValidationError(f"{field} must be greater than zero")
    return amount


def require_text(value: Optional[str], field: str) -> str:
    """Trim a required text field, rejecting blank values."""
    text = (value or "").strip()
    if not text:
        raise ValidationError(f"{field} is required")
    return text


def optional_text(value: Optional[str]) -> Optional[str]:
    """Trim an optional text field, turning blank values into None."""
    text = (value or "").strip()
    return text or None


def require_choice(value: str, choices: Iterable[str], field: str) -> str:
    """Check that value is one of the allowed choices."""
    choices = tuple(choices)
    if value not in choices:
        raise ValidationError(
            f"{field} must be one of: {', '.join(choices)} (got '{value}')"
        )
    return value


def parse_date(value, field: str = "Date") -> date:
    """Accept a date or an ISO formatted string (YYYY-MM-DD)."""
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    try:
        return date.fromisoformat(str(value).strip())
    except ValueError:
        raise ValidationError(f"{field} must be a date in YYYY-MM-DD format, got '{value}'")
