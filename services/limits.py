"""Spending limit service."""

from datetime import datetime
from typing import List, Optional

from db.store import LIMITS
from errors import NotFoundError, ValidationError
from logger import get_logger
from models.spending_limit import SpendingLimit, LIMIT_PERIODS
from services.validation import parse_amount, require_choice

logger = get_logger()


class SpendingLimitService:
    """Service for managing per-category spending limits."""

    def __init__(self, store, categories):
        """Initialize the spending limit service.

        Args:
            store: EntityStore instance holding the documents.
            categories: CategoryService used to check category references.
        """
        self.store = store
        self.categories = categories

    def find_all(self, user_id: str) -> List[SpendingLimit]:
        """Get all spending limits of a user, in the order they were created."""
        return [
            SpendingLimit.from_dict(data) for data in self.store.list(user_id, LIMITS)
        ]

    def find(self, user_id: str, limit_id: str) -> Optional[SpendingLimit]:
        """Get a single spending limit by ID.

        Returns:
            SpendingLimit object if found, None otherwise.
        """
        data = self.store.get(user_id, LIMITS, limit_id)
        return SpendingLimit.from_dict(data) if data else None

    def create(
        self, user_id: str, category_id: str, limit_amount, period: str
    ) -> SpendingLimit:
        """Create a spending limit for a category.

        Args:
            user_id: Owner of the limit.
            category_id: Existing category ID.
            limit_amount: Positive amount.
            period: 'weekly' or 'monthly'.

        Returns:
            The created SpendingLimit object.

        Raises:
            ValidationError: If a field is invalid, the category is unknown, or
                the category already has a limit for this period.
        """
        limit = self._build(
            user_id,
            self.store.next_id(user_id, LIMITS),
            category_id,
            limit_amount,
            period,
            created_at=datetime.now(),
        )
        self.store.upsert(user_id, LIMITS, limit.to_dict())
        logger.info(
            f"Created {limit.period} limit of {limit.limit_amount} "
            f"for category {limit.category_id} (ID: {limit.id})"
        )
        return limit

    def update(
        self, user_id: str, limit_id: str, category_id: str, limit_amount, period: str
    ) -> SpendingLimit:
        """Replace the fields of an existing spending limit.

        Raises:
            NotFoundError: If the limit does not exist.
            ValidationError: If any field is invalid.
        """
        existing = self.find(user_id, limit_id)
        if existing is None:
            raise NotFoundError(f"Spending limit with ID {limit_id} not found")

        limit = self._build(
            user_id,
            limit_id,
            category_id,
            limit_amount,
            period,
            created_at=existing.created_at,
        )
        self.store.upsert(user_id, LIMITS, limit.to_dict())
        logger.info(f"Updated spending limit {limit_id}")
        return limit

    def delete(self, user_id: str, limit_id: str) -> bool:
        """Delete a spending limit by ID.

        Returns:
            True if the limit was deleted, False if not found.
        """
        deleted = self.store.delete(user_id, LIMITS, limit_id)
        if deleted:
            logger.info(f"Deleted spending limit {limit_id}")
        return deleted

    def _build(
        self, user_id, limit_id, category_id, limit_amount, period, created_at
    ) -> SpendingLimit:
        if not category_id:
            raise ValidationError("Category is required")
        if self.categories.find(user_id, category_id) is None:
            raise ValidationError(f"Category with ID {category_id} not found")

        limit_amount = parse_amount(limit_amount, "Limit amount")
        require_choice(period, LIMIT_PERIODS, "Period")

        for other in self.find_all(user_id):
            if (
                other.id != limit_id
                and other.category_id == category_id
                and other.period == period
            ):
                raise ValidationError(
                    f"Category {category_id} already has a {period} limit (ID: {other.id})"
                )

        return SpendingLimit(
            id=limit_id,
            user_id=user_id,
            category_id=category_id,
            limit_amount=limit_amount,
            period=period,
            created_at=created_at,
        )
