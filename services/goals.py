"""Goal service for savings targets."""

import math
from datetime import date, datetime
from decimal import Decimal
from typing import List, Optional, Union

from db.store import GOALS
from errors import NotFoundError, ValidationError
from logger import get_logger
from models.goal import Goal, GOAL_STATUSES, ACTIVE, COMPLETED, CANCELLED
from services.validation import (
    parse_amount,
    parse_date,
    require_text,
    require_choice,
)

logger = get_logger()


def progress_percentage(goal: Goal) -> Decimal:
    """Get how far a goal is, in percent, capped at 100."""
    return min(goal.current_amount / goal.target_amount * 100, Decimal("100"))


def days_remaining(goal: Goal, now: Union[date, datetime]) -> int:
    """Get the number of days until the goal's end date.

    Counts from ``now`` to the start of the end date and rounds up, so any
    time left on the day before the deadline counts as one day. Negative once
    the deadline passed.
    """
    if not isinstance(now, datetime):
        now = datetime.combine(now, datetime.min.time())
    end = datetime.combine(goal.end_date, datetime.min.time())
    return math.ceil((end - now).total_seconds() / 86400)


class GoalService:
    """Service for managing savings goals."""

    def __init__(self, store, categories):
        """Initialize the goal service.

        Args:
            store: EntityStore instance holding the documents.
            categories: CategoryService used to check category references.
        """
        self.store = store
        self.categories = categories

    def find_all(self, user_id: str) -> List[Goal]:
        """Get all goals of a user, in the order they were created."""
        return [Goal.from_dict(data) for data in self.store.list(user_id, GOALS)]

    def find(self, user_id: str, goal_id: str) -> Optional[Goal]:
        """Get a single goal by ID.

        Returns:
            Goal object if found, None otherwise.
        """
        data = self.store.get(user_id, GOALS, goal_id)
        return Goal.from_dict(data) if data else None

    def find_by_status(self, user_id: str, status: str) -> List[Goal]:
        """Get the goals of a user with the given status."""
        return [g for g in self.find_all(user_id) if g.status == status]

    def create(
        self,
        user_id: str,
        title: str,
        target_amount,
        end_date,
        start_date=None,
        description: str = "",
        current_amount=0,
        category_id: Optional[str] = None,
    ) -> Goal:
        """Create a new active goal.

        Args:
            user_id: Owner of the goal.
            title: Goal title.
            target_amount: Amount to reach (positive).
            end_date: Deadline, after start_date.
            start_date: Defaults to today.
            description: Optional free text.
            current_amount: Amount already saved, between 0 and target_amount.
            category_id: Optional related category.

        Returns:
            The created Goal object.

        Raises:
            ValidationError: If any field is invalid.
        """
        goal = self._build(
            user_id,
            self.store.next_id(user_id, GOALS),
            title,
            description,
            target_amount,
            current_amount,
            start_date if start_date is not None else date.today(),
            end_date,
            category_id,
            ACTIVE,
            created_at=datetime.now(),
        )
        self.store.upsert(user_id, GOALS, goal.to_dict())
        logger.info(f"Created goal '{goal.title}' (ID: {goal.id})")
        return goal

    def update(
        self,
        user_id: str,
        goal_id: str,
        title: str,
        target_amount,
        current_amount,
        start_date,
        end_date,
        description: str = "",
        category_id: Optional[str] = None,
        status: Optional[str] = None,
    ) -> Goal:
        """Replace the fields of an existing goal.

        The goal keeps its current status unless a new one is given.

        Raises:
            NotFoundError: If the goal does not exist.
            ValidationError: If any field is invalid.
        """
        existing = self.find(user_id, goal_id)
        if existing is None:
            raise NotFoundError(f"Goal with ID {goal_id} not found")

        goal = self._build(
            user_id,
            goal_id,
            title,
            description,
            target_amount,
            current_amount,
            start_date,
            end_date,
            category_id,
            status if status is not None else existing.status,
            created_at=existing.created_at,
        )
        self.store.upsert(user_id, GOALS, goal.to_dict())
        logger.info(f"Updated goal '{goal.title}' (ID: {goal.id})")
        return goal

    def toggle_status(self, user_id: str, goal_id: str) -> Goal:
        """Flip a goal between completed and active.

        Anything that is not completed becomes completed, and completing a
        goal fills its current amount up to the target. Amounts are not
        re-validated here.

        Raises:
            NotFoundError: If the goal does not exist.
        """
        goal = self.find(user_id, goal_id)
        if goal is None:
            raise NotFoundError(f"Goal with ID {goal_id} not found")

        if goal.status == COMPLETED:
            goal.status = ACTIVE
        else:
            goal.status = COMPLETED
            goal.current_amount = goal.target_amount

        self.store.upsert(user_id, GOALS, goal.to_dict())
        logger.info(f"Goal {goal_id} is now {goal.status}")
        return goal

    def cancel(self, user_id: str, goal_id: str) -> Goal:
        """Mark a goal as cancelled.

        Raises:
            NotFoundError: If the goal does not exist.
        """
        goal = self.find(user_id, goal_id)
        if goal is None:
            raise NotFoundError(f"Goal with ID {goal_id} not found")

        goal.status = CANCELLED
        self.store.upsert(user_id, GOALS, goal.to_dict())
        logger.info(f"Cancelled goal {goal_id}")
        return goal

    def delete(self, user_id: str, goal_id: str) -> bool:
        """Delete a goal by ID.

        Returns:
            True if the goal was deleted, False if not found.
        """
        deleted = self.store.delete(user_id, GOALS, goal_id)
        if deleted:
            logger.info(f"Deleted goal {goal_id}")
        return deleted

    def _build(
        self,
        user_id,
        goal_id,
        title,
        description,
        target_amount,
        current_amount,
        start_date,
        end_date,
        category_id,
        status,
        created_at,
    ) -> Goal:
        title = require_text(title, "Title")
        target_amount = parse_amount(target_amount, "Target amount")
        current_amount = parse_amount(
            current_amount, "Current amount", allow_zero=True
        )
        if current_amount > target_amount:
            raise ValidationError("Current amount cannot exceed the target amount")

        start_date = parse_date(start_date, "Start date")
        if end_date is None or end_date == "":
            raise ValidationError("End date is required")
        end_date = parse_date(end_date, "End date")
        if end_date <= start_date:
            raise ValidationError("End date must be after the start date")

        if category_id and self.categories.find(user_id, category_id) is None:
            raise ValidationError(f"Category with ID {category_id} not found")

        require_choice(status, GOAL_STATUSES, "Goal status")

        return Goal(
            id=goal_id,
            user_id=user_id,
            title=title,
            description=(description or "").strip(),
            target_amount=target_amount,
            current_amount=current_amount,
            start_date=start_date,
            end_date=end_date,
            category_id=category_id or None,
            status=status,
            created_at=created_at,
        )
