"""Goal model for savings targets."""

from dataclasses import dataclass
from datetime import date, datetime
from decimal import Decimal
from typing import Optional

ACTIVE = "active"
COMPLETED = "completed"
CANCELLED = "cancelled"
GOAL_STATUSES = (ACTIVE, COMPLETED, CANCELLED)


@dataclass
class Goal:
    """Represents a savings goal.

    Attributes:
        id: Unique identifier.
        user_id: Owner of the goal.
        title: Short name of the goal.
        description: Free text description.
        target_amount: Amount to reach (positive).
        current_amount: Amount saved so far, between 0 and target_amount.
        start_date: First day of the goal.
        end_date: Deadline, after start_date.
        category_id: Optional related category.
        status: 'active', 'completed' or 'cancelled'.
        created_at: Creation timestamp.
    """

    id: str
    user_id: str
    title: str
    description: str
    target_amount: Decimal
    current_amount: Decimal
    start_date: date
    end_date: date
    category_id: Optional[str] = None
    status: str = ACTIVE
    created_at: Optional[datetime] = None

    def to_dict(self) -> dict:
        """Convert goal to dictionary for storage."""
        return {
            "id": self.id,
            "user_id": self.user_id,
            "title": self.title,
            "description": self.description,
            "target_amount": str(self.target_amount),
            "current_amount": str(self.current_amount),
            "start_date": self.start_date.isoformat(),
            "end_date": self.end_date.isoformat(),
            "category_id": self.category_id,
            "status": self.status,
            "created_at": self.created_at.isoformat() if self.created_at else None,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "Goal":
        """Build a Goal from a stored dictionary."""
        created_at = data.get("created_at")
        return cls(
            id=data["id"],
            user_id=data["user_id"],
            title=data["title"],
            description=data.get("description", ""),
            target_amount=Decimal(data["target_amount"]),
            current_amount=Decimal(data["current_amount"]),
            start_date=date.fromisoformat(data["start_date"]),
            end_date=date.fromisoformat(data["end_date"]),
            category_id=data.get("category_id"),
            status=data.get("status", ACTIVE),
            created_at=datetime.fromisoformat(created_at) if created_at else None,
        )
