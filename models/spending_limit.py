from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from typing import Optional

WEEKLY = "weekly"
MONTHLY = "monthly"
LIMIT_PERIODS = (WEEKLY, MONTHLY)


@dataclass
class SpendingLimit:
    id: str
    user_id: str
    category_id: str
    limit_amount: Decimal  # always positive
    period: str  # 'weekly' (trailing 7 days) or 'monthly' (calendar month to date)
    created_at: Optional[datetime] = None

    def to_dict(self) -> dict:
        """Convert spending limit to dictionary for storage."""
        return {
            "id": self.id,
            "user_id": self.user_id,
            "category_id": self.category_id,
            "limit_amount": str(self.limit_amount),
            "period": self.period,
            "created_at": self.created_at.isoformat() if self.created_at else None,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "SpendingLimit":
        """Build a SpendingLimit from a stored dictionary."""
        created_at = data.get("created_at")
        return cls(
            id=data["id"],
            user_id=data["user_id"],
            category_id=data["category_id"],
            limit_amount=Decimal(data["limit_amount"]),
            period=data["period"],
            created_at=datetime.fromisoformat(created_at) if created_at else None,
        )
