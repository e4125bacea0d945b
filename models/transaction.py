from dataclasses import dataclass
from datetime import date, datetime
from decimal import Decimal
from typing import Optional

INCOME = "income"
EXPENSE = "expense"
TRANSACTION_TYPES = (INCOME, EXPENSE)

RECURRENCE_FREQUENCIES = ("weekly", "monthly")


@dataclass
class Transaction:
    id: str
    user_id: str
    type: str  # 'income' or 'expense'
    description: str
    amount: Decimal  # always positive
    date: date
    category_id: str
    payment_method: Optional[str] = None  # free text, expenses by convention
    is_recurring: bool = False
    recurrence_frequency: Optional[str] = None  # 'weekly' or 'monthly', label only
    created_at: Optional[datetime] = None

    @property
    def signed_amount(self) -> Decimal:
        """Amount with the sign applied: positive for income, negative for expense."""
        return self.amount if self.type == INCOME else -self.amount

    def to_dict(self) -> dict:
        """Convert transaction to dictionary for storage."""
        return {
            "id": self.id,
            "user_id": self.user_id,
            "type": self.type,
            "description": self.description,
            "amount": str(self.amount),
            "date": self.date.isoformat(),
            "category_id": self.category_id,
            "payment_method": self.payment_method,
            "is_recurring": self.is_recurring,
            "recurrence_frequency": self.recurrence_frequency,
            "created_at": self.created_at.isoformat() if self.created_at else None,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "Transaction":
        """Build a Transaction from a stored dictionary."""
        created_at = data.get("created_at")
        return cls(
            id=data["id"],
            user_id=data["user_id"],
            type=data["type"],
            description=data["description"],
            amount=Decimal(data["amount"]),
            date=date.fromisoformat(data["date"]),
            category_id=data["category_id"],
            payment_method=data.get("payment_method"),
            is_recurring=bool(data.get("is_recurring", False)),
            recurrence_frequency=data.get("recurrence_frequency"),
            created_at=datetime.fromisoformat(created_at) if created_at else None,
        )
