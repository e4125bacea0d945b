"""Transaction service for recording income and expenses."""

from datetime import datetime
from typing import List, Optional

from db.store import TRANSACTIONS
from errors import NotFoundError, ValidationError
from logger import get_logger
from models.transaction import (
    Transaction,
    TRANSACTION_TYPES,
    RECURRENCE_FREQUENCIES,
)
from services.validation import (
    parse_amount,
    parse_date,
    require_text,
    optional_text,
    require_choice,
)

logger = get_logger()


class TransactionService:
    """Service for managing transactions."""

    def __init__(self, store, categories):
        """Initialize the transaction service.

        Args:
            store: EntityStore instance holding the documents.
            categories: CategoryService used to check category references.
        """
        self.store = store
        self.categories = categories

    def find_all(self, user_id: str) -> List[Transaction]:
        """Get all transactions of a user, in the order they were created."""
        return [
            Transaction.from_dict(data)
            for data in self.store.list(user_id, TRANSACTIONS)
        ]

    def find(self, user_id: str, transaction_id: str) -> Optional[Transaction]:
        """Get a single transaction by ID.

        Returns:
            Transaction object if found, None otherwise.
        """
        data = self.store.get(user_id, TRANSACTIONS, transaction_id)
        return Transaction.from_dict(data) if data else None

    def search(
        self,
        user_id: str,
        term: Optional[str] = None,
        type: Optional[str] = None,
        category_id: Optional[str] = None,
    ) -> List[Transaction]:
        """Filter transactions the way the transaction list does.

        Args:
            user_id: Owner of the transactions.
            term: Case-insensitive substring of the description.
            type: 'income' or 'expense'; None for both.
            category_id: Only this category; None for all.

        Returns:
            Matching transactions, newest date first.
        """
        transactions = self.find_all(user_id)

        if term:
            needle = term.lower()
            transactions = [t for t in transactions if needle in t.description.lower()]
        if type:
            transactions = [t for t in transactions if t.type == type]
        if category_id:
            transactions = [t for t in transactions if t.category_id == category_id]

        return sorted(transactions, key=lambda t: t.date, reverse=True)

    def create(
        self,
        user_id: str,
        type: str,
        description: str,
        amount,
        date,
        category_id: str,
        payment_method: Optional[str] = None,
        is_recurring: bool = False,
        recurrence_frequency: Optional[str] = None,
    ) -> Transaction:
        """Record a new transaction.

        Args:
            user_id: Owner of the transaction.
            type: 'income' or 'expense'.
            description: What the transaction was for.
            amount: Positive amount.
            date: Calendar date (date or "YYYY-MM-DD").
            category_id: Existing category ID.
            payment_method: Optional free text.
            is_recurring: Whether the transaction repeats. Descriptive only.
            recurrence_frequency: 'weekly' or 'monthly', required when recurring.

        Returns:
            The created Transaction object.

        Raises:
            ValidationError: If any field is invalid or the category is unknown.
        """
        transaction = self._build(
            user_id,
            self.store.next_id(user_id, TRANSACTIONS),
            type,
            description,
            amount,
            date,
            category_id,
            payment_method,
            is_recurring,
            recurrence_frequency,
            created_at=datetime.now(),
        )
        self.store.upsert(user_id, TRANSACTIONS, transaction.to_dict())
        logger.info(
            f"Created {transaction.type} '{transaction.description}' "
            f"of {transaction.amount} (ID: {transaction.id})"
        )
        return transaction

    def update(
        self,
        user_id: str,
        transaction_id: str,
        type: str,
        description: str,
        amount,
        date,
        category_id: str,
        payment_method: Optional[str] = None,
        is_recurring: bool = False,
        recurrence_frequency: Optional[str] = None,
    ) -> Transaction:
        """Replace the fields of an existing transaction.

        Returns:
            The updated Transaction object, creation timestamp preserved.

        Raises:
            NotFoundError: If the transaction does not exist.
            ValidationError: If any field is invalid.
        """
        existing = self.find(user_id, transaction_id)
        if existing is None:
            raise NotFoundError(f"Transaction with ID {transaction_id} not found")

        transaction = self._build(
            user_id,
            transaction_id,
            type,
            description,
            amount,
            date,
            category_id,
            payment_method,
            is_recurring,
            recurrence_frequency,
            created_at=existing.created_at,
        )
        self.store.upsert(user_id, TRANSACTIONS, transaction.to_dict())
        logger.info(f"Updated transaction {transaction_id}")
        return transaction

    def delete(self, user_id: str, transaction_id: str) -> bool:
        """Delete a transaction by ID.

        Returns:
            True if the transaction was deleted, False if not found.
        """
        deleted = self.store.delete(user_id, TRANSACTIONS, transaction_id)
        if deleted:
            logger.info(f"Deleted transaction {transaction_id}")
        return deleted

    def _build(
        self,
        user_id,
        transaction_id,
        type,
        description,
        amount,
        date,
        category_id,
        payment_method,
        is_recurring,
        recurrence_frequency,
        created_at,
    ) -> Transaction:
        require_choice(type, TRANSACTION_TYPES, "Transaction type")
        description = require_text(description, "Description")
        amount = parse_amount(amount)
        date = parse_date(date)

        if not category_id:
            raise ValidationError("Category is required")
        if self.categories.find(user_id, category_id) is None:
            raise ValidationError(f"Category with ID {category_id} not found")

        if is_recurring:
            if not recurrence_frequency:
                raise ValidationError("Recurring transactions need a frequency")
            require_choice(
                recurrence_frequency, RECURRENCE_FREQUENCIES, "Recurrence frequency"
            )
        else:
            recurrence_frequency = None

        return Transaction(
            id=transaction_id,
            user_id=user_id,
            type=type,
            description=description,
            amount=amount,
            date=date,
            category_id=category_id,
            payment_method=optional_text(payment_method),
            is_recurring=bool(is_recurring),
            recurrence_frequency=recurrence_frequency,
            created_at=created_at,
        )
