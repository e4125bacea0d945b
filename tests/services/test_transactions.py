import pytest
from datetime import date
from decimal import Decimal

from errors import NotFoundError, ValidationError


def _create(services, user, **overrides):
    fields = {
        "type": "expense",
        "description": "Groceries",
        "amount": "42.50",
        "date": date(2024, 6, 10),
        "category_id": "1",
    }
    fields.update(overrides)
    return services.transactions.create(user, **fields)


class TestTransactionService:
    """Tests for TransactionService."""

    def test_create_transaction(self, services, user):
        """Test creating a single transaction."""
        transaction = _create(services, user, payment_method="  card ")

        assert transaction.id
        assert transaction.user_id == user
        assert transaction.amount == Decimal("42.50")
        assert transaction.payment_method == "card"
        assert transaction.created_at is not None

        found = services.transactions.find(user, transaction.id)
        assert found == transaction

    def test_create_accepts_iso_date_string(self, services, user):
        """Test that dates may be given as YYYY-MM-DD strings."""
        transaction = _create(services, user, date="2024-02-29")

        assert transaction.date == date(2024, 2, 29)

    def test_create_with_recurrence(self, services, user):
        """Test creating a recurring transaction."""
        transaction = _create(
            services, user, is_recurring=True, recurrence_frequency="monthly"
        )

        assert transaction.is_recurring is True
        assert transaction.recurrence_frequency == "monthly"

    def test_frequency_dropped_when_not_recurring(self, services, user):
        """Test that a frequency without the recurring flag is discarded."""
        transaction = _create(services, user, recurrence_frequency="weekly")

        assert transaction.recurrence_frequency is None

    def test_recurring_without_frequency_raises(self, services, user):
        """Test that recurring transactions need a frequency."""
        with pytest.raises(ValidationError, match="frequency"):
            _create(services, user, is_recurring=True)

    def test_invalid_frequency_raises(self, services, user):
        """Test that only weekly and monthly recurrence is accepted."""
        with pytest.raises(ValidationError, match="Recurrence frequency"):
            _create(services, user, is_recurring=True, recurrence_frequency="daily")

    @pytest.mark.parametrize("amount", ["0", "-5", "abc", "NaN"])
    def test_invalid_amount_raises(self, services, user, amount):
        """Test that amounts must be positive numbers."""
        with pytest.raises(ValidationError):
            _create(services, user, amount=amount)

    def test_blank_description_raises(self, services, user):
        """Test that a description is required."""
        with pytest.raises(ValidationError, match="Description is required"):
            _create(services, user, description="  ")

    def test_unknown_category_raises(self, services, user):
        """Test that transactions must point at an existing category."""
        with pytest.raises(ValidationError, match="Category with ID 999 not found"):
            _create(services, user, category_id="999")

    def test_invalid_type_raises(self, services, user):
        """Test that only income and expense are valid types."""
        with pytest.raises(ValidationError, match="Transaction type"):
            _create(services, user, type="transfer")

    def test_invalid_date_raises(self, services, user):
        """Test that malformed dates are rejected."""
        with pytest.raises(ValidationError, match="YYYY-MM-DD"):
            _create(services, user, date="10/06/2024")

    def test_find_all_in_creation_order(self, services, user):
        """Test that find_all keeps insertion order, not date order."""
        first = _create(services, user, date=date(2024, 6, 20))
        second = _create(services, user, date=date(2024, 6, 1))

        ids = [t.id for t in services.transactions.find_all(user)]

        assert ids == [first.id, second.id]

    def test_update_transaction(self, services, user):
        """Test editing a transaction keeps its id and creation time."""
        original = _create(services, user)

        updated = services.transactions.update(
            user,
            original.id,
            type="income",
            description="Refund",
            amount="10",
            date=date(2024, 6, 11),
            category_id="8",
        )

        assert updated.id == original.id
        assert updated.created_at == original.created_at
        assert services.transactions.find(user, original.id).description == "Refund"
        assert len(services.transactions.find_all(user)) == 1

    def test_update_missing_raises(self, services, user):
        """Test that updating an unknown transaction raises NotFoundError."""
        with pytest.raises(NotFoundError):
            services.transactions.update(
                user,
                "missing",
                type="expense",
                description="X",
                amount="1",
                date=date(2024, 6, 1),
                category_id="1",
            )

    def test_delete_transaction(self, services, user):
        """Test deleting a transaction."""
        transaction = _create(services, user)

        assert services.transactions.delete(user, transaction.id) is True
        assert services.transactions.find(user, transaction.id) is None
        assert services.transactions.delete(user, transaction.id) is False

    def test_search_filters_and_sorts(self, services, user):
        """Test searching by text, type and category, newest first."""
        _create(services, user, description="Supermarket", date=date(2024, 6, 1))
        _create(services, user, description="SUPERMARKET extra", date=date(2024, 6, 5))
        _create(services, user, description="Bus", category_id="2")
        _create(services, user, type="income", description="Salary", category_id="7")

        by_term = services.transactions.search(user, term="supermarket")
        assert [t.description for t in by_term] == ["SUPERMARKET extra", "Supermarket"]

        by_type = services.transactions.search(user, type="income")
        assert [t.description for t in by_type] == ["Salary"]

        by_category = services.transactions.search(user, category_id="2")
        assert [t.description for t in by_category] == ["Bus"]

    def test_search_without_filters_returns_everything(self, services, user):
        """Test that an empty search lists all transactions."""
        _create(services, user)
        _create(services, user)

        assert len(services.transactions.search(user)) == 2
