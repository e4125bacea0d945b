"""Helper utilities for tests."""

from datetime import date, datetime
from decimal import Decimal
from pathlib import Path
import sqlite3

from cli.migrate import apply_pending
from models.category import Category
from models.spending_limit import SpendingLimit
from models.transaction import Transaction


def run_migrations(conn: sqlite3.Connection, migrations_dir: Path) -> None:
    """Run all SQL migrations in order.

    Args:
        conn: SQLite connection to run migrations against.
        migrations_dir: Path to directory containing .sql migration files.
    """
    apply_pending(conn, migrations_dir)


def make_category(category_id="food", name="Food", icon="🍔", color="#ef4444"):
    """Build a Category without touching the database."""
    return Category(id=category_id, name=name, color=color, icon=icon)


def make_transaction(
    amount,
    on: date,
    type="expense",
    category_id="food",
    transaction_id=None,
    description="Test",
):
    """Build a Transaction without touching the database."""
    return Transaction(
        id=transaction_id or f"{type}-{on.isoformat()}-{amount}",
        user_id="test-user",
        type=type,
        description=description,
        amount=Decimal(str(amount)),
        date=on,
        category_id=category_id,
        created_at=datetime(2024, 1, 1),
    )


def make_limit(limit_id="limit-1", category_id="food", amount=100, period="monthly"):
    """Build a SpendingLimit without touching the database."""
    return SpendingLimit(
        id=limit_id,
        user_id="test-user",
        category_id=category_id,
        limit_amount=Decimal(str(amount)),
        period=period,
    )
