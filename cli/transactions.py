#!/usr/bin/env python3

import sys
from datetime import date
from errors import CentavoError
from logger import get_logger

logger = get_logger()


def cmd_list(args, services):
    """List transactions, newest first, with optional filters."""
    transactions = services.transactions.search(
        args.user, term=args.search, type=args.type, category_id=args.category
    )

    if not transactions:
        logger.info("No transactions found.")
        return

    categories = {c.id: c for c in services.categories.find_all(args.user)}
    symbol = services.config.currency_symbol

    logger.info("\nTransactions:")
    logger.info("=" * 80)
    for t in transactions:
        category = categories.get(t.category_id)
        category_label = f"{category.icon} {category.name}" if category else "?"
        sign = "+" if t.type == "income" else "-"
        recurring = f" [{t.recurrence_frequency}]" if t.is_recurring else ""
        logger.info(
            f"{t.date.isoformat()}  {sign}{symbol} {t.amount:>10}  "
            f"{t.description:<30} {category_label}{recurring}  (ID: {t.id})"
        )

    income = sum(t.amount for t in transactions if t.type == "income")
    expenses = sum(t.amount for t in transactions if t.type == "expense")
    logger.info("-" * 80)
    logger.info(f"Total transactions: {len(transactions)}")
    logger.info(f"Income: {symbol} {income}")
    logger.info(f"Expenses: {symbol} {expenses}")


def cmd_add(args, services):
    """Record a new transaction."""
    try:
        transaction = services.transactions.create(
            args.user,
            type=args.type,
            description=args.description,
            amount=args.amount,
            date=args.date or date.today(),
            category_id=args.category,
            payment_method=args.payment_method,
            is_recurring=args.recurring is not None,
            recurrence_frequency=args.recurring,
        )
    except CentavoError as e:
        logger.error(f"Error creating transaction: {e}")
        sys.exit(1)

    logger.info(f"✓ Transaction created successfully with ID: {transaction.id}")


def cmd_edit(args, services):
    """Edit a transaction, keeping fields that were not given."""
    transaction = services.transactions.find(args.user, args.transaction_id)
    if not transaction:
        logger.error(f"Transaction with ID {args.transaction_id} not found.")
        sys.exit(1)

    if args.recurring is None:
        is_recurring = transaction.is_recurring
        frequency = transaction.recurrence_frequency
    else:
        is_recurring = args.recurring != "none"
        frequency = args.recurring if is_recurring else None

    try:
        updated = services.transactions.update(
            args.user,
            transaction.id,
            type=args.type if args.type is not None else transaction.type,
            description=(
                args.description
                if args.description is not None
                else transaction.description
            ),
            amount=args.amount if args.amount is not None else transaction.amount,
            date=args.date if args.date is not None else transaction.date,
            category_id=(
                args.category if args.category is not None else transaction.category_id
            ),
            payment_method=(
                args.payment_method
                if args.payment_method is not None
                else transaction.payment_method
            ),
            is_recurring=is_recurring,
            recurrence_frequency=frequency,
        )
    except CentavoError as e:
        logger.error(f"Error updating transaction: {e}")
        sys.exit(1)

    logger.info(f"✓ Transaction {updated.id} updated.")


def cmd_delete(args, services):
    """Delete a transaction by ID."""
    if services.transactions.delete(args.user, args.transaction_id):
        logger.info(f"✓ Transaction {args.transaction_id} deleted.")
    else:
        logger.error(f"Transaction with ID {args.transaction_id} not found.")
        sys.exit(1)


def setup_parser(subparsers):
    """Setup transactions subcommand parser.

    Args:
        subparsers: The subparsers object from the main CLI
    """
    parser = subparsers.add_parser(
        "transactions",
        help="Record and list transactions",
        description="Record, list, edit and delete income and expense transactions",
    )

    transactions_subparsers = parser.add_subparsers(
        title="subcommands",
        description="Available transaction commands",
        dest="subcommand",
        required=True,
    )

    list_parser = transactions_subparsers.add_parser("list", help="List transactions")
    list_parser.add_argument("--search", help="Text to look for in descriptions")
    list_parser.add_argument("--type", choices=["income", "expense"])
    list_parser.add_argument("--category", help="Category ID")
    list_parser.set_defaults(func=cmd_list)

    add_parser = transactions_subparsers.add_parser("add", help="Record a transaction")
    add_parser.add_argument("type", choices=["income", "expense"])
    add_parser.add_argument("amount", help="Positive amount, e.g. 42.50")
    add_parser.add_argument("description", help="What it was for")
    add_parser.add_argument("--category", required=True, help="Category ID")
    add_parser.add_argument("--date", help="Date as YYYY-MM-DD (default: today)")
    add_parser.add_argument("--payment-method", help="e.g. card, cash, pix")
    add_parser.add_argument(
        "--recurring",
        choices=["weekly", "monthly"],
        help="Mark as recurring with this frequency",
    )
    add_parser.set_defaults(func=cmd_add)

    edit_parser = transactions_subparsers.add_parser(
        "edit", help="Edit a transaction"
    )
    edit_parser.add_argument("transaction_id", help="ID of the transaction")
    edit_parser.add_argument("--type", choices=["income", "expense"])
    edit_parser.add_argument("--amount", help="New amount")
    edit_parser.add_argument("--description", help="New description")
    edit_parser.add_argument("--category", help="New category ID")
    edit_parser.add_argument("--date", help="New date as YYYY-MM-DD")
    edit_parser.add_argument("--payment-method", help="New payment method")
    edit_parser.add_argument(
        "--recurring",
        choices=["weekly", "monthly", "none"],
        help="New recurrence frequency, or 'none' to stop recurring",
    )
    edit_parser.set_defaults(func=cmd_edit)

    delete_parser = transactions_subparsers.add_parser(
        "delete", help="Delete a transaction by ID"
    )
    delete_parser.add_argument("transaction_id", help="ID of the transaction")
    delete_parser.set_defaults(func=cmd_delete)
