#!/usr/bin/env python3

import sys
from datetime import datetime
from errors import CentavoError
from logger import get_logger
from tools.alerts import limit_statuses

logger = get_logger()


def cmd_list(args, services):
    """List spending limits with their progress in the current period."""
    limits = services.limits.find_all(args.user)

    if not limits:
        logger.info("No spending limits found.")
        return

    statuses = limit_statuses(
        limits,
        services.transactions.find_all(args.user),
        services.categories.find_all(args.user),
        datetime.now(),
    )
    symbol = services.config.currency_symbol

    logger.info("\nSpending limits:")
    logger.info("=" * 80)
    for status in statuses:
        logger.info(
            f"{status.category_icon} {status.category_name} ({status.period}) "
            f"(ID: {status.limit_id})"
        )
        logger.info(
            f"  {symbol} {status.current_amount} of {symbol} {status.limit_amount} "
            f"({status.percentage:.0f}%) [{status.status.upper()}]"
        )
        if status.exceeded_by > 0:
            logger.info(f"  Exceeded by: {symbol} {status.exceeded_by}")
        else:
            logger.info(f"  Available: {symbol} {status.remaining}")
        logger.info("-" * 80)

    skipped = len(limits) - len(statuses)
    if skipped:
        logger.warning(f"{skipped} limit(s) point at deleted categories and were skipped.")


def cmd_create(args, services):
    """Create a spending limit."""
    try:
        limit = services.limits.create(
            args.user, args.category_id, args.amount, args.period
        )
    except CentavoError as e:
        logger.error(f"Error creating spending limit: {e}")
        sys.exit(1)

    logger.info(f"✓ Spending limit created successfully with ID: {limit.id}")


def cmd_edit(args, services):
    """Edit a spending limit, keeping fields that were not given."""
    limit = services.limits.find(args.user, args.limit_id)
    if not limit:
        logger.error(f"Spending limit with ID {args.limit_id} not found.")
        sys.exit(1)

    try:
        updated = services.limits.update(
            args.user,
            limit.id,
            args.category if args.category is not None else limit.category_id,
            args.amount if args.amount is not None else limit.limit_amount,
            args.period if args.period is not None else limit.period,
        )
    except CentavoError as e:
        logger.error(f"Error updating spending limit: {e}")
        sys.exit(1)

    logger.info(f"✓ Spending limit {updated.id} updated.")


def cmd_delete(args, services):
    """Delete a spending limit by ID."""
    if services.limits.delete(args.user, args.limit_id):
        logger.info(f"✓ Spending limit {args.limit_id} deleted.")
    else:
        logger.error(f"Spending limit with ID {args.limit_id} not found.")
        sys.exit(1)


def setup_parser(subparsers):
    """Setup limits subcommand parser.

    Args:
        subparsers: The subparsers object from the main CLI
    """
    parser = subparsers.add_parser(
        "limits",
        help="Manage spending limits",
        description="Create, list, edit and delete per-category spending limits",
    )

    limits_subparsers = parser.add_subparsers(
        title="subcommands",
        description="Available limit commands",
        dest="subcommand",
        required=True,
    )

    list_parser = limits_subparsers.add_parser("list", help="List spending limits")
    list_parser.set_defaults(func=cmd_list)

    create_parser = limits_subparsers.add_parser("create", help="Create a limit")
    create_parser.add_argument("category_id", help="Category ID")
    create_parser.add_argument("amount", help="Limit amount")
    create_parser.add_argument(
        "--period", choices=["weekly", "monthly"], default="monthly"
    )
    create_parser.set_defaults(func=cmd_create)

    edit_parser = limits_subparsers.add_parser("edit", help="Edit a limit")
    edit_parser.add_argument("limit_id", help="ID of the limit")
    edit_parser.add_argument("--category", help="New category ID")
    edit_parser.add_argument("--amount", help="New limit amount")
    edit_parser.add_argument("--period", choices=["weekly", "monthly"])
    edit_parser.set_defaults(func=cmd_edit)

    delete_parser = limits_subparsers.add_parser("delete", help="Delete a limit")
    delete_parser.add_argument("limit_id", help="ID of the limit")
    delete_parser.set_defaults(func=cmd_delete)
