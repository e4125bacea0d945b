#!/usr/bin/env python3
"""
Centavo CLI - Personal finance tracking from the command line.

Usage:
    python -m cli [--user USER] <command> <subcommand> [options]

Commands:
    categories   Manage categories
    transactions Record and list income and expenses
    goals        Manage savings goals
    limits       Manage spending limits
    alerts       Show spending limit alerts
    reports      Show period reports
    dashboard    Show the dashboard summary
    migrate      Database migrations

Examples:
    python -m cli migrate apply
    python -m cli categories list
    python -m cli transactions add expense 42.50 "Groceries" --category 1
    python -m cli transactions edit 1718000000000 --amount 44.90
    python -m cli limits create 1 500 --period monthly
    python -m cli alerts list
    python -m cli reports show --period last-3-months
"""

import sys
import argparse
from cli import categories, transactions, goals, limits, reports, migrate
from config import load_config
from services.base import Services
from db.manager import DatabaseManager
from logger import setup_logging


def main():
    """Main CLI entry point with subcommands."""
    parser = argparse.ArgumentParser(
        prog="cli",
        description="Centavo - Personal finance tracking",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "--user",
        help="User whose data to work with (defaults to default_user from the config)",
    )

    subparsers = parser.add_subparsers(
        title="commands",
        description="Available commands",
        dest="command",
        required=True,
    )

    categories.setup_parser(subparsers)
    transactions.setup_parser(subparsers)
    goals.setup_parser(subparsers)
    limits.setup_parser(subparsers)
    reports.setup_parser(subparsers)
    migrate.setup_parser(subparsers)

    args = parser.parse_args()

    if hasattr(args, "func"):
        try:
            config = load_config()
            setup_logging(config)

            if args.command == "migrate":
                # Migrate commands need db_manager for raw database operations
                db_manager = DatabaseManager(config)
                args.func(args, db_manager)
            else:
                if not args.user:
                    args.user = config.default_user
                services = Services(config)
                args.func(args, services)
        except Exception as e:
            print(f"Error: {e}")
            sys.exit(1)
    else:
        parser.print_help()
        sys.exit(1)


if __name__ == "__main__":
    main()
