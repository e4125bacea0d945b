#!/usr/bin/env python3

from datetime import datetime
from logger import get_logger
from models.report import REPORT_PERIODS, CURRENT_MONTH
from tools.alerts import evaluate_alerts
from tools.reports import aggregate_report, top_categories, dashboard_summary

logger = get_logger()


def cmd_alerts(args, services):
    """Show spending limits at 80% or more of their current period."""
    alerts = evaluate_alerts(
        services.limits.find_all(args.user),
        services.transactions.find_all(args.user),
        services.categories.find_all(args.user),
        datetime.now(),
    )

    if not alerts:
        logger.info("No alerts. All spending is within limits.")
        return

    symbol = services.config.currency_symbol
    logger.info("\nAlerts:")
    logger.info("=" * 80)
    for alert in alerts:
        logger.info(
            f"[{alert.severity.upper()}] {alert.category_icon} {alert.category_name}: "
            f"{symbol} {alert.current_amount} of {symbol} {alert.limit_amount} "
            f"({alert.percentage:.0f}%, {alert.period})"
        )


def cmd_report(args, services):
    """Show totals, category distribution and series for a period."""
    report = aggregate_report(
        services.transactions.find_all(args.user),
        services.categories.find_all(args.user),
        args.period,
        datetime.now(),
    )
    symbol = services.config.currency_symbol
    totals = report.totals

    logger.info(f"\nReport: {report.period}")
    logger.info("=" * 80)
    logger.info(f"Income:   {symbol} {totals.total_income}")
    logger.info(f"Expenses: {symbol} {totals.total_expenses}")
    logger.info(f"Balance:  {symbol} {totals.balance}")

    if not report.category_distribution:
        logger.info("\nNo expenses in this period.")
    else:
        logger.info("\nTop categories:")
        for index, slice_ in enumerate(top_categories(report), start=1):
            logger.info(
                f"  {index}. {slice_.icon} {slice_.name:<24} {symbol} {slice_.value:>10} "
                f"({slice_.share:.1f}% of expenses)"
            )

    if report.monthly_series:
        logger.info("\nMonthly comparison:")
        for entry in report.monthly_series:
            logger.info(
                f"  {entry.month}  income {symbol} {entry.income:>10}  "
                f"expenses {symbol} {entry.expense:>10}"
            )

    if report.balance_series:
        logger.info("\nBalance evolution:")
        for point in report.balance_series:
            logger.info(f"  {point.date.isoformat()}  {symbol} {point.balance:>10}")


def cmd_dashboard(args, services):
    """Show balance, this month's flows, recent transactions and alerts."""
    now = datetime.now()
    transactions = services.transactions.find_all(args.user)
    summary = dashboard_summary(transactions, now)
    categories = {c.id: c for c in services.categories.find_all(args.user)}
    symbol = services.config.currency_symbol

    logger.info("\nDashboard")
    logger.info("=" * 80)
    logger.info(f"Balance:            {symbol} {summary.balance}")
    logger.info(f"Income this month:  {symbol} {summary.month_income}")
    logger.info(f"Expenses this month: {symbol} {summary.month_expenses}")

    logger.info("\nRecent transactions:")
    if not summary.recent_transactions:
        logger.info("  None yet.")
    for t in summary.recent_transactions:
        category = categories.get(t.category_id)
        icon = category.icon if category else "?"
        sign = "+" if t.type == "income" else "-"
        logger.info(f"  {t.date.isoformat()}  {icon} {t.description:<30} {sign}{symbol} {t.amount}")

    cmd_alerts(args, services)


def setup_parser(subparsers):
    """Setup alerts, reports and dashboard command parsers.

    Args:
        subparsers: The subparsers object from the main CLI
    """
    alerts_parser = subparsers.add_parser(
        "alerts",
        help="Show spending limit alerts",
        description="Show limits that reached 80% or more in their current period",
    )
    alerts_subparsers = alerts_parser.add_subparsers(
        title="subcommands", dest="subcommand", required=True
    )
    list_parser = alerts_subparsers.add_parser("list", help="List active alerts")
    list_parser.set_defaults(func=cmd_alerts)

    reports_parser = subparsers.add_parser(
        "reports",
        help="Show period reports",
        description="Show totals, category distribution and trends for a period",
    )
    reports_subparsers = reports_parser.add_subparsers(
        title="subcommands", dest="subcommand", required=True
    )
    show_parser = reports_subparsers.add_parser("show", help="Show a report")
    show_parser.add_argument(
        "--period", choices=REPORT_PERIODS, default=CURRENT_MONTH
    )
    show_parser.set_defaults(func=cmd_report)

    dashboard_parser = subparsers.add_parser(
        "dashboard",
        help="Show the dashboard summary",
        description="Show balance, monthly flows, recent transactions and alerts",
    )
    dashboard_subparsers = dashboard_parser.add_subparsers(
        title="subcommands", dest="subcommand", required=True
    )
    summary_parser = dashboard_subparsers.add_parser("show", help="Show the dashboard")
    summary_parser.set_defaults(func=cmd_dashboard)
