#!/usr/bin/env python3

import sys
from datetime import datetime
from errors import CentavoError
from logger import get_logger
from models.goal import GOAL_STATUSES
from services.goals import progress_percentage, days_remaining

logger = get_logger()


def cmd_list(args, services):
    """List goals grouped by status."""
    goals = services.goals.find_all(args.user)

    if not goals:
        logger.info("No goals found.")
        return

    symbol = services.config.currency_symbol
    now = datetime.now()

    for status in GOAL_STATUSES:
        group = [g for g in goals if g.status == status]
        if not group:
            continue

        logger.info(f"\n{status.capitalize()} goals:")
        logger.info("=" * 80)
        for goal in group:
            logger.info(f"{goal.title} (ID: {goal.id})")
            logger.info(
                f"  {symbol} {goal.current_amount} of {symbol} {goal.target_amount} "
                f"({progress_percentage(goal):.0f}%)"
            )
            logger.info(f"  {goal.start_date.isoformat()} -> {goal.end_date.isoformat()}")
            if status == "active":
                logger.info(f"  Days remaining: {days_remaining(goal, now)}")
            logger.info("-" * 80)


def cmd_create(args, services):
    """Create a savings goal."""
    try:
        goal = services.goals.create(
            args.user,
            title=args.title,
            target_amount=args.target,
            end_date=args.end,
            start_date=args.start,
            description=args.description or "",
            current_amount=args.current,
            category_id=args.category,
        )
    except CentavoError as e:
        logger.error(f"Error creating goal: {e}")
        sys.exit(1)

    logger.info(f"✓ Goal created successfully with ID: {goal.id}")


def cmd_edit(args, services):
    """Edit a goal, keeping fields that were not given."""
    goal = services.goals.find(args.user, args.goal_id)
    if not goal:
        logger.error(f"Goal with ID {args.goal_id} not found.")
        sys.exit(1)

    try:
        updated = services.goals.update(
            args.user,
            goal.id,
            title=args.title if args.title is not None else goal.title,
            target_amount=args.target if args.target is not None else goal.target_amount,
            current_amount=(
                args.current if args.current is not None else goal.current_amount
            ),
            start_date=args.start if args.start is not None else goal.start_date,
            end_date=args.end if args.end is not None else goal.end_date,
            description=(
                args.description if args.description is not None else goal.description
            ),
            category_id=args.category if args.category is not None else goal.category_id,
            status=args.status,
        )
    except CentavoError as e:
        logger.error(f"Error updating goal: {e}")
        sys.exit(1)

    logger.info(f"✓ Goal '{updated.title}' updated ({updated.status}).")


def cmd_toggle(args, services):
    """Toggle a goal between active and completed."""
    try:
        goal = services.goals.toggle_status(args.user, args.goal_id)
    except CentavoError as e:
        logger.error(str(e))
        sys.exit(1)

    logger.info(f"✓ Goal '{goal.title}' is now {goal.status}.")


def cmd_cancel(args, services):
    """Cancel a goal."""
    try:
        goal = services.goals.cancel(args.user, args.goal_id)
    except CentavoError as e:
        logger.error(str(e))
        sys.exit(1)

    logger.info(f"✓ Goal '{goal.title}' cancelled.")


def cmd_delete(args, services):
    """Delete a goal by ID."""
    if services.goals.delete(args.user, args.goal_id):
        logger.info(f"✓ Goal {args.goal_id} deleted.")
    else:
        logger.error(f"Goal with ID {args.goal_id} not found.")
        sys.exit(1)


def setup_parser(subparsers):
    """Setup goals subcommand parser.

    Args:
        subparsers: The subparsers object from the main CLI
    """
    parser = subparsers.add_parser(
        "goals",
        help="Manage savings goals",
        description="Create, list, edit, complete, cancel and delete savings goals",
    )

    goals_subparsers = parser.add_subparsers(
        title="subcommands",
        description="Available goal commands",
        dest="subcommand",
        required=True,
    )

    list_parser = goals_subparsers.add_parser("list", help="List goals")
    list_parser.set_defaults(func=cmd_list)

    create_parser = goals_subparsers.add_parser("create", help="Create a goal")
    create_parser.add_argument("title", help="Goal title")
    create_parser.add_argument("target", help="Target amount")
    create_parser.add_argument("end", help="End date as YYYY-MM-DD")
    create_parser.add_argument("--start", help="Start date (default: today)")
    create_parser.add_argument("--current", default="0", help="Amount already saved")
    create_parser.add_argument("--description", help="Free text description")
    create_parser.add_argument("--category", help="Related category ID")
    create_parser.set_defaults(func=cmd_create)

    edit_parser = goals_subparsers.add_parser("edit", help="Edit a goal")
    edit_parser.add_argument("goal_id", help="ID of the goal")
    edit_parser.add_argument("--title", help="New title")
    edit_parser.add_argument("--target", help="New target amount")
    edit_parser.add_argument("--current", help="New amount saved")
    edit_parser.add_argument("--start", help="New start date as YYYY-MM-DD")
    edit_parser.add_argument("--end", help="New end date as YYYY-MM-DD")
    edit_parser.add_argument("--description", help="New description")
    edit_parser.add_argument("--category", help="New related category ID")
    edit_parser.add_argument(
        "--status", choices=GOAL_STATUSES, help="New status (default: unchanged)"
    )
    edit_parser.set_defaults(func=cmd_edit)

    toggle_parser = goals_subparsers.add_parser(
        "toggle", help="Mark a goal completed, or reopen a completed one"
    )
    toggle_parser.add_argument("goal_id", help="ID of the goal")
    toggle_parser.set_defaults(func=cmd_toggle)

    cancel_parser = goals_subparsers.add_parser("cancel", help="Cancel a goal")
    cancel_parser.add_argument("goal_id", help="ID of the goal")
    cancel_parser.set_defaults(func=cmd_cancel)

    delete_parser = goals_subparsers.add_parser("delete", help="Delete a goal")
    delete_parser.add_argument("goal_id", help="ID of the goal")
    delete_parser.set_defaults(func=cmd_delete)
