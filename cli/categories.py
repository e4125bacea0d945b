#!/usr/bin/env python3

import sys
from errors import CentavoError
from logger import get_logger

logger = get_logger()


def cmd_list(args, services):
    """List all categories of the user."""
    categories = services.categories.find_all(args.user)

    if not categories:
        logger.info("No categories found.")
        return

    logger.info("\nCategories:")
    logger.info("=" * 80)
    for category in categories:
        kind = "default" if category.is_default else "custom"
        logger.info(
            f"{category.id:>14}  {category.icon} {category.name:<24} {category.color}  ({kind})"
        )

    logger.info(f"\nTotal categories: {len(categories)}")


def cmd_create(args, services):
    """Create a custom category."""
    try:
        category = services.categories.create(
            args.user, args.name, args.color, args.icon
        )
    except CentavoError as e:
        logger.error(f"Error creating category: {e}")
        sys.exit(1)

    logger.info(f"\n✓ Category created successfully with ID: {category.id}")
    logger.info(f"  Name: {category.icon} {category.name}")
    logger.info(f"  Color: {category.color}")


def cmd_update(args, services):
    """Update an existing category, keeping fields that were not given."""
    category = services.categories.find(args.user, args.category_id)
    if not category:
        logger.error(f"Category with ID {args.category_id} not found.")
        sys.exit(1)

    try:
        updated = services.categories.update(
            args.user,
            category.id,
            args.name if args.name is not None else category.name,
            args.color if args.color is not None else category.color,
            args.icon if args.icon is not None else category.icon,
        )
    except CentavoError as e:
        logger.error(f"Error updating category: {e}")
        sys.exit(1)

    logger.info(f"✓ Category '{updated.name}' updated.")


def cmd_delete(args, services):
    """Delete a category by ID."""
    category = services.categories.find(args.user, args.category_id)
    if not category:
        logger.error(f"Category with ID {args.category_id} not found.")
        sys.exit(1)

    if not args.yes:
        confirm = (
            input(f"\nDelete category '{category.name}'? (yes/no): ").strip().lower()
        )
        if confirm != "yes":
            logger.info("Deletion cancelled.")
            return

    try:
        if services.categories.delete(args.user, category.id):
            logger.info(f"✓ Category '{category.name}' deleted successfully.")
        else:
            logger.error("Failed to delete category.")
            sys.exit(1)
    except CentavoError as e:
        logger.error(f"Error deleting category: {e}")
        sys.exit(1)


def cmd_seed(args, services):
    """Seed the default categories for the user."""
    if services.categories.initialize(args.user):
        logger.info(f"✓ Default categories created for '{args.user}'.")
    else:
        logger.info(f"⊘ Skipped: '{args.user}' already has categories.")


def setup_parser(subparsers):
    """Setup categories subcommand parser.

    Args:
        subparsers: The subparsers object from the main CLI
    """
    parser = subparsers.add_parser(
        "categories",
        help="Manage categories",
        description="Create, list, update and delete transaction categories",
    )

    categories_subparsers = parser.add_subparsers(
        title="subcommands",
        description="Available category commands",
        dest="subcommand",
        required=True,
    )

    list_parser = categories_subparsers.add_parser("list", help="List all categories")
    list_parser.set_defaults(func=cmd_list)

    create_parser = categories_subparsers.add_parser(
        "create", help="Create a custom category"
    )
    create_parser.add_argument("name", help="Category name")
    create_parser.add_argument("--color", default="#6b7280", help="Hex color")
    create_parser.add_argument("--icon", default="📦", help="Icon glyph")
    create_parser.set_defaults(func=cmd_create)

    update_parser = categories_subparsers.add_parser(
        "update", help="Update a category"
    )
    update_parser.add_argument("category_id", help="ID of the category to update")
    update_parser.add_argument("--name", help="New name")
    update_parser.add_argument("--color", help="New hex color")
    update_parser.add_argument("--icon", help="New icon glyph")
    update_parser.set_defaults(func=cmd_update)

    delete_parser = categories_subparsers.add_parser(
        "delete", help="Delete a category by ID"
    )
    delete_parser.add_argument("category_id", help="ID of the category to delete")
    delete_parser.add_argument(
        "-y", "--yes", action="store_true", help="Do not ask for confirmation"
    )
    delete_parser.set_defaults(func=cmd_delete)

    seed_parser = categories_subparsers.add_parser(
        "seed", help="Create the default categories"
    )
    seed_parser.set_defaults(func=cmd_seed)
