#!/usr/bin/env python3

import sys
from models.category import Category, CategoryType
from logger import get_logger

logger = get_logger()


def _resolve_family_id(args, services) -> str:
    """Use --family-id, falling back to the configured default family."""
    family_id = getattr(args, "family_id", None) or services.config.default_family_id
    if not family_id:
        logger.error(
            "No family given. Pass --family-id or set [family] default_id "
            "in ~/.config/famney.toml."
        )
        sys.exit(1)
    return family_id


def _find_or_exit(services, category_id) -> Category:
    category = services.categories.find(category_id)
    if not category:
        logger.error(f"Category with ID {category_id} not found.")
        sys.exit(1)
    return category


def _log_summary(category: Category):
    status = "active" if category.is_active else "inactive"
    flags = ", default" if category.is_default else ""
    logger.info(f"{category.icon} {category.display_name}")
    logger.info(f"  {category.category_type_display} ({status}{flags})")
    logger.info(f"  ID: {category.category_id}")
    if category.description:
        logger.info(f"  Description: {category.description}")


def cmd_list(args, services):
    """List a family's categories."""
    family_id = _resolve_family_id(args, services)

    if args.type:
        try:
            categories = services.categories.find_by_type(
                family_id, args.type, include_inactive=args.all
            )
        except ValueError as e:
            logger.error(str(e))
            sys.exit(1)
    else:
        categories = services.categories.find_all(family_id, include_inactive=args.all)

    if not categories:
        logger.info("No categories found.")
        return

    logger.info(f"\nCategories for family {family_id}:")
    logger.info("=" * 80)
    for category in categories:
        _log_summary(category)
        logger.info("-" * 80)

    logger.info(f"\nTotal categories: {len(categories)}")


def cmd_show(args, services):
    """Show every detail of one category."""
    category = _find_or_exit(services, args.category_id)

    _log_summary(category)
    logger.info(f"  Family: {category.family_id}")
    logger.info(f"  Created: {category.created_date.isoformat(timespec='seconds')}")
    logger.info(
        f"  Last modified: {category.last_modified_date.isoformat(timespec='seconds')}"
    )
    if not category.has_valid_name():
        logger.warning("  Name is not valid (1-50 characters expected)")
    if not category.has_valid_type():
        logger.warning(f"  Type '{category.category_type}' is not Expense or Income")
    if not category.can_be_deleted(services.categories.in_use):
        logger.info("  Protected: cannot be deleted")


def cmd_create(args, services):
    """Interactively create a new category."""
    family_id = _resolve_family_id(args, services)

    print("\nCreate New Category")
    print("=" * 80)

    name = input("Category name (e.g., Groceries): ").strip()
    type_input = input("Type (Expense/Income): ").strip()
    description = input("Description (optional, press Enter to skip): ").strip()

    category = Category.new(family_id, name, type_input, description=description or None)

    if not category.has_valid_name():
        logger.error("Category name must be between 1 and 50 characters.")
        sys.exit(1)
    if not category.has_valid_type():
        choices = "/".join(t.value for t in CategoryType)
        logger.error(f"Category type must be one of {choices}.")
        sys.exit(1)

    try:
        category = services.categories.create(category)
    except Exception as e:
        logger.error(f"Error creating category: {e}")
        sys.exit(1)

    logger.info(f"\n✓ Category created successfully with ID: {category.category_id}")
    _log_summary(category)


def cmd_delete(args, services):
    """Delete a category by ID."""
    category = _find_or_exit(services, args.category_id)

    if not category.can_be_deleted(services.categories.in_use):
        if category.is_default:
            logger.error(
                f"'{category.name}' is a default category and cannot be deleted. "
                "Use 'categories deactivate' to hide it."
            )
        else:
            logger.error(f"'{category.name}' is in use and cannot be deleted.")
        sys.exit(1)

    logger.info("\nCategory to delete:")
    _log_summary(category)

    if not args.yes:
        confirm = (
            input("\nAre you sure you want to delete this category? (yes/no): ")
            .strip()
            .lower()
        )
        if confirm != "yes":
            logger.info("Deletion cancelled.")
            return

    try:
        if services.categories.delete(category.category_id):
            logger.info(f"✓ Category '{category.name}' deleted successfully.")
        else:
            logger.error("Failed to delete category.")
            sys.exit(1)
    except Exception as e:
        logger.error(f"Error deleting category: {e}")
        sys.exit(1)


def cmd_deactivate(args, services):
    """Soft-delete a category."""
    category = _find_or_exit(services, args.category_id)
    if not category.is_active:
        logger.info(f"Category '{category.name}' is already inactive.")
        return

    services.categories.deactivate(category.category_id)
    logger.info(f"✓ Category '{category.name}' deactivated.")


def cmd_activate(args, services):
    """Restore a soft-deleted category."""
    category = _find_or_exit(services, args.category_id)
    if category.is_active:
        logger.info(f"Category '{category.name}' is already active.")
        return

    services.categories.activate(category.category_id)
    logger.info(f"✓ Category '{category.name}' activated.")


def cmd_seed(args, services):
    """Seed the default categories for a family."""
    family_id = _resolve_family_id(args, services)

    logger.info(f"\nSeeding default categories for family {family_id}")
    logger.info("=" * 80)

    try:
        created = services.categories.seed_defaults(family_id)
    except Exception as e:
        logger.error(f"Error seeding categories: {e}")
        sys.exit(1)

    for category in created:
        logger.info(f"✓ Created {category.display_name} (ID: {category.category_id})")

    logger.info("=" * 80)
    logger.info(f"Created: {len(created)}")


def setup_parser(subparsers):
    """Setup categories subcommand parser.

    Args:
        subparsers: The subparsers object from the main CLI
    """
    parser = subparsers.add_parser(
        "categories",
        help="Manage categories",
        description="Create, list, and delete income and expense categories",
    )

    categories_subparsers = parser.add_subparsers(
        title="subcommands",
        description="Available category commands",
        dest="subcommand",
        required=True,
    )

    def add_family_argument(subparser):
        subparser.add_argument(
            "--family-id",
            help="Family to operate on (defaults to [family] default_id in config)",
        )

    # categories list
    list_parser = categories_subparsers.add_parser(
        "list", help="List a family's categories"
    )
    add_family_argument(list_parser)
    list_parser.add_argument(
        "--all", action="store_true", help="Include inactive categories"
    )
    list_parser.add_argument(
        "--type", help="Only list Expense or Income categories"
    )
    list_parser.set_defaults(func=cmd_list)

    # categories show
    show_parser = categories_subparsers.add_parser(
        "show", help="Show a category in detail"
    )
    show_parser.add_argument("category_id", help="ID of the category")
    show_parser.set_defaults(func=cmd_show)

    # categories create
    create_parser = categories_subparsers.add_parser(
        "create", help="Create a new category interactively"
    )
    add_family_argument(create_parser)
    create_parser.set_defaults(func=cmd_create)

    # categories delete
    delete_parser = categories_subparsers.add_parser(
        "delete", help="Delete a category by ID"
    )
    delete_parser.add_argument("category_id", help="ID of the category to delete")
    delete_parser.add_argument(
        "-y", "--yes", action="store_true", help="Skip the confirmation prompt"
    )
    delete_parser.set_defaults(func=cmd_delete)

    # categories deactivate / activate
    deactivate_parser = categories_subparsers.add_parser(
        "deactivate", help="Hide a category without deleting it"
    )
    deactivate_parser.add_argument("category_id", help="ID of the category")
    deactivate_parser.set_defaults(func=cmd_deactivate)

    activate_parser = categories_subparsers.add_parser(
        "activate", help="Restore a deactivated category"
    )
    activate_parser.add_argument("category_id", help="ID of the category")
    activate_parser.set_defaults(func=cmd_activate)

    # categories seed
    seed_parser = categories_subparsers.add_parser(
        "seed", help="Create the default categories for a family"
    )
    add_family_argument(seed_parser)
    seed_parser.set_defaults(func=cmd_seed)
