#!/usr/bin/env python3
"""
Famney CLI - command-line interface for managing family budget categories.

Usage:
    python -m cli <command> <subcommand> [options]

Commands:
    categories   Manage income and expense categories
    migrate      Database migrations

Examples:
    python -m cli migrate apply
    python -m cli categories seed --family-id smith
    python -m cli categories list --family-id smith --type expense
    python -m cli categories deactivate <category-id>
"""

import sys
import argparse
from cli import categories, migrate
from config import load_config
from services.base import Services
from db.manager import DatabaseManager
from logger import setup_logging


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="famney",
        description="Famney - Family budget category management",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )

    subparsers = parser.add_subparsers(
        title="commands",
        description="Available commands",
        dest="command",
        required=True,
    )

    categories.setup_parser(subparsers)
    migrate.setup_parser(subparsers)

    return parser


def main():
    """Main CLI entry point with subcommands."""
    args = build_parser().parse_args()

    if not hasattr(args, "func"):
        build_parser().print_help()
        sys.exit(1)

    try:
        config = load_config()
        setup_logging(config)

        # migrate works on raw connections, everything else through services
        if args.command == "migrate":
            args.func(args, DatabaseManager(config))
        else:
            args.func(args, Services(config))
    except Exception as e:
        print(f"Error: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
