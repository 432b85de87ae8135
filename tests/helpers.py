"""Helper utilities for tests."""

from datetime import datetime
from pathlib import Path
import sqlite3

from models.category import Category


def run_migrations(conn: sqlite3.Connection, migrations_dir: Path) -> None:
    """Run all SQL migrations in order.

    Args:
        conn: SQLite connection to run migrations against.
        migrations_dir: Path to directory containing .sql migration files.
    """
    for migration_file in sorted(migrations_dir.glob("*.sql")):
        conn.executescript(migration_file.read_text(encoding="utf-8"))
    conn.commit()


def make_category(
    name="Groceries",
    category_type="Expense",
    family_id="family-1",
    is_default=False,
    description=None,
) -> Category:
    """Build an unsaved category with sensible defaults."""
    return Category.new(
        family_id, name, category_type, is_default=is_default, description=description
    )


def stored_category(**overrides) -> Category:
    """Build a category as if it had been loaded from the database."""
    fields = {
        "category_id": "abc123",
        "family_id": "family-1",
        "name": "Groceries",
        "category_type": "Expense",
        "is_default": False,
        "description": "Weekly shop",
        "created_date": datetime(2024, 1, 15, 9, 30),
        "last_modified_date": datetime(2024, 2, 1, 18, 0),
        "is_active": True,
    }
    fields.update(overrides)
    return Category(**fields)
