"""Shared pytest fixtures for all tests."""

import sqlite3
import pytest
from pathlib import Path

from config import Config, get_migrations_dir, get_seed_dir
from services.base import Services
from tests.helpers import run_migrations


@pytest.fixture
def test_db():
    """Create an in-memory SQLite database for testing.

    Yields:
        sqlite3.Connection: Connection to in-memory database.
    """
    conn = sqlite3.connect(":memory:")
    yield conn
    conn.close()


@pytest.fixture
def test_config(tmp_path):
    """Create a test configuration pointing to a temporary database.

    Args:
        tmp_path: pytest tmp_path fixture for temporary directory.

    Returns:
        Config: Test configuration object.
    """
    return Config(
        base_dir=tmp_path / "famney",
        db_data_dir=tmp_path / "famney" / "db",
        db_filename="test.db",
        log_level="DEBUG",
        log_dir=tmp_path / "famney" / "logs",
        default_family_id="family-1",
    )


class _TestConnectionContext:
    """Context manager that hands out a shared connection without closing it."""

    def __init__(self, conn):
        self.conn = conn

    def __enter__(self):
        return self.conn

    def __exit__(self, exc_type, exc_val, exc_tb):
        # The fixture owns the connection
        pass


class TestDatabaseManager:
    """Database manager backed by a single in-memory connection."""

    def __init__(self, conn):
        self.conn = conn

    def connect(self):
        return _TestConnectionContext(self.conn)

    def get_db_path(self):
        return Path(":memory:")

    def get_migrations_dir(self):
        return get_migrations_dir()

    def get_seed_dir(self):
        return get_seed_dir()


@pytest.fixture
def db_manager_with_schema(test_db):
    """Create a DatabaseManager with schema already set up.

    Args:
        test_db: In-memory database connection fixture.

    Returns:
        TestDatabaseManager: Database manager with schema ready.
    """
    run_migrations(test_db, get_migrations_dir())
    return TestDatabaseManager(test_db)


@pytest.fixture
def services(test_config, db_manager_with_schema):
    """Create a Services container with test database.

    Args:
        test_config: Test configuration fixture.
        db_manager_with_schema: Database manager with schema set up.

    Returns:
        Services: Services container for testing.
    """
    return Services(test_config, db_manager=db_manager_with_schema)


@pytest.fixture
def used_category_ids():
    """IDs the fake transaction store reports as in use."""
    return set()


@pytest.fixture
def services_with_usage(test_config, db_manager_with_schema, used_category_ids):
    """Services whose category deletions are checked against used_category_ids."""
    return Services(
        test_config,
        db_manager=db_manager_with_schema,
        category_in_use=lambda category: category.category_id in used_category_ids,
    )
