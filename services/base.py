"""Base services container for dependency injection."""

from typing import Callable, Optional

from config import Config
from db.manager import DatabaseManager


class Services:
    """Container for all application services.

    This class provides a centralized way to access all services and makes
    it easy to inject mock services for testing.

    Args:
        config: Application configuration object.
        db_manager: Optional database manager for testing. If provided, config
            is not used to open the database.
        category_in_use: Optional predicate from the transaction store, passed
            to CategoryService to guard deletions.
    """

    def __init__(
        self,
        config: Config,
        db_manager=None,
        category_in_use: Optional[Callable] = None,
    ):
        self.config = config
        self.db_manager = db_manager or DatabaseManager(config)

        # Lazy import to avoid circular dependencies
        from services.categories import CategoryService

        self.categories = CategoryService(self.db_manager, in_use=category_in_use)
