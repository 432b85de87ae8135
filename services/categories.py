"""Category service for database operations."""

import uuid
from datetime import datetime
from typing import Callable, List, Optional

from models.category import Category, CategoryType
from services.defaults import (
    DEFAULT_CATALOG_FILE,
    DefaultCatalog,
    load_default_catalog,
)
from logger import get_logger

logger = get_logger()

CATEGORY_COLUMNS = (
    "id, family_id, name, category_type, is_default, description, "
    "created_date, last_modified_date, is_active"
)


class CategoryService:
    """Service for storing and loading categories.

    Args:
        db_manager: Database manager instance for database operations.
        in_use: Optional predicate reporting whether transactions still
            reference a category. Used to refuse deletion of such categories.
    """

    def __init__(
        self,
        db_manager,
        in_use: Optional[Callable[[Category], bool]] = None,
    ):
        self.db_manager = db_manager
        self.in_use = in_use

    def find_all(
        self, family_id: str, include_inactive: bool = False
    ) -> List[Category]:
        """Get all categories of a family.

        Args:
            family_id: The owning family.
            include_inactive: Also return soft-deleted categories.

        Returns:
            List of Category objects, expenses first, then by name.
        """
        query = f"SELECT {CATEGORY_COLUMNS} FROM categories WHERE family_id = ?"
        if not include_inactive:
            query += " AND is_active = 1"
        query += " ORDER BY category_type, name"

        with self.db_manager.connect() as conn:
            cursor = conn.execute(query, (family_id,))
            return [self._row_to_category(row) for row in cursor.fetchall()]

    def find(self, category_id: str) -> Optional[Category]:
        """Get a single category by ID.

        Args:
            category_id: The category ID to find.

        Returns:
            Category object if found, None otherwise.
        """
        logger.debug(f"Looking up category {category_id}")
        with self.db_manager.connect() as conn:
            cursor = conn.execute(
                f"SELECT {CATEGORY_COLUMNS} FROM categories WHERE id = ?",
                (category_id,),
            )
            row = cursor.fetchone()
            return self._row_to_category(row) if row else None

    def find_by_name(self, family_id: str, name: str) -> Optional[Category]:
        """Get a family's category by exact (case-sensitive) name.

        Returns:
            Category object if found, None otherwise.
        """
        with self.db_manager.connect() as conn:
            cursor = conn.execute(
                f"SELECT {CATEGORY_COLUMNS} FROM categories "
                "WHERE family_id = ? AND name = ? ORDER BY category_type",
                (family_id, name),
            )
            row = cursor.fetchone()
            return self._row_to_category(row) if row else None

    def find_by_type(
        self, family_id: str, category_type, include_inactive: bool = False
    ) -> List[Category]:
        """Get a family's expense or income categories.

        Args:
            family_id: The owning family.
            category_type: "Expense" or "Income" in any case, or a CategoryType.
            include_inactive: Also return soft-deleted categories.

        Returns:
            List of Category objects ordered by name.

        Raises:
            ValueError: If category_type is not a known type.
        """
        kind = CategoryType.parse(category_type)
        if kind is None:
            raise ValueError(f"Unknown category type: {category_type}")

        query = (
            f"SELECT {CATEGORY_COLUMNS} FROM categories "
            "WHERE family_id = ? AND category_type = ?"
        )
        if not include_inactive:
            query += " AND is_active = 1"
        query += " ORDER BY name"

        with self.db_manager.connect() as conn:
            cursor = conn.execute(query, (family_id, kind.value))
            return [self._row_to_category(row) for row in cursor.fetchall()]

    def create(self, category: Category) -> Category:
        """Save a new category.

        Args:
            category: An unsaved category (category_id is None).

        Returns:
            The stored Category with category_id populated.

        Raises:
            ValueError: If the category already has an ID or fails validation.
            sqlite3.IntegrityError: If the family already has a category with
                the same name and type.
        """
        if category.category_id is not None:
            raise ValueError(
                f"Category already has ID {category.category_id}, use update()"
            )
        self._validate(category)

        stored = category.update(
            category_id=uuid.uuid4().hex,
            name=category.name.strip(),
            category_type=category.kind.value,
        )

        with self.db_manager.connect() as conn:
            conn.execute(
                f"INSERT INTO categories ({CATEGORY_COLUMNS}) "
                "VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?)",
                self._category_to_row(stored),
            )
            conn.commit()

        logger.info(f"Created category '{stored.name}' ({stored.category_id})")
        return stored

    def update(self, category: Category) -> Category:
        """Write all mutable fields of an existing category.

        created_date is never rewritten.

        Returns:
            The stored Category.

        Raises:
            ValueError: If the category has no ID or fails validation.
            Exception: If category not found.
        """
        if category.category_id is None:
            raise ValueError("Category has no ID, use create()")
        self._validate(category)

        stored = category.update(
            name=category.name.strip(),
            category_type=category.kind.value,
            last_modified_date=category.last_modified_date,
        )

        with self.db_manager.connect() as conn:
            cursor = conn.execute(
                "UPDATE categories SET family_id = ?, name = ?, category_type = ?, "
                "is_default = ?, description = ?, last_modified_date = ?, "
                "is_active = ? WHERE id = ?",
                (
                    stored.family_id,
                    stored.name,
                    stored.category_type,
                    int(stored.is_default),
                    stored.description,
                    stored.last_modified_date.isoformat(),
                    int(stored.is_active),
                    stored.category_id,
                ),
            )
            conn.commit()

            if cursor.rowcount == 0:
                raise Exception(f"Category with ID {category.category_id} not found")

        logger.info(f"Updated category '{stored.name}' ({stored.category_id})")
        return stored

    def delete(self, category_id: str) -> bool:
        """Delete a category by ID.

        Args:
            category_id: The category ID to delete.

        Returns:
            True if category was deleted, False if not found.

        Raises:
            ValueError: If the category is a default or is still in use.
        """
        category = self.find(category_id)
        if category is None:
            return False

        if not category.can_be_deleted(self.in_use):
            if category.is_default:
                raise ValueError(
                    f"Default category '{category.name}' cannot be deleted"
                )
            raise ValueError(
                f"Category '{category.name}' is used by transactions and cannot be deleted"
            )

        with self.db_manager.connect() as conn:
            cursor = conn.execute("DELETE FROM categories WHERE id = ?", (category_id,))
            conn.commit()
            deleted = cursor.rowcount > 0

        if deleted:
            logger.info(f"Deleted category '{category.name}' ({category_id})")
        return deleted

    def deactivate(self, category_id: str) -> Category:
        """Soft-delete a category.

        Raises:
            Exception: If category not found.
        """
        category = self._get(category_id)
        return self.update(category.deactivate())

    def activate(self, category_id: str) -> Category:
        """Restore a soft-deleted category.

        Raises:
            Exception: If category not found.
        """
        category = self._get(category_id)
        return self.update(category.activate())

    def seed_defaults(
        self, family_id: str, catalog: Optional[DefaultCatalog] = None
    ) -> List[Category]:
        """Create the default categories a family is missing.

        Existing categories (same name and type, active or not) are left as
        they are, so seeding twice is harmless.

        Args:
            family_id: The family to seed.
            catalog: Catalog to seed from. Defaults to the catalog file in the
                database manager's seed directory.

        Returns:
            The newly created categories.
        """
        if catalog is None:
            catalog = load_default_catalog(
                self.db_manager.get_seed_dir() / DEFAULT_CATALOG_FILE
            )

        existing = {
            (c.name, c.category_type)
            for c in self.find_all(family_id, include_inactive=True)
        }

        created = []
        for entry in catalog.categories:
            if (entry.name, entry.type.value) in existing:
                logger.debug(f"Default category '{entry.name}' already exists")
                continue

            category = Category.new(
                family_id,
                entry.name,
                entry.type,
                is_default=True,
                description=entry.description,
            )
            created.append(self.create(category))

        logger.info(
            f"Seeded {len(created)} default categories for family {family_id}"
        )
        return created

    def _get(self, category_id: str) -> Category:
        category = self.find(category_id)
        if category is None:
            raise Exception(f"Category with ID {category_id} not found")
        return category

    def _validate(self, category: Category) -> None:
        if not category.family_id:
            raise ValueError("Category must belong to a family")
        if not category.has_valid_name():
            raise ValueError(
                f"Invalid category name {category.name!r}: "
                "must be 1-50 characters after trimming"
            )
        if not category.has_valid_type():
            raise ValueError(
                f"Invalid category type {category.category_type!r}: "
                "must be Expense or Income"
            )

    def _category_to_row(self, category: Category) -> tuple:
        return (
            category.category_id,
            category.family_id,
            category.name,
            category.category_type,
            int(category.is_default),
            category.description,
            category.created_date.isoformat(),
            category.last_modified_date.isoformat(),
            int(category.is_active),
        )

    def _row_to_category(self, row: tuple) -> Category:
        return Category(
            category_id=row[0],
            family_id=row[1],
            name=row[2],
            category_type=row[3],
            is_default=bool(row[4]),
            description=row[5],
            created_date=datetime.fromisoformat(row[6]),
            last_modified_date=datetime.fromisoformat(row[7]),
            is_active=bool(row[8]),
        )
