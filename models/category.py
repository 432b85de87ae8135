"""Category model for classifying family income and expenses."""

from dataclasses import dataclass, field, replace
from datetime import datetime
from enum import Enum
from typing import Callable, Optional

MAX_NAME_LENGTH = 50

EXPENSE_GLYPH = "💳"
INCOME_GLYPH = "💰"
NOTE_GLYPH = "📝"

# Checked in order, first group with a keyword in the name wins.
ICON_GROUPS = (
    # Expense
    (("food", "grocery", "restaurant"), "🍕"),
    (("transport", "car", "gas"), "🚗"),
    (("utilities", "electricity", "water"), "⚡"),
    (("entertainment", "movie", "game"), "🎮"),
    (("healthcare", "medical", "doctor"), "🏥"),
    (("shopping", "clothes", "fashion"), "🛍️"),
    (("education", "school", "book"), "📚"),
    # Income
    (("salary", "job", "work"), "💼"),
    (("freelance", "contract", "gig"), "🖥️"),
    (("allowance", "pocket"), "💝"),
    (("investment", "dividend", "stock"), "📈"),
    (("gift", "bonus"), "🎁"),
)


class CategoryType(str, Enum):
    """Kind of money flow a category classifies."""

    EXPENSE = "Expense"
    INCOME = "Income"

    @classmethod
    def parse(cls, value) -> Optional["CategoryType"]:
        """Case-insensitive lookup.

        Args:
            value: A CategoryType, a string such as "expense", or None.

        Returns:
            The matching CategoryType, or None if the value is not recognized.
        """
        if isinstance(value, cls):
            return value
        if not isinstance(value, str):
            return None
        lowered = value.lower()
        for member in cls:
            if member.value.lower() == lowered:
                return member
        return None


def is_valid_category_name(name: Optional[str]) -> bool:
    """Check that a name is non-blank and at most MAX_NAME_LENGTH once trimmed."""
    if name is None:
        return False
    trimmed = name.strip()
    return 0 < len(trimmed) <= MAX_NAME_LENGTH


def type_glyph_for(category_type) -> str:
    if CategoryType.parse(category_type) is CategoryType.EXPENSE:
        return EXPENSE_GLYPH
    return INCOME_GLYPH


def icon_for(name: Optional[str], category_type) -> str:
    """Pick an icon for a category name by keyword.

    Args:
        name: Category name, may be None.
        category_type: Used for the fallback glyph when no keyword matches.

    Returns:
        The icon of the first matching keyword group, NOTE_GLYPH for an unset
        name, or the expense/income glyph otherwise.
    """
    if name is None:
        return NOTE_GLYPH

    lowered = name.lower()
    for keywords, icon in ICON_GROUPS:
        if any(keyword in lowered for keyword in keywords):
            return icon

    return type_glyph_for(category_type)


@dataclass(frozen=True, repr=False)
class Category:
    """A family's income or expense category.

    Instances are immutable; use update() to get a modified copy with a
    refreshed last_modified_date.

    Attributes:
        category_id: Opaque identifier, None until first saved.
        family_id: Identifier of the owning household.
        name: Human-readable label.
        category_type: "Expense" or "Income" (any case). Other values are
            stored as given and reported by has_valid_type().
        is_default: System-provided category that cannot be deleted.
        description: Optional free text.
        created_date: Set once at construction.
        last_modified_date: Refreshed by update(). Defaults to created_date.
        is_active: Soft-delete flag.
    """

    category_id: Optional[str] = None
    family_id: Optional[str] = None
    name: Optional[str] = None
    category_type: Optional[str] = None
    is_default: bool = False
    description: Optional[str] = None
    created_date: datetime = field(default_factory=datetime.now)
    last_modified_date: Optional[datetime] = None
    is_active: bool = True

    def __post_init__(self):
        if isinstance(self.category_type, CategoryType):
            object.__setattr__(self, "category_type", self.category_type.value)
        if self.last_modified_date is None:
            object.__setattr__(self, "last_modified_date", self.created_date)

    @classmethod
    def new(
        cls,
        family_id: str,
        name: str,
        category_type,
        is_default: bool = False,
        description: Optional[str] = None,
    ) -> "Category":
        """Create a category that has not been saved yet."""
        now = datetime.now()
        return cls(
            family_id=family_id,
            name=name,
            category_type=category_type,
            is_default=is_default,
            description=description,
            created_date=now,
            last_modified_date=now,
            is_active=True,
        )

    def update(self, **changes) -> "Category":
        """Return a copy with the given fields changed.

        last_modified_date is refreshed unless it is passed explicitly, in
        which case the given value is used as is. The refreshed stamp uses
        the timezone of the previous one.

        Raises:
            TypeError: If created_date or an unknown field is passed, or if
                last_modified_date is passed as None.
        """
        if "created_date" in changes:
            raise TypeError("created_date cannot be changed after construction")
        if "last_modified_date" not in changes:
            previous = self.last_modified_date
            if previous is None:
                changes["last_modified_date"] = datetime.now()
            else:
                now = datetime.now(previous.tzinfo)
                changes["last_modified_date"] = max(now, previous)
        elif changes["last_modified_date"] is None:
            raise TypeError("last_modified_date cannot be cleared")
        return replace(self, **changes)

    def deactivate(self) -> "Category":
        return self.update(is_active=False)

    def activate(self) -> "Category":
        return self.update(is_active=True)

    @property
    def kind(self) -> Optional[CategoryType]:
        """The parsed category type, or None if it is not recognized."""
        return CategoryType.parse(self.category_type)

    def is_expense_category(self) -> bool:
        return self.kind is CategoryType.EXPENSE

    def is_income_category(self) -> bool:
        return self.kind is CategoryType.INCOME

    def has_valid_type(self) -> bool:
        return self.kind is not None

    def has_valid_name(self) -> bool:
        return is_valid_category_name(self.name)

    def can_be_deleted(
        self, in_use: Optional[Callable[["Category"], bool]] = None
    ) -> bool:
        """Check whether this category may be removed from storage.

        Default categories are never deletable.

        Args:
            in_use: Optional predicate from the transaction store that reports
                whether any transaction still references the category.

        Returns:
            True if the category is not a default and is not in use.
        """
        if self.is_default:
            return False
        if in_use is not None and in_use(self):
            return False
        return True

    @property
    def type_glyph(self) -> str:
        return type_glyph_for(self.category_type)

    @property
    def display_name(self) -> str:
        if self.name is None:
            return self.type_glyph
        return f"{self.type_glyph} {self.name}"

    @property
    def category_type_display(self) -> str:
        return "Expense Category" if self.is_expense_category() else "Income Category"

    @property
    def icon(self) -> str:
        return icon_for(self.name, self.category_type)

    def __repr__(self) -> str:
        return (
            f"Category(category_id={self.category_id!r}, "
            f"family_id={self.family_id!r}, "
            f"name={self.name!r}, "
            f"category_type={self.category_type!r}, "
            f"is_default={self.is_default}, "
            f"is_active={self.is_active})"
        )

    __str__ = __repr__
