"""Default category catalog loading.

The catalog lists the categories every family starts with. It lives in
db/seed/default_categories.yaml and is validated with pydantic models.
"""

import yaml
from pathlib import Path
from typing import List, Optional
from pydantic import BaseModel, Field, field_validator

from config import get_seed_dir
from models.category import CategoryType, MAX_NAME_LENGTH
from logger import get_logger

logger = get_logger()

DEFAULT_CATALOG_FILE = "default_categories.yaml"


class DefaultCategory(BaseModel):
    """One entry of the default catalog."""

    name: str = Field(min_length=1, max_length=MAX_NAME_LENGTH)
    type: CategoryType
    description: Optional[str] = None

    @field_validator("name")
    @classmethod
    def _strip_name(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("name cannot be blank")
        return value

    @field_validator("type", mode="before")
    @classmethod
    def _parse_type(cls, value):
        # Accept "expense", "INCOME", etc.; unknown values fall through to
        # the enum validator which reports them.
        return CategoryType.parse(value) or value


class DefaultCatalog(BaseModel):
    """The full default catalog file."""

    version: int = 1
    categories: List[DefaultCategory] = Field(default_factory=list)


def get_default_catalog_path() -> Path:
    return get_seed_dir() / DEFAULT_CATALOG_FILE


def load_default_catalog(path: Optional[Path] = None) -> DefaultCatalog:
    """Load and validate the default category catalog.

    Args:
        path: Catalog file to read. Defaults to db/seed/default_categories.yaml.

    Returns:
        The validated DefaultCatalog.

    Raises:
        FileNotFoundError: If the catalog file doesn't exist.
        yaml.YAMLError: If the YAML is invalid.
        pydantic.ValidationError: If an entry is malformed.
    """
    if path is None:
        path = get_default_catalog_path()

    if not path.exists():
        raise FileNotFoundError(f"Default category catalog not found: {path}")

    logger.info(f"Loading default categories from {path}")

    with open(path, "r", encoding="utf-8") as f:
        data = yaml.safe_load(f) or {}

    catalog = DefaultCatalog.model_validate(data)
    logger.debug(f"Loaded {len(catalog.categories)} default categories")
    return catalog
