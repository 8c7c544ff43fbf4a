"""Category domain service."""

from typing import Optional

from reportit.database.base import Database
from reportit.domain.entities import Category, UNSPECIFIED_CATEGORY_NAME
from reportit.domain.errors import (
    ConflictError,
    NotFoundError,
    ValidationError,
    category_name_not_found,
)


class CategoryService:
    """Service for managing categories."""

    def __init__(self, db: Database):
        """Initialize category service.

        Args:
            db: Database instance
        """
        self.db = db

    def create_category(self, name: str) -> int:
        """Create a category.

        Raises:
            ValidationError: If the name is empty or reserved
            ConflictError: If a category with that name exists
        """
        name = name.strip()
        if not name:
            raise ValidationError("Category name must not be empty")
        if name.lower() == UNSPECIFIED_CATEGORY_NAME.lower():
            raise ValidationError(f"'{UNSPECIFIED_CATEGORY_NAME}' is reserved for transactions without a category")
        if self.db.get_category_by_name(name) is not None:
            raise ConflictError(f"Category '{name}' already exists")
        return self.db.create_category(name=name)

    def get_category(self, category_id: int) -> Optional[Category]:
        return self.db.get_category(category_id)

    def require_category_by_name(self, name: str) -> Category:
        """Get category by name.

        Raises:
            NotFoundError: If the category does not exist
        """
        category = self.db.get_category_by_name(name)
        if category is None:
            raise NotFoundError(category_name_not_found(name))
        return category

    def list_categories(self) -> list[Category]:
        return self.db.list_categories()

    def category_name(self, category_id: Optional[int]) -> str:
        """Display name for a category id; None is the Unspecified category."""
        if category_id is None:
            return UNSPECIFIED_CATEGORY_NAME
        category = self.db.get_category(category_id)
        return category.name if category is not None else f"#{category_id}"
