"""Category lookup domain service."""

from typing import Optional
from tally.database.base import Database
from tally.domain import errors
from tally.domain.entities import Category
from tally.domain.errors import ValidationError


class CategoryService:
    """Service for resolving the categories an owner may use.

    Shared default categories (no owner) are visible to everyone; owned
    categories only to their owner.
    """

    def __init__(self, db: Database):
        """Initialize category service.

        Args:
            db: Database instance
        """
        self.db = db

    def create_category(self, name: str, owner_id: Optional[int] = None) -> int:
        """Create a category.

        Args:
            name: Category name
            owner_id: Owning user, or None for a shared default

        Returns:
            Category ID

        Raises:
            ValidationError: If name is blank or already visible to the owner
        """
        if not name or not name.strip():
            raise ValidationError(errors.missing_field("name"))
        name = name.strip()

        for existing in self.db.list_categories(owner_id=owner_id):
            if existing.name.lower() == name.lower() and existing.owner_id == owner_id:
                raise ValidationError(f"Category '{name}' already exists")

        return self.db.create_category(name=name, owner_id=owner_id)

    def list_categories(self, owner_id: Optional[int] = None) -> list[Category]:
        """List shared categories plus the owner's own, ordered by name."""
        return self.db.list_categories(owner_id=owner_id)

    def get_category_names(self, owner_id: int) -> dict[int, str]:
        """Map every category visible to the owner to its name."""
        return {cat.id: cat.name for cat in self.list_categories(owner_id)}

    def resolve_category(self, owner_id: int, category_id: int) -> Category:
        """Return a category the owner is allowed to use.

        Raises:
            ValidationError: If the category does not exist or belongs to
                another owner
        """
        category = self.db.get_category(category_id)
        if category is None or not category.is_visible_to(owner_id):
            raise ValidationError(errors.category_not_found(category_id))
        return category

    def require_category_by_name(self, owner_id: int, name: str) -> Category:
        """Find a visible category by name (case-insensitive).

        The owner's own category wins over a shared one with the same name.

        Raises:
            ValidationError: If no visible category has that name
        """
        wanted = name.strip().lower()
        matches = [cat for cat in self.list_categories(owner_id) if cat.name.lower() == wanted]
        if not matches:
            raise ValidationError(errors.category_name_not_found(name))
        matches.sort(key=lambda cat: cat.is_shared)
        return matches[0]
