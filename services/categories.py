"""Category service for per-user category management."""

import json
import re
from typing import List, Optional

from config import get_seed_dir
from db.store import CATEGORIES, TRANSACTIONS
from errors import NotFoundError, ReferentialError, ValidationError
from logger import get_logger
from models.category import Category
from services.validation import require_text

logger = get_logger()

_HEX_COLOR = re.compile(r"^#[0-9a-fA-F]{6}$")


def load_default_categories() -> List[Category]:
    """Load the categories every new user starts with from db/seed/categories.json.

    Returns:
        List of Category objects flagged as defaults.
    """
    seed_file = get_seed_dir() / "categories.json"
    with open(seed_file, "r", encoding="utf-8") as f:
        categories_data = json.load(f)

    return [
        Category(
            id=data["id"],
            name=data["name"],
            color=data["color"],
            icon=data["icon"],
            is_default=True,
        )
        for data in categories_data
    ]


class CategoryService:
    """Service for managing categories."""

    def __init__(self, store):
        """Initialize the category service.

        Args:
            store: EntityStore instance holding the documents.
        """
        self.store = store

    def initialize(self, user_id: str) -> bool:
        """Seed the default categories for a user who never had any.

        A user who deleted every category keeps an empty list.

        Returns:
            True if defaults were written, False if the user already had a
            category collection.
        """
        if self.store.has_collection(user_id, CATEGORIES):
            return False

        for category in load_default_categories():
            self.store.upsert(user_id, CATEGORIES, category.to_dict())
        logger.info(f"Seeded default categories for user '{user_id}'")
        return True

    def find_all(self, user_id: str) -> List[Category]:
        """Get all categories of a user.

        Users that were never initialized see the default set.

        Returns:
            List of Category objects in creation order.
        """
        if not self.store.has_collection(user_id, CATEGORIES):
            return load_default_categories()

        return [
            Category.from_dict(data) for data in self.store.list(user_id, CATEGORIES)
        ]

    def find(self, user_id: str, category_id: str) -> Optional[Category]:
        """Get a single category by ID.

        Returns:
            Category object if found, None otherwise.
        """
        for category in self.find_all(user_id):
            if category.id == category_id:
                return category
        return None

    def find_by_name(self, user_id: str, name: str) -> Optional[Category]:
        """Get a single category by name, ignoring case and surrounding spaces.

        Returns:
            Category object if found, None otherwise.
        """
        wanted = name.strip().lower()
        for category in self.find_all(user_id):
            if category.name.lower() == wanted:
                return category
        return None

    def create(self, user_id: str, name: str, color: str, icon: str) -> Category:
        """Create a custom category.

        Args:
            user_id: Owner of the category.
            name: Category name (unique per user, case-insensitive).
            color: Hex color, e.g. "#ef4444".
            icon: Short glyph.

        Returns:
            The created Category object with id populated.

        Raises:
            ValidationError: If the name is blank or taken, or the color is
                not a hex color.
        """
        self.initialize(user_id)
        name = self._validate(user_id, name, color)

        category = Category(
            id=self.store.next_id(user_id, CATEGORIES),
            name=name,
            color=color,
            icon=icon,
            is_default=False,
        )
        self.store.upsert(user_id, CATEGORIES, category.to_dict())
        logger.info(f"Created category '{category.name}' (ID: {category.id})")
        return category

    def update(
        self, user_id: str, category_id: str, name: str, color: str, icon: str
    ) -> Category:
        """Update an existing category. The default flag is kept as it was.

        Returns:
            The updated Category object.

        Raises:
            NotFoundError: If the category does not exist.
            ValidationError: If the new values are invalid.
        """
        self.initialize(user_id)
        existing = self.find(user_id, category_id)
        if existing is None:
            raise NotFoundError(f"Category with ID {category_id} not found")

        name = self._validate(user_id, name, color, exclude_id=category_id)

        category = Category(
            id=category_id,
            name=name,
            color=color,
            icon=icon,
            is_default=existing.is_default,
        )
        self.store.upsert(user_id, CATEGORIES, category.to_dict())
        logger.info(f"Updated category '{category.name}' (ID: {category.id})")
        return category

    def delete(self, user_id: str, category_id: str) -> bool:
        """Delete a category by ID.

        Returns:
            True if category was deleted, False if not found.

        Raises:
            ReferentialError: If any transaction still uses the category.
        """
        self.initialize(user_id)
        in_use = sum(
            1
            for data in self.store.list(user_id, TRANSACTIONS)
            if data.get("category_id") == category_id
        )
        if in_use:
            logger.warning(
                f"Refused to delete category {category_id}: used by {in_use} transaction(s)"
            )
            raise ReferentialError(
                f"Category with ID {category_id} cannot be deleted: "
                f"{in_use} transaction(s) still use it"
            )

        deleted = self.store.delete(user_id, CATEGORIES, category_id)
        if deleted:
            logger.info(f"Deleted category {category_id}")
        return deleted

    def _validate(
        self,
        user_id: str,
        name: str,
        color: str,
        exclude_id: Optional[str] = None,
    ) -> str:
        name = require_text(name, "Category name")

        if not _HEX_COLOR.match(color or ""):
            raise ValidationError(f"Color must be a hex color like #ef4444, got '{color}'")

        duplicate = self.find_by_name(user_id, name)
        if duplicate is not None and duplicate.id != exclude_id:
            raise ValidationError(f"A category named '{duplicate.name}' already exists")

        return name
