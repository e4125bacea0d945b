"""Category model for transaction categorization."""

from dataclasses import dataclass


@dataclass
class Category:
    """Represents a transaction category.

    Attributes:
        id: Unique, stable identifier.
        name: Category name (unique per user, case-insensitive).
        color: Hex color string used by charts, e.g. "#ef4444".
        icon: Short glyph shown next to the name.
        is_default: True for categories seeded for every new user.
    """

    id: str
    name: str
    color: str
    icon: str
    is_default: bool = False

    def to_dict(self) -> dict:
        """Convert category to dictionary for storage."""
        return {
            "id": self.id,
            "name": self.name,
            "color": self.color,
            "icon": self.icon,
            "is_default": self.is_default,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "Category":
        """Build a Category from a stored dictionary."""
        return cls(
            id=data["id"],
            name=data["name"],
            color=data.get("color", "#6b7280"),
            icon=data.get("icon", ""),
            is_default=bool(data.get("is_default", False)),
        )
