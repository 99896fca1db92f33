"""Input structures validated before they reach the storage layer."""

from __future__ import annotations

from dataclasses import dataclass

from ..errors import ValidationError
from ..models.category import NAME_MAX_LENGTH


@dataclass(slots=True)
class CategoryData:
    """Category fields supplied by a caller for ``store`` and ``update``."""

    name: str

    def validate(self) -> "CategoryData":
        """Return a cleaned copy, raising ``ValidationError`` on bad input."""

        if not isinstance(self.name, str):
            raise ValidationError("Category name must be a string")
        name = self.name.strip()
        if not name:
            raise ValidationError("Category name cannot be empty")
        if len(name) > NAME_MAX_LENGTH:
            raise ValidationError(f"Category name cannot exceed {NAME_MAX_LENGTH} characters")
        return CategoryData(name=name)
