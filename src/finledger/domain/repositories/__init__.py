"""Repository protocol definitions for domain layer."""

from .category import CategoryExpense, CategoryRef, CategoryRepository

__all__ = [
    "CategoryExpense",
    "CategoryRef",
    "CategoryRepository",
]
