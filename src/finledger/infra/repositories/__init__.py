"""Concrete repository implementations using SQLModel."""

from .category import SQLModelCategoryRepository

__all__ = ["SQLModelCategoryRepository"]
