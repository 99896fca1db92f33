"""SQLModel table exports."""

from .category import Category
from .journal import DEPOSIT, JOURNAL_TYPES, TRANSFER, WITHDRAWAL, Journal
from .user import User

__all__ = [
    "Category",
    "Journal",
    "User",
    "DEPOSIT",
    "JOURNAL_TYPES",
    "TRANSFER",
    "WITHDRAWAL",
]
