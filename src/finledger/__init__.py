"""FinLedger category data-access package."""

from __future__ import annotations

from .config import BaseConfig
from .domain.forms import CategoryData
from .errors import FinLedgerError, NotFoundError, StorageError, UnknownCurrencyError, ValidationError

__all__ = [
    "BaseConfig",
    "CategoryData",
    "FinLedgerError",
    "NotFoundError",
    "StorageError",
    "UnknownCurrencyError",
    "ValidationError",
]
