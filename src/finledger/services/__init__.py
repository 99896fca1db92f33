"""Service helpers shared by repositories."""

from .currency import CurrencyConverter

__all__ = ["CurrencyConverter"]
