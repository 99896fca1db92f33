"""Error types raised by the category data-access layer."""

from __future__ import annotations


class FinLedgerError(Exception):
    """Base class for all finledger errors."""


class NotFoundError(FinLedgerError, LookupError):
    """A category does not exist or belongs to another user."""


class ValidationError(FinLedgerError, ValueError):
    """Input violates a constraint (empty or duplicate name, inverted range)."""


class UnknownCurrencyError(ValidationError):
    """No exchange rate is configured for a journal's currency."""

    def __init__(self, currency: str, reporting_currency: str) -> None:
        super().__init__(f"No exchange rate from {currency} to {reporting_currency}")
        self.currency = currency
        self.reporting_currency = reporting_currency


class StorageError(FinLedgerError, RuntimeError):
    """The storage engine is unreachable or failed unexpectedly."""
