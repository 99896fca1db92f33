"""Conversion of journal amounts into the reporting currency."""

from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal
from typing import Iterable, Mapping

from ..config import BaseConfig
from ..errors import UnknownCurrencyError

CENT = Decimal("0.01")


class CurrencyConverter:
    """Convert amounts with a static rate table.

    Rates are units of the reporting currency per unit of the foreign
    currency. The reporting currency itself always converts at 1.0.
    """

    def __init__(self, reporting_currency: str = "USD", rates: Mapping[str, float] | None = None):
        self.reporting_currency = reporting_currency.upper()
        self.rates = {code.upper(): float(rate) for code, rate in (rates or {}).items()}
        self.rates[self.reporting_currency] = 1.0

    @classmethod
    def from_config(cls, config: BaseConfig) -> "CurrencyConverter":
        return cls(config.REPORTING_CURRENCY, config.EXCHANGE_RATES)

    def rate_for(self, currency: str | None) -> float:
        code = (currency or self.reporting_currency).upper()
        try:
            return self.rates[code]
        except KeyError:
            raise UnknownCurrencyError(code, self.reporting_currency) from None

    def convert(self, amount: float, currency: str | None) -> float:
        return amount * self.rate_for(currency)

    def total(self, amounts: Iterable[tuple[str | None, float]]) -> float:
        """Sum ``(currency, amount)`` pairs in the reporting currency, to the cent.

        Summed as ``Decimal`` and rounded half-up so 1.005 becomes 1.01.
        """

        total = sum(
            (Decimal(str(amount)) * Decimal(str(self.rate_for(currency))) for currency, amount in amounts),
            Decimal("0"),
        )
        return float(total.quantize(CENT, rounding=ROUND_HALF_UP))
