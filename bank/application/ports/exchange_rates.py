"""Port for the external exchange-rate provider."""

from decimal import Decimal
from typing import Protocol


class ExchangeRatesPort(Protocol):
    """Read-only access to the latest rates quoted against a base currency."""

    def get_rates(self, base: str) -> dict[str, Decimal]:
        """Return the latest rates keyed by target currency code.

        Args:
            base: Three-letter code the rates are quoted against.

        Returns:
            dict[str, Decimal]: Units of each currency per unit of base.

        Raises:
            ExchangeRateUnavailableError: If the provider cannot be reached
                or its response cannot be decoded.
        """


__all__ = ["ExchangeRatesPort"]
