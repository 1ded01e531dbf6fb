"""Exchange-rate quote returned by the rate provider."""

from dataclasses import dataclass
from decimal import Decimal


@dataclass(frozen=True)
class ExchangeRate:
    """Units of the target currency bought by one unit of the base."""

    base: str
    target: str
    rate: Decimal


__all__ = ["ExchangeRate"]
