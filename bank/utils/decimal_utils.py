"""Helpers for Decimal normalization."""

from decimal import Decimal

MONEY_QUANTUM = Decimal("0.01")


def coerce_decimal(value) -> Decimal:
    """Normalize numeric values to Decimal.

    Args:
        value: Raw numeric value from SQL, BSON or adapters.

    Returns:
        Decimal: Normalized numeric value.
    """
    if value is None:
        return Decimal("0")
    if isinstance(value, Decimal):
        return value
    to_decimal = getattr(value, "to_decimal", None)
    if callable(to_decimal):
        return to_decimal()
    return Decimal(str(value))


def quantize_money(value: Decimal) -> Decimal:
    """Return the value with exactly two fractional digits."""
    return value.quantize(MONEY_QUANTUM)


__all__ = ["MONEY_QUANTUM", "coerce_decimal", "quantize_money"]
