"""Domain constants for accounts and transactions."""

from decimal import Decimal

ACCOUNT_NAME_MAX_LENGTH = 100

CURRENCY_CODE_LENGTH = 3

DEFAULT_CURRENCY = "USD"

MONEY_DECIMAL_PLACES = 2

# Matches the DECIMAL(15, 2) money columns of the relational store.
MONEY_MAX_DIGITS = 15

MAX_MONEY_AMOUNT = Decimal("9999999999999.99")


__all__ = [
    "ACCOUNT_NAME_MAX_LENGTH",
    "CURRENCY_CODE_LENGTH",
    "DEFAULT_CURRENCY",
    "MONEY_DECIMAL_PLACES",
    "MONEY_MAX_DIGITS",
    "MAX_MONEY_AMOUNT",
]
