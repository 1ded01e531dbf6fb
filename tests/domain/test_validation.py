"""Tests for domain validation helpers."""

from decimal import Decimal

import pytest

from bank.domain.constants import MAX_MONEY_AMOUNT
from bank.domain.errors import InvalidAccountError, InvalidAmountError
from bank.domain.models.transactions import TransactionKind
from bank.domain.services.validation import (
    normalize_currency_code,
    parse_transaction_kind,
    validate_account_name,
    validate_amount,
)


def test_validate_amount_quantizes_to_cents() -> None:
    """Amounts should be returned with two fractional digits."""
    value = validate_amount("5")

    assert value == Decimal("5")
    assert str(value) == "5.00"


def test_validate_amount_accepts_floats_by_their_shortest_repr() -> None:
    """Floats should be read through their shortest repr."""
    assert str(validate_amount(0.1)) == "0.10"


def test_validate_amount_rejects_sub_cent_precision() -> None:
    """Fractions of a cent should be rejected."""
    with pytest.raises(InvalidAmountError):
        validate_amount(Decimal("1.005"))


def test_validate_amount_accepts_trailing_zeros() -> None:
    """Trailing zeros beyond cents should not count as precision."""
    assert validate_amount(Decimal("1.500")) == Decimal("1.50")


def test_parse_transaction_kind_returns_enum() -> None:
    """Kinds should parse from strings and pass through enums."""
    assert parse_transaction_kind("withdrawal") is TransactionKind.WITHDRAWAL
    assert (
        parse_transaction_kind(TransactionKind.DEPOSIT)
        is TransactionKind.DEPOSIT
    )


def test_validate_account_name_strips_whitespace() -> None:
    """Account names should be stripped."""
    assert validate_account_name("  Savings ") == "Savings"


@pytest.mark.parametrize("name", ["", "   ", None, "x" * 101])
def test_validate_account_name_rejects_invalid_names(name) -> None:
    """Blank or overlong names should be rejected."""
    with pytest.raises(InvalidAccountError):
        validate_account_name(name)


def test_normalize_currency_code_upper_cases() -> None:
    """Currency codes should be stripped and upper-cased."""
    assert normalize_currency_code(" eur ") == "EUR"


@pytest.mark.parametrize("currency", ["US", "USDT", "U1D", "", None])
def test_normalize_currency_code_rejects_invalid_codes(currency) -> None:
    """Codes that are not three letters should be rejected."""
    with pytest.raises(InvalidAccountError):
        normalize_currency_code(currency)


@pytest.mark.parametrize(
    "amount",
    [Decimal("1e30"), "1" + "0" * 27, Decimal("10000000000000.00")],
)
def test_validate_amount_rejects_amounts_above_maximum(amount) -> None:
    """Amounts beyond the money column range should be invalid, not crash."""
    with pytest.raises(InvalidAmountError, match="must not exceed"):
        validate_amount(amount)


def test_validate_amount_accepts_the_maximum() -> None:
    """The largest amount the money columns can hold should be accepted."""
    assert validate_amount(MAX_MONEY_AMOUNT) == MAX_MONEY_AMOUNT
