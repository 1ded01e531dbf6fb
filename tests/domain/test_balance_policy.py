"""Tests for the balance policy."""

from decimal import Decimal

import pytest

from bank.domain.errors import (
    InsufficientFundsError,
    InvalidAmountError,
    InvalidOperationKindError,
)
from bank.domain.models.transactions import TransactionKind
from bank.domain.policies.balance import decide


def test_deposit_adds_amount() -> None:
    """A deposit should add the amount to the balance."""
    result = decide(
        Decimal("50.00"),
        TransactionKind.DEPOSIT,
        Decimal("20.00"),
    )

    assert result == Decimal("70.00")


def test_deposit_accepts_string_kind_and_amount() -> None:
    """Raw string kinds and amounts should be accepted."""
    assert decide(Decimal("0.00"), "deposit", "12.5") == Decimal("12.50")


def test_zero_deposit_keeps_balance() -> None:
    """A zero deposit should leave the balance unchanged."""
    assert decide(Decimal("10.00"), "deposit", 0) == Decimal("10.00")


def test_withdrawal_subtracts_amount() -> None:
    """A withdrawal should subtract the amount from the balance."""
    result = decide(Decimal("50.00"), "withdrawal", Decimal("30.00"))

    assert result == Decimal("20.00")


def test_withdrawal_of_entire_balance_reaches_zero() -> None:
    """Withdrawing the whole balance should leave exactly zero."""
    assert decide(Decimal("50.00"), "withdrawal", Decimal("50.00")) == 0


def test_withdrawal_beyond_balance_is_rejected() -> None:
    """Overdrafts should raise InsufficientFundsError."""
    with pytest.raises(InsufficientFundsError) as exc_info:
        decide(Decimal("50.00"), "withdrawal", Decimal("75.00"))

    assert exc_info.value.balance == Decimal("50.00")
    assert exc_info.value.amount == Decimal("75.00")


@pytest.mark.parametrize("kind", ["transfer", "Deposit", "", None])
def test_unknown_kind_is_rejected(kind) -> None:
    """Unknown kinds should raise InvalidOperationKindError."""
    with pytest.raises(InvalidOperationKindError):
        decide(Decimal("50.00"), kind, Decimal("1.00"))


@pytest.mark.parametrize(
    "amount",
    ["-1", "0.001", "NaN", "Infinity", "abc", None, True],
)
def test_invalid_amount_is_rejected(amount) -> None:
    """Invalid amounts should raise InvalidAmountError."""
    with pytest.raises(InvalidAmountError):
        decide(Decimal("50.00"), "deposit", amount)


def test_kind_is_checked_before_amount() -> None:
    """An invalid kind should be reported ahead of an invalid amount."""
    with pytest.raises(InvalidOperationKindError):
        decide(Decimal("50.00"), "transfer", "-1")
