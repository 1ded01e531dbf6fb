"""Tests for the in-memory stores."""

from decimal import Decimal

import pytest

from bank.domain.errors import AccountNotFoundError, BalanceConflictError
from bank.domain.models.accounts import AccountUpdate
from bank.domain.models.transactions import TransactionKind


def test_create_assigns_id_timestamps_and_version(accounts) -> None:
    """create should assign an id, UTC timestamps and version zero."""
    account = accounts.create("Alice", Decimal("10.00"), "USD")

    assert account.id
    assert account.version == 0
    assert account.created_at == account.updated_at
    assert account.created_at.tzinfo is not None
    assert accounts.get_by_id(account.id) == account
    assert accounts.get_by_name("Alice") == account
    assert accounts.get_by_name("Bob") is None


def test_update_balance_bumps_version(accounts) -> None:
    """Each balance write should increment the version."""
    account = accounts.create("Alice", Decimal("10.00"), "USD")

    updated = accounts.update_balance(
        account.id,
        Decimal("25.00"),
        expected_version=0,
    )

    assert updated.balance == Decimal("25.00")
    assert updated.version == 1
    assert updated.updated_at >= account.updated_at
    assert accounts.get_by_id(account.id) == updated


def test_update_balance_rejects_stale_version(accounts) -> None:
    """A stale expected version should raise BalanceConflictError."""
    account = accounts.create("Alice", Decimal("10.00"), "USD")
    accounts.update_balance(account.id, Decimal("20.00"))

    with pytest.raises(BalanceConflictError) as exc_info:
        accounts.update_balance(
            account.id,
            Decimal("30.00"),
            expected_version=0,
        )

    assert exc_info.value.expected_version == 0
    assert exc_info.value.actual_version == 1
    assert accounts.get_by_id(account.id).balance == Decimal("20.00")


def test_update_balance_for_missing_account(accounts) -> None:
    """Updating an unknown account should raise AccountNotFoundError."""
    with pytest.raises(AccountNotFoundError):
        accounts.update_balance("missing", Decimal("1.00"))


def test_update_balance_refuses_negative_balance(accounts) -> None:
    """The store should refuse to persist a negative balance."""
    account = accounts.create("Alice", Decimal("10.00"), "USD")

    with pytest.raises(ValueError):
        accounts.update_balance(account.id, Decimal("-0.01"))


def test_update_changes_attributes_but_not_balance(accounts) -> None:
    """update should change name and currency but never the balance."""
    account = accounts.create("Alice", Decimal("10.00"), "USD")

    updated = accounts.update(account.id, AccountUpdate(name="Alicia"))

    assert updated.name == "Alicia"
    assert updated.currency == "USD"
    assert updated.balance == Decimal("10.00")
    assert updated.version == account.version
    assert accounts.update(account.id, AccountUpdate()) == updated
    assert accounts.update("missing", AccountUpdate(name="x")) is None


def test_delete_account(accounts) -> None:
    """delete should remove the account once and report it."""
    account = accounts.create("Alice", Decimal("10.00"), "USD")

    assert accounts.delete(account.id) is True
    assert accounts.delete(account.id) is False
    assert accounts.get_all() == []


def test_transactions_are_returned_newest_first(transactions) -> None:
    """Account history should be returned newest first."""
    first = transactions.append("acc-1", Decimal("1.00"), "deposit")
    second = transactions.append(
        "acc-1",
        Decimal("2.00"),
        TransactionKind.WITHDRAWAL,
    )
    other = transactions.append("acc-2", Decimal("3.00"), "deposit")

    assert transactions.get_by_account_id("acc-1") == [second, first]
    assert transactions.get_all() == [first, second, other]
    assert transactions.get_by_id(second.id) == second
    assert first.kind is TransactionKind.DEPOSIT


def test_transaction_update_and_delete(transactions) -> None:
    """Transactions should support update and delete."""
    record = transactions.append("acc-1", Decimal("1.00"), "deposit")

    updated = transactions.update(record.id, Decimal("4.00"), "withdrawal")

    assert updated.amount == Decimal("4.00")
    assert updated.kind is TransactionKind.WITHDRAWAL
    assert updated.created_at == record.created_at
    assert transactions.update("missing", Decimal("1.00"), "deposit") is None
    assert transactions.delete(record.id) is True
    assert transactions.delete(record.id) is False


def test_transaction_summary(transactions) -> None:
    """get_summary should total deposits and withdrawals."""
    transactions.append("acc-1", Decimal("10.00"), "deposit")
    transactions.append("acc-1", Decimal("4.00"), "withdrawal")

    summary = transactions.get_summary("acc-1", Decimal("6.00"))

    assert summary.total_transactions == 2
    assert summary.total_deposits == Decimal("10.00")
    assert summary.total_withdrawals == Decimal("4.00")
    assert summary.current_balance == Decimal("6.00")
    assert summary.last_transaction_at is not None
