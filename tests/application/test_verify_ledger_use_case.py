"""Tests for the ledger verification use case."""

from decimal import Decimal
from unittest.mock import MagicMock

from bank.application.use_cases.post_transaction import PostTransactionUseCase
from bank.application.use_cases.verify_ledger import VerifyLedgerUseCase


def _post(accounts, transactions, account_id, amount, kind) -> None:
    PostTransactionUseCase(
        accounts,
        transactions,
        logger=MagicMock(),
        audit_logger=MagicMock(),
    ).execute(account_id, amount, kind)


def test_consistent_ledger_has_no_mismatches(accounts, transactions) -> None:
    """Balances matching their history should give a clean report."""
    account = accounts.create("Alice", Decimal("0.00"), "USD")
    _post(accounts, transactions, account.id, "40.00", "deposit")
    _post(accounts, transactions, account.id, "15.00", "withdrawal")
    accounts.create("Empty", Decimal("0.00"), "USD")

    report = VerifyLedgerUseCase(
        accounts,
        transactions,
        logger=MagicMock(),
    ).execute()

    assert report.checked_accounts == 2
    assert report.is_consistent
    assert report.mismatches == []


def test_unrecorded_balance_change_is_reported(accounts, transactions) -> None:
    """A balance change without a record should be reported."""
    account = accounts.create("Alice", Decimal("0.00"), "USD")
    _post(accounts, transactions, account.id, "40.00", "deposit")
    accounts.update_balance(account.id, Decimal("10.00"))
    logger = MagicMock()

    use_case = VerifyLedgerUseCase(accounts, transactions, logger=logger)

    report = use_case.execute()

    assert not report.is_consistent
    [mismatch] = report.mismatches
    assert mismatch.account_id == account.id
    assert mismatch.account_name == "Alice"
    assert mismatch.stored_balance == Decimal("10.00")
    assert mismatch.replayed_balance == Decimal("40.00")
    assert mismatch.difference == Decimal("-30.00")
    logger.warning.assert_called_once()
