"""Concurrency tests for postings against a single account."""

from concurrent.futures import ThreadPoolExecutor
from decimal import Decimal
import threading
from unittest.mock import MagicMock

import pytest

from bank.application.locking import AccountLockRegistry
from bank.application.use_cases.post_transaction import PostTransactionUseCase
from bank.domain.errors import InsufficientFundsError
from bank.domain.services.ledger import replay_balance

WORKERS = 10


def _build_use_case(accounts, transactions, **kwargs):
    return PostTransactionUseCase(
        accounts,
        transactions,
        logger=MagicMock(),
        audit_logger=MagicMock(),
        **kwargs,
    )


def _attempt(use_case, account_id, amount, kind) -> bool:
    try:
        use_case.execute(account_id, amount, kind)
    except InsufficientFundsError:
        return False
    return True


def _funded_account(accounts, transactions, balance: str):
    account = accounts.create("Shared", Decimal("0.00"), "USD")
    _build_use_case(accounts, transactions).execute(
        account.id,
        balance,
        "deposit",
    )
    return account


@pytest.mark.parametrize("balance", ["50.00", "35.00", "200.00"])
def test_shared_registry_serializes_withdrawals(
    accounts,
    transactions,
    balance,
) -> None:
    """Concurrent withdrawals should never overdraw with shared locks."""
    account = _funded_account(accounts, transactions, balance)
    use_case = _build_use_case(
        accounts,
        transactions,
        locks=AccountLockRegistry(),
    )
    amount = Decimal("10.00")

    with ThreadPoolExecutor(max_workers=WORKERS) as executor:
        results = list(
            executor.map(
                lambda _: _attempt(use_case, account.id, amount, "withdrawal"),
                range(WORKERS),
            )
        )

    expected = min(WORKERS, int(Decimal(balance) // amount))
    stored = accounts.get_by_id(account.id)
    assert results.count(True) == expected
    assert stored.balance == Decimal(balance) - expected * amount
    assert stored.balance >= 0
    assert replay_balance(transactions.get_by_account_id(account.id)) == (
        stored.balance
    )


def test_version_check_alone_keeps_withdrawals_consistent(
    accounts,
    transactions,
) -> None:
    """Independent workflows should stay consistent via versions."""
    account = _funded_account(accounts, transactions, "50.00")
    amount = Decimal("10.00")
    start = threading.Barrier(WORKERS)

    def _withdraw(_):
        # Each worker has its own lock registry, as separate processes would.
        use_case = _build_use_case(
            accounts,
            transactions,
            max_conflict_retries=WORKERS,
        )
        start.wait()
        return _attempt(use_case, account.id, amount, "withdrawal")

    with ThreadPoolExecutor(max_workers=WORKERS) as executor:
        results = list(executor.map(_withdraw, range(WORKERS)))

    stored = accounts.get_by_id(account.id)
    assert results.count(True) == 5
    assert stored.balance == Decimal("0.00")
    history = transactions.get_by_account_id(account.id)
    assert len(history) == 6
    assert replay_balance(history) == stored.balance


def test_mixed_postings_match_history(accounts, transactions) -> None:
    """Concurrent deposits and withdrawals should match the history."""
    account = _funded_account(accounts, transactions, "20.00")
    use_case = _build_use_case(
        accounts,
        transactions,
        locks=AccountLockRegistry(),
    )
    operations = [
        ("deposit", "7.25") if index % 2 else ("withdrawal", "5.00")
        for index in range(40)
    ]

    with ThreadPoolExecutor(max_workers=WORKERS) as executor:
        list(
            executor.map(
                lambda op: _attempt(use_case, account.id, op[1], op[0]),
                operations,
            )
        )

    stored = accounts.get_by_id(account.id)
    assert stored.balance >= 0
    assert replay_balance(transactions.get_by_account_id(account.id)) == (
        stored.balance
    )


def test_lock_registry_blocks_same_account_only() -> None:
    """Holding one account's lock should not block another account."""
    registry = AccountLockRegistry()
    same_acquired = threading.Event()
    other_acquired = threading.Event()

    def _hold(account_id, event):
        with registry.hold(account_id):
            event.set()

    with registry.hold("acc-1"):
        same = threading.Thread(target=_hold, args=("acc-1", same_acquired))
        other = threading.Thread(target=_hold, args=("acc-2", other_acquired))
        same.start()
        other.start()
        assert other_acquired.wait(timeout=2)
        assert not same_acquired.wait(timeout=0.1)

    assert same_acquired.wait(timeout=2)
    same.join()
    other.join()
    assert len(registry) == 0


def test_lock_registry_releases_on_error() -> None:
    """Locks should be released and dropped when the body raises."""
    registry = AccountLockRegistry()

    with pytest.raises(RuntimeError):
        with registry.hold("acc-1"):
            raise RuntimeError("boom")

    assert len(registry) == 0
    with registry.hold("acc-1"):
        assert len(registry) == 1
