"""Ledger computations over transaction histories."""

from collections.abc import Iterable
from decimal import Decimal

from bank.domain.models.transactions import (
    Transaction,
    TransactionKind,
    TransactionSummary,
)


def replay_balance(transactions: Iterable[Transaction]) -> Decimal:
    """Return the balance obtained by replaying transactions from zero."""
    return sum(
        (transaction.signed_amount for transaction in transactions),
        start=Decimal("0"),
    )


def running_balances(
    transactions: Iterable[Transaction],
) -> list[tuple[Transaction, Decimal]]:
    """Return each transaction, oldest first, with the balance after it."""
    ordered = sorted(
        transactions,
        key=lambda transaction: transaction.created_at,
    )
    balance = Decimal("0")
    history = []
    for transaction in ordered:
        balance += transaction.signed_amount
        history.append((transaction, balance))
    return history


def summarize_transactions(
    account_id: str,
    current_balance: Decimal,
    transactions: Iterable[Transaction],
) -> TransactionSummary:
    """Aggregate deposit and withdrawal totals for an account."""
    total = 0
    deposits = Decimal("0")
    withdrawals = Decimal("0")
    last_at = None
    for transaction in transactions:
        total += 1
        if transaction.kind is TransactionKind.DEPOSIT:
            deposits += transaction.amount
        else:
            withdrawals += transaction.amount
        if last_at is None or transaction.created_at > last_at:
            last_at = transaction.created_at
    return TransactionSummary(
        account_id=account_id,
        total_transactions=total,
        total_deposits=deposits,
        total_withdrawals=withdrawals,
        current_balance=current_balance,
        last_transaction_at=last_at,
    )


__all__ = ["replay_balance", "running_balances", "summarize_transactions"]
