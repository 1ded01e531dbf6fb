"""Port for transaction storage."""

from decimal import Decimal
from typing import Protocol

from bank.domain.models.transactions import (
    Transaction,
    TransactionKind,
    TransactionSummary,
)


class TransactionsRepositoryPort(Protocol):
    """Port exposing append-mostly access to transaction records."""

    def append(
        self,
        account_id: str,
        amount: Decimal,
        kind: TransactionKind,
    ) -> Transaction:
        """Store a new transaction; the store assigns id and timestamps."""

    def get_by_id(self, transaction_id: str) -> Transaction | None:
        """Return a transaction by id, or None."""

    def get_by_account_id(self, account_id: str) -> list[Transaction]:
        """Return transactions for an account, newest first."""

    def get_all(self) -> list[Transaction]:
        """Return every stored transaction."""

    def update(
        self,
        transaction_id: str,
        amount: Decimal,
        kind: TransactionKind,
    ) -> Transaction | None:
        """Rewrite amount and kind of a stored transaction, or None."""

    def delete(self, transaction_id: str) -> bool:
        """Delete a transaction and return True when a record was removed."""

    def get_summary(
        self,
        account_id: str,
        current_balance: Decimal,
    ) -> TransactionSummary:
        """Return aggregated figures for an account's transactions."""


__all__ = ["TransactionsRepositoryPort"]
