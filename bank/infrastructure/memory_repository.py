"""In-memory stores used for tests, demos and the memory backend."""

from dataclasses import replace
from datetime import datetime, timezone
from decimal import Decimal
import threading
from uuid import uuid4

from bank.application.ports.accounts_repository import AccountsRepositoryPort
from bank.application.ports.transactions_repository import (
    TransactionsRepositoryPort,
)
from bank.domain.errors import AccountNotFoundError, BalanceConflictError
from bank.domain.models.accounts import Account, AccountUpdate
from bank.domain.models.transactions import (
    Transaction,
    TransactionKind,
    TransactionSummary,
)
from bank.domain.services.ledger import summarize_transactions


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class InMemoryAccountsRepository(AccountsRepositoryPort):
    """Dict-backed account store.

    Each method holds the store lock for its own duration only, so a
    get_by_id followed by update_balance is not atomic; the version check in
    update_balance is what detects interleaved writers.
    """

    def __init__(self) -> None:
        self._accounts: dict[str, Account] = {}
        self._lock = threading.Lock()

    def create(self, name: str, balance: Decimal, currency: str) -> Account:
        now = _utcnow()
        account = Account(
            id=str(uuid4()),
            name=name,
            balance=balance,
            currency=currency,
            created_at=now,
            updated_at=now,
            version=0,
        )
        with self._lock:
            self._accounts[account.id] = account
        return account

    def get_by_id(self, account_id: str) -> Account | None:
        with self._lock:
            return self._accounts.get(account_id)

    def get_all(self) -> list[Account]:
        with self._lock:
            return list(self._accounts.values())

    def get_by_name(self, name: str) -> Account | None:
        with self._lock:
            for account in self._accounts.values():
                if account.name == name:
                    return account
        return None

    def update(
        self,
        account_id: str,
        update: AccountUpdate,
    ) -> Account | None:
        with self._lock:
            account = self._accounts.get(account_id)
            if account is None or update.is_empty():
                return account
            updated = replace(
                account,
                name=update.name if update.name is not None else account.name,
                currency=(
                    update.currency
                    if update.currency is not None
                    else account.currency
                ),
                updated_at=_utcnow(),
            )
            self._accounts[account_id] = updated
            return updated

    def delete(self, account_id: str) -> bool:
        with self._lock:
            return self._accounts.pop(account_id, None) is not None

    def update_balance(
        self,
        account_id: str,
        new_balance: Decimal,
        expected_version: int | None = None,
    ) -> Account:
        if new_balance < 0:
            raise ValueError(
                f"Account balance cannot be negative: {new_balance}"
            )
        with self._lock:
            account = self._accounts.get(account_id)
            if account is None:
                raise AccountNotFoundError(account_id)
            if (expected_version is not None
                    and account.version != expected_version):
                raise BalanceConflictError(
                    account_id,
                    expected_version,
                    account.version,
                )
            updated = replace(
                account,
                balance=new_balance,
                version=account.version + 1,
                updated_at=_utcnow(),
            )
            self._accounts[account_id] = updated
            return updated


class InMemoryTransactionsRepository(TransactionsRepositoryPort):
    """Dict-backed transaction store preserving insertion order."""

    def __init__(self) -> None:
        self._transactions: dict[str, Transaction] = {}
        self._lock = threading.Lock()

    def append(
        self,
        account_id: str,
        amount: Decimal,
        kind: TransactionKind,
    ) -> Transaction:
        now = _utcnow()
        transaction = Transaction(
            id=str(uuid4()),
            account_id=account_id,
            amount=amount,
            kind=TransactionKind(kind),
            created_at=now,
            updated_at=now,
        )
        with self._lock:
            self._transactions[transaction.id] = transaction
        return transaction

    def get_by_id(self, transaction_id: str) -> Transaction | None:
        with self._lock:
            return self._transactions.get(transaction_id)

    def get_by_account_id(self, account_id: str) -> list[Transaction]:
        with self._lock:
            matches = [
                transaction
                for transaction in self._transactions.values()
                if transaction.account_id == account_id
            ]
        return list(reversed(matches))

    def get_all(self) -> list[Transaction]:
        with self._lock:
            return list(self._transactions.values())

    def update(
        self,
        transaction_id: str,
        amount: Decimal,
        kind: TransactionKind,
    ) -> Transaction | None:
        with self._lock:
            transaction = self._transactions.get(transaction_id)
            if transaction is None:
                return None
            updated = replace(
                transaction,
                amount=amount,
                kind=TransactionKind(kind),
                updated_at=_utcnow(),
            )
            self._transactions[transaction_id] = updated
            return updated

    def delete(self, transaction_id: str) -> bool:
        with self._lock:
            return self._transactions.pop(transaction_id, None) is not None

    def get_summary(
        self,
        account_id: str,
        current_balance: Decimal,
    ) -> TransactionSummary:
        return summarize_transactions(
            account_id,
            current_balance,
            self.get_by_account_id(account_id),
        )


__all__ = ["InMemoryAccountsRepository", "InMemoryTransactionsRepository"]
