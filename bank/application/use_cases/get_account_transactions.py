"""Use cases reading an account's transaction history."""

from bank.application.ports.accounts_repository import AccountsRepositoryPort
from bank.application.ports.transactions_repository import (
    TransactionsRepositoryPort,
)
from bank.domain.errors import AccountNotFoundError
from bank.domain.models.transactions import Transaction, TransactionSummary


class ListAccountTransactionsUseCase:
    """Return an account's transactions, newest first."""

    def __init__(
        self,
        accounts: AccountsRepositoryPort,
        transactions: TransactionsRepositoryPort,
    ) -> None:
        self._accounts = accounts
        self._transactions = transactions

    def execute(self, account_id: str) -> list[Transaction]:
        """Return the history of an existing account.

        Raises:
            AccountNotFoundError: If the account does not exist.
        """
        if self._accounts.get_by_id(account_id) is None:
            raise AccountNotFoundError(account_id)
        return self._transactions.get_by_account_id(account_id)


class GetTransactionSummaryUseCase:
    """Return deposit and withdrawal totals for an account."""

    def __init__(
        self,
        accounts: AccountsRepositoryPort,
        transactions: TransactionsRepositoryPort,
    ) -> None:
        self._accounts = accounts
        self._transactions = transactions

    def execute(self, account_id: str) -> TransactionSummary:
        account = self._accounts.get_by_id(account_id)
        if account is None:
            raise AccountNotFoundError(account_id)
        return self._transactions.get_summary(account_id, account.balance)


__all__ = ["ListAccountTransactionsUseCase", "GetTransactionSummaryUseCase"]
