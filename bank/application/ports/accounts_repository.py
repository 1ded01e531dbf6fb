"""Port for account storage."""

from decimal import Decimal
from typing import Protocol

from bank.domain.models.accounts import Account, AccountUpdate


class AccountsRepositoryPort(Protocol):
    """Port exposing account records and atomic balance writes.

    No locking is implied by get_by_id; callers that read then write must
    pass the version they read to update_balance.
    """

    def create(self, name: str, balance: Decimal, currency: str) -> Account:
        """Store a new account and return it with id and timestamps set."""

    def get_by_id(self, account_id: str) -> Account | None:
        """Return the current snapshot of an account, or None."""

    def get_all(self) -> list[Account]:
        """Return every stored account."""

    def get_by_name(self, name: str) -> Account | None:
        """Return the account with the given display name, or None."""

    def update(
        self,
        account_id: str,
        update: AccountUpdate,
    ) -> Account | None:
        """Apply a partial update and return the result, or None."""

    def delete(self, account_id: str) -> bool:
        """Delete an account and return True when a record was removed."""

    def update_balance(
        self,
        account_id: str,
        new_balance: Decimal,
        expected_version: int | None = None,
    ) -> Account:
        """Atomically replace the balance and bump version and updated_at.

        Raises:
            AccountNotFoundError: If the account does not exist.
            BalanceConflictError: If expected_version is stale.
            StoreUnavailableError: On transport errors.
        """


__all__ = ["AccountsRepositoryPort"]
