"""Use cases reading account snapshots."""

from bank.application.ports.accounts_repository import AccountsRepositoryPort
from bank.domain.errors import AccountNotFoundError
from bank.domain.models.accounts import Account
from bank.infrastructure.logging.logger import get_app_logger


class GetAccountUseCase:
    """Return one account or raise AccountNotFoundError."""

    def __init__(self, accounts: AccountsRepositoryPort) -> None:
        self._accounts = accounts

    def execute(self, account_id: str) -> Account:
        account = self._accounts.get_by_id(account_id)
        if account is None:
            raise AccountNotFoundError(account_id)
        return account


class ListAccountsUseCase:
    """Return every account ordered by name."""

    def __init__(self, accounts: AccountsRepositoryPort, logger=None) -> None:
        """Initialize the use case.

        Args:
            accounts: Store holding the accounts.
            logger: Optional logger compatible with logging.Logger-like API.
        """
        self._accounts = accounts
        self._logger = logger or get_app_logger()

    def execute(self) -> list[Account]:
        accounts = sorted(
            self._accounts.get_all(),
            key=lambda account: (account.name.lower(), account.id),
        )
        self._logger.info(f"Retrieved {len(accounts)} accounts")
        return accounts


__all__ = ["GetAccountUseCase", "ListAccountsUseCase"]
