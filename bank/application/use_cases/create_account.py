"""Use case opening a new account."""

from decimal import Decimal

from bank.application.ports.accounts_repository import AccountsRepositoryPort
from bank.application.use_cases.post_transaction import PostTransactionUseCase
from bank.domain.constants import DEFAULT_CURRENCY
from bank.domain.errors import BankError, StoreUnavailableError
from bank.domain.models.accounts import Account
from bank.domain.models.transactions import TransactionKind
from bank.domain.services.validation import (
    normalize_currency_code,
    validate_account_name,
    validate_amount,
)
from bank.infrastructure.logging.logger import get_app_logger


class CreateAccountUseCase:
    """Open an account and book its opening balance as a deposit.

    The account is stored at zero and the opening balance goes through the
    posting workflow, so replaying the account's transactions always yields
    its stored balance. When the opening deposit fails the new account is
    deleted again before the error propagates.
    """

    def __init__(
        self,
        accounts: AccountsRepositoryPort,
        post_transaction: PostTransactionUseCase,
        logger=None,
    ) -> None:
        """Initialize the use case.

        Args:
            accounts: Store receiving the new account.
            post_transaction: Workflow used for the opening deposit.
            logger: Optional logger compatible with logging.Logger-like API.
        """
        self._accounts = accounts
        self._post_transaction = post_transaction
        self._logger = logger or get_app_logger()

    def execute(
        self,
        name: str,
        balance=Decimal("0"),
        currency: str | None = DEFAULT_CURRENCY,
    ) -> Account:
        """Create the account and return its stored snapshot.

        Args:
            name: Display name.
            balance: Opening balance.
            currency: Three-letter currency code.

        Returns:
            Account: The account after the opening deposit.

        Raises:
            ValidationError: If name, currency or balance is invalid.
            StoreUnavailableError: If a store fails.
            TransactionRecordingFailedError: If the opening deposit was not
                recorded.
        """
        account_name = validate_account_name(name)
        currency_code = normalize_currency_code(currency or DEFAULT_CURRENCY)
        opening_balance = validate_amount(balance)

        account = self._accounts.create(
            account_name,
            Decimal("0.00"),
            currency_code,
        )
        self._logger.info(f"Created account {account.id} ({account_name})")
        if opening_balance > 0:
            try:
                self._post_transaction.execute(
                    account.id,
                    opening_balance,
                    TransactionKind.DEPOSIT,
                )
            except BankError:
                self._discard(account)
                raise
        return self._accounts.get_by_id(account.id) or account

    def _discard(self, account: Account) -> None:
        """Delete an account whose opening deposit was not booked."""
        try:
            self._accounts.delete(account.id)
        except StoreUnavailableError as exc:
            self._logger.error(
                f"Could not remove account {account.id} after its opening "
                f"deposit failed: {exc}"
            )
            return
        self._logger.warning(
            f"Removed account {account.id} after its opening deposit failed"
        )


__all__ = ["CreateAccountUseCase"]
