"""Use case posting a deposit or withdrawal against an account.

The posting runs as a short sequence against two independent stores:

* load the account snapshot;
* let the balance policy compute the new balance;
* commit it with a version-checked balance write;
* append the transaction record.

If the append fails after the balance was committed, the previous balance is
written back once. Nothing makes that write-back atomic with the failed
append, so its own failure is reported rather than hidden.
"""

from decimal import Decimal

from bank.application.locking import AccountLockRegistry
from bank.application.ports.accounts_repository import AccountsRepositoryPort
from bank.application.ports.transactions_repository import (
    TransactionsRepositoryPort,
)
from bank.domain.errors import (
    AccountNotFoundError,
    BalanceConflictError,
    ConcurrentUpdateError,
    InsufficientFundsError,
    TransactionRecordingFailedError,
    ValidationError,
)
from bank.domain.models.accounts import Account
from bank.domain.models.transactions import Transaction, TransactionKind
from bank.domain.policies.balance import decide
from bank.domain.services.validation import (
    parse_transaction_kind,
    validate_amount,
)
from bank.infrastructure.logging.logger import (
    get_app_logger,
    get_audit_logger,
)

DEFAULT_MAX_CONFLICT_RETRIES = 5


class PostTransactionUseCase:
    """Apply a deposit or withdrawal and record it."""

    def __init__(
        self,
        accounts: AccountsRepositoryPort,
        transactions: TransactionsRepositoryPort,
        locks: AccountLockRegistry | None = None,
        max_conflict_retries: int = DEFAULT_MAX_CONFLICT_RETRIES,
        logger=None,
        audit_logger=None,
    ) -> None:
        """Initialize the use case.

        Args:
            accounts: Store holding account balances.
            transactions: Store receiving transaction records.
            locks: Registry shared by every poster in the process; a private
                one is created when omitted.
            max_conflict_retries: Extra attempts after a version conflict.
            logger: Optional logger compatible with logging.Logger-like API.
            audit_logger: Optional logger receiving one line per outcome.
        """
        self._accounts = accounts
        self._transactions = transactions
        self._locks = locks if locks is not None else AccountLockRegistry()
        self._max_conflict_retries = max(0, max_conflict_retries)
        self._logger = logger or get_app_logger()
        self._audit_logger = audit_logger or get_audit_logger()

    def execute(self, account_id: str, amount, kind) -> Transaction:
        """Post the operation and return the recorded transaction.

        Args:
            account_id: Target account.
            amount: Non-negative amount with at most two decimal places.
            kind: TransactionKind or its string value.

        Returns:
            Transaction: The stored transaction record.

        Raises:
            ValidationError: If amount or kind is invalid.
            AccountNotFoundError: If the account does not exist.
            InsufficientFundsError: If a withdrawal exceeds the balance.
            StoreUnavailableError: If a store fails before anything changed.
            ConcurrentUpdateError: If version conflicts outlast the retries.
            TransactionRecordingFailedError: If the record could not be
                appended after the balance was committed.
        """
        try:
            operation = parse_transaction_kind(kind)
            value = validate_amount(amount)
        except ValidationError as exc:
            self._logger.warning(
                f"Rejected posting for account {account_id}: {exc}"
            )
            raise

        self._logger.info(
            f"Processing {operation.value} of {value} "
            f"for account {account_id}"
        )
        with self._locks.hold(account_id):
            for attempt in range(self._max_conflict_retries + 1):
                account = self._load_account(account_id)
                new_balance = self._decide(account, operation, value)
                try:
                    committed = self._accounts.update_balance(
                        account_id,
                        new_balance,
                        expected_version=account.version,
                    )
                except BalanceConflictError as exc:
                    self._logger.warning(
                        f"Balance conflict on attempt {attempt + 1} "
                        f"for account {account_id}: {exc}"
                    )
                    continue
                return self._record(account, committed, operation, value)

        self._logger.error(
            f"Giving up on account {account_id} after "
            f"{self._max_conflict_retries + 1} conflicting attempts"
        )
        raise ConcurrentUpdateError(
            f"Account {account_id} kept changing during the posting"
        )

    def _load_account(self, account_id: str) -> Account:
        account = self._accounts.get_by_id(account_id)
        if account is None:
            self._logger.warning(f"Account not found: {account_id}")
            raise AccountNotFoundError(account_id)
        return account

    def _decide(
        self,
        account: Account,
        operation: TransactionKind,
        value: Decimal,
    ) -> Decimal:
        try:
            return decide(account.balance, operation, value)
        except InsufficientFundsError:
            self._logger.warning(
                f"Insufficient funds for account {account.id}: "
                f"balance {account.balance}, requested {value}"
            )
            self._audit_logger.warning(
                f"REJECTED account={account.id} type={operation.value} "
                f"amount={value} balance={account.balance}"
            )
            raise

    def _record(
        self,
        account: Account,
        committed: Account,
        operation: TransactionKind,
        value: Decimal,
    ) -> Transaction:
        """Append the record, restoring the prior balance if that fails."""
        try:
            transaction = self._transactions.append(
                account.id,
                value,
                operation,
            )
        except Exception as exc:
            self._logger.error(
                f"Failed to record {operation.value} for account "
                f"{account.id} after balance update: {exc}"
            )
            compensation_error = self._compensate(account, committed)
            raise TransactionRecordingFailedError(
                account.id,
                exc,
                compensation_error,
            ) from exc

        self._logger.info(
            f"Posted {operation.value} {transaction.id} for account "
            f"{account.id}: {account.balance} -> {committed.balance}"
        )
        self._audit_logger.info(
            f"POSTED id={transaction.id} account={account.id} "
            f"type={operation.value} amount={value} "
            f"balance_before={account.balance} "
            f"balance_after={committed.balance}"
        )
        return transaction

    def _compensate(
        self,
        account: Account,
        committed: Account,
    ) -> Exception | None:
        """Write the prior balance back; return the error if that fails."""
        try:
            self._accounts.update_balance(
                account.id,
                account.balance,
                expected_version=committed.version,
            )
        except Exception as exc:
            self._logger.critical(
                f"Could not restore balance {account.balance} for account "
                f"{account.id}; stored balance may be {committed.balance} "
                f"without a matching transaction: {exc}"
            )
            self._audit_logger.error(
                f"INCONSISTENT account={account.id} "
                f"expected_balance={account.balance} "
                f"committed_balance={committed.balance}"
            )
            return exc
        self._logger.warning(
            f"Restored balance {account.balance} for account {account.id}"
        )
        self._audit_logger.warning(
            f"COMPENSATED account={account.id} "
            f"restored_balance={account.balance}"
        )
        return None


__all__ = ["PostTransactionUseCase", "DEFAULT_MAX_CONFLICT_RETRIES"]
