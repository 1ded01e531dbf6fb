"""Domain errors raised by policies, stores and use cases.

Caller-input errors (validation, insufficient funds, unknown accounts) are
raised before any mutation. Store errors wrap driver exceptions so that use
cases never depend on a concrete backend. TransactionRecordingFailedError is
the only error that reports a mutation which may not have been undone.
"""

from decimal import Decimal


class BankError(Exception):
    """Base class for bank domain errors."""


class ValidationError(BankError):
    """Raised when caller input fails validation."""


class InvalidAmountError(ValidationError):
    """Raised when an amount is negative, not finite, or too precise."""


class InvalidOperationKindError(ValidationError):
    """Raised when a transaction kind is neither deposit nor withdrawal."""

    def __init__(self, kind) -> None:
        super().__init__(f"Invalid transaction type: {kind!r}")
        self.kind = kind


class InvalidAccountError(ValidationError):
    """Raised when account attributes (name, currency) are invalid."""


class InsufficientFundsError(BankError):
    """Raised when a withdrawal would drive the balance below zero."""

    def __init__(self, balance: Decimal, amount: Decimal) -> None:
        super().__init__(
            f"Insufficient funds: balance {balance} is less than {amount}"
        )
        self.balance = balance
        self.amount = amount


class AccountNotFoundError(BankError):
    """Raised when the requested account cannot be found."""

    def __init__(self, account_id: str) -> None:
        super().__init__(f"Account not found: {account_id}")
        self.account_id = account_id


class CurrencyNotFoundError(BankError):
    """Raised when the rate provider does not quote the target currency."""

    def __init__(self, base: str, target: str) -> None:
        super().__init__(f"Currency not found: {target} (quoted from {base})")
        self.base = base
        self.target = target


class ExchangeRateUnavailableError(BankError):
    """Raised when the rate provider cannot be reached or decoded."""


class StoreUnavailableError(BankError):
    """Raised when a backing store cannot complete a request."""


class ConcurrentUpdateError(StoreUnavailableError):
    """Raised when balance writes keep losing version checks."""


class BalanceConflictError(BankError):
    """Raised by stores when the expected account version is stale."""

    def __init__(
        self,
        account_id: str,
        expected_version: int,
        actual_version: int | None = None,
    ) -> None:
        super().__init__(
            f"Balance version conflict for account {account_id}: "
            f"expected {expected_version}, found {actual_version}"
        )
        self.account_id = account_id
        self.expected_version = expected_version
        self.actual_version = actual_version


class TransactionRecordingFailedError(BankError):
    """Raised when the balance was committed but the record was not.

    Attributes:
        account_id: Account whose balance was mutated.
        cause: Error raised by the transaction store append.
        compensation_error: Error raised while restoring the balance, if any.
    """

    def __init__(
        self,
        account_id: str,
        cause: Exception,
        compensation_error: Exception | None = None,
    ) -> None:
        message = (
            f"Failed to record transaction for account {account_id}: {cause}"
        )
        if compensation_error is not None:
            message += (
                "; balance restore also failed, account is inconsistent: "
                f"{compensation_error}"
            )
        super().__init__(message)
        self.account_id = account_id
        self.cause = cause
        self.compensation_error = compensation_error

    @property
    def compensated(self) -> bool:
        """Return True when the prior balance was restored."""
        return self.compensation_error is None


__all__ = [
    "BankError",
    "ValidationError",
    "InvalidAmountError",
    "InvalidOperationKindError",
    "InvalidAccountError",
    "InsufficientFundsError",
    "AccountNotFoundError",
    "CurrencyNotFoundError",
    "ExchangeRateUnavailableError",
    "StoreUnavailableError",
    "ConcurrentUpdateError",
    "BalanceConflictError",
    "TransactionRecordingFailedError",
]
