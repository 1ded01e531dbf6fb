"""Domain package for business rules and core models."""

from .constants import DEFAULT_CURRENCY
from .errors import (
    AccountNotFoundError,
    BalanceConflictError,
    BankError,
    ConcurrentUpdateError,
    InsufficientFundsError,
    InvalidAccountError,
    InvalidAmountError,
    InvalidOperationKindError,
    StoreUnavailableError,
    TransactionRecordingFailedError,
    ValidationError,
)
from .models import (
    Account,
    AccountUpdate,
    Transaction,
    TransactionKind,
    TransactionSummary,
)
from .policies import decide
from .services import (
    normalize_currency_code,
    parse_transaction_kind,
    replay_balance,
    running_balances,
    summarize_transactions,
    validate_account_name,
    validate_amount,
)

__all__ = [
    "DEFAULT_CURRENCY",
    "Account",
    "AccountUpdate",
    "Transaction",
    "TransactionKind",
    "TransactionSummary",
    "AccountNotFoundError",
    "BalanceConflictError",
    "BankError",
    "ConcurrentUpdateError",
    "InsufficientFundsError",
    "InvalidAccountError",
    "InvalidAmountError",
    "InvalidOperationKindError",
    "StoreUnavailableError",
    "TransactionRecordingFailedError",
    "ValidationError",
    "decide",
    "normalize_currency_code",
    "parse_transaction_kind",
    "replay_balance",
    "running_balances",
    "summarize_transactions",
    "validate_account_name",
    "validate_amount",
]
