"""Domain services package."""

from .ledger import replay_balance, running_balances, summarize_transactions
from .validation import (
    normalize_currency_code,
    parse_transaction_kind,
    validate_account_name,
    validate_amount,
)

__all__ = [
    "replay_balance",
    "running_balances",
    "summarize_transactions",
    "normalize_currency_code",
    "parse_transaction_kind",
    "validate_account_name",
    "validate_amount",
]
