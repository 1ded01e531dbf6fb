"""Domain models package."""

from .accounts import Account, AccountUpdate
from .exchange import ExchangeRate
from .transactions import Transaction, TransactionKind, TransactionSummary

__all__ = [
    "Account",
    "AccountUpdate",
    "ExchangeRate",
    "Transaction",
    "TransactionKind",
    "TransactionSummary",
]
