"""Application use cases package."""

from .post_transaction import PostTransactionUseCase
from .create_account import CreateAccountUseCase
from .get_accounts import GetAccountUseCase, ListAccountsUseCase
from .get_account_transactions import (
    GetTransactionSummaryUseCase,
    ListAccountTransactionsUseCase,
)
from .get_exchange_rate import GetExchangeRateUseCase
from .verify_ledger import LedgerMismatch, LedgerReport, VerifyLedgerUseCase

__all__ = [
    "PostTransactionUseCase",
    "CreateAccountUseCase",
    "GetAccountUseCase",
    "ListAccountsUseCase",
    "ListAccountTransactionsUseCase",
    "GetTransactionSummaryUseCase",
    "GetExchangeRateUseCase",
    "VerifyLedgerUseCase",
    "LedgerReport",
    "LedgerMismatch",
]
