"""Application ports package."""

from .accounts_repository import AccountsRepositoryPort
from .database import DatabaseEnginePort, DocumentDatabasePort
from .exchange_rates import ExchangeRatesPort
from .transactions_repository import TransactionsRepositoryPort

__all__ = [
    "AccountsRepositoryPort",
    "TransactionsRepositoryPort",
    "DatabaseEnginePort",
    "DocumentDatabasePort",
    "ExchangeRatesPort",
]
