"""Composition root for wiring stores and use cases."""

from dataclasses import dataclass

from bank.application.locking import AccountLockRegistry
from bank.application.ports.database import (
    DatabaseEnginePort,
    DocumentDatabasePort,
)
from bank.application.ports.exchange_rates import ExchangeRatesPort
from bank.application.use_cases.create_account import CreateAccountUseCase
from bank.application.use_cases.get_account_transactions import (
    GetTransactionSummaryUseCase,
    ListAccountTransactionsUseCase,
)
from bank.application.use_cases.get_accounts import (
    GetAccountUseCase,
    ListAccountsUseCase,
)
from bank.application.use_cases.get_exchange_rate import (
    GetExchangeRateUseCase,
)
from bank.application.use_cases.post_transaction import PostTransactionUseCase
from bank.application.use_cases.verify_ledger import VerifyLedgerUseCase
from bank.infrastructure.logging.logger import (
    get_app_logger,
    get_audit_logger,
)
from bank.infrastructure.repository_factory import (
    BankRepositories,
    create_repositories,
)
from bank.infrastructure.settings import BankSettings


@dataclass(frozen=True)
class BankServices:
    """Use cases built once over a single pair of stores."""

    repositories: BankRepositories
    post_transaction: PostTransactionUseCase
    create_account: CreateAccountUseCase
    get_account: GetAccountUseCase
    list_accounts: ListAccountsUseCase
    list_transactions: ListAccountTransactionsUseCase
    get_summary: GetTransactionSummaryUseCase
    verify_ledger: VerifyLedgerUseCase
    get_exchange_rate: GetExchangeRateUseCase


def build_database_adapter(
    settings: BankSettings | None = None,
) -> DatabaseEnginePort:
    """Return the relational database adapter instance."""
    from bank.infrastructure.db import SqlAlchemyDatabaseEngineAdapter

    return SqlAlchemyDatabaseEngineAdapter(settings or BankSettings.from_env())


def build_document_adapter(
    settings: BankSettings | None = None,
) -> DocumentDatabasePort:
    """Return the document database adapter instance."""
    from bank.infrastructure.mongodb import PyMongoDatabaseAdapter

    return PyMongoDatabaseAdapter(settings or BankSettings.from_env())


def build_exchange_rates_client(
    settings: BankSettings | None = None,
) -> ExchangeRatesPort:
    """Return the exchange-rate provider client."""
    from bank.infrastructure.exchange_rates import HttpxExchangeRatesClient

    resolved_settings = settings or BankSettings.from_env()
    return HttpxExchangeRatesClient(
        resolved_settings.exchange_api_url,
        logger=get_app_logger(),
    )


def build_repositories(
    settings: BankSettings | None = None,
) -> BankRepositories:
    """Return the stores for the configured backend."""
    resolved_settings = settings or BankSettings.from_env()
    db_port = None
    document_port = None
    if resolved_settings.backend == "postgres":
        db_port = build_database_adapter(resolved_settings)
    elif resolved_settings.backend == "mongodb":
        document_port = build_document_adapter(resolved_settings)
    return create_repositories(
        resolved_settings,
        db_port=db_port,
        document_port=document_port,
        logger=get_app_logger(),
    )


def build_services(
    settings: BankSettings | None = None,
    repositories: BankRepositories | None = None,
    exchange_rates: ExchangeRatesPort | None = None,
) -> BankServices:
    """Return every use case wired to one set of stores.

    Args:
        settings: Optional settings; read from the environment if absent.
        repositories: Optional stores; built from settings if absent.
        exchange_rates: Optional rate provider; built from settings if
            absent.

    Returns:
        BankServices: Use cases sharing stores and the account lock registry.
    """
    resolved_settings = settings or BankSettings.from_env()
    resolved_repositories = repositories or build_repositories(
        resolved_settings
    )
    logger = get_app_logger()
    accounts = resolved_repositories.accounts
    transactions = resolved_repositories.transactions
    post_transaction = PostTransactionUseCase(
        accounts,
        transactions,
        locks=AccountLockRegistry(),
        max_conflict_retries=resolved_settings.max_conflict_retries,
        logger=logger,
        audit_logger=get_audit_logger(),
    )
    return BankServices(
        repositories=resolved_repositories,
        post_transaction=post_transaction,
        create_account=CreateAccountUseCase(
            accounts,
            post_transaction,
            logger=logger,
        ),
        get_account=GetAccountUseCase(accounts),
        list_accounts=ListAccountsUseCase(accounts, logger=logger),
        list_transactions=ListAccountTransactionsUseCase(
            accounts,
            transactions,
        ),
        get_summary=GetTransactionSummaryUseCase(accounts, transactions),
        verify_ledger=VerifyLedgerUseCase(
            accounts,
            transactions,
            logger=logger,
        ),
        get_exchange_rate=GetExchangeRateUseCase(
            exchange_rates
            or build_exchange_rates_client(resolved_settings),
            logger=logger,
        ),
    )


__all__ = [
    "BankServices",
    "build_database_adapter",
    "build_document_adapter",
    "build_exchange_rates_client",
    "build_repositories",
    "build_services",
]
