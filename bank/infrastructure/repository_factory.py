"""Factory helpers to select the bank storage backend."""

from dataclasses import dataclass

from bank.application.ports.accounts_repository import AccountsRepositoryPort
from bank.application.ports.database import (
    DatabaseEnginePort,
    DocumentDatabasePort,
)
from bank.application.ports.transactions_repository import (
    TransactionsRepositoryPort,
)
from bank.infrastructure.logging.logger import get_app_logger
from bank.infrastructure.memory_repository import (
    InMemoryAccountsRepository,
    InMemoryTransactionsRepository,
)
from bank.infrastructure.settings import BankSettings, SUPPORTED_BACKENDS


@dataclass(frozen=True)
class BankRepositories:
    """Account and transaction stores sharing one backend."""

    accounts: AccountsRepositoryPort
    transactions: TransactionsRepositoryPort


def create_repositories(
    settings: BankSettings | None = None,
    db_port: DatabaseEnginePort | None = None,
    document_port: DocumentDatabasePort | None = None,
    logger=None,
    prepare: bool = True,
) -> BankRepositories:
    """Return the store pair for the configured backend.

    Args:
        settings: Optional settings; read from the environment if absent.
        db_port: Optional engine port for the postgres backend.
        document_port: Optional database port for the mongodb backend.
        logger: Optional logger compatible with logging.Logger-like API.
        prepare: Whether to create tables or indexes before returning.

    Returns:
        BankRepositories: Concrete stores for the selected backend.

    Raises:
        ValueError: If the backend is not supported.
    """
    resolved_logger = logger or get_app_logger()
    resolved_settings = settings or BankSettings.from_env()
    backend = resolved_settings.backend

    if backend == "postgres":
        from bank.infrastructure.db import SqlAlchemyDatabaseEngineAdapter
        from bank.infrastructure.postgres_repository import (
            SqlAlchemyAccountsRepository,
            SqlAlchemyTransactionsRepository,
            prepare_schema,
        )

        resolved_db = db_port or SqlAlchemyDatabaseEngineAdapter(
            resolved_settings
        )
        if prepare:
            prepare_schema(resolved_db, logger=resolved_logger)
        resolved_logger.info("Using PostgreSQL bank stores")
        return BankRepositories(
            accounts=SqlAlchemyAccountsRepository(
                resolved_db,
                logger=resolved_logger,
            ),
            transactions=SqlAlchemyTransactionsRepository(
                resolved_db,
                logger=resolved_logger,
            ),
        )

    if backend == "mongodb":
        from bank.infrastructure.mongodb import PyMongoDatabaseAdapter
        from bank.infrastructure.mongodb_repository import (
            MongoAccountsRepository,
            MongoTransactionsRepository,
            prepare_indexes,
        )

        resolved_documents = document_port or PyMongoDatabaseAdapter(
            resolved_settings
        )
        if prepare:
            prepare_indexes(resolved_documents, logger=resolved_logger)
        resolved_logger.info("Using MongoDB bank stores")
        return BankRepositories(
            accounts=MongoAccountsRepository(
                resolved_documents,
                logger=resolved_logger,
            ),
            transactions=MongoTransactionsRepository(
                resolved_documents,
                logger=resolved_logger,
            ),
        )

    if backend == "memory":
        resolved_logger.warning(
            "Using in-memory bank stores; data is lost on restart"
        )
        return BankRepositories(
            accounts=InMemoryAccountsRepository(),
            transactions=InMemoryTransactionsRepository(),
        )

    raise ValueError(
        f"Unsupported bank backend: {backend}. "
        f"Expected one of {', '.join(SUPPORTED_BACKENDS)}."
    )


__all__ = ["BankRepositories", "create_repositories"]
