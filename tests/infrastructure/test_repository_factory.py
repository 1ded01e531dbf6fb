"""Tests for the storage backend factory."""

from unittest.mock import MagicMock

import pytest

from bank.infrastructure import mongodb_repository, postgres_repository
from bank.infrastructure.memory_repository import (
    InMemoryAccountsRepository,
    InMemoryTransactionsRepository,
)
from bank.infrastructure.repository_factory import create_repositories
from bank.infrastructure.settings import BankSettings


def test_memory_backend_returns_in_memory_stores() -> None:
    """The memory backend should build the dict-backed stores."""
    logger = MagicMock()

    repositories = create_repositories(
        BankSettings(backend="memory"),
        logger=logger,
    )

    assert isinstance(repositories.accounts, InMemoryAccountsRepository)
    assert isinstance(
        repositories.transactions,
        InMemoryTransactionsRepository,
    )
    logger.warning.assert_called_once()


def test_postgres_backend_prepares_schema(monkeypatch) -> None:
    """The postgres backend should create its schema before returning."""
    prepared = []
    monkeypatch.setattr(
        postgres_repository,
        "prepare_schema",
        lambda db_port, logger=None: prepared.append(db_port),
    )
    db_port = MagicMock()

    repositories = create_repositories(
        BankSettings(backend="postgres"),
        db_port=db_port,
        logger=MagicMock(),
    )

    assert prepared == [db_port]
    assert isinstance(
        repositories.accounts,
        postgres_repository.SqlAlchemyAccountsRepository,
    )
    assert isinstance(
        repositories.transactions,
        postgres_repository.SqlAlchemyTransactionsRepository,
    )


def test_postgres_backend_can_skip_preparation(monkeypatch) -> None:
    """prepare=False should skip schema creation."""
    prepare = MagicMock()
    monkeypatch.setattr(postgres_repository, "prepare_schema", prepare)

    create_repositories(
        BankSettings(backend="postgres"),
        db_port=MagicMock(),
        logger=MagicMock(),
        prepare=False,
    )

    prepare.assert_not_called()


def test_mongodb_backend_prepares_indexes(monkeypatch) -> None:
    """The mongodb backend should create its indexes before returning."""
    prepared = []
    monkeypatch.setattr(
        mongodb_repository,
        "prepare_indexes",
        lambda document_port, logger=None: prepared.append(document_port),
    )
    document_port = MagicMock()

    repositories = create_repositories(
        BankSettings(backend="mongodb"),
        document_port=document_port,
        logger=MagicMock(),
    )

    assert prepared == [document_port]
    assert isinstance(
        repositories.accounts,
        mongodb_repository.MongoAccountsRepository,
    )
    assert isinstance(
        repositories.transactions,
        mongodb_repository.MongoTransactionsRepository,
    )


def test_unsupported_backend_raises() -> None:
    """Unknown backends should raise ValueError."""
    with pytest.raises(ValueError, match="Unsupported bank backend"):
        create_repositories(
            BankSettings(backend="sqlite"),
            logger=MagicMock(),
        )
