"""Shared fixtures for the bank tests."""

import pytest

from bank.infrastructure.memory_repository import (
    InMemoryAccountsRepository,
    InMemoryTransactionsRepository,
)


@pytest.fixture
def accounts() -> InMemoryAccountsRepository:
    return InMemoryAccountsRepository()


@pytest.fixture
def transactions() -> InMemoryTransactionsRepository:
    return InMemoryTransactionsRepository()
