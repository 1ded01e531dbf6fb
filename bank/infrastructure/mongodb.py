"""MongoDB client helpers for the document bank stores."""

from typing import Optional

from pymongo import MongoClient
from pymongo.database import Database

from bank.application.ports.database import DocumentDatabasePort
from bank.infrastructure.settings import BankSettings

CONNECT_TIMEOUT_MS = 10_000

_mongo_client: Optional[MongoClient] = None


def _create_client(uri: str) -> MongoClient:
    """Create a MongoDB client with bounded connection timeouts.

    Args:
        uri: MongoDB connection URI.

    Returns:
        MongoClient: Client that lazily connects on first use.
    """
    return MongoClient(
        uri,
        serverSelectionTimeoutMS=CONNECT_TIMEOUT_MS,
        connectTimeoutMS=CONNECT_TIMEOUT_MS,
        tz_aware=True,
    )


def get_mongo_client(uri: str) -> MongoClient:
    """Get a singleton MongoDB client.

    Args:
        uri: MongoDB connection URI used on first call.

    Returns:
        MongoClient: Shared client instance.
    """
    global _mongo_client
    if _mongo_client is None:
        _mongo_client = _create_client(uri)
    return _mongo_client


class PyMongoDatabaseAdapter(DocumentDatabasePort):
    """DocumentDatabasePort implementation backed by pymongo."""

    def __init__(self, settings: BankSettings | None = None) -> None:
        """Initialize the adapter.

        Args:
            settings: Optional settings; read from the environment if absent.
        """
        self._settings = settings or BankSettings.from_env()

    def get_bank_database(self) -> Database:
        """Get the configured bank database.

        Returns:
            Database: pymongo database handle.
        """
        client = get_mongo_client(self._settings.mongodb_uri)
        return client[self._settings.mongodb_database]


__all__ = ["get_mongo_client", "PyMongoDatabaseAdapter"]
