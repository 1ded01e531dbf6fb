"""Database ports for the bank stores.

This module defines the application-layer protocols for reaching the
relational and document databases. Infrastructure implementations provide
concrete adapters that satisfy these ports.
"""

from typing import Any, Protocol

from sqlalchemy.engine import Engine


class DatabaseEnginePort(Protocol):
    """Port exposing the SQL engine used by the relational stores."""

    def get_bank_engine(self) -> Engine:
        """Get the engine for the bank database.

        Returns:
            Engine: SQLAlchemy engine connected to PostgreSQL.
        """


class DocumentDatabasePort(Protocol):
    """Port exposing the document database used by the MongoDB stores."""

    def get_bank_database(self) -> Any:
        """Get the bank database handle.

        Returns:
            Any: pymongo Database exposing the accounts and transactions
            collections.
        """


__all__ = ["DatabaseEnginePort", "DocumentDatabasePort"]
