"""SQLAlchemy engine helpers for the relational bank stores.

Engines are pooled and shared per database URL, so every store built for the
same settings reuses one connection pool.
"""

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.pool import QueuePool

from bank.application.ports.database import DatabaseEnginePort
from bank.infrastructure.settings import BankSettings

_engines: dict[str, Engine] = {}


def _create_engine(db_url: str, pool_size: int, max_overflow: int) -> Engine:
    """Create a pooled SQLAlchemy engine for the bank database.

    Args:
        db_url: Fully qualified database URL (including driver and credentials)
        pool_size: Connections kept open in the pool.
        max_overflow: Extra connections allowed under load.

    Returns:
        Engine: Engine with pre-ping health checks enabled.
    """
    return create_engine(
        db_url,
        poolclass=QueuePool,
        pool_size=pool_size,
        max_overflow=max_overflow,
        pool_pre_ping=True,
        future=True,
    )


def get_bank_engine(settings: BankSettings) -> Engine:
    """Return the shared engine for the configured database URL.

    Args:
        settings: Settings carrying the URL and pool sizes.

    Returns:
        Engine: Engine created on first use for this URL.

    Raises:
        RuntimeError: If BANK_DB_URL is not configured.
    """
    if not settings.db_url:
        raise RuntimeError("Missing environment variable: BANK_DB_URL")
    engine = _engines.get(settings.db_url)
    if engine is None:
        engine = _create_engine(
            settings.db_url,
            settings.db_pool_size,
            settings.db_max_overflow,
        )
        _engines[settings.db_url] = engine
    return engine


class SqlAlchemyDatabaseEngineAdapter(DatabaseEnginePort):
    """DatabaseEnginePort implementation backed by a SQLAlchemy engine."""

    def __init__(self, settings: BankSettings | None = None) -> None:
        """Initialize the adapter.

        Args:
            settings: Optional settings; read from the environment if absent.
        """
        self._settings = settings or BankSettings.from_env()

    def get_bank_engine(self) -> Engine:
        """Get the engine for the bank database.

        Returns:
            Engine: SQLAlchemy engine connected to PostgreSQL.
        """
        return get_bank_engine(self._settings)


__all__ = ["get_bank_engine", "SqlAlchemyDatabaseEngineAdapter"]
