"""Settings helpers for infrastructure adapters."""

from dataclasses import dataclass
import os

import dotenv

from bank.infrastructure.logging.logger import get_app_logger

SUPPORTED_BACKENDS = ("postgres", "mongodb", "memory")

DEFAULT_EXCHANGE_API_URL = "https://api.exchangerate-api.com/v4/latest"


@dataclass(frozen=True)
class BankSettings:
    """Settings for selecting and reaching the storage backend.

    Attributes:
        backend: Backend identifier (postgres, mongodb, or memory).
        db_url: SQLAlchemy URL for the postgres backend.
        db_pool_size: Connections kept in the postgres pool.
        db_max_overflow: Extra postgres connections allowed under load.
        mongodb_uri: Connection URI for the MongoDB backend.
        mongodb_database: Database name for the MongoDB backend.
        max_conflict_retries: Times a posting re-reads the account after a
            balance version conflict before giving up.
        http_host: Bind address for the HTTP adapter.
        http_port: Bind port for the HTTP adapter.
        exchange_api_url: Endpoint of the exchange-rate provider.
    """

    backend: str = "postgres"
    db_url: str | None = None
    db_pool_size: int = 5
    db_max_overflow: int = 5
    mongodb_uri: str = "mongodb://localhost:27017"
    mongodb_database: str = "bankdb"
    max_conflict_retries: int = 5
    http_host: str = "0.0.0.0"
    http_port: int = 8080
    exchange_api_url: str = DEFAULT_EXCHANGE_API_URL

    @classmethod
    def from_env(cls) -> "BankSettings":
        """Build settings from environment variables and an optional .env.

        Returns:
            BankSettings: Settings sourced from environment variables.
        """
        dotenv.load_dotenv()
        logger = get_app_logger()
        backend = os.getenv("BANK_BACKEND", cls.backend).strip().lower()
        if backend not in SUPPORTED_BACKENDS:
            logger.warning(
                f"Unknown BANK_BACKEND '{backend}'. "
                f"Expected one of {', '.join(SUPPORTED_BACKENDS)}."
            )
        return cls(
            backend=backend,
            db_url=os.getenv("BANK_DB_URL") or None,
            db_pool_size=cls._read_int(
                "BANK_DB_POOL_SIZE",
                cls.db_pool_size,
                logger,
            ),
            db_max_overflow=cls._read_int(
                "BANK_DB_MAX_OVERFLOW",
                cls.db_max_overflow,
                logger,
            ),
            mongodb_uri=os.getenv("MONGODB_URI", cls.mongodb_uri),
            mongodb_database=os.getenv(
                "MONGODB_DATABASE",
                cls.mongodb_database,
            ),
            max_conflict_retries=cls._read_int(
                "BANK_MAX_CONFLICT_RETRIES",
                cls.max_conflict_retries,
                logger,
            ),
            http_host=os.getenv("BANK_HTTP_HOST", cls.http_host),
            http_port=cls._read_int("BANK_HTTP_PORT", cls.http_port, logger),
            exchange_api_url=os.getenv(
                "BANK_EXCHANGE_API_URL",
                cls.exchange_api_url,
            ),
        )

    @staticmethod
    def _read_int(name: str, default: int, logger) -> int:
        """Read a non-negative integer variable, falling back to default.

        Args:
            name: Environment variable name.
            default: Value used when the variable is unset or invalid.
            logger: Logger used for warnings.

        Returns:
            int: Parsed value or the default.
        """
        raw_value = os.getenv(name)
        if raw_value is None or not raw_value.strip():
            return default
        try:
            value = int(raw_value)
        except ValueError:
            logger.warning(
                f"Invalid integer for {name}: '{raw_value}'. "
                f"Using {default}."
            )
            return default
        if value < 0:
            logger.warning(f"{name} must not be negative. Using {default}.")
            return default
        return value


__all__ = [
    "BankSettings",
    "DEFAULT_EXCHANGE_API_URL",
    "SUPPORTED_BACKENDS",
]
