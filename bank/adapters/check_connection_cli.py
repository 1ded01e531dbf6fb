"""Simple CLI to validate the configured backend connection.

This adapter is meant for local operations: it reads the backend from the
environment and runs a basic health check against it.
"""

from bank.infrastructure.container import (
    build_database_adapter,
    build_document_adapter,
)
from bank.infrastructure.logging.logger import get_app_logger
from bank.infrastructure.settings import BankSettings


def main() -> None:
    """Run a basic connectivity check against the configured backend."""
    logger = get_app_logger()
    settings = BankSettings.from_env()

    if settings.backend == "postgres":
        engine = build_database_adapter(settings).get_bank_engine()
        logger.info(f"Bank DB: {engine.url}")
        with engine.connect() as conn:
            conn.exec_driver_sql("SELECT 1")
    elif settings.backend == "mongodb":
        database = build_document_adapter(settings).get_bank_database()
        logger.info(f"Bank DB: {settings.mongodb_database}")
        database.command("ping")
    else:
        logger.info(f"Backend {settings.backend} needs no connection.")
        return

    logger.info("Connection is working.")


if __name__ == "__main__":
    main()
