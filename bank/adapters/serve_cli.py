"""CLI adapter running the HTTP API with uvicorn."""

import uvicorn

from bank.adapters.http.app import create_app
from bank.infrastructure.container import build_services
from bank.infrastructure.logging.logger import get_app_logger
from bank.infrastructure.settings import BankSettings


def main() -> None:
    """Build the services from the environment and serve them over HTTP."""
    logger = get_app_logger()
    settings = BankSettings.from_env()
    app = create_app(build_services(settings), logger=logger)

    logger.info(
        f"Starting bank API on {settings.http_host}:{settings.http_port} "
        f"with the {settings.backend} backend"
    )
    uvicorn.run(app, host=settings.http_host, port=settings.http_port)


if __name__ == "__main__":  # pragma: no cover
    main()
