"""HTTP client for the public exchange-rate API."""

from decimal import Decimal, InvalidOperation
from typing import Optional

import httpx

from bank.application.ports.exchange_rates import ExchangeRatesPort
from bank.domain.errors import ExchangeRateUnavailableError
from bank.infrastructure.logging.logger import get_app_logger

REQUEST_TIMEOUT_SECONDS = 10.0


class HttpxExchangeRatesClient(ExchangeRatesPort):
    """ExchangeRatesPort implementation over httpx.

    The provider answers ``GET <base_url>/<BASE>`` with a JSON document
    holding a ``rates`` object keyed by currency code.
    """

    def __init__(
        self,
        base_url: str,
        timeout: float = REQUEST_TIMEOUT_SECONDS,
        transport: Optional[httpx.BaseTransport] = None,
        logger=None,
    ) -> None:
        """Initialize the client.

        Args:
            base_url: Endpoint the base currency code is appended to.
            timeout: Request timeout in seconds.
            transport: Optional httpx transport, mainly for tests.
            logger: Optional logger compatible with logging.Logger-like API.
        """
        self._base_url = base_url.rstrip("/")
        self._timeout = timeout
        self._transport = transport
        self._logger = logger or get_app_logger()
        self._client: Optional[httpx.Client] = None

    def _get_client(self) -> httpx.Client:
        """Return the shared HTTP client, creating it on first use."""
        if self._client is None:
            self._client = httpx.Client(
                timeout=self._timeout,
                transport=self._transport,
            )
        return self._client

    def get_rates(self, base: str) -> dict[str, Decimal]:
        """Fetch the latest rates quoted against base.

        Args:
            base: Three-letter code the rates are quoted against.

        Returns:
            dict[str, Decimal]: Units of each currency per unit of base.

        Raises:
            ExchangeRateUnavailableError: If the request fails, the provider
                answers with an error status, or the body is not a rates
                document.
        """
        url = f"{self._base_url}/{base}"
        try:
            response = self._get_client().get(url)
            response.raise_for_status()
        except httpx.HTTPError as exc:
            self._logger.error(
                f"Failed to fetch exchange rates for {base}: {exc}"
            )
            raise ExchangeRateUnavailableError(
                f"Failed to fetch exchange rates for {base}: {exc}"
            ) from exc

        try:
            rates = response.json()["rates"]
            return {
                code: Decimal(str(rate)) for code, rate in rates.items()
            }
        except (
            ValueError,
            KeyError,
            TypeError,
            AttributeError,
            InvalidOperation,
        ) as exc:
            self._logger.error(
                f"Failed to decode exchange rates for {base}: {exc!r}"
            )
            raise ExchangeRateUnavailableError(
                f"Failed to decode exchange rates for {base}"
            ) from exc

    def close(self) -> None:
        """Close the underlying HTTP client if it was opened."""
        if self._client is not None:
            self._client.close()
            self._client = None


__all__ = ["HttpxExchangeRatesClient", "REQUEST_TIMEOUT_SECONDS"]
