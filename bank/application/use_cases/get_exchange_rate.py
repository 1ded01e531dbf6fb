"""Use case quoting the exchange rate between two currencies."""

from bank.application.ports.exchange_rates import ExchangeRatesPort
from bank.domain.errors import CurrencyNotFoundError, ValidationError
from bank.domain.models.exchange import ExchangeRate
from bank.infrastructure.logging.logger import get_app_logger


class GetExchangeRateUseCase:
    """Look up the latest rate from one currency to another."""

    def __init__(self, rates: ExchangeRatesPort, logger=None) -> None:
        """Initialize the use case.

        Args:
            rates: Provider of the latest rates.
            logger: Optional logger compatible with logging.Logger-like API.
        """
        self._rates = rates
        self._logger = logger or get_app_logger()

    def execute(self, base: str | None, target: str | None) -> ExchangeRate:
        """Return the rate converting base into target.

        Args:
            base: Currency code to convert from.
            target: Currency code to convert to.

        Returns:
            ExchangeRate: Quote with upper-cased currency codes.

        Raises:
            ValidationError: If either currency is missing.
            CurrencyNotFoundError: If the provider has no rate for target.
            ExchangeRateUnavailableError: If the provider fails.
        """
        base_code = (base or "").strip().upper()
        target_code = (target or "").strip().upper()
        if not base_code or not target_code:
            self._logger.warning(
                "Missing exchange rate parameters: "
                f"from={base!r} to={target!r}"
            )
            raise ValidationError("Missing from or to parameter")

        self._logger.info(
            f"Fetching exchange rate {base_code} -> {target_code}"
        )
        rate = self._rates.get_rates(base_code).get(target_code)
        if rate is None:
            self._logger.warning(
                f"No {target_code} rate quoted against {base_code}"
            )
            raise CurrencyNotFoundError(base_code, target_code)
        self._logger.info(
            f"Exchange rate {base_code} -> {target_code} is {rate}"
        )
        return ExchangeRate(base=base_code, target=target_code, rate=rate)


__all__ = ["GetExchangeRateUseCase"]
