"""Tests for the GetExchangeRateUseCase."""

from decimal import Decimal
from unittest.mock import MagicMock

import pytest

from bank.application.use_cases.get_exchange_rate import (
    GetExchangeRateUseCase,
)
from bank.domain.errors import (
    CurrencyNotFoundError,
    ExchangeRateUnavailableError,
    ValidationError,
)
from bank.domain.models.exchange import ExchangeRate


def _build_use_case(rates: dict | None = None):
    port = MagicMock()
    port.get_rates.return_value = rates or {}
    return GetExchangeRateUseCase(port, logger=MagicMock()), port


def test_execute_returns_rate_for_target() -> None:
    """The quote should carry upper-cased codes and the provider's rate."""
    use_case, port = _build_use_case({"EUR": Decimal("0.92")})

    result = use_case.execute(" usd", "eur ")

    assert result == ExchangeRate(
        base="USD",
        target="EUR",
        rate=Decimal("0.92"),
    )
    port.get_rates.assert_called_once_with("USD")


@pytest.mark.parametrize(
    ("base", "target"),
    [(None, "EUR"), ("USD", None), ("", "EUR"), ("USD", "  ")],
)
def test_execute_requires_both_currencies(base, target) -> None:
    """Missing currencies should fail validation before any lookup."""
    use_case, port = _build_use_case()

    with pytest.raises(ValidationError, match="Missing from or to"):
        use_case.execute(base, target)

    port.get_rates.assert_not_called()


def test_execute_raises_when_target_is_not_quoted() -> None:
    """An unknown target currency should raise CurrencyNotFoundError."""
    use_case, _ = _build_use_case({"EUR": Decimal("0.92")})

    with pytest.raises(CurrencyNotFoundError) as exc_info:
        use_case.execute("USD", "XYZ")

    assert exc_info.value.base == "USD"
    assert exc_info.value.target == "XYZ"


def test_execute_propagates_provider_failures() -> None:
    """Provider failures should reach the caller unchanged."""
    use_case, port = _build_use_case()
    port.get_rates.side_effect = ExchangeRateUnavailableError("down")

    with pytest.raises(ExchangeRateUnavailableError, match="down"):
        use_case.execute("USD", "EUR")
