"""Domain validation helpers."""

from decimal import Decimal, InvalidOperation

from bank.domain.constants import (
    ACCOUNT_NAME_MAX_LENGTH,
    CURRENCY_CODE_LENGTH,
    MAX_MONEY_AMOUNT,
    MONEY_DECIMAL_PLACES,
)
from bank.domain.errors import (
    InvalidAccountError,
    InvalidAmountError,
    InvalidOperationKindError,
)
from bank.domain.models.transactions import TransactionKind
from bank.utils.decimal_utils import coerce_decimal, quantize_money


def validate_amount(amount) -> Decimal:
    """Return the amount as a two-place Decimal or raise.

    Args:
        amount: Raw amount (Decimal, int, str or float).

    Returns:
        Decimal: Amount quantized to cents.

    Raises:
        InvalidAmountError: If the amount is missing, not a finite number,
            negative, above MAX_MONEY_AMOUNT, or has more than two
            fractional digits.
    """
    if amount is None or isinstance(amount, bool):
        raise InvalidAmountError(f"Invalid amount: {amount!r}")
    try:
        value = coerce_decimal(amount)
    except (InvalidOperation, TypeError, ValueError) as exc:
        raise InvalidAmountError(f"Invalid amount: {amount!r}") from exc
    if not value.is_finite():
        raise InvalidAmountError(f"Amount must be finite: {amount!r}")
    if value < 0:
        raise InvalidAmountError(f"Amount must not be negative: {value}")
    if value > MAX_MONEY_AMOUNT:
        raise InvalidAmountError(
            f"Amount must not exceed {MAX_MONEY_AMOUNT}: {value}"
        )
    try:
        quantized = quantize_money(value)
    except InvalidOperation as exc:
        raise InvalidAmountError(f"Invalid amount: {amount!r}") from exc
    if quantized != value:
        raise InvalidAmountError(
            f"Amount has more than {MONEY_DECIMAL_PLACES} decimal places: "
            f"{value}"
        )
    return quantized


def parse_transaction_kind(kind) -> TransactionKind:
    """Return the TransactionKind matching the raw value.

    Raises:
        InvalidOperationKindError: If the value is not a known kind.
    """
    if isinstance(kind, TransactionKind):
        return kind
    try:
        return TransactionKind(kind)
    except ValueError as exc:
        raise InvalidOperationKindError(kind) from exc


def validate_account_name(name: str | None) -> str:
    """Return the stripped account name or raise InvalidAccountError."""
    candidate = (name or "").strip()
    if not candidate:
        raise InvalidAccountError("Account name is required")
    if len(candidate) > ACCOUNT_NAME_MAX_LENGTH:
        raise InvalidAccountError(
            f"Account name exceeds {ACCOUNT_NAME_MAX_LENGTH} characters"
        )
    return candidate


def normalize_currency_code(currency: str | None) -> str:
    """Return an upper-cased three-letter currency code or raise."""
    candidate = (currency or "").strip().upper()
    if len(candidate) != CURRENCY_CODE_LENGTH or not candidate.isalpha():
        raise InvalidAccountError(f"Invalid currency code: {currency!r}")
    return candidate


__all__ = [
    "validate_amount",
    "parse_transaction_kind",
    "validate_account_name",
    "normalize_currency_code",
]
