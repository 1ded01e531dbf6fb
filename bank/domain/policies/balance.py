"""Balance policy deciding the outcome of a deposit or withdrawal."""

from decimal import Decimal

from bank.domain.errors import InsufficientFundsError
from bank.domain.models.transactions import TransactionKind
from bank.domain.services.validation import (
    parse_transaction_kind,
    validate_amount,
)


def decide(current_balance: Decimal, kind, amount) -> Decimal:
    """Return the balance that results from applying the operation.

    The function is pure: it performs no I/O and keeps no state, so it can be
    called from any thread.

    Args:
        current_balance: Balance before the operation.
        kind: TransactionKind or its string value.
        amount: Non-negative amount with at most two decimal places.

    Returns:
        Decimal: The new balance.

    Raises:
        InvalidOperationKindError: If kind is not deposit or withdrawal.
        InvalidAmountError: If amount fails validation.
        InsufficientFundsError: If a withdrawal would go below zero.
    """
    operation = parse_transaction_kind(kind)
    value = validate_amount(amount)
    if operation is TransactionKind.DEPOSIT:
        return current_balance + value
    new_balance = current_balance - value
    if new_balance < 0:
        raise InsufficientFundsError(current_balance, value)
    return new_balance


__all__ = ["decide"]
