"""Domain models for transactions."""

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from enum import Enum


class TransactionKind(str, Enum):
    """Effect of a transaction on its account balance."""

    DEPOSIT = "deposit"
    WITHDRAWAL = "withdrawal"


@dataclass(frozen=True)
class Transaction:
    """Immutable record of a single deposit or withdrawal."""

    id: str
    account_id: str
    amount: Decimal
    kind: TransactionKind
    created_at: datetime
    updated_at: datetime

    @property
    def signed_amount(self) -> Decimal:
        """Return the amount with the sign of its balance effect."""
        if self.kind is TransactionKind.WITHDRAWAL:
            return -self.amount
        return self.amount


@dataclass(frozen=True)
class TransactionSummary:
    """Aggregated transaction figures for one account."""

    account_id: str
    total_transactions: int
    total_deposits: Decimal
    total_withdrawals: Decimal
    current_balance: Decimal
    last_transaction_at: datetime | None = None


__all__ = ["TransactionKind", "Transaction", "TransactionSummary"]
