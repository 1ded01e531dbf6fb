"""Domain models for bank accounts."""

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal


@dataclass(frozen=True)
class Account:
    """Snapshot of an account as stored.

    Attributes:
        id: Opaque unique identifier.
        name: Display name.
        balance: Current balance, never negative.
        currency: Three-letter currency code.
        created_at: Creation timestamp (UTC).
        updated_at: Last update timestamp (UTC).
        version: Counter bumped on every balance write.
    """

    id: str
    name: str
    balance: Decimal
    currency: str
    created_at: datetime
    updated_at: datetime
    version: int = 0


@dataclass(frozen=True)
class AccountUpdate:
    """Partial update for account attributes other than the balance."""

    name: str | None = None
    currency: str | None = None

    def is_empty(self) -> bool:
        """Return True when no field is set."""
        return self.name is None and self.currency is None


__all__ = ["Account", "AccountUpdate"]
