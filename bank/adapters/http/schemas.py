"""Request and response bodies for the HTTP adapter."""

from datetime import datetime
from decimal import Decimal

from pydantic import BaseModel, Field

from bank.domain.constants import DEFAULT_CURRENCY
from bank.domain.models.accounts import Account
from bank.domain.models.exchange import ExchangeRate
from bank.domain.models.transactions import Transaction, TransactionSummary


class CreateAccountRequest(BaseModel):
    name: str
    balance: Decimal = Decimal("0")
    currency: str = DEFAULT_CURRENCY


class CreateTransactionRequest(BaseModel):
    """Posting request; kind and amount are validated by the workflow."""

    account_id: str
    amount: Decimal
    type: str = Field(..., description="deposit or withdrawal")


class AccountResponse(BaseModel):
    id: str
    name: str
    balance: Decimal
    currency: str
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_account(cls, account: Account) -> "AccountResponse":
        return cls(
            id=account.id,
            name=account.name,
            balance=account.balance,
            currency=account.currency,
            created_at=account.created_at,
            updated_at=account.updated_at,
        )


class TransactionResponse(BaseModel):
    id: str
    account_id: str
    amount: Decimal
    type: str
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_transaction(
        cls,
        transaction: Transaction,
    ) -> "TransactionResponse":
        return cls(
            id=transaction.id,
            account_id=transaction.account_id,
            amount=transaction.amount,
            type=transaction.kind.value,
            created_at=transaction.created_at,
            updated_at=transaction.updated_at,
        )


class TransactionSummaryResponse(BaseModel):
    account_id: str
    total_transactions: int
    total_deposits: Decimal
    total_withdrawals: Decimal
    current_balance: Decimal
    last_transaction_at: datetime | None = None

    @classmethod
    def from_summary(
        cls,
        summary: TransactionSummary,
    ) -> "TransactionSummaryResponse":
        return cls(
            account_id=summary.account_id,
            total_transactions=summary.total_transactions,
            total_deposits=summary.total_deposits,
            total_withdrawals=summary.total_withdrawals,
            current_balance=summary.current_balance,
            last_transaction_at=summary.last_transaction_at,
        )


class ExchangeRateResponse(BaseModel):
    base: str
    target: str
    rate: Decimal

    @classmethod
    def from_exchange_rate(
        cls,
        exchange_rate: ExchangeRate,
    ) -> "ExchangeRateResponse":
        return cls(
            base=exchange_rate.base,
            target=exchange_rate.target,
            rate=exchange_rate.rate,
        )


class ErrorResponse(BaseModel):
    """Body of every error answered by the API."""

    detail: str


__all__ = [
    "CreateAccountRequest",
    "CreateTransactionRequest",
    "AccountResponse",
    "TransactionResponse",
    "TransactionSummaryResponse",
    "ExchangeRateResponse",
    "ErrorResponse",
]
