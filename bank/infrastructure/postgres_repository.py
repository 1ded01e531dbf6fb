"""SQLAlchemy-backed stores for accounts and transactions on PostgreSQL."""

from contextlib import contextmanager
from datetime import datetime, timezone
from decimal import Decimal
from uuid import uuid4

from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError

from bank.application.ports.accounts_repository import AccountsRepositoryPort
from bank.application.ports.database import DatabaseEnginePort
from bank.application.ports.transactions_repository import (
    TransactionsRepositoryPort,
)
from bank.domain.constants import MONEY_DECIMAL_PLACES, MONEY_MAX_DIGITS
from bank.domain.errors import (
    AccountNotFoundError,
    BalanceConflictError,
    StoreUnavailableError,
)
from bank.domain.models.accounts import Account, AccountUpdate
from bank.domain.models.transactions import (
    Transaction,
    TransactionKind,
    TransactionSummary,
)
from bank.infrastructure.logging.logger import get_app_logger
from bank.utils.decimal_utils import coerce_decimal

MONEY_COLUMN_PRECISION = f"{MONEY_MAX_DIGITS}, {MONEY_DECIMAL_PLACES}"

CREATE_ACCOUNTS_SQL = f"""
CREATE TABLE IF NOT EXISTS accounts (
    id VARCHAR(36) PRIMARY KEY,
    name VARCHAR(100) NOT NULL,
    balance DECIMAL({MONEY_COLUMN_PRECISION}) NOT NULL DEFAULT 0
        CHECK (balance >= 0),
    currency VARCHAR(3) NOT NULL DEFAULT 'USD',
    version INTEGER NOT NULL DEFAULT 0,
    created_at TIMESTAMPTZ NOT NULL DEFAULT CURRENT_TIMESTAMP,
    updated_at TIMESTAMPTZ NOT NULL DEFAULT CURRENT_TIMESTAMP
)
"""

CREATE_TRANSACTIONS_SQL = f"""
CREATE TABLE IF NOT EXISTS transactions (
    id VARCHAR(36) PRIMARY KEY,
    account_id VARCHAR(36) NOT NULL REFERENCES accounts(id),
    amount DECIMAL({MONEY_COLUMN_PRECISION}) NOT NULL CHECK (amount >= 0),
    type VARCHAR(20) NOT NULL CHECK (type IN ('deposit', 'withdrawal')),
    created_at TIMESTAMPTZ NOT NULL DEFAULT CURRENT_TIMESTAMP,
    updated_at TIMESTAMPTZ NOT NULL DEFAULT CURRENT_TIMESTAMP
)
"""

CREATE_TRANSACTIONS_INDEX_SQL = """
CREATE INDEX IF NOT EXISTS idx_transactions_account_id
ON transactions (account_id, created_at)
"""

ACCOUNT_COLUMNS = (
    "id, name, balance, currency, version, created_at, updated_at"
)

TRANSACTION_COLUMNS = (
    "id, account_id, amount, type AS kind, created_at, updated_at"
)

INSERT_ACCOUNT_SQL = text(
    f"""
    INSERT INTO accounts (
        id, name, balance, currency, version, created_at, updated_at
    )
    VALUES (
        :id, :name, :balance, :currency, 0, :created_at, :updated_at
    )
    RETURNING {ACCOUNT_COLUMNS}
    """
)

SELECT_ACCOUNT_SQL = text(
    f"SELECT {ACCOUNT_COLUMNS} FROM accounts WHERE id = :id"
)

SELECT_ACCOUNTS_SQL = text(
    f"SELECT {ACCOUNT_COLUMNS} FROM accounts ORDER BY created_at"
)

SELECT_ACCOUNT_BY_NAME_SQL = text(
    f"SELECT {ACCOUNT_COLUMNS} FROM accounts WHERE name = :name LIMIT 1"
)

SELECT_ACCOUNT_VERSION_SQL = text(
    "SELECT version FROM accounts WHERE id = :id"
)

DELETE_ACCOUNT_SQL = text("DELETE FROM accounts WHERE id = :id")

UPDATE_BALANCE_SQL = text(
    f"""
    UPDATE accounts
    SET balance = :balance,
        version = version + 1,
        updated_at = :updated_at
    WHERE id = :id
    RETURNING {ACCOUNT_COLUMNS}
    """
)

UPDATE_BALANCE_CHECKED_SQL = text(
    f"""
    UPDATE accounts
    SET balance = :balance,
        version = version + 1,
        updated_at = :updated_at
    WHERE id = :id AND version = :expected_version
    RETURNING {ACCOUNT_COLUMNS}
    """
)

INSERT_TRANSACTION_SQL = text(
    f"""
    INSERT INTO transactions (
        id, account_id, amount, type, created_at, updated_at
    )
    VALUES (
        :id, :account_id, :amount, :kind, :created_at, :updated_at
    )
    RETURNING {TRANSACTION_COLUMNS}
    """
)

SELECT_TRANSACTION_SQL = text(
    f"SELECT {TRANSACTION_COLUMNS} FROM transactions WHERE id = :id"
)

SELECT_ACCOUNT_TRANSACTIONS_SQL = text(
    f"""
    SELECT {TRANSACTION_COLUMNS}
    FROM transactions
    WHERE account_id = :account_id
    ORDER BY created_at DESC
    """
)

SELECT_TRANSACTIONS_SQL = text(
    f"SELECT {TRANSACTION_COLUMNS} FROM transactions ORDER BY created_at"
)

UPDATE_TRANSACTION_SQL = text(
    f"""
    UPDATE transactions
    SET amount = :amount,
        type = :kind,
        updated_at = :updated_at
    WHERE id = :id
    RETURNING {TRANSACTION_COLUMNS}
    """
)

DELETE_TRANSACTION_SQL = text("DELETE FROM transactions WHERE id = :id")

SELECT_SUMMARY_SQL = text(
    """
    SELECT
        COUNT(*) AS total_transactions,
        COALESCE(
            SUM(CASE WHEN type = 'deposit' THEN amount ELSE 0 END), 0
        ) AS total_deposits,
        COALESCE(
            SUM(CASE WHEN type = 'withdrawal' THEN amount ELSE 0 END), 0
        ) AS total_withdrawals,
        MAX(created_at) AS last_transaction_at
    FROM transactions
    WHERE account_id = :account_id
    """
)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


@contextmanager
def _store_errors(action: str, logger):
    """Translate SQLAlchemy errors into StoreUnavailableError."""
    try:
        yield
    except SQLAlchemyError as exc:
        logger.error(f"PostgreSQL failed to {action}: {exc}")
        raise StoreUnavailableError(
            f"PostgreSQL failed to {action}"
        ) from exc


def prepare_schema(db_port: DatabaseEnginePort, logger=None) -> None:
    """Ensure the accounts and transactions tables exist.

    Args:
        db_port: Port providing access to the bank engine.
        logger: Optional logger compatible with logging.Logger-like API.
    """
    resolved_logger = logger or get_app_logger()
    with _store_errors("prepare schema", resolved_logger):
        engine = db_port.get_bank_engine()
        with engine.begin() as conn:
            conn.exec_driver_sql(CREATE_ACCOUNTS_SQL)
            conn.exec_driver_sql(CREATE_TRANSACTIONS_SQL)
            conn.exec_driver_sql(CREATE_TRANSACTIONS_INDEX_SQL)
    resolved_logger.info("PostgreSQL bank schema is ready")


def _account_from_row(row) -> Account:
    return Account(
        id=row.id,
        name=row.name,
        balance=coerce_decimal(row.balance),
        currency=row.currency,
        created_at=row.created_at,
        updated_at=row.updated_at,
        version=row.version,
    )


def _transaction_from_row(row) -> Transaction:
    return Transaction(
        id=row.id,
        account_id=row.account_id,
        amount=coerce_decimal(row.amount),
        kind=TransactionKind(row.kind),
        created_at=row.created_at,
        updated_at=row.updated_at,
    )


class SqlAlchemyAccountsRepository(AccountsRepositoryPort):
    """Account store backed by the PostgreSQL accounts table."""

    def __init__(self, db_port: DatabaseEnginePort, logger=None) -> None:
        """Initialize the repository.

        Args:
            db_port: Port providing access to the bank engine.
            logger: Optional logger compatible with logging.Logger-like API.
        """
        self._db_port = db_port
        self._logger = logger or get_app_logger()

    def create(self, name: str, balance: Decimal, currency: str) -> Account:
        now = _utcnow()
        params = {
            "id": str(uuid4()),
            "name": name,
            "balance": balance,
            "currency": currency,
            "created_at": now,
            "updated_at": now,
        }
        with _store_errors("create account", self._logger):
            engine = self._db_port.get_bank_engine()
            with engine.begin() as conn:
                row = conn.execute(INSERT_ACCOUNT_SQL, params).first()
        return _account_from_row(row)

    def get_by_id(self, account_id: str) -> Account | None:
        with _store_errors("fetch account", self._logger):
            engine = self._db_port.get_bank_engine()
            with engine.connect() as conn:
                row = conn.execute(
                    SELECT_ACCOUNT_SQL,
                    {"id": account_id},
                ).first()
        return _account_from_row(row) if row else None

    def get_all(self) -> list[Account]:
        with _store_errors("list accounts", self._logger):
            engine = self._db_port.get_bank_engine()
            with engine.connect() as conn:
                rows = conn.execute(SELECT_ACCOUNTS_SQL).all()
        return [_account_from_row(row) for row in rows]

    def get_by_name(self, name: str) -> Account | None:
        with _store_errors("fetch account by name", self._logger):
            engine = self._db_port.get_bank_engine()
            with engine.connect() as conn:
                row = conn.execute(
                    SELECT_ACCOUNT_BY_NAME_SQL,
                    {"name": name},
                ).first()
        return _account_from_row(row) if row else None

    def update(
        self,
        account_id: str,
        update: AccountUpdate,
    ) -> Account | None:
        if update.is_empty():
            return self.get_by_id(account_id)
        assignments = []
        params = {"id": account_id, "updated_at": _utcnow()}
        if update.name is not None:
            assignments.append("name = :name")
            params["name"] = update.name
        if update.currency is not None:
            assignments.append("currency = :currency")
            params["currency"] = update.currency
        assignments.append("updated_at = :updated_at")
        query = text(
            f"UPDATE accounts SET {', '.join(assignments)} "
            f"WHERE id = :id RETURNING {ACCOUNT_COLUMNS}"
        )
        with _store_errors("update account", self._logger):
            engine = self._db_port.get_bank_engine()
            with engine.begin() as conn:
                row = conn.execute(query, params).first()
        return _account_from_row(row) if row else None

    def delete(self, account_id: str) -> bool:
        with _store_errors("delete account", self._logger):
            engine = self._db_port.get_bank_engine()
            with engine.begin() as conn:
                result = conn.execute(DELETE_ACCOUNT_SQL, {"id": account_id})
        return result.rowcount > 0

    def update_balance(
        self,
        account_id: str,
        new_balance: Decimal,
        expected_version: int | None = None,
    ) -> Account:
        """Write a new balance in a single conditional UPDATE.

        Args:
            account_id: Account to update.
            new_balance: Balance to store.
            expected_version: Version the caller read; None skips the check.

        Returns:
            Account: The updated account with its new version.

        Raises:
            AccountNotFoundError: If the account does not exist.
            BalanceConflictError: If the stored version differs.
            StoreUnavailableError: On database errors.
        """
        params = {
            "id": account_id,
            "balance": new_balance,
            "updated_at": _utcnow(),
        }
        query = UPDATE_BALANCE_SQL
        if expected_version is not None:
            query = UPDATE_BALANCE_CHECKED_SQL
            params["expected_version"] = expected_version
        with _store_errors("update account balance", self._logger):
            engine = self._db_port.get_bank_engine()
            with engine.begin() as conn:
                row = conn.execute(query, params).first()
                current = None
                if row is None:
                    current = conn.execute(
                        SELECT_ACCOUNT_VERSION_SQL,
                        {"id": account_id},
                    ).first()
        if row is not None:
            return _account_from_row(row)
        if current is None:
            raise AccountNotFoundError(account_id)
        raise BalanceConflictError(
            account_id,
            expected_version,
            current.version,
        )


class SqlAlchemyTransactionsRepository(TransactionsRepositoryPort):
    """Transaction store backed by the PostgreSQL transactions table."""

    def __init__(self, db_port: DatabaseEnginePort, logger=None) -> None:
        """Initialize the repository.

        Args:
            db_port: Port providing access to the bank engine.
            logger: Optional logger compatible with logging.Logger-like API.
        """
        self._db_port = db_port
        self._logger = logger or get_app_logger()

    def append(
        self,
        account_id: str,
        amount: Decimal,
        kind: TransactionKind,
    ) -> Transaction:
        now = _utcnow()
        params = {
            "id": str(uuid4()),
            "account_id": account_id,
            "amount": amount,
            "kind": TransactionKind(kind).value,
            "created_at": now,
            "updated_at": now,
        }
        with _store_errors("record transaction", self._logger):
            engine = self._db_port.get_bank_engine()
            with engine.begin() as conn:
                row = conn.execute(INSERT_TRANSACTION_SQL, params).first()
        return _transaction_from_row(row)

    def get_by_id(self, transaction_id: str) -> Transaction | None:
        with _store_errors("fetch transaction", self._logger):
            engine = self._db_port.get_bank_engine()
            with engine.connect() as conn:
                row = conn.execute(
                    SELECT_TRANSACTION_SQL,
                    {"id": transaction_id},
                ).first()
        return _transaction_from_row(row) if row else None

    def get_by_account_id(self, account_id: str) -> list[Transaction]:
        with _store_errors("list account transactions", self._logger):
            engine = self._db_port.get_bank_engine()
            with engine.connect() as conn:
                rows = conn.execute(
                    SELECT_ACCOUNT_TRANSACTIONS_SQL,
                    {"account_id": account_id},
                ).all()
        return [_transaction_from_row(row) for row in rows]

    def get_all(self) -> list[Transaction]:
        with _store_errors("list transactions", self._logger):
            engine = self._db_port.get_bank_engine()
            with engine.connect() as conn:
                rows = conn.execute(SELECT_TRANSACTIONS_SQL).all()
        return [_transaction_from_row(row) for row in rows]

    def update(
        self,
        transaction_id: str,
        amount: Decimal,
        kind: TransactionKind,
    ) -> Transaction | None:
        params = {
            "id": transaction_id,
            "amount": amount,
            "kind": TransactionKind(kind).value,
            "updated_at": _utcnow(),
        }
        with _store_errors("update transaction", self._logger):
            engine = self._db_port.get_bank_engine()
            with engine.begin() as conn:
                row = conn.execute(UPDATE_TRANSACTION_SQL, params).first()
        return _transaction_from_row(row) if row else None

    def delete(self, transaction_id: str) -> bool:
        with _store_errors("delete transaction", self._logger):
            engine = self._db_port.get_bank_engine()
            with engine.begin() as conn:
                result = conn.execute(
                    DELETE_TRANSACTION_SQL,
                    {"id": transaction_id},
                )
        return result.rowcount > 0

    def get_summary(
        self,
        account_id: str,
        current_balance: Decimal,
    ) -> TransactionSummary:
        with _store_errors("summarize transactions", self._logger):
            engine = self._db_port.get_bank_engine()
            with engine.connect() as conn:
                row = conn.execute(
                    SELECT_SUMMARY_SQL,
                    {"account_id": account_id},
                ).first()
        return TransactionSummary(
            account_id=account_id,
            total_transactions=int(row.total_transactions),
            total_deposits=coerce_decimal(row.total_deposits),
            total_withdrawals=coerce_decimal(row.total_withdrawals),
            current_balance=current_balance,
            last_transaction_at=row.last_transaction_at,
        )


__all__ = [
    "CREATE_ACCOUNTS_SQL",
    "CREATE_TRANSACTIONS_SQL",
    "prepare_schema",
    "SqlAlchemyAccountsRepository",
    "SqlAlchemyTransactionsRepository",
]
