"""pymongo-backed stores for accounts and transactions."""

from contextlib import contextmanager
from datetime import datetime, timezone
from decimal import Decimal

from bson import ObjectId
from bson.decimal128 import Decimal128
from pymongo import ASCENDING, DESCENDING, ReturnDocument
from pymongo.errors import PyMongoError

from bank.application.ports.accounts_repository import AccountsRepositoryPort
from bank.application.ports.database import DocumentDatabasePort
from bank.application.ports.transactions_repository import (
    TransactionsRepositoryPort,
)
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
from bank.domain.services.ledger import summarize_transactions
from bank.infrastructure.logging.logger import get_app_logger
from bank.utils.decimal_utils import coerce_decimal

ACCOUNTS_COLLECTION = "accounts"
TRANSACTIONS_COLLECTION = "transactions"


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _to_decimal128(value: Decimal) -> Decimal128:
    return Decimal128(str(value))


@contextmanager
def _store_errors(action: str, logger):
    """Translate pymongo errors into StoreUnavailableError."""
    try:
        yield
    except PyMongoError as exc:
        logger.error(f"MongoDB failed to {action}: {exc}")
        raise StoreUnavailableError(f"MongoDB failed to {action}") from exc


def prepare_indexes(document_port: DocumentDatabasePort, logger=None) -> None:
    """Ensure the lookup indexes used by the stores exist."""
    resolved_logger = logger or get_app_logger()
    with _store_errors("prepare indexes", resolved_logger):
        database = document_port.get_bank_database()
        database[ACCOUNTS_COLLECTION].create_index([("name", ASCENDING)])
        database[TRANSACTIONS_COLLECTION].create_index(
            [("account_id", ASCENDING), ("created_at", DESCENDING)]
        )
    resolved_logger.info("MongoDB bank indexes are ready")


def _account_from_document(document: dict) -> Account:
    return Account(
        id=str(document["_id"]),
        name=document["name"],
        balance=coerce_decimal(document.get("balance")),
        currency=document["currency"],
        created_at=document["created_at"],
        updated_at=document["updated_at"],
        version=int(document.get("version", 0)),
    )


def _transaction_from_document(document: dict) -> Transaction:
    return Transaction(
        id=str(document["_id"]),
        account_id=document["account_id"],
        amount=coerce_decimal(document.get("amount")),
        kind=TransactionKind(document["type"]),
        created_at=document["created_at"],
        updated_at=document["updated_at"],
    )


class MongoAccountsRepository(AccountsRepositoryPort):
    """Account store backed by the MongoDB accounts collection."""

    def __init__(
        self,
        document_port: DocumentDatabasePort,
        logger=None,
    ) -> None:
        """Initialize the repository.

        Args:
            document_port: Port providing access to the bank database.
            logger: Optional logger compatible with logging.Logger-like API.
        """
        self._document_port = document_port
        self._logger = logger or get_app_logger()

    def _collection(self):
        return self._document_port.get_bank_database()[ACCOUNTS_COLLECTION]

    def create(self, name: str, balance: Decimal, currency: str) -> Account:
        now = _utcnow()
        document = {
            "_id": str(ObjectId()),
            "name": name,
            "balance": _to_decimal128(balance),
            "currency": currency,
            "version": 0,
            "created_at": now,
            "updated_at": now,
        }
        with _store_errors("create account", self._logger):
            self._collection().insert_one(document)
        return _account_from_document(document)

    def get_by_id(self, account_id: str) -> Account | None:
        with _store_errors("fetch account", self._logger):
            document = self._collection().find_one({"_id": account_id})
        return _account_from_document(document) if document else None

    def get_all(self) -> list[Account]:
        with _store_errors("list accounts", self._logger):
            documents = list(
                self._collection().find({}).sort("created_at", ASCENDING)
            )
        return [_account_from_document(document) for document in documents]

    def get_by_name(self, name: str) -> Account | None:
        with _store_errors("fetch account by name", self._logger):
            document = self._collection().find_one({"name": name})
        return _account_from_document(document) if document else None

    def update(
        self,
        account_id: str,
        update: AccountUpdate,
    ) -> Account | None:
        if update.is_empty():
            return self.get_by_id(account_id)
        changes = {"updated_at": _utcnow()}
        if update.name is not None:
            changes["name"] = update.name
        if update.currency is not None:
            changes["currency"] = update.currency
        with _store_errors("update account", self._logger):
            document = self._collection().find_one_and_update(
                {"_id": account_id},
                {"$set": changes},
                return_document=ReturnDocument.AFTER,
            )
        return _account_from_document(document) if document else None

    def delete(self, account_id: str) -> bool:
        with _store_errors("delete account", self._logger):
            result = self._collection().delete_one({"_id": account_id})
        return result.deleted_count > 0

    def update_balance(
        self,
        account_id: str,
        new_balance: Decimal,
        expected_version: int | None = None,
    ) -> Account:
        """Write a new balance with a single find_one_and_update.

        The version filter makes the write a compare-and-set; a miss is then
        resolved into not-found or conflict with a second lookup.
        """
        query = {"_id": account_id}
        if expected_version is not None:
            query["version"] = expected_version
        changes = {
            "$set": {
                "balance": _to_decimal128(new_balance),
                "updated_at": _utcnow(),
            },
            "$inc": {"version": 1},
        }
        with _store_errors("update account balance", self._logger):
            collection = self._collection()
            document = collection.find_one_and_update(
                query,
                changes,
                return_document=ReturnDocument.AFTER,
            )
            current = None
            if document is None:
                current = collection.find_one(
                    {"_id": account_id},
                    {"version": 1},
                )
        if document is not None:
            return _account_from_document(document)
        if current is None:
            raise AccountNotFoundError(account_id)
        raise BalanceConflictError(
            account_id,
            expected_version,
            current.get("version"),
        )


class MongoTransactionsRepository(TransactionsRepositoryPort):
    """Transaction store backed by the MongoDB transactions collection."""

    def __init__(
        self,
        document_port: DocumentDatabasePort,
        logger=None,
    ) -> None:
        """Initialize the repository.

        Args:
            document_port: Port providing access to the bank database.
            logger: Optional logger compatible with logging.Logger-like API.
        """
        self._document_port = document_port
        self._logger = logger or get_app_logger()

    def _collection(self):
        return self._document_port.get_bank_database()[TRANSACTIONS_COLLECTION]

    def append(
        self,
        account_id: str,
        amount: Decimal,
        kind: TransactionKind,
    ) -> Transaction:
        now = _utcnow()
        document = {
            "_id": str(ObjectId()),
            "account_id": account_id,
            "amount": _to_decimal128(amount),
            "type": TransactionKind(kind).value,
            "created_at": now,
            "updated_at": now,
        }
        with _store_errors("record transaction", self._logger):
            self._collection().insert_one(document)
        return _transaction_from_document(document)

    def get_by_id(self, transaction_id: str) -> Transaction | None:
        with _store_errors("fetch transaction", self._logger):
            document = self._collection().find_one({"_id": transaction_id})
        return _transaction_from_document(document) if document else None

    def get_by_account_id(self, account_id: str) -> list[Transaction]:
        with _store_errors("list account transactions", self._logger):
            documents = list(
                self._collection()
                .find({"account_id": account_id})
                .sort("created_at", DESCENDING)
            )
        return [
            _transaction_from_document(document) for document in documents
        ]

    def get_all(self) -> list[Transaction]:
        with _store_errors("list transactions", self._logger):
            documents = list(
                self._collection().find({}).sort("created_at", ASCENDING)
            )
        return [
            _transaction_from_document(document) for document in documents
        ]

    def update(
        self,
        transaction_id: str,
        amount: Decimal,
        kind: TransactionKind,
    ) -> Transaction | None:
        changes = {
            "amount": _to_decimal128(amount),
            "type": TransactionKind(kind).value,
            "updated_at": _utcnow(),
        }
        with _store_errors("update transaction", self._logger):
            document = self._collection().find_one_and_update(
                {"_id": transaction_id},
                {"$set": changes},
                return_document=ReturnDocument.AFTER,
            )
        return _transaction_from_document(document) if document else None

    def delete(self, transaction_id: str) -> bool:
        with _store_errors("delete transaction", self._logger):
            result = self._collection().delete_one({"_id": transaction_id})
        return result.deleted_count > 0

    def get_summary(
        self,
        account_id: str,
        current_balance: Decimal,
    ) -> TransactionSummary:
        return summarize_transactions(
            account_id,
            current_balance,
            self.get_by_account_id(account_id),
        )


__all__ = [
    "ACCOUNTS_COLLECTION",
    "TRANSACTIONS_COLLECTION",
    "prepare_indexes",
    "MongoAccountsRepository",
    "MongoTransactionsRepository",
]
