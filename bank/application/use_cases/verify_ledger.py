"""Use case checking stored balances against transaction histories."""

from dataclasses import dataclass, field
from decimal import Decimal

from bank.application.ports.accounts_repository import AccountsRepositoryPort
from bank.application.ports.transactions_repository import (
    TransactionsRepositoryPort,
)
from bank.domain.services.ledger import replay_balance
from bank.infrastructure.logging.logger import get_app_logger


@dataclass(frozen=True)
class LedgerMismatch:
    """Account whose stored balance disagrees with its history.

    Attributes:
        account_id: Account identifier.
        account_name: Account display name.
        stored_balance: Balance held by the account store.
        replayed_balance: Balance obtained by replaying transactions.
    """

    account_id: str
    account_name: str
    stored_balance: Decimal
    replayed_balance: Decimal

    @property
    def difference(self) -> Decimal:
        """Return stored minus replayed balance."""
        return self.stored_balance - self.replayed_balance


@dataclass(frozen=True)
class LedgerReport:
    """Outcome of a ledger verification run."""

    checked_accounts: int
    mismatches: list[LedgerMismatch] = field(default_factory=list)

    @property
    def is_consistent(self) -> bool:
        return not self.mismatches


class VerifyLedgerUseCase:
    """Replay every account's transactions and compare with its balance.

    A mismatch is what a posting leaves behind when its record could not be
    appended and the balance could not be restored either.
    """

    def __init__(
        self,
        accounts: AccountsRepositoryPort,
        transactions: TransactionsRepositoryPort,
        logger=None,
    ) -> None:
        """Initialize the use case.

        Args:
            accounts: Store holding the balances to check.
            transactions: Store holding the histories to replay.
            logger: Optional logger compatible with logging.Logger-like API.
        """
        self._accounts = accounts
        self._transactions = transactions
        self._logger = logger or get_app_logger()

    def execute(self) -> LedgerReport:
        """Return the verification report for every stored account."""
        accounts = self._accounts.get_all()
        mismatches = []
        for account in accounts:
            history = self._transactions.get_by_account_id(account.id)
            replayed = replay_balance(history)
            if replayed != account.balance:
                self._logger.warning(
                    f"Ledger mismatch for account {account.id}: stored "
                    f"{account.balance}, replayed {replayed}"
                )
                mismatches.append(
                    LedgerMismatch(
                        account_id=account.id,
                        account_name=account.name,
                        stored_balance=account.balance,
                        replayed_balance=replayed,
                    )
                )
        self._logger.info(
            f"Verified {len(accounts)} accounts, "
            f"{len(mismatches)} mismatches"
        )
        return LedgerReport(
            checked_accounts=len(accounts),
            mismatches=mismatches,
        )


__all__ = ["VerifyLedgerUseCase", "LedgerReport", "LedgerMismatch"]
