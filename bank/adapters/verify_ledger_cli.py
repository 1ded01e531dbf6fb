"""CLI adapter checking stored balances against transaction histories.

Exits with status 1 when any account's balance differs from the replay of
its transactions, so it can gate scheduled jobs.
"""

import sys

from bank.application.use_cases.verify_ledger import VerifyLedgerUseCase
from bank.infrastructure.container import build_repositories
from bank.infrastructure.logging.logger import get_app_logger


def main() -> int:
    """Run the ledger verification and print its findings."""
    logger = get_app_logger()
    repositories = build_repositories()
    use_case = VerifyLedgerUseCase(
        repositories.accounts,
        repositories.transactions,
        logger=logger,
    )

    report = use_case.execute()

    for mismatch in report.mismatches:
        print(
            f"{mismatch.account_id} ({mismatch.account_name}): "
            f"stored {mismatch.stored_balance}, "
            f"replayed {mismatch.replayed_balance}, "
            f"difference {mismatch.difference}"
        )
    print(
        f"Checked {report.checked_accounts} accounts, "
        f"{len(report.mismatches)} mismatches."
    )
    return 0 if report.is_consistent else 1


if __name__ == "__main__":  # pragma: no cover
    sys.exit(main())
