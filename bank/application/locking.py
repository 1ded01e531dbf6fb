"""Per-account mutual exclusion for balance postings."""

from contextlib import contextmanager
from dataclasses import dataclass, field
import threading


@dataclass
class _LockEntry:
    lock: threading.Lock = field(default_factory=threading.Lock)
    holders: int = 0


class AccountLockRegistry:
    """Hand out one lock per account id and forget it once unused.

    Postings against different accounts never wait on each other; postings
    against the same account run one at a time for as long as the caller
    holds the lock.
    """

    def __init__(self) -> None:
        self._guard = threading.Lock()
        self._entries: dict[str, _LockEntry] = {}

    @contextmanager
    def hold(self, account_id: str):
        """Block until the account lock is acquired, release it on exit.

        Args:
            account_id: Account whose postings must be serialized.
        """
        with self._guard:
            entry = self._entries.get(account_id)
            if entry is None:
                entry = _LockEntry()
                self._entries[account_id] = entry
            entry.holders += 1
        try:
            with entry.lock:
                yield
        finally:
            with self._guard:
                entry.holders -= 1
                if entry.holders == 0:
                    del self._entries[account_id]

    def __len__(self) -> int:
        with self._guard:
            return len(self._entries)


__all__ = ["AccountLockRegistry"]
