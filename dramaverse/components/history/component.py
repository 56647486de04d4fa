"""
History component - bounded append-only logs.

TransactionLog (ledger events) and AccessHistory (unlock methods) are views
over lists owned by a UserAccount. Entries are kept most-recent-first and
the oldest entry is evicted once capacity is exceeded. Existing entries are
never edited or removed any other way.

Eviction only limits what history is visible; running totals live on the
account and are unaffected.
"""

from __future__ import annotations

from collections.abc import Iterator
from datetime import date, tzinfo
from typing import Generic, TypeVar

from dramaverse.domain.entities import AccessMethod, AccessRecord, Transaction

T = TypeVar("T")

TRANSACTION_LOG_CAPACITY = 100
ACCESS_HISTORY_CAPACITY = 500


class BoundedLog(Generic[T]):
    """FIFO-bounded, most-recent-first log over a caller-owned list."""

    def __init__(self, entries: list[T], capacity: int) -> None:
        if capacity <= 0:
            raise ValueError("capacity must be positive")
        self._entries = entries
        self._capacity = capacity

    @property
    def capacity(self) -> int:
        return self._capacity

    def append(self, entry: T) -> list[T]:
        """
        Add an entry as the most recent one.

        Returns:
            Entries evicted to stay within capacity (oldest last).
        """
        self._entries.insert(0, entry)
        evicted: list[T] = []
        while len(self._entries) > self._capacity:
            evicted.append(self._entries.pop())
        return evicted

    def get_recent(self, limit: int | None = None, offset: int = 0) -> list[T]:
        """Return up to `limit` entries, most recent first, skipping `offset`."""
        if offset < 0:
            raise ValueError("offset must not be negative")
        if limit is None:
            return list(self._entries[offset:])
        if limit < 0:
            raise ValueError("limit must not be negative")
        return list(self._entries[offset : offset + limit])

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[T]:
        return iter(list(self._entries))


class TransactionLog(BoundedLog[Transaction]):
    def __init__(
        self, entries: list[Transaction], capacity: int = TRANSACTION_LOG_CAPACITY
    ) -> None:
        super().__init__(entries, capacity)

    def find_on_date(self, description: str, day: date, tz: tzinfo) -> Transaction | None:
        """Find a transaction with this description whose local date is `day`."""
        for txn in self._entries:
            if txn.description == description and txn.timestamp.astimezone(tz).date() == day:
                return txn
        return None


class AccessHistory(BoundedLog[AccessRecord]):
    def __init__(
        self, entries: list[AccessRecord], capacity: int = ACCESS_HISTORY_CAPACITY
    ) -> None:
        super().__init__(entries, capacity)

    def has_access_by(self, content_id: str, method: AccessMethod) -> bool:
        return any(r.content_id == content_id and r.method == method for r in self._entries)
