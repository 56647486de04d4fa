"""In-memory account store adapter.

Implements AccountRepoPort for the monetization component. Records are kept
as JSON snapshots so callers never share mutable state with the store.
For production, use SQLiteAccountRepo.
"""

from threading import Lock

from dramaverse.domain.entities import UserAccount
from dramaverse.domain.errors import ConcurrencyConflictError


class InMemoryAccountStore:
    """In-memory account storage - suitable for single-process deployments and tests."""

    def __init__(self) -> None:
        self._records: dict[str, str] = {}
        self._lock = Lock()

    def get(self, user_id: str) -> UserAccount | None:
        with self._lock:
            raw = self._records.get(user_id)
        if raw is None:
            return None
        return UserAccount.model_validate_json(raw)

    def save(self, account: UserAccount) -> UserAccount:
        with self._lock:
            raw = self._records.get(account.user_id)
            stored_version = UserAccount.model_validate_json(raw).version if raw else 0
            if stored_version != account.version:
                raise ConcurrencyConflictError(account.user_id, account.version)
            saved = account.model_copy(update={"version": account.version + 1})
            self._records[account.user_id] = saved.model_dump_json()
        return saved

    def delete(self, user_id: str) -> bool:
        with self._lock:
            return self._records.pop(user_id, None) is not None

    def clear(self) -> None:
        """Clear all records - useful for testing."""
        with self._lock:
            self._records.clear()
