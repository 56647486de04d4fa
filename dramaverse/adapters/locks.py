"""Per-user lock registry.

Serialises mutating operations for the same user id while leaving
different users fully independent. Locks are never removed, so every
caller for a user id always contends on the same lock.
"""

from collections.abc import Iterator
from contextlib import contextmanager
from threading import Lock


class UserLockRegistry:
    def __init__(self) -> None:
        self._locks: dict[str, Lock] = {}
        self._registry_lock = Lock()

    def _lock_for(self, user_id: str) -> Lock:
        with self._registry_lock:
            lock = self._locks.get(user_id)
            if lock is None:
                lock = Lock()
                self._locks[user_id] = lock
            return lock

    @contextmanager
    def hold(self, user_id: str) -> Iterator[None]:
        """Hold the user's lock for the duration of the block."""
        lock = self._lock_for(user_id)
        with lock:
            yield

    def __len__(self) -> int:
        with self._registry_lock:
            return len(self._locks)
