from typing import Protocol

from dramaverse.domain.entities import UserAccount


class StorageError(Exception):
    """Persistence layer failed to read or write a record."""


class AccountRepoPort(Protocol):
    """
    Keyed store of per-user records.

    save() must reject a write whose account.version does not match the
    stored version (ConcurrencyConflictError) and store it with version + 1.
    """

    def get(self, user_id: str) -> UserAccount | None:
        ...

    def save(self, account: UserAccount) -> UserAccount:
        ...

    def delete(self, user_id: str) -> bool:
        ...
