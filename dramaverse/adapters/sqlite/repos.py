"""SQLite account repository.

One row per user holding the whole UserAccount as a JSON document. The
counter columns duplicate the document so they can be queried and
constrained; the document stays the source of truth.
"""

import sqlite3
from typing import Any

from dramaverse.domain.entities import UserAccount
from dramaverse.domain.errors import ConcurrencyConflictError
from dramaverse.ports.repo import StorageError


# Helper to convert sqlite rows to dicts
def dict_factory(cursor: sqlite3.Cursor, row: Any) -> dict[str, Any]:
    d = {}
    for idx, col in enumerate(cursor.description):
        d[col[0]] = row[idx]
    return d


class SQLiteAccountRepo:
    def __init__(self, db_path: str):
        self.db_path = db_path

    def _get_conn(self) -> sqlite3.Connection:
        conn = sqlite3.connect(self.db_path, timeout=10.0)
        conn.row_factory = dict_factory
        return conn

    def get(self, user_id: str) -> UserAccount | None:
        try:
            conn = self._get_conn()
        except sqlite3.Error as e:
            raise StorageError(f"Cannot open account store: {e}") from e
        try:
            row = conn.execute(
                "SELECT document_json FROM user_accounts WHERE user_id = ?", (user_id,)
            ).fetchone()
        except sqlite3.Error as e:
            raise StorageError(f"Failed to read account {user_id}: {e}") from e
        finally:
            conn.close()
        if not row:
            return None
        return UserAccount.model_validate_json(row["document_json"])

    def save(self, account: UserAccount) -> UserAccount:
        saved = account.model_copy(update={"version": account.version + 1})
        params = (
            saved.version,
            saved.balance,
            saved.total_earned,
            saved.total_spent,
            saved.model_dump_json(),
            saved.updated_at.isoformat(),
        )
        try:
            conn = self._get_conn()
        except sqlite3.Error as e:
            raise StorageError(f"Cannot open account store: {e}") from e
        try:
            # BEGIN IMMEDIATE takes the write lock up front so the version
            # check and the write happen in one transaction.
            conn.execute("BEGIN IMMEDIATE")
            if account.version == 0:
                cursor = conn.execute(
                    """
                    INSERT INTO user_accounts
                    (version, balance, total_earned, total_spent, document_json,
                     updated_at, user_id)
                    VALUES (?, ?, ?, ?, ?, ?, ?)
                    ON CONFLICT(user_id) DO NOTHING
                    """,
                    (*params, saved.user_id),
                )
            else:
                cursor = conn.execute(
                    """
                    UPDATE user_accounts SET
                        version = ?, balance = ?, total_earned = ?, total_spent = ?,
                        document_json = ?, updated_at = ?
                    WHERE user_id = ? AND version = ?
                    """,
                    (*params, saved.user_id, account.version),
                )
            if cursor.rowcount != 1:
                conn.rollback()
                raise ConcurrencyConflictError(account.user_id, account.version)
            conn.commit()
            return saved
        except sqlite3.Error as e:
            conn.rollback()
            raise StorageError(f"Failed to save account {account.user_id}: {e}") from e
        finally:
            conn.close()

    def delete(self, user_id: str) -> bool:
        conn = self._get_conn()
        try:
            cursor = conn.execute("DELETE FROM user_accounts WHERE user_id = ?", (user_id,))
            conn.commit()
            return cursor.rowcount > 0
        except sqlite3.Error as e:
            raise StorageError(f"Failed to delete account {user_id}: {e}") from e
        finally:
            conn.close()

