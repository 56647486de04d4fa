"""
Ledger - per-user coin balance with running totals.

Functional core: operates on a UserAccount in memory. Callers own
persistence and must hold the user's lock across load-mutate-save.

Invariants:
- balance == total_earned - total_spent, balance >= 0
- totals only grow and are never derived from the (capped) transaction log
- credit/debit either apply every change (balance, total, log entry) or none
"""

from __future__ import annotations

import logging
from datetime import datetime

from dramaverse.components.history import TRANSACTION_LOG_CAPACITY, TransactionLog
from dramaverse.domain.entities import CreditKind, Transaction, UserAccount
from dramaverse.domain.errors import InsufficientFundsError, ValidationError
from dramaverse.ports.clock import ClockPort

from .models import WELCOME_BONUS_DESCRIPTION, LedgerSnapshot

logger = logging.getLogger(__name__)

CREDIT_KINDS: tuple[CreditKind, ...] = ("earned", "purchased")


def validate_amount(amount: object, field: str = "amount") -> int:
    """Reject anything that is not a positive integer."""
    if isinstance(amount, bool) or not isinstance(amount, int):
        raise ValidationError(field, "invalid_type", f"Field '{field}' must be an integer")
    if amount <= 0:
        raise ValidationError(field, "not_positive", f"Field '{field}' must be positive")
    return amount


def validate_description(description: object) -> str:
    if not isinstance(description, str) or not description.strip():
        raise ValidationError("description", "required", "Field 'description' is required")
    return description


class Ledger:
    """Coin ledger for one account."""

    def __init__(
        self,
        account: UserAccount,
        clock: ClockPort,
        log_capacity: int = TRANSACTION_LOG_CAPACITY,
    ) -> None:
        self._account = account
        self._clock = clock
        self._log = TransactionLog(account.transactions, log_capacity)

    @property
    def log(self) -> TransactionLog:
        return self._log

    def get_balance(self) -> int:
        return self._account.balance

    def snapshot(self) -> LedgerSnapshot:
        return LedgerSnapshot(
            user_id=self._account.user_id,
            balance=self._account.balance,
            total_earned=self._account.total_earned,
            total_spent=self._account.total_spent,
            last_updated=self._account.updated_at,
        )

    def credit(
        self,
        amount: int,
        description: str,
        content_id: str | None = None,
        kind: CreditKind = "earned",
    ) -> Transaction:
        """Add coins. Always succeeds for valid input."""
        validate_amount(amount)
        validate_description(description)
        if kind not in CREDIT_KINDS:
            raise ValidationError(
                "kind", "invalid_value", f"Credit kind must be one of: {', '.join(CREDIT_KINDS)}"
            )

        txn = self._new_transaction(kind, amount, description, content_id)
        self._account.balance += amount
        self._account.total_earned += amount
        self._record(txn)

        logger.info(
            "Credited %d coins to user %s (%s): %s",
            amount, self._account.user_id, kind, description,
        )
        return txn

    def debit(
        self,
        amount: int,
        description: str,
        content_id: str | None = None,
    ) -> Transaction:
        """
        Remove coins.

        Raises:
            InsufficientFundsError: amount exceeds balance; nothing changed.
        """
        validate_amount(amount)
        validate_description(description)
        if amount > self._account.balance:
            raise InsufficientFundsError(required=amount, available=self._account.balance)

        txn = self._new_transaction("spent", amount, description, content_id)
        self._account.balance -= amount
        self._account.total_spent += amount
        self._record(txn)

        logger.info(
            "Debited %d coins from user %s: %s", amount, self._account.user_id, description
        )
        return txn

    def get_history(self, limit: int | None = None, offset: int = 0) -> list[Transaction]:
        """Transactions, most recent first."""
        return self._log.get_recent(limit, offset)

    def _new_transaction(
        self,
        kind: str,
        amount: int,
        description: str,
        content_id: str | None,
    ) -> Transaction:
        # Built before any counter changes so a rejected entry leaves no trace.
        return Transaction.model_validate(
            {
                "kind": kind,
                "amount": amount,
                "description": description,
                "timestamp": self._clock.now(),
                "content_id": content_id,
            }
        )

    def _record(self, txn: Transaction) -> None:
        evicted = self._log.append(txn)
        self._account.updated_at = txn.timestamp
        if evicted:
            logger.debug(
                "Evicted %d old transactions for user %s", len(evicted), self._account.user_id
            )


def open_account(
    user_id: str,
    clock: ClockPort,
    welcome_bonus: int = 100,
    log_capacity: int = TRANSACTION_LOG_CAPACITY,
) -> UserAccount:
    """Create a new account carrying the welcome grant."""
    now: datetime = clock.now()
    account = UserAccount(user_id=user_id, created_at=now, updated_at=now)
    if welcome_bonus > 0:
        Ledger(account, clock, log_capacity).credit(welcome_bonus, WELCOME_BONUS_DESCRIPTION)
    return account
