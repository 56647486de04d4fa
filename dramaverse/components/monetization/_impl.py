"""
MonetizationService - per-user coin ledger, subscriptions and access.

Owns the keyed account store and serialises every mutation per user:
load -> mutate working copy -> save, all under that user's lock. A failed
operation never reaches save(), so no partial state is observable.
Different users never share a lock.

Reads (balance, history, decide) run without the lock on a snapshot. The
one exception is lazy subscription expiry, which writes and so re-reads
the account under the lock before persisting the transition.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import Any, TypeVar

from dramaverse.adapters.clock import SystemClock
from dramaverse.adapters.locks import UserLockRegistry
from dramaverse.components.access import AccessContext, AccessResult, decide
from dramaverse.components.history import AccessHistory
from dramaverse.components.ledger import Ledger, LedgerSnapshot, open_account
from dramaverse.components.rewards import RewardGrantor, UnlockResult
from dramaverse.components.subscription import SubscriptionState, SubscriptionView, is_expired
from dramaverse.domain.entities import (
    AccessRecord,
    ContentDescriptor,
    CreditKind,
    Transaction,
    UserAccount,
)
from dramaverse.domain.errors import NotFoundError, ValidationError
from dramaverse.ports.clock import ClockPort
from dramaverse.ports.repo import AccountRepoPort, StorageError
from dramaverse.rules.models import MonetizationRules

from .ports import AnalyticsSinkPort, UserDirectoryPort

logger = logging.getLogger(__name__)

R = TypeVar("R")


class MonetizationService:
    """
    Monetization service.

    Provides:
    - Coin balance, history, purchases and debits
    - Access decisions for premium content
    - Ad rewards, daily login bonus, coin unlocks
    - Subscription activation, cancellation and lazy expiry
    """

    def __init__(
        self,
        repo: AccountRepoPort,
        rules: MonetizationRules | None = None,
        clock: ClockPort | None = None,
        locks: UserLockRegistry | None = None,
        analytics: AnalyticsSinkPort | None = None,
        directory: UserDirectoryPort | None = None,
    ) -> None:
        self._repo = repo
        self._rules = rules or MonetizationRules()
        self._clock = clock or SystemClock()
        self._locks = locks or UserLockRegistry()
        self._analytics = analytics
        self._directory = directory
        self._grantor = RewardGrantor(self._clock, self._rules.rewards)

    @property
    def rules(self) -> MonetizationRules:
        return self._rules

    # --- Plumbing ---

    def _check_user(self, user_id: str) -> None:
        if not isinstance(user_id, str) or not user_id.strip():
            raise ValidationError("user_id", "required", "Field 'user_id' is required")
        if self._directory is not None and not self._directory.exists(user_id):
            raise NotFoundError("user", user_id)

    def _ledger(self, account: UserAccount) -> Ledger:
        return Ledger(account, self._clock, self._rules.ledger.transaction_log_cap)

    def _access_history(self, account: UserAccount) -> AccessHistory:
        return AccessHistory(account.access_history, self._rules.ledger.access_history_cap)

    def _subscription(self, account: UserAccount) -> SubscriptionState:
        return SubscriptionState(account, self._clock, self._rules.subscription)

    def _load_for_update(self, user_id: str) -> UserAccount:
        # Caller holds the user's lock.
        account = self._repo.get(user_id)
        if account is None:
            account = open_account(
                user_id,
                self._clock,
                welcome_bonus=self._rules.ledger.welcome_bonus,
                log_capacity=self._rules.ledger.transaction_log_cap,
            )
            account = self._repo.save(account)
            logger.info(
                "Opened account for user %s with welcome bonus %d",
                user_id, self._rules.ledger.welcome_bonus,
            )
        return account

    def _read(self, user_id: str) -> UserAccount:
        self._check_user(user_id)
        account = self._repo.get(user_id)
        if account is not None:
            return account
        with self._locks.hold(user_id):
            return self._load_for_update(user_id)

    def _mutate(
        self, user_id: str, operation: Callable[[UserAccount], R]
    ) -> tuple[R, UserAccount]:
        self._check_user(user_id)
        with self._locks.hold(user_id):
            account = self._load_for_update(user_id)
            result = operation(account)
            saved = self._repo.save(account)
        return result, saved

    def _emit(self, user_id: str, event_type: str, **data: Any) -> None:
        if self._analytics is None:
            return
        try:
            self._analytics.track(user_id, event_type, data)
        except Exception:
            logger.exception("Analytics sink failed for event %s", event_type)

    # --- Ledger ---

    def get_balance(self, user_id: str) -> LedgerSnapshot:
        return self._ledger(self._read(user_id)).snapshot()

    def get_transactions(
        self, user_id: str, limit: int = 20, offset: int = 0
    ) -> list[Transaction]:
        if limit < 0 or offset < 0:
            raise ValidationError("limit", "invalid_value", "limit and offset must not be negative")
        return self._ledger(self._read(user_id)).get_history(limit, offset)

    def credit(
        self,
        user_id: str,
        amount: int,
        description: str,
        content_id: str | None = None,
        kind: CreditKind = "earned",
    ) -> tuple[Transaction, int]:
        txn, account = self._mutate(
            user_id, lambda acc: self._ledger(acc).credit(amount, description, content_id, kind)
        )
        self._emit(user_id, "coins_credited", amount=amount, kind=kind, description=description)
        return txn, account.balance

    def purchase_coins(
        self, user_id: str, amount: int, description: str | None = None
    ) -> tuple[Transaction, int]:
        return self.credit(
            user_id,
            amount,
            description or f"Purchased {amount} coins",
            kind="purchased",
        )

    def debit(
        self,
        user_id: str,
        amount: int,
        description: str,
        content_id: str | None = None,
    ) -> tuple[Transaction, int]:
        txn, account = self._mutate(
            user_id, lambda acc: self._ledger(acc).debit(amount, description, content_id)
        )
        self._emit(user_id, "coins_debited", amount=amount, description=description)
        return txn, account.balance

    # --- Access ---

    def check_access(self, user_id: str, content: ContentDescriptor) -> AccessResult:
        """Decide admission; never records history or touches the balance."""
        self._check_user(user_id)
        try:
            account = self._repo.get(user_id)
        except StorageError as e:
            logger.warning("Account unreadable for user %s, treating as free: %s", user_id, e)
            account = None

        subscription_active = False
        unlocked = False
        if account is not None:
            if is_expired(account, self._clock):
                try:
                    self.expire_subscription_if_due(user_id)
                except StorageError as e:
                    logger.warning(
                        "Could not persist expiry for user %s, treating as free: %s", user_id, e
                    )
            else:
                subscription_active = self._subscription(account).is_active()
            unlocked = self._access_history(account).has_access_by(content.content_id, "coins")

        result = decide(
            content,
            AccessContext(subscription_active=subscription_active, unlocked_with_coins=unlocked),
            default_price=self._rules.access.default_unlock_price,
            honor_coin_unlocks=self._rules.access.honor_coin_unlocks,
        )
        logger.debug(
            "Access decision for user %s content %s: %s",
            user_id, content.content_id, result.reason,
        )
        return result

    def unlock_with_coins(
        self, user_id: str, content_id: str, price: int
    ) -> tuple[UnlockResult, int]:
        def operation(acc: UserAccount) -> UnlockResult:
            return self._grantor.unlock_with_coins(
                self._ledger(acc),
                self._access_history(acc),
                content_id,
                price,
                honor_existing_unlock=self._rules.access.honor_coin_unlocks,
            )

        result, account = self._mutate(user_id, operation)
        self._emit(
            user_id, "content_unlocked",
            content_id=content_id, method="coins", price=price, charged=result.charged,
        )
        return result, account.balance

    def get_access_history(
        self, user_id: str, limit: int = 50, offset: int = 0
    ) -> list[AccessRecord]:
        return self._access_history(self._read(user_id)).get_recent(limit, offset)

    # --- Rewards ---

    def grant_ad_reward(self, user_id: str, content_id: str) -> tuple[Transaction, int]:
        txn, account = self._mutate(
            user_id,
            lambda acc: self._grantor.grant_ad_reward(
                self._ledger(acc), self._access_history(acc), content_id
            ),
        )
        self._emit(user_id, "ad_reward_granted", content_id=content_id, amount=txn.amount)
        return txn, account.balance

    def grant_daily_login_bonus(self, user_id: str) -> tuple[bool, int]:
        self._check_user(user_id)
        with self._locks.hold(user_id):
            account = self._load_for_update(user_id)
            txn = self._grantor.grant_daily_login_bonus(account, self._ledger(account))
            if txn is not None:
                account = self._repo.save(account)
        if txn is None:
            return False, account.balance
        self._emit(user_id, "daily_bonus_granted", amount=txn.amount)
        return True, account.balance

    def get_earning_opportunities(self) -> dict[str, int]:
        return self._rules.rewards.earning_opportunities.model_dump()

    # --- Subscription ---

    def expire_subscription_if_due(self, user_id: str) -> bool:
        """Apply lazy expiry under the user's lock. Returns True if it expired."""
        with self._locks.hold(user_id):
            account = self._repo.get(user_id)
            if account is None or not is_expired(account, self._clock):
                return False
            self._subscription(account).is_active()
            self._repo.save(account)
        self._emit(user_id, "subscription_expired")
        return True

    def is_subscription_active(self, user_id: str) -> bool:
        self._check_user(user_id)
        self.expire_subscription_if_due(user_id)
        return self.get_subscription(user_id).is_active

    def get_subscription(self, user_id: str) -> SubscriptionView:
        self._check_user(user_id)
        self.expire_subscription_if_due(user_id)
        return self._subscription(self._read(user_id)).view()

    def subscribe(
        self,
        user_id: str,
        plan: str,
        duration_days: int,
        auto_renew: bool = False,
    ) -> SubscriptionView:
        def operation(acc: UserAccount) -> SubscriptionView:
            state = self._subscription(acc)
            state.activate(plan, duration_days, auto_renew)
            return state.view()

        view, _ = self._mutate(user_id, operation)
        self._emit(
            user_id, "subscription_activated",
            plan=plan, duration_days=duration_days, auto_renew=auto_renew,
        )
        return view

    def cancel_subscription(self, user_id: str) -> SubscriptionView:
        def operation(acc: UserAccount) -> SubscriptionView:
            state = self._subscription(acc)
            state.is_active()
            state.cancel()
            return state.view()

        view, _ = self._mutate(user_id, operation)
        self._emit(user_id, "subscription_cancelled")
        return view

    # --- Lifecycle ---

    def delete_account(self, user_id: str) -> bool:
        """
        Explicit account deletion.

        The user's lock stays registered: callers already queued on it and
        later requests must keep sharing the same lock.
        """
        self._check_user(user_id)
        with self._locks.hold(user_id):
            deleted = self._repo.delete(user_id)
        if deleted:
            logger.info("Deleted account for user %s", user_id)
        return deleted
