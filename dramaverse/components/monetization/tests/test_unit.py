"""
Unit tests for monetization component.

Tests:
- account provisioning with welcome bonus
- run_* entry points and the run() dispatcher
- failure outputs carry the error and leave state unchanged
- subscription lifecycle through the service
- analytics events and sink failures
- user validation and directory lookups
"""

from dataclasses import dataclass, field
from typing import Any

import pytest

from dramaverse.adapters.analytics_log import LoggingAnalyticsSink
from dramaverse.adapters.clock import ManualClock
from dramaverse.adapters.locks import UserLockRegistry
from dramaverse.adapters.memory_store import InMemoryAccountStore
from dramaverse.components.monetization import (
    CancelSubscriptionInput,
    CheckAccessInput,
    GetAccessHistoryInput,
    GetBalanceInput,
    GetTransactionsInput,
    GrantAdRewardInput,
    GrantDailyBonusInput,
    MonetizationService,
    PurchaseCoinsInput,
    SubscribeInput,
    UnlockWithCoinsInput,
    run,
    run_check_access,
    run_get_balance,
    run_unlock_with_coins,
)
from dramaverse.domain.entities import ContentDescriptor, UserAccount
from dramaverse.domain.errors import (
    InsufficientFundsError,
    NotFoundError,
    ValidationError,
)
from dramaverse.ports.repo import StorageError
from dramaverse.rules.models import AccessRules, MonetizationRules

PREMIUM = ContentDescriptor(content_id="E1", is_premium=True, price=50)

# --- Fakes ---


class FailingSink:
    def track(self, user_id: str, event_type: str, data: dict[str, Any]) -> None:
        raise RuntimeError("collector down")


@dataclass
class FakeDirectory:
    known: set[str] = field(default_factory=set)

    def exists(self, user_id: str) -> bool:
        return user_id in self.known


class BrokenStore(InMemoryAccountStore):
    def get(self, user_id: str) -> UserAccount | None:
        raise StorageError("disk on fire")


class ReadOnlyAfterSetupStore(InMemoryAccountStore):
    fail_writes = False

    def save(self, account: UserAccount) -> UserAccount:
        if self.fail_writes:
            raise StorageError("read-only replica")
        return super().save(account)


# --- Fixtures ---


@pytest.fixture
def clock() -> ManualClock:
    return ManualClock()


@pytest.fixture
def store() -> InMemoryAccountStore:
    return InMemoryAccountStore()


@pytest.fixture
def sink() -> LoggingAnalyticsSink:
    return LoggingAnalyticsSink()


@pytest.fixture
def service(
    store: InMemoryAccountStore, clock: ManualClock, sink: LoggingAnalyticsSink
) -> MonetizationService:
    return MonetizationService(repo=store, clock=clock, analytics=sink)


# --- Provisioning ---


class TestProvisioning:
    def test_first_read_opens_account(
        self, service: MonetizationService, store: InMemoryAccountStore
    ) -> None:
        out = run_get_balance(GetBalanceInput(user_id="u1"), service)
        assert out.success
        assert out.snapshot is not None
        assert out.snapshot.balance == 100
        assert out.snapshot.total_earned == 100
        assert store.get("u1") is not None

    def test_welcome_bonus_only_once(self, service: MonetizationService) -> None:
        service.get_balance("u1")
        service.get_balance("u1")
        txns = service.get_transactions("u1")
        assert [t.description for t in txns] == ["Welcome bonus"]

    def test_users_are_isolated(self, service: MonetizationService) -> None:
        service.debit("u1", 40, "spend")
        assert service.get_balance("u1").balance == 60
        assert service.get_balance("u2").balance == 100

    def test_blank_user_rejected(self, service: MonetizationService) -> None:
        out = run_get_balance(GetBalanceInput(user_id="  "), service)
        assert not out.success
        assert isinstance(out.error, ValidationError)

    def test_directory_unknown_user(self, store: InMemoryAccountStore) -> None:
        service = MonetizationService(repo=store, directory=FakeDirectory({"known"}))
        assert service.get_balance("known").balance == 100
        with pytest.raises(NotFoundError):
            service.get_balance("stranger")
        assert store.get("stranger") is None


# --- Ledger operations ---


class TestLedgerOperations:
    def test_purchase(self, service: MonetizationService) -> None:
        out = run(PurchaseCoinsInput(user_id="u1", amount=500), service)
        assert out.error is None
        assert out.new_balance == 600
        assert out.transaction.kind == "purchased"
        assert out.transaction.description == "Purchased 500 coins"

    def test_purchase_invalid_amount(self, service: MonetizationService) -> None:
        out = run(PurchaseCoinsInput(user_id="u1", amount=0), service)
        assert isinstance(out.error, ValidationError)
        assert out.new_balance is None
        assert service.get_balance("u1").balance == 100

    def test_transactions_paging(self, service: MonetizationService) -> None:
        for i in range(5):
            service.credit("u1", 1, f"c{i}")
        out = run(GetTransactionsInput(user_id="u1", limit=2, offset=1), service)
        assert [t.description for t in out.transactions] == ["c3", "c2"]

    def test_transactions_negative_limit(self, service: MonetizationService) -> None:
        out = run(GetTransactionsInput(user_id="u1", limit=-1), service)
        assert isinstance(out.error, ValidationError)

    def test_failed_debit_persists_nothing(
        self, service: MonetizationService, store: InMemoryAccountStore
    ) -> None:
        service.get_balance("u1")
        version = store.get("u1").version
        with pytest.raises(InsufficientFundsError):
            service.debit("u1", 101, "too much")
        assert store.get("u1").version == version
        assert service.get_balance("u1").balance == 100


# --- Access & unlock ---


class TestAccess:
    def test_check_access_denied(self, service: MonetizationService) -> None:
        result = run_check_access(CheckAccessInput(user_id="u1", content=PREMIUM), service)
        assert result.has_access is False
        assert result.cost == 50
        assert len(result.alternatives) == 3

    def test_check_access_does_not_provision(
        self, service: MonetizationService, store: InMemoryAccountStore
    ) -> None:
        service.check_access("newcomer", PREMIUM)
        assert store.get("newcomer") is None

    def test_check_access_has_no_side_effects(self, service: MonetizationService) -> None:
        service.get_balance("u1")
        service.check_access("u1", PREMIUM)
        assert service.get_balance("u1").balance == 100
        assert service.get_access_history("u1") == []

    def test_storage_failure_treated_as_free_tier(self, clock: ManualClock) -> None:
        service = MonetizationService(repo=BrokenStore(), clock=clock)
        assert service.check_access("u1", PREMIUM).reason == "denied"
        free = ContentDescriptor(content_id="E0")
        assert service.check_access("u1", free).has_access is True

    def test_expiry_write_failure_treated_as_free_tier(self, clock: ManualClock) -> None:
        store = ReadOnlyAfterSetupStore()
        service = MonetizationService(repo=store, clock=clock)
        service.subscribe("u1", "premium", 1)
        clock.advance(days=2)
        store.fail_writes = True

        result = service.check_access("u1", PREMIUM)
        assert result.has_access is False
        assert result.reason == "denied"

    def test_run_check_access_raises_for_blank_user(
        self, service: MonetizationService
    ) -> None:
        with pytest.raises(ValidationError):
            run_check_access(CheckAccessInput(user_id="", content=PREMIUM), service)

    def test_unlock_success(self, service: MonetizationService) -> None:
        out = run_unlock_with_coins(
            UnlockWithCoinsInput(user_id="u1", content_id="E1", price=50), service
        )
        assert out.success
        assert out.new_balance == 50
        assert out.charged is True
        history = run(GetAccessHistoryInput(user_id="u1"), service)
        assert [(r.content_id, r.method) for r in history.records] == [("E1", "coins")]

    def test_unlock_insufficient_funds(self, service: MonetizationService) -> None:
        out = run_unlock_with_coins(
            UnlockWithCoinsInput(user_id="u1", content_id="E2", price=160), service
        )
        assert not out.success
        assert out.new_balance == 100
        assert isinstance(out.error, InsufficientFundsError)
        assert out.error.shortfall == 60
        assert service.get_access_history("u1") == []

    def test_unlock_still_denied_on_next_check_by_default(
        self, service: MonetizationService
    ) -> None:
        service.unlock_with_coins("u1", "E1", 50)
        assert service.check_access("u1", PREMIUM).has_access is False

    def test_unlock_honoured_when_configured(self, store: InMemoryAccountStore) -> None:
        rules = MonetizationRules(access=AccessRules(honor_coin_unlocks=True))
        service = MonetizationService(repo=store, rules=rules)
        service.unlock_with_coins("u1", "E1", 50)

        assert service.check_access("u1", PREMIUM).reason == "coins"
        result, balance = service.unlock_with_coins("u1", "E1", 50)
        assert result.charged is False
        assert balance == 50


# --- Rewards ---


class TestRewards:
    def test_ad_reward(self, service: MonetizationService) -> None:
        out = run(GrantAdRewardInput(user_id="u1", content_id="E3"), service)
        assert out.error is None
        assert out.new_balance == 110
        assert service.get_access_history("u1")[0].method == "ad"

    def test_ad_reward_missing_content(self, service: MonetizationService) -> None:
        out = run(GrantAdRewardInput(user_id="u1", content_id=""), service)
        assert isinstance(out.error, ValidationError)
        assert service.get_balance("u1").balance == 100

    def test_daily_bonus_once(self, service: MonetizationService) -> None:
        first = run(GrantDailyBonusInput(user_id="u1"), service)
        second = run(GrantDailyBonusInput(user_id="u1"), service)
        assert (first.granted, first.new_balance) == (True, 125)
        assert (second.granted, second.new_balance) == (False, 125)

    def test_daily_bonus_next_day(
        self, service: MonetizationService, clock: ManualClock
    ) -> None:
        service.grant_daily_login_bonus("u1")
        clock.advance(days=1)
        assert service.grant_daily_login_bonus("u1") == (True, 150)

    def test_earning_opportunities(self, service: MonetizationService) -> None:
        assert service.get_earning_opportunities() == {
            "daily_login": 25,
            "watch_ad": 10,
            "share_content": 15,
            "invite_friend": 100,
            "complete_profile": 50,
        }


# --- Subscription ---


class TestSubscription:
    def test_subscribe_grants_premium_access(self, service: MonetizationService) -> None:
        out = run(SubscribeInput(user_id="u1", plan="premium", duration_days=30), service)
        assert out.error is None
        assert out.subscription.is_active
        assert service.check_access("u1", PREMIUM).reason == "subscription"
        assert service.is_subscription_active("u1") is True

    def test_subscribe_invalid(self, service: MonetizationService) -> None:
        out = run(SubscribeInput(user_id="u1", plan="gold", duration_days=30), service)
        assert isinstance(out.error, ValidationError)
        assert service.get_subscription("u1").plan == "free"

    def test_lazy_expiry_on_check_access(
        self,
        service: MonetizationService,
        store: InMemoryAccountStore,
        clock: ManualClock,
        sink: LoggingAnalyticsSink,
    ) -> None:
        service.subscribe("u1", "basic", 1)
        clock.advance(days=2)

        assert service.check_access("u1", PREMIUM).has_access is False
        assert store.get("u1").subscription.status == "free"
        assert len(sink.of_type("subscription_expired")) == 1

    def test_expiry_reported_by_get_subscription(
        self, service: MonetizationService, clock: ManualClock
    ) -> None:
        service.subscribe("u1", "premium", 7)
        clock.advance(days=8)
        view = service.get_subscription("u1")
        assert view.plan == "free"
        assert view.features == ("ads", "basic_content")
        assert service.expire_subscription_if_due("u1") is False

    def test_cancel_keeps_access_until_end(
        self, service: MonetizationService, clock: ManualClock
    ) -> None:
        service.subscribe("u1", "premium", 30, auto_renew=True)
        out = run(CancelSubscriptionInput(user_id="u1"), service)
        assert out.subscription.auto_renew is False
        assert out.subscription.is_active is True

        clock.advance(days=31)
        assert service.is_subscription_active("u1") is False

    def test_cancel_on_free(self, service: MonetizationService) -> None:
        view = service.cancel_subscription("u1")
        assert view.plan == "free"


# --- Analytics ---


class TestAnalytics:
    def test_events_emitted(
        self, service: MonetizationService, sink: LoggingAnalyticsSink
    ) -> None:
        service.grant_ad_reward("u1", "E3")
        service.unlock_with_coins("u1", "E1", 50)
        service.subscribe("u1", "basic", 30)

        types = [e.event_type for e in sink.events]
        assert types == ["ad_reward_granted", "content_unlocked", "subscription_activated"]
        assert sink.events[1].data["content_id"] == "E1"

    def test_no_event_on_failure(
        self, service: MonetizationService, sink: LoggingAnalyticsSink
    ) -> None:
        with pytest.raises(InsufficientFundsError):
            service.unlock_with_coins("u1", "E1", 500)
        assert sink.events == []

    def test_no_event_for_repeat_daily_bonus(
        self, service: MonetizationService, sink: LoggingAnalyticsSink
    ) -> None:
        service.grant_daily_login_bonus("u1")
        service.grant_daily_login_bonus("u1")
        assert len(sink.of_type("daily_bonus_granted")) == 1

    def test_sink_failure_does_not_break_operation(
        self, store: InMemoryAccountStore, caplog: pytest.LogCaptureFixture
    ) -> None:
        service = MonetizationService(repo=store, analytics=FailingSink())
        _, balance = service.grant_ad_reward("u1", "E3")
        assert balance == 110
        assert "Analytics sink failed" in caplog.text


# --- Lifecycle ---


class TestLifecycle:
    def test_delete_account(
        self, service: MonetizationService, store: InMemoryAccountStore
    ) -> None:
        service.debit("u1", 30, "spend")
        assert service.delete_account("u1") is True
        assert store.get("u1") is None
        assert service.delete_account("u1") is False
        # Re-provisioned with a fresh welcome bonus
        assert service.get_balance("u1").balance == 100

    def test_delete_unknown_account(self, service: MonetizationService) -> None:
        assert service.delete_account("never-seen") is False

    def test_recreated_account_starts_fresh(self, service: MonetizationService) -> None:
        service.subscribe("u1", "premium", 30)
        service.grant_ad_reward("u1", "E3")
        service.delete_account("u1")

        snap = service.get_balance("u1")
        assert (snap.balance, snap.total_earned, snap.total_spent) == (100, 100, 0)
        assert [t.description for t in service.get_transactions("u1")] == ["Welcome bonus"]
        assert service.get_access_history("u1") == []
        assert service.get_subscription("u1").plan == "free"

    def test_delete_keeps_user_lock(self, store: InMemoryAccountStore) -> None:
        locks = UserLockRegistry()
        service = MonetizationService(repo=store, locks=locks)
        service.get_balance("u1")
        service.delete_account("u1")
        assert len(locks) == 1

    def test_delete_rejects_blank_user(self, service: MonetizationService) -> None:
        with pytest.raises(ValidationError):
            service.delete_account(" ")


def test_run_unknown_input(service: MonetizationService) -> None:
    with pytest.raises(TypeError):
        run(object(), service)
