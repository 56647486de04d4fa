"""Unit tests for in-process adapters: memory store, lock registry, analytics sink, clocks."""

import logging
import threading
import time
from datetime import UTC, datetime, timedelta

import pytest

from dramaverse.adapters.analytics_log import LoggingAnalyticsSink
from dramaverse.adapters.clock import ManualClock, SystemClock
from dramaverse.adapters.locks import UserLockRegistry
from dramaverse.adapters.memory_store import InMemoryAccountStore
from dramaverse.domain.entities import UserAccount
from dramaverse.domain.errors import ConcurrencyConflictError


class TestInMemoryAccountStore:
    def test_save_and_get(self) -> None:
        store = InMemoryAccountStore()
        saved = store.save(UserAccount(user_id="u1"))
        assert saved.version == 1
        loaded = store.get("u1")
        assert loaded == saved

    def test_get_missing(self) -> None:
        assert InMemoryAccountStore().get("ghost") is None

    def test_returns_independent_copies(self) -> None:
        store = InMemoryAccountStore()
        store.save(UserAccount(user_id="u1"))
        a = store.get("u1")
        a.balance = 999
        a.total_earned = 999
        assert store.get("u1").balance == 0

    def test_stale_write_rejected(self) -> None:
        store = InMemoryAccountStore()
        store.save(UserAccount(user_id="u1"))
        first = store.get("u1")
        second = store.get("u1")
        store.save(first)
        with pytest.raises(ConcurrencyConflictError):
            store.save(second)

    def test_duplicate_create_rejected(self) -> None:
        store = InMemoryAccountStore()
        store.save(UserAccount(user_id="u1"))
        with pytest.raises(ConcurrencyConflictError):
            store.save(UserAccount(user_id="u1"))

    def test_delete_and_clear(self) -> None:
        store = InMemoryAccountStore()
        store.save(UserAccount(user_id="u1"))
        store.save(UserAccount(user_id="u2"))
        assert store.delete("u1") is True
        assert store.delete("u1") is False
        store.clear()
        assert store.get("u2") is None


class TestUserLockRegistry:
    def test_same_user_serialised(self) -> None:
        registry = UserLockRegistry()
        inside = 0
        overlap = False
        guard = threading.Lock()

        def worker() -> None:
            nonlocal inside, overlap
            with registry.hold("u1"):
                with guard:
                    inside += 1
                    if inside > 1:
                        overlap = True
                time.sleep(0.005)
                with guard:
                    inside -= 1

        threads = [threading.Thread(target=worker) for _ in range(8)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()
        assert overlap is False

    def test_different_users_independent(self) -> None:
        registry = UserLockRegistry()
        acquired = threading.Event()

        def other() -> None:
            with registry.hold("u2"):
                acquired.set()

        with registry.hold("u1"):
            t = threading.Thread(target=other)
            t.start()
            assert acquired.wait(timeout=2)
            t.join()

    def test_one_lock_per_user(self) -> None:
        registry = UserLockRegistry()
        for uid in ("u1", "u2", "u1"):
            with registry.hold(uid):
                pass
        assert len(registry) == 2


class TestLoggingAnalyticsSink:
    def test_records_and_logs(self, caplog: pytest.LogCaptureFixture) -> None:
        sink = LoggingAnalyticsSink()
        with caplog.at_level(logging.INFO):
            sink.track("u1", "ad_reward_granted", {"content_id": "E3"})
        assert len(sink.events) == 1
        assert sink.of_type("ad_reward_granted")[0].data == {"content_id": "E3"}
        assert "ad_reward_granted" in caplog.text

    def test_bounded(self) -> None:
        sink = LoggingAnalyticsSink(max_events=3)
        for i in range(5):
            sink.track("u1", f"e{i}", {})
        assert [e.event_type for e in sink.events] == ["e2", "e3", "e4"]

    def test_clear(self) -> None:
        sink = LoggingAnalyticsSink()
        sink.track("u1", "x", {})
        sink.clear()
        assert sink.events == []


class TestClocks:
    def test_system_clock_is_aware(self) -> None:
        clock = SystemClock()
        assert clock.now().tzinfo is not None
        assert abs(clock.now() - datetime.now(UTC)) < timedelta(seconds=5)

    def test_manual_clock(self) -> None:
        clock = ManualClock()
        start = clock.now()
        clock.advance(hours=2)
        assert clock.now() - start == timedelta(hours=2)
        clock.set(datetime(2030, 1, 1))
        assert clock.now() == datetime(2030, 1, 1, tzinfo=UTC)
