import os
from pathlib import Path

import pytest

from dramaverse.adapters.analytics_log import LoggingAnalyticsSink
from dramaverse.adapters.clock import ManualClock
from dramaverse.adapters.memory_store import InMemoryAccountStore
from dramaverse.adapters.sqlite.migrator import SQLiteMigrator
from dramaverse.adapters.sqlite.repos import SQLiteAccountRepo
from dramaverse.components.monetization import MonetizationService
from dramaverse.rules.loader import load_rules
from dramaverse.rules.models import MonetizationRules

PROJECT_ROOT = Path(__file__).resolve().parents[1]
MIGRATIONS_DIR = str(PROJECT_ROOT / "migrations")
RULES_PATH = PROJECT_ROOT / "rules.yaml"


@pytest.fixture
def rules() -> MonetizationRules:
    """The real rules file shipped with the project."""
    return load_rules(RULES_PATH)


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
    store: InMemoryAccountStore,
    rules: MonetizationRules,
    clock: ManualClock,
    sink: LoggingAnalyticsSink,
) -> MonetizationService:
    return MonetizationService(repo=store, rules=rules, clock=clock, analytics=sink)


@pytest.fixture
def db_path(tmp_path) -> str:
    """Migrated SQLite database in a temp directory."""
    path = os.path.join(str(tmp_path), "dramaverse.db")
    SQLiteMigrator(path, MIGRATIONS_DIR).run_migrations()
    return path


@pytest.fixture
def sqlite_repo(db_path: str) -> SQLiteAccountRepo:
    return SQLiteAccountRepo(db_path)


@pytest.fixture
def sqlite_service(
    sqlite_repo: SQLiteAccountRepo,
    rules: MonetizationRules,
    clock: ManualClock,
    sink: LoggingAnalyticsSink,
) -> MonetizationService:
    return MonetizationService(repo=sqlite_repo, rules=rules, clock=clock, analytics=sink)
