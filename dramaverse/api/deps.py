import os
from functools import lru_cache
from pathlib import Path

from fastapi import Depends, Header, HTTPException, status

from dramaverse.adapters.analytics_log import LoggingAnalyticsSink
from dramaverse.adapters.clock import SystemClock
from dramaverse.adapters.locks import UserLockRegistry
from dramaverse.adapters.sqlite.migrator import SQLiteMigrator
from dramaverse.adapters.sqlite.repos import SQLiteAccountRepo
from dramaverse.components.monetization import MonetizationService
from dramaverse.rules.loader import load_rules
from dramaverse.rules.models import MonetizationRules


# --- Settings ---
class Settings:
    def __init__(self) -> None:
        self.base_dir = Path(os.getcwd())
        self.data_dir = Path(os.environ.get("DRAMAVERSE_DATA_DIR", "./data"))
        self.db_path = str(self.data_dir / "dramaverse.db")
        self.migrations_dir = str(self.base_dir / "migrations")
        self.rules_path = Path(
            os.environ.get("DRAMAVERSE_RULES_PATH", str(self.base_dir / "rules.yaml"))
        )


@lru_cache
def get_settings() -> Settings:
    return Settings()


# --- Rules ---
@lru_cache
def get_rules() -> MonetizationRules:
    return load_rules(get_settings().rules_path)


# --- Service singleton ---
# The lock registry must be shared by every request, so the service is a
# process-wide singleton rather than built per request.
_service_instance: MonetizationService | None = None


def init_storage(settings: Settings) -> SQLiteAccountRepo:
    settings.data_dir.mkdir(parents=True, exist_ok=True)
    SQLiteMigrator(settings.db_path, settings.migrations_dir).run_migrations()
    return SQLiteAccountRepo(settings.db_path)


def get_monetization_service() -> MonetizationService:
    """Get monetization service singleton."""
    global _service_instance
    if _service_instance is None:
        settings = get_settings()
        _service_instance = MonetizationService(
            repo=init_storage(settings),
            rules=get_rules(),
            clock=SystemClock(),
            locks=UserLockRegistry(),
            analytics=LoggingAnalyticsSink(),
        )
    return _service_instance


def set_monetization_service(service: MonetizationService | None) -> None:
    """Replace the singleton (tests, alternative wiring)."""
    global _service_instance
    _service_instance = service


# --- Identity ---
# Authentication is owned by the session middleware in front of this API;
# it forwards the resolved user id in this header.
def get_current_user_id(
    x_user_id: str | None = Header(default=None, alias="X-User-Id"),
) -> str:
    if not x_user_id or not x_user_id.strip():
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not authenticated",
        )
    return x_user_id.strip()


CurrentUserId = Depends(get_current_user_id)
ServiceDep = Depends(get_monetization_service)
