import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from typing import Any

from fastapi import FastAPI

from dramaverse.api.deps import get_monetization_service, get_rules, get_settings

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan handler for startup/shutdown."""
    settings = get_settings()

    # Load rules and open storage on startup (fail-fast)
    try:
        get_rules()
        get_monetization_service()
        logger.info("Rules loaded from %s", settings.rules_path)
    except Exception:
        logger.critical("Startup failed (rules: %s)", settings.rules_path, exc_info=True)
        raise

    yield


app = FastAPI(
    title="DramaVerse Monetization API",
    version="0.1.0",
    lifespan=lifespan,
    docs_url="/docs",
    redoc_url="/redoc",
)

# --- Routers ---
from dramaverse.api.routes import access, subscription, wallet  # noqa: E402

app.include_router(wallet.router, prefix="/api/wallet", tags=["Wallet"])
app.include_router(access.router, prefix="/api/access", tags=["Access"])
app.include_router(subscription.router, prefix="/api/subscription", tags=["Subscription"])


@app.get("/health")
def health_check() -> dict[str, Any]:
    """Health check endpoint."""
    return {"status": "ok", "service": "monetization"}
