"""
Monetization component ports.

External interfaces the service talks to but does not own.
"""

from __future__ import annotations

from typing import Any, Protocol


class AnalyticsSinkPort(Protocol):
    """
    Port for engagement events.

    Events are fire-and-forget: a sink must not block and its failures
    never change the outcome of a ledger operation.

    Implementations:
    - LoggingAnalyticsSink: logs and keeps events in memory (dev/tests)
    """

    def track(self, user_id: str, event_type: str, data: dict[str, Any]) -> None:
        """Record one event."""
        ...


class UserDirectoryPort(Protocol):
    """Lookup owned by the external session/user layer."""

    def exists(self, user_id: str) -> bool:
        ...
