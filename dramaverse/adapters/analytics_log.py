"""
Logging analytics sink.

Logs monetization events instead of shipping them to a collector.
Used for local development and testing; production wires a real
collector behind the same AnalyticsSinkPort.

Key behaviors:
- Logs event type and payload at a configurable level
- Keeps events in memory for test assertions
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import UTC, datetime
from typing import Any

logger = logging.getLogger(__name__)


@dataclass
class TrackedEvent:
    """Record of a logged event for test assertions."""

    user_id: str
    event_type: str
    data: dict[str, Any]
    tracked_at: datetime


@dataclass
class LoggingAnalyticsSink:
    """Analytics sink that logs instead of forwarding."""

    events: list[TrackedEvent] = field(default_factory=list)
    log_level: int = logging.INFO
    max_events: int = 1000

    def track(self, user_id: str, event_type: str, data: dict[str, Any]) -> None:
        self.events.append(
            TrackedEvent(
                user_id=user_id,
                event_type=event_type,
                data=dict(data),
                tracked_at=datetime.now(UTC),
            )
        )
        if len(self.events) > self.max_events:
            del self.events[: len(self.events) - self.max_events]

        logger.log(self.log_level, "Event tracked: %s user=%s %s", event_type, user_id, data)

    def of_type(self, event_type: str) -> list[TrackedEvent]:
        return [e for e in self.events if e.event_type == event_type]

    def clear(self) -> None:
        self.events.clear()
