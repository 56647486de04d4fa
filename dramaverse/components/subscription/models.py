"""
Subscription component models.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Literal

from dramaverse.domain.entities import PlanType

PLANS: tuple[PlanType, ...] = ("basic", "premium")


@dataclass(frozen=True)
class SubscriptionView:
    """Subscription as reported to callers, with the plan's feature list."""

    is_active: bool
    plan: Literal["free", "basic", "premium"]
    start_date: datetime | None
    end_date: datetime | None
    auto_renew: bool
    features: tuple[str, ...]
