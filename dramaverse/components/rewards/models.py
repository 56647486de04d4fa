"""
Rewards component models.
"""

from __future__ import annotations

from dataclasses import dataclass

from dramaverse.domain.entities import Transaction

AD_REWARD_DESCRIPTION = "Watched advertisement"
DAILY_BONUS_DESCRIPTION = "Daily login bonus"
UNLOCK_DESCRIPTION_PREFIX = "Unlocked content: "


def unlock_description(content_id: str) -> str:
    return f"{UNLOCK_DESCRIPTION_PREFIX}{content_id}"


@dataclass(frozen=True)
class UnlockResult:
    """Outcome of a coin unlock; charged is False for an already-held unlock."""

    transaction: Transaction | None
    charged: bool
