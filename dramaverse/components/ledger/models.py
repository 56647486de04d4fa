"""
Ledger component models.

Read-side views over a user's coin ledger.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

WELCOME_BONUS_DESCRIPTION = "Welcome bonus"


@dataclass(frozen=True)
class LedgerSnapshot:
    """Balance plus running totals at one point in time."""

    user_id: str
    balance: int
    total_earned: int
    total_spent: int
    last_updated: datetime

    @property
    def reconciles(self) -> bool:
        return self.balance == self.total_earned - self.total_spent
