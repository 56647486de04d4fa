"""
Rewards component - bonus coins and coin unlocks.
"""

from ._impl import RewardGrantor, validate_content_id
from .models import (
    AD_REWARD_DESCRIPTION,
    DAILY_BONUS_DESCRIPTION,
    UNLOCK_DESCRIPTION_PREFIX,
    UnlockResult,
    unlock_description,
)

__all__ = [
    "AD_REWARD_DESCRIPTION",
    "DAILY_BONUS_DESCRIPTION",
    "UNLOCK_DESCRIPTION_PREFIX",
    "RewardGrantor",
    "UnlockResult",
    "unlock_description",
    "validate_content_id",
]
