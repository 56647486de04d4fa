"""
Subscription component - plan and expiry per user.
"""

from ._impl import SubscriptionState, is_expired
from .models import PLANS, SubscriptionView

__all__ = ["PLANS", "SubscriptionState", "SubscriptionView", "is_expired"]
