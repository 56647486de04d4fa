"""
SubscriptionState - Free / Active state machine with lazy expiry.

There is no background timer: an Active subscription whose end date has
passed becomes Free the next time it is read through is_active(). That read
mutates the account, so callers must hold the user's lock when they persist it.
"""

from __future__ import annotations

import logging
from datetime import timedelta

from dramaverse.domain.entities import ActiveSubscription, FreeSubscription, UserAccount
from dramaverse.domain.errors import ValidationError
from dramaverse.ports.clock import ClockPort
from dramaverse.rules.models import SubscriptionRules

from .models import PLANS, SubscriptionView

logger = logging.getLogger(__name__)


def is_expired(account: UserAccount, clock: ClockPort) -> bool:
    """True when the account holds an Active subscription past its end date."""
    sub = account.subscription
    return isinstance(sub, ActiveSubscription) and sub.end_date < clock.now()


class SubscriptionState:
    def __init__(
        self,
        account: UserAccount,
        clock: ClockPort,
        rules: SubscriptionRules | None = None,
    ) -> None:
        self._account = account
        self._clock = clock
        self._rules = rules or SubscriptionRules()

    def is_active(self) -> bool:
        """Active flag; expires the subscription as a side effect when due."""
        if is_expired(self._account, self._clock):
            sub = self._account.subscription
            logger.info(
                "Subscription %s for user %s expired at %s",
                getattr(sub, "plan", "?"), self._account.user_id, getattr(sub, "end_date", "?"),
            )
            self._account.subscription = FreeSubscription()
            self._account.updated_at = self._clock.now()
            return False
        return isinstance(self._account.subscription, ActiveSubscription)

    def activate(
        self, plan: str, duration_days: int, auto_renew: bool = False
    ) -> ActiveSubscription:
        """Start (or replace) an Active subscription ending duration_days from now."""
        if plan not in PLANS:
            raise ValidationError(
                "plan", "invalid_value", f"Plan must be one of: {', '.join(PLANS)}"
            )
        if isinstance(duration_days, bool) or not isinstance(duration_days, int):
            raise ValidationError(
                "duration_days", "invalid_type", "Field 'duration_days' must be an integer"
            )
        if duration_days <= 0:
            raise ValidationError(
                "duration_days", "not_positive", "Field 'duration_days' must be positive"
            )
        if duration_days > self._rules.max_duration_days:
            raise ValidationError(
                "duration_days",
                "too_long",
                f"Field 'duration_days' must not exceed {self._rules.max_duration_days}",
            )

        now = self._clock.now()
        active = ActiveSubscription(
            plan=plan,  # type: ignore[arg-type]
            start_date=now,
            end_date=now + timedelta(days=duration_days),
            auto_renew=auto_renew,
        )
        self._account.subscription = active
        self._account.updated_at = now
        logger.info(
            "Activated %s subscription for user %s until %s",
            plan, self._account.user_id, active.end_date.isoformat(),
        )
        return active

    def cancel(self) -> None:
        """Turn off auto-renew; access continues until the end date."""
        sub = self._account.subscription
        if isinstance(sub, ActiveSubscription) and sub.auto_renew:
            self._account.subscription = sub.model_copy(update={"auto_renew": False})
            self._account.updated_at = self._clock.now()
            logger.info("Cancelled auto-renew for user %s", self._account.user_id)

    def view(self) -> SubscriptionView:
        """Describe the current state without applying lazy expiry."""
        sub = self._account.subscription
        if isinstance(sub, ActiveSubscription) and not is_expired(self._account, self._clock):
            plan_rules = self._rules.plans.get(sub.plan)
            return SubscriptionView(
                is_active=True,
                plan=sub.plan,
                start_date=sub.start_date,
                end_date=sub.end_date,
                auto_renew=sub.auto_renew,
                features=tuple(plan_rules.features if plan_rules else ()),
            )
        return SubscriptionView(
            is_active=False,
            plan="free",
            start_date=None,
            end_date=None,
            auto_renew=False,
            features=tuple(self._rules.free_features),
        )
