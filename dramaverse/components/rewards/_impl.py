"""
RewardGrantor - ad rewards, daily login bonus and coin unlocks.

Operates on a loaded account through Ledger and AccessHistory; the caller
holds the user's lock and persists the account afterwards.

Daily bonus idempotency is keyed on the account's last_daily_bonus_on date.
The transaction log is also scanned so records written before that field
existed are honoured; the date field alone survives log eviction.
"""

from __future__ import annotations

import logging
from datetime import date
from zoneinfo import ZoneInfo

from dramaverse.components.history import AccessHistory
from dramaverse.components.ledger import Ledger
from dramaverse.domain.entities import AccessRecord, Transaction, UserAccount
from dramaverse.domain.errors import ValidationError
from dramaverse.ports.clock import ClockPort
from dramaverse.rules.models import RewardRules

from .models import (
    AD_REWARD_DESCRIPTION,
    DAILY_BONUS_DESCRIPTION,
    UnlockResult,
    unlock_description,
)

logger = logging.getLogger(__name__)


def validate_content_id(content_id: object) -> str:
    if not isinstance(content_id, str) or not content_id.strip():
        raise ValidationError("content_id", "required", "Field 'content_id' is required")
    return content_id


class RewardGrantor:
    def __init__(self, clock: ClockPort, rules: RewardRules | None = None) -> None:
        self._clock = clock
        self._rules = rules or RewardRules()
        self._tz = ZoneInfo(self._rules.bonus_timezone)

    @property
    def ad_reward(self) -> int:
        return self._rules.ad_reward

    @property
    def daily_login_bonus(self) -> int:
        return self._rules.daily_login_bonus

    def today(self) -> date:
        """Calendar date used for the daily bonus."""
        return self._clock.now().astimezone(self._tz).date()

    def grant_ad_reward(
        self, ledger: Ledger, history: AccessHistory, content_id: str
    ) -> Transaction:
        """Record an ad-view unlock and credit the fixed ad bonus."""
        validate_content_id(content_id)
        history.append(
            AccessRecord(content_id=content_id, method="ad", timestamp=self._clock.now())
        )
        return ledger.credit(self._rules.ad_reward, AD_REWARD_DESCRIPTION, content_id)

    def already_granted_today(self, account: UserAccount, ledger: Ledger) -> bool:
        today = self.today()
        if account.last_daily_bonus_on == today:
            return True
        return ledger.log.find_on_date(DAILY_BONUS_DESCRIPTION, today, self._tz) is not None

    def grant_daily_login_bonus(
        self, account: UserAccount, ledger: Ledger
    ) -> Transaction | None:
        """Credit today's bonus once; returns None when already granted."""
        if self.already_granted_today(account, ledger):
            logger.debug("Daily bonus already granted today for user %s", account.user_id)
            return None
        txn = ledger.credit(self._rules.daily_login_bonus, DAILY_BONUS_DESCRIPTION)
        account.last_daily_bonus_on = self.today()
        return txn

    def unlock_with_coins(
        self,
        ledger: Ledger,
        history: AccessHistory,
        content_id: str,
        price: int,
        honor_existing_unlock: bool = False,
    ) -> UnlockResult:
        """
        Spend coins to unlock content.

        Raises:
            InsufficientFundsError: balance below price; nothing recorded.
        """
        validate_content_id(content_id)
        if honor_existing_unlock and history.has_access_by(content_id, "coins"):
            return UnlockResult(transaction=None, charged=False)

        txn = ledger.debit(price, unlock_description(content_id), content_id)
        history.append(
            AccessRecord(content_id=content_id, method="coins", timestamp=txn.timestamp)
        )
        return UnlockResult(transaction=txn, charged=True)
