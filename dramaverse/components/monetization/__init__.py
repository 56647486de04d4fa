"""
Monetization component.

Public API for the coin ledger, subscriptions, rewards and access control.
"""

from ._impl import MonetizationService
from .component import (
    run,
    run_cancel_subscription,
    run_check_access,
    run_get_access_history,
    run_get_balance,
    run_get_transactions,
    run_grant_ad_reward,
    run_grant_daily_bonus,
    run_purchase_coins,
    run_subscribe,
    run_unlock_with_coins,
)
from .models import (
    AccessHistoryOutput,
    AdRewardOutput,
    BalanceOutput,
    CancelSubscriptionInput,
    CheckAccessInput,
    CreditOutput,
    DailyBonusOutput,
    GetAccessHistoryInput,
    GetBalanceInput,
    GetTransactionsInput,
    GrantAdRewardInput,
    GrantDailyBonusInput,
    PurchaseCoinsInput,
    SubscribeInput,
    SubscriptionOutput,
    TransactionsOutput,
    UnlockOutput,
    UnlockWithCoinsInput,
)
from .ports import AnalyticsSinkPort, UserDirectoryPort

__all__ = [
    # Service
    "MonetizationService",
    # Functions
    "run",
    "run_cancel_subscription",
    "run_check_access",
    "run_get_access_history",
    "run_get_balance",
    "run_get_transactions",
    "run_grant_ad_reward",
    "run_grant_daily_bonus",
    "run_purchase_coins",
    "run_subscribe",
    "run_unlock_with_coins",
    # Inputs
    "CancelSubscriptionInput",
    "CheckAccessInput",
    "GetAccessHistoryInput",
    "GetBalanceInput",
    "GetTransactionsInput",
    "GrantAdRewardInput",
    "GrantDailyBonusInput",
    "PurchaseCoinsInput",
    "SubscribeInput",
    "UnlockWithCoinsInput",
    # Ports
    "AnalyticsSinkPort",
    "UserDirectoryPort",
    # Outputs
    "AccessHistoryOutput",
    "AdRewardOutput",
    "BalanceOutput",
    "CreditOutput",
    "DailyBonusOutput",
    "SubscriptionOutput",
    "TransactionsOutput",
    "UnlockOutput",
]
