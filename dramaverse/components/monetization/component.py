"""
Monetization component - entry points.

One run_* function per externally exposed operation. Each returns a typed
output carrying either the result or the MonetizationError that stopped it;
mutating operations never fall back to a default value.

run_check_access is the exception: its AccessResult already models denial,
so ValidationError / NotFoundError for a bad user id are raised instead.

Storage failures (StorageError) are not domain errors and propagate.
"""

from __future__ import annotations

from dramaverse.components.access import AccessResult
from dramaverse.domain.errors import InsufficientFundsError, MonetizationError

from ._impl import MonetizationService
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


def run_get_balance(inp: GetBalanceInput, service: MonetizationService) -> BalanceOutput:
    try:
        return BalanceOutput(snapshot=service.get_balance(inp.user_id))
    except MonetizationError as e:
        return BalanceOutput(snapshot=None, error=e)


def run_get_transactions(
    inp: GetTransactionsInput, service: MonetizationService
) -> TransactionsOutput:
    try:
        txns = service.get_transactions(inp.user_id, inp.limit, inp.offset)
    except MonetizationError as e:
        return TransactionsOutput(error=e)
    return TransactionsOutput(transactions=tuple(txns))


def run_purchase_coins(inp: PurchaseCoinsInput, service: MonetizationService) -> CreditOutput:
    try:
        txn, balance = service.purchase_coins(inp.user_id, inp.amount, inp.description)
    except MonetizationError as e:
        return CreditOutput(transaction=None, new_balance=None, error=e)
    return CreditOutput(transaction=txn, new_balance=balance)


def run_check_access(inp: CheckAccessInput, service: MonetizationService) -> AccessResult:
    """Decide access. Errors propagate: a denial is itself a valid result."""
    return service.check_access(inp.user_id, inp.content)


def run_unlock_with_coins(
    inp: UnlockWithCoinsInput, service: MonetizationService
) -> UnlockOutput:
    """
    Unlock content by spending coins.

    On InsufficientFunds the output reports the current balance and the
    error carries required, available and shortfall for a top-up prompt.
    """
    try:
        result, balance = service.unlock_with_coins(inp.user_id, inp.content_id, inp.price)
    except InsufficientFundsError as e:
        return UnlockOutput(success=False, new_balance=e.available, error=e)
    except MonetizationError as e:
        return UnlockOutput(success=False, new_balance=None, error=e)
    return UnlockOutput(
        success=True,
        new_balance=balance,
        transaction=result.transaction,
        charged=result.charged,
    )


def run_grant_ad_reward(inp: GrantAdRewardInput, service: MonetizationService) -> AdRewardOutput:
    try:
        txn, balance = service.grant_ad_reward(inp.user_id, inp.content_id)
    except MonetizationError as e:
        return AdRewardOutput(new_balance=None, error=e)
    return AdRewardOutput(new_balance=balance, transaction=txn)


def run_grant_daily_bonus(
    inp: GrantDailyBonusInput, service: MonetizationService
) -> DailyBonusOutput:
    try:
        granted, balance = service.grant_daily_login_bonus(inp.user_id)
    except MonetizationError as e:
        return DailyBonusOutput(granted=False, new_balance=None, error=e)
    return DailyBonusOutput(granted=granted, new_balance=balance)


def run_subscribe(inp: SubscribeInput, service: MonetizationService) -> SubscriptionOutput:
    try:
        view = service.subscribe(inp.user_id, inp.plan, inp.duration_days, inp.auto_renew)
    except MonetizationError as e:
        return SubscriptionOutput(subscription=None, error=e)
    return SubscriptionOutput(subscription=view)


def run_cancel_subscription(
    inp: CancelSubscriptionInput, service: MonetizationService
) -> SubscriptionOutput:
    try:
        view = service.cancel_subscription(inp.user_id)
    except MonetizationError as e:
        return SubscriptionOutput(subscription=None, error=e)
    return SubscriptionOutput(subscription=view)


def run_get_access_history(
    inp: GetAccessHistoryInput, service: MonetizationService
) -> AccessHistoryOutput:
    try:
        records = service.get_access_history(inp.user_id, inp.limit, inp.offset)
    except MonetizationError as e:
        return AccessHistoryOutput(error=e)
    return AccessHistoryOutput(records=tuple(records))


# --- Run Function (Atomic Component Pattern) ---

_RUNNERS = {
    GetBalanceInput: run_get_balance,
    GetTransactionsInput: run_get_transactions,
    PurchaseCoinsInput: run_purchase_coins,
    CheckAccessInput: run_check_access,
    UnlockWithCoinsInput: run_unlock_with_coins,
    GrantAdRewardInput: run_grant_ad_reward,
    GrantDailyBonusInput: run_grant_daily_bonus,
    SubscribeInput: run_subscribe,
    CancelSubscriptionInput: run_cancel_subscription,
    GetAccessHistoryInput: run_get_access_history,
}


def run(inp: object, service: MonetizationService) -> object:
    """
    Run a monetization operation based on input type.

    This is the main entry point following the atomic component pattern.
    """
    runner = _RUNNERS.get(type(inp))
    if runner is None:
        raise TypeError(f"Unknown input type: {type(inp)}")
    return runner(inp, service)  # type: ignore[operator]
