"""Coin wallet routes."""

from fastapi import APIRouter, Query

from dramaverse.api.deps import CurrentUserId, ServiceDep
from dramaverse.api.errors import to_http_exception
from dramaverse.api.schemas import (
    BalanceResponse,
    CreditResponse,
    DailyBonusResponse,
    EarningOpportunitiesResponse,
    PurchaseRequest,
    TransactionListResponse,
    TransactionResponse,
)
from dramaverse.components.monetization import (
    GetBalanceInput,
    GetTransactionsInput,
    GrantDailyBonusInput,
    MonetizationService,
    PurchaseCoinsInput,
    run_get_balance,
    run_get_transactions,
    run_grant_daily_bonus,
    run_purchase_coins,
)
from dramaverse.domain.entities import Transaction

router = APIRouter()


def transaction_response(txn: Transaction) -> TransactionResponse:
    return TransactionResponse.model_validate(txn.model_dump())


@router.get("/balance", response_model=BalanceResponse)
def get_balance(
    user_id: str = CurrentUserId,
    service: MonetizationService = ServiceDep,
) -> BalanceResponse:
    result = run_get_balance(GetBalanceInput(user_id=user_id), service)
    if result.error is not None or result.snapshot is None:
        raise to_http_exception(result.error)  # type: ignore[arg-type]
    snap = result.snapshot
    return BalanceResponse(
        balance=snap.balance,
        total_earned=snap.total_earned,
        total_spent=snap.total_spent,
        last_updated=snap.last_updated,
    )


@router.get("/transactions", response_model=TransactionListResponse)
def list_transactions(
    limit: int = Query(20, ge=0, le=100),
    offset: int = Query(0, ge=0),
    user_id: str = CurrentUserId,
    service: MonetizationService = ServiceDep,
) -> TransactionListResponse:
    result = run_get_transactions(
        GetTransactionsInput(user_id=user_id, limit=limit, offset=offset), service
    )
    if result.error is not None:
        raise to_http_exception(result.error)
    return TransactionListResponse(items=[transaction_response(t) for t in result.transactions])


@router.post("/purchase", response_model=CreditResponse, status_code=201)
def purchase_coins(
    body: PurchaseRequest,
    user_id: str = CurrentUserId,
    service: MonetizationService = ServiceDep,
) -> CreditResponse:
    result = run_purchase_coins(
        PurchaseCoinsInput(user_id=user_id, amount=body.amount, description=body.description),
        service,
    )
    if result.error is not None or result.transaction is None:
        raise to_http_exception(result.error)  # type: ignore[arg-type]
    return CreditResponse(
        transaction=transaction_response(result.transaction),
        new_balance=result.new_balance or 0,
    )


@router.post("/daily-bonus", response_model=DailyBonusResponse)
def claim_daily_bonus(
    user_id: str = CurrentUserId,
    service: MonetizationService = ServiceDep,
) -> DailyBonusResponse:
    result = run_grant_daily_bonus(GrantDailyBonusInput(user_id=user_id), service)
    if result.error is not None:
        raise to_http_exception(result.error)
    return DailyBonusResponse(granted=result.granted, new_balance=result.new_balance or 0)


@router.get("/opportunities", response_model=EarningOpportunitiesResponse)
def earning_opportunities(
    service: MonetizationService = ServiceDep,
) -> EarningOpportunitiesResponse:
    return EarningOpportunitiesResponse(**service.get_earning_opportunities())
