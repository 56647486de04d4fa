"""Content access routes: decisions and the remedies that follow a denial."""

from fastapi import APIRouter, Query

from dramaverse.api.deps import CurrentUserId, ServiceDep
from dramaverse.api.errors import to_http_exception
from dramaverse.api.schemas import (
    AccessHistoryResponse,
    AccessRecordResponse,
    AccessResponse,
    AdRewardRequest,
    AdRewardResponse,
    AlternativeResponse,
    CheckAccessRequest,
    UnlockRequest,
    UnlockResponse,
)
from dramaverse.components.monetization import (
    CheckAccessInput,
    GetAccessHistoryInput,
    GrantAdRewardInput,
    MonetizationService,
    UnlockWithCoinsInput,
    run_check_access,
    run_get_access_history,
    run_grant_ad_reward,
    run_unlock_with_coins,
)
from dramaverse.domain.entities import ContentDescriptor
from dramaverse.domain.errors import MonetizationError

router = APIRouter()


@router.post("/check", response_model=AccessResponse)
def check_access(
    body: CheckAccessRequest,
    user_id: str = CurrentUserId,
    service: MonetizationService = ServiceDep,
) -> AccessResponse:
    content = ContentDescriptor(
        content_id=body.content_id, is_premium=body.is_premium, price=body.price
    )
    try:
        result = run_check_access(CheckAccessInput(user_id=user_id, content=content), service)
    except MonetizationError as e:
        raise to_http_exception(e) from e
    return AccessResponse(
        has_access=result.has_access,
        reason=result.reason,
        message=result.message,
        cost=result.cost,
        alternatives=[
            AlternativeResponse(
                type=alt.type, description=alt.description, action=alt.action, cost=alt.cost
            )
            for alt in result.alternatives
        ],
    )


@router.post("/unlock", response_model=UnlockResponse)
def unlock_with_coins(
    body: UnlockRequest,
    user_id: str = CurrentUserId,
    service: MonetizationService = ServiceDep,
) -> UnlockResponse:
    result = run_unlock_with_coins(
        UnlockWithCoinsInput(user_id=user_id, content_id=body.content_id, price=body.price),
        service,
    )
    if result.error is not None:
        raise to_http_exception(result.error)
    return UnlockResponse(
        success=result.success, new_balance=result.new_balance or 0, charged=result.charged
    )


@router.post("/ad-reward", response_model=AdRewardResponse)
def grant_ad_reward(
    body: AdRewardRequest,
    user_id: str = CurrentUserId,
    service: MonetizationService = ServiceDep,
) -> AdRewardResponse:
    result = run_grant_ad_reward(
        GrantAdRewardInput(user_id=user_id, content_id=body.content_id), service
    )
    if result.error is not None:
        raise to_http_exception(result.error)
    return AdRewardResponse(new_balance=result.new_balance or 0)


@router.get("/history", response_model=AccessHistoryResponse)
def access_history(
    limit: int = Query(50, ge=0, le=500),
    offset: int = Query(0, ge=0),
    user_id: str = CurrentUserId,
    service: MonetizationService = ServiceDep,
) -> AccessHistoryResponse:
    result = run_get_access_history(
        GetAccessHistoryInput(user_id=user_id, limit=limit, offset=offset), service
    )
    if result.error is not None:
        raise to_http_exception(result.error)
    return AccessHistoryResponse(
        items=[AccessRecordResponse.model_validate(r.model_dump()) for r in result.records]
    )
