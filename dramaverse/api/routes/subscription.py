"""Subscription routes."""

from fastapi import APIRouter

from dramaverse.api.deps import CurrentUserId, ServiceDep
from dramaverse.api.errors import to_http_exception
from dramaverse.api.schemas import SubscribeRequest, SubscriptionResponse
from dramaverse.components.monetization import (
    CancelSubscriptionInput,
    MonetizationService,
    SubscribeInput,
    run_cancel_subscription,
    run_subscribe,
)
from dramaverse.components.subscription import SubscriptionView
from dramaverse.domain.errors import MonetizationError

router = APIRouter()


def subscription_response(view: SubscriptionView) -> SubscriptionResponse:
    return SubscriptionResponse(
        is_active=view.is_active,
        plan=view.plan,
        start_date=view.start_date,
        end_date=view.end_date,
        auto_renew=view.auto_renew,
        features=list(view.features),
    )


@router.get("", response_model=SubscriptionResponse)
def get_subscription(
    user_id: str = CurrentUserId,
    service: MonetizationService = ServiceDep,
) -> SubscriptionResponse:
    try:
        view = service.get_subscription(user_id)
    except MonetizationError as e:
        raise to_http_exception(e) from e
    return subscription_response(view)


@router.post("", response_model=SubscriptionResponse)
def subscribe(
    body: SubscribeRequest,
    user_id: str = CurrentUserId,
    service: MonetizationService = ServiceDep,
) -> SubscriptionResponse:
    result = run_subscribe(
        SubscribeInput(
            user_id=user_id,
            plan=body.plan,
            duration_days=body.duration_days,
            auto_renew=body.auto_renew,
        ),
        service,
    )
    if result.error is not None or result.subscription is None:
        raise to_http_exception(result.error)  # type: ignore[arg-type]
    return subscription_response(result.subscription)


@router.post("/cancel", response_model=SubscriptionResponse)
def cancel_subscription(
    user_id: str = CurrentUserId,
    service: MonetizationService = ServiceDep,
) -> SubscriptionResponse:
    result = run_cancel_subscription(CancelSubscriptionInput(user_id=user_id), service)
    if result.error is not None or result.subscription is None:
        raise to_http_exception(result.error)  # type: ignore[arg-type]
    return subscription_response(result.subscription)
