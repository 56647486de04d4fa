from datetime import datetime
from typing import Literal

from pydantic import BaseModel

from dramaverse.domain.entities import AccessMethod, AccessReason, AlternativeType, TransactionKind

# --- Wallet ---


class BalanceResponse(BaseModel):
    balance: int
    total_earned: int
    total_spent: int
    last_updated: datetime


class TransactionResponse(BaseModel):
    id: str
    kind: TransactionKind
    amount: int
    description: str
    timestamp: datetime
    content_id: str | None = None


class TransactionListResponse(BaseModel):
    items: list[TransactionResponse]


class PurchaseRequest(BaseModel):
    amount: int
    description: str | None = None


class CreditResponse(BaseModel):
    transaction: TransactionResponse
    new_balance: int


class EarningOpportunitiesResponse(BaseModel):
    daily_login: int
    watch_ad: int
    share_content: int
    invite_friend: int
    complete_profile: int


# --- Access ---


class CheckAccessRequest(BaseModel):
    content_id: str
    is_premium: bool = False
    price: int | None = None


class AlternativeResponse(BaseModel):
    type: AlternativeType
    description: str
    action: str
    cost: int | None = None


class AccessResponse(BaseModel):
    has_access: bool
    reason: AccessReason
    message: str
    cost: int | None = None
    alternatives: list[AlternativeResponse] = []


class UnlockRequest(BaseModel):
    content_id: str
    price: int


class UnlockResponse(BaseModel):
    success: bool
    new_balance: int
    charged: bool


class AdRewardRequest(BaseModel):
    content_id: str


class AdRewardResponse(BaseModel):
    new_balance: int


class DailyBonusResponse(BaseModel):
    granted: bool
    new_balance: int


class AccessRecordResponse(BaseModel):
    content_id: str
    method: AccessMethod
    timestamp: datetime


class AccessHistoryResponse(BaseModel):
    items: list[AccessRecordResponse]


# --- Subscription ---


class SubscribeRequest(BaseModel):
    plan: str
    duration_days: int
    auto_renew: bool = False


class SubscriptionResponse(BaseModel):
    is_active: bool
    plan: Literal["free", "basic", "premium"]
    start_date: datetime | None = None
    end_date: datetime | None = None
    auto_renew: bool
    features: list[str]
