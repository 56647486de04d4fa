from datetime import UTC, date, datetime
from typing import Annotated, Literal
from uuid import uuid4

from pydantic import BaseModel, ConfigDict, Field, model_validator

# --- Enums / Literals ---
TransactionKind = Literal["earned", "spent", "purchased"]
CreditKind = Literal["earned", "purchased"]
PlanType = Literal["basic", "premium"]
AccessMethod = Literal["free", "subscription", "coins", "ad"]
AccessReason = Literal["free", "subscription", "coins", "denied"]
AlternativeType = Literal["ad", "coins", "subscription"]


def utcnow() -> datetime:
    return datetime.now(UTC)


# --- Ledger ---

class Transaction(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str = Field(default_factory=lambda: str(uuid4()))
    kind: TransactionKind
    amount: int = Field(gt=0)
    description: str
    timestamp: datetime = Field(default_factory=utcnow)
    content_id: str | None = None


# --- Subscription ---

class FreeSubscription(BaseModel):
    model_config = ConfigDict(frozen=True)

    status: Literal["free"] = "free"


class ActiveSubscription(BaseModel):
    model_config = ConfigDict(frozen=True)

    status: Literal["active"] = "active"
    plan: PlanType
    start_date: datetime
    end_date: datetime
    auto_renew: bool = False


Subscription = Annotated[
    FreeSubscription | ActiveSubscription, Field(discriminator="status")
]

# --- Access ---

class AccessRecord(BaseModel):
    model_config = ConfigDict(frozen=True)

    content_id: str
    method: AccessMethod
    timestamp: datetime = Field(default_factory=utcnow)


class ContentDescriptor(BaseModel):
    """Caller-supplied view of a piece of content (catalog lives elsewhere)."""

    model_config = ConfigDict(frozen=True)

    content_id: str
    is_premium: bool = False
    price: int | None = Field(default=None, ge=0)


# --- Per-user record ---

class UserAccount(BaseModel):
    """
    Everything owned by one user: ledger counters, bounded logs, subscription.

    Lists are kept most-recent-first. total_earned and total_spent are
    running counters and are never recomputed from the truncated logs.
    """

    user_id: str
    balance: int = Field(default=0, ge=0)
    total_earned: int = Field(default=0, ge=0)
    total_spent: int = Field(default=0, ge=0)
    transactions: list[Transaction] = Field(default_factory=list)
    subscription: Subscription = Field(default_factory=FreeSubscription)
    access_history: list[AccessRecord] = Field(default_factory=list)
    last_daily_bonus_on: date | None = None
    version: int = 0
    created_at: datetime = Field(default_factory=utcnow)
    updated_at: datetime = Field(default_factory=utcnow)

    @model_validator(mode="after")
    def _check_balance_reconciles(self) -> "UserAccount":
        if self.balance != self.total_earned - self.total_spent:
            raise ValueError(
                f"balance {self.balance} does not reconcile with "
                f"total_earned {self.total_earned} - total_spent {self.total_spent}"
            )
        return self
