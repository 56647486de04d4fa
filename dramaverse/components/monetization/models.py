"""
Monetization component models.

Inputs and outputs of the externally exposed operations. Outputs carry
either a result or the typed error that prevented it.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from dramaverse.components.ledger import LedgerSnapshot
from dramaverse.components.subscription import SubscriptionView
from dramaverse.domain.entities import AccessRecord, ContentDescriptor, Transaction
from dramaverse.domain.errors import MonetizationError

# --- Input Models ---


@dataclass(frozen=True)
class GetBalanceInput:
    user_id: str


@dataclass(frozen=True)
class GetTransactionsInput:
    user_id: str
    limit: int = 20
    offset: int = 0


@dataclass(frozen=True)
class PurchaseCoinsInput:
    """Credit of purchased coins (payment handled elsewhere)."""

    user_id: str
    amount: int
    description: str | None = None


@dataclass(frozen=True)
class CheckAccessInput:
    user_id: str
    content: ContentDescriptor


@dataclass(frozen=True)
class UnlockWithCoinsInput:
    user_id: str
    content_id: str
    price: int


@dataclass(frozen=True)
class GrantAdRewardInput:
    user_id: str
    content_id: str


@dataclass(frozen=True)
class GrantDailyBonusInput:
    user_id: str


@dataclass(frozen=True)
class SubscribeInput:
    user_id: str
    plan: str
    duration_days: int
    auto_renew: bool = False


@dataclass(frozen=True)
class CancelSubscriptionInput:
    user_id: str


@dataclass(frozen=True)
class GetAccessHistoryInput:
    user_id: str
    limit: int = 50
    offset: int = 0


# --- Output Models ---


@dataclass(frozen=True)
class BalanceOutput:
    snapshot: LedgerSnapshot | None
    error: MonetizationError | None = None

    @property
    def success(self) -> bool:
        return self.error is None


@dataclass(frozen=True)
class TransactionsOutput:
    transactions: tuple[Transaction, ...] = field(default_factory=tuple)
    error: MonetizationError | None = None

    @property
    def success(self) -> bool:
        return self.error is None


@dataclass(frozen=True)
class CreditOutput:
    transaction: Transaction | None
    new_balance: int | None
    error: MonetizationError | None = None

    @property
    def success(self) -> bool:
        return self.error is None


@dataclass(frozen=True)
class UnlockOutput:
    success: bool
    new_balance: int | None
    transaction: Transaction | None = None
    charged: bool = False
    error: MonetizationError | None = None


@dataclass(frozen=True)
class AdRewardOutput:
    new_balance: int | None
    transaction: Transaction | None = None
    error: MonetizationError | None = None

    @property
    def success(self) -> bool:
        return self.error is None


@dataclass(frozen=True)
class DailyBonusOutput:
    granted: bool
    new_balance: int | None
    error: MonetizationError | None = None


@dataclass(frozen=True)
class SubscriptionOutput:
    subscription: SubscriptionView | None
    error: MonetizationError | None = None

    @property
    def success(self) -> bool:
        return self.error is None


@dataclass(frozen=True)
class AccessHistoryOutput:
    records: tuple[AccessRecord, ...] = field(default_factory=tuple)
    error: MonetizationError | None = None
