from pydantic import BaseModel, Field


class LedgerRules(BaseModel):
    welcome_bonus: int = Field(default=100, ge=0)
    transaction_log_cap: int = Field(default=100, gt=0)
    access_history_cap: int = Field(default=500, gt=0)


class EarningOpportunities(BaseModel):
    daily_login: int = 25
    watch_ad: int = 10
    share_content: int = 15
    invite_friend: int = 100
    complete_profile: int = 50


class RewardRules(BaseModel):
    ad_reward: int = Field(default=10, gt=0)
    daily_login_bonus: int = Field(default=25, gt=0)
    bonus_timezone: str = "UTC"
    earning_opportunities: EarningOpportunities = Field(default_factory=EarningOpportunities)


class AccessRules(BaseModel):
    default_unlock_price: int = Field(default=50, gt=0)
    honor_coin_unlocks: bool = False


class PlanRules(BaseModel):
    features: list[str]


def _default_plans() -> dict[str, PlanRules]:
    return {
        "basic": PlanRules(features=["ad_free", "premium_content"]),
        "premium": PlanRules(
            features=["ad_free", "premium_content", "early_access", "hd_streaming"]
        ),
    }


class SubscriptionRules(BaseModel):
    free_features: list[str] = Field(default_factory=lambda: ["ads", "basic_content"])
    plans: dict[str, PlanRules] = Field(default_factory=_default_plans)
    max_duration_days: int = Field(default=366, gt=0)


class MonetizationRules(BaseModel):
    ledger: LedgerRules = Field(default_factory=LedgerRules)
    rewards: RewardRules = Field(default_factory=RewardRules)
    access: AccessRules = Field(default_factory=AccessRules)
    subscription: SubscriptionRules = Field(default_factory=SubscriptionRules)
