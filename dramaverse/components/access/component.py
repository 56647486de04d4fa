"""
Access component - access decision engine.

Pure function deciding whether a user may play a piece of content and,
when not, which remedies to offer.

Decision order (first match wins):
1. content is not premium -> free
2. subscription active -> subscription
3. (optional) content previously unlocked with coins -> coins
4. otherwise -> denied, with ad / coins / subscription alternatives

decide() never mutates anything. Balance sufficiency is not checked here;
it is checked when the coin remedy is executed.
"""

from __future__ import annotations

from dramaverse.domain.entities import ContentDescriptor

from .models import AccessAlternative, AccessContext, AccessResult

DEFAULT_UNLOCK_PRICE = 50


def unlock_price(content: ContentDescriptor, default_price: int = DEFAULT_UNLOCK_PRICE) -> int:
    """Price of the content, falling back to the configured default."""
    return content.price if content.price else default_price


def build_alternatives(cost: int) -> tuple[AccessAlternative, ...]:
    """Remedies offered on denial, always all three."""
    return (
        AccessAlternative(
            type="ad",
            description="Watch a 30-second ad to unlock this episode",
            action="watch_ad",
        ),
        AccessAlternative(
            type="coins",
            description=f"Use {cost} coins to unlock this episode",
            action="use_coins",
            cost=cost,
        ),
        AccessAlternative(
            type="subscription",
            description="Subscribe for unlimited access to all content",
            action="subscribe",
        ),
    )


def decide(
    content: ContentDescriptor,
    context: AccessContext,
    default_price: int = DEFAULT_UNLOCK_PRICE,
    honor_coin_unlocks: bool = False,
) -> AccessResult:
    """
    Decide admission for one playback request.

    Args:
        content: Caller-supplied descriptor (premium flag, price)
        context: Subscription and unlock facts for the user
        default_price: Price used when the descriptor carries none
        honor_coin_unlocks: Treat a recorded coin unlock as an entitlement

    Returns:
        AccessResult; denied results carry cost and alternatives
    """
    if not content.is_premium:
        return AccessResult(
            has_access=True,
            reason="free",
            message="This content is free to watch.",
        )

    if context.subscription_active:
        return AccessResult(
            has_access=True,
            reason="subscription",
            message="Access granted through your subscription.",
        )

    if honor_coin_unlocks and context.unlocked_with_coins:
        return AccessResult(
            has_access=True,
            reason="coins",
            message="You already unlocked this content with coins.",
        )

    cost = unlock_price(content, default_price)
    return AccessResult(
        has_access=False,
        reason="denied",
        message="This is premium content that requires payment.",
        cost=cost,
        alternatives=build_alternatives(cost),
    )
