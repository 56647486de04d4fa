"""
Access component - admission decisions for premium content.
"""

from .component import DEFAULT_UNLOCK_PRICE, build_alternatives, decide, unlock_price
from .models import AccessAlternative, AccessContext, AccessResult

__all__ = [
    "DEFAULT_UNLOCK_PRICE",
    "AccessAlternative",
    "AccessContext",
    "AccessResult",
    "build_alternatives",
    "decide",
    "unlock_price",
]
