"""
Access component models.

Result of an access decision and the remedies offered on denial.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from dramaverse.domain.entities import AccessReason, AlternativeType


@dataclass(frozen=True)
class AccessAlternative:
    """A remedy the caller can execute to gain access."""

    type: AlternativeType
    description: str
    action: str
    cost: int | None = None


@dataclass(frozen=True)
class AccessResult:
    """Outcome of decide()."""

    has_access: bool
    reason: AccessReason
    message: str
    cost: int | None = None
    alternatives: tuple[AccessAlternative, ...] = field(default_factory=tuple)


@dataclass(frozen=True)
class AccessContext:
    """Per-user facts the decision reads; gathered by the caller."""

    subscription_active: bool = False
    unlocked_with_coins: bool = False
