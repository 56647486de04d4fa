"""
Monetization error taxonomy.

Raised by components; the monetization entry points turn them into typed
outputs and the HTTP layer into status codes.
"""

from __future__ import annotations


class MonetizationError(Exception):
    """Base class for ledger, subscription and access errors."""


class ValidationError(MonetizationError):
    """Input rejected before any mutation."""

    def __init__(self, field: str, code: str, message: str) -> None:
        self.field = field
        self.code = code
        self.message = message
        super().__init__(message)


class InsufficientFundsError(MonetizationError):
    """Debit refused; balance left untouched."""

    def __init__(self, required: int, available: int) -> None:
        self.required = required
        self.available = available
        super().__init__(
            f"Insufficient coins: required {required}, available {available}"
        )

    @property
    def shortfall(self) -> int:
        return max(0, self.required - self.available)


class NotFoundError(MonetizationError):
    """Unknown user or content."""

    def __init__(self, kind: str, key: str) -> None:
        self.kind = kind
        self.key = key
        super().__init__(f"{kind} not found: {key}")


class ConcurrencyConflictError(MonetizationError):
    """Stale write detected; retry the whole read-decide-mutate sequence."""

    def __init__(self, user_id: str, expected_version: int) -> None:
        self.user_id = user_id
        self.expected_version = expected_version
        super().__init__(
            f"Concurrent update for user {user_id} (expected version {expected_version})"
        )
