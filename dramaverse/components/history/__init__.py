"""
History component - bounded transaction and access logs.
"""

from .component import (
    ACCESS_HISTORY_CAPACITY,
    TRANSACTION_LOG_CAPACITY,
    AccessHistory,
    BoundedLog,
    TransactionLog,
)

__all__ = [
    "ACCESS_HISTORY_CAPACITY",
    "TRANSACTION_LOG_CAPACITY",
    "AccessHistory",
    "BoundedLog",
    "TransactionLog",
]
