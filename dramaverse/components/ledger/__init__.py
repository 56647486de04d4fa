"""
Ledger component - coin balance, running totals and transaction history.
"""

from ._impl import CREDIT_KINDS, Ledger, open_account, validate_amount, validate_description
from .models import WELCOME_BONUS_DESCRIPTION, LedgerSnapshot

__all__ = [
    "CREDIT_KINDS",
    "Ledger",
    "LedgerSnapshot",
    "WELCOME_BONUS_DESCRIPTION",
    "open_account",
    "validate_amount",
    "validate_description",
]
