"""
Database models package.
"""

from subwatch.models.transaction import Transaction
from subwatch.models.override import SubscriptionOverride
from subwatch.models.recurring import Frequency

__all__ = [
    "Transaction",
    "SubscriptionOverride",
    "Frequency",
]
