"""
Subscription override database model.
"""

from sqlalchemy import Column, String, DateTime
from subwatch.database import Base


class SubscriptionOverride(Base):
    """
    User hide decision for a merchant key.

    A row with a non-null hidden_at means the merchant is excluded from the
    default view. Rows outlive the merchant's charges.
    """

    __tablename__ = "subscription_overrides"

    merchant_key = Column(String(255), primary_key=True)
    hidden_at = Column(DateTime, nullable=True)
