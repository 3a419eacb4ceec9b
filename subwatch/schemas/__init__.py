"""
Pydantic schemas package.
"""

from subwatch.schemas.subscription import (
    SubscriptionResponse,
    SubscriptionSummaryResponse,
    SubscriptionListResponse,
    OverrideRequest,
    OverrideResponse,
    HiddenListResponse,
)

__all__ = [
    "SubscriptionResponse",
    "SubscriptionSummaryResponse",
    "SubscriptionListResponse",
    "OverrideRequest",
    "OverrideResponse",
    "HiddenListResponse",
]
