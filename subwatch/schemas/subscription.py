"""Pydantic schemas for detected subscriptions and overrides."""

from pydantic import BaseModel, Field
from typing import Optional, List
from datetime import date, datetime


class SubscriptionResponse(BaseModel):
    merchant_key: str
    representative_amount: float
    frequency: str
    interval_days: int
    occurrence_count: int
    annual_cost: float
    monthly_cost: float
    first_charge_date: date
    last_charge_date: date
    next_expected_date: date
    is_hidden: bool


class SubscriptionSummaryResponse(BaseModel):
    total_monthly_cost: float
    total_annual_cost: float
    active_count: int
    hidden_count: int


class SubscriptionListResponse(BaseModel):
    items: List[SubscriptionResponse]
    summary: SubscriptionSummaryResponse
    total: int
    warnings: List[str] = []


class OverrideRequest(BaseModel):
    """Request to hide or restore a merchant."""
    merchant_key: str = Field(..., min_length=1, max_length=255)


class OverrideResponse(BaseModel):
    merchant_key: str
    hidden_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class HiddenListResponse(BaseModel):
    merchant_keys: List[str]
    total: int
