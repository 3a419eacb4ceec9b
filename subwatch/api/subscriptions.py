"""API endpoints for detected subscriptions."""

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session
from typing import Optional

from subwatch.config import settings
from subwatch.dependencies import get_db
from subwatch.exceptions import OverrideStoreUnavailable, WriteFailure
from subwatch.schemas.subscription import (
    SubscriptionResponse,
    SubscriptionSummaryResponse,
    SubscriptionListResponse,
    OverrideRequest,
    OverrideResponse,
    HiddenListResponse,
)
from subwatch.services import detection_service, override_service
from subwatch.services.detection_service import SubscriptionRecord, SubscriptionSummary
from subwatch.services.event_service import get_event_publisher
from subwatch.services.periodicity_service import DetectionConfig

router = APIRouter(prefix="/subscriptions", tags=["subscriptions"])


def _to_response(record: SubscriptionRecord) -> SubscriptionResponse:
    return SubscriptionResponse(
        merchant_key=record.merchant_key,
        representative_amount=float(record.representative_amount),
        frequency=record.frequency_label.value,
        interval_days=record.interval_days,
        occurrence_count=record.occurrence_count,
        annual_cost=float(record.annual_cost),
        monthly_cost=round(float(record.monthly_cost), 2),
        first_charge_date=record.first_charge_date,
        last_charge_date=record.last_charge_date,
        next_expected_date=record.next_expected_date,
        is_hidden=record.is_hidden,
    )


def _summary_response(summary: SubscriptionSummary) -> SubscriptionSummaryResponse:
    return SubscriptionSummaryResponse(
        total_monthly_cost=round(float(summary.total_monthly_cost), 2),
        total_annual_cost=float(summary.total_annual_cost),
        active_count=summary.active_count,
        hidden_count=summary.hidden_count,
    )


@router.get("", response_model=SubscriptionListResponse)
def list_subscriptions(
    include_hidden: bool = Query(False),
    search: Optional[str] = Query(None),
    db: Session = Depends(get_db)
):
    """
    Detect subscriptions from the full ledger.
    Summary figures always cover the whole result, not just the filtered page.
    """
    report = detection_service.run_detection(db, DetectionConfig.from_settings(settings))
    items = detection_service.filter_records(report.records, include_hidden, search)

    return SubscriptionListResponse(
        items=[_to_response(r) for r in items],
        summary=_summary_response(detection_service.summarize(report.records)),
        total=len(items),
        warnings=report.warnings,
    )


@router.get("/summary", response_model=SubscriptionSummaryResponse)
def get_summary(db: Session = Depends(get_db)):
    """Get total visible monthly/annual cost plus active and hidden counts."""
    report = detection_service.run_detection(db, DetectionConfig.from_settings(settings))
    return _summary_response(detection_service.summarize(report.records))


@router.get("/hidden", response_model=HiddenListResponse)
def get_hidden(db: Session = Depends(get_db)):
    """Get merchant keys the user has hidden."""
    try:
        keys = sorted(override_service.list_hidden(db))
    except OverrideStoreUnavailable as e:
        raise HTTPException(status_code=503, detail=str(e))
    return HiddenListResponse(merchant_keys=keys, total=len(keys))


@router.post("/hide", response_model=OverrideResponse)
def hide_subscription(
    request: OverrideRequest,
    db: Session = Depends(get_db)
):
    """Hide a merchant from the default view."""
    try:
        override = override_service.hide(db, request.merchant_key)
    except WriteFailure as e:
        raise HTTPException(status_code=503, detail=str(e))

    get_event_publisher().publish_data_changed("override", request.merchant_key)
    return OverrideResponse.model_validate(override)


@router.post("/unhide")
def unhide_subscription(
    request: OverrideRequest,
    db: Session = Depends(get_db)
):
    """Restore a hidden merchant."""
    try:
        override_service.unhide(db, request.merchant_key)
    except WriteFailure as e:
        raise HTTPException(status_code=503, detail=str(e))

    get_event_publisher().publish_data_changed("override", request.merchant_key)
    return {"unhidden": True, "merchant_key": request.merchant_key}
