"""API endpoint for inbound change notifications."""

from fastapi import APIRouter

from subwatch.services.event_service import get_event_publisher

router = APIRouter(prefix="/events", tags=["events"])


@router.post("/data-changed")
def data_changed():
    """
    Signal that the ledger changed.
    Detection is stateless, so this only fans the event out to listeners.
    """
    event = get_event_publisher().publish_data_changed("ledger")
    return {"published": True, "type": event["type"]}
