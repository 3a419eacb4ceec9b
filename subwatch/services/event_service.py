"""
In-process event publisher for "data changed" notifications.

Hosts subscribe a callback to learn that subscription data should be
re-derived: after a hide/unhide, or when new transactions land in the ledger.
"""
import logging
import threading
from datetime import datetime
from typing import Callable, Dict, List, Optional

logger = logging.getLogger(__name__)

DATA_CHANGED = "data_changed"

Listener = Callable[[Dict], None]


class EventPublisher:
    """
    Fans events out to registered listeners.

    Event payload:
    - type: event name, e.g. "data_changed"
    - source: who raised it ("override", "ledger", ...)
    - merchant_key: affected merchant, when there is one
    - timestamp: ISO-8601 UTC time of publication
    """

    def __init__(self):
        self._listeners: List[Listener] = []
        self._lock = threading.Lock()

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register a listener and return a function that removes it."""
        with self._lock:
            self._listeners.append(listener)

        def unsubscribe() -> None:
            with self._lock:
                if listener in self._listeners:
                    self._listeners.remove(listener)

        return unsubscribe

    def publish(self, event_type: str, **payload) -> Dict:
        """
        Deliver an event to every listener.

        A failing listener is logged and skipped so it cannot block the others.
        """
        event = {
            "type": event_type,
            **payload,
            "timestamp": datetime.utcnow().isoformat(),
        }
        with self._lock:
            listeners = list(self._listeners)

        for listener in listeners:
            try:
                listener(event)
            except Exception as e:
                logger.error(f"Listener failed for {event_type}: {e}")

        logger.debug(f"Published {event_type} to {len(listeners)} listener(s)")
        return event

    def publish_data_changed(self, source: str, merchant_key: Optional[str] = None) -> Dict:
        """Tell consumers the subscription list should be re-derived."""
        return self.publish(DATA_CHANGED, source=source, merchant_key=merchant_key)


# Global publisher instance
_publisher: Optional[EventPublisher] = None


def get_event_publisher() -> EventPublisher:
    global _publisher
    if _publisher is None:
        _publisher = EventPublisher()
    return _publisher
