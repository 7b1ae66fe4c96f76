"""
State channel - single observable for pipeline state changes.
"""

import logging
import threading
from typing import Callable

from upload_dashboard.domain.models.upload_state import StateEvent

logger = logging.getLogger(__name__)

Subscriber = Callable[[StateEvent], None]


class StateChannel:
    """
    Broadcasts StateEvents to subscribers in registration order.

    A failing subscriber is logged and skipped; it never interrupts the
    pipeline or other subscribers.
    """

    def __init__(self):
        self._subscribers: list[Subscriber] = []
        self._lock = threading.Lock()

    def subscribe(self, callback: Subscriber) -> Callable[[], None]:
        """
        Register a subscriber.

        Args:
            callback: Called with every emitted event

        Returns:
            Function that removes the subscription
        """
        with self._lock:
            self._subscribers.append(callback)

        def unsubscribe() -> None:
            with self._lock:
                if callback in self._subscribers:
                    self._subscribers.remove(callback)

        return unsubscribe

    def emit(self, event: StateEvent) -> None:
        """Deliver an event to all current subscribers"""
        with self._lock:
            subscribers = list(self._subscribers)

        for callback in subscribers:
            try:
                callback(event)
            except Exception:
                logger.exception(f"Subscriber failed on {event.kind.value} event")

    def __len__(self) -> int:
        """Number of subscribers"""
        return len(self._subscribers)
