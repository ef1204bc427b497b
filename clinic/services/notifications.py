"""One-shot user notifications and change subscribers for the store."""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable

logger = logging.getLogger(__name__)

Listener = Callable[[str], None]

EVENT_DOCTORS = "doctors"
EVENT_APPOINTMENTS = "appointments"
EVENT_SEARCH = "search"
EVENT_NOTIFICATION = "notification"
EVENT_DELETE_CONFIRMATION = "delete_confirmation"


@dataclass(frozen=True)
class Notification:
    message: str
    level: str = "info"

    @property
    def is_error(self) -> bool:
        return self.level == "error"


class ListenerRegistry:
    """Ordered set of callbacks notified after each state change."""

    def __init__(self) -> None:
        self._listeners: list[Listener] = []

    def subscribe(self, callback: Listener) -> Callable[[], None]:
        self._listeners.append(callback)

        def unsubscribe() -> None:
            if callback in self._listeners:
                self._listeners.remove(callback)

        return unsubscribe

    def emit(self, event: str) -> None:
        for callback in list(self._listeners):
            try:
                callback(event)
            except Exception:
                logger.exception("Listener %r failed on %s event", callback, event)

    def __len__(self) -> int:
        return len(self._listeners)
