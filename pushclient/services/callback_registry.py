"""Persisted user callbacks for registration, notification and error events."""
from __future__ import annotations

import logging
from typing import Any, Dict, Optional

from pushclient.core.exceptions import CallbackTypeError, log_push_error
from pushclient.models import PushEvent
from pushclient.services.utils.types import Callback

logger = logging.getLogger(__name__)

_SETTER_NAMES = {
    PushEvent.REGISTRATION: "set_register_callback",
    PushEvent.NOTIFICATION: "set_notification_callback",
    PushEvent.ERROR: "set_error_callback",
}


class CallbackRegistry:
    """Hold at most one callback per backend event."""

    def __init__(self) -> None:
        self._slots: Dict[PushEvent, Optional[Callback]] = {event: None for event in PushEvent}

    def set_register_callback(self, callback: Any) -> bool:
        return self._store(PushEvent.REGISTRATION, callback)

    def set_notification_callback(self, callback: Any) -> bool:
        return self._store(PushEvent.NOTIFICATION, callback)

    def set_error_callback(self, callback: Any) -> bool:
        return self._store(PushEvent.ERROR, callback)

    def get(self, event: PushEvent) -> Optional[Callback]:
        return self._slots[event]

    def invoke(self, event: PushEvent, *args: Any) -> Any:
        """Call the stored callback for ``event``; failures are logged, not raised."""

        callback = self._slots[event]
        if callback is None:
            return None
        try:
            return callback(*args)
        except Exception:  # noqa: BLE001
            logger.warning("%s callback failed", event.value, exc_info=True)
            return None

    def _store(self, event: PushEvent, callback: Any) -> bool:
        if not callable(callback):
            error = CallbackTypeError(f"{_SETTER_NAMES[event]}() requires a valid callback function")
            log_push_error(logger, error)
            return False
        self._slots[event] = callback
        return True
