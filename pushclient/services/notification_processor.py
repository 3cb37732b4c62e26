"""Record inbound notifications and republish them for downstream routing."""
from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

from pushclient.core.events import EventEmitter
from pushclient.core.metrics import PushMetrics
from pushclient.models import NOTIFICATION_PROCESSED_EVENT

logger = logging.getLogger(__name__)


def _field(source: Any, name: str) -> Any:
    if isinstance(source, Mapping):
        return source.get(name)
    return getattr(source, name, None)


class NotificationProcessor:
    """Keep the latest notification and emit it on the shared bus."""

    def __init__(self, emitter: EventEmitter, metrics: PushMetrics) -> None:
        self._emitter = emitter
        self._metrics = metrics
        self._notification: Any = None

    @property
    def notification(self) -> Any:
        return self._notification

    def process(self, notification: Any) -> None:
        self._notification = notification
        self._metrics.notification_processed()
        logger.debug("Processing notification")
        self._emitter.emit(NOTIFICATION_PROCESSED_EVENT, notification)

    @staticmethod
    def get_payload(notification: Any) -> Any:
        """Return ``additionalData.payload`` of a notification or an empty dict."""

        if notification is None or isinstance(notification, (str, bytes, int, float, bool)):
            return {}
        additional_data = _field(notification, "additionalData")
        if not additional_data:
            return {}
        payload = _field(additional_data, "payload")
        return payload if payload else {}
