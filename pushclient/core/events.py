"""Named-event publish/subscribe bus shared by push components."""
from __future__ import annotations

import logging
from typing import Any, Callable, Dict, List

EventHandler = Callable[[Any], Any]

logger = logging.getLogger(__name__)


class _Subscription:
    __slots__ = ("handler", "once")

    def __init__(self, handler: EventHandler, once: bool) -> None:
        self.handler = handler
        self.once = once


class EventEmitter:
    """Synchronous dispatcher; subscribers run in subscription order.

    One instance is usually shared by every component of an application, so
    "ready" and "notification processed" events reach page-level observers
    that never touched the push service directly.
    """

    def __init__(self) -> None:
        self._subscriptions: Dict[str, List[_Subscription]] = {}

    def on(self, event_name: str, handler: EventHandler) -> None:
        self._subscriptions.setdefault(event_name, []).append(_Subscription(handler, once=False))

    def once(self, event_name: str, handler: EventHandler) -> None:
        self._subscriptions.setdefault(event_name, []).append(_Subscription(handler, once=True))

    def off(self, event_name: str, handler: EventHandler) -> None:
        subscriptions = self._subscriptions.get(event_name)
        if not subscriptions:
            return
        self._subscriptions[event_name] = [sub for sub in subscriptions if sub.handler is not handler]

    def listener_count(self, event_name: str) -> int:
        return len(self._subscriptions.get(event_name, []))

    def emit(self, event_name: str, payload: Any = None) -> None:
        subscriptions = self._subscriptions.get(event_name)
        if not subscriptions:
            return
        snapshot = list(subscriptions)
        if any(sub.once for sub in snapshot):
            self._subscriptions[event_name] = [sub for sub in subscriptions if not sub.once]
        for sub in snapshot:
            try:
                sub.handler(payload)
            except Exception:  # noqa: BLE001
                logger.warning("Handler for event %s failed", event_name, exc_info=True)
