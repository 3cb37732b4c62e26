"""Init-then-signal gate deferring work until push configuration exists."""
from __future__ import annotations

import logging
from typing import Any, Callable, Optional

from pushclient.core.events import EventEmitter
from pushclient.models import READY_EVENT, PushConfig

ReadyCallback = Callable[[Any], Any]

logger = logging.getLogger(__name__)


class ReadinessGate:
    """Hold the resolved config and run deferred callbacks once it is set.

    The ready flag only moves forward. Marking ready again replaces the
    config and re-emits the ready event for reconfiguration.
    """

    def __init__(self, emitter: EventEmitter) -> None:
        self._emitter = emitter
        self._is_ready = False
        self._config: Optional[PushConfig] = None

    @property
    def is_ready(self) -> bool:
        return self._is_ready

    @property
    def config(self) -> Optional[PushConfig]:
        return self._config

    def mark_ready(self, config: PushConfig) -> None:
        self._config = config
        self._is_ready = True
        logger.debug("Push configuration ready (debug=%s)", config.debug)
        self._emitter.emit(READY_EVENT, {"config": config})

    def on_ready(self, callback: ReadyCallback, owner: Any) -> None:
        """Run ``callback(owner)`` now if ready, otherwise on the next ready event."""

        if self._is_ready:
            try:
                callback(owner)
            except Exception:  # noqa: BLE001
                logger.warning("on_ready callback failed", exc_info=True)
            return
        self._emitter.once(READY_EVENT, lambda _payload: callback(owner))
