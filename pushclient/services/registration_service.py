"""Single-flight registration against the native or development push backend."""
from __future__ import annotations

import logging
import time
from collections.abc import Mapping
from typing import Any, Optional

from pushclient.core.context import cycle_context, new_cycle_id
from pushclient.core.exceptions import (
    BackendRuntimeError,
    ConcurrentRegistrationError,
    log_push_error,
)
from pushclient.core.metrics import PushMetrics
from pushclient.models import PushConfig, PushEvent, PushToken
from pushclient.services.callback_registry import CallbackRegistry
from pushclient.services.notification_processor import NotificationProcessor
from pushclient.services.utils.types import Callback, DevBackend, PushPlugin, PushPluginHandle

logger = logging.getLogger(__name__)


class RegistrationCoordinator:
    """Own the exclusivity lock, the current token and the backend handle.

    The lock is taken by ``begin()`` and released once per attempt: by the
    backend's registration or error event, by the development backend
    completing, or by ``release()`` when the attempt never reached a backend.
    An attempt whose backend never answers keeps the lock held.
    """

    def __init__(
        self,
        *,
        callbacks: CallbackRegistry,
        processor: NotificationProcessor,
        metrics: PushMetrics,
    ) -> None:
        self._callbacks = callbacks
        self._processor = processor
        self._metrics = metrics
        self._locked = False
        self._token: Optional[PushToken] = None
        self._token_ready = False
        self._handle: Optional[PushPluginHandle] = None
        self._cycle_id: Optional[str] = None
        self._started_at: Optional[float] = None

    @property
    def locked(self) -> bool:
        return self._locked

    @property
    def token(self) -> Optional[PushToken]:
        return self._token

    @property
    def token_ready(self) -> bool:
        return self._token_ready

    def begin(self) -> None:
        if self._locked:
            raise ConcurrentRegistrationError()
        self._locked = True
        self._cycle_id = new_cycle_id()
        self._started_at = time.monotonic()
        with cycle_context(self._cycle_id):
            logger.info("Registration attempt started")

    def release(self, *, ok: bool) -> None:
        if not self._locked:
            return
        self._locked = False
        duration_ms = 0
        if self._started_at is not None:
            duration_ms = int((time.monotonic() - self._started_at) * 1000)
        self._started_at = None
        self._metrics.registration_finished(ok=ok, duration_ms=duration_ms)

    def start_dev(self, backend: DevBackend, owner: Any) -> None:
        with cycle_context(self._cycle_id):
            logger.info("Registering with the development push backend")
            try:
                backend.init(owner)
            except Exception:  # noqa: BLE001
                logger.error("Development push backend failed to register", exc_info=True)
                self.release(ok=False)
                return
            self.release(ok=True)
            self._token_ready = True

    def start_native(
        self,
        plugin: PushPlugin,
        config: PushConfig,
        callback: Optional[Callback] = None,
    ) -> None:
        cycle_id = self._cycle_id
        with cycle_context(cycle_id):
            try:
                handle = plugin.init(config.plugin_config.to_plugin_options())
            except Exception:  # noqa: BLE001
                logger.error("Native push plugin failed to initialise", exc_info=True)
                self.release(ok=False)
                return
            self._handle = handle

            def on_registration(data: Any) -> None:
                with cycle_context(cycle_id):
                    self.release(ok=True)
                    token = self._store_token(data)
                    if token is None:
                        return
                    self._token_ready = True
                    if callable(callback):
                        _call_safely(callback, token, label="register()")

            handle.on(PushEvent.REGISTRATION.value, on_registration)
            if config.debug:
                self._wire_debug(handle)
            self._wire_callbacks(handle)
            logger.debug("Native push plugin initialised")

    def unregister(
        self,
        callback: Optional[Callback] = None,
        error_callback: Optional[Callback] = None,
    ) -> Any:
        if self._handle is None:
            return False
        return self._handle.unregister(callback, error_callback)

    def handle_registration(self, data: Any) -> None:
        self._store_token(data)
        self._callbacks.invoke(PushEvent.REGISTRATION, data)

    def handle_notification(self, notification: Any) -> None:
        self._processor.process(notification)
        self._callbacks.invoke(PushEvent.NOTIFICATION, notification)

    def handle_error(self, error: Any) -> None:
        self.release(ok=False)
        if self._callbacks.get(PushEvent.ERROR) is None:
            log_push_error(logger, BackendRuntimeError(error, f"push backend error: {error}"))
            return
        self._callbacks.invoke(PushEvent.ERROR, error)

    def _wire_callbacks(self, handle: PushPluginHandle) -> None:
        handle.on(PushEvent.REGISTRATION.value, self.handle_registration)
        handle.on(PushEvent.NOTIFICATION.value, self.handle_notification)
        handle.on(PushEvent.ERROR.value, self.handle_error)

    def _wire_debug(self, handle: PushPluginHandle) -> None:
        handle.on(
            PushEvent.REGISTRATION.value,
            lambda data: logger.info("device token registered %s", data),
        )
        handle.on(
            PushEvent.NOTIFICATION.value,
            lambda notification: logger.info("notification received %s", notification),
        )
        handle.on(
            PushEvent.ERROR.value,
            lambda error: logger.error("unexpected error occurred: %s", error),
        )

    def _store_token(self, data: Any) -> Optional[PushToken]:
        if isinstance(data, Mapping):
            registration_id = data.get("registrationId")
        else:
            registration_id = getattr(data, "registrationId", None)
        if not isinstance(registration_id, str) or not registration_id:
            logger.warning("Registration event without a registrationId: %s", data)
            return None
        self._token = PushToken(token=registration_id)
        return self._token


def _call_safely(callback: Callback, *args: Any, label: str) -> None:
    try:
        callback(*args)
    except Exception:  # noqa: BLE001
        logger.warning("%s callback failed", label, exc_info=True)
