"""Entry point for registering a device with the push service.

Example::

    push = PushService(
        {
            "debug": True,
            "onNotification": lambda notification: print(push.get_payload(notification)),
            "onRegister": lambda data: print(data),
        },
        plugin=phonegap_push_plugin,
        platform=StaticPlatform("android"),
    )

    # Registers for a device token using the options passed to init()
    push.register(callback)

    # Unregister the current registered token
    push.unregister()
"""
from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any, Optional

from pydantic import ValidationError

from pushclient.core.config import AppIdentity, get_settings
from pushclient.core.events import EventEmitter
from pushclient.core.exceptions import (
    ConcurrentRegistrationError,
    ConfigurationError,
    PluginUnavailableError,
    PushError,
    log_push_error,
)
from pushclient.core.metrics import PushMetrics
from pushclient.core.platform import PlatformDetector, StaticPlatform, is_push_capable
from pushclient.models import AndroidPluginConfig, PushConfig, PushToken
from pushclient.services.callback_registry import CallbackRegistry
from pushclient.services.dev_push_service import DevPushService
from pushclient.services.notification_processor import NotificationProcessor
from pushclient.services.readiness_gate import ReadinessGate
from pushclient.services.registration_service import RegistrationCoordinator
from pushclient.services.user_linkage import UserLinkage
from pushclient.services.utils.types import Callback, DevBackend, PushPlugin

DEFER_INIT = "DEFER_INIT"

logger = logging.getLogger(__name__)


class PushService:
    """Readiness-gated, single-flight coordinator for push registration.

    Every public method is fail-soft: problems are logged and reported as a
    ``False`` return value, never raised. An instance whose app identity is
    incomplete stays inert and answers ``False`` to every call.
    """

    def __init__(
        self,
        config: Any = DEFER_INIT,
        *,
        identity: AppIdentity | None = None,
        platform: PlatformDetector | None = None,
        emitter: EventEmitter | None = None,
        plugin: PushPlugin | None = None,
        dev_backend: DevBackend | None = None,
        metrics: PushMetrics | None = None,
    ) -> None:
        self._platform = platform or StaticPlatform()
        self._emitter = emitter or EventEmitter()
        self._plugin = plugin
        self._dev_backend = dev_backend
        self.metrics = metrics or PushMetrics()
        self._callbacks = CallbackRegistry()
        self._gate = ReadinessGate(self._emitter)
        self._processor = NotificationProcessor(self._emitter, self.metrics)
        self._registration = RegistrationCoordinator(
            callbacks=self._callbacks,
            processor=self._processor,
            metrics=self.metrics,
        )
        self._linkage = UserLinkage(self._platform)
        self._identity = AppIdentity()
        self._valid = False

        try:
            self._identity = identity if identity is not None else self._load_identity()
            self._validate_identity()
        except ConfigurationError as exc:
            log_push_error(logger, exc)
            return
        self._valid = True

        if config is not DEFER_INIT:
            self.init(config)

    @property
    def valid(self) -> bool:
        return self._valid

    @property
    def emitter(self) -> EventEmitter:
        return self._emitter

    @property
    def registration(self) -> RegistrationCoordinator:
        return self._registration

    @property
    def is_ready(self) -> bool:
        return self._gate.is_ready

    @property
    def config(self) -> Optional[PushConfig]:
        config = self._gate.config
        return config.model_copy(deep=True) if config is not None else None

    @property
    def token(self) -> Optional[PushToken]:
        return self._registration.token

    @property
    def token_ready(self) -> bool:
        return self._registration.token_ready

    @property
    def registration_locked(self) -> bool:
        return self._registration.locked

    @property
    def notification(self) -> Any:
        return self._processor.notification

    def init(self, config: Any = None) -> "PushService | bool":
        """Resolve ``config``, store its callbacks and signal readiness.

        Recognised options: ``debug``, ``onRegister``, ``onNotification``,
        ``onError`` and ``pluginConfig`` (snake_case names work too).
        Calling it again reconfigures and re-emits the ready event.
        """

        if not self._valid:
            return False
        try:
            self._ensure_plugin_available()
            parsed = self._parse_config(config)
        except PushError as exc:
            log_push_error(logger, exc)
            return False

        if parsed.on_register is not None:
            self._callbacks.set_register_callback(parsed.on_register)
        if parsed.on_notification is not None:
            self._callbacks.set_notification_callback(parsed.on_notification)
        if parsed.on_error is not None:
            self._callbacks.set_error_callback(parsed.on_error)

        resolved = parsed.detached_copy()
        if self._platform.is_android_device():
            android = resolved.plugin_config.android or AndroidPluginConfig()
            if not android.sender_id:
                android.sender_id = self._identity.gcm_key
            resolved.plugin_config.android = android

        self._gate.mark_ready(resolved)
        return self

    def on_ready(self, callback: Callback) -> bool:
        """Call ``callback(self)`` now if initialised, otherwise once init() completes."""

        if not self._valid:
            return False
        if not callable(callback):
            logger.info("on_ready() requires a valid callback function")
            return False
        self._gate.on_ready(callback, self)
        return True

    def register(self, callback: Optional[Callback] = None) -> bool:
        """Register the device for a token once the service is ready.

        ``callback`` receives the new PushToken; the ``onRegister`` callback
        from init() still fires with the raw backend data.
        """

        logger.info("register")
        if not self._valid:
            return False
        try:
            self._registration.begin()
        except ConcurrentRegistrationError as exc:
            log_push_error(logger, exc)
            return False
        self._gate.on_ready(lambda _push: self._complete_registration(callback), self)
        return True

    def unregister(
        self,
        callback: Optional[Callback] = None,
        error_callback: Optional[Callback] = None,
    ) -> Any:
        """Invalidate the current token; returns the backend's response."""

        if not self._valid:
            return False
        try:
            return self._registration.unregister(callback, error_callback)
        except Exception:  # noqa: BLE001
            logger.error("Push backend failed to unregister", exc_info=True)
            return False

    def get_payload(self, notification: Any) -> Any:
        return NotificationProcessor.get_payload(notification)

    def set_register_callback(self, callback: Any) -> bool:
        if not self._valid:
            return False
        return self._callbacks.set_register_callback(callback)

    def set_notification_callback(self, callback: Any) -> bool:
        if not self._valid:
            return False
        return self._callbacks.set_notification_callback(callback)

    def set_error_callback(self, callback: Any) -> bool:
        if not self._valid:
            return False
        return self._callbacks.set_error_callback(callback)

    def add_token_to_user(self, user: Any) -> bool:
        if not self._valid:
            return False
        return self._linkage.add_token_to_user(user, self._registration.token)

    def _complete_registration(self, callback: Optional[Callback]) -> None:
        if self._identity.dev_push:
            if self._dev_backend is None:
                self._dev_backend = DevPushService()
            self._registration.start_dev(self._dev_backend, self)
            return
        config = self._gate.config
        if config is None:
            # push:ready from another instance on a shared bus
            logger.info("Push service not initialised yet; registration waits for init()")
            self._gate.on_ready(lambda _push: self._complete_registration(callback), self)
            return
        if self._plugin is None:
            log_push_error(logger, PluginUnavailableError())
            self._registration.release(ok=False)
            return
        self._registration.start_native(self._plugin, config, callback)

    def _ensure_plugin_available(self) -> None:
        if self._plugin is None and is_push_capable(self._platform):
            raise PluginUnavailableError()

    @staticmethod
    def _parse_config(config: Any) -> PushConfig:
        if config is None:
            return PushConfig()
        if isinstance(config, PushConfig):
            return config
        if not isinstance(config, Mapping):
            raise ConfigurationError("init() requires a valid config object.")
        try:
            return PushConfig.model_validate(dict(config))
        except ValidationError as exc:
            raise ConfigurationError(
                f"init() requires a valid config object: {exc.error_count()} invalid field(s)",
                extra={"errors": exc.errors()},
            ) from exc

    @staticmethod
    def _load_identity() -> AppIdentity:
        try:
            return get_settings().identity
        except (ValueError, RuntimeError) as exc:
            raise ConfigurationError(f"could not load app identity: {exc}") from exc

    def _validate_identity(self) -> None:
        if not self._identity.app_id or not self._identity.api_key:
            raise ConfigurationError("no app_id or api_key found.")
        if (
            self._platform.is_android_device()
            and not self._identity.dev_push
            and not self._identity.gcm_key
        ):
            raise ConfigurationError("GCM project number not found")
