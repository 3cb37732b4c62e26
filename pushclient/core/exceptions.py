"""Common exception helpers for the push client."""
from __future__ import annotations

import logging
from typing import Any


class PushError(Exception):
    """Base exception for push client specific errors."""

    error_code = "push_error"
    default_detail = "An unexpected push error occurred."
    log_level = logging.ERROR

    def __init__(self, detail: str | None = None, *, extra: dict[str, Any] | None = None) -> None:
        super().__init__(detail or self.default_detail)
        self.detail = detail or self.default_detail
        self.extra = extra or {}


class ConfigurationError(PushError):
    """Missing app identity, missing sender id or malformed init() argument."""

    error_code = "configuration_error"
    default_detail = "Invalid push configuration."


class PluginUnavailableError(PushError):
    error_code = "plugin_unavailable"
    default_detail = (
        "PushNotification plugin is required. Have you added phonegap-plugin-push?"
    )


class ConcurrentRegistrationError(PushError):
    error_code = "registration_in_progress"
    default_detail = "another registration is already in progress."
    log_level = logging.INFO


class CallbackTypeError(PushError):
    error_code = "callback_type"
    default_detail = "A valid callback function is required."
    log_level = logging.INFO


class BackendRuntimeError(PushError):
    """Error reported asynchronously by the native registration backend."""

    error_code = "backend_error"
    default_detail = "unexpected error occurred."

    def __init__(self, raw: Any, detail: str | None = None) -> None:
        super().__init__(detail, extra={"raw": raw})
        self.raw = raw


def log_push_error(logger: logging.Logger, exc: PushError) -> None:
    """Log a handled error at the severity its class declares."""

    logger.log(exc.log_level, "%s", exc.detail)
