"""Domain models for the push client."""
from .domain import (
    CALLBACK_FIELDS,
    NOTIFICATION_PROCESSED_EVENT,
    READY_EVENT,
    AndroidPluginConfig,
    DevicePlatform,
    PluginConfig,
    PushConfig,
    PushEvent,
    PushToken,
)

__all__ = [
    "CALLBACK_FIELDS",
    "NOTIFICATION_PROCESSED_EVENT",
    "READY_EVENT",
    "AndroidPluginConfig",
    "DevicePlatform",
    "PluginConfig",
    "PushConfig",
    "PushEvent",
    "PushToken",
]
