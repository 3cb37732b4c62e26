"""Readiness-gated device push registration client."""
from pushclient.core.events import EventEmitter
from pushclient.core.platform import StaticPlatform
from pushclient.models import PushConfig, PushToken
from pushclient.services.dev_push_service import DevPushService
from pushclient.services.push_service import DEFER_INIT, PushService

__all__ = [
    "DEFER_INIT",
    "DevPushService",
    "EventEmitter",
    "PushConfig",
    "PushService",
    "PushToken",
    "StaticPlatform",
]
