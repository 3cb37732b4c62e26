"""Shared fakes for the native push plugin, platform and user records."""

from __future__ import annotations

from collections import defaultdict
from typing import Any, Callable

import pytest

from pushclient.core.config import AppIdentity, get_settings
from pushclient.core.events import EventEmitter
from pushclient.core.platform import StaticPlatform
from pushclient.services.push_service import PushService


class FakePluginHandle:
    """Backend handle whose events are fired by the test."""

    def __init__(self, options: dict[str, Any]):
        self.options = options
        self.handlers: dict[str, list[Callable[[Any], Any]]] = defaultdict(list)
        self.unregister_calls: list[tuple[Any, Any]] = []

    def on(self, event_name, handler):
        self.handlers[event_name].append(handler)

    def emit(self, event_name, payload=None):
        for handler in list(self.handlers[event_name]):
            handler(payload)

    def unregister(self, success_callback=None, error_callback=None):
        self.unregister_calls.append((success_callback, error_callback))
        if success_callback:
            success_callback()
        return "unregistered"


class FakePushPlugin:
    def __init__(self):
        self.handles: list[FakePluginHandle] = []

    def init(self, options):
        handle = FakePluginHandle(options)
        self.handles.append(handle)
        return handle

    @property
    def last_handle(self) -> FakePluginHandle:
        return self.handles[-1]


class FakeUser:
    def __init__(self):
        self.tokens: list[tuple[str, str]] = []

    def add_push_token(self, token, platform):
        self.tokens.append((token, platform))


@pytest.fixture(autouse=True)
def _isolated_settings(monkeypatch, tmp_path):
    for name in ("PUSH_APP_ID", "PUSH_API_KEY", "PUSH_DEV_PUSH", "PUSH_GCM_KEY", "PUSH_LOG_LEVEL"):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setenv("PUSH_CONFIG_PATH", str(tmp_path / "push.json"))
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def identity():
    return AppIdentity(app_id="A", api_key="K", gcm_key="123456")


@pytest.fixture
def dev_identity():
    return AppIdentity(app_id="A", api_key="K", dev_push=True)


@pytest.fixture
def plugin():
    return FakePushPlugin()


@pytest.fixture
def emitter():
    return EventEmitter()


@pytest.fixture
def user():
    return FakeUser()


@pytest.fixture
def make_push(identity, plugin, emitter):
    """Build a PushService wired to the shared fakes; keywords override them."""

    def _make(*args, platform=None, **kwargs):
        kwargs.setdefault("identity", identity)
        kwargs.setdefault("plugin", plugin)
        kwargs.setdefault("emitter", emitter)
        return PushService(*args, platform=platform or StaticPlatform(), **kwargs)

    return _make
