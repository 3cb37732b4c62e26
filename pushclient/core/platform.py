"""Device platform detection contract."""
from __future__ import annotations

from typing import Protocol

from pushclient.models import DevicePlatform


class PlatformDetector(Protocol):
    def is_android_device(self) -> bool: ...

    def is_ios_device(self) -> bool: ...


class StaticPlatform:
    """Detector answering from a fixed platform name ("android", "ios" or anything else)."""

    def __init__(self, name: str | None = None) -> None:
        self._name = (name or "").strip().lower()

    def is_android_device(self) -> bool:
        return self._name == DevicePlatform.ANDROID.value

    def is_ios_device(self) -> bool:
        return self._name == DevicePlatform.IOS.value

    def __repr__(self) -> str:
        return f"StaticPlatform({self._name!r})"


def is_push_capable(platform: PlatformDetector) -> bool:
    return platform.is_android_device() or platform.is_ios_device()
