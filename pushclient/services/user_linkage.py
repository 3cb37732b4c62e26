"""Associate the held device token with a user record."""
from __future__ import annotations

import logging
from typing import Any, Callable, Optional

from pushclient.core.platform import PlatformDetector
from pushclient.models import DevicePlatform, PushToken

logger = logging.getLogger(__name__)


class UserLinkage:
    def __init__(self, platform: PlatformDetector) -> None:
        self._platform = platform

    def resolve_platform(self) -> Optional[DevicePlatform]:
        if self._platform.is_android_device():
            return DevicePlatform.ANDROID
        if self._platform.is_ios_device():
            return DevicePlatform.IOS
        return None

    def add_token_to_user(self, user: Any, token: Optional[PushToken]) -> bool:
        """Store ``token`` on ``user`` tagged with the device platform."""

        if token is None:
            logger.info("a token must be registered before you can add it to a user.")
            return False
        add_push_token = _token_setter(user)
        if add_push_token is None:
            logger.info("invalid user object passed to add_token_to_user()")
            return False
        platform = self.resolve_platform()
        if platform is None:
            logger.info("token is not a valid Android or iOS registration id. Cannot save to user.")
            return False
        try:
            add_push_token(token.token, platform.value)
        except Exception:  # noqa: BLE001
            logger.error("Failed to add push token to user", exc_info=True)
            return False
        return True


def _token_setter(user: Any) -> Optional[Callable[[str, str], Any]]:
    """Return the user's ``add_push_token`` (or camelCase ``addPushToken``) method."""

    for name in ("add_push_token", "addPushToken"):
        method = getattr(user, name, None)
        if callable(method):
            return method
    return None
