"""Development push backend: fake token plus polling for test messages."""
from __future__ import annotations

import asyncio
import contextlib
import inspect
import logging
from collections.abc import Mapping
from typing import Any, Awaitable, Callable, Iterable, Optional
from uuid import uuid4

from pushclient.services.utils.backoff import Backoff

DEV_TOKEN_PREFIX = "DEV-"
DEV_NOTIFICATION_TITLE = "DEVELOPMENT PUSH"
DEFAULT_POLL_INTERVAL = 5.0

DevNotificationSource = Callable[[str], Awaitable[Optional[Iterable[Any]]] | Optional[Iterable[Any]]]

logger = logging.getLogger(__name__)


class DevPushService:
    """Simulated registration used when the app identity enables dev push.

    ``source`` is called with the development token and returns the messages
    waiting for this device; each one is delivered as a notification through
    the owning push service.
    """

    def __init__(
        self,
        source: DevNotificationSource | None = None,
        *,
        interval: float = DEFAULT_POLL_INTERVAL,
        backoff: Backoff | None = None,
    ) -> None:
        self._source = source
        self._interval = interval
        self._backoff = backoff or Backoff(base_delay=interval)
        self._push: Any = None
        self._token: Optional[str] = None
        self._task: Optional[asyncio.Task[None]] = None

    @property
    def token(self) -> Optional[str]:
        return self._token

    @property
    def polling(self) -> bool:
        return self._task is not None and not self._task.done()

    def init(self, push: Any) -> None:
        self._push = push
        self._token = f"{DEV_TOKEN_PREFIX}{uuid4()}"
        logger.warning(
            "Development push token %s registered; development pushes do not carry payload data",
            self._token,
        )
        push.registration.handle_registration({"registrationId": self._token})
        if self._source is not None:
            self._start_polling()

    def _start_polling(self) -> None:
        if self.polling:
            return
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            logger.info("No running event loop; development push polling disabled")
            return
        self._task = loop.create_task(self._run(), name="dev-push-poll")
        self._task.add_done_callback(self._polling_finished)

    @staticmethod
    def _polling_finished(task: asyncio.Task[None]) -> None:
        if task.cancelled():
            return
        exc = task.exception()
        if exc is not None:
            logger.error("Development push polling stopped: %s", exc, exc_info=exc)

    async def stop(self) -> None:
        if self._task:
            self._task.cancel()
            with contextlib.suppress(asyncio.CancelledError):
                await self._task
            self._task = None

    async def poll_once(self) -> int:
        """Fetch pending messages once and deliver them; returns the count."""

        if self._source is None or self._push is None or self._token is None:
            return 0
        result = self._source(self._token)
        if inspect.isawaitable(result):
            result = await result
        delivered = 0
        for message in result or ():
            self._push.registration.handle_notification(self._to_notification(message))
            delivered += 1
        return delivered

    async def _run(self) -> None:
        while True:
            try:
                await self.poll_once()
                self._backoff.reset()
                delay = self._interval
            except Exception as exc:  # noqa: BLE001
                delay = self._backoff.next_delay()
                logger.warning("Development push check failed: %s (retry in %.1fs)", exc, delay)
            await asyncio.sleep(delay)

    @staticmethod
    def _to_notification(message: Any) -> dict[str, Any]:
        if isinstance(message, Mapping):
            text = message.get("message", "")
        else:
            text = str(message)
        return {"message": text, "title": DEV_NOTIFICATION_TITLE, "additionalData": {}}
