# pushclient/services/utils/types.py
from typing import Any, Callable, Mapping, Optional, Protocol

Callback = Callable[..., Any]


class PushPluginHandle(Protocol):
    def on(self, event_name: str, handler: Callable[[Any], Any]) -> None: ...

    def unregister(
        self,
        success_callback: Optional[Callback] = None,
        error_callback: Optional[Callback] = None,
    ) -> Any: ...


class PushPlugin(Protocol):
    def init(self, options: Mapping[str, Any]) -> PushPluginHandle: ...


class DevBackend(Protocol):
    def init(self, push: Any) -> None: ...
