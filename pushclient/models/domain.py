"""Domain models describing push configuration and registration state."""
import copy
from enum import Enum
from typing import Any, Dict, Optional

from pydantic import AliasChoices, BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

READY_EVENT = "push:ready"
NOTIFICATION_PROCESSED_EVENT = "push:process_notification"

CALLBACK_FIELDS = frozenset({"on_register", "on_notification", "on_error"})


class DevicePlatform(str, Enum):
    """Platform tags understood by user records."""

    ANDROID = "android"
    IOS = "ios"


class PushEvent(str, Enum):
    """Events emitted by the native registration backend."""

    REGISTRATION = "registration"
    NOTIFICATION = "notification"
    ERROR = "error"


class AndroidPluginConfig(BaseModel):
    """Android options; the plugin reads ``senderID``, callers may also write ``senderId``."""

    model_config = ConfigDict(extra="allow", populate_by_name=True)

    sender_id: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices("senderID", "senderId", "sender_id"),
        serialization_alias="senderID",
        description="GCM project number used to request a token",
    )


class PluginConfig(BaseModel):
    """Options handed verbatim to the native plugin; unknown keys are preserved."""

    model_config = ConfigDict(extra="allow", populate_by_name=True)

    android: Optional[AndroidPluginConfig] = None
    ios: Optional[Dict[str, Any]] = None

    def to_plugin_options(self) -> Dict[str, Any]:
        return self.model_dump(by_alias=True, exclude_none=True)


class PushConfig(BaseModel):
    """Options accepted by PushService.init().

    Callbacks are accepted as arbitrary values here and validated by the
    callback registry, so a bad callback never rejects the whole config.
    """

    model_config = ConfigDict(
        extra="allow",
        populate_by_name=True,
        alias_generator=to_camel,
    )

    debug: bool = Field(default=False, description="Log every backend event")
    on_register: Any = None
    on_notification: Any = None
    on_error: Any = None
    plugin_config: PluginConfig = Field(default_factory=PluginConfig)

    def detached_copy(self) -> "PushConfig":
        """Deep copy without callbacks, safe to keep after the caller mutates its input."""

        data = copy.deepcopy(self.model_dump(exclude=set(CALLBACK_FIELDS)))
        return PushConfig.model_validate(data)


class PushToken(BaseModel):
    """Registration identifier issued by the push backend."""

    model_config = ConfigDict(frozen=True)

    token: str

    def __str__(self) -> str:
        return self.token
