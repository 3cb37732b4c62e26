"""Application identity and runtime settings."""
import json
import os
from functools import lru_cache
from pathlib import Path
from typing import Optional

from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

CONFIG_PATH_ENV = "PUSH_CONFIG_PATH"
DEFAULT_CONFIG_FILENAME = "push.json"


class AppIdentity(BaseModel):
    """Identity block stored in push.json."""

    model_config = {"extra": "ignore"}

    app_id: Optional[str] = Field(default=None, description="Application identifier")
    api_key: Optional[str] = Field(default=None, description="Public API key of the application")
    dev_push: bool = Field(default=False, description="Use the development push backend")
    gcm_key: Optional[str] = Field(
        default=None,
        description="GCM project number used as the Android sender id",
    )


class ConfigFile(BaseModel):
    """Root configuration file structure."""

    app_identity: AppIdentity = Field(default_factory=AppIdentity)
    log_level: str = Field("INFO", description="Root logging level")


class PushSettings(BaseSettings):
    """Resolved settings; environment variables win over push.json values."""

    model_config = SettingsConfigDict(env_prefix="PUSH_", extra="ignore")

    app_id: Optional[str] = Field(default=None, description="Application identifier")
    api_key: Optional[str] = Field(default=None, description="Public API key of the application")
    dev_push: bool = Field(default=False, description="Use the development push backend")
    gcm_key: Optional[str] = Field(default=None, description="GCM project number")
    log_level: str = Field("INFO", description="Root logging level")

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls,
        init_settings,
        env_settings,
        dotenv_settings,
        file_secret_settings,
    ):
        return env_settings, init_settings, dotenv_settings, file_secret_settings

    @property
    def identity(self) -> AppIdentity:
        return AppIdentity(
            app_id=self.app_id,
            api_key=self.api_key,
            dev_push=self.dev_push,
            gcm_key=self.gcm_key,
        )


def _get_config_file_path() -> Path:
    """Get the absolute path to push.json."""
    override = os.environ.get(CONFIG_PATH_ENV)
    if override:
        return Path(override)
    project_root = Path(__file__).parent.parent.parent
    return project_root / DEFAULT_CONFIG_FILENAME


def _load_config_from_json() -> ConfigFile:
    """Load and parse push.json; a missing file yields an empty configuration."""
    config_path = _get_config_file_path()
    if not config_path.exists():
        return ConfigFile()

    try:
        with open(config_path, "r", encoding="utf-8") as f:
            config_data = json.load(f)
        return ConfigFile(**config_data)
    except json.JSONDecodeError as e:
        raise ValueError(f"Invalid JSON in {config_path}: {e}")
    except Exception as e:
        raise RuntimeError(f"Error loading configuration from {config_path}: {e}")


def _create_settings_from_config(config: ConfigFile) -> PushSettings:
    identity = config.app_identity
    return PushSettings(
        app_id=identity.app_id,
        api_key=identity.api_key,
        dev_push=identity.dev_push,
        gcm_key=identity.gcm_key,
        log_level=config.log_level,
    )


@lru_cache(maxsize=None)
def get_settings() -> PushSettings:
    """Return a cached PushSettings instance."""

    return _create_settings_from_config(_load_config_from_json())
