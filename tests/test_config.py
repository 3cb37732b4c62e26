"""
Tests for app identity settings.
"""

import json

import pytest

from pushclient.core.config import get_settings


def _write(path, payload):
    path.write_text(json.dumps(payload), encoding="utf-8")


class TestSettings:
    def test_missing_file_gives_empty_identity(self):
        settings = get_settings()

        assert settings.identity.app_id is None
        assert settings.identity.api_key is None
        assert settings.log_level == "INFO"

    def test_identity_read_from_push_json(self, tmp_path):
        _write(
            tmp_path / "push.json",
            {"app_identity": {"app_id": "A", "api_key": "K", "gcm_key": "42"}, "log_level": "DEBUG"},
        )

        settings = get_settings()

        assert settings.identity.app_id == "A"
        assert settings.identity.gcm_key == "42"
        assert settings.identity.dev_push is False
        assert settings.log_level == "DEBUG"

    def test_environment_overrides_file(self, tmp_path, monkeypatch):
        _write(tmp_path / "push.json", {"app_identity": {"app_id": "file", "api_key": "K"}})
        monkeypatch.setenv("PUSH_APP_ID", "env")
        monkeypatch.setenv("PUSH_DEV_PUSH", "true")

        settings = get_settings()

        assert settings.app_id == "env"
        assert settings.api_key == "K"
        assert settings.dev_push is True

    def test_invalid_json_raises(self, tmp_path):
        (tmp_path / "push.json").write_text("{not json", encoding="utf-8")

        with pytest.raises(ValueError):
            get_settings()

    def test_settings_are_cached(self):
        assert get_settings() is get_settings()
