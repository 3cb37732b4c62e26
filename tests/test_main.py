"""
Tests for the development registration CLI.
"""

from main import main
from pushclient.services.dev_push_service import DEV_TOKEN_PREFIX


class TestMain:
    def test_prints_dev_token(self, monkeypatch, capsys):
        monkeypatch.setenv("PUSH_APP_ID", "A")
        monkeypatch.setenv("PUSH_API_KEY", "K")

        assert main([]) == 0

        assert capsys.readouterr().out.strip().splitlines()[-1].startswith(DEV_TOKEN_PREFIX)

    def test_fails_without_identity(self):
        assert main(["--debug"]) == 1
