"""Tests for config.py."""

import pytest
from pydantic import ValidationError

from config import Settings


class TestSettings:
    def test_defaults(self, monkeypatch):
        monkeypatch.delenv("HISSAN_GEMINI_API_KEY", raising=False)
        monkeypatch.delenv("HISSAN_LEDGER_PATH", raising=False)
        settings = Settings(_env_file=None)
        assert settings.gemini_api_key == ""
        assert settings.hint_model == "gemini-2.5-flash"
        assert settings.ledger_path == "hissan_save.json"
        assert settings.log_level == "WARNING"

    def test_environment_prefix(self, monkeypatch):
        monkeypatch.setenv("HISSAN_GEMINI_API_KEY", "abc")
        monkeypatch.setenv("HISSAN_LEDGER_PATH", "/tmp/save.json")
        settings = Settings(_env_file=None)
        assert settings.gemini_api_key == "abc"
        assert settings.ledger_path == "/tmp/save.json"

    def test_log_level_normalized(self, monkeypatch):
        monkeypatch.setenv("HISSAN_LOG_LEVEL", " debug ")
        assert Settings(_env_file=None).log_level == "DEBUG"

    def test_unknown_log_level_rejected(self, monkeypatch):
        monkeypatch.setenv("HISSAN_LOG_LEVEL", "LOUD")
        with pytest.raises(ValidationError, match="log_level"):
            Settings(_env_file=None)
