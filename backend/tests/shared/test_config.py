"""Tests for settings, environment validation and logging setup."""

import logging

from shared.config import REQUIRED_SETTINGS, Settings, get_settings, validate_environment
from shared.logging_config import configure_logging


class TestSettings:
    def test_defaults(self, monkeypatch):
        monkeypatch.delenv("FREE_GENERATION_LIMIT", raising=False)
        settings = Settings(_env_file=None)

        assert settings.free_generation_limit == 3
        assert settings.generation_timeout_seconds == 120.0
        assert settings.openai_model == "gpt-4"
        assert settings.rate_limit_storage_uri == "memory://"

    def test_environment_override(self, monkeypatch):
        monkeypatch.setenv("FREE_GENERATION_LIMIT", "5")
        monkeypatch.setenv("STRIPE_PRICE_ID", "price_abc")

        settings = Settings(_env_file=None)

        assert settings.free_generation_limit == 5
        assert settings.stripe_price_id == "price_abc"

    def test_get_settings_is_cached(self):
        assert get_settings() is get_settings()


class TestValidateEnvironment:
    def test_reports_every_missing_setting(self, caplog):
        settings = Settings(_env_file=None, **{name: "" for name in REQUIRED_SETTINGS})

        with caplog.at_level(logging.ERROR, logger="shared.config"):
            missing = validate_environment(settings)

        assert missing == list(REQUIRED_SETTINGS)
        assert "OPENAI_API_KEY" in caplog.text

    def test_complete_environment(self, caplog):
        settings = Settings(_env_file=None, **{name: "set" for name in REQUIRED_SETTINGS})

        with caplog.at_level(logging.ERROR, logger="shared.config"):
            assert validate_environment(settings) == []
        assert caplog.text == ""


def test_configure_logging_quiets_http_client():
    configure_logging("debug")
    assert logging.getLogger("httpx").level == logging.WARNING
