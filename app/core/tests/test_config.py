"""Tests for application configuration."""

import pytest
from pydantic import ValidationError

from app.core.config import Settings, get_settings


def test_settings_has_defaults():
    """Defaults describe a local development service on port 4000."""
    settings = Settings()

    assert settings.app_name == "ShopInsights"
    assert settings.app_env == "development"
    assert settings.debug is False
    assert settings.log_level == "INFO"
    assert settings.log_format == "json"
    assert settings.api_port == 4000
    assert settings.query_timeout_seconds == 10.0
    assert settings.identifier_max_length == 64


@pytest.mark.parametrize(
    ("app_env", "expected"),
    [("development", True), ("testing", False), ("staging", False), ("production", False)],
)
def test_is_development(app_env, expected):
    """Only the development environment counts as development."""
    assert Settings(app_env=app_env).is_development is expected


def test_get_settings_is_cached():
    """get_settings builds Settings once per process."""
    assert get_settings() is get_settings()


def test_settings_from_environment(monkeypatch):
    """Upper-case environment variables override defaults."""
    monkeypatch.setenv("APP_NAME", "TestApp")
    monkeypatch.setenv("DEBUG", "true")
    monkeypatch.setenv("LOG_LEVEL", "DEBUG")
    monkeypatch.setenv("QUERY_TIMEOUT_SECONDS", "2.5")
    monkeypatch.setenv("DATABASE_URL", "postgresql+asyncpg://u:p@db:5432/shop")
    monkeypatch.setenv("CORS_ORIGINS", '["https://dash.example.com"]')

    settings = Settings()

    assert settings.app_name == "TestApp"
    assert settings.debug is True
    assert settings.log_level == "DEBUG"
    assert settings.query_timeout_seconds == 2.5
    assert settings.database_url.endswith("@db:5432/shop")
    assert settings.cors_origins == ["https://dash.example.com"]


@pytest.mark.parametrize("timeout", [0, -1.0])
def test_query_timeout_must_be_positive(timeout):
    """A non-positive query timeout is rejected."""
    with pytest.raises(ValidationError, match="query_timeout_seconds must be positive"):
        Settings(query_timeout_seconds=timeout)


def test_invalid_app_env_rejected():
    """app_env is limited to known environments."""
    with pytest.raises(ValidationError):
        Settings(app_env="qa")
