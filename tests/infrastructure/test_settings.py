"""Tests for environment-driven settings."""

import pytest

from lucidad.domain.errors import ConfigurationError
from lucidad.infrastructure.settings import ServiceSettings

ENV_VARS = [
    "OPENAI_API_KEY",
    "OPENAI_VISION_MODEL",
    "LUCIDAD_RATE_LIMIT_WINDOW_SECONDS",
    "LUCIDAD_RATE_LIMIT_MAX_REQUESTS",
    "LUCIDAD_REQUEST_TIMEOUT_SECONDS",
    "LUCIDAD_MAX_IMAGE_BYTES",
    "LUCIDAD_LOG_LEVEL",
]


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)


def test_defaults(monkeypatch):
    """Test that defaults match the reference deployment."""
    monkeypatch.setenv("OPENAI_API_KEY", "sk-test")
    settings = ServiceSettings.from_env()

    assert settings.openai_api_key == "sk-test"
    assert settings.vision_model == "gpt-4o"
    assert settings.rate_limit_window_seconds == 60.0
    assert settings.rate_limit_max_requests == 10
    assert settings.request_timeout_seconds == 60.0
    assert settings.max_image_bytes == 10 * 1024 * 1024


def test_overrides(monkeypatch):
    """Test that environment variables override defaults."""
    monkeypatch.setenv("OPENAI_API_KEY", "sk-test")
    monkeypatch.setenv("OPENAI_VISION_MODEL", "gpt-4.1-mini")
    monkeypatch.setenv("LUCIDAD_RATE_LIMIT_MAX_REQUESTS", "25")
    monkeypatch.setenv("LUCIDAD_REQUEST_TIMEOUT_SECONDS", "30")

    settings = ServiceSettings.from_env()
    assert settings.vision_model == "gpt-4.1-mini"
    assert settings.rate_limit_max_requests == 25
    assert settings.request_timeout_seconds == 30.0


def test_missing_api_key():
    """Test that a missing credential is a deployment error."""
    with pytest.raises(ConfigurationError):
        ServiceSettings.from_env()


@pytest.mark.parametrize(
    "name,value",
    [
        ("LUCIDAD_RATE_LIMIT_MAX_REQUESTS", "zero"),
        ("LUCIDAD_RATE_LIMIT_MAX_REQUESTS", "0"),
        ("LUCIDAD_RATE_LIMIT_WINDOW_SECONDS", "-5"),
    ],
)
def test_invalid_values(monkeypatch, name, value):
    """Test that invalid tunables are configuration errors."""
    monkeypatch.setenv("OPENAI_API_KEY", "sk-test")
    monkeypatch.setenv(name, value)
    with pytest.raises(ConfigurationError):
        ServiceSettings.from_env()
