"""Tests for environment-driven settings."""

import pytest

from oauth_tooling.config import OAuthSettings, load_settings


def test_load_settings_defaults(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in (
        "OAUTH_TOKEN_INFO_ENDPOINT",
        "OAUTH_PUBLIC_ENDPOINTS",
        "OAUTH_ACCESS_TOKEN_ENDPOINT",
        "OAUTH_CREDENTIALS_DIR",
    ):
        monkeypatch.delenv(name, raising=False)

    assert load_settings() == OAuthSettings()


def test_load_settings_reads_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("OAUTH_TOKEN_INFO_ENDPOINT", "https://auth/tokeninfo")
    monkeypatch.setenv("OAUTH_PUBLIC_ENDPOINTS", "/health,, /metrics ,")
    monkeypatch.setenv("OAUTH_ACCESS_TOKEN_ENDPOINT", "https://auth/access_token")
    monkeypatch.setenv("OAUTH_CREDENTIALS_DIR", "/meta/credentials")

    settings = load_settings()

    assert settings.token_info_endpoint == "https://auth/tokeninfo"
    assert settings.public_endpoints == ("/health", "/metrics")
    assert settings.access_token_endpoint == "https://auth/access_token"
    assert settings.credentials_dir == "/meta/credentials"


def test_blank_values_are_unset(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("OAUTH_TOKEN_INFO_ENDPOINT", "   ")

    assert load_settings().token_info_endpoint is None
