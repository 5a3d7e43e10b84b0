from __future__ import annotations

import pytest

from authgate.shared.config import AppConfig, AuthConfig, SecurityConfig


def test_defaults() -> None:
    config = AppConfig()

    assert config.auth.session_ttl_seconds == 24 * 60 * 60
    assert config.auth.token_bytes == 32
    assert config.auth.password_hash_method == "scrypt"
    assert config.security.cookie_name == "session_id"
    assert config.security.login_url == "/login"


def test_environment_overrides(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("SESSION_TTL_SECONDS", "60")
    monkeypatch.setenv("COOKIE_SECURE", "yes")
    monkeypatch.setenv("DATABASE_URL", "sqlite:///elsewhere.db")

    config = AppConfig()

    assert config.auth.session_ttl_seconds == 60
    assert config.security.cookie_secure is True
    assert config.database.url == "sqlite:///elsewhere.db"


def test_token_bytes_floor() -> None:
    with pytest.raises(ValueError):
        AuthConfig(SESSION_TOKEN_BYTES=8)


def test_production_warns_about_insecure_cookie(capsys: pytest.CaptureFixture[str]) -> None:
    config = AppConfig(APP_ENV="production", security=SecurityConfig(COOKIE_SECURE=False))

    assert config.is_production()
    assert "Cookie Secure flag is DISABLED" in capsys.readouterr().err


def test_production_with_secure_cookie_is_quiet(capsys: pytest.CaptureFixture[str]) -> None:
    AppConfig(APP_ENV="production", security=SecurityConfig(COOKIE_SECURE=True))

    assert capsys.readouterr().err == ""
