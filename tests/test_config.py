"""Tests for environment-driven settings."""

import pytest

from family_directory.config import Settings


def test_defaults(monkeypatch):
    for key in ("DATABASE_URL", "ENV", "LOG_JSON", "SESSION_COOKIE_SECURE", "CORS_ORIGINS"):
        monkeypatch.delenv(key, raising=False)

    settings = Settings()

    assert settings.DATABASE_URL == "sqlite:///./family_directory.db"
    assert settings.ALGORITHM == "HS256"
    assert settings.LOG_JSON is False
    assert settings.SESSION_COOKIE_SECURE is False
    assert settings.CORS_ORIGINS == ["*"]


def test_environment_is_read_at_construction(monkeypatch):
    monkeypatch.setenv("ENV", "prod")
    monkeypatch.setenv("SESSION_EXPIRE_MINUTES", "30")
    monkeypatch.setenv("CORS_ORIGINS", "https://a.org, https://b.org")
    monkeypatch.delenv("LOG_JSON", raising=False)

    settings = Settings()

    assert settings.SESSION_EXPIRE_MINUTES == 30
    assert settings.CORS_ORIGINS == ["https://a.org", "https://b.org"]
    assert settings.LOG_JSON is True


def test_postgres_scheme_is_rewritten():
    settings = Settings(DATABASE_URL="postgres://u:p@host/db")
    assert settings.DATABASE_URL == "postgresql://u:p@host/db"


def test_overrides_win_over_environment(monkeypatch):
    monkeypatch.setenv("SECRET_KEY", "from-env")
    assert Settings(SECRET_KEY="explicit").SECRET_KEY == "explicit"


def test_unknown_override_is_rejected():
    with pytest.raises(TypeError):
        Settings(NOT_A_SETTING=1)
