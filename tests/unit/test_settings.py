"""Unit tests for Settings."""

import pytest
from pydantic import ValidationError

from app.infrastructure.config.settings import Settings

pytestmark = pytest.mark.unit

SECRET = "settings-test-secret-key-with-32-chars!"


def make_settings(**kwargs) -> Settings:
    return Settings(_env_file=None, secret_key=SECRET, **kwargs)


def test_short_secret_key_rejected():
    with pytest.raises(ValidationError):
        Settings(_env_file=None, secret_key="short")


def test_defaults():
    settings = make_settings()

    assert settings.session_token_expire_days == 7
    assert settings.verification_token_expire_hours == 24
    assert settings.password_reset_token_expire_hours == 1


def test_protected_prefixes_parsed():
    settings = make_settings(protected_path_prefixes=" /api/user , /api/todo,, ")

    assert settings.protected_path_prefixes_list == ["/api/user", "/api/todo"]


def test_database_url_override_wins(monkeypatch):
    monkeypatch.setenv("DATABASE_URL", "sqlite+aiosqlite:///./other.db")

    assert make_settings().database_url == "sqlite+aiosqlite:///./other.db"


def test_database_url_built_from_parts(monkeypatch):
    monkeypatch.delenv("DATABASE_URL", raising=False)

    settings = make_settings(db_user="u", db_password="p", db_host="db", db_port=5433, db_name="k")

    assert settings.database_url == "postgresql+asyncpg://u:p@db:5433/k"


def test_frontend_url_trailing_slash_stripped():
    assert make_settings(frontend_url="https://kinote.app/").frontend_url == "https://kinote.app"


def test_settings_are_immutable():
    settings = make_settings()

    with pytest.raises(ValidationError):
        settings.secret_key = "x" * 40
