"""Tests for application settings."""

import pytest
from pydantic import ValidationError

from usermgmt.config import Settings, parse_comma_list


def test_parse_comma_list():
    assert parse_comma_list("a, b ,,c", []) == ["a", "b", "c"]
    assert parse_comma_list(None, ["x"]) == ["x"]
    assert parse_comma_list(["y"], ["x"]) == ["y"]


def test_plain_postgres_url_gets_async_driver():
    config = Settings(database_url="postgresql://user:pass@db:5432/users")

    assert config.database_url == "postgresql+asyncpg://user:pass@db:5432/users"
    assert config.is_sqlite is False


def test_sqlite_url_untouched():
    config = Settings(database_url="sqlite+aiosqlite:///./users.db")

    assert config.database_url == "sqlite+aiosqlite:///./users.db"
    assert config.is_sqlite is True


def test_cors_origins_from_env(monkeypatch):
    monkeypatch.setenv("CORS_ORIGINS", "https://a.example.com, https://b.example.com")

    assert Settings().cors_origins == ["https://a.example.com", "https://b.example.com"]


def test_cors_origins_default(monkeypatch):
    monkeypatch.delenv("CORS_ORIGINS", raising=False)

    assert "http://localhost:3000" in Settings().cors_origins


def test_environment_alias(monkeypatch):
    monkeypatch.delenv("ENVIRONMENT", raising=False)
    monkeypatch.setenv("ENV", "staging")

    assert Settings().environment == "staging"


def test_bcrypt_rounds_bounds():
    with pytest.raises(ValidationError):
        Settings(BCRYPT_ROUNDS=3)


def test_defaults():
    config = Settings()

    assert config.default_page_size == 20
    assert config.max_page_size == 100
    assert config.users_api_public is True
