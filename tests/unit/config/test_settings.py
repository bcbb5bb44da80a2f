from __future__ import annotations

import pytest
from pydantic import ValidationError

from nihil.config.settings import Settings, get_settings


def test_settings_defaults() -> None:
    """Without env, the demo runs against in-memory SQLite at INFO."""
    settings = Settings()
    assert settings.database_url == "sqlite+pysqlite:///:memory:"
    assert settings.log_level == "INFO"
    assert settings.echo_sql is False


def test_settings_read_env(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("NIHIL_DATABASE_URL", "sqlite+pysqlite:////tmp/nihil.db")
    monkeypatch.setenv("LOG_LEVEL", " debug ")
    monkeypatch.setenv("NIHIL_ECHO_SQL", "true")

    settings = Settings()
    assert settings.database_url == "sqlite+pysqlite:////tmp/nihil.db"
    assert settings.log_level == "DEBUG"
    assert settings.echo_sql is True


def test_settings_accept_field_names() -> None:
    settings = Settings(database_url="sqlite+pysqlite:///demo.db", log_level="warning")
    assert settings.database_url == "sqlite+pysqlite:///demo.db"
    assert settings.log_level == "WARNING"


def test_settings_reject_unknown_log_level() -> None:
    with pytest.raises(ValidationError):
        Settings(log_level="verbose")


def test_get_settings_is_cached() -> None:
    assert get_settings() is get_settings()


def test_get_settings_wraps_invalid_config(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("LOG_LEVEL", "chatty")
    with pytest.raises(RuntimeError, match="Invalid nihil configuration"):
        get_settings()
