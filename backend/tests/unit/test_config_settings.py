"""Unit tests for application settings and database URL handling."""

import logging
from pathlib import Path

import pytest

from records_api.config import Settings
from records_api.infrastructure.database import Database
from records_api.infrastructure.logging.log_config import setup_logging


def test_settings_uses_backend_env_file_independent_of_cwd():
    """Settings should always include backend/.env as an env source."""
    env_files = Settings.model_config.get("env_file")
    assert env_files is not None

    normalized = {str(Path(item)) for item in env_files}
    expected_backend_env = str(Path(__file__).resolve().parents[2] / ".env")

    assert expected_backend_env in normalized
    assert str(Path(".env")) in normalized


def test_settings_read_database_url_from_environment(monkeypatch):
    monkeypatch.setenv("DATABASE_URL", "sqlite:///./other.sqlite")
    assert Settings().database_url == "sqlite:///./other.sqlite"


@pytest.mark.parametrize(
    "url, expected",
    [
        ("sqlite:///./database.sqlite", "sqlite+aiosqlite:///./database.sqlite"),
        ("postgresql://u:p@localhost/db", "postgresql+asyncpg://u:p@localhost/db"),
        ("sqlite+aiosqlite:///x.db", "sqlite+aiosqlite:///x.db"),
    ],
)
def test_database_uses_async_driver(url, expected):
    assert Database(url).url == expected


def test_database_session_requires_open():
    database = Database("sqlite:///./never-opened.sqlite")
    assert database.is_open is False
    with pytest.raises(RuntimeError):
        database.session()


def test_setup_logging_applies_category_levels():
    setup_logging(Settings(log_level_sql="ERROR", log_level_store="DEBUG"))
    assert logging.getLogger("sqlalchemy.engine").level == logging.ERROR
    assert logging.getLogger("records_api.infrastructure.database").level == logging.DEBUG
