"""Tests for infrastructure settings."""

from unittest.mock import MagicMock

import pytest

from bank.infrastructure import settings as settings_module
from bank.infrastructure.settings import BankSettings

ENV_VARS = (
    "BANK_BACKEND",
    "BANK_DB_URL",
    "BANK_DB_POOL_SIZE",
    "BANK_DB_MAX_OVERFLOW",
    "MONGODB_URI",
    "MONGODB_DATABASE",
    "BANK_MAX_CONFLICT_RETRIES",
    "BANK_HTTP_HOST",
    "BANK_HTTP_PORT",
    "BANK_EXCHANGE_API_URL",
)


@pytest.fixture
def clean_env(monkeypatch):
    monkeypatch.setattr(settings_module.dotenv, "load_dotenv", lambda: None)
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    logger = MagicMock()
    monkeypatch.setattr(settings_module, "get_app_logger", lambda: logger)
    return logger


def test_from_env_uses_defaults(clean_env) -> None:
    """Unset variables should yield the default settings."""
    settings = BankSettings.from_env()

    assert settings == BankSettings()
    assert settings.backend == "postgres"
    assert settings.db_url is None
    assert settings.db_pool_size == 5
    assert settings.max_conflict_retries == 5
    assert settings.http_port == 8080


def test_from_env_reads_variables(clean_env, monkeypatch) -> None:
    """Every supported variable should be read from the environment."""
    monkeypatch.setenv("BANK_BACKEND", " MongoDB ")
    monkeypatch.setenv("BANK_DB_URL", "postgresql://db/bank")
    monkeypatch.setenv("BANK_DB_POOL_SIZE", "12")
    monkeypatch.setenv("BANK_DB_MAX_OVERFLOW", "4")
    monkeypatch.setenv("MONGODB_URI", "mongodb://db:27017")
    monkeypatch.setenv("MONGODB_DATABASE", "ledger")
    monkeypatch.setenv("BANK_MAX_CONFLICT_RETRIES", "9")
    monkeypatch.setenv("BANK_HTTP_HOST", "127.0.0.1")
    monkeypatch.setenv("BANK_HTTP_PORT", "9000")
    monkeypatch.setenv("BANK_EXCHANGE_API_URL", "http://rates.local/latest")

    settings = BankSettings.from_env()

    assert settings.backend == "mongodb"
    assert settings.db_url == "postgresql://db/bank"
    assert settings.db_pool_size == 12
    assert settings.db_max_overflow == 4
    assert settings.mongodb_uri == "mongodb://db:27017"
    assert settings.mongodb_database == "ledger"
    assert settings.max_conflict_retries == 9
    assert settings.http_host == "127.0.0.1"
    assert settings.http_port == 9000
    assert settings.exchange_api_url == "http://rates.local/latest"
    clean_env.warning.assert_not_called()


@pytest.mark.parametrize("raw_value", ["many", "-1"])
def test_invalid_integers_fall_back_to_default(
    clean_env,
    monkeypatch,
    raw_value,
) -> None:
    """Invalid integers should fall back to defaults with a warning."""
    monkeypatch.setenv("BANK_MAX_CONFLICT_RETRIES", raw_value)

    settings = BankSettings.from_env()

    assert settings.max_conflict_retries == 5
    clean_env.warning.assert_called_once()


def test_unknown_backend_is_kept_and_warned(clean_env, monkeypatch) -> None:
    """An unknown backend should be kept and logged as a warning."""
    monkeypatch.setenv("BANK_BACKEND", "sqlite")

    settings = BankSettings.from_env()

    assert settings.backend == "sqlite"
    assert "BANK_BACKEND" in clean_env.warning.call_args[0][0]
