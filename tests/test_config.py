import pytest

from catalog_feed import DEFAULT_CATALOG_URL
from config import load_settings


def test_defaults_with_only_token() -> None:
    settings = load_settings(environ={"TELEGRAM_BOT_TOKEN": "123:abc"})
    assert settings.token == "123:abc"
    assert settings.max_results == 20
    assert settings.max_message_length == 2500
    assert settings.catalog_url == DEFAULT_CATALOG_URL
    assert settings.refresh_interval == 600
    assert settings.webhook_url is None
    assert settings.log_level == "INFO"


def test_environment_values() -> None:
    settings = load_settings(environ={
        "TELEGRAM_BOT_TOKEN": "123:abc",
        "MAX_RESULTS_PER_REQUEST": "5",
        "MAX_MESSAGE_LENGTH": "4096",
        "PAPERS_DATABASE_URI": "https://example.com/index.json",
        "CATALOG_REFRESH_INTERVAL_SECONDS": "60",
        "WEBHOOK_URL": "https://bot.example.com",
        "BIND_PORT": "9000",
        "LOG_LEVEL": "debug",
    })
    assert settings.max_results == 5
    assert settings.max_message_length == 4096
    assert settings.catalog_url == "https://example.com/index.json"
    assert settings.refresh_interval == 60.0
    assert settings.webhook_url == "https://bot.example.com"
    assert settings.bind_port == 9000
    assert settings.log_level == "DEBUG"


def test_overrides_win_and_none_is_ignored() -> None:
    settings = load_settings(
        overrides={"token": "999:zzz", "max_results": 3, "catalog_url": None},
        environ={"TELEGRAM_BOT_TOKEN": "123:abc", "PAPERS_DATABASE_URI": "https://example.com/i.json"},
    )
    assert settings.token == "999:zzz"
    assert settings.max_results == 3
    assert settings.catalog_url == "https://example.com/i.json"


def test_missing_token_fails_fast() -> None:
    with pytest.raises(RuntimeError, match="TELEGRAM_BOT_TOKEN"):
        load_settings(environ={})


@pytest.mark.parametrize("env", [
    {"MAX_RESULTS_PER_REQUEST": "many"},
    {"MAX_RESULTS_PER_REQUEST": "0"},
    {"MAX_MESSAGE_LENGTH": "5000"},
    {"MAX_MESSAGE_LENGTH": "0"},
    {"CATALOG_REFRESH_INTERVAL_SECONDS": "-1"},
    {"CATALOG_REFRESH_INTERVAL_SECONDS": "soon"},
    {"CATALOG_REFRESH_INTERVAL_SECONDS": "nan"},
    {"CATALOG_REFRESH_INTERVAL_SECONDS": "inf"},
    {"CATALOG_REQUEST_TIMEOUT_SECONDS": "0"},
    {"CATALOG_REQUEST_TIMEOUT_SECONDS": "-5"},
    {"CATALOG_REQUEST_TIMEOUT_SECONDS": "nan"},
    {"BIND_PORT": "0"},
    {"BIND_PORT": "70000"},
])
def test_invalid_values_fail_fast(env: dict[str, str]) -> None:
    with pytest.raises(RuntimeError):
        load_settings(environ={"TELEGRAM_BOT_TOKEN": "123:abc", **env})


@pytest.mark.parametrize("name,value", [
    ("CATALOG_REFRESH_INTERVAL_SECONDS", "nan"),
    ("CATALOG_REQUEST_TIMEOUT_SECONDS", "0"),
    ("BIND_PORT", "70000"),
])
def test_invalid_value_error_names_variable(name: str, value: str) -> None:
    with pytest.raises(RuntimeError, match=name):
        load_settings(environ={"TELEGRAM_BOT_TOKEN": "123:abc", name: value})


def test_non_finite_override_is_rejected() -> None:
    with pytest.raises(RuntimeError, match="CATALOG_REFRESH_INTERVAL_SECONDS"):
        load_settings(overrides={"refresh_interval": float("nan")}, environ={"TELEGRAM_BOT_TOKEN": "123:abc"})
