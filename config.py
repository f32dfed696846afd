"""Runtime settings read from the environment once at startup."""

from __future__ import annotations

import math
import os
from collections.abc import Mapping
from dataclasses import dataclass

from catalog_feed import DEFAULT_CATALOG_URL, REQUEST_TIMEOUT_SECONDS
from formatter import TELEGRAM_MAX_MESSAGE_LENGTH
from refresher import DEFAULT_REFRESH_INTERVAL_SECONDS

DEFAULT_MAX_RESULTS = 20
DEFAULT_MAX_MESSAGE_LENGTH = 2500


@dataclass(frozen=True, slots=True)
class Settings:
    """Values fixed for the lifetime of the process."""

    token: str
    max_results: int = DEFAULT_MAX_RESULTS
    max_message_length: int = DEFAULT_MAX_MESSAGE_LENGTH
    catalog_url: str = DEFAULT_CATALOG_URL
    refresh_interval: float = DEFAULT_REFRESH_INTERVAL_SECONDS
    request_timeout: float = REQUEST_TIMEOUT_SECONDS
    webhook_url: str | None = None
    bind_address: str = "0.0.0.0"
    bind_port: int = 8080
    log_level: str = "INFO"


def load_settings(
    overrides: Mapping[str, object] | None = None,
    environ: Mapping[str, str] | None = None,
) -> Settings:
    """Build Settings from environment variables, then apply non-None overrides.

    Raises:
        RuntimeError: when the bot token is missing or a value is out of range.
    """
    env = os.environ if environ is None else environ
    overrides = {key: value for key, value in (overrides or {}).items() if value is not None}

    values: dict[str, object] = {
        "token": env.get("TELEGRAM_BOT_TOKEN", "").strip(),
        "max_results": _env_int(env, "MAX_RESULTS_PER_REQUEST", DEFAULT_MAX_RESULTS),
        "max_message_length": _env_int(env, "MAX_MESSAGE_LENGTH", DEFAULT_MAX_MESSAGE_LENGTH),
        "catalog_url": env.get("PAPERS_DATABASE_URI") or DEFAULT_CATALOG_URL,
        "refresh_interval": _env_float(
            env, "CATALOG_REFRESH_INTERVAL_SECONDS", DEFAULT_REFRESH_INTERVAL_SECONDS
        ),
        "request_timeout": _env_float(env, "CATALOG_REQUEST_TIMEOUT_SECONDS", REQUEST_TIMEOUT_SECONDS),
        "webhook_url": env.get("WEBHOOK_URL") or None,
        "bind_address": env.get("BIND_ADDRESS") or "0.0.0.0",
        "bind_port": _env_int(env, "BIND_PORT", 8080),
        "log_level": (env.get("LOG_LEVEL") or "INFO").upper(),
    }
    values.update(overrides)
    settings = Settings(**values)

    if not settings.token:
        raise RuntimeError("TELEGRAM_BOT_TOKEN environment variable (or --token) is required")
    if settings.max_results < 1:
        raise RuntimeError("MAX_RESULTS_PER_REQUEST must be at least 1")
    if not 1 <= settings.max_message_length <= TELEGRAM_MAX_MESSAGE_LENGTH:
        raise RuntimeError(
            f"MAX_MESSAGE_LENGTH must be between 1 and {TELEGRAM_MAX_MESSAGE_LENGTH}"
        )
    if not _positive_finite(settings.refresh_interval):
        raise RuntimeError("CATALOG_REFRESH_INTERVAL_SECONDS must be a positive finite number")
    if not _positive_finite(settings.request_timeout):
        raise RuntimeError("CATALOG_REQUEST_TIMEOUT_SECONDS must be a positive finite number")
    if not 1 <= settings.bind_port <= 65535:
        raise RuntimeError("BIND_PORT must be between 1 and 65535")
    return settings


def _positive_finite(value: float) -> bool:
    return math.isfinite(value) and value > 0


def _env_int(env: Mapping[str, str], name: str, default: int) -> int:
    raw = env.get(name)
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError as exc:
        raise RuntimeError(f"{name} must be an integer, got {raw!r}") from exc


def _env_float(env: Mapping[str, str], name: str, default: float) -> float:
    raw = env.get(name)
    if not raw:
        return default
    try:
        return float(raw)
    except ValueError as exc:
        raise RuntimeError(f"{name} must be a number, got {raw!r}") from exc
