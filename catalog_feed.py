"""WG21 paper index ingestion helpers."""

from __future__ import annotations

import logging
from typing import Any

import requests

from models import Paper

# Public index maintained by wg21.link; one JSON object keyed by paper name.
DEFAULT_CATALOG_URL = "https://wg21.link/index.json"
REQUEST_TIMEOUT_SECONDS = 30

LOGGER = logging.getLogger(__name__)


class CatalogFetchError(RuntimeError):
    """The catalog source could not be reached or answered with an error status."""


class CatalogParseError(RuntimeError):
    """The catalog body was not a JSON object of paper entries."""


def fetch_catalog(url: str = DEFAULT_CATALOG_URL, timeout: float = REQUEST_TIMEOUT_SECONDS) -> dict[str, Paper]:
    """Download and parse the paper index.

    Args:
        url: Address of the JSON index.
        timeout: Per-request timeout in seconds.

    Raises:
        CatalogFetchError: on connection failures, timeouts and non-2xx answers.
        CatalogParseError: when the body is not JSON or not a JSON object.
    """
    try:
        response = requests.get(url, timeout=timeout)
        response.raise_for_status()
    except requests.RequestException as exc:
        raise CatalogFetchError(f"Catalog fetch failed for {url}: {exc}") from exc

    try:
        payload = response.json()
    except ValueError as exc:
        raise CatalogParseError(f"Catalog body from {url} is not valid JSON: {exc}") from exc

    catalog = _parse_catalog_payload(payload)
    LOGGER.debug("Catalog fetch: url=%s entries=%s", url, len(catalog))
    return catalog


def _parse_catalog_payload(payload: Any) -> dict[str, Paper]:
    """Parse the index payload into Paper objects keyed by name."""
    if not isinstance(payload, dict):
        raise CatalogParseError("Unexpected catalog payload shape: expected a JSON object")

    parsed: dict[str, Paper] = {}
    skipped = 0
    for name, item in payload.items():
        if not isinstance(item, dict):
            skipped += 1
            continue

        parsed[name] = Paper(
            name=name,
            type=_as_str(item.get("type")),
            title=_as_str(item.get("title")),
            author=_as_str(item.get("author")),
            link=_as_str(item.get("link")),
        )

    if skipped:
        LOGGER.debug("Catalog parse: skipped %s non-object entries", skipped)
    return parsed


def _as_str(value: Any) -> str | None:
    return value if isinstance(value, str) else None
