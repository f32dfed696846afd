"""Background refresh of the paper catalog."""

from __future__ import annotations

import logging
import threading

from catalog_feed import (
    DEFAULT_CATALOG_URL,
    REQUEST_TIMEOUT_SECONDS,
    CatalogFetchError,
    CatalogParseError,
    fetch_catalog,
)
from catalog_store import CatalogStore

DEFAULT_REFRESH_INTERVAL_SECONDS = 600.0

LOGGER = logging.getLogger(__name__)


class CatalogRefresher:
    """Keeps a CatalogStore up to date with the remote paper index.

    A failed refresh leaves the previous catalog in place; the next tick is
    attempted regardless of how the last one ended.
    """

    def __init__(
        self,
        store: CatalogStore,
        url: str = DEFAULT_CATALOG_URL,
        interval: float = DEFAULT_REFRESH_INTERVAL_SECONDS,
        timeout: float = REQUEST_TIMEOUT_SECONDS,
    ) -> None:
        self.store = store
        self.url = url
        self.interval = interval
        self.timeout = timeout
        self._stop = threading.Event()
        self._thread: threading.Thread | None = None

    def refresh_once(self) -> bool:
        """Fetch the catalog and swap it into the store. Returns True on success."""
        try:
            catalog = fetch_catalog(self.url, timeout=self.timeout)
        except (CatalogFetchError, CatalogParseError) as exc:
            LOGGER.warning(
                "Catalog refresh failed, keeping %s cached entries: %s", len(self.store), exc
            )
            return False

        self.store.replace(catalog)
        LOGGER.info("Catalog refresh succeeded. Catalog size: %s", len(catalog))
        return True

    def start(self) -> None:
        """Load the catalog once in the caller's thread, then refresh in the background."""
        if self._thread is not None:
            raise RuntimeError("Catalog refresher is already running")

        self._refresh_logged()
        self._thread = threading.Thread(target=self._run, name="catalog-refresher", daemon=True)
        self._thread.start()
        LOGGER.info("Catalog refresher started: url=%s interval=%ss", self.url, self.interval)

    def stop(self, timeout: float | None = None) -> None:
        self._stop.set()
        if self._thread is not None:
            self._thread.join(timeout)

    def _run(self) -> None:
        while not self._stop.wait(self.interval):
            self._refresh_logged()

    def _refresh_logged(self) -> None:
        try:
            self.refresh_once()
        except Exception:  # broad so that one bad tick never ends the loop
            LOGGER.exception("Unexpected error during catalog refresh")
