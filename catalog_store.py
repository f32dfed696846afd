"""In-memory holder for the current paper catalog."""

from __future__ import annotations

import threading
from collections.abc import Mapping
from types import MappingProxyType

from models import Paper


class CatalogStore:
    """Owns the catalog snapshot shared by the refresher and the handlers.

    The snapshot is never mutated: ``replace`` builds a new read-only mapping
    and swaps the reference under the lock, so a reader holding a snapshot
    keeps a consistent view for as long as it needs it.
    """

    def __init__(self, catalog: Mapping[str, Paper] | None = None) -> None:
        self._lock = threading.Lock()
        self._snapshot: Mapping[str, Paper] = MappingProxyType(dict(catalog or {}))

    def read(self) -> Mapping[str, Paper]:
        with self._lock:
            return self._snapshot

    def replace(self, catalog: Mapping[str, Paper]) -> None:
        # Copy outside the lock; only the reference swap is exclusive.
        snapshot = MappingProxyType(dict(catalog))
        with self._lock:
            self._snapshot = snapshot

    def __len__(self) -> int:
        return len(self.read())
