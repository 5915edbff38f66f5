"""
In-memory persistence: a dict of key -> document, like browser local storage.

Several adapters may share one storage dict; each reads and writes only its key.
"""

from __future__ import annotations

from coinfolio_core.persistence.base import Persistence

DEFAULT_KEY = "cryptoPortfolio"


class InMemoryPersistence(Persistence):
    """Keeps documents in a plain dict. Pass storage to share it between adapters."""

    def __init__(
        self,
        key: str = DEFAULT_KEY,
        *,
        storage: dict[str, str] | None = None,
        initial: str | None = None,
    ) -> None:
        self.key = key
        self._storage: dict[str, str] = storage if storage is not None else {}
        if initial is not None:
            self._storage[key] = initial

    def read(self) -> str | None:
        return self._storage.get(self.key)

    def write(self, doc: str) -> None:
        self._storage[self.key] = doc

    def clear(self) -> None:
        """Drop the document for this key (e.g. user cleared storage)."""
        self._storage.pop(self.key, None)
