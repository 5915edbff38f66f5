"""
Persistence abstraction layer.

Persistence ABC: read, write. One string-keyed slot holding a single document;
read-modify-write, no transactions. In-memory and file adapters implement it.
"""

from __future__ import annotations

from abc import ABC, abstractmethod


class Persistence(ABC):
    """
    Abstract key-value slot for the portfolio document.
    Implementations: InMemoryPersistence, FilePersistence.
    """

    @abstractmethod
    def read(self) -> str | None:
        """Return the stored document, or None if nothing has been written yet."""
        ...

    @abstractmethod
    def write(self, doc: str) -> None:
        """Overwrite the stored document wholesale."""
        ...
