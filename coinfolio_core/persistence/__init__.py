"""
Persistence layer: the single-slot document store behind PortfolioStore.

Persistence interface; in-memory adapter (tests, embedding); file adapter (CLI/desktop use).
"""

from coinfolio_core.persistence.base import Persistence
from coinfolio_core.persistence.file import FilePersistence
from coinfolio_core.persistence.memory import DEFAULT_KEY, InMemoryPersistence

__all__ = [
    "DEFAULT_KEY",
    "Persistence",
    "InMemoryPersistence",
    "FilePersistence",
]
