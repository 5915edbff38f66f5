"""
File persistence: one JSON file per key under a storage directory.

Writes go to a temporary sibling and are renamed into place, so a reader never
sees a half-written document.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path

from coinfolio_core.persistence.base import Persistence
from coinfolio_core.persistence.memory import DEFAULT_KEY

logger = logging.getLogger(__name__)


class FilePersistence(Persistence):
    """Stores the document at <directory>/<key>.json. Directory is created on first write."""

    def __init__(self, directory: str | Path, key: str = DEFAULT_KEY) -> None:
        self.directory = Path(directory).expanduser()
        self.key = key

    @property
    def path(self) -> Path:
        return self.directory / f"{self.key}.json"

    def read(self) -> str | None:
        try:
            return self.path.read_text(encoding="utf-8")
        except FileNotFoundError:
            logger.debug("No portfolio document at %s", self.path)
            return None

    def write(self, doc: str) -> None:
        self.directory.mkdir(parents=True, exist_ok=True)
        tmp = self.path.with_name(self.path.name + ".tmp")
        tmp.write_text(doc, encoding="utf-8")
        os.replace(tmp, self.path)
        logger.debug("Wrote portfolio document to %s (%d bytes)", self.path, len(doc))
