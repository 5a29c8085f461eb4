"""Abstract base class for record sources.

A source is the fetch boundary: it hands the engine an already-materialised
list of raw records. It is awaited in full before any scoring starts.
"""

from abc import ABC, abstractmethod
from typing import Any


class RecordSource(ABC):
    """Base class that every record source must implement."""

    @property
    @abstractmethod
    def source_id(self) -> str:
        """Identifier for this source (e.g. a file path)."""

    @abstractmethod
    async def fetch(self) -> list[dict[str, Any]]:
        """Return raw (unvalidated, unscored) records."""
