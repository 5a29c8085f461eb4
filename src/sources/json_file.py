"""Record source backed by a JSON or YAML file.

Accepted layouts: a top-level list of records, or a mapping holding the list
under ``collection`` (e.g. ``{"candidates": [...]}``).
"""

import asyncio
import json
import logging
from pathlib import Path
from typing import Any

import yaml

from src.sources.base import RecordSource

logger = logging.getLogger(__name__)

_YAML_SUFFIXES = (".yaml", ".yml")


class FileRecordSource(RecordSource):
    def __init__(self, path: str | Path, collection: str) -> None:
        self._path = Path(path)
        self._collection = collection

    @property
    def source_id(self) -> str:
        return str(self._path)

    async def fetch(self) -> list[dict[str, Any]]:
        if not self._path.exists():
            msg = f"Record file not found: {self._path}"
            raise FileNotFoundError(msg)
        text = await asyncio.to_thread(self._path.read_text)
        records = _extract_records(self._parse(text), self._collection)
        logger.info("Loaded %d %s from %s", len(records), self._collection, self._path)
        return records

    def _parse(self, text: str) -> Any:
        if self._path.suffix.lower() in _YAML_SUFFIXES:
            return yaml.safe_load(text)
        return json.loads(text)


def _extract_records(data: Any, collection: str) -> list[dict[str, Any]]:
    if data is None:
        return []
    if isinstance(data, dict):
        data = data.get(collection, [])
    if not isinstance(data, list):
        msg = f"expected a list of {collection}, got {type(data).__name__}"
        raise ValueError(msg)
    records = [r for r in data if isinstance(r, dict)]
    dropped = len(data) - len(records)
    if dropped:
        logger.warning("Ignoring %d non-object entries in %s", dropped, collection)
    return records
