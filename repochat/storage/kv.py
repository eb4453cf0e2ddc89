# repochat/storage/kv.py
"""
Key-value storage engines.

ArtifactStore is written against the KeyValueStore protocol and never
against a concrete engine. Engines raise PersistenceReadError /
PersistenceWriteError; deciding whether to swallow them is the store's job.

Persisted JSON layout (JsonFileKeyValueStore):

    {
      "layout_version": 1,
      "collections": {
        "summaries":   {"<session_id>::<path>": {...}},
        "transcripts": {"<chat_id>": {...}},
        "sessions":    {"<session_id>": {...}}
      }
    }
"""

from __future__ import annotations

import copy
import json
import os
import tempfile
import threading
from pathlib import Path
from typing import Any, Dict, List, Optional, Protocol, runtime_checkable

from repochat.exceptions import PersistenceReadError, PersistenceWriteError
from repochat.logging.logger import get_logger
from repochat.logging.tags import STORAGE

logger = get_logger(__name__)

LAYOUT_VERSION = 1

Record = Dict[str, Any]


@runtime_checkable
class KeyValueStore(Protocol):
    """Protocol for the underlying storage engine."""

    def get(self, collection: str, key: str) -> Optional[Record]:
        """Return the record or None if absent."""
        ...

    def put(self, collection: str, key: str, record: Record) -> None:
        """Insert or replace a record."""
        ...

    def get_all(self, collection: str) -> List[Record]:
        """Return every record in a collection, in insertion order."""
        ...


class InMemoryKeyValueStore:
    """Process-local engine. Durable for the lifetime of the process only."""

    def __init__(self) -> None:
        self._data: Dict[str, Dict[str, Record]] = {}
        self._lock = threading.Lock()

    def get(self, collection: str, key: str) -> Optional[Record]:
        with self._lock:
            record = self._data.get(collection, {}).get(key)
            return copy.deepcopy(record) if record is not None else None

    def put(self, collection: str, key: str, record: Record) -> None:
        with self._lock:
            self._data.setdefault(collection, {})[key] = copy.deepcopy(record)

    def get_all(self, collection: str) -> List[Record]:
        with self._lock:
            return [copy.deepcopy(r) for r in self._data.get(collection, {}).values()]

    def __len__(self) -> int:
        return sum(len(c) for c in self._data.values())


class JsonFileKeyValueStore(InMemoryKeyValueStore):
    """
    Engine backed by a single JSON document.

    The file is read once on construction and rewritten after every put
    (temp file + os.replace, so a crash never leaves a half-written file).

    Raises:
        PersistenceReadError: on construction, if the file exists but is not
            a readable layout_version 1 document
    """

    def __init__(self, path: str | Path) -> None:
        super().__init__()
        self.path = Path(path)
        self._load()

    def _load(self) -> None:
        if not self.path.exists():
            logger.debug(f"{STORAGE} No store at {self.path}, starting empty")
            return

        try:
            with self.path.open("r", encoding="utf-8") as f:
                doc = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            raise PersistenceReadError(f"Cannot read store {self.path}: {e}") from e

        if not isinstance(doc, dict):
            raise PersistenceReadError(f"Store {self.path} is not a JSON object")

        version = doc.get("layout_version")
        if version != LAYOUT_VERSION:
            raise PersistenceReadError(
                f"Unsupported store layout_version {version!r} in {self.path} "
                f"(expected {LAYOUT_VERSION})"
            )

        collections = doc.get("collections") or {}
        if not isinstance(collections, dict) or not all(
            isinstance(records, dict) for records in collections.values()
        ):
            raise PersistenceReadError(
                f"Store {self.path} has malformed collections (expected an object of objects)"
            )
        self._data = {name: dict(records) for name, records in collections.items()}
        logger.info(f"{STORAGE} Loaded {len(self)} records from {self.path}")

    def _flush(self) -> None:
        doc = {"layout_version": LAYOUT_VERSION, "collections": self._data}
        self.path.parent.mkdir(parents=True, exist_ok=True)

        fd, tmp_name = tempfile.mkstemp(
            prefix=f".{self.path.name}.", suffix=".tmp", dir=self.path.parent
        )
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(doc, f, ensure_ascii=False)
            os.replace(tmp_name, self.path)
        except BaseException:
            if os.path.exists(tmp_name):
                os.unlink(tmp_name)
            raise

    def put(self, collection: str, key: str, record: Record) -> None:
        with self._lock:
            bucket = self._data.setdefault(collection, {})
            previous = bucket.get(key)
            bucket[key] = copy.deepcopy(record)
            try:
                self._flush()
            except (OSError, TypeError, ValueError) as e:
                # keep memory consistent with disk
                if previous is None:
                    bucket.pop(key, None)
                else:
                    bucket[key] = previous
                raise PersistenceWriteError(f"Cannot write store {self.path}: {e}") from e


def open_store(backend: str, path: str | Path | None = None) -> KeyValueStore:
    """Open the engine named in config (storage.backend)."""
    if backend == "memory":
        return InMemoryKeyValueStore()
    if backend == "json":
        if path is None:
            raise ValueError("json storage backend requires a path")
        return JsonFileKeyValueStore(path)
    raise ValueError(f"Unknown storage backend: {backend!r}. Must be one of: ['json', 'memory']")


__all__ = [
    "LAYOUT_VERSION",
    "KeyValueStore",
    "InMemoryKeyValueStore",
    "JsonFileKeyValueStore",
    "open_store",
]
