# repochat/storage/__init__.py
"""Artifact storage: session-scoped records over a pluggable key-value engine."""

from repochat.storage.artifacts import ArtifactStore, summary_key
from repochat.storage.kv import (
    InMemoryKeyValueStore,
    JsonFileKeyValueStore,
    KeyValueStore,
    open_store,
)

__all__ = [
    "ArtifactStore",
    "summary_key",
    "KeyValueStore",
    "InMemoryKeyValueStore",
    "JsonFileKeyValueStore",
    "open_store",
]
