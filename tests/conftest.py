# tests/conftest.py
"""Shared fakes and fixtures."""

from __future__ import annotations

from typing import Dict, List, Optional, Set

import pytest

from repochat.exceptions import PersistenceReadError, PersistenceWriteError
from repochat.ingest.pipeline import IngestionPipeline
from repochat.llm.base import CompletionResult
from repochat.query.router import QueryRouter
from repochat.session.manager import SessionManager
from repochat.storage.artifacts import ArtifactStore
from repochat.storage.kv import InMemoryKeyValueStore


class MockCompletionService:
    """Returns canned results; records every prompt it sees."""

    def __init__(self, default: Optional[CompletionResult] = None):
        self.prompts: List[str] = []
        self._default = default or CompletionResult.success("A short summary.")
        self._by_marker: Dict[str, CompletionResult] = {}

    def respond_to(self, marker: str, result: CompletionResult) -> None:
        """Return result for any prompt containing marker."""
        self._by_marker[marker] = result

    def complete(self, prompt: str) -> CompletionResult:
        self.prompts.append(prompt)
        for marker, result in self._by_marker.items():
            if marker in prompt:
                return result
        return self._default


class FlakyEngine(InMemoryKeyValueStore):
    """In-memory engine that can be told to fail reads or writes."""

    def __init__(self):
        super().__init__()
        self.fail_put_keys: Set[str] = set()
        self.fail_put_collections: Set[str] = set()
        self.fail_reads = False
        self.drop_keys: Set[str] = set()

    def put(self, collection, key, record):
        if key in self.fail_put_keys or collection in self.fail_put_collections:
            raise PersistenceWriteError(f"disk full writing {key}")
        if key in self.drop_keys:
            return
        super().put(collection, key, record)

    def get(self, collection, key):
        if self.fail_reads:
            raise PersistenceReadError("engine offline")
        return super().get(collection, key)

    def get_all(self, collection):
        if self.fail_reads:
            raise PersistenceReadError("engine offline")
        return super().get_all(collection)


class SleepRecorder:
    def __init__(self):
        self.calls: List[float] = []

    def __call__(self, seconds: float) -> None:
        self.calls.append(seconds)


@pytest.fixture
def completion() -> MockCompletionService:
    return MockCompletionService()


@pytest.fixture
def engine() -> FlakyEngine:
    return FlakyEngine()


@pytest.fixture
def store(engine) -> ArtifactStore:
    return ArtifactStore(engine)


@pytest.fixture
def sleeper() -> SleepRecorder:
    return SleepRecorder()


@pytest.fixture
def pipeline(completion, store, sleeper) -> IngestionPipeline:
    return IngestionPipeline(completion=completion, store=store, sleep=sleeper)


@pytest.fixture
def router(completion, store) -> QueryRouter:
    return QueryRouter(completion=completion, store=store)


@pytest.fixture
def manager(store, pipeline, router) -> SessionManager:
    return SessionManager(store=store, pipeline=pipeline, router=router)
