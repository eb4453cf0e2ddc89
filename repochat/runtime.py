# repochat/runtime.py
"""
Runtime wiring.

Opens the artifact store once, builds the completion client, pipeline,
router and session manager from one validated config, and hands them out
by reference. Nothing here is a module-level singleton.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from repochat.core.config import RepoChatConfig, load_config
from repochat.exceptions import PersistenceError
from repochat.ingest.filter import FileSetFilter
from repochat.ingest.pipeline import IngestionPipeline
from repochat.llm.base import CompletionService
from repochat.llm.registry import get_completion_service
from repochat.logging.logger import get_logger
from repochat.logging.tags import STORAGE
from repochat.query.router import QueryRouter
from repochat.session.manager import SessionManager
from repochat.storage.artifacts import ArtifactStore
from repochat.storage.kv import open_store

logger = get_logger(__name__)


@dataclass
class Runtime:
    """Everything a CLI command or API request needs."""

    config: RepoChatConfig
    store: ArtifactStore
    completion: CompletionService
    pipeline: IngestionPipeline
    router: QueryRouter
    manager: SessionManager


def open_artifact_store(config: RepoChatConfig) -> ArtifactStore:
    """
    Open the configured engine.

    An engine that cannot be opened yields a degraded store: processing
    continues, nothing persists.
    """
    try:
        engine = open_store(config.storage.backend, config.storage.path)
    except (PersistenceError, OSError) as e:
        return ArtifactStore.unavailable(str(e))
    logger.debug(f"{STORAGE} Opened {config.storage.backend} store at {config.storage.path}")
    return ArtifactStore(engine)


def build_runtime(
    config: Optional[RepoChatConfig] = None,
    *,
    config_path: Optional[Path] = None,
    completion: Optional[CompletionService] = None,
    store: Optional[ArtifactStore] = None,
) -> Runtime:
    """
    Assemble a Runtime.

    Args:
        config: Validated config; loaded from config_path / defaults if None.
        config_path: User config file to merge over the defaults.
        completion: Override the configured completion service (tests).
        store: Override the configured artifact store (tests).
    """
    config = config or load_config(config_path)
    store = store or open_artifact_store(config)
    completion = completion or get_completion_service(config.llm)

    pipeline = IngestionPipeline.from_settings(config.ingest, completion=completion, store=store)
    router = QueryRouter.from_settings(config.query, completion=completion, store=store)
    manager = SessionManager(
        store=store,
        pipeline=pipeline,
        router=router,
        file_filter=FileSetFilter(
            exclude_segments=config.ingest.exclude_segments,
            exclude_suffixes=config.ingest.exclude_suffixes,
        ),
    )

    return Runtime(
        config=config,
        store=store,
        completion=completion,
        pipeline=pipeline,
        router=router,
        manager=manager,
    )
