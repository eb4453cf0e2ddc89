# repochat/ingest/__init__.py
"""
Ingestion: file input surface, path filtering and sequential summarization.

Usage:
    from repochat.ingest import FileSetFilter, IngestionPipeline, scan_directory

    files = FileSetFilter().filter(scan_directory("./repo"))
    for event in pipeline.run(session_id, files):
        ...
"""

from repochat.ingest.filter import FileSetFilter
from repochat.ingest.pipeline import (
    IngestionEvent,
    IngestionEventKind,
    IngestionPipeline,
    IngestionReport,
    truncate_content,
)
from repochat.ingest.source import InMemorySourceFile, LocalSourceFile, SourceFile, scan_directory

__all__ = [
    "FileSetFilter",
    "IngestionEvent",
    "IngestionEventKind",
    "IngestionPipeline",
    "IngestionReport",
    "truncate_content",
    "InMemorySourceFile",
    "LocalSourceFile",
    "SourceFile",
    "scan_directory",
]
