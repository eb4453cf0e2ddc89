# repochat/ingest/pipeline.py
"""
Sequential summarization pipeline.

For every file, strictly one at a time:
1. Read content
2. Truncate if oversized
3. Build the summarization prompt and call the completion service
4. Persist the result (success text or failure text) as a FileArtifact
5. Re-read the artifact to verify the write landed
6. Sleep inter_file_delay before the next file

run() is a generator of IngestionEvents. Each event carries the transcript
messages it produces and the current IngestionProgress. The last event of
every file has step_complete=True, which is the caller's cue to persist the
transcript. No single file's failure stops the run.
"""

from __future__ import annotations

import time
from dataclasses import dataclass, field, replace
from datetime import datetime
from enum import Enum
from typing import Callable, Iterator, List, Optional, Sequence, Tuple

from repochat.core.config.schema import IngestSettings
from repochat.core.models import ArtifactStatus, IngestionProgress, Message, utcnow
from repochat.exceptions import FileReadError, PersistenceWriteError
from repochat.ingest.prompts import build_summary_prompt
from repochat.ingest.source import SourceFile
from repochat.llm.base import CompletionService
from repochat.logging.logger import get_logger
from repochat.logging.tags import INGEST
from repochat.storage.artifacts import ArtifactStore

logger = get_logger(__name__)

MAX_CONTENT_CHARS = 700_000
TRUNCATION_MARKER = "\n... (file truncated due to size)"
INTER_FILE_DELAY = 0.2

NO_FILES_STATUS = "No processable files found after filtering (e.g., node_modules, .git excluded)."


class IngestionEventKind(str, Enum):
    NO_FILES = "no_files"
    FILE_STARTED = "file_started"
    FILE_TRUNCATED = "file_truncated"
    FILE_SUMMARIZED = "file_summarized"
    FILE_FAILED = "file_failed"
    VERIFICATION_WARNING = "verification_warning"
    COMPLETED = "completed"


@dataclass
class IngestionReport:
    """Outcome of one ingestion run."""

    session_id: str = ""
    attempted: int = 0
    summarized: int = 0  # completion service returned text
    failed: int = 0  # read, completion or write failure
    truncated: int = 0
    unverified: int = 0
    stored: int = 0  # artifacts found by the final read-back
    error_details: List[str] = field(default_factory=list)
    started_at: datetime = field(default_factory=utcnow)
    finished_at: Optional[datetime] = None

    @property
    def duration_seconds(self) -> float:
        if self.finished_at is None:
            return 0.0
        return (self.finished_at - self.started_at).total_seconds()

    @property
    def consistent(self) -> bool:
        """Every attempted file has an artifact in storage."""
        return self.stored == self.attempted

    def __str__(self) -> str:
        base = (
            f"attempted {self.attempted}, summarized {self.summarized}, "
            f"failed {self.failed}, stored {self.stored}"
        )
        if self.truncated:
            base += f", truncated {self.truncated}"
        if self.unverified:
            base += f", unverified {self.unverified}"
        return base


@dataclass(frozen=True)
class IngestionEvent:
    """One progress step of an ingestion run."""

    kind: IngestionEventKind
    progress: IngestionProgress
    path: Optional[str] = None
    messages: Tuple[Message, ...] = ()
    step_complete: bool = False
    report: Optional[IngestionReport] = None


def truncate_content(
    content: str,
    limit: int = MAX_CONTENT_CHARS,
    marker: str = TRUNCATION_MARKER,
) -> Tuple[str, bool]:
    """Return (content_for_api, was_truncated). At or below limit is untouched."""
    if len(content) <= limit:
        return content, False
    return content[:limit] + marker, True


class IngestionPipeline:
    """
    Summarizes files into an ArtifactStore, one file at a time.

    Usage:
        pipeline = IngestionPipeline(completion=client, store=store)
        for event in pipeline.run("repo-abc", files):
            print(event.progress.status)
    """

    def __init__(
        self,
        *,
        completion: CompletionService,
        store: ArtifactStore,
        max_content_chars: int = MAX_CONTENT_CHARS,
        truncation_marker: str = TRUNCATION_MARKER,
        inter_file_delay: float = INTER_FILE_DELAY,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        self._completion = completion
        self._store = store
        self.max_content_chars = max_content_chars
        self.truncation_marker = truncation_marker
        self.inter_file_delay = inter_file_delay
        self._sleep = sleep

    @classmethod
    def from_settings(
        cls,
        settings: IngestSettings,
        *,
        completion: CompletionService,
        store: ArtifactStore,
    ) -> "IngestionPipeline":
        return cls(
            completion=completion,
            store=store,
            max_content_chars=settings.max_content_chars,
            truncation_marker=settings.truncation_marker,
            inter_file_delay=settings.inter_file_delay,
        )

    def run(self, session_id: str, files: Sequence[SourceFile]) -> Iterator[IngestionEvent]:
        """
        Summarize every file and yield progress events.

        Args:
            session_id: Session that scopes the artifacts.
            files: Already filtered files, processed in the given order.

        Yields:
            IngestionEvent, ending with COMPLETED (or a lone NO_FILES).
        """
        total = len(files)
        report = IngestionReport(session_id=session_id)

        if total == 0:
            logger.info(f"{INGEST} Nothing to ingest for {session_id}")
            report.finished_at = utcnow()
            yield IngestionEvent(
                kind=IngestionEventKind.NO_FILES,
                progress=IngestionProgress(0, 0, NO_FILES_STATUS),
                messages=(Message.system("No processable files found after filtering."),),
                step_complete=True,
                report=report,
            )
            return

        logger.info(f"{INGEST} Ingesting {total} files into {session_id}")

        for index, source in enumerate(files, start=1):
            path = source.path
            progress = IngestionProgress(index, total, f"Processing file {index}/{total}: {path}")
            report.attempted += 1

            yield IngestionEvent(
                kind=IngestionEventKind.FILE_STARTED,
                progress=progress,
                path=path,
                messages=(Message.system(f"Analyzing: {path}"),),
            )

            events = self._process_file(session_id, source, progress, report)
            for position, event in enumerate(events):
                if position == len(events) - 1:
                    event = replace(event, step_complete=True)
                yield event

            if index < total and self.inter_file_delay > 0:
                self._sleep(self.inter_file_delay)

        yield self._finish(session_id, total, report)

    def _process_file(
        self,
        session_id: str,
        source: SourceFile,
        progress: IngestionProgress,
        report: IngestionReport,
    ) -> List[IngestionEvent]:
        path = source.path
        events: List[IngestionEvent] = []

        def failed(reason: str) -> List[IngestionEvent]:
            report.failed += 1
            report.error_details.append(f"{path}: {reason}")
            logger.warning(f"{INGEST} Error processing {path}: {reason}")
            events.append(
                IngestionEvent(
                    kind=IngestionEventKind.FILE_FAILED,
                    progress=progress,
                    path=path,
                    messages=(Message.system(f"Error processing {path}: {reason}"),),
                )
            )
            return events

        try:
            content = source.read()
        except FileReadError as e:
            return failed(e.reason)

        content, truncated = truncate_content(content, self.max_content_chars, self.truncation_marker)
        if truncated:
            report.truncated += 1
            logger.info(f"{INGEST} Truncated {path} to {self.max_content_chars} chars")
            events.append(
                IngestionEvent(
                    kind=IngestionEventKind.FILE_TRUNCATED,
                    progress=progress,
                    path=path,
                    messages=(
                        Message.system(f"File {path} was truncated for API analysis due to its size."),
                    ),
                )
            )

        result = self._completion.complete(build_summary_prompt(path, content))
        summary = result.display_text
        if result.ok:
            report.summarized += 1
        else:
            report.error_details.append(f"{path}: {summary}")

        events.append(
            IngestionEvent(
                kind=IngestionEventKind.FILE_SUMMARIZED,
                progress=progress,
                path=path,
                messages=(Message.ai(f"Summary for {path}:\n{summary}"),),
            )
        )

        status = ArtifactStatus.OK if result.ok else ArtifactStatus.FAILED
        try:
            self._store.put_summary(session_id, path, summary, status=status)
        except PersistenceWriteError as e:
            return failed(str(e))

        if not result.ok:
            report.failed += 1

        if self._store.get_summary(session_id, path) is None:
            report.unverified += 1
            logger.warning(f"{INGEST} Summary not found after saving for {path}")
            events.append(
                IngestionEvent(
                    kind=IngestionEventKind.VERIFICATION_WARNING,
                    progress=progress,
                    path=path,
                    messages=(
                        Message.system(f"Warning: Summary for {path} could not be verified in storage."),
                    ),
                )
            )

        return events

    def _finish(self, session_id: str, total: int, report: IngestionReport) -> IngestionEvent:
        report.stored = len(self._store.get_all_summaries(session_id))
        report.finished_at = utcnow()

        if not report.consistent:
            logger.warning(
                f"{INGEST} Attempted {report.attempted} files but found {report.stored} artifacts"
            )
        logger.info(f"{INGEST} Ingestion complete: {report}")

        return IngestionEvent(
            kind=IngestionEventKind.COMPLETED,
            progress=IngestionProgress(total, total, f"Processed {total} files. Ready to query!"),
            messages=(
                Message.system(f"Processed {total} files. Found {report.stored} summaries in storage."),
                Message.ai(f"All {total} files processed. You can now ask questions about the codebase."),
            ),
            step_complete=True,
            report=report,
        )


__all__ = [
    "IngestionPipeline",
    "IngestionEvent",
    "IngestionEventKind",
    "IngestionReport",
    "truncate_content",
    "MAX_CONTENT_CHARS",
    "TRUNCATION_MARKER",
    "INTER_FILE_DELAY",
]
