# repochat/session/manager.py
"""
SessionManager - owns the active session, its in-memory transcript and the
user-facing status string.

It mints identifiers at the start of every ingestion run, appends the
messages produced by ingestion and query steps in issue order, and persists
the transcript after each logically complete step (one file, one query
exchange). A crash loses at most the step in flight.

One lock guards the manager: an ingestion run or a query holds it, and a
second ingestion or a query issued mid-ingestion raises SessionBusyError
instead of waiting. A query naming another session switches to it inside
the same lock hold.
"""

from __future__ import annotations

import threading
from dataclasses import replace
from typing import Callable, Iterable, List, Optional

from repochat.core.models import (
    AnswerStatus,
    FileArtifact,
    Message,
    QueryAnswer,
    RepositorySession,
)
from repochat.exceptions import PersistenceWriteError, SessionBusyError, SessionNotFoundError
from repochat.ingest.filter import FileSetFilter
from repochat.ingest.pipeline import IngestionEvent, IngestionPipeline, IngestionReport
from repochat.ingest.source import SourceFile
from repochat.logging.logger import get_logger
from repochat.logging.tags import SESSION
from repochat.query.context import ENTRY_DELIMITER, render_entry
from repochat.query.router import QueryRouter
from repochat.session.ids import IdFactory, new_ids
from repochat.storage.artifacts import ArtifactStore

logger = get_logger(__name__)

GREETING = "Hello! Select a repository to begin analysis."
INITIAL_STATUS = "Please select a repository to begin."
READY_STATUS = "Ready to query!"
THINKING_STATUS = "AI is thinking..."


class SessionManager:
    """
    Coordinates ingestion runs and queries for one user.

    Usage:
        manager = SessionManager(store=store, pipeline=pipeline, router=router)
        report = manager.ingest(scan_directory("./repo"), root="./repo")
        answer = manager.ask("How many files are in this repo?")
        for message in manager.messages:
            print(message.sender.value, message.text)
    """

    def __init__(
        self,
        *,
        store: ArtifactStore,
        pipeline: IngestionPipeline,
        router: QueryRouter,
        file_filter: Optional[FileSetFilter] = None,
        id_factory: IdFactory = new_ids,
    ) -> None:
        self._store = store
        self._pipeline = pipeline
        self._router = router
        self._filter = file_filter or FileSetFilter()
        self._id_factory = id_factory

        self._lock = threading.Lock()
        self._session: Optional[RepositorySession] = None
        self._messages: List[Message] = [Message.ai(GREETING)]
        self._status = INITIAL_STATUS
        self._transcript_write_failed = False

    # -------------------------------------------------------------------------
    # State
    # -------------------------------------------------------------------------

    @property
    def session(self) -> Optional[RepositorySession]:
        return self._session

    @property
    def messages(self) -> List[Message]:
        """Snapshot of the transcript, in insertion order."""
        return list(self._messages)

    @property
    def status(self) -> str:
        return self._status

    @property
    def busy(self) -> bool:
        return self._lock.locked()

    def _append(self, message: Message) -> None:
        self._messages.append(message)

    def _persist_transcript(self) -> None:
        if self._session is None:
            return
        try:
            self._store.put_transcript(self._session.chat_id, self._messages)
        except PersistenceWriteError as e:
            logger.warning(f"{SESSION} Could not save transcript {self._session.chat_id}: {e}")
            if not self._transcript_write_failed:
                self._transcript_write_failed = True
                self._append(Message.system(f"Warning: chat history could not be saved: {e}"))

    def _acquire(self, action: str) -> None:
        if not self._lock.acquire(blocking=False):
            raise SessionBusyError(f"Cannot {action} while a repository is being processed")

    # -------------------------------------------------------------------------
    # Ingestion
    # -------------------------------------------------------------------------

    def ingest(
        self,
        files: Iterable[SourceFile],
        *,
        root: str = "",
        on_event: Optional[Callable[[IngestionEvent], None]] = None,
    ) -> IngestionReport:
        """
        Start a new session over the selected files and summarize them.

        Args:
            files: Raw selection; filtering happens here.
            root: Display label of the selected tree.
            on_event: Optional callback invoked after each pipeline event.

        Returns:
            IngestionReport of the run (empty when nothing was selected).

        Raises:
            SessionBusyError: another ingestion run is in progress.
        """
        self._acquire("start a new ingestion")
        try:
            return self._ingest(list(files), root, on_event)
        finally:
            self._lock.release()

    def _ingest(
        self,
        files: List[SourceFile],
        root: str,
        on_event: Optional[Callable[[IngestionEvent], None]],
    ) -> IngestionReport:
        if not files:
            self._status = "No files selected or selection cancelled."
            return IngestionReport()

        session_id, chat_id = self._id_factory()
        self._session = RepositorySession(session_id=session_id, chat_id=chat_id, root=root)
        self._messages = [Message.ai(GREETING)]
        self._transcript_write_failed = False
        logger.info(f"{SESSION} New session {session_id} (chat {chat_id}) for {root or 'selection'}")

        self._append(Message.system(f"Starting analysis for new repository. Chat ID: {chat_id}"))

        if not self._store.is_available():
            self._append(
                Message.system("Storage is unavailable; summaries will not be persisted for this session.")
            )
        else:
            try:
                self._store.put_session(self._session)
            except PersistenceWriteError as e:
                logger.warning(f"{SESSION} Could not record session {session_id}: {e}")
                self._append(Message.system(f"Warning: session could not be recorded: {e}"))

        filtered = self._filter.filter(files)
        if filtered:
            self._status = (
                f"Processing {len(filtered)} files (excluding common ignored directories)..."
            )

        report = IngestionReport(session_id=session_id)
        for event in self._pipeline.run(session_id, filtered):
            for message in event.messages:
                self._append(message)
            self._status = event.progress.status
            if event.report is not None:
                report = event.report
            if event.step_complete:
                self._persist_transcript()
            if on_event is not None:
                on_event(event)

        return report

    # -------------------------------------------------------------------------
    # Queries
    # -------------------------------------------------------------------------

    def ask(self, query: str, session_id: Optional[str] = None) -> QueryAnswer:
        """
        Answer a question about a session and record the exchange.

        Args:
            query: The user's question.
            session_id: Session to ask about; the active one when omitted.
                A different stored session is made active first, under the
                same lock hold as the query itself.

        Returns:
            QueryAnswer carrying the session and chat it was recorded in.

        Raises:
            SessionBusyError: an ingestion run or another query is in progress.
            SessionNotFoundError: session_id names no stored session.
        """
        self._acquire("submit a query")
        try:
            if session_id is not None and (
                self._session is None or self._session.session_id != session_id
            ):
                if self._activate(session_id) is None:
                    raise SessionNotFoundError(session_id)
            return self._ask(query)
        finally:
            self._lock.release()

    def _ask(self, query: str) -> QueryAnswer:
        if self._session is None:
            text = "Please select and process a repository first."
            self._append(Message.system(text))
            return QueryAnswer(text=text, status=AnswerStatus.NO_SESSION)

        self._append(Message.user(query))
        self._status = THINKING_STATUS

        try:
            answer = self._router.answer(self._session.session_id, query)
        except Exception as e:
            logger.exception(f"{SESSION} Query failed: {e}")
            text = f"Error getting AI response: {e}"
            self._append(Message.system(text))
            answer = QueryAnswer(text=text, status=AnswerStatus.FAILED)
        else:
            if answer.status is AnswerStatus.NO_DATA:
                self._append(
                    Message.system("No summaries found in storage. Please reprocess the repository.")
                )
            self._append(Message.ai(answer.text))

        self._persist_transcript()
        self._status = READY_STATUS
        return replace(answer, session_id=self._session.session_id, chat_id=self._session.chat_id)

    # -------------------------------------------------------------------------
    # Inspection and resume
    # -------------------------------------------------------------------------

    def show_stored_summaries(self) -> List[FileArtifact]:
        """Append a System message listing every stored summary of the session."""
        artifacts: List[FileArtifact] = []
        if self._session is not None:
            artifacts = self._store.get_all_summaries(self._session.session_id)

        if not artifacts:
            self._append(Message.system("No summaries found in storage for the current repository."))
        else:
            listing = ENTRY_DELIMITER.join(render_entry(a) for a in artifacts)
            self._append(Message.system(f"Stored Summaries ({len(artifacts)}):\n{listing}"))
        return artifacts

    def resume(self, session_id: Optional[str] = None) -> Optional[RepositorySession]:
        """
        Make a persisted session active again, with its transcript.

        Args:
            session_id: Session to resume; the most recent one when omitted.

        Returns:
            The resumed session, or None if nothing matching is stored.
        """
        self._acquire("resume a session")
        try:
            return self._activate(session_id)
        finally:
            self._lock.release()

    def _activate(self, session_id: Optional[str]) -> Optional[RepositorySession]:
        # caller holds the lock
        if session_id is not None:
            session = self._store.get_session(session_id)
        else:
            session = self._store.latest_session()
        if session is None:
            return None

        messages = self._store.get_transcript(session.chat_id)
        self._session = session
        self._messages = list(messages) if messages else [Message.ai(GREETING)]
        self._transcript_write_failed = False
        self._status = READY_STATUS
        logger.info(f"{SESSION} Resumed {session.session_id} with {len(self._messages)} messages")
        return session
