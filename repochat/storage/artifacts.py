# repochat/storage/artifacts.py
"""
ArtifactStore - persistent storage for file summaries, chat transcripts and
session records, scoped by session identifiers.

Error contract (per operation, deliberately asymmetric):

    put_summary / put_transcript / put_session
        raise PersistenceWriteError. The caller decides how to report it.

    get_summary / get_all_summaries / get_transcript / get_session /
    latest_session
        never raise. Engine failures are logged and the call returns
        None or [] ("not found").

A store opened without an engine (ArtifactStore.unavailable) is the degraded
mode: every write raises PersistenceWriteError, every read is empty.
"""

from __future__ import annotations

from typing import List, Optional

from repochat.core.models import (
    ArtifactStatus,
    ChatTranscript,
    FileArtifact,
    Message,
    RepositorySession,
    utcnow,
)
from repochat.exceptions import PersistenceWriteError
from repochat.logging.logger import get_logger
from repochat.logging.tags import STORAGE
from repochat.storage.kv import KeyValueStore

logger = get_logger(__name__)

SUMMARIES = "summaries"
TRANSCRIPTS = "transcripts"
SESSIONS = "sessions"

KEY_SEPARATOR = "::"


def summary_key(session_id: str, path: str) -> str:
    """Synthetic key: session id + separator + original path."""
    return f"{session_id}{KEY_SEPARATOR}{path}"


class ArtifactStore:
    """
    Session-scoped record storage over an injected KeyValueStore.

    Usage:
        store = ArtifactStore(JsonFileKeyValueStore(".repochat/store.json"))
        store.put_summary("repo-1", "src/app.py", "Entry point ...")
        store.get_summary("repo-1", "src/app.py").summary_text
    """

    def __init__(self, engine: Optional[KeyValueStore], *, unavailable_reason: str = "") -> None:
        self._engine = engine
        self._unavailable_reason = unavailable_reason

    @classmethod
    def unavailable(cls, reason: str) -> "ArtifactStore":
        """A store whose engine could not be opened."""
        logger.error(f"{STORAGE} Artifact store unavailable: {reason}")
        return cls(None, unavailable_reason=reason)

    def is_available(self) -> bool:
        return self._engine is not None

    @property
    def unavailable_reason(self) -> str:
        return self._unavailable_reason

    # -------------------------------------------------------------------------
    # Internals
    # -------------------------------------------------------------------------

    def _put(self, collection: str, key: str, record: dict) -> None:
        if self._engine is None:
            raise PersistenceWriteError(
                f"Store unavailable: {self._unavailable_reason or 'no engine'}"
            )
        try:
            self._engine.put(collection, key, record)
        except PersistenceWriteError:
            raise
        except Exception as e:
            raise PersistenceWriteError(f"Failed to write {collection}/{key}: {e}") from e

    def _get(self, collection: str, key: str) -> Optional[dict]:
        if self._engine is None:
            return None
        try:
            return self._engine.get(collection, key)
        except Exception as e:
            logger.warning(f"{STORAGE} Read of {collection}/{key} failed, treating as absent: {e}")
            return None

    def _get_all(self, collection: str) -> List[dict]:
        if self._engine is None:
            return []
        try:
            return self._engine.get_all(collection)
        except Exception as e:
            logger.warning(f"{STORAGE} Read of {collection} failed, treating as empty: {e}")
            return []

    # -------------------------------------------------------------------------
    # Summaries
    # -------------------------------------------------------------------------

    def put_summary(
        self,
        session_id: str,
        path: str,
        text: str,
        status: ArtifactStatus = ArtifactStatus.OK,
    ) -> FileArtifact:
        """
        Insert or replace the summary for (session_id, path).

        Raises:
            PersistenceWriteError: the engine rejected the write
        """
        artifact = FileArtifact(
            session_id=session_id,
            original_path=path,
            summary_text=text,
            status=status,
            updated_at=utcnow(),
        )
        self._put(SUMMARIES, summary_key(session_id, path), artifact.to_dict())
        logger.debug(f"{STORAGE} Saved summary for {path} in {session_id}")
        return artifact

    def get_summary(self, session_id: str, path: str) -> Optional[FileArtifact]:
        """Return the artifact, or None if absent or unreadable."""
        record = self._get(SUMMARIES, summary_key(session_id, path))
        if record is None:
            return None
        try:
            return FileArtifact.from_dict(record)
        except (KeyError, TypeError, ValueError) as e:
            logger.warning(f"{STORAGE} Corrupt summary record for {path}: {e}")
            return None

    def get_all_summaries(self, session_id: str) -> List[FileArtifact]:
        """All artifacts of one session, in store order. Never raises."""
        artifacts: List[FileArtifact] = []
        for record in self._get_all(SUMMARIES):
            if not isinstance(record, dict):
                logger.warning(f"{STORAGE} Skipping non-object summary record")
                continue
            if record.get("session_id") != session_id:
                continue
            try:
                artifacts.append(FileArtifact.from_dict(record))
            except (KeyError, TypeError, ValueError) as e:
                logger.warning(f"{STORAGE} Skipping corrupt summary record: {e}")
        logger.debug(f"{STORAGE} Found {len(artifacts)} summaries for {session_id}")
        return artifacts

    # -------------------------------------------------------------------------
    # Transcripts
    # -------------------------------------------------------------------------

    def put_transcript(self, chat_id: str, messages: List[Message]) -> None:
        """
        Replace the stored transcript for chat_id.

        Raises:
            PersistenceWriteError: the engine rejected the write
        """
        transcript = ChatTranscript(chat_id=chat_id, messages=list(messages))
        self._put(TRANSCRIPTS, chat_id, transcript.to_dict())
        logger.debug(f"{STORAGE} Saved {len(messages)} messages for {chat_id}")

    def get_transcript(self, chat_id: str) -> Optional[List[Message]]:
        """Return the stored messages, or None if absent or unreadable."""
        record = self._get(TRANSCRIPTS, chat_id)
        if record is None:
            return None
        try:
            return ChatTranscript.from_dict(record).messages
        except (KeyError, TypeError, ValueError) as e:
            logger.warning(f"{STORAGE} Corrupt transcript record for {chat_id}: {e}")
            return None

    # -------------------------------------------------------------------------
    # Sessions
    # -------------------------------------------------------------------------

    def put_session(self, session: RepositorySession) -> None:
        """
        Record a session so a later process can resume it.

        Raises:
            PersistenceWriteError: the engine rejected the write
        """
        self._put(SESSIONS, session.session_id, session.to_dict())

    def get_session(self, session_id: str) -> Optional[RepositorySession]:
        record = self._get(SESSIONS, session_id)
        if record is None:
            return None
        try:
            return RepositorySession.from_dict(record)
        except (KeyError, TypeError, ValueError) as e:
            logger.warning(f"{STORAGE} Corrupt session record for {session_id}: {e}")
            return None

    def list_sessions(self) -> List[RepositorySession]:
        """All recorded sessions, oldest first."""
        sessions: List[RepositorySession] = []
        for record in self._get_all(SESSIONS):
            if not isinstance(record, dict):
                logger.warning(f"{STORAGE} Skipping non-object session record")
                continue
            try:
                sessions.append(RepositorySession.from_dict(record))
            except (KeyError, TypeError, ValueError) as e:
                logger.warning(f"{STORAGE} Skipping corrupt session record: {e}")
        return sorted(sessions, key=lambda s: s.created_at)

    def latest_session(self) -> Optional[RepositorySession]:
        sessions = self.list_sessions()
        return sessions[-1] if sessions else None


__all__ = ["ArtifactStore", "summary_key", "KEY_SEPARATOR", "SUMMARIES", "TRANSCRIPTS", "SESSIONS"]
