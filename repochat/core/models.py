# repochat/core/models.py
"""
Core domain types.

Records that are persisted (RepositorySession, FileArtifact, ChatTranscript,
Message) know how to turn themselves into plain JSON-compatible dicts and
back. Everything here is immutable except ChatTranscript, which is rebuilt
from the in-memory message list on every save.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Dict, List, Optional


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _parse_ts(value: Any) -> datetime:
    if isinstance(value, datetime):
        return value
    if isinstance(value, str) and value:
        return datetime.fromisoformat(value)
    return utcnow()


# =============================================================================
# Enums
# =============================================================================


class Sender(str, Enum):
    """Who produced a transcript message."""

    USER = "User"
    AI = "AI"
    SYSTEM = "System"


class ArtifactStatus(str, Enum):
    """Whether a stored summary came from a successful completion."""

    OK = "ok"
    FAILED = "failed"


class QueryIntent(str, Enum):
    """Prompt template selected for a user query."""

    FILE_COUNT = "file_count"
    REPO_OVERVIEW = "repo_overview"
    GENERAL = "general"


class AnswerStatus(str, Enum):
    """Outcome of answering a query."""

    ANSWERED = "answered"
    """The completion service produced an answer."""

    BLOCKED = "blocked"
    """The provider refused the prompt on content grounds."""

    FAILED = "failed"
    """Transport, HTTP or format failure; text holds the error description."""

    NO_DATA = "no_data"
    """No summaries stored for the session; the service was not called."""

    NO_SESSION = "no_session"
    """No repository has been ingested yet."""


# =============================================================================
# Records
# =============================================================================


@dataclass(frozen=True)
class Message:
    """One transcript entry. Position is implied by insertion order."""

    sender: Sender
    text: str

    @classmethod
    def user(cls, text: str) -> "Message":
        return cls(Sender.USER, text)

    @classmethod
    def ai(cls, text: str) -> "Message":
        return cls(Sender.AI, text)

    @classmethod
    def system(cls, text: str) -> "Message":
        return cls(Sender.SYSTEM, text)

    def to_dict(self) -> Dict[str, str]:
        return {"sender": self.sender.value, "text": self.text}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Message":
        # Sender(...) raises ValueError on anything outside the closed set
        return cls(sender=Sender(data["sender"]), text=str(data.get("text", "")))


@dataclass(frozen=True)
class RepositorySession:
    """One ingestion run over one selected directory tree."""

    session_id: str
    chat_id: str
    root: str = ""
    created_at: datetime = field(default_factory=utcnow)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "session_id": self.session_id,
            "chat_id": self.chat_id,
            "root": self.root,
            "created_at": self.created_at.isoformat(),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "RepositorySession":
        return cls(
            session_id=data["session_id"],
            chat_id=data["chat_id"],
            root=data.get("root", ""),
            created_at=_parse_ts(data.get("created_at")),
        )


@dataclass(frozen=True)
class FileArtifact:
    """A persisted per-file summary, keyed by (session_id, original_path)."""

    session_id: str
    original_path: str
    summary_text: str
    status: ArtifactStatus = ArtifactStatus.OK
    updated_at: datetime = field(default_factory=utcnow)

    @property
    def ok(self) -> bool:
        return self.status is ArtifactStatus.OK

    def to_dict(self) -> Dict[str, Any]:
        return {
            "session_id": self.session_id,
            "original_path": self.original_path,
            "summary": self.summary_text,
            "status": self.status.value,
            "updated_at": self.updated_at.isoformat(),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "FileArtifact":
        return cls(
            session_id=data["session_id"],
            original_path=data["original_path"],
            summary_text=data.get("summary", ""),
            status=ArtifactStatus(data.get("status", ArtifactStatus.OK.value)),
            updated_at=_parse_ts(data.get("updated_at")),
        )


@dataclass
class ChatTranscript:
    """Ordered, append-only chat record for one session."""

    chat_id: str
    messages: List[Message] = field(default_factory=list)
    updated_at: datetime = field(default_factory=utcnow)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "chat_id": self.chat_id,
            "messages": [m.to_dict() for m in self.messages],
            "updated_at": self.updated_at.isoformat(),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ChatTranscript":
        return cls(
            chat_id=data["chat_id"],
            messages=[Message.from_dict(m) for m in data.get("messages", [])],
            updated_at=_parse_ts(data.get("updated_at")),
        )


# =============================================================================
# Ephemeral
# =============================================================================


@dataclass(frozen=True)
class IngestionProgress:
    """Drives the user-facing status line; never persisted."""

    current: int
    total: int
    status: str


@dataclass(frozen=True)
class QueryAnswer:
    """Result of QueryRouter.answer(). SessionManager.ask() fills in the session it ran against."""

    text: str
    status: AnswerStatus
    intent: Optional[QueryIntent] = None
    artifact_count: int = 0
    session_id: Optional[str] = None
    chat_id: Optional[str] = None

    @property
    def blocked(self) -> bool:
        return self.status is AnswerStatus.BLOCKED


__all__ = [
    "Sender",
    "ArtifactStatus",
    "QueryIntent",
    "AnswerStatus",
    "Message",
    "RepositorySession",
    "FileArtifact",
    "ChatTranscript",
    "IngestionProgress",
    "QueryAnswer",
    "utcnow",
]
