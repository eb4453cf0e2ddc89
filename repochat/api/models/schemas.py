# repochat/api/models/schemas.py
"""Request and response schemas."""

from __future__ import annotations

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, Field

from repochat.core.models import FileArtifact, Message, RepositorySession
from repochat.ingest.pipeline import IngestionReport


class HealthResponse(BaseModel):
    status: str
    version: str
    storage_available: bool


class SessionInfo(BaseModel):
    session_id: str
    chat_id: str
    root: str = ""
    created_at: datetime

    @classmethod
    def from_session(cls, session: RepositorySession) -> "SessionInfo":
        return cls(
            session_id=session.session_id,
            chat_id=session.chat_id,
            root=session.root,
            created_at=session.created_at,
        )


class ReportInfo(BaseModel):
    attempted: int
    summarized: int
    failed: int
    truncated: int
    unverified: int
    stored: int
    duration_seconds: float
    error_details: List[str] = Field(default_factory=list)

    @classmethod
    def from_report(cls, report: IngestionReport) -> "ReportInfo":
        return cls(
            attempted=report.attempted,
            summarized=report.summarized,
            failed=report.failed,
            truncated=report.truncated,
            unverified=report.unverified,
            stored=report.stored,
            duration_seconds=report.duration_seconds,
            error_details=list(report.error_details),
        )


class CreateSessionRequest(BaseModel):
    path: str = Field(..., min_length=1, description="Directory to ingest, on the server's filesystem")


class CreateSessionResponse(BaseModel):
    session: Optional[SessionInfo] = None
    report: ReportInfo
    status: str


class QueryRequest(BaseModel):
    question: str = Field(..., min_length=1)
    session_id: Optional[str] = Field(
        default=None,
        description="Session to query; the active (or most recent) one if omitted",
    )


class QueryResponse(BaseModel):
    answer: str
    status: str
    intent: Optional[str] = None
    artifact_count: int = 0
    session_id: Optional[str] = None
    chat_id: Optional[str] = None


class SummaryInfo(BaseModel):
    path: str
    status: str
    summary: str
    updated_at: datetime

    @classmethod
    def from_artifact(cls, artifact: FileArtifact) -> "SummaryInfo":
        return cls(
            path=artifact.original_path,
            status=artifact.status.value,
            summary=artifact.summary_text,
            updated_at=artifact.updated_at,
        )


class MessageInfo(BaseModel):
    sender: str
    text: str

    @classmethod
    def from_message(cls, message: Message) -> "MessageInfo":
        return cls(sender=message.sender.value, text=message.text)


class TranscriptResponse(BaseModel):
    chat_id: str
    messages: List[MessageInfo]
