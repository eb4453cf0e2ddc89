"""API request and response models."""

from repochat.api.models.schemas import (
    CreateSessionRequest,
    CreateSessionResponse,
    HealthResponse,
    MessageInfo,
    QueryRequest,
    QueryResponse,
    ReportInfo,
    SessionInfo,
    SummaryInfo,
    TranscriptResponse,
)

__all__ = [
    "CreateSessionRequest",
    "CreateSessionResponse",
    "HealthResponse",
    "MessageInfo",
    "QueryRequest",
    "QueryResponse",
    "ReportInfo",
    "SessionInfo",
    "SummaryInfo",
    "TranscriptResponse",
]
