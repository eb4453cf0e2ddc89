# repochat/core/__init__.py
"""Domain types and configuration shared by every repochat component."""

from repochat.core.models import (
    AnswerStatus,
    ArtifactStatus,
    ChatTranscript,
    FileArtifact,
    IngestionProgress,
    Message,
    QueryAnswer,
    QueryIntent,
    RepositorySession,
    Sender,
)

__all__ = [
    "AnswerStatus",
    "ArtifactStatus",
    "ChatTranscript",
    "FileArtifact",
    "IngestionProgress",
    "Message",
    "QueryAnswer",
    "QueryIntent",
    "RepositorySession",
    "Sender",
]
