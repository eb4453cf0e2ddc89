# repochat/llm/base.py
"""
Completion service contract.

A completion service takes a prompt and returns a CompletionResult. It never
raises: transport errors, non-success statuses and content blocks all come
back as a result whose display_text is suitable for showing to the user.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Protocol, runtime_checkable


class CompletionStatus(str, Enum):
    OK = "ok"
    BLOCKED = "blocked"
    HTTP_ERROR = "http_error"
    TRANSPORT_ERROR = "transport_error"
    EMPTY = "empty"


@dataclass(frozen=True)
class CompletionResult:
    """Generated text, or a classified failure."""

    status: CompletionStatus
    text: str = ""
    detail: str = ""
    http_status: int | None = None

    @property
    def ok(self) -> bool:
        return self.status is CompletionStatus.OK

    @property
    def blocked(self) -> bool:
        return self.status is CompletionStatus.BLOCKED

    @property
    def display_text(self) -> str:
        """Text shown to users and stored as the summary."""
        if self.status is CompletionStatus.OK:
            return self.text
        if self.status is CompletionStatus.BLOCKED:
            return f"Content blocked by API: {self.detail}"
        if self.status is CompletionStatus.HTTP_ERROR:
            return (
                "Error communicating with AI: "
                f"Gemini API request failed with status {self.http_status}: {self.detail}"
            )
        if self.status is CompletionStatus.TRANSPORT_ERROR:
            return f"Error communicating with AI: {self.detail}"
        return "No valid response or unexpected format from AI."

    @classmethod
    def success(cls, text: str) -> "CompletionResult":
        return cls(CompletionStatus.OK, text=text)

    @classmethod
    def blocked_by(cls, reason: str) -> "CompletionResult":
        return cls(CompletionStatus.BLOCKED, detail=reason)

    @classmethod
    def http_error(cls, status_code: int, message: str) -> "CompletionResult":
        return cls(CompletionStatus.HTTP_ERROR, detail=message, http_status=status_code)

    @classmethod
    def transport_error(cls, message: str) -> "CompletionResult":
        return cls(CompletionStatus.TRANSPORT_ERROR, detail=message)

    @classmethod
    def empty(cls) -> "CompletionResult":
        return cls(CompletionStatus.EMPTY)


@runtime_checkable
class CompletionService(Protocol):
    """Protocol for text completion providers."""

    def complete(self, prompt: str) -> CompletionResult:
        ...
