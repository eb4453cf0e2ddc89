# repochat/llm/__init__.py
from repochat.llm.base import CompletionResult, CompletionService, CompletionStatus
from repochat.llm.gemini import GeminiCompletionClient
from repochat.llm.registry import get_completion_service, register_completion_provider

__all__ = [
    "CompletionResult",
    "CompletionService",
    "CompletionStatus",
    "GeminiCompletionClient",
    "get_completion_service",
    "register_completion_provider",
]
