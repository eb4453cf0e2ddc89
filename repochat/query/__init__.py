# repochat/query/__init__.py
"""Query routing over stored summaries."""

from repochat.query.context import build_context
from repochat.query.prompts import build_query_prompt
from repochat.query.router import NO_DATA_RESPONSE, QueryRouter, RoutedPrompt
from repochat.query.routing import IntentClassifier

__all__ = [
    "build_context",
    "build_query_prompt",
    "IntentClassifier",
    "NO_DATA_RESPONSE",
    "QueryRouter",
    "RoutedPrompt",
]
