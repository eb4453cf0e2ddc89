# repochat/query/routing.py
"""
Keyword intent classification for user queries.

Case-insensitive substring match against fixed phrase sets. File-count
phrases win over overview phrases; anything else is GENERAL.
"""

from __future__ import annotations

from typing import Sequence

from repochat.core.models import QueryIntent

FILE_COUNT_PHRASES: tuple[str, ...] = (
    "how many files",
    "number of files",
)

REPO_OVERVIEW_PHRASES: tuple[str, ...] = (
    "what is this repo about",
    "repository purpose",
    "project overview",
)


class IntentClassifier:
    """Maps a query to the prompt template that should answer it."""

    def __init__(
        self,
        file_count_phrases: Sequence[str] = FILE_COUNT_PHRASES,
        overview_phrases: Sequence[str] = REPO_OVERVIEW_PHRASES,
    ) -> None:
        self._file_count = tuple(p.lower() for p in file_count_phrases)
        self._overview = tuple(p.lower() for p in overview_phrases)

    def classify(self, query: str) -> QueryIntent:
        text = query.lower()
        if any(phrase in text for phrase in self._file_count):
            return QueryIntent.FILE_COUNT
        if any(phrase in text for phrase in self._overview):
            return QueryIntent.REPO_OVERVIEW
        return QueryIntent.GENERAL
