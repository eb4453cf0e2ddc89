# repochat/query/context.py
"""Renders stored summaries into one bounded context block."""

from __future__ import annotations

from typing import Iterable

from repochat.core.models import FileArtifact

ENTRY_DELIMITER = "\n---\n"
ELLIPSIS = "..."
MAX_CONTEXT_CHARS = 100_000


def render_entry(artifact: FileArtifact) -> str:
    return f"File: {artifact.original_path}\nSummary: {artifact.summary_text}\n"


def build_context(
    artifacts: Iterable[FileArtifact],
    max_chars: int = MAX_CONTEXT_CHARS,
) -> str:
    """
    Concatenate artifacts in the given order, then cap the length.

    Over max_chars, the first max_chars characters are kept and "..." is
    appended. No file is preferred over another.
    """
    text = ENTRY_DELIMITER.join(render_entry(a) for a in artifacts)
    if len(text) > max_chars:
        return text[:max_chars] + ELLIPSIS
    return text
