# repochat/cli/commands/__init__.py
"""CLI commands."""

from repochat.cli.commands import (
    chat,
    config,
    history,
    ingest,
    query,
    serve,
    sessions,
    summaries,
)

__all__ = [
    "chat",
    "config",
    "history",
    "ingest",
    "query",
    "serve",
    "sessions",
    "summaries",
]
