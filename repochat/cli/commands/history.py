# repochat/cli/commands/history.py
"""
Print a stored chat transcript.

Usage:
    repochat history              # most recent session
    repochat history chat-9f8e...
"""

from __future__ import annotations

from typing import Optional

import typer

from repochat.cli.context import CLIContext
from repochat.cli.ui import ui


def command(
    ctx: typer.Context,
    chat_id: Optional[str] = typer.Argument(None, help="Chat ID (default: most recent session)."),
) -> None:
    """Show the messages of a chat, in order."""
    runtime = CLIContext.from_typer(ctx).require_runtime()

    if chat_id is None:
        session = runtime.store.latest_session()
        if session is None:
            ui.error("No ingested repository found. Run 'repochat ingest PATH' first.")
            raise typer.Exit(1)
        chat_id = session.chat_id

    messages = runtime.store.get_transcript(chat_id)
    if messages is None:
        ui.error(f"No chat history found for {chat_id}")
        raise typer.Exit(1)

    ui.header(f"Chat {chat_id}", f"{len(messages)} messages")
    for message in messages:
        ui.message(message)
