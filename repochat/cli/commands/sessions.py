# repochat/cli/commands/sessions.py
"""List recorded sessions."""

from __future__ import annotations

import typer

from repochat.cli.context import CLIContext
from repochat.cli.ui import ui


def command(ctx: typer.Context) -> None:
    """List ingested repositories, oldest first."""
    runtime = CLIContext.from_typer(ctx).require_runtime()

    sessions = runtime.store.list_sessions()
    if not sessions:
        ui.info("No sessions yet. Run 'repochat ingest PATH' first.")
        return

    rows = []
    for session in sessions:
        count = len(runtime.store.get_all_summaries(session.session_id))
        rows.append(
            [
                session.session_id,
                session.chat_id,
                session.root,
                str(count),
                session.created_at.strftime("%Y-%m-%d %H:%M:%S"),
            ]
        )
    ui.table(["Session", "Chat", "Root", "Files", "Created (UTC)"], rows, title="Sessions")
