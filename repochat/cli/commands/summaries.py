# repochat/cli/commands/summaries.py
"""
List stored summaries of a session.

Usage:
    repochat summaries
    repochat summaries --session repo-1a2b... --full
"""

from __future__ import annotations

from typing import Optional

import typer

from repochat.cli.context import CLIContext
from repochat.cli.ui import ui
from repochat.cli.utils import resume_or_exit

PREVIEW_CHARS = 80


def _preview(text: str) -> str:
    first_line = text.strip().splitlines()[0] if text.strip() else ""
    if len(first_line) > PREVIEW_CHARS:
        return first_line[: PREVIEW_CHARS - 3] + "..."
    return first_line


def command(
    ctx: typer.Context,
    session_id: Optional[str] = typer.Option(None, "--session", "-s", help="Session (default: most recent)."),
    full: bool = typer.Option(False, "--full", "-f", help="Print complete summaries."),
) -> None:
    """Show the file summaries stored for a session."""
    runtime = CLIContext.from_typer(ctx).require_runtime()
    session = resume_or_exit(runtime, session_id)

    artifacts = runtime.store.get_all_summaries(session.session_id)
    if not artifacts:
        ui.warning("No summaries found in storage for the current repository.")
        return

    if full:
        for artifact in artifacts:
            style = "green" if artifact.ok else "red"
            ui.summary_panel(artifact.summary_text, title=artifact.original_path, style=style)
        return

    ui.table(
        ["File", "Status", "Summary"],
        [[a.original_path, a.status.value, _preview(a.summary_text)] for a in artifacts],
        title=f"Stored Summaries ({len(artifacts)})",
    )
