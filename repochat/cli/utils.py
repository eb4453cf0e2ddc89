# repochat/cli/utils.py
"""Helpers shared by several commands."""

from __future__ import annotations

from pathlib import Path
from typing import Optional

import typer

from repochat.cli.ui import ui
from repochat.core.models import RepositorySession
from repochat.exceptions import SessionBusyError
from repochat.ingest.pipeline import IngestionEvent, IngestionEventKind, IngestionReport
from repochat.ingest.source import scan_directory
from repochat.runtime import Runtime


def run_ingestion(runtime: Runtime, path: Path) -> IngestionReport:
    """
    Scan path, ingest it into a new session and render progress.

    Exits with code 1 if the path does not exist or another run is active.
    """
    try:
        files = scan_directory(path)
    except FileNotFoundError as e:
        ui.error(str(e))
        raise typer.Exit(1)

    with ui.progress("Filtering files...") as bar:

        def on_event(event: IngestionEvent) -> None:
            progress = event.progress
            if event.kind is IngestionEventKind.FILE_STARTED:
                bar.update(
                    completed=progress.current - 1,
                    total=progress.total,
                    description=progress.status,
                )
            elif event.step_complete:
                bar.update(completed=progress.current, total=progress.total or None)

        try:
            report = runtime.manager.ingest(files, root=str(path), on_event=on_event)
        except SessionBusyError as e:
            ui.error(str(e))
            raise typer.Exit(1)

    return report


def print_report(runtime: Runtime, report: IngestionReport) -> None:
    manager = runtime.manager
    if report.attempted == 0:
        ui.warning(manager.status)
        return

    session = manager.session
    lines = [
        f"Session: {session.session_id}",
        f"Chat:    {session.chat_id}",
        f"Files:   {report}",
        f"Time:    {report.duration_seconds:.1f}s",
    ]
    style = "green" if report.failed == 0 else "yellow"
    ui.summary_panel("\n".join(lines), title="Ingestion", style=style)

    for detail in report.error_details:
        ui.warning(detail)
    if report.failed == 0:
        ui.success(manager.status)
    else:
        ui.warning(manager.status)
    if not report.consistent:
        ui.warning(
            f"Attempted {report.attempted} files but found {report.stored} summaries in storage"
        )


def resume_or_exit(runtime: Runtime, session_id: Optional[str] = None) -> RepositorySession:
    """Resume the given (or latest) session, or exit with a hint."""
    session = runtime.manager.resume(session_id)
    if session is None:
        if session_id:
            ui.error(f"Session not found: {session_id}")
        else:
            ui.error("No ingested repository found. Run 'repochat ingest PATH' first.")
        raise typer.Exit(1)
    return session
