# repochat/cli/commands/ingest.py
"""
Ingest command.

Usage:
    repochat ingest ./my-project
    repochat ingest ./my-project --transcript
"""

from __future__ import annotations

from pathlib import Path

import typer

from repochat.cli.context import CLIContext
from repochat.cli.ui import ui
from repochat.cli.utils import print_report, run_ingestion
from repochat.logging.logger import get_logger

logger = get_logger(__name__)


def command(
    ctx: typer.Context,
    path: Path = typer.Argument(..., help="Directory (or single file) to summarize."),
    transcript: bool = typer.Option(
        False,
        "--transcript",
        "-t",
        help="Print the full transcript, including every summary.",
    ),
) -> None:
    """
    Summarize every file under PATH into a new session.

    Files under node_modules, .git, .vscode, dist and build, and *.log /
    *.lock files are skipped. One summary is stored per file.

    Examples:
        repochat ingest .
        repochat ingest ./src -t
    """
    runtime = CLIContext.from_typer(ctx).require_runtime()

    ui.header("repochat ingest", str(path))
    report = run_ingestion(runtime, path)

    if transcript:
        for message in runtime.manager.messages:
            ui.message(message)
        print()

    print_report(runtime, report)
