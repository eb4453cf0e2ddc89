# repochat/cli/commands/query.py
"""
Query command.

Usage:
    repochat query "What does this repo do?"
    repochat query "How many files?" --session repo-1a2b...
"""

from __future__ import annotations

from typing import Optional

import typer

from repochat.cli.context import CLIContext
from repochat.cli.ui import ui
from repochat.cli.utils import resume_or_exit
from repochat.core.models import AnswerStatus
from repochat.exceptions import SessionBusyError
from repochat.logging.logger import get_logger

logger = get_logger(__name__)


def command(
    ctx: typer.Context,
    question: str = typer.Argument(..., help="Question about the repository."),
    session_id: Optional[str] = typer.Option(
        None,
        "--session",
        "-s",
        help="Session to query (default: most recent).",
    ),
) -> None:
    """
    Ask a question about an ingested repository.

    The answer is built from the stored file summaries of the session and is
    appended to its chat history.
    """
    runtime = CLIContext.from_typer(ctx).require_runtime()
    resume_or_exit(runtime, session_id)

    try:
        with ui.spinner("AI is thinking..."):
            answer = runtime.manager.ask(question)
    except SessionBusyError as e:
        ui.error(str(e))
        raise typer.Exit(1)

    if answer.status is AnswerStatus.ANSWERED:
        ui.markdown(answer.text)
        return

    if answer.status is AnswerStatus.NO_DATA:
        ui.warning(answer.text)
        return

    ui.error(answer.text)
    raise typer.Exit(1)
