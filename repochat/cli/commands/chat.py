# repochat/cli/commands/chat.py
"""
Interactive chat.

Usage:
    repochat chat ./my-project     # ingest, then chat
    repochat chat --resume         # chat with the most recent session
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional

import typer

from repochat.cli.context import CLIContext
from repochat.cli.ui import ui
from repochat.cli.utils import print_report, resume_or_exit, run_ingestion
from repochat.core.models import Sender
from repochat.logging.logger import get_logger

logger = get_logger(__name__)

EXIT_WORDS = {"exit", "quit", "/exit", "/quit"}


def command(
    ctx: typer.Context,
    path: Optional[Path] = typer.Argument(None, help="Directory to ingest before chatting."),
    resume: bool = typer.Option(False, "--resume", "-r", help="Continue the most recent session."),
) -> None:
    """
    Ingest a repository and chat about it.

    In the chat, type /summaries to list stored summaries, or exit to quit.
    """
    runtime = CLIContext.from_typer(ctx).require_runtime()
    manager = runtime.manager

    if path is not None:
        ui.header("repochat chat", str(path))
        print_report(runtime, run_ingestion(runtime, path))
        if manager.session is None:
            raise typer.Exit(1)
    elif resume:
        session = resume_or_exit(runtime)
        ui.header("repochat chat", session.root or session.session_id)
        for message in manager.messages:
            ui.message(message)
    else:
        ui.error("Give a PATH to ingest, or --resume to continue the last session.")
        raise typer.Exit(1)

    ui.info("Type /summaries to list stored summaries, exit to quit.")

    while True:
        try:
            question = ui.prompt_text("[bold blue]You[/bold blue]").strip()
        except (EOFError, KeyboardInterrupt):
            print()
            break

        if not question:
            continue
        if question.lower() in EXIT_WORDS:
            break

        before = len(manager.messages)
        if question == "/summaries":
            manager.show_stored_summaries()
        else:
            with ui.spinner("AI is thinking..."):
                manager.ask(question)

        for message in manager.messages[before:]:
            if message.sender is not Sender.USER:
                ui.message(message)

    ui.info(f"Chat saved as {manager.session.chat_id}")
