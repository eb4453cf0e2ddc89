# repochat/cli/cli.py
"""
Main repochat CLI.

Goals:
- Discoverability first
- One runtime per invocation
- No core side effects outside .repochat/
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional

import typer

from repochat import __version__
from repochat.cli.commands import chat, config, history, ingest, query, serve, sessions, summaries
from repochat.cli.context import CLIContext

app = typer.Typer(
    help="repochat - summarize a repository, then ask questions about it",
    no_args_is_help=True,
)


def _version_callback(value: bool) -> None:
    if value:
        typer.echo(f"repochat {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    ctx: typer.Context,
    config_path: Optional[Path] = typer.Option(
        None,
        "--config",
        "-c",
        help="Config file to merge over the defaults (default: .repochat/config.yaml).",
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Debug logging to stderr."),
    version: bool = typer.Option(
        False,
        "--version",
        callback=_version_callback,
        is_eager=True,
        help="Show version and exit.",
    ),
) -> None:
    ctx.obj = CLIContext(config_path=config_path, verbose=verbose)


app.command("ingest")(ingest.command)
app.command("query")(query.command)
app.command("chat")(chat.command)
app.command("summaries")(summaries.command)
app.command("history")(history.command)
app.command("sessions")(sessions.command)
app.add_typer(config.app, name="config")
app.command("serve")(serve.command)


if __name__ == "__main__":
    app()
