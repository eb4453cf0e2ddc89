# repochat/cli/commands/config.py
"""
Config commands.

Usage:
    repochat config show
    repochat config path
"""

from __future__ import annotations

import typer
import yaml

from repochat.cli.context import CLIContext
from repochat.cli.ui import ui
from repochat.core.paths import RepoChatPaths

app = typer.Typer(help="Inspect configuration.", no_args_is_help=True)


@app.command("show")
def show(ctx: typer.Context) -> None:
    """Show the resolved configuration (API key masked)."""
    config = CLIContext.from_typer(ctx).require_config()

    data = config.model_dump(mode="json")
    if data["llm"].get("api_key"):
        data["llm"]["api_key"] = "***"

    ui.syntax(yaml.safe_dump(data, sort_keys=False, allow_unicode=True))


@app.command("path")
def path(ctx: typer.Context) -> None:
    """Show which user config file is in effect."""
    cli = CLIContext.from_typer(ctx)
    if cli.config_path is not None:
        ui.print(str(cli.config_path))
    elif RepoChatPaths.config().exists():
        ui.print(str(RepoChatPaths.config()))
    else:
        ui.info(f"No user config; defaults only. Create {RepoChatPaths.config()} to override.")
