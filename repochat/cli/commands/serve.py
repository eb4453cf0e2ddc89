# repochat/cli/commands/serve.py
"""
API server command.

Usage:
    repochat serve              # Start on default port 8000
    repochat serve --port 3000  # Custom port
"""

from __future__ import annotations

import typer

from repochat.cli.context import CLIContext
from repochat.cli.ui import ui
from repochat.logging.logger import get_logger

logger = get_logger(__name__)


def command(
    ctx: typer.Context,
    host: str = typer.Option(
        "127.0.0.1",
        "--host",
        "-h",
        help="Host to bind to.",
    ),
    port: int = typer.Option(
        8000,
        "--port",
        "-p",
        help="Port to listen on.",
    ),
) -> None:
    """
    Start the repochat API server.

    Examples:
        repochat serve                    # Start on localhost:8000
        repochat serve --host 0.0.0.0     # Listen on all interfaces

    API Documentation:
        Once running, visit http://localhost:8000/docs for interactive docs.
    """
    try:
        import uvicorn
    except ImportError:
        ui.error("uvicorn not installed. Install with: pip install repochat[api]")
        raise typer.Exit(1)

    try:
        from repochat.api import create_app
    except ImportError as e:
        ui.error(f"Failed to import API module: {e}")
        ui.info("Install with: pip install repochat[api]")
        raise typer.Exit(1)

    runtime = CLIContext.from_typer(ctx).require_runtime()

    ui.header("repochat API server", f"http://{host}:{port}")
    ui.info(f"API docs: http://{host}:{port}/docs")
    ui.info("Press Ctrl+C to stop")
    print()

    uvicorn.run(
        create_app(runtime),
        host=host,
        port=port,
        log_level="info",
    )
