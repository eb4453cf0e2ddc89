# repochat/cli/context.py
"""
Central CLI context.

The root callback stores one CLIContext on typer's ctx.obj. Commands pull
the validated config and the Runtime from it, so config loading and store
opening happen once per invocation.

Usage:
    def command(ctx: typer.Context) -> None:
        cli = CLIContext.from_typer(ctx)
        runtime = cli.require_runtime()
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

import typer

from repochat.cli.ui import ui
from repochat.core.config import RepoChatConfig, load_config
from repochat.exceptions import ConfigError
from repochat.logging.logger import configure_logging, get_logger
from repochat.logging.tags import CLI
from repochat.runtime import Runtime, build_runtime

logger = get_logger(__name__)


@dataclass
class CLIContext:
    config_path: Optional[Path] = None
    verbose: bool = False
    _config: Optional[RepoChatConfig] = field(default=None, repr=False)
    _runtime: Optional[Runtime] = field(default=None, repr=False)

    @classmethod
    def from_typer(cls, ctx: typer.Context) -> "CLIContext":
        obj = ctx.find_object(CLIContext)
        if obj is None:
            obj = cls()
            ctx.obj = obj
        return obj

    def config(self) -> RepoChatConfig:
        if self._config is None:
            self._config = load_config(self.config_path)
            configure_logging("DEBUG" if self.verbose else self._config.logging.level)
            logger.debug(f"{CLI} Config loaded (config_path={self.config_path})")
        return self._config

    def require_config(self) -> RepoChatConfig:
        """Load config or exit with the validation message."""
        try:
            return self.config()
        except ConfigError as e:
            ui.error(str(e))
            raise typer.Exit(1)

    def require_runtime(self) -> Runtime:
        if self._runtime is None:
            config = self.require_config()
            self._runtime = build_runtime(config)
            if not self._runtime.store.is_available():
                ui.warning(
                    "Storage unavailable, results will not be saved",
                    self._runtime.store.unavailable_reason,
                )
        return self._runtime
