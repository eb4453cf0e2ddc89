# repochat/cli/ui/__init__.py
"""
CLI UI components.

Usage:
    from repochat.cli.ui import ui

    ui.header("My Command")
    ui.success("Done!")
"""

from __future__ import annotations

from .console import console
from .output import OutputMixin
from .progress import FileProgress, ProgressMixin
from .prompts import PromptMixin


class UI(OutputMixin, PromptMixin, ProgressMixin):
    """Unified UI helpers."""

    pass


# Singleton instance
ui = UI()

__all__ = [
    "ui",
    "UI",
    "console",
    "FileProgress",
]
