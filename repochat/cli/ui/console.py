# repochat/cli/ui/console.py
"""
Rich console setup.

Provides the shared console instance and status symbols.
"""

from __future__ import annotations

import sys

from rich.console import Console
from rich.markdown import Markdown
from rich.panel import Panel
from rich.syntax import Syntax
from rich.table import Table

# Detect if we can use Unicode safely (not Windows legacy console)
CAN_USE_UNICODE = sys.platform != "win32" or (sys.stdout.encoding or "").lower() in (
    "utf-8",
    "utf8",
)

CHECK = "✓" if CAN_USE_UNICODE else "[OK]"
CROSS = "✗" if CAN_USE_UNICODE else "[X]"
WARN = "⚠" if CAN_USE_UNICODE else "[!]"

console = Console()

__all__ = [
    "CAN_USE_UNICODE",
    "CHECK",
    "CROSS",
    "WARN",
    "console",
    "Markdown",
    "Panel",
    "Syntax",
    "Table",
]
