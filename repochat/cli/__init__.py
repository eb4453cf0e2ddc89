"""
Main repochat CLI module.

Provides the top-level `repochat` command.
"""

from repochat.cli.cli import app

__all__ = ["app"]
