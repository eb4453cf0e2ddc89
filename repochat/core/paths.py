# repochat/core/paths.py
"""Workspace locations. The workspace is .repochat/ under the current directory."""

from __future__ import annotations

from pathlib import Path


class RepoChatPaths:
    WORKSPACE_DIR = ".repochat"

    @classmethod
    def workspace(cls) -> Path:
        return Path.cwd() / cls.WORKSPACE_DIR

    @classmethod
    def config(cls) -> Path:
        return cls.workspace() / "config.yaml"
