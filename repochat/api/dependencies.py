# repochat/api/dependencies.py
"""FastAPI dependencies."""

from __future__ import annotations

from fastapi import Request

from repochat.runtime import Runtime


def get_repochat_version() -> str:
    from repochat import __version__

    return __version__


def get_runtime(request: Request) -> Runtime:
    """The Runtime the app was created with."""
    return request.app.state.runtime
