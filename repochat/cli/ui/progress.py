# repochat/cli/ui/progress.py
"""Progress bar and spinner."""

from __future__ import annotations

from typing import Optional

from rich.markup import escape
from rich.progress import (
    BarColumn,
    Progress,
    SpinnerColumn,
    TaskProgressColumn,
    TextColumn,
    TimeElapsedColumn,
)
from rich.status import Status

from .console import console


class FileProgress:
    """
    Progress bar whose total may be learned after it starts.

    Usage:
        with ui.progress("Summarizing") as bar:
            bar.update(completed=3, total=10, description="file 3/10")
    """

    def __init__(self, description: str, total: Optional[int] = None):
        self.description = description
        self.total = total
        self._progress: Optional[Progress] = None
        self._task = None

    def __enter__(self) -> "FileProgress":
        self._progress = Progress(
            SpinnerColumn(),
            TextColumn("[progress.description]{task.description}"),
            BarColumn(),
            TaskProgressColumn(),
            TimeElapsedColumn(),
            console=console,
            transient=True,
        )
        self._progress.__enter__()
        self._task = self._progress.add_task(escape(self.description), total=self.total)
        return self

    def update(
        self,
        *,
        completed: Optional[int] = None,
        total: Optional[int] = None,
        description: Optional[str] = None,
    ) -> None:
        kwargs = {}
        if completed is not None:
            kwargs["completed"] = completed
        if total is not None:
            kwargs["total"] = total
        if description:
            kwargs["description"] = escape(description)
        self._progress.update(self._task, **kwargs)

    def __exit__(self, *args) -> None:
        self._progress.__exit__(*args)


class ProgressMixin:
    """Mixin providing progress methods for the UI class."""

    def progress(self, description: str = "Working...", total: Optional[int] = None) -> FileProgress:
        return FileProgress(description, total)

    def spinner(self, message: str = "Working...") -> Status:
        """
        Spinner for indeterminate work.

        Usage:
            with ui.spinner("AI is thinking..."):
                answer = manager.ask(question)
        """
        return Status(escape(message), console=console, spinner="dots")
