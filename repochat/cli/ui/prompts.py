# repochat/cli/ui/prompts.py
"""Interactive prompts."""

from __future__ import annotations

from rich.prompt import Prompt

from .console import console


class PromptMixin:
    """Mixin providing prompt methods for the UI class."""

    def prompt_text(self, prompt: str, default: str = "") -> str:
        return Prompt.ask(prompt, default=default or None, console=console) or ""
