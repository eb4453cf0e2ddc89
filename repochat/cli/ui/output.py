# repochat/cli/ui/output.py
"""Output methods for CLI display."""

from __future__ import annotations

from rich.markup import escape

from repochat.core.models import Message, Sender

from .console import CHECK, CROSS, WARN, Markdown, Panel, Syntax, Table, console

_SENDER_STYLE = {
    Sender.USER: "bold blue",
    Sender.AI: "bold green",
    Sender.SYSTEM: "dim",
}


class OutputMixin:
    """Mixin providing output methods for the UI class."""

    def print(self, msg: str, style: str = "") -> None:
        if style:
            console.print(f"[{style}]{escape(msg)}[/{style}]")
        else:
            console.print(msg, markup=False, highlight=False)

    def header(self, title: str, subtitle: str = "") -> None:
        """Print a command header in a fitted box."""
        if subtitle:
            content = f"[bold]{escape(title)}[/bold]\n[dim]{escape(subtitle)}[/dim]"
        else:
            content = f"[bold]{escape(title)}[/bold]"
        console.print(Panel.fit(content, border_style="blue"))

    def success(self, msg: str) -> None:
        console.print(f"[green]{CHECK}[/green] {escape(msg)}")

    def error(self, msg: str) -> None:
        console.print(f"[red]{CROSS}[/red] {escape(msg)}")

    def warning(self, msg: str, detail: str = "") -> None:
        detail_str = f" [dim]({escape(detail)})[/dim]" if detail else ""
        console.print(f"[yellow]{WARN}[/yellow] {escape(msg)}{detail_str}")

    def info(self, msg: str) -> None:
        console.print(f"[dim]{escape(msg)}[/dim]")

    def summary_panel(self, content: str, title: str = "", style: str = "green") -> None:
        console.print(Panel(escape(content), title=title, border_style=style))

    def table(self, headers: list[str], rows: list[list[str]], title: str = "") -> None:
        table = Table(title=title) if title else Table()
        for header in headers:
            table.add_column(header)
        for row in rows:
            table.add_row(*(escape(str(cell)) for cell in row))
        console.print(table)

    def syntax(self, code: str, language: str = "yaml") -> None:
        console.print(Syntax(code, language, theme="monokai", line_numbers=False))

    def markdown(self, text: str) -> None:
        console.print(Markdown(text))

    def message(self, message: Message) -> None:
        """Print one transcript message."""
        style = _SENDER_STYLE[message.sender]
        if message.sender is Sender.SYSTEM:
            console.print(f"[{style}]{escape(message.text)}[/{style}]")
        else:
            console.print(f"[{style}]{message.sender.value}:[/{style}] {escape(message.text)}")
