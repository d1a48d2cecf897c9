"""Rich console rendering of workflow progress."""

from __future__ import annotations

from collections.abc import Sequence

import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table

__all__ = ["ConsoleReporter", "console"]

console = Console(highlight=False)


class ConsoleReporter:
    """``Reporter`` implementation printing to a rich console.

    Messages are escaped, so branch names and ``[twgit]`` commit prefixes are
    printed literally.
    """

    def __init__(self, output: Console | None = None) -> None:
        self.console = output or console

    def processing(self, message: str) -> None:
        self.console.print(f"[dim]{escape(message)}[/dim]")

    def info(self, message: str) -> None:
        self.console.print(f"[bold]{escape(message)}[/bold]")

    def help(self, message: str) -> None:
        self.console.print(f"[cyan]{escape(message)}[/cyan]")

    def warning(self, message: str) -> None:
        self.console.print(f"[yellow]/!\\ {escape(message)}[/yellow]")

    def error(self, message: str) -> None:
        self.console.print(f"[red]{escape(message)}[/red]")

    def table(self, rows: Sequence[Sequence[object]], headers: Sequence[str]) -> None:
        table = Table(show_header=True, header_style="bold cyan")
        for header in headers:
            table.add_column(header)
        for row in rows:
            table.add_row(*(escape(str(cell)) for cell in row))
        self.console.print(table)

    def confirm(self, question: str) -> bool:
        return typer.confirm(question, default=False)
