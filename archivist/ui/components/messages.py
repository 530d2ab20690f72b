"""Simple status messages (no panels)."""

from typing import Iterable, Optional

from rich.console import Console
from rich.markup import escape

from archivist.utils.console import get_console


class StatusMessage:
    """Inline feedback printed during the session.

    Catalog text is escaped, so bracketed menu entries such as ``[yes]``
    print literally instead of being read as rich markup.
    """

    def __init__(self, console: Optional[Console] = None):
        self.console = console or get_console()

    def plain(self, message: str) -> None:
        """Print text without styling."""
        self.console.print(escape(message), highlight=False)

    def lines(self, lines: Iterable[str]) -> None:
        for line in lines:
            self.plain(line)

    def success(self, message: str) -> None:
        """Print success message."""
        self.console.print(f"[green]{escape(message)}[/green]", highlight=False)

    def error(self, message: str) -> None:
        """Print error message."""
        self.console.print(f"[red]{escape(message)}[/red]", highlight=False)

    def info(self, message: str) -> None:
        """Print info message."""
        self.console.print(f"[cyan]{escape(message)}[/cyan]", highlight=False)

    def status(self, message: str) -> None:
        """Print status message."""
        self.console.print(f"[dim]{escape(message)}[/dim]", highlight=False)
