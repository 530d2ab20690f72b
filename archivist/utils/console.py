"""Shared rich console for the interactive session.

Mail content is printed through this console, so emoji codes such as
``:smile:`` and rich's automatic highlighting are switched off; a message
body is shown exactly as received.
"""

from typing import Optional

from rich.console import Console

_console: Optional[Console] = None


def create_console(**options) -> Console:
    """Build a console with the session defaults, overridable per keyword."""
    settings = {"emoji": False, "highlight": False}
    settings.update(options)
    return Console(**settings)


def get_console() -> Console:
    """Get the shared Console instance"""
    global _console

    if _console is None:
        _console = create_console()

    return _console


def use_console(console: Optional[Console]) -> None:
    """Replace the shared console; ``None`` restores a fresh default on next use."""
    global _console
    _console = console
