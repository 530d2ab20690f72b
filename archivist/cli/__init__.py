"""Command-line entry point and interactive session loop."""

from .cli import main

__all__ = ["main"]
