"""Reusable UI components for the interactive session."""

from .messages import StatusMessage
from .prompts import InputReader

__all__ = [
    "InputReader",
    "StatusMessage",
]
