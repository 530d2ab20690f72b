"""Email composition feature module.

This module provides the compose-and-send transaction:
- Recipient, subject and multi-line body collection
- Explicit yes/no reconfirmation before anything is sent
- Submission through the logged-in SMTP client

Public API:
    ComposeWorkflow - the transaction itself
    DraftInput - input collection (for testing/customization)
"""

from .input import DraftInput, accumulate_body
from .workflow import ComposeWorkflow

__all__ = [
    "ComposeWorkflow",  # Main entry point
    "DraftInput",  # Input collection
    "accumulate_body",
]
