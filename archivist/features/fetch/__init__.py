"""Mailbox browsing feature module.

Lists mailboxes, indexes the chosen mailbox by subject and returns the raw
text of the chosen message; ``FetchDisplay.show_message`` prints its
readable part.
"""

from .display import FetchDisplay
from .workflow import MailboxBrowser

__all__ = ["FetchDisplay", "MailboxBrowser"]
