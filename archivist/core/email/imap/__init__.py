"""IMAP retrieval client."""

from .client import IMAPRetrievalClient, RetrievalClient, open_imap_session
from .protocol import parse_list_response, quote_mailbox

__all__ = [
    "IMAPRetrievalClient",
    "RetrievalClient",
    "open_imap_session",
    "parse_list_response",
    "quote_mailbox",
]
