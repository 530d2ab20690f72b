"""Session controller domain models"""

from .draft import Draft
from .mailbox import UNSUPPORTED_ENCODING_MARKER, MailboxListing, MessageSubjectIndex, SubjectEntry
from .session import Session

__all__ = [
    "Draft",
    "MailboxListing",
    "MessageSubjectIndex",
    "Session",
    "SubjectEntry",
    "UNSUPPORTED_ENCODING_MARKER",
]
