"""Mailbox browse-and-fetch transaction."""

from typing import Optional

from archivist.core.email.body import decode_message, subject_of
from archivist.core.email.imap import RetrievalClient
from archivist.core.models import MailboxListing, MessageSubjectIndex
from archivist.core.validation import ValidatedRange
from archivist.ui.catalog import PromptKey
from archivist.ui.components import InputReader
from archivist.utils.errors import IMAPError
from archivist.utils.logging import get_logger, log_call

from .display import FetchDisplay

logger = get_logger(__name__)

LIST_REFERENCE = ""
LIST_PATTERN = "*"


class MailboxBrowser:
    """Lets the operator pick a mailbox, then a message, and returns its text."""

    def __init__(self, reader: InputReader, retrieval: RetrievalClient):
        self.reader = reader
        self.retrieval = retrieval
        self.display = FetchDisplay(reader.messages, reader.catalog)

    def list_mailboxes(self) -> MailboxListing:
        """Selectable mailboxes, without names the browser cannot render."""
        names = self.retrieval.list_mailboxes(LIST_REFERENCE, LIST_PATTERN)
        listing = MailboxListing(names)

        skipped = len(names) - len(listing)
        if skipped:
            logger.debug(f"Skipped {skipped} mailbox(es) with encoded names")

        return listing

    def build_index(self) -> MessageSubjectIndex:
        """Fetch messages 1, 2, 3, ... of the selected mailbox until one is missing."""
        index = MessageSubjectIndex()
        sequence = 1

        while True:
            parts = self.retrieval.fetch(sequence)
            if not parts:
                break

            index.add(subject_of(parts[0]))
            sequence += 1

        logger.debug(f"Indexed {len(index)} message(s)")
        return index

    def fetch_message(self, sequence: int) -> str:
        """Fetch message ``sequence`` again and decode it.

        Raises:
            IMAPError: If the message has disappeared from the mailbox
            MessageDecodeError: If the message is not valid UTF-8
        """
        parts = self.retrieval.fetch(sequence)
        if not parts:
            raise IMAPError(
                f"Message {sequence} no longer exists", details={"sequence": sequence}
            )

        return decode_message(parts[0], sequence)

    @log_call
    def execute(self) -> Optional[str]:
        """Run the transaction.

        Returns:
            The raw text of the chosen message, or None when there was
            nothing to choose from

        Raises:
            IMAPError: If listing, selecting or fetching fails
            MessageDecodeError: If the chosen message is not valid UTF-8
        """
        listing = self.list_mailboxes()
        if not listing:
            self.display.show_no_mailboxes()
            return None

        self.display.show_mailboxes(listing)
        number = self.reader.read_selection(
            PromptKey.FETCH_MAILBOX_SELECTION,
            PromptKey.FETCH_MAILBOX_LITERAL,
            ValidatedRange(1, len(listing)),
        )
        mailbox = listing.by_number(number)
        self.retrieval.select(mailbox)

        index = self.build_index()
        if not index:
            self.display.show_empty_mailbox(mailbox)
            return None

        self.display.show_index(index)
        sequence = self.reader.read_selection(
            PromptKey.FETCH_MESSAGE_SELECTION,
            PromptKey.FETCH_MESSAGE_LITERAL,
            ValidatedRange(1, index.last_index),
        )

        logger.info(f"Fetching message {sequence} of '{mailbox}'")
        return self.fetch_message(sequence)
