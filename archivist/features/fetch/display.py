"""Fetch display coordinator."""

from archivist.core.email.body import readable_lines
from archivist.core.models import MailboxListing, MessageSubjectIndex
from archivist.ui.catalog import PromptCatalog, PromptKey
from archivist.ui.components import StatusMessage


class FetchDisplay:
    """Coordinates display for the fetch feature."""

    def __init__(self, messages: StatusMessage, catalog: PromptCatalog):
        self.messages = messages
        self.catalog = catalog

    def show_mailboxes(self, listing: MailboxListing) -> None:
        self.messages.plain(self.catalog[PromptKey.FETCH_MAILBOX])
        for number, name in enumerate(listing, start=1):
            self.messages.plain(f"  [{number}] {name}")

    def show_no_mailboxes(self) -> None:
        self.messages.info(self.catalog[PromptKey.FETCH_MAILBOX_NONE])

    def show_empty_mailbox(self, mailbox: str) -> None:
        self.messages.info(f'> "{mailbox}"{self.catalog[PromptKey.FETCH_MAILBOX_EMPTY]}')

    def show_index(self, index: MessageSubjectIndex) -> None:
        self.messages.success(self.catalog[PromptKey.FETCH_MESSAGE_LIST])
        for entry in index:
            self.messages.plain(f"  [{entry.index}] {entry.subject}")

    def show_message(self, message: str) -> None:
        """Print the readable part of a raw message between the frame lines."""
        self.messages.plain(self.catalog[PromptKey.MESSAGE_START])
        self.messages.lines(f"  {line}" for line in readable_lines(message))
        self.messages.plain(self.catalog[PromptKey.MESSAGE_END])

    def show_error(self, message: str) -> None:
        self.messages.error(f"{self.catalog[PromptKey.FETCH_MESSAGE_FAIL]}{message}")
