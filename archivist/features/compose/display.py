"""Compose display coordinator."""

from archivist.ui.catalog import PromptCatalog, PromptKey
from archivist.ui.components import StatusMessage


class ComposeDisplay:
    """Coordinates display for compose feature."""

    def __init__(self, messages: StatusMessage, catalog: PromptCatalog):
        self.messages = messages
        self.catalog = catalog

    def show_header(self) -> None:
        """Show the new-message heading and open the draft frame."""
        self.messages.plain(self.catalog[PromptKey.COMPOSE_NEW_MESSAGE])
        self.messages.plain(self.catalog[PromptKey.MESSAGE_START])

    def show_editing_finished(self) -> None:
        """Close the draft frame."""
        self.messages.plain(self.catalog[PromptKey.MESSAGE_END])
        self.messages.plain(self.catalog[PromptKey.COMPOSE_EDITING_FINISH])

    def show_sending(self) -> None:
        self.messages.status(self.catalog[PromptKey.SEND_SENDING])

    def show_success(self, recipient: str) -> None:
        self.messages.success(f"{self.catalog[PromptKey.SEND_SUCCEED]}{recipient}")

    def show_cancelled(self) -> None:
        self.messages.info(self.catalog[PromptKey.SEND_CANCEL])

    def show_error(self, message: str) -> None:
        self.messages.error(f"{self.catalog[PromptKey.SEND_FAIL]}{message}")
