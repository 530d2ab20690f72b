"""Compose-and-send transaction."""

from typing import Optional

from archivist.core.email.smtp import SubmissionClient
from archivist.core.validation.selection import RECONFIRMATION, Confirmation
from archivist.ui.components import InputReader
from archivist.utils.logging import get_logger, log_call

from .display import ComposeDisplay
from .input import DraftInput

logger = get_logger(__name__)


class ComposeWorkflow:
    """Orchestrates one compose-and-send transaction.

    1. Collect recipient, subject and body
    2. Ask for reconfirmation
    3. Send, or drop the draft when the operator cancels

    Nothing reaches the submission client unless the operator answers with
    the confirm token.
    """

    def __init__(
        self,
        reader: InputReader,
        submission: SubmissionClient,
        confirmation: Confirmation = RECONFIRMATION,
    ):
        self.reader = reader
        self.submission = submission
        self.confirmation = confirmation
        self.input = DraftInput(reader)
        self.display = ComposeDisplay(reader.messages, reader.catalog)

    @log_call
    def execute(self) -> Optional[str]:
        """Run the transaction.

        Returns:
            The recipient address once sent, or None if cancelled

        Raises:
            SMTPError: If sending fails after confirmation
        """
        self.display.show_header()
        draft = self.input.prompt_all()
        self.display.show_editing_finished()

        if not self.reader.read_confirmation(self.confirmation):
            logger.info("Sending cancelled at reconfirmation")
            self.display.show_cancelled()
            return None

        self.display.show_sending()
        self.submission.send(draft.to_message(self.submission.address))

        self.display.show_success(draft.recipient)
        return draft.recipient
