"""Session action loop.

After login the operator picks actions from a numbered menu until they
choose to log out. Recoverable failures inside one action are reported and
the menu is shown again; a closed input stream ends the loop early.
"""

from enum import IntEnum

from archivist.core.validation import ValidatedRange
from archivist.features.compose import ComposeWorkflow
from archivist.features.fetch import MailboxBrowser
from archivist.features.login import AuthenticatedSession
from archivist.ui.catalog import PromptKey
from archivist.ui.components import InputReader
from archivist.utils.errors import InputClosedError, recoverable_action
from archivist.utils.logging import get_logger

logger = get_logger(__name__)


class Action(IntEnum):
    """Menu entries of the action loop."""

    LOGOUT = 0
    COMPOSE = 1
    FETCH = 2


ACTION_RANGE = ValidatedRange(int(min(Action)), int(max(Action)))


class SessionLoop:
    """Repeats the action menu for one authenticated session."""

    def __init__(
        self,
        reader: InputReader,
        authenticated: AuthenticatedSession,
        wait_for_exit: bool = True,
    ):
        self.reader = reader
        self.authenticated = authenticated
        self.wait_for_exit = wait_for_exit
        self.messages = reader.messages
        self.catalog = reader.catalog
        self.composer = ComposeWorkflow(reader, authenticated.submission)
        self.browser = MailboxBrowser(reader, authenticated.retrieval)

    def read_action(self) -> Action:
        self.messages.plain(self.catalog[PromptKey.ACTION_LIST])
        number = self.reader.read_selection(
            PromptKey.ACTION_SELECTION, PromptKey.ACTION_LITERAL, ACTION_RANGE
        )
        return Action(number)

    def compose(self) -> None:
        with recoverable_action("Sending message", self.composer.display.show_error):
            self.composer.execute()

    def fetch(self) -> None:
        with recoverable_action("Fetching message", self.browser.display.show_error):
            message = self.browser.execute()
            if message is not None:
                self.browser.display.show_message(message)

    def _report_logout_failure(self, message: str) -> None:
        self.messages.error(f"{self.catalog[PromptKey.LOGOUT_FAIL]}{message}")

    def logout(self) -> None:
        """Close the retrieval session, then wait for the operator to leave."""
        self.messages.status(
            f"{self.catalog[PromptKey.LOGGING_OUT]}{self.authenticated.session.retrieval_host}..."
        )

        with recoverable_action("Logging out", self._report_logout_failure) as guard:
            self.authenticated.retrieval.logout()

        if guard.error is None:
            self.messages.success(self.catalog[PromptKey.LOGOUT_SUCCEED])

        if self.wait_for_exit:
            try:
                self.reader.read_line(self.catalog[PromptKey.EXIT])
            except InputClosedError:
                logger.debug("Input closed while waiting to exit")

    def _close_retrieval(self) -> None:
        """Send LOGOUT without the exit prompt; input is already gone."""
        with recoverable_action("Logging out", self._report_logout_failure):
            self.authenticated.retrieval.logout()

    def run(self) -> None:
        """Loop until the operator logs out.

        Raises:
            InputClosedError: If the input stream closes mid-session. The
                retrieval session is logged out first.
        """
        try:
            while True:
                action = self.read_action()
                logger.debug(f"Selected action {action.name}")

                if action is Action.COMPOSE:
                    self.compose()
                elif action is Action.FETCH:
                    self.fetch()
                else:
                    self.logout()
                    return

        except InputClosedError:
            logger.warning("Input closed mid-session, logging out")
            self._close_retrieval()
            raise
