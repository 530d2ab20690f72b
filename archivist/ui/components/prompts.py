"""Validated console input.

Every question the agent asks goes through :class:`InputReader`: it shows a
prompt, reads one line, strips it and hands it to a parser. Parsers raise
:class:`~archivist.utils.errors.ValidationError` to reject a line; the reader
then prints the invalid-input message and asks again, with no retry limit.
A closed input stream raises :class:`~archivist.utils.errors.InputClosedError`.
"""

from typing import Callable, Optional, Protocol, TypeVar

from rich.console import Console
from rich.markup import escape

from archivist.core.validation import Confirmation, EmailValidator, EnumValues, ValidatedRange
from archivist.ui.catalog import PromptCatalog, PromptKey
from archivist.utils.console import get_console
from archivist.utils.errors import InputClosedError, ValidationError
from archivist.utils.logging import get_logger

from .messages import StatusMessage

logger = get_logger(__name__)

T = TypeVar("T")


class LineSource(Protocol):
    """Reads one line after showing ``prompt`` (``rich.Console.input`` shape)."""

    def __call__(self, prompt: str = "", *, password: bool = False) -> str:
        ...


class InputReader:
    """Blocking, re-prompting reader for console input."""

    def __init__(
        self,
        catalog: PromptCatalog,
        console: Optional[Console] = None,
        line_source: Optional[LineSource] = None,
    ):
        self.catalog = catalog
        self.console = console or get_console()
        self.messages = StatusMessage(self.console)
        self._line_source = line_source or self.console.input

    def read_line(self, prompt: str, password: bool = False) -> str:
        """Show ``prompt`` and return the next line, stripped.

        Raises:
            InputClosedError: If the input stream is closed
        """
        try:
            line = self._line_source(escape(prompt), password=password)
        except EOFError as e:
            logger.warning("Console input closed while waiting for a line")
            raise InputClosedError() from e

        return line.strip()

    def read_password(self, prompt: str) -> str:
        """Read a secret without echoing it."""
        return self.read_line(prompt, password=True)

    def read_until_valid(
        self,
        prompt: str,
        parse_and_check: Callable[[str], T],
        invalid_message: str,
    ) -> T:
        """Ask until ``parse_and_check`` accepts a line and return its result."""
        while True:
            text = self.read_line(prompt)
            try:
                return parse_and_check(text)
            except ValidationError as e:
                logger.debug(f"Rejected input: {e.message}")
                self.messages.error(invalid_message)

    def _enumerated_invalid(self, subject: PromptKey, values: EnumValues) -> str:
        return (
            f"{self.catalog[PromptKey.INVALID]}{self.catalog[subject]}: "
            f"{self.catalog[PromptKey.SHOULD_BE_ONE_OF]}\n  {values.valid_values()}"
        )

    def read_selection(
        self, prompt: PromptKey, subject: PromptKey, valid_range: ValidatedRange
    ) -> int:
        """Read an integer inside ``valid_range``."""
        return self.read_until_valid(
            self.catalog[prompt],
            valid_range.parse,
            self._enumerated_invalid(subject, valid_range),
        )

    def read_email(self, prompt: PromptKey) -> str:
        """Read a syntactically valid email address."""
        return self.read_until_valid(
            self.catalog[prompt],
            EmailValidator.parse_address,
            self.catalog[PromptKey.EMAIL_ADDR_INVALID],
        )

    def read_confirmation(self, confirmation: Confirmation) -> bool:
        """Show the reconfirmation menu; ``True`` only for the confirm token."""
        self.messages.plain(self.catalog[PromptKey.SEND_RECONFIRM_LIST])
        return self.read_until_valid(
            self.catalog[PromptKey.SEND_RECONFIRM_SELECTION],
            confirmation.parse,
            self._enumerated_invalid(PromptKey.SEND_CONFIRM_LITERAL, confirmation),
        )
