"""Input collection for email composition."""

from typing import Iterable, Iterator

from archivist.core.models import Draft
from archivist.ui.catalog import PromptKey
from archivist.ui.components import InputReader
from archivist.utils.logging import get_logger

logger = get_logger(__name__)

BODY_TERMINATOR_BLANKS = 2
BODY_LINE_PROMPT = "  "


def accumulate_body(lines: Iterable[str]) -> str:
    """Join body lines until two consecutive blank lines.

    A single blank line between paragraphs is kept; the terminating blanks
    and any other trailing whitespace are dropped.
    """
    body = []
    blank_run = 0

    for line in lines:
        body.append(line)
        blank_run = blank_run + 1 if not line.strip() else 0
        if blank_run >= BODY_TERMINATOR_BLANKS:
            break

    return "\n".join(body).rstrip()


class DraftInput:
    """Collects the fields of a new message."""

    def __init__(self, reader: InputReader):
        self.reader = reader
        self.catalog = reader.catalog

    def _body_lines(self) -> Iterator[str]:
        while True:
            yield self.reader.read_line(BODY_LINE_PROMPT)

    def prompt_recipient(self) -> str:
        return self.reader.read_email(PromptKey.COMPOSE_TO)

    def prompt_subject(self) -> str:
        return self.reader.read_line(self.catalog[PromptKey.COMPOSE_SUBJECT])

    def prompt_body(self) -> str:
        """Read body lines; see :func:`accumulate_body`."""
        self.reader.messages.plain(self.catalog[PromptKey.COMPOSE_CONTENT])
        return accumulate_body(self._body_lines())

    def prompt_all(self) -> Draft:
        """Prompt for recipient, subject and body in sequence."""
        recipient = self.prompt_recipient()
        subject = self.prompt_subject()
        body = self.prompt_body()

        logger.debug(f"Draft collected ({len(body)} characters of body)")
        return Draft(recipient=recipient, subject=subject, body=body)
