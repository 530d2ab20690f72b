"""Line-oriented helpers for raw RFC 822 message text.

These are heuristics, not a MIME parser: multipart or encoded bodies come out
in their raw form.
"""

from enum import Enum
from typing import Iterable, List

from archivist.utils.errors import MessageDecodeError

SUBJECT_MARKER = "Subject:"
SENDER_MARKER = "From: "
SUPPRESSED_MARKERS = ("Content", "To")


class LineKind(Enum):
    """How the presentation step treats one line of a message."""

    BODY_START = "body_start"
    SUPPRESSED = "suppressed"
    TEXT = "text"


def is_body_start(line: str) -> bool:
    """Readable output begins at the sender header."""
    return line.startswith(SENDER_MARKER)


def is_suppressed(line: str) -> bool:
    """Content-* and To headers are never shown."""
    return line.startswith(SUPPRESSED_MARKERS)


def classify_line(line: str) -> LineKind:
    if is_suppressed(line):
        return LineKind.SUPPRESSED
    if is_body_start(line):
        return LineKind.BODY_START
    return LineKind.TEXT


def readable_lines(message: str) -> List[str]:
    """Return the lines of ``message`` from the first ``From: `` line onward,
    minus suppressed headers."""
    lines = []
    started = False

    for line in message.splitlines():
        kind = classify_line(line)
        if kind is LineKind.BODY_START:
            started = True
        if started and kind is not LineKind.SUPPRESSED:
            lines.append(line)

    return lines


def extract_subject(lines: Iterable[str]) -> str:
    """Text of the first ``Subject:`` line, or an empty string."""
    for line in lines:
        if line.startswith(SUBJECT_MARKER):
            return line[len(SUBJECT_MARKER):].strip()

    return ""


def decode_message(raw: bytes, sequence: int | None = None) -> str:
    """Decode a fetched message strictly as UTF-8."""
    try:
        return raw.decode("utf-8")
    except UnicodeDecodeError as e:
        raise MessageDecodeError(
            f"Message {sequence} is not valid UTF-8" if sequence else None,
            details={"sequence": sequence, "position": e.start},
        ) from e


def subject_of(raw: bytes) -> str:
    """Subject of a raw message; undecodable bytes are replaced for display."""
    return extract_subject(raw.decode("utf-8", errors="replace").splitlines())
