"""IMAP wire helpers - LIST response parsing and mailbox quoting."""

import re
from typing import List, Optional, Sequence, Tuple, Union

IMAP_OK = "OK"

_LIST_LINE = re.compile(
    rb'^\((?P<flags>[^)]*)\) (?P<delimiter>"(?:[^"\\]|\\.)*"|NIL) ?(?P<name>.*)$'
)

ListItem = Union[bytes, Tuple[bytes, bytes], None]


def _unquote(value: bytes) -> bytes:
    if len(value) >= 2 and value.startswith(b'"') and value.endswith(b'"'):
        return re.sub(rb'\\(.)', rb'\1', value[1:-1])
    return value


def _parse_line(header: bytes, literal: Optional[bytes] = None) -> Optional[str]:
    match = _LIST_LINE.match(header.strip())
    if match is None:
        return None

    name = literal if literal is not None else _unquote(match.group("name").strip())
    return name.decode("utf-8", errors="replace")


def parse_list_response(data: Sequence[ListItem]) -> List[str]:
    """Extract mailbox names from the data part of an ``imaplib`` LIST reply.

    Handles quoted names, bare atoms and names sent as literals (which
    ``imaplib`` returns as ``(header, literal)`` tuples). Order is preserved.
    """
    names = []

    for item in data:
        if item is None or item == b")":
            continue

        if isinstance(item, tuple):
            name = _parse_line(item[0], item[1])
        else:
            name = _parse_line(item)

        if name is not None:
            names.append(name)

    return names


def quote_mailbox(name: str) -> str:
    """Quote a mailbox name for use as a command argument."""
    escaped = name.replace("\\", "\\\\").replace('"', '\\"')
    return f'"{escaped}"'


def message_parts(data: Sequence[ListItem]) -> List[bytes]:
    """Raw message bodies from the data part of an ``imaplib`` FETCH reply."""
    return [item[1] for item in data if isinstance(item, tuple) and len(item) > 1]
