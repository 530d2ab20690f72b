"""Mailbox listing and message index models"""

from dataclasses import dataclass, field
from typing import Iterable, Iterator, List

# Modified UTF-7 names (RFC 3501 5.1.3) contain '&'; the browser cannot render them.
UNSUPPORTED_ENCODING_MARKER = "&"


class MailboxListing:
    """Selectable mailbox names in server order."""

    def __init__(self, names: Iterable[str]):
        self._names: List[str] = [
            name for name in names if UNSUPPORTED_ENCODING_MARKER not in name
        ]

    def __len__(self) -> int:
        return len(self._names)

    def __iter__(self) -> Iterator[str]:
        return iter(self._names)

    def __getitem__(self, position: int) -> str:
        return self._names[position]

    def __bool__(self) -> bool:
        return bool(self._names)

    @property
    def names(self) -> List[str]:
        return list(self._names)

    def by_number(self, number: int) -> str:
        """Return the mailbox shown as ``[number]`` (1-based)."""
        return self._names[number - 1]


@dataclass(frozen=True)
class SubjectEntry:
    """One row of the message index."""

    index: int
    subject: str


@dataclass
class MessageSubjectIndex:
    """Messages of the selected mailbox, numbered from 1."""

    entries: List[SubjectEntry] = field(default_factory=list)

    def add(self, subject: str) -> SubjectEntry:
        entry = SubjectEntry(index=len(self.entries) + 1, subject=subject)
        self.entries.append(entry)
        return entry

    def __len__(self) -> int:
        return len(self.entries)

    def __iter__(self) -> Iterator[SubjectEntry]:
        return iter(self.entries)

    def __bool__(self) -> bool:
        return bool(self.entries)

    @property
    def last_index(self) -> int:
        return len(self.entries)
