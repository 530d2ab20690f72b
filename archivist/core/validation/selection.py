"""Value types for menu selections and yes/no gates."""

import re
from dataclasses import dataclass
from typing import Protocol

from archivist.utils.errors import InvalidConfirmationError, InvalidSelectionError

# Optional sign and ASCII digits only; int() alone also takes "1_0" and "２"
_INTEGER = re.compile(r"[+-]?[0-9]+")


class EnumValues(Protocol):
    """Types whose legal inputs can be listed for the operator."""

    def valid_values(self) -> str:
        ...


@dataclass(frozen=True)
class ValidatedRange:
    """Inclusive integer bound ``[lo, hi]`` for menu and index selections."""

    lo: int
    hi: int

    def __post_init__(self):
        if self.lo > self.hi:
            raise ValueError(f"Empty range: [{self.lo}, {self.hi}]")

    def __contains__(self, value: int) -> bool:
        return self.lo <= value <= self.hi

    def valid_values(self) -> str:
        """List every legal value, e.g. ``[1, 2, 3]``."""
        return "[" + ", ".join(str(x) for x in range(self.lo, self.hi + 1)) + "]"

    def parse(self, text: str) -> int:
        """Parse ``text`` as a plain decimal integer inside the range."""
        digits = text.strip()
        if not _INTEGER.fullmatch(digits):
            raise InvalidSelectionError(
                f"'{text}' is not a number", details={"valid": self.valid_values()}
            )

        value = int(digits)

        if value not in self:
            raise InvalidSelectionError(
                f"{value} is out of range", details={"valid": self.valid_values()}
            )

        return value


@dataclass(frozen=True)
class Confirmation:
    """Two-valued gate guarding an irreversible action."""

    confirm: str = "yes"
    cancel: str = "no"

    def valid_values(self) -> str:
        return f"[{self.confirm}, {self.cancel}]"

    def parse(self, text: str) -> bool:
        """Return ``True`` for the confirm token, ``False`` for the cancel token.

        Matching ignores case and surrounding whitespace.
        """
        token = text.strip().lower()

        if token == self.confirm.lower():
            return True
        if token == self.cancel.lower():
            return False

        raise InvalidConfirmationError(
            f"'{text}' is not a confirmation", details={"valid": self.valid_values()}
        )


RECONFIRMATION = Confirmation()
