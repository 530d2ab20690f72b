"""Email address validation utilities."""

from email_validator import EmailNotValidError, validate_email

from archivist.utils.errors import InvalidEmailAddressError
from archivist.utils.logging import get_logger

logger = get_logger(__name__)


class EmailValidator:
    """Validate email address syntax"""

    @staticmethod
    def parse_address(text: str) -> str:
        """Return ``text`` stripped if it is a well-formed address.

        Only syntax is checked (``local-part@domain``); no DNS lookups are made.

        Raises:
            InvalidEmailAddressError: If the address is malformed
        """
        address = text.strip() if isinstance(text, str) else ""

        if not address:
            raise InvalidEmailAddressError("Email address is required")

        try:
            validate_email(address, check_deliverability=False)
        except EmailNotValidError as e:
            logger.debug(f"Rejected email address: {e}")
            raise InvalidEmailAddressError(f"Invalid email address: {e}") from e

        return address

    @staticmethod
    def domain_of(address: str) -> str:
        """Return the part of ``address`` after its last ``@``."""
        return address.rpartition("@")[2]
