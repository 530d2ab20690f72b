"""Credential entry."""

from archivist.core.models import Session
from archivist.ui.catalog import PromptKey
from archivist.ui.components import InputReader
from archivist.utils.logging import get_logger

logger = get_logger(__name__)


class CredentialBuilder:
    """Builds a :class:`Session` from console input."""

    def __init__(self, reader: InputReader):
        self.reader = reader

    def build_session(self) -> Session:
        """Prompt for address and password and derive the server hostnames.

        The address is re-asked until it is well formed; the password is
        taken verbatim and never echoed.
        """
        address = self.reader.read_email(PromptKey.LOGIN_EMAIL_ADDR)
        password = self.reader.read_password(self.reader.catalog[PromptKey.LOGIN_PASSWORD])

        session = Session.from_credentials(address, password)
        logger.info(
            f"Credentials entered for {session.address} "
            f"(smtp={session.submission_host}, imap={session.retrieval_host})"
        )
        return session
