"""IMAP client for listing mailboxes and fetching messages."""

import imaplib
from typing import List, Optional, Protocol

from archivist.core.models import Session
from archivist.utils.config import NetworkConfig
from archivist.utils.errors import IMAPError, InvalidCredentialsError, NetworkError
from archivist.utils.logging import get_logger, log_call

from .protocol import IMAP_OK, message_parts, parse_list_response, quote_mailbox

logger = get_logger(__name__)


class RetrievalClient(Protocol):
    """Lists mailboxes and fetches stored messages (IMAP-equivalent)."""

    host: str

    def list_mailboxes(self, reference: str = "", pattern: str = "*") -> List[str]:
        ...

    def select(self, mailbox: str) -> int:
        ...

    def fetch(self, sequence_number: int) -> List[bytes]:
        ...

    def logout(self) -> None:
        ...


class IMAPRetrievalClient:
    """Blocking IMAP session built on ``imaplib``.

    Create with :meth:`connect`, then authenticate with :meth:`login`.
    """

    def __init__(self, imap: imaplib.IMAP4, host: str):
        self._imap = imap
        self.host = host
        self.selected: Optional[str] = None
        self._exists: Optional[int] = None

    def __repr__(self) -> str:
        return f"IMAPRetrievalClient(host={self.host!r}, selected={self.selected!r})"

    @classmethod
    def connect(cls, host: str, port: int = 993, use_ssl: bool = True,
                timeout: float = 30.0) -> "IMAPRetrievalClient":
        """Open the connection and read the server greeting.

        Raises:
            NetworkError: If the server cannot be reached
        """
        try:
            if use_ssl:
                imap = imaplib.IMAP4_SSL(host, port, timeout=timeout)
            else:
                imap = imaplib.IMAP4(host, port, timeout=timeout)
                imap.starttls()

        except (imaplib.IMAP4.error, OSError) as e:
            raise NetworkError(
                f"Failed to connect to IMAP server {host}:{port}: {e}",
                details={"host": host, "port": port},
            ) from e

        logger.debug(f"Connected to IMAP server {host}:{port}")
        return cls(imap, host)

    @log_call
    def login(self, address: str, password: str) -> "IMAPRetrievalClient":
        """Authenticate the session.

        Raises:
            InvalidCredentialsError: If the server rejects the credentials
        """
        try:
            self._imap.login(address, password)

        except imaplib.IMAP4.error as e:
            self._shutdown()
            raise InvalidCredentialsError(
                f"IMAP login failed: {e}", details={"host": self.host}
            ) from e

        # imaplib sends command arguments as ASCII
        except UnicodeEncodeError as e:
            self._shutdown()
            raise InvalidCredentialsError(
                "IMAP login failed: address and password must be ASCII",
                details={"host": self.host},
            ) from e

        except OSError as e:
            self._shutdown()
            raise NetworkError(
                f"Connection lost during IMAP login: {e}", details={"host": self.host}
            ) from e

        logger.info(f"Logged in to IMAP server {self.host}")
        return self

    def _shutdown(self) -> None:
        try:
            self._imap.shutdown()
        except OSError:
            logger.debug("IMAP socket already closed")

    def _check(self, status: str, data, operation: str) -> None:
        if status != IMAP_OK:
            reason = data[0] if data else b"No response"
            if isinstance(reason, bytes):
                reason = reason.decode("utf-8", errors="replace")
            raise IMAPError(
                f"IMAP {operation} failed: {reason}",
                details={"host": self.host, "status": status},
            )

    @log_call
    def list_mailboxes(self, reference: str = "", pattern: str = "*") -> List[str]:
        """Return mailbox names in server order.

        Raises:
            IMAPError: If the LIST command fails
        """
        try:
            status, data = self._imap.list(quote_mailbox(reference), pattern)
        except (imaplib.IMAP4.error, OSError) as e:
            raise IMAPError(f"IMAP list failed: {e}", details={"host": self.host}) from e

        self._check(status, data, "list")
        return parse_list_response(data)

    @log_call
    def select(self, mailbox: str) -> int:
        """Select ``mailbox`` read-only and return its message count.

        Raises:
            IMAPError: If the mailbox cannot be selected
        """
        try:
            status, data = self._imap.select(quote_mailbox(mailbox), readonly=True)
        except (imaplib.IMAP4.error, OSError) as e:
            raise IMAPError(
                f"IMAP select failed: {e}", details={"host": self.host, "mailbox": mailbox}
            ) from e

        self._check(status, data, f"select '{mailbox}'")

        self.selected = mailbox
        try:
            self._exists = int(data[0])
        except (TypeError, ValueError, IndexError):
            self._exists = None

        logger.debug(f"Selected IMAP mailbox: {mailbox} ({self._exists} messages)")
        return self._exists or 0

    @log_call
    def fetch(self, sequence_number: int) -> List[bytes]:
        """Fetch the full raw message at ``sequence_number``.

        Returns an empty list when there is no such message. Sequence numbers
        beyond the count reported by SELECT are answered locally, since many
        servers reply BAD instead of an empty result.

        Raises:
            IMAPError: If the FETCH command fails
        """
        if self.selected is None:
            raise IMAPError("No mailbox selected", details={"host": self.host})

        if sequence_number < 1 or (self._exists is not None and sequence_number > self._exists):
            return []

        try:
            status, data = self._imap.fetch(str(sequence_number), "(RFC822)")
        except (imaplib.IMAP4.error, OSError) as e:
            raise IMAPError(
                f"IMAP fetch failed: {e}",
                details={"host": self.host, "sequence": sequence_number},
            ) from e

        self._check(status, data, f"fetch {sequence_number}")
        return message_parts(data)

    @log_call
    def logout(self) -> None:
        """End the session.

        Raises:
            IMAPError: If the server does not acknowledge the logout
        """
        try:
            status, data = self._imap.logout()
        except (imaplib.IMAP4.error, OSError) as e:
            raise IMAPError(f"IMAP logout failed: {e}", details={"host": self.host}) from e

        if status != "BYE":
            raise IMAPError(
                f"IMAP logout failed: unexpected status {status}", details={"host": self.host}
            )

        self.selected = None
        logger.info(f"Logged out from IMAP server {self.host}")


## IMAP Session Factory


def open_imap_session(session: Session, network: NetworkConfig) -> IMAPRetrievalClient:
    """Connect to ``session.retrieval_host`` and log in."""
    client = IMAPRetrievalClient.connect(
        session.retrieval_host,
        port=network.imap_port,
        use_ssl=network.imap_use_ssl,
        timeout=network.timeout,
    )
    return client.login(session.address, session.password)
