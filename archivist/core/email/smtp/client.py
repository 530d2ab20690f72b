"""SMTP client for submitting composed messages"""

import smtplib
from contextlib import contextmanager
from email.message import Message
from typing import Iterator, Protocol

from archivist.core.models import Session
from archivist.utils.config import NetworkConfig
from archivist.utils.errors import InvalidCredentialsError, NetworkError, SMTPError
from archivist.utils.logging import get_logger, log_call

logger = get_logger(__name__)


class SubmissionClient(Protocol):
    """Delivers composed messages (SMTP-equivalent)."""

    host: str
    address: str

    def test_connection(self) -> bool:
        ...

    def send(self, message: Message) -> None:
        ...


class SMTPSubmissionClient:
    """Blocking SMTP client; every operation uses a fresh authenticated connection."""

    def __init__(self, host: str, address: str, password: str,
                 port: int = 465, use_ssl: bool = True, timeout: float = 30.0):
        self.host = host
        self.port = port
        self.address = address
        self._password = password
        self.use_ssl = use_ssl
        self.timeout = timeout

    def __repr__(self) -> str:
        return f"SMTPSubmissionClient(host={self.host!r}, port={self.port})"

    @contextmanager
    def _connection(self) -> Iterator[smtplib.SMTP]:
        """Open, authenticate and finally close one SMTP connection."""

        server = None
        try:
            if self.use_ssl:
                server = smtplib.SMTP_SSL(self.host, self.port, timeout=self.timeout)
            else:
                server = smtplib.SMTP(self.host, self.port, timeout=self.timeout)
                server.starttls()

            server.login(self.address, self._password)

        except smtplib.SMTPAuthenticationError as e:
            self._close(server)
            raise InvalidCredentialsError(
                f"SMTP authentication failed: {e.smtp_code} {self._reply_text(e.smtp_error)}",
                details={"host": self.host},
            ) from e

        # smtplib encodes AUTH arguments as ASCII
        except UnicodeEncodeError as e:
            self._close(server)
            raise InvalidCredentialsError(
                "SMTP authentication failed: address and password must be ASCII",
                details={"host": self.host},
            ) from e

        except (smtplib.SMTPException, OSError) as e:
            self._close(server)
            raise NetworkError(
                f"Failed to connect to SMTP server {self.host}:{self.port}: {e}",
                details={"host": self.host, "port": self.port},
            ) from e

        try:
            yield server
        finally:
            self._close(server)

    @staticmethod
    def _close(server) -> None:
        if server is None:
            return
        try:
            server.quit()
        except (smtplib.SMTPException, OSError):
            logger.debug("SMTP connection already closed")

    @staticmethod
    def _reply_text(reply) -> str:
        if isinstance(reply, bytes):
            return reply.decode("utf-8", errors="replace")
        return str(reply)

    @log_call
    def test_connection(self) -> bool:
        """Connect, authenticate and NOOP once.

        Raises:
            InvalidCredentialsError: If the server rejects the credentials
            NetworkError: If the server cannot be reached or drops the connection
        """
        with self._connection() as server:
            try:
                code, _ = server.noop()
            except (smtplib.SMTPException, OSError) as e:
                raise NetworkError(
                    f"SMTP server {self.host}:{self.port} dropped the connection: {e}",
                    details={"host": self.host, "port": self.port},
                ) from e

        logger.info(f"SMTP connectivity check against {self.host} returned {code}")
        return code == 250

    @log_call
    def send(self, message: Message) -> None:
        """Send ``message`` to the addresses in its To header.

        Raises:
            SMTPError: If the message could not be delivered
        """
        recipient = message["To"]

        try:
            with self._connection() as server:
                refused = server.send_message(message)

        except (NetworkError, InvalidCredentialsError) as e:
            raise SMTPError(e.message, details={"host": self.host}) from e

        except smtplib.SMTPRecipientsRefused as e:
            raise SMTPError(
                f"Recipient refused: {', '.join(e.recipients)}",
                details={"host": self.host},
            ) from e

        except (smtplib.SMTPException, OSError) as e:
            raise SMTPError(f"Failed to send email: {e}", details={"host": self.host}) from e

        if refused:
            raise SMTPError(
                f"Recipient refused: {', '.join(refused)}", details={"host": self.host}
            )

        logger.info(f"Email sent to {recipient}")


## SMTP Client Factory


def get_smtp_client(session: Session, network: NetworkConfig) -> SMTPSubmissionClient:
    """Build the submission client for ``session``."""
    return SMTPSubmissionClient(
        host=session.submission_host,
        address=session.address,
        password=session.password,
        port=network.smtp_port,
        use_ssl=network.smtp_use_ssl,
        timeout=network.timeout,
    )
