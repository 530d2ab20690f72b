import smtplib
from unittest.mock import MagicMock, patch

import pytest

from archivist.core.email.smtp import SMTPSubmissionClient, get_smtp_client
from archivist.core.models import Draft, Session
from archivist.utils.config import NetworkConfig
from archivist.utils.errors import InvalidCredentialsError, NetworkError, SMTPError


def make_client(**kwargs):
    defaults = dict(host="smtp.example.com", address="alice@example.com", password="pw")
    defaults.update(kwargs)
    return SMTPSubmissionClient(**defaults)


def make_message():
    return Draft(recipient="bob@example.com", subject="Hello", body="Hi Bob").to_message(
        "alice@example.com"
    )


class TestConnectivityCheck:
    """Test the login-time connectivity check"""

    @patch("archivist.core.email.smtp.client.smtplib.SMTP_SSL")
    def test_success(self, mock_smtp_ssl):
        server = MagicMock()
        server.noop.return_value = (250, b"OK")
        mock_smtp_ssl.return_value = server

        assert make_client(timeout=5.0).test_connection() is True

        mock_smtp_ssl.assert_called_once_with("smtp.example.com", 465, timeout=5.0)
        server.login.assert_called_once_with("alice@example.com", "pw")
        server.quit.assert_called_once()

    @patch("archivist.core.email.smtp.client.smtplib.SMTP_SSL")
    def test_unexpected_noop_reply(self, mock_smtp_ssl):
        server = MagicMock()
        server.noop.return_value = (421, b"Service not available")
        mock_smtp_ssl.return_value = server

        assert make_client().test_connection() is False

    @patch("archivist.core.email.smtp.client.smtplib.SMTP_SSL")
    def test_bad_credentials(self, mock_smtp_ssl):
        server = MagicMock()
        server.login.side_effect = smtplib.SMTPAuthenticationError(535, b"Bad credentials")
        mock_smtp_ssl.return_value = server

        with pytest.raises(InvalidCredentialsError, match="535 Bad credentials"):
            make_client().test_connection()
        server.quit.assert_called_once()

    @patch("archivist.core.email.smtp.client.smtplib.SMTP_SSL")
    def test_non_ascii_password(self, mock_smtp_ssl):
        """smtplib cannot encode the AUTH string; treated as rejected credentials"""
        server = MagicMock()
        server.login.side_effect = UnicodeEncodeError(
            "ascii", "pässwort", 1, 2, "ordinal not in range(128)"
        )
        mock_smtp_ssl.return_value = server

        with pytest.raises(InvalidCredentialsError, match="ASCII"):
            make_client(password="pässwort").test_connection()
        server.quit.assert_called_once()

    @patch("archivist.core.email.smtp.client.smtplib.SMTP_SSL")
    def test_disconnect_during_noop(self, mock_smtp_ssl):
        server = MagicMock()
        server.noop.side_effect = smtplib.SMTPServerDisconnected("Connection unexpectedly closed")
        mock_smtp_ssl.return_value = server

        with pytest.raises(NetworkError, match="dropped the connection"):
            make_client().test_connection()
        server.quit.assert_called_once()

    @patch("archivist.core.email.smtp.client.smtplib.SMTP_SSL")
    def test_socket_error_during_noop(self, mock_smtp_ssl):
        server = MagicMock()
        server.noop.side_effect = ConnectionResetError("reset by peer")
        mock_smtp_ssl.return_value = server

        with pytest.raises(NetworkError):
            make_client().test_connection()

    @patch("archivist.core.email.smtp.client.smtplib.SMTP_SSL")
    def test_unreachable(self, mock_smtp_ssl):
        mock_smtp_ssl.side_effect = OSError("Name or service not known")

        with pytest.raises(NetworkError):
            make_client().test_connection()

    @patch("archivist.core.email.smtp.client.smtplib.SMTP")
    def test_starttls_without_ssl(self, mock_smtp):
        server = MagicMock()
        server.noop.return_value = (250, b"OK")
        mock_smtp.return_value = server

        make_client(port=587, use_ssl=False).test_connection()

        mock_smtp.assert_called_once_with("smtp.example.com", 587, timeout=30.0)
        server.starttls.assert_called_once()


class TestSend:
    """Test message submission"""

    @patch("archivist.core.email.smtp.client.smtplib.SMTP_SSL")
    def test_send_message(self, mock_smtp_ssl):
        server = MagicMock()
        server.send_message.return_value = {}
        mock_smtp_ssl.return_value = server
        message = make_message()

        make_client().send(message)

        server.send_message.assert_called_once_with(message)
        sent = server.send_message.call_args[0][0]
        assert sent["From"] == "alice@example.com"
        assert sent["To"] == "bob@example.com"
        assert sent["Subject"] == "Hello"

    @patch("archivist.core.email.smtp.client.smtplib.SMTP_SSL")
    def test_recipient_refused(self, mock_smtp_ssl):
        server = MagicMock()
        server.send_message.side_effect = smtplib.SMTPRecipientsRefused(
            {"bob@example.com": (550, b"No such user")}
        )
        mock_smtp_ssl.return_value = server

        with pytest.raises(SMTPError, match="bob@example.com"):
            make_client().send(make_message())

    @patch("archivist.core.email.smtp.client.smtplib.SMTP_SSL")
    def test_partial_refusal(self, mock_smtp_ssl):
        server = MagicMock()
        server.send_message.return_value = {"bob@example.com": (550, b"No such user")}
        mock_smtp_ssl.return_value = server

        with pytest.raises(SMTPError):
            make_client().send(make_message())

    @patch("archivist.core.email.smtp.client.smtplib.SMTP_SSL")
    def test_connection_lost(self, mock_smtp_ssl):
        mock_smtp_ssl.side_effect = smtplib.SMTPServerDisconnected("gone")

        with pytest.raises(SMTPError):
            make_client().send(make_message())


class TestFactory:
    def test_get_smtp_client(self):
        session = Session.from_credentials("alice@example.com", "pw")
        client = get_smtp_client(session, NetworkConfig(smtp_port=2465, smtp_use_ssl=True))

        assert client.host == "smtp.example.com"
        assert client.port == 2465
        assert client.address == "alice@example.com"
