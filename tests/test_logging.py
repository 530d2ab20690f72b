"""
Tests for logging and error handling utilities
"""
import json
import logging

import pytest

from archivist.utils.errors import (
    ErrorCategory,
    ErrorHandler,
    IMAPError,
    InputClosedError,
    InvalidCredentialsError,
    MessageDecodeError,
    format_error_message,
    recoverable_action,
)
from archivist.utils.logging import (
    JSONFormatter,
    SensitiveDataFilter,
    SensitiveDataMasker,
    get_logger,
    log_details,
)


class TestSensitiveDataMasker:
    """Tests for log masking"""

    def test_password_masked(self):
        masked = SensitiveDataMasker().mask_string("login with password=hunter2 ok")
        assert "hunter2" not in masked
        assert "[REDACTED]" in masked

    def test_email_masked(self):
        masked = SensitiveDataMasker().mask_string("Authenticated as alice@example.com")
        assert masked == "Authenticated as a***@e***"

    def test_filter_masks_args_and_fields(self):
        record = logging.LogRecord(
            "archivist", logging.INFO, __file__, 1, "user %s", ("bob@example.com",), None
        )
        record.password = "hunter2"

        assert SensitiveDataFilter().filter(record)
        assert "bob@example.com" not in record.getMessage()
        assert record.password == "[REDACTED]"


class TestLoggers:
    def test_names_under_root(self):
        assert get_logger("features.compose").name == "archivist.features.compose"
        assert get_logger("archivist.cli").name == "archivist.cli"

    def test_log_details_prefix(self):
        assert log_details(host="imap.example.com", message="x") == {
            "ctx_host": "imap.example.com",
            "ctx_message": "x",
        }


class TestErrorHandler:
    """Tests for error reporting helpers"""

    def test_handle_archivist_error(self):
        error = IMAPError("fetch failed", details={"sequence": 3, "message": "clash"})
        result = ErrorHandler.handle(error, context="Fetching")

        assert result["error_type"] == "IMAPError"
        assert result["category"] == ErrorCategory.NETWORK.value
        assert result["details"]["sequence"] == 3

    def test_handle_unknown_error(self):
        result = ErrorHandler.handle(RuntimeError("boom"), context="Somewhere")
        assert result["category"] == ErrorCategory.UNKNOWN.value

    def test_default_messages(self):
        assert InvalidCredentialsError().message == "Invalid email or password"
        assert format_error_message(InvalidCredentialsError()) == "Invalid email or password"
        assert "unexpected" in format_error_message(RuntimeError("x"))


class TestRecoverableAction:
    """Tests for confining errors to one menu action"""

    def test_recoverable_error_reported(self):
        reported = []

        with recoverable_action("Fetching", reported.append) as guard:
            raise MessageDecodeError("Message 2 is not valid UTF-8")

        assert reported == ["Message 2 is not valid UTF-8"]
        assert guard.error["error_type"] == "MessageDecodeError"

    def test_fatal_error_propagates(self):
        reported = []

        with pytest.raises(InputClosedError):
            with recoverable_action("Sending", reported.append):
                raise InputClosedError()

        assert reported == []

    def test_foreign_error_propagates(self):
        with pytest.raises(KeyError):
            with recoverable_action("Sending", print):
                raise KeyError("x")

    def test_no_error(self):
        with recoverable_action("Sending", print) as guard:
            pass
        assert guard.error is None


class TestJSONFormatter:
    def test_details_and_masking(self):
        record = logging.LogRecord(
            "archivist.cli", logging.WARNING, __file__, 10, "Fetching: failed", None, None
        )
        for key, value in log_details(sequence=2, password="hunter2").items():
            setattr(record, key, value)

        SensitiveDataFilter().filter(record)
        entry = json.loads(JSONFormatter().format(record))

        assert entry["level"] == "WARNING"
        assert entry["message"] == "Fetching: failed"
        assert entry["details"] == {"sequence": 2, "password": "[REDACTED]"}
