"""Error taxonomy for the mail agent and helpers for reporting errors.

Every error carries a ``recoverable`` flag. Recoverable errors end the
current menu action only; the session loop reports them and shows the menu
again. Anything else ends the session.
"""

from enum import Enum
from typing import Any, Callable, Dict, Optional

from archivist.utils.logging import get_logger, log_details

logger = get_logger(__name__)


class ErrorCategory(Enum):
    """Categories of errors for better handling."""

    NETWORK = "network"
    AUTHENTICATION = "authentication"
    VALIDATION = "validation"
    INPUT = "input"
    DECODE = "decode"
    FILE_SYSTEM = "file_system"
    CONFIGURATION = "configuration"
    UNKNOWN = "unknown"


class ArchivistError(Exception):
    """Base exception for all Archivist errors."""

    category = ErrorCategory.UNKNOWN
    user_message = "An error occurred"
    recoverable = False

    def __init__(self, message: Optional[str] = None, details: Optional[Dict[str, Any]] = None):
        self.message = message or self.user_message
        self.details = details or {}
        super().__init__(self.message)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "error_type": type(self).__name__,
            "category": self.category.value,
            "recoverable": self.recoverable,
            "message": self.message,
            "details": self.details,
        }


## Mail server errors


class NetworkError(ArchivistError):
    """A mail server could not be reached or broke the conversation."""

    category = ErrorCategory.NETWORK
    user_message = "A network error occurred"
    recoverable = True


class IMAPError(NetworkError):
    """LIST, SELECT, FETCH or LOGOUT failed."""

    user_message = "Mail retrieval failed"


class SMTPError(NetworkError):
    """A confirmed message could not be submitted."""

    user_message = "Failed to send email"


## Login errors


class AuthenticationError(ArchivistError):
    category = ErrorCategory.AUTHENTICATION
    user_message = "An authentication error occurred"
    recoverable = True


class InvalidCredentialsError(AuthenticationError):
    """The server rejected the address/password pair."""

    user_message = "Invalid email or password"


class LoginAbortedError(AuthenticationError):
    """The login retry budget is exhausted."""

    user_message = "Too many failed login attempts"
    recoverable = False


## Operator input errors


class ValidationError(ArchivistError):
    """A line of input was rejected; the reader asks again."""

    category = ErrorCategory.VALIDATION
    user_message = "Invalid input"
    recoverable = True


class InvalidEmailAddressError(ValidationError):
    user_message = "Invalid email address"


class InvalidSelectionError(ValidationError):
    user_message = "Invalid selection"


class InvalidConfirmationError(ValidationError):
    user_message = "Invalid confirmation"


class InputClosedError(ArchivistError):
    """The console input stream reached end of file."""

    category = ErrorCategory.INPUT
    user_message = "Input stream closed"


class MessageDecodeError(ArchivistError):
    """A fetched message is not valid UTF-8."""

    category = ErrorCategory.DECODE
    user_message = "Message is not valid UTF-8"
    recoverable = True


## Local environment errors


class FileSystemError(ArchivistError):
    category = ErrorCategory.FILE_SYSTEM
    user_message = "A file system error occurred"


class ConfigurationError(ArchivistError):
    category = ErrorCategory.CONFIGURATION
    user_message = "A configuration error occurred"


class InvalidConfigError(ConfigurationError):
    """The configuration file or an override does not match the schema."""

    user_message = "Invalid configuration settings"


## Error Handler


class ErrorHandler:
    """Centralized error logging."""

    @staticmethod
    def handle(error: Exception, context: str = "", log_traceback: bool = False) -> Dict[str, Any]:
        """Log ``error`` under ``context`` and return it as a dictionary.

        Recoverable errors are logged as warnings, everything else as errors.
        """
        if isinstance(error, ArchivistError):
            summary = error.to_dict()
            extra = log_details(**{**error.details, "category": error.category.value})
            level_log = logger.warning if error.recoverable else logger.error
        else:
            summary = {
                "error_type": "UnknownError",
                "category": ErrorCategory.UNKNOWN.value,
                "recoverable": False,
                "message": str(error),
                "details": {"context": context},
            }
            extra = log_details(category=ErrorCategory.UNKNOWN.value)
            level_log = logger.error

        level_log(f"{context}: {summary['message']}", extra=extra, exc_info=log_traceback)
        return summary


class recoverable_action:
    """Context manager confining recoverable errors to one menu action.

    A recoverable :class:`ArchivistError` raised inside the block is logged,
    passed to ``report`` as its one-line message and swallowed; the error
    summary is kept on ``error``. Other exceptions propagate.
    """

    def __init__(self, context: str, report: Callable[[str], None]):
        self.context = context
        self.report = report
        self.error: Optional[Dict[str, Any]] = None

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_value, exc_tb):
        if not isinstance(exc_value, ArchivistError) or not exc_value.recoverable:
            return False

        self.error = ErrorHandler.handle(exc_value, self.context)
        self.report(exc_value.message)
        return True


def format_error_message(error: Exception) -> str:
    """Format an error message for display."""
    if isinstance(error, ArchivistError):
        return error.message
    return "An unexpected error occurred - check logs for details."
