"""Logging for the Archivist mail agent.

The console only shows warnings and errors (through rich); the full record
goes to a rotating JSON log under ``LOGS_DIR``. Every handler masks
passwords and email addresses, since both flow through login and compose.
"""

import json
import logging
import re
import time
from datetime import datetime, timezone
from functools import wraps
from logging.handlers import RotatingFileHandler
from typing import Any, Dict, Optional

from rich.console import Console
from rich.logging import RichHandler

from .paths import LOGS_DIR

ROOT_LOGGER = "archivist"
LOG_FILE = "app.log"
MAX_LOG_BYTES = 5 * 1024 * 1024
LOG_BACKUPS = 5

# Prefix of structured fields added through ``log_details``
DETAIL_PREFIX = "ctx_"


## Formatting


class JSONFormatter(logging.Formatter):
    """One JSON object per line, including any ``log_details`` fields."""

    def format(self, record: logging.LogRecord) -> str:
        entry: Dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created, timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "function": record.funcName,
            "line": record.lineno,
            "message": record.getMessage(),
        }

        details = {
            key[len(DETAIL_PREFIX):]: value
            for key, value in vars(record).items()
            if key.startswith(DETAIL_PREFIX)
        }
        if details:
            entry["details"] = details

        if record.exc_info:
            entry["exception"] = self.formatException(record.exc_info)

        return json.dumps(entry, ensure_ascii=False, default=str)


## Masking


class SensitiveDataMasker:
    """Hides credentials and shortens email addresses in log text."""

    SECRET_PATTERN = re.compile(
        r'((?:password|passwd|pwd|secret|token)["\']?\s*[:=]\s*["\']?)([^"\'}\s,]+)',
        re.IGNORECASE,
    )
    EMAIL_PATTERN = re.compile(r"([a-zA-Z0-9._%+-]+)@([a-zA-Z0-9.-]+\.[a-zA-Z]{2,})")

    SENSITIVE_FIELDS = {"password", "passwd", "pwd", "secret", "token", "credential", "auth"}

    MASK_STRATEGIES = {
        "full": lambda value: "[REDACTED]",
        "partial": lambda value: (
            value[:2] + "*" * (len(value) - 4) + value[-2:] if len(value) > 8 else "[REDACTED]"
        ),
    }

    def __init__(self, strategy: str = "full"):
        if strategy not in self.MASK_STRATEGIES:
            raise ValueError(f"Unknown masking strategy: {strategy}")

        self.strategy = strategy
        self.mask_func = self.MASK_STRATEGIES[strategy]

    def mask_string(self, text: str) -> str:
        if not isinstance(text, str) or not text:
            return text

        masked = self.SECRET_PATTERN.sub(
            lambda m: m.group(1) + self.mask_func(m.group(2)), text
        )
        return self.EMAIL_PATTERN.sub(
            lambda m: self._mask_email(m.group(1), m.group(2)), masked
        )

    @staticmethod
    def _mask_email(local: str, domain: str) -> str:
        """``alice@example.com`` becomes ``a***@e***``."""
        return f"{local[0]}***@{domain[0]}***"


class SensitiveDataFilter(logging.Filter):
    """Applies :class:`SensitiveDataMasker` to a record before any handler emits it."""

    def __init__(self, strategy: str = "full"):
        super().__init__()
        self.masker = SensitiveDataMasker(strategy)

    def filter(self, record: logging.LogRecord) -> bool:
        record.msg = self.masker.mask_string(record.msg)

        # Mapping-style args are left alone; the agent only logs f-strings and tuples
        if isinstance(record.args, tuple):
            record.args = tuple(self.masker.mask_string(arg) for arg in record.args)

        for key, value in list(vars(record).items()):
            name = key[len(DETAIL_PREFIX):] if key.startswith(DETAIL_PREFIX) else key
            if name.lower() in self.masker.SENSITIVE_FIELDS:
                setattr(record, key, self.masker.mask_func(str(value)))
            elif key.startswith(DETAIL_PREFIX) and isinstance(value, str):
                setattr(record, key, self.masker.mask_string(value))

        return True


## Log Manager


class LogManager:
    """Attaches the console and file handlers to the ``archivist`` logger."""

    def __init__(self, log_level: str = "INFO", log_to_file: bool = True):
        self.log_level = self._resolve_level(log_level)
        self.log_to_file = log_to_file

        self.root_logger = logging.getLogger(ROOT_LOGGER)
        self.root_logger.setLevel(logging.DEBUG)
        self.root_logger.propagate = False

        self._console_handler: Optional[RichHandler] = None
        self._file_handler: Optional[RotatingFileHandler] = None
        self._setup_handlers()

    @staticmethod
    def _resolve_level(level: str) -> int:
        resolved = logging.getLevelName(level.upper())
        if not isinstance(resolved, int):
            raise ValueError(f"Invalid logging level: {level}")
        return resolved

    def _console_level(self) -> int:
        return max(logging.WARNING, self.log_level)

    def _open_log_file(self) -> RotatingFileHandler:
        from .errors import FileSystemError

        try:
            LOGS_DIR.mkdir(parents=True, exist_ok=True)
            return RotatingFileHandler(
                LOGS_DIR / LOG_FILE,
                maxBytes=MAX_LOG_BYTES,
                backupCount=LOG_BACKUPS,
                encoding="utf-8",
            )
        except OSError as e:
            raise FileSystemError(
                f"Failed to open log file in {LOGS_DIR}: {e}", details={"path": str(LOGS_DIR)}
            ) from e

    def _setup_handlers(self) -> None:
        sensitive_filter = SensitiveDataFilter(strategy="full")

        for handler in list(self.root_logger.handlers):
            self.root_logger.removeHandler(handler)
            handler.close()

        # Interaction output owns stdout, so log lines go to stderr
        self._console_handler = RichHandler(
            console=Console(stderr=True),
            show_time=False,
            show_path=False,
            markup=False,
            rich_tracebacks=True,
        )
        self._console_handler.setLevel(self._console_level())
        self._console_handler.addFilter(sensitive_filter)
        self.root_logger.addHandler(self._console_handler)

        if not self.log_to_file:
            return

        self._file_handler = self._open_log_file()
        self._file_handler.setLevel(self.log_level)
        self._file_handler.setFormatter(JSONFormatter())
        self._file_handler.addFilter(sensitive_filter)
        self.root_logger.addHandler(self._file_handler)

    def set_level(self, level: str) -> None:
        """Change the file level at runtime; the console never drops below WARNING."""
        self.log_level = self._resolve_level(level)

        if self._console_handler is not None:
            self._console_handler.setLevel(self._console_level())
        if self._file_handler is not None:
            self._file_handler.setLevel(self.log_level)


## Decorators for Logging


def log_call(func):
    """Log entry, exit and duration of ``func`` at DEBUG."""

    name = f"{func.__module__}.{func.__qualname__}"
    call_logger = get_logger(func.__module__)

    @wraps(func)
    def wrapper(*args, **kwargs):
        call_logger.debug(f"-> {name}")
        started = time.perf_counter()

        try:
            result = func(*args, **kwargs)
        except Exception as e:
            call_logger.debug(f"<- {name} raised {type(e).__name__} after {time.perf_counter() - started:.3f}s")
            raise

        call_logger.debug(f"<- {name} ({time.perf_counter() - started:.3f}s)")
        return result

    return wrapper


## Module-level helpers

_log_manager: Optional[LogManager] = None


def init_logging(log_level: str = "INFO", log_to_file: bool = True) -> LogManager:
    """Set up handlers once; later calls only change the level."""

    global _log_manager

    if _log_manager is None:
        _log_manager = LogManager(log_level, log_to_file=log_to_file)
    else:
        _log_manager.set_level(log_level)

    return _log_manager


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """Logger below ``archivist``.

    Loggers are plain ``logging`` children, so modules can fetch them at
    import time before ``init_logging`` has attached any handler.
    """

    if not name or name == ROOT_LOGGER:
        return logging.getLogger(ROOT_LOGGER)
    if name.startswith(f"{ROOT_LOGGER}."):
        return logging.getLogger(name)
    return logging.getLogger(f"{ROOT_LOGGER}.{name}")


def log_details(**fields: Any) -> Dict[str, Any]:
    """Build an ``extra`` mapping whose keys cannot clash with LogRecord attributes."""

    return {f"{DETAIL_PREFIX}{key}": value for key, value in fields.items()}
