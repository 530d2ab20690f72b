"""Agent configuration: pydantic models and the JSON-backed ConfigManager."""

import json
import os
from pathlib import Path
from typing import Literal, Optional

from dotenv import load_dotenv
from pydantic import BaseModel, Field, ValidationError, field_validator

from .errors import FileSystemError, InvalidConfigError
from .logging import get_logger
from .paths import CONFIG_PATH

logger = get_logger(__name__)

Language = Literal["en", "zh"]

ENV_LANGUAGE = "ARCHIVIST_LANG"
ENV_LOG_LEVEL = "ARCHIVIST_LOG_LEVEL"


class NetworkConfig(BaseModel):
    """Pydantic model for mail server connection settings."""

    smtp_port: int = 465
    smtp_use_ssl: bool = True
    imap_port: int = 993
    imap_use_ssl: bool = True
    timeout: float = 30.0  # in seconds


class LoginConfig(BaseModel):
    """Pydantic model for the login retry policy.

    ``max_attempts`` of ``None`` retries until the operator gets it right.
    """

    max_attempts: Optional[int] = Field(default=None, ge=1)
    backoff_seconds: float = Field(default=0.0, ge=0.0)


class UIConfig(BaseModel):
    """Pydantic model for UI settings."""

    language: Language = "en"
    wait_for_exit: bool = True


class LoggingConfig(BaseModel):
    """Pydantic model for logging settings."""

    log_level: str = "INFO"
    log_to_file: bool = True

    @field_validator("log_level")
    @classmethod
    def _known_level(cls, value: str) -> str:
        value = value.upper()
        if value not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError(f"unknown log level '{value}'")
        return value


class AppConfig(BaseModel):
    """Pydantic model for overall application configuration."""

    version: str = "0.1.0"
    network: NetworkConfig = Field(default_factory=NetworkConfig)
    login: LoginConfig = Field(default_factory=LoginConfig)
    ui: UIConfig = Field(default_factory=UIConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)


class ConfigManager:
    """Owns the agent's ``AppConfig``.

    Precedence, lowest first: built-in defaults, the JSON file, ``ARCHIVIST_*``
    environment variables (a ``.env`` file is honoured), then explicit
    overrides from the command line. Only the file layer is ever written, and
    only to seed it with defaults on first run. No credentials are stored.
    """

    def __init__(self, config_path: Optional[Path] = None, load_env: bool = True):
        self.path = Path(config_path) if config_path else CONFIG_PATH
        self.config = self._read_file() if self.path.exists() else self._seed_defaults()
        if load_env:
            self._apply_environment()
        logger.info(f"Using configuration {self.path}")

    def _read_file(self) -> AppConfig:
        try:
            raw = self.path.read_text(encoding="utf-8")
        except OSError as e:
            raise FileSystemError(
                f"Cannot read configuration file {self.path}: {e}", details={"path": str(self.path)}
            ) from e

        try:
            return AppConfig.model_validate(json.loads(raw))
        except json.JSONDecodeError as e:
            logger.error(f"{self.path} is not valid JSON: {e}")
            raise InvalidConfigError(
                f"{self.path} is not valid JSON (line {e.lineno}, column {e.colno})",
                details={"path": str(self.path)},
            ) from e
        except ValidationError as e:
            logger.error(f"{self.path} failed validation: {e}")
            raise InvalidConfigError(
                f"{self.path} has invalid settings: {e.error_count()} problem(s)\n{e}",
                details={"path": str(self.path)},
            ) from e

    def _seed_defaults(self) -> AppConfig:
        """Write a default configuration file for the operator to edit later."""
        config = AppConfig()

        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            self.path.write_text(
                json.dumps(config.model_dump(), indent=2, ensure_ascii=False), encoding="utf-8"
            )
        except OSError as e:
            raise FileSystemError(
                f"Cannot write default configuration to {self.path}: {e}",
                details={"path": str(self.path)},
            ) from e

        logger.info(f"Wrote default configuration to {self.path}")
        return config

    def _apply_environment(self) -> None:
        """Overlay ``ARCHIVIST_*`` environment variables onto the loaded config."""

        load_dotenv()

        language = os.getenv(ENV_LANGUAGE)
        log_level = os.getenv(ENV_LOG_LEVEL)

        if language or log_level:
            logger.debug("Applying configuration from environment")
            self.apply_overrides(language=language, log_level=log_level)

    def apply_overrides(
        self, language: Optional[str] = None, log_level: Optional[str] = None
    ) -> AppConfig:
        """Apply in-memory overrides without persisting them.

        Raises:
            InvalidConfigError: If a value is not allowed
        """
        try:
            if language:
                self.config.ui = UIConfig.model_validate(
                    {**self.config.ui.model_dump(), "language": language.lower()}
                )
            if log_level:
                self.config.logging = LoggingConfig.model_validate(
                    {**self.config.logging.model_dump(), "log_level": log_level}
                )
        except ValidationError as e:
            raise InvalidConfigError(f"Invalid configuration override: {e}") from e

        return self.config
