"""Handler configuration for host application wiring.

The handler itself takes plain constructor arguments. This module is the
optional layer that loads those arguments from a JSON file or from
environment variables, validates them, and builds a ready TelegramHandler.

Example usage:
    # From a JSON file
    config = TelegramHandlerConfig.load_from_file(Path("telegram-log.json"))

    # From TELEGRAM_LOG_* environment variables
    config = TelegramHandlerConfig.from_environ()

    logging.getLogger().addHandler(create_handler(config))

Environment variables:
    TELEGRAM_LOG_TOKEN                 Bot token (required)
    TELEGRAM_LOG_CHANNEL               Chat id or @channel (required)
    TELEGRAM_LOG_TIMEZONE              IANA timezone (default: UTC)
    TELEGRAM_LOG_DATE_FORMAT           Date pattern (default: "F j, Y, g:i a")
    TELEGRAM_LOG_LEVEL                 Minimum level (default: ERROR)
    TELEGRAM_LOG_TIMEOUT               Request timeout in seconds (default: 10)
    TELEGRAM_LOG_VERIFY_TLS            true/false (default: true)
    TELEGRAM_LOG_PARSE_MODE            HTML, Markdown or MarkdownV2
    TELEGRAM_LOG_DISABLE_NOTIFICATION  true/false (default: false)
"""

from __future__ import annotations

__all__ = [
    "LevelName",
    "TelegramHandlerConfig",
    "create_handler",
]

import os
from collections.abc import Mapping
from pathlib import Path
from typing import Any, Literal

from pydantic import BaseModel, Field, SecretStr, ValidationError

from telegram_log_handler.constants import (
    DEFAULT_DATE_FORMAT,
    DEFAULT_HTTP_TIMEOUT_SECONDS,
    DEFAULT_TIMEZONE,
    ENV_PREFIX,
    MAX_HTTP_TIMEOUT_SECONDS,
    MIN_HTTP_TIMEOUT_SECONDS,
)
from telegram_log_handler.exceptions import ConfigurationError
from telegram_log_handler.handler import TelegramHandler
from telegram_log_handler.severity import SeverityLevel
from telegram_log_handler.utils.file_helpers import load_validated_json, require_file_exists

LevelName = Literal["DEBUG", "INFO", "NOTICE", "WARNING", "ERROR", "CRITICAL", "ALERT", "EMERGENCY"]

# Environment variable suffix -> config field
_ENV_FIELDS: dict[str, str] = {
    "TOKEN": "token",
    "CHANNEL": "channel",
    "TIMEZONE": "timezone",
    "DATE_FORMAT": "date_format",
    "LEVEL": "level",
    "TIMEOUT": "timeout",
    "VERIFY_TLS": "verify_tls",
    "PARSE_MODE": "parse_mode",
    "DISABLE_NOTIFICATION": "disable_notification",
}


class TelegramHandlerConfig(BaseModel):
    """Validated TelegramHandler settings.

    Attributes:
        token: Bot token (masked in dumps and repr).
        channel: Chat id or "@channelusername".
        timezone: IANA timezone for the date line. Not validated here;
            unknown names fall back to UTC when a message is formatted.
        date_format: Date pattern, PHP-style or strftime.
        level: Minimum severity forwarded to Telegram.
        timeout: Request timeout in seconds.
        verify_tls: Verify the Bot API certificate. Turn off only behind an
            intercepting proxy you control.
        parse_mode: Optional Bot API parse mode.
        disable_notification: Deliver silently.
    """

    token: SecretStr = Field(min_length=1)
    channel: str = Field(min_length=1)
    timezone: str = DEFAULT_TIMEZONE
    date_format: str = DEFAULT_DATE_FORMAT
    level: LevelName = "ERROR"
    timeout: float = Field(
        default=DEFAULT_HTTP_TIMEOUT_SECONDS,
        ge=MIN_HTTP_TIMEOUT_SECONDS,
        le=MAX_HTTP_TIMEOUT_SECONDS,
    )
    verify_tls: bool = True
    parse_mode: Literal["HTML", "Markdown", "MarkdownV2"] | None = None
    disable_notification: bool = False

    @property
    def levelno(self) -> int:
        """Numeric logging level for `level`."""
        return int(SeverityLevel[self.level])

    def extra_fields(self) -> dict[str, Any]:
        """sendMessage parameters derived from the settings."""
        fields: dict[str, Any] = {}
        if self.parse_mode is not None:
            fields["parse_mode"] = self.parse_mode
        if self.disable_notification:
            fields["disable_notification"] = True
        return fields

    @classmethod
    def load_from_file(cls, config_path: Path) -> "TelegramHandlerConfig":
        """Load configuration from a JSON file.

        Raises:
            FileNotFoundError: If config file doesn't exist.
            ConfigurationError: If config file is invalid or missing required fields.
        """
        require_file_exists(config_path, file_type="configuration")
        try:
            return load_validated_json(
                config_path,
                cls,
                file_type="config",
                recovery_hint="Required keys: token, channel.",
                encoding="utf-8",
            )
        except ValueError as e:
            raise ConfigurationError(str(e)) from e

    @classmethod
    def from_environ(cls, environ: Mapping[str, str] | None = None) -> "TelegramHandlerConfig":
        """Load configuration from TELEGRAM_LOG_* environment variables.

        Args:
            environ: Mapping to read instead of os.environ.

        Raises:
            ConfigurationError: If required variables are missing or invalid.
        """
        env = os.environ if environ is None else environ
        data = {field: env[ENV_PREFIX + suffix] for suffix, field in _ENV_FIELDS.items() if ENV_PREFIX + suffix in env}

        missing = [ENV_PREFIX + suffix for suffix in ("TOKEN", "CHANNEL") if _ENV_FIELDS[suffix] not in data]
        if missing:
            raise ConfigurationError(f"Missing environment variables: {', '.join(missing)}")

        try:
            return cls.model_validate(data)
        except ValidationError as e:
            details = "; ".join(
                f"{ENV_PREFIX}{_env_suffix(str(error['loc'][0]))}: {error['msg']}" for error in e.errors() if error["loc"]
            )
            raise ConfigurationError(f"Invalid environment configuration: {details}") from e

    @classmethod
    def load(cls, config_path: Path | None = None) -> "TelegramHandlerConfig":
        """Load from config_path if given, otherwise from the environment."""
        if config_path is not None:
            return cls.load_from_file(config_path)
        return cls.from_environ()


def _env_suffix(field: str) -> str:
    for suffix, name in _ENV_FIELDS.items():
        if name == field:
            return suffix
    return field.upper()


def create_handler(config: TelegramHandlerConfig, **kwargs: Any) -> TelegramHandler:
    """Build a TelegramHandler from configuration.

    Args:
        config: Validated settings.
        **kwargs: Passed to TelegramHandler (e.g. http_client, clock).

    Returns:
        TelegramHandler: Handler with its level set from config.level.
    """
    return TelegramHandler(
        config.token.get_secret_value(),
        config.channel,
        timezone=config.timezone,
        date_format=config.date_format,
        level=config.levelno,
        timeout=config.timeout,
        verify=config.verify_tls,
        extra_fields=config.extra_fields(),
        **kwargs,
    )
