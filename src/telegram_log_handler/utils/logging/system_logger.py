"""System logger for delivery diagnostics.

This module provides a singleton system logger for reporting problems the
handler absorbs instead of raising (rejected deliveries, transport failures,
unknown timezones, unserializable context).

The logger does not propagate to the root logger. A TelegramHandler attached
to the root logger therefore never receives its own diagnostics, which would
otherwise loop back into another delivery attempt.

Logging strategy:
- Console (stderr): WARNING, ERROR, CRITICAL by default
- Level can be lowered with configure_system_logger() for debugging
"""

from __future__ import annotations

__all__ = [
    "ConsoleFormatter",
    "SYSTEM_LOGGER_NAME",
    "configure_system_logger",
    "get_system_logger",
]

import logging
import sys

from telegram_log_handler.constants import APP_NAME

SYSTEM_LOGGER_NAME = f"{APP_NAME}.system"


class ConsoleFormatter(logging.Formatter):
    """Human-readable formatter for console output.

    Extracts 'message' or 'event' field from dict messages for cleaner stderr output.
    """

    def format(self, record: logging.LogRecord) -> str:
        """Format log record for human-readable console output.

        Args:
            record: The log record to format.

        Returns:
            str: Formatted log message with app and level prefix.
        """
        if isinstance(record.msg, dict):
            msg = record.msg.get("message") or record.msg.get("event", "")
            return f"[{APP_NAME}] {record.levelname}: {msg}"
        return f"[{APP_NAME}] {record.levelname}: {record.getMessage()}"


# Module-level singleton logger
_system_logger: logging.Logger | None = None


def get_system_logger() -> logging.Logger:
    """Get the singleton system logger instance.

    Creates the logger on first call with a stderr handler.

    Returns:
        logging.Logger: Configured system logger instance.

    Example:
        >>> from telegram_log_handler.utils.logging.system_logger import get_system_logger
        >>> logger = get_system_logger()
        >>> logger.error({"event": "delivery_rejected", "message": "telegram api response : ..."})
        # Written to stderr
    """
    global _system_logger

    if _system_logger is not None:
        return _system_logger

    _system_logger = logging.getLogger(SYSTEM_LOGGER_NAME)
    _system_logger.setLevel(logging.WARNING)
    _system_logger.propagate = False  # Never feed back into handlers on the root logger

    # Close and remove any existing handlers to avoid duplicates and resource leaks
    for handler in _system_logger.handlers:
        handler.close()
    _system_logger.handlers.clear()

    stderr_handler = logging.StreamHandler(sys.stderr)
    stderr_handler.setFormatter(ConsoleFormatter())
    _system_logger.addHandler(stderr_handler)

    return _system_logger


def configure_system_logger(level: int | str = logging.WARNING) -> logging.Logger:
    """Set the system logger's level.

    Args:
        level: Logging level name or number (e.g. "DEBUG", logging.INFO).

    Returns:
        logging.Logger: The system logger.
    """
    logger = get_system_logger()
    logger.setLevel(level)
    return logger
