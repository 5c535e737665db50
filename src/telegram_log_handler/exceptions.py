"""Custom exceptions for telegram-log-handler.

Exceptions are organized into two categories:

Raised to the caller:
    - TransportUnavailable: HTTPS transport missing at construction time
    - UnknownSeverity: severity level has no glyph mapping
    - ConfigurationError: host configuration cannot be loaded or validated

Reported, never raised out of TelegramClient.send():
    - DeliveryRejected: Telegram answered with ok=false
    - TransportFailure: network, timeout or decode error during send

Usage:
    from telegram_log_handler.exceptions import DeliveryRejected, UnknownSeverity
"""

from __future__ import annotations

__all__ = [
    "ConfigurationError",
    "DeliveryRejected",
    "TelegramHandlerError",
    "TransportFailure",
    "TransportUnavailable",
    "UnknownSeverity",
]

from typing import Any


class TelegramHandlerError(Exception):
    """Base exception for all telegram-log-handler errors.

    Attributes:
        message: Human-readable error description.
    """

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message

    def __str__(self) -> str:
        return self.message


# =============================================================================
# Raised to the caller
# =============================================================================


class TransportUnavailable(TelegramHandlerError):
    """HTTPS transport capability is missing from the runtime.

    Raised eagerly by TelegramClient construction; no instance is produced.
    """


class UnknownSeverity(TelegramHandlerError):
    """Severity level has no glyph mapping.

    Signals that the glyph table and the level enumeration have drifted apart.
    Treat as a configuration bug.

    Attributes:
        level: The level value that could not be resolved.
    """

    def __init__(self, level: Any) -> None:
        super().__init__(f"No glyph mapping for severity level {level!r}")
        self.level = level


class ConfigurationError(TelegramHandlerError, ValueError):
    """Handler configuration is missing or invalid."""


# =============================================================================
# Reported by TelegramClient.send() (non-fatal)
# =============================================================================


class DeliveryRejected(TelegramHandlerError):
    """Telegram Bot API acknowledged the request with ok=false.

    Attributes:
        description: Description returned by the API.
        error_code: Numeric error code returned by the API, if any.
    """

    def __init__(self, description: str, error_code: int | None = None) -> None:
        super().__init__(f"telegram api response : {description}")
        self.description = description
        self.error_code = error_code


class TransportFailure(TelegramHandlerError):
    """Request could not be completed or its response could not be decoded.

    Attributes:
        original_error: The underlying exception, if any.
    """

    def __init__(self, message: str, original_error: Exception | None = None) -> None:
        super().__init__(message)
        self.original_error = original_error

    def __str__(self) -> str:
        if self.original_error is not None:
            return f"{self.message} (Original: {self.original_error})"
        return self.message
