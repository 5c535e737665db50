"""Application-wide constants for telegram-log-handler.

Constants that define handler behavior.
For user-configurable settings per deployment, see config.py.
"""

__all__ = [
    # Application identity
    "APP_NAME",
    # Telegram Bot API
    "TELEGRAM_API_ENDPOINT",
    "SEND_MESSAGE_METHOD",
    "MESSAGE_LENGTH_LIMIT",
    "RESERVED_FIELDS",
    # Formatting defaults
    "DEFAULT_TIMEZONE",
    "DEFAULT_DATE_FORMAT",
    # HTTP configuration
    "DEFAULT_HTTP_TIMEOUT_SECONDS",
    "MIN_HTTP_TIMEOUT_SECONDS",
    "MAX_HTTP_TIMEOUT_SECONDS",
    # Transport errors
    "TRANSPORT_ERRORS",
    # Environment configuration
    "ENV_PREFIX",
    # Diagnostics
    "REDACTED",
]

import httpx

APP_NAME = "telegram-log-handler"

# ============================================================================
# Telegram Bot API
# ============================================================================

# Token is appended directly: https://api.telegram.org/bot<token>/SendMessage
TELEGRAM_API_ENDPOINT = "https://api.telegram.org/bot"
SEND_MESSAGE_METHOD = "SendMessage"

# Bot API text limit (characters). Applied to the message body only;
# serialized context is appended after truncation.
MESSAGE_LENGTH_LIMIT = 4096

# Form fields owned by the client; extra fields cannot override them
RESERVED_FIELDS: frozenset[str] = frozenset({"text", "chat_id"})

# ============================================================================
# Formatting defaults
# ============================================================================

DEFAULT_TIMEZONE = "UTC"

# PHP date() style pattern, e.g. "January 1, 2024, 9:05 am"
DEFAULT_DATE_FORMAT = "F j, Y, g:i a"

# ============================================================================
# HTTP configuration
# ============================================================================

# A logging call blocks on delivery, so every request is bounded
DEFAULT_HTTP_TIMEOUT_SECONDS = 10.0
MIN_HTTP_TIMEOUT_SECONDS = 0.5
MAX_HTTP_TIMEOUT_SECONDS = 120.0

# Use base classes to catch all subclasses:
# - NetworkError: ConnectError, CloseError, ReadError, WriteError
# - TimeoutException: ConnectTimeout, ReadTimeout, WriteTimeout, PoolTimeout
# - ProtocolError: RemoteProtocolError, LocalProtocolError
TRANSPORT_ERRORS: tuple[type[Exception], ...] = (
    httpx.NetworkError,
    httpx.TimeoutException,
    httpx.ProtocolError,
    httpx.UnsupportedProtocol,
    httpx.DecodingError,
    httpx.TooManyRedirects,
    OSError,
)

# ============================================================================
# Environment configuration
# ============================================================================

ENV_PREFIX = "TELEGRAM_LOG_"

# ============================================================================
# Diagnostics
# ============================================================================

REDACTED = "[REDACTED]"
