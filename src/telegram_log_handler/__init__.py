"""telegram-log-handler: forward Python log records to a Telegram chat.

Usage:
    import logging
    from telegram_log_handler import TelegramHandler

    handler = TelegramHandler(token="123:abc", channel="@alerts")
    handler.setLevel(logging.ERROR)
    logging.getLogger().addHandler(handler)
"""

__version__ = "1.0.0"

from telegram_log_handler.client import TelegramClient
from telegram_log_handler.exceptions import (
    ConfigurationError,
    DeliveryRejected,
    TelegramHandlerError,
    TransportFailure,
    TransportUnavailable,
    UnknownSeverity,
)
from telegram_log_handler.formatter import RecordFormatter
from telegram_log_handler.handler import TelegramHandler
from telegram_log_handler.models import DeliveryResponse
from telegram_log_handler.severity import SEVERITY_GLYPHS, SeverityLevel, glyph

__all__ = [
    "ConfigurationError",
    "DeliveryRejected",
    "DeliveryResponse",
    "RecordFormatter",
    "SEVERITY_GLYPHS",
    "SeverityLevel",
    "TelegramClient",
    "TelegramHandler",
    "TelegramHandlerError",
    "TransportFailure",
    "TransportUnavailable",
    "UnknownSeverity",
    "__version__",
    "glyph",
]
