"""logging.Handler that forwards records to a Telegram chat.

Example:
    >>> import logging
    >>> from telegram_log_handler import TelegramHandler
    >>> handler = TelegramHandler("123:abc", "@alerts", timezone="Europe/Berlin")
    >>> handler.setLevel(logging.ERROR)
    >>> logging.getLogger("app").addHandler(handler)
    >>> logging.getLogger("app").error("disk full", extra={"context": {"mount": "/var"}})

Structured context is read from the record's `context` attribute, which the
stdlib fills from `extra={"context": {...}}`.
"""

from __future__ import annotations

__all__ = ["TelegramHandler"]

import logging
from collections.abc import Mapping
from datetime import datetime, tzinfo
from typing import Any, Callable

import httpx

from telegram_log_handler.client import TelegramClient
from telegram_log_handler.constants import DEFAULT_DATE_FORMAT, DEFAULT_HTTP_TIMEOUT_SECONDS, DEFAULT_TIMEZONE
from telegram_log_handler.formatter import RecordFormatter
from telegram_log_handler.models import DeliveryResponse
from telegram_log_handler.severity import SEVERITY_GLYPHS, SeverityLevel, register_level_names, severity_from_levelno


class TelegramHandler(logging.Handler):
    """Send each log record as one Telegram message.

    The handler's logging.Formatter renders the record body (message plus
    exception text); RecordFormatter adds the date line, the severity glyph,
    the length cap and the serialized context.

    Delivery is synchronous on the logging thread and never raises; failed
    deliveries are reported on the package system logger.
    """

    def __init__(
        self,
        token: str,
        channel: str,
        timezone: str | tzinfo = DEFAULT_TIMEZONE,
        date_format: str = DEFAULT_DATE_FORMAT,
        level: int | str = logging.NOTSET,
        *,
        timeout: float = DEFAULT_HTTP_TIMEOUT_SECONDS,
        verify: bool = True,
        extra_fields: Mapping[str, Any] | None = None,
        client: TelegramClient | None = None,
        http_client: httpx.Client | None = None,
        glyphs: Mapping[SeverityLevel, str] = SEVERITY_GLYPHS,
        clock: Callable[[tzinfo], datetime] | None = None,
    ) -> None:
        """Initialize the handler.

        Args:
            token: Bot token issued by BotFather.
            channel: Chat identifier (numeric id or "@channelusername").
            timezone: Timezone for the date line (default: "UTC").
            date_format: Date pattern, PHP-style or strftime (default: "F j, Y, g:i a").
            level: Minimum record level handled.
            timeout: Request timeout in seconds.
            verify: Verify the Bot API TLS certificate.
            extra_fields: sendMessage parameters added to every request
                (e.g. {"disable_notification": True}).
            client: Prebuilt TelegramClient; token, channel, timeout, verify
                and http_client are then ignored.
            http_client: httpx.Client for the default TelegramClient.
            glyphs: Severity-to-glyph table.
            clock: Returns "now" for a tzinfo (for tests).

        Raises:
            TransportUnavailable: If the runtime has no HTTPS support.
        """
        super().__init__(level)
        register_level_names()
        self.client = client or TelegramClient(
            token,
            channel,
            timeout=timeout,
            verify=verify,
            http_client=http_client,
        )
        self.record_formatter = RecordFormatter(date_format, timezone, glyphs=glyphs, clock=clock)
        self.extra_fields: dict[str, Any] = dict(extra_fields or {})

    def __repr__(self) -> str:
        level = logging.getLevelName(self.level)
        return f"<{type(self).__name__} {self.client.channel} ({level})>"

    # -- formatting settings --------------------------------------------------

    @property
    def timezone(self) -> str | tzinfo:
        """Timezone the date line is rendered in."""
        return self.record_formatter.timezone

    @timezone.setter
    def timezone(self, value: str | tzinfo) -> None:
        self.record_formatter.timezone = value

    @property
    def date_format(self) -> str:
        """Date pattern for the date line."""
        return self.record_formatter.date_format

    @date_format.setter
    def date_format(self, value: str) -> None:
        self.record_formatter.date_format = value

    @property
    def response(self) -> DeliveryResponse | None:
        """Last Bot API response."""
        return self.client.response

    # -- delivery -------------------------------------------------------------

    def render(self, record: logging.LogRecord) -> str:
        """Render a record into the message text.

        Raises:
            UnknownSeverity: If the record level has no glyph.
        """
        body = self.format(record)
        severity = severity_from_levelno(record.levelno)
        context = getattr(record, "context", None)
        if not isinstance(context, Mapping):
            context = None
        return self.record_formatter.format(severity, body, context)

    def write(self, record: logging.LogRecord) -> None:
        """Render a record and send it.

        Delivery problems are absorbed by the client.

        Raises:
            UnknownSeverity: If the record level has no glyph.
        """
        self.client.send(self.render(record), self.extra_fields)

    def send(self, message: str, extra_fields: Mapping[str, Any] | None = None) -> None:
        """Send a raw message through the handler's client."""
        fields = {**self.extra_fields, **(extra_fields or {})}
        self.client.send(message, fields)

    def emit(self, record: logging.LogRecord) -> None:
        """Deliver a record; errors go to logging's handleError."""
        try:
            self.write(record)
        except RecursionError:
            raise
        except Exception:
            self.handleError(record)

    def close(self) -> None:
        """Close the HTTP client and release the handler."""
        try:
            self.client.close()
        finally:
            super().close()
