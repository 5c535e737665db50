"""Rendering of one log record into the outbound message text.

Layout:
    <date>\\n<glyph> <body truncated to the length limit><context JSON>

The date is the wall-clock time at format time, not the record's creation
time. The length limit applies to the body only; context is appended after
truncation, so the total may exceed the limit.
"""

from __future__ import annotations

__all__ = ["RecordFormatter"]

import logging
from collections.abc import Mapping
from datetime import datetime, tzinfo
from typing import Any, Callable

from telegram_log_handler.constants import DEFAULT_DATE_FORMAT, DEFAULT_TIMEZONE, MESSAGE_LENGTH_LIMIT
from telegram_log_handler.dates import render_date, resolve_timezone
from telegram_log_handler.severity import SEVERITY_GLYPHS, SeverityLevel, glyph
from telegram_log_handler.utils.logging.logging_helpers import serialize_context
from telegram_log_handler.utils.logging.system_logger import get_system_logger


class RecordFormatter:
    """Compose the message text sent to Telegram.

    date_format and timezone are plain attributes: they can be reassigned at
    any time and are only interpreted on the next format() call.

    Attributes:
        date_format: PHP-style ("Y-m-d") or strftime ("%Y-%m-%d") pattern.
        timezone: IANA timezone name or tzinfo used to render the date.
        glyphs: Severity-to-glyph table.
        message_limit: Maximum length of the body portion.
    """

    def __init__(
        self,
        date_format: str = DEFAULT_DATE_FORMAT,
        timezone: str | tzinfo = DEFAULT_TIMEZONE,
        *,
        glyphs: Mapping[SeverityLevel, str] = SEVERITY_GLYPHS,
        clock: Callable[[tzinfo], datetime] | None = None,
        message_limit: int = MESSAGE_LENGTH_LIMIT,
        system_logger: logging.Logger | None = None,
    ) -> None:
        """Initialize the formatter.

        Args:
            date_format: Date pattern for the header line.
            timezone: Timezone the date is rendered in.
            glyphs: Severity-to-glyph table (default: SEVERITY_GLYPHS).
            clock: Returns "now" for a tzinfo (default: datetime.now).
            message_limit: Body length cap (default: 4096).
            system_logger: Logger for absorbed problems (default: system logger).
        """
        self.date_format = date_format
        self.timezone = timezone
        self.glyphs = glyphs
        self.message_limit = message_limit
        self._clock = clock or datetime.now
        self._system_logger = system_logger or get_system_logger()

    def render_now(self) -> str:
        """Render the current time with the configured pattern and timezone."""
        tz = resolve_timezone(self.timezone, self._system_logger)
        return render_date(self.date_format, self._clock(tz))

    def format(self, level: SeverityLevel, body: str, context: Mapping[str, Any] | None = None) -> str:
        """Render one record.

        Args:
            level: Record severity.
            body: Pre-rendered record text.
            context: Optional structured context appended as compact JSON.

        Returns:
            str: The message text.

        Raises:
            UnknownSeverity: If level has no glyph.
        """
        symbol = glyph(level, self.glyphs)
        date = self.render_now()
        serialized = serialize_context(context, self._system_logger)
        truncated = body[: self.message_limit]
        return f"{date}\n{symbol} {truncated}{serialized}"
