"""Severity levels and their display glyphs.

SeverityLevel mirrors the eight syslog-style levels. Member values follow the
stdlib numbering so each member is also a valid `logging` level; NOTICE,
ALERT and EMERGENCY fill the gaps around the stdlib levels.

The glyph table is an immutable mapping. A level without a glyph is a
configuration bug and raises UnknownSeverity instead of falling back to a
default.
"""

from __future__ import annotations

__all__ = [
    "SEVERITY_GLYPHS",
    "SeverityLevel",
    "glyph",
    "register_level_names",
    "severity_from_levelno",
]

import logging
from collections.abc import Mapping
from enum import IntEnum
from types import MappingProxyType
from typing import Any

from telegram_log_handler.exceptions import UnknownSeverity


class SeverityLevel(IntEnum):
    """Log severity, lowest to highest."""

    DEBUG = logging.DEBUG
    INFO = logging.INFO
    NOTICE = 25
    WARNING = logging.WARNING
    ERROR = logging.ERROR
    CRITICAL = logging.CRITICAL
    ALERT = 60
    EMERGENCY = 70


# INFO starts with a zero-width joiner
SEVERITY_GLYPHS: Mapping[SeverityLevel, str] = MappingProxyType(
    {
        SeverityLevel.DEBUG: "🚧",
        SeverityLevel.INFO: "‍🗨",
        SeverityLevel.NOTICE: "🕵",
        SeverityLevel.WARNING: "⚡️",
        SeverityLevel.ERROR: "🚨",
        SeverityLevel.CRITICAL: "🤒",
        SeverityLevel.ALERT: "👀",
        SeverityLevel.EMERGENCY: "🤕",
    }
)

_LEVELS_BY_NUMBER: Mapping[int, SeverityLevel] = MappingProxyType({int(level): level for level in SeverityLevel})


def glyph(level: Any, glyphs: Mapping[SeverityLevel, str] = SEVERITY_GLYPHS) -> str:
    """Look up the display glyph for a severity level.

    Args:
        level: A SeverityLevel member.
        glyphs: Glyph table to use (default: SEVERITY_GLYPHS).

    Returns:
        str: The glyph for the level.

    Raises:
        UnknownSeverity: If level is not a SeverityLevel or has no entry.
    """
    if not isinstance(level, SeverityLevel):
        raise UnknownSeverity(level)
    try:
        return glyphs[level]
    except KeyError:
        raise UnknownSeverity(level) from None


def severity_from_levelno(levelno: int) -> SeverityLevel:
    """Map a `logging` level number to a SeverityLevel.

    Only exact level numbers are accepted; intermediate custom levels
    (e.g. 15) are not rounded to a neighbour.

    Raises:
        UnknownSeverity: If levelno matches no SeverityLevel.
    """
    try:
        return _LEVELS_BY_NUMBER[levelno]
    except (KeyError, TypeError):
        raise UnknownSeverity(levelno) from None


def register_level_names() -> None:
    """Register NOTICE, ALERT and EMERGENCY with the logging module.

    Makes `%(levelname)s` render the extra levels by name. Safe to call
    more than once.
    """
    for level in (SeverityLevel.NOTICE, SeverityLevel.ALERT, SeverityLevel.EMERGENCY):
        logging.addLevelName(int(level), level.name)
