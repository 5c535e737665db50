"""Date rendering for the message header.

Two pattern styles are accepted:
- strftime patterns, recognised by a '%' anywhere in the pattern ("%Y-%m-%d")
- PHP date() letters otherwise ("Y-m-d", "F j, Y, g:i a")

PHP letters are rendered with English names regardless of the process
locale. A backslash escapes the following character; any character that is
not a known letter is copied as-is.
"""

from __future__ import annotations

__all__ = [
    "render_date",
    "resolve_timezone",
]

import logging
from datetime import date, datetime, timedelta, timezone, tzinfo
from typing import Callable
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from telegram_log_handler.utils.logging.system_logger import get_system_logger

_MONTH_NAMES = (
    "January",
    "February",
    "March",
    "April",
    "May",
    "June",
    "July",
    "August",
    "September",
    "October",
    "November",
    "December",
)
_DAY_NAMES = ("Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday", "Sunday")


def resolve_timezone(tz: str | tzinfo | None, system_logger: logging.Logger | None = None) -> tzinfo:
    """Resolve a timezone name to a tzinfo.

    Unknown names fall back to UTC with a warning; the formatter never
    raises because of a bad timezone.

    Args:
        tz: IANA name (e.g. "Europe/Berlin"), a tzinfo instance, or None for UTC.
        system_logger: Logger for the fallback warning (default: system logger).

    Returns:
        tzinfo: The resolved timezone.
    """
    if tz is None:
        return timezone.utc
    if isinstance(tz, tzinfo):
        return tz
    if isinstance(tz, str) and tz.upper() == "UTC":
        return timezone.utc
    try:
        return ZoneInfo(tz)
    except (ZoneInfoNotFoundError, ValueError, TypeError):
        (system_logger or get_system_logger()).warning(
            {
                "event": "unknown_timezone",
                "timezone": str(tz),
                "message": f"Unknown timezone {tz!r}, falling back to UTC",
            }
        )
        return timezone.utc


def _ordinal_suffix(day: int) -> str:
    if day in (11, 12, 13):
        return "th"
    return {1: "st", 2: "nd", 3: "rd"}.get(day % 10, "th")


def _days_in_month(moment: datetime) -> int:
    first_of_next = date(moment.year + moment.month // 12, moment.month % 12 + 1, 1)
    return (first_of_next - timedelta(days=1)).day


def _is_leap(year: int) -> bool:
    return year % 4 == 0 and (year % 100 != 0 or year % 400 == 0)


def _hour12(moment: datetime) -> int:
    return moment.hour % 12 or 12


def _utc_offset(moment: datetime, separator: str) -> str:
    offset = moment.utcoffset() or timedelta(0)
    total_minutes = int(offset.total_seconds()) // 60
    sign = "-" if total_minutes < 0 else "+"
    hours, minutes = divmod(abs(total_minutes), 60)
    return f"{sign}{hours:02d}{separator}{minutes:02d}"


def _timezone_identifier(moment: datetime) -> str:
    key = getattr(moment.tzinfo, "key", None)
    if key:
        return str(key)
    return moment.tzname() or "UTC"


# PHP date() format letters
_PHP_FORMATTERS: dict[str, Callable[[datetime], str]] = {
    # Day
    "d": lambda m: f"{m.day:02d}",
    "D": lambda m: _DAY_NAMES[m.weekday()][:3],
    "j": lambda m: str(m.day),
    "l": lambda m: _DAY_NAMES[m.weekday()],
    "N": lambda m: str(m.isoweekday()),
    "S": lambda m: _ordinal_suffix(m.day),
    "w": lambda m: str(m.isoweekday() % 7),
    "z": lambda m: str(m.timetuple().tm_yday - 1),
    # Week
    "W": lambda m: f"{m.isocalendar()[1]:02d}",
    # Month
    "F": lambda m: _MONTH_NAMES[m.month - 1],
    "M": lambda m: _MONTH_NAMES[m.month - 1][:3],
    "m": lambda m: f"{m.month:02d}",
    "n": lambda m: str(m.month),
    "t": lambda m: str(_days_in_month(m)),
    # Year
    "L": lambda m: "1" if _is_leap(m.year) else "0",
    "o": lambda m: str(m.isocalendar()[0]),
    "Y": lambda m: f"{m.year:04d}",
    "y": lambda m: f"{m.year % 100:02d}",
    # Time
    "a": lambda m: "am" if m.hour < 12 else "pm",
    "A": lambda m: "AM" if m.hour < 12 else "PM",
    "g": lambda m: str(_hour12(m)),
    "G": lambda m: str(m.hour),
    "h": lambda m: f"{_hour12(m):02d}",
    "H": lambda m: f"{m.hour:02d}",
    "i": lambda m: f"{m.minute:02d}",
    "s": lambda m: f"{m.second:02d}",
    "u": lambda m: f"{m.microsecond:06d}",
    "v": lambda m: f"{m.microsecond // 1000:03d}",
    # Timezone
    "e": _timezone_identifier,
    "T": lambda m: m.tzname() or "UTC",
    "P": lambda m: _utc_offset(m, ":"),
    "p": lambda m: "Z" if not (m.utcoffset() or timedelta(0)) else _utc_offset(m, ":"),
    "O": lambda m: _utc_offset(m, ""),
    "Z": lambda m: str(int((m.utcoffset() or timedelta(0)).total_seconds())),
    # Full date/time
    "c": lambda m: m.replace(microsecond=0).isoformat(),
    "r": lambda m: _render_php("D, d M Y H:i:s O", m),
    "U": lambda m: str(int(m.timestamp())),
}


def _render_php(pattern: str, moment: datetime) -> str:
    parts: list[str] = []
    escaped = False
    for char in pattern:
        if escaped:
            parts.append(char)
            escaped = False
        elif char == "\\":
            escaped = True
        elif char in _PHP_FORMATTERS:
            parts.append(_PHP_FORMATTERS[char](moment))
        else:
            parts.append(char)
    return "".join(parts)


def render_date(pattern: str | None, moment: datetime) -> str:
    """Render a moment with a PHP-style or strftime pattern.

    No validation happens here: an unexpected pattern produces unexpected
    text, not an error.

    Args:
        pattern: Date pattern. None or "" renders as "".
        moment: Timezone-aware datetime to render.

    Returns:
        str: The rendered date.

    Example:
        >>> render_date("Y-m-d", datetime(2024, 1, 1, tzinfo=timezone.utc))
        '2024-01-01'
        >>> render_date("%d/%m/%Y", datetime(2024, 1, 1, tzinfo=timezone.utc))
        '01/01/2024'
    """
    if not pattern:
        return ""
    if "%" in pattern:
        try:
            return moment.strftime(pattern)
        except ValueError:
            # Platform strftime rejected a directive
            return pattern
    return _render_php(pattern, moment)
