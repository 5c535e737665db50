"""Logging helper utilities.

Provides generic utilities for diagnostics and message rendering:
- Secret redaction (bot token must never reach a log line)
- Context serialization (deterministic compact JSON)
"""

from __future__ import annotations

__all__ = [
    "redact_secret",
    "serialize_context",
]

import json
import logging
from collections.abc import Mapping
from typing import Any

from telegram_log_handler.constants import REDACTED


# ============================================================================
# Redaction
# ============================================================================


def redact_secret(value: Any, secret: str | None) -> str:
    """Remove every occurrence of a secret from a string.

    Used on exception text and URLs before they are logged: httpx errors
    embed the request URL, and the bot token is part of that URL.

    Args:
        value: Value to render and sanitize.
        secret: Secret to strip. Empty or None leaves the value unchanged.

    Returns:
        str: The rendered value with the secret replaced by [REDACTED].

    Example:
        >>> redact_secret("POST https://api.telegram.org/bot123:abc/SendMessage", "123:abc")
        'POST https://api.telegram.org/bot[REDACTED]/SendMessage'
    """
    text = str(value)
    if not secret:
        return text
    return text.replace(secret, REDACTED)


# ============================================================================
# Context serialization
# ============================================================================


def serialize_context(context: Mapping[str, Any] | None, system_logger: logging.Logger | None = None) -> str:
    """Serialize a record context mapping to compact JSON.

    Keys are sorted so identical contexts always render identically.
    Objects JSON cannot represent are rendered with str().

    Args:
        context: Context mapping from the log record.
        system_logger: Optional logger for serialization failures.

    Returns:
        str: Compact JSON, or "" when the context is empty or cannot be
            serialized (e.g. circular references, non-string keys that
            cannot be sorted).
    """
    if not context:
        return ""

    try:
        return json.dumps(
            dict(context),
            sort_keys=True,
            separators=(",", ":"),
            ensure_ascii=False,
            default=str,
        )
    except (TypeError, ValueError, RecursionError) as e:
        if system_logger:
            system_logger.debug(
                {
                    "event": "context_serialization_failed",
                    "error": str(e),
                    "error_type": type(e).__name__,
                    "message": "Could not serialize log context, sending message without it",
                }
            )
        return ""
