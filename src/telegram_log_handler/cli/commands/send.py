"""Send command for telegram-log CLI.

Builds a handler from configuration and delivers one record through it,
exactly as the logging pipeline would.
"""

from __future__ import annotations

__all__ = ["send"]

import json
import logging
import sys
from pathlib import Path
from typing import Any

import click

from telegram_log_handler.config import create_handler
from telegram_log_handler.constants import APP_NAME
from telegram_log_handler.exceptions import DeliveryRejected, TransportUnavailable
from telegram_log_handler.severity import SeverityLevel
from telegram_log_handler.utils.logging.logging_helpers import redact_secret

from ..styling import style_error, style_success, style_warning
from .options import config_option, load_config_or_exit


def _parse_context(context_json: str | None) -> dict[str, Any] | None:
    """Parse the --context option into a dict."""
    if context_json is None:
        return None
    try:
        context = json.loads(context_json)
    except json.JSONDecodeError as e:
        raise click.BadParameter(f"not valid JSON: {e}", param_hint="--context") from e
    if not isinstance(context, dict):
        raise click.BadParameter("must be a JSON object", param_hint="--context")
    return context


@click.command("send")
@click.argument("message")
@click.option(
    "--level",
    type=click.Choice([level.name for level in SeverityLevel], case_sensitive=False),
    default="ERROR",
    show_default=True,
    help="Severity of the record",
)
@click.option("--context", "context_json", default=None, help='JSON object appended as context, e.g. \'{"host": "web-1"}\'')
@config_option
def send(message: str, level: str, context_json: str | None, config_path: Path | None) -> None:
    """Send MESSAGE to the configured chat.

    The record bypasses the configured minimum level so any severity can be
    tested. Exits 1 if Telegram did not acknowledge the message.
    """
    context = _parse_context(context_json)
    config = load_config_or_exit(config_path)

    if not config.verify_tls:
        click.echo(style_warning("TLS certificate verification is disabled"), err=True)

    try:
        handler = create_handler(config)
    except TransportUnavailable as e:
        click.echo(style_error(f"Error: {e}"), err=True)
        sys.exit(1)

    record = logging.LogRecord(
        name=f"{APP_NAME}.cli",
        level=int(SeverityLevel[level.upper()]),
        pathname=__file__,
        lineno=0,
        msg=message,
        args=None,
        exc_info=None,
    )
    if context is not None:
        record.context = context

    try:
        handler.write(record)
        error = handler.client.last_error
        response = handler.response
    finally:
        handler.close()

    if error is None and response is not None and response.ok:
        click.echo(style_success(f"Message delivered to {config.channel}"))
        return

    token = config.token.get_secret_value()
    if isinstance(error, DeliveryRejected):
        click.echo(style_error(f"Telegram rejected the message: {redact_secret(error.description, token)}"), err=True)
    else:
        click.echo(style_error(f"Delivery failed: {redact_secret(error, token)}"), err=True)
    sys.exit(1)
