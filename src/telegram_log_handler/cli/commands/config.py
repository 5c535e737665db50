"""Config command group for telegram-log CLI.

Provides configuration inspection subcommands.
"""

from __future__ import annotations

__all__ = ["config"]

import json
from pathlib import Path

import click

from telegram_log_handler.config import TelegramHandlerConfig

from ..styling import style_dim, style_header, style_success, style_warning
from .options import config_option, load_config_or_exit


def _default_marker(loaded: TelegramHandlerConfig, field: str) -> str:
    """Return styled (default) marker if the field was not set explicitly."""
    if field in loaded.model_fields_set:
        return ""
    return style_dim(" (default)")


@click.group()
def config() -> None:
    """Configuration inspection commands.

    \b
    Sources (first match wins):
      1. --config PATH (JSON file)
      2. TELEGRAM_LOG_* environment variables
    """
    pass


@config.command("show")
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
@config_option
def config_show(as_json: bool, config_path: Path | None) -> None:
    """Display the resolved configuration. The token is masked."""
    loaded = load_config_or_exit(config_path)

    if as_json:
        click.echo(json.dumps(loaded.model_dump(mode="json"), indent=2))
        return

    click.echo(style_header("Delivery"))
    click.echo(f"  token: {loaded.token}")
    click.echo(f"  channel: {loaded.channel}")
    click.echo(f"  timeout: {loaded.timeout}" + _default_marker(loaded, "timeout"))
    click.echo(f"  verify_tls: {loaded.verify_tls}" + _default_marker(loaded, "verify_tls"))
    click.echo(f"  parse_mode: {loaded.parse_mode}" + _default_marker(loaded, "parse_mode"))
    click.echo(
        f"  disable_notification: {loaded.disable_notification}" + _default_marker(loaded, "disable_notification")
    )
    click.echo()
    click.echo(style_header("Formatting"))
    click.echo(f"  level: {loaded.level}" + _default_marker(loaded, "level"))
    click.echo(f"  timezone: {loaded.timezone}" + _default_marker(loaded, "timezone"))
    click.echo(f"  date_format: {loaded.date_format}" + _default_marker(loaded, "date_format"))
    click.echo()
    click.echo(f"Source: {config_path if config_path else 'environment'}")


@config.command("validate")
@config_option
def config_validate(config_path: Path | None) -> None:
    """Validate configuration without sending anything."""
    loaded = load_config_or_exit(config_path)
    if not loaded.verify_tls:
        click.echo(style_warning("TLS certificate verification is disabled"), err=True)
    click.echo(style_success("Configuration is valid"))
