"""Main CLI entry point for telegram-log-handler.

Defines the CLI group and registers all subcommands.

Commands:
    send    - Send one log record to the configured chat
    config  - Configuration inspection (show, validate)

Configuration is read from --config PATH (JSON) or, without it, from
TELEGRAM_LOG_* environment variables.

Subcommand help:
    telegram-log COMMAND -h         Show help for a specific command
"""

from __future__ import annotations

__all__ = ["cli", "main"]

import sys

import click

from telegram_log_handler import __version__
from telegram_log_handler.constants import APP_NAME

from .commands.config import config
from .commands.send import send


class ReorderedGroup(click.Group):
    """Custom group that shows commands before custom help text."""

    def format_epilog(self, ctx: click.Context, formatter: click.HelpFormatter) -> None:
        """Add extra help after commands section."""
        formatter.write(
            """
Quick Start:
  export TELEGRAM_LOG_TOKEN=123456:ABC-DEF
  export TELEGRAM_LOG_CHANNEL=@my_alerts
  telegram-log send "hello from telegram-log" --level info

With a config file:
  telegram-log config validate --config telegram-log.json
  telegram-log send "disk full" --level error --config telegram-log.json
"""
        )


@click.group(
    cls=ReorderedGroup,
    invoke_without_command=True,
    context_settings={"help_option_names": ["-h", "--help"]},
)
@click.option("--version", "-v", is_flag=True, help="Show version")
@click.pass_context
def cli(ctx: click.Context, version: bool) -> None:
    """telegram-log: forward log records to a Telegram chat."""
    if version:
        click.echo(f"{APP_NAME} {__version__}")
        sys.exit(0)
    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())


# Register commands
cli.add_command(config)
cli.add_command(send)


def main() -> None:
    """CLI entry point."""
    cli()
