"""Shared click options and config loading for CLI commands."""

from __future__ import annotations

__all__ = [
    "config_option",
    "load_config_or_exit",
]

import sys
from pathlib import Path
from typing import Any, Callable, TypeVar

import click

from telegram_log_handler.config import TelegramHandlerConfig

from ..styling import style_error

F = TypeVar("F", bound=Callable[..., Any])


def config_option(func: F) -> F:
    """Add the --config option."""
    return click.option(
        "--config",
        "config_path",
        type=click.Path(path_type=Path, dir_okay=False),
        default=None,
        help="JSON config file (default: TELEGRAM_LOG_* environment variables)",
    )(func)


def load_config_or_exit(config_path: Path | None) -> TelegramHandlerConfig:
    """Load configuration, printing the error and exiting 1 on failure."""
    try:
        return TelegramHandlerConfig.load(config_path)
    except (FileNotFoundError, ValueError) as e:
        click.echo(style_error(f"Error: {e}"), err=True)
        sys.exit(1)
