"""Terminal colors for telegram-log output.

Delivery outcomes are prefixed with a marker so they stay readable when
colors are stripped (piped output, CliRunner): "✓" for an acknowledged
message or a valid config, "✗" for rejections and failures.
"""

from __future__ import annotations

__all__ = [
    "style_dim",
    "style_error",
    "style_header",
    "style_success",
    "style_warning",
]

import click

_OK_MARK = "✓"
_FAIL_MARK = "✗"


def _marked(mark: str, text: str, color: str) -> str:
    return click.style(f"{mark} {text}", fg=color)


def style_header(title: str) -> str:
    """Heading for a group of settings in `config show`."""
    return click.style(f"--- {title} ---", fg="cyan", bold=True)


def style_success(message: str) -> str:
    """Green line for a delivered message, e.g. "✓ Message delivered to @ops"."""
    return _marked(_OK_MARK, message, "green")


def style_error(message: str) -> str:
    """Red line for a rejected or failed delivery. Echo it with err=True."""
    return _marked(_FAIL_MARK, message, "red")


def style_dim(message: str) -> str:
    return click.style(message, dim=True)


def style_warning(message: str) -> str:
    """Yellow "Warning: ..." line, used for insecure settings such as verify_tls=false."""
    return click.style(f"Warning: {message}", fg="yellow", bold=True)
