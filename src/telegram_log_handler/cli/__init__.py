"""Command-line interface for telegram-log-handler.

Provides commands for sending a test message and checking configuration.
"""

from .main import cli, main

__all__ = ["cli", "main"]
