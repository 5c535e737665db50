"""Logging utilities and helpers.

This package provides the diagnostic side channel for telegram-log-handler:
- system_logger: Non-propagating logger for delivery problems and warnings
- logging_helpers: Secret redaction and context serialization

Import directly from submodules to avoid circular imports:
    from telegram_log_handler.utils.logging.system_logger import get_system_logger
"""

__all__: list[str] = []  # Direct submodule imports required (see docstring)
