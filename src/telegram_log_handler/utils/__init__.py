"""Shared utilities for telegram-log-handler.

Import directly from submodules:
    from telegram_log_handler.utils.file_helpers import load_validated_json
    from telegram_log_handler.utils.logging.system_logger import get_system_logger
"""

__all__: list[str] = []  # Direct submodule imports required (see docstring)
