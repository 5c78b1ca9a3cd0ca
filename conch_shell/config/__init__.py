"""Settings and logging setup."""

from conch_shell.config.log_config import configure_logging
from conch_shell.config.settings import Environment, LogLevel, Settings, get_settings

__all__ = [
    "Environment",
    "LogLevel",
    "Settings",
    "configure_logging",
    "get_settings",
]
