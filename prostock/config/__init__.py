"""Configuration module."""

from prostock.config.logging import bind_context, clear_context, configure_logging, get_logger
from prostock.config.settings import Settings, get_settings, reset_settings

__all__ = [
    "Settings",
    "get_settings",
    "reset_settings",
    "configure_logging",
    "bind_context",
    "clear_context",
    "get_logger",
]
