"""Configuration module."""

from purchasing.config.logging import configure_logging, get_logger
from purchasing.config.settings import (
    APISettings,
    OrderSettings,
    Settings,
    StorageSettings,
    get_settings,
    reset_settings,
)

__all__ = [
    "Settings",
    "StorageSettings",
    "OrderSettings",
    "APISettings",
    "get_settings",
    "reset_settings",
    "configure_logging",
    "get_logger",
]
