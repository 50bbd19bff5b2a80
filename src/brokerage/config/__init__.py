"""Configuration package."""

from brokerage.config.settings import (
    Settings,
    StorageBackend,
    get_settings,
    set_settings,
    reset_settings,
)
from brokerage.config.logging_config import setup_logging

__all__ = [
    "Settings",
    "StorageBackend",
    "get_settings",
    "set_settings",
    "reset_settings",
    "setup_logging",
]
