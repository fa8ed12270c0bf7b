"""Configuration module for neo-store.

Store settings and logging configuration.
"""

from .settings import StoreSettings, get_settings
from .logging_config import (
    setup_logging,
    get_logger,
    LogLevel,
    LogVerbosity,
    LogFormat,
    LoggingConfig,
)

__all__ = [
    # Settings
    "StoreSettings",
    "get_settings",

    # Logging
    "setup_logging",
    "get_logger",
    "LogLevel",
    "LogVerbosity",
    "LogFormat",
    "LoggingConfig",
]
