"""Configuration for neo-identity."""

from .settings import IdentityStoreSettings, get_settings
from .logging_config import LoggingConfig, setup_logging, get_logger

__all__ = [
    "IdentityStoreSettings",
    "get_settings",
    "LoggingConfig",
    "setup_logging",
    "get_logger",
]
