"""
SDK Configuration Module
"""

from .logging_config import LogLevel, configure_logging
from .settings import ConnectionConfig, LoggingConfig, Settings, get_settings, reload_settings

__all__ = [
    'ConnectionConfig',
    'LoggingConfig',
    'LogLevel',
    'Settings',
    'configure_logging',
    'get_settings',
    'reload_settings',
]
