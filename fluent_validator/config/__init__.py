"""Settings and logging configuration for the validator package."""

from .settings import Settings, EnvironmentLoader, get_settings, reload_settings
from .logging import LoggingConfiguration, configure_logging

__all__ = [
    'Settings',
    'EnvironmentLoader',
    'get_settings',
    'reload_settings',
    'LoggingConfiguration',
    'configure_logging',
]
