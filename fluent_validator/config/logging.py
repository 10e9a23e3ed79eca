"""
Structured logging setup for applications embedding the validator.

The library itself only calls ``structlog.get_logger(__name__)``; nothing is
configured on import. Applications that want the library's log events
formatted consistently call ``configure_logging()`` once at startup.

Key Features:
- structlog processor chain with ISO timestamps and log level
- JSON output through python-json-logger for log aggregation
- Plain console formatter for local development
"""

import logging
import sys
from typing import Any, Dict, List, Optional

import structlog
from pythonjsonlogger import jsonlogger

from .settings import Settings, get_settings


class ValidatorJSONFormatter(jsonlogger.JsonFormatter):
    """JSON formatter adding logger name and level to every record."""

    def add_fields(self, log_record: Dict[str, Any], record: logging.LogRecord, message_dict: Dict[str, Any]) -> None:
        super().add_fields(log_record, record, message_dict)
        log_record['logger'] = record.name
        log_record['level'] = record.levelname


class LoggingConfiguration:
    """
    Applies logging settings to stdlib logging and structlog.
    """

    def __init__(self, settings: Optional[Settings] = None):
        self.settings = settings or get_settings()
        self.is_configured = False

    def configure_structured_logging(self, stream=None) -> None:
        """
        Configure stdlib handlers and the structlog processor chain.

        Args:
            stream: Output stream, defaults to stdout
        """
        self._configure_stdlib_logging(stream or sys.stdout)

        processors: List[Any] = [
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
        ]

        if self.settings.LOG_FORMAT == 'json':
            processors.append(structlog.processors.JSONRenderer())
        else:
            processors.append(structlog.dev.ConsoleRenderer())

        structlog.configure(
            processors=processors,
            wrapper_class=structlog.stdlib.BoundLogger,
            context_class=dict,
            logger_factory=structlog.stdlib.LoggerFactory(),
            cache_logger_on_first_use=True,
        )

        self.is_configured = True

    def _configure_stdlib_logging(self, stream) -> None:
        handler = logging.StreamHandler(stream)
        handler.setFormatter(self._create_formatter())

        package_logger = logging.getLogger('fluent_validator')
        package_logger.handlers = [handler]
        package_logger.setLevel(getattr(logging, self.settings.LOG_LEVEL))
        package_logger.propagate = False

    def _create_formatter(self) -> logging.Formatter:
        if self.settings.LOG_FORMAT == 'json':
            return ValidatorJSONFormatter('%(message)s')
        return logging.Formatter(
            fmt='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
            datefmt='%Y-%m-%d %H:%M:%S'
        )


def configure_logging(settings: Optional[Settings] = None, stream=None) -> LoggingConfiguration:
    """
    Configure logging for the validator package.

    Args:
        settings: Settings to apply, defaults to the cached environment settings
        stream: Output stream, defaults to stdout

    Returns:
        The applied LoggingConfiguration
    """
    configuration = LoggingConfiguration(settings)
    configuration.configure_structured_logging(stream)
    return configuration
