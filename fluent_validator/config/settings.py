"""
Environment-driven settings for the validation engine.

Values are read from the process environment after loading an optional
``.env`` file with python-dotenv. Existing environment variables always win
over the file so deployments can override anything.

Supported variables:
- FLUENT_VALIDATOR_LOCALE: locale used when a schema does not pin one
- FLUENT_VALIDATOR_DEFAULT_LOCALE: locale consulted when a message is missing
- FLUENT_VALIDATOR_FALLBACK: enable the default-locale fallback
- FLUENT_VALIDATOR_LOG_LEVEL: stdlib log level name
- FLUENT_VALIDATOR_LOG_FORMAT: ``json`` or ``console``
- FLUENT_VALIDATOR_METRICS_ENABLED: update Prometheus metrics on each run
"""

import os
from typing import Any, Dict, Optional

import structlog
from dotenv import find_dotenv, load_dotenv

from ..core.exceptions import ConfigurationError

logger = structlog.get_logger(__name__)

ENV_PREFIX = 'FLUENT_VALIDATOR_'

DEFAULT_LOCALE = 'en'
DEFAULT_LOG_LEVEL = 'INFO'
DEFAULT_LOG_FORMAT = 'json'

VALID_LOG_LEVELS = ('DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL')
VALID_LOG_FORMATS = ('json', 'console')

_TRUE_VALUES = ('true', '1', 'yes', 'on')
_FALSE_VALUES = ('false', '0', 'no', 'off')


class EnvironmentLoader:
    """
    Thin wrapper over python-dotenv plus typed environment lookups.

    The ``.env`` file is loaded with ``override=False`` so values already
    present in the process environment are preserved.
    """

    def __init__(self, env_file: Optional[str] = None, environ: Optional[Dict[str, str]] = None):
        """
        Args:
            env_file: Optional path to .env file, defaults to auto-discovery
            environ: Mapping to read from instead of ``os.environ``
        """
        self.environ = environ if environ is not None else os.environ
        if environ is None:
            self.env_file = env_file or find_dotenv(usecwd=True)
            if self.env_file:
                load_dotenv(self.env_file, override=False)
                logger.debug("Loaded environment file", env_file=self.env_file)
        else:
            self.env_file = env_file

    def get(self, key: str, default: Any = None, var_type: type = str) -> Any:
        """
        Get an environment variable converted to ``var_type``.

        Args:
            key: Variable name without the FLUENT_VALIDATOR_ prefix
            default: Value returned when the variable is unset
            var_type: One of str, bool, int, float

        Returns:
            Converted value or default

        Raises:
            ConfigurationError: When the value cannot be converted
        """
        name = ENV_PREFIX + key
        value = self.environ.get(name)
        if value is None or value == '':
            return default

        if var_type == bool:
            lowered = value.strip().lower()
            if lowered in _TRUE_VALUES:
                return True
            if lowered in _FALSE_VALUES:
                return False
            raise ConfigurationError(
                f"Environment variable '{name}' must be a boolean, got '{value}'",
                details={'variable': name},
            )

        try:
            return var_type(value.strip())
        except (TypeError, ValueError) as e:
            raise ConfigurationError(
                f"Environment variable '{name}' has invalid type: {str(e)}",
                details={'variable': name},
            )


class Settings:
    """
    Resolved library settings.

    Attributes:
        LOCALE: Active locale for new translators
        DEFAULT_LOCALE: Fallback locale for missing messages
        FALLBACK_ENABLED: Whether the fallback locale is consulted
        LOG_LEVEL: Log level name
        LOG_FORMAT: ``json`` or ``console``
        METRICS_ENABLED: Whether schema runs update Prometheus metrics
    """

    def __init__(self, loader: Optional[EnvironmentLoader] = None):
        loader = loader or EnvironmentLoader()

        self.LOCALE = loader.get('LOCALE', DEFAULT_LOCALE)
        self.DEFAULT_LOCALE = loader.get('DEFAULT_LOCALE', DEFAULT_LOCALE)
        self.FALLBACK_ENABLED = loader.get('FALLBACK', True, bool)
        self.LOG_LEVEL = loader.get('LOG_LEVEL', DEFAULT_LOG_LEVEL).upper()
        self.LOG_FORMAT = loader.get('LOG_FORMAT', DEFAULT_LOG_FORMAT).lower()
        self.METRICS_ENABLED = loader.get('METRICS_ENABLED', True, bool)

        self._validate()

    def _validate(self) -> None:
        if self.LOG_LEVEL not in VALID_LOG_LEVELS:
            raise ConfigurationError(
                f"Invalid log level '{self.LOG_LEVEL}'. "
                f"Expected one of: {', '.join(VALID_LOG_LEVELS)}"
            )
        if self.LOG_FORMAT not in VALID_LOG_FORMATS:
            raise ConfigurationError(
                f"Invalid log format '{self.LOG_FORMAT}'. "
                f"Expected one of: {', '.join(VALID_LOG_FORMATS)}"
            )

    def to_dict(self) -> Dict[str, Any]:
        return {
            'locale': self.LOCALE,
            'default_locale': self.DEFAULT_LOCALE,
            'fallback_enabled': self.FALLBACK_ENABLED,
            'log_level': self.LOG_LEVEL,
            'log_format': self.LOG_FORMAT,
            'metrics_enabled': self.METRICS_ENABLED,
        }


_settings: Optional[Settings] = None


def get_settings() -> Settings:
    """Return the cached settings instance, loading it on first use."""
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings


def reload_settings(
    environ: Optional[Dict[str, str]] = None,
    env_file: Optional[str] = None
) -> Settings:
    """
    Rebuild the cached settings.

    Args:
        environ: Optional mapping used instead of the process environment
        env_file: Optional .env path loaded before reading the process
            environment, ignored when ``environ`` is given

    Returns:
        The new settings instance
    """
    global _settings
    _settings = Settings(EnvironmentLoader(env_file=env_file, environ=environ))
    return _settings
