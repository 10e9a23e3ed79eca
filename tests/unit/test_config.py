"""
Unit tests for environment-driven settings and logging configuration.
"""

import importlib
import io
import json
import logging

import pytest
import structlog

from fluent_validator.config.logging import LoggingConfiguration, ValidatorJSONFormatter, configure_logging
from fluent_validator.config.settings import EnvironmentLoader, Settings, get_settings, reload_settings
from fluent_validator.core.exceptions import ConfigurationError, ErrorCategory, ErrorSeverity


def make_settings(**environ) -> Settings:
    return Settings(EnvironmentLoader(environ={f'FLUENT_VALIDATOR_{k}': val for k, val in environ.items()}))


class TestEnvironmentLoader:
    """Typed environment lookups."""

    def test_missing_returns_default(self):
        assert EnvironmentLoader(environ={}).get('LOCALE', 'en') == 'en'

    def test_empty_returns_default(self):
        assert EnvironmentLoader(environ={'FLUENT_VALIDATOR_LOCALE': ''}).get('LOCALE', 'en') == 'en'

    @pytest.mark.parametrize('raw,expected', [
        ('true', True), ('1', True), ('YES', True), ('on', True),
        ('false', False), ('0', False), ('No', False), ('off', False),
    ])
    def test_booleans(self, raw, expected):
        loader = EnvironmentLoader(environ={'FLUENT_VALIDATOR_FALLBACK': raw})
        assert loader.get('FALLBACK', None, bool) is expected

    def test_invalid_boolean(self):
        loader = EnvironmentLoader(environ={'FLUENT_VALIDATOR_FALLBACK': 'maybe'})

        with pytest.raises(ConfigurationError) as exc_info:
            loader.get('FALLBACK', True, bool)

        assert exc_info.value.category == ErrorCategory.CONFIGURATION
        assert exc_info.value.severity == ErrorSeverity.HIGH
        assert exc_info.value.details == {'variable': 'FLUENT_VALIDATOR_FALLBACK'}

    def test_numeric_conversion(self):
        loader = EnvironmentLoader(environ={'FLUENT_VALIDATOR_TIMEOUT': '2.5'})
        assert loader.get('TIMEOUT', None, float) == 2.5

    def test_invalid_numeric(self):
        loader = EnvironmentLoader(environ={'FLUENT_VALIDATOR_TIMEOUT': 'soon'})
        with pytest.raises(ConfigurationError):
            loader.get('TIMEOUT', None, float)

    def test_env_file_does_not_override_environment(self, tmp_path, monkeypatch):
        env_file = tmp_path / '.env'
        env_file.write_text('FLUENT_VALIDATOR_LOCALE=tr\nFLUENT_VALIDATOR_LOG_LEVEL=DEBUG\n')
        monkeypatch.setenv('FLUENT_VALIDATOR_LOCALE', 'en')
        # setenv then delenv so the value loaded from the file is removed afterwards
        monkeypatch.setenv('FLUENT_VALIDATOR_LOG_LEVEL', 'INFO')
        monkeypatch.delenv('FLUENT_VALIDATOR_LOG_LEVEL')

        loader = EnvironmentLoader(env_file=str(env_file))

        assert loader.get('LOCALE') == 'en'
        assert loader.get('LOG_LEVEL') == 'DEBUG'


class TestSettings:
    """Resolved settings."""

    def test_defaults(self):
        settings = make_settings()

        assert settings.to_dict() == {
            'locale': 'en',
            'default_locale': 'en',
            'fallback_enabled': True,
            'log_level': 'INFO',
            'log_format': 'json',
            'metrics_enabled': True,
        }

    def test_overrides(self):
        settings = make_settings(LOCALE='tr', LOG_LEVEL='debug', LOG_FORMAT='Console', METRICS_ENABLED='false')

        assert settings.LOCALE == 'tr'
        assert settings.LOG_LEVEL == 'DEBUG'
        assert settings.LOG_FORMAT == 'console'
        assert settings.METRICS_ENABLED is False

    def test_invalid_log_level(self):
        with pytest.raises(ConfigurationError):
            make_settings(LOG_LEVEL='LOUD')

    def test_invalid_log_format(self):
        with pytest.raises(ConfigurationError):
            make_settings(LOG_FORMAT='xml')

    def test_reload_replaces_cached_settings(self):
        first = get_settings()
        second = reload_settings(environ={'FLUENT_VALIDATOR_LOCALE': 'tr'})

        assert second is not first
        assert get_settings() is second
        assert get_settings().LOCALE == 'tr'

    def test_reload_from_env_file(self, tmp_path, monkeypatch):
        env_file = tmp_path / '.env'
        env_file.write_text('FLUENT_VALIDATOR_METRICS_ENABLED=false\n')
        # setenv then delenv so the value loaded from the file is removed afterwards
        monkeypatch.setenv('FLUENT_VALIDATOR_METRICS_ENABLED', 'true')
        monkeypatch.delenv('FLUENT_VALIDATOR_METRICS_ENABLED')

        settings = reload_settings(env_file=str(env_file))

        assert settings.METRICS_ENABLED is False
        assert get_settings() is settings


class TestLoggingConfiguration:
    """stdlib + structlog wiring."""

    @pytest.fixture(autouse=True)
    def restore_logging(self):
        package_logger = logging.getLogger('fluent_validator')
        handlers, level, propagate = package_logger.handlers[:], package_logger.level, package_logger.propagate
        yield
        package_logger.handlers = handlers
        package_logger.setLevel(level)
        package_logger.propagate = propagate
        structlog.reset_defaults()

    def test_json_output(self):
        stream = io.StringIO()
        configure_logging(make_settings(LOG_LEVEL='DEBUG'), stream=stream)

        logging.getLogger('fluent_validator.test').info('hello')
        record = json.loads(stream.getvalue().strip().splitlines()[-1])

        assert record['message'] == 'hello'
        assert record['logger'] == 'fluent_validator.test'
        assert record['level'] == 'INFO'

    def test_level_applied(self):
        stream = io.StringIO()
        configure_logging(make_settings(LOG_LEVEL='WARNING'), stream=stream)

        logging.getLogger('fluent_validator.test').info('hidden')
        assert stream.getvalue() == ''

    def test_console_formatter(self):
        configuration = LoggingConfiguration(make_settings(LOG_FORMAT='console'))
        formatter = configuration._create_formatter()

        assert not isinstance(formatter, ValidatorJSONFormatter)

    def test_marks_configured(self):
        configuration = configure_logging(make_settings(), stream=io.StringIO())
        assert configuration.is_configured is True

    @pytest.mark.parametrize('module_name', [
        'fluent_validator.config.settings',
        'fluent_validator.core.custom',
        'fluent_validator.core.field',
        'fluent_validator.schema',
        'fluent_validator.integrations',
    ])
    def test_modules_log_through_structlog(self, module_name):
        module = importlib.import_module(module_name)
        assert not isinstance(module.logger, logging.Logger)

    def test_structlog_events_reach_handler(self):
        stream = io.StringIO()
        configure_logging(make_settings(LOG_LEVEL='DEBUG'), stream=stream)

        structlog.get_logger('fluent_validator.schema').info('schema event', fields=2)

        assert 'schema event' in stream.getvalue()
