"""
Shared pytest configuration for the fluent-validator test suite.

Every test runs against settings built from an empty environment, a fresh
process-wide translator and a private Prometheus registry, so no test can
leak locale or metric state into another.
"""

import pytest
import structlog
from prometheus_client import CollectorRegistry

from fluent_validator.config.settings import reload_settings
from fluent_validator.i18n.messages import reset_translator
from fluent_validator.monitoring import ValidationMetricsCollector, set_metrics_collector

logger = structlog.get_logger("tests.conftest")


def pytest_configure(config):
    config.addinivalue_line("markers", "unit: Unit tests")


@pytest.fixture(autouse=True)
def isolated_environment():
    """Reset settings, translator and metrics around every test."""
    settings = reload_settings(environ={})
    reset_translator()
    previous = set_metrics_collector(ValidationMetricsCollector(CollectorRegistry()))

    yield settings

    set_metrics_collector(previous)
    reload_settings(environ={})
    reset_translator()


@pytest.fixture
def metrics_registry():
    """Install a collector on a fresh registry and return the registry."""
    registry = CollectorRegistry()
    set_metrics_collector(ValidationMetricsCollector(registry))
    return registry
