"""
Prometheus metrics for schema runs.

Key Features:
- Counter of schema runs labelled by outcome (valid / invalid) and mode
  (sync / async)
- Counter of recorded error messages labelled by error kind
- Histogram of run duration in seconds

Metrics are registered once per registry. Applications expose them with
their usual ``prometheus_client`` exporter; tests pass a private
``CollectorRegistry`` to keep counts isolated.
"""

import threading
from typing import Dict, Optional

import structlog
from prometheus_client import REGISTRY, CollectorRegistry, Counter, Histogram, generate_latest

from .config.settings import get_settings
from .core.result import CROSS_VALIDATION_KEY, ValidationResult

logger = structlog.get_logger(__name__)

DURATION_BUCKETS = [0.0005, 0.001, 0.0025, 0.005, 0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1.0, float('inf')]


class ValidationMetricsCollector:
    """
    Owns the validator metrics for one Prometheus registry.
    """

    def __init__(self, registry: Optional[CollectorRegistry] = None):
        """
        Args:
            registry: Target registry, defaults to the global REGISTRY
        """
        self.registry = registry if registry is not None else REGISTRY

        self.runs_total = Counter(
            'fluent_validator_runs_total',
            'Total number of schema validation runs',
            ['outcome', 'mode'],
            registry=self.registry
        )

        self.errors_total = Counter(
            'fluent_validator_errors_total',
            'Total number of validation error messages recorded',
            ['kind'],
            registry=self.registry
        )

        self.run_duration_seconds = Histogram(
            'fluent_validator_run_duration_seconds',
            'Schema validation run duration in seconds',
            ['mode'],
            buckets=DURATION_BUCKETS,
            registry=self.registry
        )

    def record_run(self, result: ValidationResult, duration: float, mode: str = 'sync') -> None:
        """
        Record one finished schema run.

        Args:
            result: Result of the run
            duration: Wall-clock duration in seconds
            mode: ``sync`` or ``async``
        """
        outcome = 'valid' if result.is_valid else 'invalid'
        self.runs_total.labels(outcome=outcome, mode=mode).inc()
        self.run_duration_seconds.labels(mode=mode).observe(duration)

        for kind, count in _error_counts(result).items():
            if count:
                self.errors_total.labels(kind=kind).inc(count)

    def generate_metrics_output(self) -> bytes:
        """Render the registry in the Prometheus text exposition format."""
        return generate_latest(self.registry)


def _error_counts(result: ValidationResult) -> Dict[str, int]:
    counts = {'field': 0, 'cross_field': 0}
    for field, messages in result.errors.items():
        kind = 'cross_field' if field == CROSS_VALIDATION_KEY else 'field'
        counts[kind] += len(messages)
    return counts


_collector: Optional[ValidationMetricsCollector] = None
_collector_lock = threading.Lock()


def get_metrics_collector() -> ValidationMetricsCollector:
    """Return the collector bound to the global registry, creating it once."""
    global _collector
    with _collector_lock:
        if _collector is None:
            _collector = ValidationMetricsCollector()
        return _collector


def set_metrics_collector(
    collector: Optional[ValidationMetricsCollector]
) -> Optional[ValidationMetricsCollector]:
    """
    Replace the process-wide collector.

    Returns:
        The previous collector, so callers can restore it
    """
    global _collector
    with _collector_lock:
        previous = _collector
        _collector = collector
        return previous


def record_run(result: ValidationResult, duration: float, mode: str = 'sync') -> None:
    """Record a run on the process-wide collector when metrics are enabled."""
    if not get_settings().METRICS_ENABLED:
        return
    get_metrics_collector().record_run(result, duration, mode)


__all__ = [
    'ValidationMetricsCollector',
    'get_metrics_collector',
    'set_metrics_collector',
    'record_run',
]
