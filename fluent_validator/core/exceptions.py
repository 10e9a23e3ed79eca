"""
Exception hierarchy for the validation engine.

Invalid input never raises: every failure found while evaluating a record is
stored as data in a ValidationResult. The exceptions below cover the other
cases, namely broken schema definitions, bad configuration, transform steps
signalling failure to the engine, user callbacks rejecting a value, and
callers who explicitly ask for an exception via ``raise_for_errors()``.

Key Features:
- ErrorCategory/ErrorSeverity enums for consistent classification
- BaseValidatorError with structured ``to_dict()`` output
- Structured logging of definition and configuration errors with structlog
"""

from datetime import datetime
from enum import Enum
from typing import Any, Dict, List, Optional

import structlog

logger = structlog.get_logger(__name__)


class ErrorCategory(Enum):
    """Error categories matching the kinds of failures a schema can report."""

    REQUIRED = "required"
    TYPE_MISMATCH = "type_mismatch"
    TRANSFORM = "transform"
    CONSTRAINT = "constraint"
    CUSTOM = "custom"
    CROSS_FIELD = "cross_field"
    DEFINITION = "definition"
    CONFIGURATION = "configuration"
    UNKNOWN = "unknown"


class ErrorSeverity(Enum):
    """Error severity levels used when logging."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"


class BaseValidatorError(Exception):
    """
    Base exception class for all library errors.

    Attributes:
        message: Human-readable error message
        code: Machine-readable error code, defaults to the class name
        category: Error category for classification
        severity: Error severity level
        details: Additional error context
    """

    def __init__(
        self,
        message: str,
        code: str = None,
        category: ErrorCategory = ErrorCategory.UNKNOWN,
        severity: ErrorSeverity = ErrorSeverity.MEDIUM,
        details: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code or self.__class__.__name__
        self.category = category
        self.severity = severity
        self.details = details or {}
        self.timestamp = datetime.utcnow().isoformat()

    def _log_error(self) -> None:
        """Log the error with structured context."""
        log_data = {
            'error_code': self.code,
            'error_category': self.category.value,
            'error_severity': self.severity.value,
            'details': self.details,
        }

        if self.severity in [ErrorSeverity.HIGH, ErrorSeverity.CRITICAL]:
            logger.error(self.message, **log_data)
        elif self.severity == ErrorSeverity.MEDIUM:
            logger.warning(self.message, **log_data)
        else:
            logger.info(self.message, **log_data)

    def to_dict(self) -> Dict[str, Any]:
        """
        Convert exception to dictionary format.

        Returns:
            Dictionary representation of the error
        """
        return {
            'error': True,
            'message': self.message,
            'code': self.code,
            'category': self.category.value,
            'severity': self.severity.value,
            'details': self.details,
            'timestamp': self.timestamp,
        }


class TransformError(BaseValidatorError):
    """
    Raised by a transform step that cannot convert its input.

    The schema catches it and records the message under the field key, so it
    never escapes ``Schema.validate``.
    """

    def __init__(self, message: str, **kwargs):
        kwargs.setdefault('category', ErrorCategory.TRANSFORM)
        kwargs.setdefault('severity', ErrorSeverity.LOW)
        super().__init__(message, **kwargs)


class RuleViolation(BaseValidatorError):
    """
    Raised by user callbacks and Rule objects to reject a value.

    Example:
        def not_forbidden(value):
            if value == "forbidden":
                raise RuleViolation("This value cannot be used")
    """

    def __init__(self, message: str, **kwargs):
        kwargs.setdefault('category', ErrorCategory.CUSTOM)
        kwargs.setdefault('severity', ErrorSeverity.LOW)
        super().__init__(message, **kwargs)


class SchemaDefinitionError(BaseValidatorError, ValueError):
    """Raised by builder methods given arguments that can never work."""

    def __init__(self, message: str, **kwargs):
        kwargs.setdefault('category', ErrorCategory.DEFINITION)
        kwargs.setdefault('severity', ErrorSeverity.MEDIUM)
        super().__init__(message, **kwargs)
        self._log_error()


class ConfigurationError(BaseValidatorError):
    """Raised when settings loaded from the environment are invalid."""

    def __init__(self, message: str, **kwargs):
        kwargs.setdefault('category', ErrorCategory.CONFIGURATION)
        kwargs.setdefault('severity', ErrorSeverity.HIGH)
        super().__init__(message, **kwargs)
        self._log_error()


class ValidationFailedError(BaseValidatorError):
    """
    Raised by ``ValidationResult.raise_for_errors()``.

    Carries the full error map so callers can turn it into a response body.
    """

    def __init__(
        self,
        message: str = "Validation failed",
        field_errors: Optional[Dict[str, List[str]]] = None,
        **kwargs
    ):
        kwargs.setdefault('category', ErrorCategory.CONSTRAINT)
        kwargs.setdefault('severity', ErrorSeverity.LOW)
        super().__init__(message, **kwargs)
        self.field_errors = field_errors or {}
        if self.field_errors:
            self.details['field_errors'] = self.field_errors
