"""Core building blocks: errors, results, the field capability and custom rules."""

from .exceptions import (
    ErrorCategory,
    ErrorSeverity,
    BaseValidatorError,
    TransformError,
    RuleViolation,
    SchemaDefinitionError,
    ConfigurationError,
    ValidationFailedError,
)
from .result import ValidationResult, CROSS_VALIDATION_KEY
from .custom import (
    CustomRuleSet,
    Rule,
    FunctionRule,
    RegexRule,
    UniqueRule,
    ExistsRule,
    rule,
    refine,
)
from .field import Field, FieldState

__all__ = [
    'ErrorCategory',
    'ErrorSeverity',
    'BaseValidatorError',
    'TransformError',
    'RuleViolation',
    'SchemaDefinitionError',
    'ConfigurationError',
    'ValidationFailedError',
    'ValidationResult',
    'CROSS_VALIDATION_KEY',
    'CustomRuleSet',
    'Rule',
    'FunctionRule',
    'RegexRule',
    'UniqueRule',
    'ExistsRule',
    'rule',
    'refine',
    'Field',
    'FieldState',
]
