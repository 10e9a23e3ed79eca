"""
fluent-validator: declarative validation and sanitization of dict records.

Fields are built with chained calls and grouped into a Schema::

    import fluent_validator as v

    schema = v.make().shape({
        'username': v.Text().required().trim().min(3).max(20),
        'email': v.Text().required().trim().email(),
        'tags': v.Array().unique().elements(v.Text().lower()),
    })

    result = schema.validate(payload, locale='tr')
    if result.has_errors():
        return result.errors
    store(result.valid_data)
"""

from .core import (
    ErrorCategory,
    ErrorSeverity,
    BaseValidatorError,
    TransformError,
    RuleViolation,
    SchemaDefinitionError,
    ConfigurationError,
    ValidationFailedError,
    ValidationResult,
    CROSS_VALIDATION_KEY,
    CustomRuleSet,
    Rule,
    FunctionRule,
    RegexRule,
    UniqueRule,
    ExistsRule,
    rule,
    refine,
    Field,
)
from .i18n import MessageKey, Translator, get_translator, set_locale, get_locale, add_messages
from .rules import PasswordPolicy
from .schema import Schema, ConditionalRule
from .config import configure_logging, get_settings
from . import types

__version__ = '1.0.0'


def Text() -> types.Text:
    return types.Text()


def AdvancedText() -> types.AdvancedText:
    return types.AdvancedText()


def Number() -> types.Number:
    return types.Number()


def Boolean() -> types.Boolean:
    return types.Boolean()


def DateTime() -> types.DateTime:
    return types.DateTime()


def Array() -> types.Array:
    return types.Array()


def Struct() -> types.Struct:
    return types.Struct()


def Uuid() -> types.Uuid:
    return types.Uuid()


def Iban() -> types.Iban:
    return types.Iban()


def CreditCard() -> types.CreditCard:
    return types.CreditCard()


def make() -> Schema:
    """Return an empty Schema ready for ``shape()``."""
    return Schema()


__all__ = [
    'Text',
    'AdvancedText',
    'Number',
    'Boolean',
    'DateTime',
    'Array',
    'Struct',
    'Uuid',
    'Iban',
    'CreditCard',
    'make',
    'Schema',
    'ConditionalRule',
    'Field',
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
    'PasswordPolicy',
    'MessageKey',
    'Translator',
    'get_translator',
    'set_locale',
    'get_locale',
    'add_messages',
    'ErrorCategory',
    'ErrorSeverity',
    'BaseValidatorError',
    'TransformError',
    'RuleViolation',
    'SchemaDefinitionError',
    'ConfigurationError',
    'ValidationFailedError',
    'configure_logging',
    'get_settings',
]
