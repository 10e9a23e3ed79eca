"""
marshmallow adapters.

``FluentField`` lets a fluent field definition sit inside a regular
marshmallow schema; ``validate_with_schema`` runs a fluent Schema and
reports failures the way marshmallow does.

Example:
    class SignupSchema(marshmallow.Schema):
        email = FluentField(Text().trim().email(), required=True)
        iban = FluentField(Iban().country("TR"))
"""

from datetime import datetime
from typing import Any, Dict, List, Mapping, Optional

import structlog
from marshmallow import ValidationError, fields

from .core.exceptions import TransformError
from .core.field import Field
from .core.result import ValidationResult
from .i18n.messages import MessageKey, get_translator
from .schema import Schema

logger = structlog.get_logger(__name__)


class FluentField(fields.Field):
    """
    marshmallow field backed by a fluent field definition.

    Deserialization runs the transform chain and every synchronous check;
    the transformed value is returned on success. All recorded messages are
    raised together as a marshmallow ValidationError.
    """

    def __init__(self, field: Field, locale: Optional[str] = None, **kwargs):
        """
        Args:
            field: Fluent field definition
            locale: Locale for error messages, defaults to the active locale
            **kwargs: Additional marshmallow field arguments
        """
        self.fluent_field = field
        self.locale = locale
        super().__init__(**kwargs)

    def _serialize(self, value: Any, attr: Optional[str], obj: Any, **kwargs) -> Any:
        """Serialize datetimes as ISO 8601, everything else unchanged."""
        if isinstance(value, datetime):
            return value.isoformat()
        return value

    def _deserialize(self, value: Any, attr: Optional[str], data: Optional[Mapping[str, Any]], **kwargs) -> Any:
        """Transform and validate ``value`` with the fluent field."""
        translator = get_translator()
        if self.locale:
            translator = translator.for_locale(self.locale)
        path = attr or self.name or 'value'

        try:
            transformed = self.fluent_field.transform(value)
        except TransformError as e:
            logger.debug("Fluent field transform failed", field=path, error=e.message)
            raise ValidationError(translator.format(MessageKey.TRANSFORM, e.message))

        result = ValidationResult(translator)
        self.fluent_field.validate(path, transformed, result)
        if result.has_errors():
            raise ValidationError(_flatten(result))
        return transformed


def _flatten(result: ValidationResult) -> List[str]:
    return [message for messages in result.errors.values() for message in messages]


def validate_with_schema(
    schema: Schema,
    data: Optional[Mapping[str, Any]],
    locale: Optional[str] = None
) -> Dict[str, Any]:
    """
    Validate ``data`` with a fluent Schema, marshmallow style.

    Args:
        schema: Fluent schema
        data: Record to validate
        locale: Locale for error messages

    Returns:
        The transformed record

    Raises:
        ValidationError: With ``messages`` keyed by field path
    """
    result = schema.validate(data, locale=locale)
    if result.has_errors():
        raise ValidationError(
            {field: list(messages) for field, messages in result.errors.items()},
            valid_data={},
        )
    return dict(result.valid_data)
