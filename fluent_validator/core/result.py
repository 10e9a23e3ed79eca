"""
ValidationResult container shared by every field during one schema run.
"""

from datetime import datetime
from typing import Any, Dict, List, Optional, Union

from ..i18n.messages import MessageKey, Translator, get_translator
from .exceptions import ValidationFailedError

CROSS_VALIDATION_KEY = "_cross_validation"


class ValidationResult:
    """
    Accumulates field errors and, on success, the sanitized record.

    Errors are stored per field path (``email``, ``user.name``,
    ``emails[1]`` or ``_cross_validation``) in insertion order. ``valid_data``
    stays empty unless the run finished without a single error.

    The result also carries the translator used for the run so every field
    renders messages in the same locale.
    """

    def __init__(self, translator: Optional[Translator] = None):
        self.errors: Dict[str, List[str]] = {}
        self.valid_data: Dict[str, Any] = {}
        self.translator = translator or get_translator()
        self.timestamp = datetime.utcnow()

    def message(self, key: Union[MessageKey, str], *args: Any) -> str:
        """Render a message in the locale of this run."""
        return self.translator.format(key, *args)

    def add_error(self, field: str, message: str) -> None:
        """Append an error message for a field path."""
        self.errors.setdefault(field, []).append(message)

    def add_message(self, field: str, key: Union[MessageKey, str], *args: Any) -> None:
        """Render ``key`` with ``args`` and append it for ``field``."""
        self.add_error(field, self.message(key, *args))

    def has_errors(self) -> bool:
        return bool(self.errors)

    def has_field_errors(self, field: str) -> bool:
        return bool(self.errors.get(field))

    def error_count(self) -> int:
        return sum(len(messages) for messages in self.errors.values())

    def field_errors(self, field: str) -> List[str]:
        return list(self.errors.get(field, []))

    def first_error(self, field: str) -> Optional[str]:
        messages = self.errors.get(field)
        return messages[0] if messages else None

    def merge(self, other: 'ValidationResult') -> None:
        """Append every error of ``other`` under the same field keys."""
        for field, messages in other.errors.items():
            for message in messages:
                self.add_error(field, message)

    def set_valid_data(self, data: Dict[str, Any]) -> None:
        # Only a clean run may expose data
        if not self.has_errors():
            self.valid_data = data

    @property
    def is_valid(self) -> bool:
        return not self.has_errors()

    def raise_for_errors(self) -> None:
        """
        Raise ValidationFailedError if any error was recorded.

        Raises:
            ValidationFailedError: Carrying the full error map
        """
        if self.has_errors():
            raise ValidationFailedError(
                message=f"Validation failed for {len(self.errors)} field(s)",
                field_errors={field: list(messages) for field, messages in self.errors.items()},
            )

    def to_dict(self) -> Dict[str, Any]:
        """Convert validation result to dictionary format."""
        return {
            'is_valid': self.is_valid,
            'errors': {field: list(messages) for field, messages in self.errors.items()},
            'valid_data': dict(self.valid_data),
            'locale': self.translator.get_locale(),
            'timestamp': self.timestamp.isoformat(),
        }

    def __repr__(self) -> str:
        return f"ValidationResult(is_valid={self.is_valid}, errors={self.errors!r})"
