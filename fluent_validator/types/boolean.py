"""
Boolean field.
"""

from typing import Any

from ..core.field import Field
from ..core.result import ValidationResult
from ..i18n.messages import MessageKey


class Boolean(Field):
    """Accepts only ``True`` and ``False``; ``1`` and ``"true"`` are type errors."""

    type_message = MessageKey.BOOLEAN

    def accepts(self, value: Any) -> bool:
        return isinstance(value, bool)

    def check(self, path: str, value: bool, result: ValidationResult) -> None:
        pass
