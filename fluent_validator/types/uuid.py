"""
UUID field.
"""

from typing import Any

from ..core.exceptions import SchemaDefinitionError
from ..core.field import Field
from ..core.result import ValidationResult
from ..i18n.messages import MessageKey
from ..rules.uuid import SUPPORTED_UUID_VERSIONS, is_valid_uuid


class Uuid(Field):
    """
    String field holding a canonical 8-4-4-4-12 UUID.

    ``version(0)`` (the default) accepts any version; 1, 3, 4 and 5 also
    require the RFC 4122 variant bits.
    """

    type_message = MessageKey.STRING

    def __init__(self):
        super().__init__()
        self._version = 0

    def version(self, version: int) -> 'Uuid':
        if version not in SUPPORTED_UUID_VERSIONS:
            raise SchemaDefinitionError(f"UUID version must be between 0 and 5, got {version}")
        self._version = version
        return self

    def accepts(self, value: Any) -> bool:
        return isinstance(value, str)

    def check(self, path: str, value: str, result: ValidationResult) -> None:
        if not is_valid_uuid(value, self._version):
            result.add_message(path, MessageKey.UUID, self.get_label(path))
