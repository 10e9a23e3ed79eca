"""
IBAN field.
"""

from typing import Any, Optional

from ..core.field import Field
from ..core.result import ValidationResult
from ..i18n.messages import MessageKey
from ..rules.payment import is_valid_iban


class Iban(Field):
    """
    String field holding an IBAN.

    Spaces and letter case are ignored. ``country("TR")`` additionally
    enforces that country's fixed IBAN length.
    """

    type_message = MessageKey.STRING

    def __init__(self):
        super().__init__()
        self._country: Optional[str] = None

    def country(self, code: str) -> 'Iban':
        self._country = code.upper()
        return self

    def accepts(self, value: Any) -> bool:
        return isinstance(value, str)

    def check(self, path: str, value: str, result: ValidationResult) -> None:
        if not is_valid_iban(value, self._country):
            result.add_message(path, MessageKey.IBAN, self.get_label(path))
