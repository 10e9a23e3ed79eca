"""
Credit card number field.
"""

from typing import Any, Optional

from ..core.exceptions import SchemaDefinitionError
from ..core.field import Field
from ..core.result import ValidationResult
from ..i18n.messages import MessageKey
from ..rules.payment import CARD_BRAND_PATTERNS, is_valid_credit_card


class CreditCard(Field):
    """
    String field holding a card number checked with the Luhn algorithm.

    Separators are stripped before the check. ``brand()`` restricts the
    number to one of ``visa``, ``mastercard`` or ``amex``.
    """

    type_message = MessageKey.STRING

    def __init__(self):
        super().__init__()
        self._brand: Optional[str] = None

    def brand(self, name: str) -> 'CreditCard':
        name = name.lower()
        if name not in CARD_BRAND_PATTERNS:
            raise SchemaDefinitionError(
                f"Unknown card brand '{name}'. "
                f"Expected one of: {', '.join(sorted(CARD_BRAND_PATTERNS))}"
            )
        self._brand = name
        return self

    def accepts(self, value: Any) -> bool:
        return isinstance(value, str)

    def check(self, path: str, value: str, result: ValidationResult) -> None:
        if not is_valid_credit_card(value, self._brand):
            result.add_message(path, MessageKey.CREDIT_CARD, self.get_label(path))
