"""Field variants."""

from .text import Text
from .advanced_text import AdvancedText
from .number import Number
from .boolean import Boolean
from .date import DateTime
from .array import Array
from .struct import Struct
from .uuid import Uuid
from .iban import Iban
from .credit_card import CreditCard

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
]
