"""
Number field with range, sign, integer and divisibility checks.
"""

import math
import numbers
from typing import Any, Optional, Tuple

from ..core.exceptions import SchemaDefinitionError
from ..core.field import Field
from ..core.result import ValidationResult
from ..i18n.messages import MessageKey

MULTIPLE_OF_EPSILON = 1e-9


def is_number(value: Any) -> bool:
    """True for real numbers; booleans and numeric strings are rejected."""
    return isinstance(value, numbers.Real) and not isinstance(value, bool)


class Number(Field):
    """
    Numeric field.

    Any real number type is accepted and compared against the bounds as
    given, so integers beyond float range are still checked exactly. Strings
    are never parsed: ``"42"`` is a type error, not 42.
    """

    type_message = MessageKey.NUMERIC

    def __init__(self):
        super().__init__()
        self._integer = False
        self._min: Optional[float] = None
        self._max: Optional[float] = None
        self._positive = False
        self._negative = False
        self._multiple_of: Optional[float] = None
        self._between: Optional[Tuple[float, float]] = None

    def integer(self) -> 'Number':
        self._integer = True
        return self

    def min(self, value: float) -> 'Number':
        self._min = float(value)
        return self

    def max(self, value: float) -> 'Number':
        self._max = float(value)
        return self

    def positive(self) -> 'Number':
        self._positive = True
        return self

    def negative(self) -> 'Number':
        self._negative = True
        return self

    def multiple_of(self, value: float) -> 'Number':
        if value == 0:
            raise SchemaDefinitionError("multiple_of requires a non-zero divisor")
        self._multiple_of = float(value)
        return self

    def between(self, low: float, high: float) -> 'Number':
        if low > high:
            raise SchemaDefinitionError(f"between bounds are reversed: {low} > {high}")
        self._between = (float(low), float(high))
        return self

    def accepts(self, value: Any) -> bool:
        return is_number(value)

    @staticmethod
    def _is_integer(value: Any) -> bool:
        if isinstance(value, numbers.Integral):
            return True
        try:
            number = float(value)
        except OverflowError:
            return False
        return math.isfinite(number) and number.is_integer()

    def _is_multiple(self, value: Any) -> bool:
        if isinstance(value, numbers.Integral) and self._multiple_of.is_integer():
            return value % int(self._multiple_of) == 0
        try:
            number = float(value)
        except OverflowError:
            return False
        if not math.isfinite(number):
            return False
        divisor = abs(self._multiple_of)
        remainder = math.fmod(abs(number), divisor)
        return remainder <= MULTIPLE_OF_EPSILON or divisor - remainder <= MULTIPLE_OF_EPSILON

    def check(self, path: str, value: Any, result: ValidationResult) -> None:
        # Values are compared as given: int/float comparisons are exact and
        # never overflow. NaN fails every range and sign check.
        label = self.get_label(path)
        is_nan = value != value

        if self._integer and (is_nan or not self._is_integer(value)):
            result.add_message(path, MessageKey.INTEGER, label)

        if self._min is not None and (is_nan or value < self._min):
            result.add_message(path, MessageKey.MIN, label, self._min)

        if self._max is not None and (is_nan or value > self._max):
            result.add_message(path, MessageKey.MAX, label, self._max)

        if self._positive and (is_nan or value <= 0):
            result.add_message(path, MessageKey.POSITIVE, label)

        if self._negative and (is_nan or value >= 0):
            result.add_message(path, MessageKey.NEGATIVE, label)

        if self._multiple_of is not None and (is_nan or not self._is_multiple(value)):
            result.add_message(path, MessageKey.MULTIPLE_OF, label, self._multiple_of)

        if self._between is not None:
            low, high = self._between
            if is_nan or value < low or value > high:
                result.add_message(path, MessageKey.BETWEEN, label, low, high)
