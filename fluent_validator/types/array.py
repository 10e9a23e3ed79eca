"""
Array field: list constraints plus per-element validation.
"""

from typing import Any, List, Optional

from ..core.exceptions import TransformError
from ..core.field import Field
from ..core.result import ValidationResult
from ..i18n.messages import MessageKey


class Array(Field):
    """
    List field.

    Lists and tuples are accepted; the transformed value is always a list.
    When an element field is configured every item goes through its
    transform chain and is validated under ``path[index]``.

    Uniqueness and ``contains`` compare the ``str()`` form of the items, so
    ``1`` and ``"1"`` count as the same value.

    Example:
        Array().required().min(1).unique().elements(Text().email())
    """

    type_message = MessageKey.ARRAY

    def __init__(self):
        super().__init__()
        self._min_elements: Optional[int] = None
        self._max_elements: Optional[int] = None
        self._not_empty = False
        self._unique = False
        self._contains: Any = None
        self._has_contains = False
        self._element: Optional[Field] = None

    def min(self, count: int) -> 'Array':
        self._min_elements = count
        return self

    def max(self, count: int) -> 'Array':
        self._max_elements = count
        return self

    def not_empty(self) -> 'Array':
        self._not_empty = True
        return self

    def unique(self) -> 'Array':
        self._unique = True
        return self

    def contains(self, value: Any) -> 'Array':
        self._contains = value
        self._has_contains = True
        return self

    def elements(self, field: Field) -> 'Array':
        """Validate every item with ``field``."""
        self._element = field
        return self

    @property
    def element_field(self) -> Optional[Field]:
        return self._element

    def transform(self, value: Any) -> Any:
        value = super().transform(value)
        if value is None:
            return None
        if not isinstance(value, (list, tuple)):
            raise TransformError("value must be an array")
        if self._element is None:
            return list(value)

        items: List[Any] = []
        for index, item in enumerate(value):
            try:
                items.append(self._element.transform(item))
            except TransformError as e:
                raise TransformError(f"index {index}: {e.message}") from e
        return items

    def accepts(self, value: Any) -> bool:
        return isinstance(value, (list, tuple))

    def check(self, path: str, value: List[Any], result: ValidationResult) -> None:
        label = self.get_label(path)
        count = len(value)

        if self._min_elements is not None and count < self._min_elements:
            result.add_message(path, MessageKey.MIN_ELEMENTS, label, self._min_elements)

        if self._max_elements is not None and count > self._max_elements:
            result.add_message(path, MessageKey.MAX_ELEMENTS, label, self._max_elements)

        if self._not_empty and count == 0:
            result.add_message(path, MessageKey.NOT_EMPTY, label)

        if self._unique:
            seen = set()
            for item in value:
                key = str(item)
                if key in seen:
                    result.add_message(path, MessageKey.UNIQUE, label)
                    break
                seen.add(key)

        if self._has_contains:
            wanted = str(self._contains)
            if not any(str(item) == wanted for item in value):
                result.add_message(path, MessageKey.ARRAY_CONTAINS, label, self._contains)

        if self._element is not None:
            for index, item in enumerate(value):
                self._element.validate(f"{path}[{index}]", item, result)
