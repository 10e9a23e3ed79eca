"""
Struct field: a nested record with its own field map.
"""

from typing import Any, Dict, Mapping

from ..core.exceptions import TransformError
from ..core.field import Field
from ..core.result import ValidationResult
from ..i18n.messages import MessageKey


class Struct(Field):
    """
    Nested object field.

    Children are validated under ``path.child`` into the same result, so a
    missing ``user.name`` surfaces as its own entry in the flat error map.
    Keys without a declared child pass through the transform untouched.

    Example:
        Struct().required().shape({
            'name': Text().required(),
            'age': Number().integer().min(0),
        })
    """

    type_message = MessageKey.OBJECT

    def __init__(self):
        super().__init__()
        self._shape: Dict[str, Field] = {}

    def shape(self, fields: Mapping[str, Field]) -> 'Struct':
        """Replace the child field map."""
        self._shape = dict(fields)
        return self

    @property
    def fields(self) -> Dict[str, Field]:
        return dict(self._shape)

    def transform(self, value: Any) -> Any:
        value = super().transform(value)
        if value is None:
            return None
        if not isinstance(value, dict):
            raise TransformError("value must be an object")

        transformed = dict(value)
        for name, child in self._shape.items():
            try:
                child_value = child.transform(value.get(name))
            except TransformError as e:
                raise TransformError(f"field '{name}': {e.message}") from e
            if name in value or child_value is not None:
                transformed[name] = child_value
        return transformed

    def accepts(self, value: Any) -> bool:
        return isinstance(value, dict)

    def check(self, path: str, value: Dict[str, Any], result: ValidationResult) -> None:
        for name, child in self._shape.items():
            child.validate(f"{path}.{name}", value.get(name), result)
