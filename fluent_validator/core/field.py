"""
Field capability shared by every variant.

Each variant embeds a FieldState holding the settings common to all fields
(required flag, label, default value, transform chain) and implements two
operations:

- ``transform(value)`` runs the default substitution and the transform chain
  and raises TransformError when a step cannot convert the value.
- ``validate(path, value, result)`` records errors for ``path``.

Builders mutate the field and return it, so definitions read as chains::

    Text().required().label("E-mail").trim().email()

A finished field must be treated as read-only. It keeps no per-call state and
can be shared by concurrent validations.
"""

from abc import ABC, abstractmethod
from typing import Any, Callable, List, Optional

import structlog

from ..i18n.messages import MessageKey
from .custom import CustomRuleSet, Rule, refine as _refine
from .exceptions import TransformError
from .result import ValidationResult

logger = structlog.get_logger(__name__)

TransformStep = Callable[[Any], Any]

_UNSET = object()


class FieldState:
    """Settings every field variant carries, plus the logic that uses them."""

    def __init__(self):
        self.required = False
        self.label: Optional[str] = None
        self.default: Any = _UNSET
        self.transforms: List[TransformStep] = []

    @property
    def has_default(self) -> bool:
        return self.default is not _UNSET

    def effective_label(self, path: str) -> str:
        return self.label or path

    def apply_transforms(self, value: Any) -> Any:
        """
        Substitute the default for None, then thread the value through the chain.

        Raises:
            TransformError: From the first failing step; later steps do not run
        """
        if value is None and self.has_default:
            value = self.default
        if value is None:
            return None

        for step in self.transforms:
            try:
                value = step(value)
            except TransformError as e:
                logger.debug("Transform step failed", error=e.message)
                raise
            except (TypeError, ValueError) as e:
                logger.debug("Transform step raised", error=str(e), error_type=type(e).__name__)
                raise TransformError(str(e)) from e
        return value

    def check_presence(self, path: str, value: Any, result: ValidationResult) -> bool:
        """
        Apply the required rule.

        Returns:
            True when the remaining checks should run
        """
        if self.required and (value is None or (isinstance(value, str) and value == "")):
            result.add_message(path, MessageKey.REQUIRED, self.effective_label(path))
            return False
        return value is not None


class Field(ABC):
    """
    Base capability of all field variants.

    Subclasses set ``type_message`` and implement ``accepts`` and
    ``check``; the required and type checks and the custom rule set run here
    in a fixed order.
    """

    type_message: MessageKey = MessageKey.STRING

    def __init__(self):
        self._state = FieldState()
        self._custom: Optional[CustomRuleSet] = None

    # -- common builders -------------------------------------------------

    def required(self):
        self._state.required = True
        return self

    def label(self, label: str):
        self._state.label = label
        return self

    def default(self, value: Any):
        self._state.default = value
        return self

    def add_transform(self, step: TransformStep):
        """Append a transform step; steps run in insertion order."""
        self._state.transforms.append(step)
        return self

    def custom(self, validator: Callable[[Any], Any]):
        self._rule_set().add_sync(validator)
        return self

    def custom_async(self, validator: Callable[[Any], Any]):
        self._rule_set().add_async(validator)
        return self

    def custom_context(self, validator: Callable[[Any, dict], Any]):
        self._rule_set().add_context(validator)
        return self

    def add_rule(self, rule: Rule):
        self._rule_set().add_rule(rule)
        return self

    def refine(self, predicate: Callable[[Any], bool], message: str):
        return self.add_rule(_refine(predicate, message))

    def _rule_set(self) -> CustomRuleSet:
        if self._custom is None:
            self._custom = CustomRuleSet()
        return self._custom

    # -- accessors -------------------------------------------------------

    @property
    def is_required(self) -> bool:
        return self._state.required

    @property
    def custom_rules(self) -> Optional[CustomRuleSet]:
        return self._custom

    def get_label(self, path: str) -> str:
        return self._state.effective_label(path)

    # -- pipeline --------------------------------------------------------

    def transform(self, value: Any) -> Any:
        return self._state.apply_transforms(value)

    def validate(self, path: str, value: Any, result: ValidationResult) -> None:
        if not self._state.check_presence(path, value, result):
            return

        if not self.accepts(value):
            result.add_message(path, self.type_message, self.get_label(path))
            return

        self.check(path, value, result)

        if self._custom is not None and self._custom.has_sync_validators():
            self._custom.validate_sync(path, value, result)

    @abstractmethod
    def accepts(self, value: Any) -> bool:
        """Return True when ``value`` has the runtime shape this variant expects."""

    @abstractmethod
    def check(self, path: str, value: Any, result: ValidationResult) -> None:
        """Run the variant's constraint checks on a present, well-typed value."""
