"""
User-supplied validation attached to a single field.

A CustomRuleSet holds four kinds of entries:

- sync callbacks ``fn(value)``
- reusable Rule objects with ``validate(value)`` and ``message()``
- async callbacks ``async fn(value)``, only run by ``Schema.validate_async``
- context callbacks ``fn(value, record)`` that see the whole transformed
  record, also only run by ``Schema.validate_async``

A callback passes by returning None (or True). It fails by returning an
error message, an exception instance or False, or by raising RuleViolation.
Any other exception is a bug in the callback and propagates.
"""

import asyncio
import re
from abc import ABC, abstractmethod
from typing import Any, Awaitable, Callable, Dict, List, Optional, Pattern, Union

import structlog

from ..i18n.messages import MessageKey
from .exceptions import RuleViolation, SchemaDefinitionError
from .result import ValidationResult

logger = structlog.get_logger(__name__)

DEFAULT_FAILURE_MESSAGE = "Invalid value"

SyncValidator = Callable[[Any], Any]
AsyncValidator = Callable[[Any], Awaitable[Any]]
ContextValidator = Callable[[Any, Dict[str, Any]], Any]


def failure_message(outcome: Any) -> Optional[str]:
    """
    Interpret a callback return value.

    Returns:
        None when the callback passed, otherwise the error message
    """
    if outcome is None or outcome is True:
        return None
    if outcome is False:
        return DEFAULT_FAILURE_MESSAGE
    if isinstance(outcome, BaseException):
        return str(outcome) or DEFAULT_FAILURE_MESSAGE
    return str(outcome)


def run_callback(fn: Callable[..., Any], *args: Any) -> Optional[str]:
    """Call ``fn`` and return its failure message, if any."""
    try:
        return failure_message(fn(*args))
    except RuleViolation as e:
        return e.message


class Rule(ABC):
    """
    Reusable validation rule.

    ``validate`` raises RuleViolation when the value is rejected. When
    ``message()`` returns a non-empty string it replaces the raised message
    in the error report.
    """

    @abstractmethod
    def validate(self, value: Any) -> None:
        """Raise RuleViolation if ``value`` is not acceptable."""

    def message(self) -> str:
        return ""


class FunctionRule(Rule):
    """Rule wrapping a callback with the sync callback contract."""

    def __init__(self, validator: SyncValidator, message: str = ""):
        self.validator = validator
        self._message = message

    def validate(self, value: Any) -> None:
        error = run_callback(self.validator, value)
        if error is not None:
            raise RuleViolation(error)

    def message(self) -> str:
        return self._message


class RegexRule(Rule):
    """Rejects values that are not strings matching ``pattern``."""

    def __init__(self, pattern: Union[str, Pattern], message: str = ""):
        try:
            self.pattern = re.compile(pattern) if isinstance(pattern, str) else pattern
        except re.error as e:
            raise SchemaDefinitionError(
                f"Invalid regex pattern '{pattern}': {e}",
                details={'pattern': str(pattern)},
            )
        self._message = message

    def validate(self, value: Any) -> None:
        if not isinstance(value, str):
            raise RuleViolation("value must be string")
        if not self.pattern.search(value):
            raise RuleViolation(f"value does not match pattern {self.pattern.pattern}")

    def message(self) -> str:
        return self._message


class _CheckerRule(Rule):
    """
    Shared body of rules delegating to an external lookup.

    The checker may raise RuleViolation to reject with its own message. Any
    other exception is a lookup failure and propagates to the caller.
    """

    failure = "check failed"

    def __init__(self, checker: Callable[[Any], bool], message: str = ""):
        self.checker = checker
        self._message = message

    def validate(self, value: Any) -> None:
        if not self.checker(value):
            raise RuleViolation(self.failure)

    def message(self) -> str:
        return self._message


class UniqueRule(_CheckerRule):
    """
    Rejects values the checker reports as already taken.

    Args:
        checker: ``fn(value) -> bool`` returning True when the value is unique
        message: Error text shown instead of the default
    """

    failure = "not unique"


class ExistsRule(_CheckerRule):
    """
    Rejects values the checker cannot find.

    Args:
        checker: ``fn(value) -> bool`` returning True when the value exists
        message: Error text shown instead of the default
    """

    failure = "not found"


def rule(validator: SyncValidator, message: str = "") -> Rule:
    """Build a Rule from a sync callback."""
    return FunctionRule(validator, message)


def refine(predicate: Callable[[Any], bool], message: str) -> Rule:
    """
    Build a Rule from a boolean predicate.

    Example:
        Text().add_rule(refine(lambda v: v.islower(), "must be lowercase"))
    """
    def _check(value: Any) -> Optional[str]:
        if not predicate(value):
            return "refinement failed"
        return None

    return FunctionRule(_check, message)


class CustomRuleSet:
    """
    Ordered collection of user validators for one field.

    Sync callbacks run before rules. Every entry runs on every call and all
    failures are recorded.
    """

    def __init__(self):
        self.sync_validators: List[SyncValidator] = []
        self.async_validators: List[AsyncValidator] = []
        self.context_validators: List[ContextValidator] = []
        self.rules: List[Rule] = []

    def add_sync(self, validator: SyncValidator) -> 'CustomRuleSet':
        self.sync_validators.append(validator)
        return self

    def add_async(self, validator: AsyncValidator) -> 'CustomRuleSet':
        self.async_validators.append(validator)
        return self

    def add_context(self, validator: ContextValidator) -> 'CustomRuleSet':
        self.context_validators.append(validator)
        return self

    def add_rule(self, rule_: Rule) -> 'CustomRuleSet':
        self.rules.append(rule_)
        return self

    def has_validators(self) -> bool:
        return bool(
            self.sync_validators
            or self.async_validators
            or self.context_validators
            or self.rules
        )

    def has_sync_validators(self) -> bool:
        return bool(self.sync_validators or self.rules)

    def has_deferred_validators(self) -> bool:
        return bool(self.async_validators or self.context_validators)

    def validate_sync(self, field: str, value: Any, result: ValidationResult) -> None:
        """
        Run sync callbacks then rules, recording every failure under ``field``.
        """
        for validator in self.sync_validators:
            error = run_callback(validator, value)
            if error is not None:
                result.add_error(field, error)

        for rule_ in self.rules:
            try:
                rule_.validate(value)
            except RuleViolation as e:
                result.add_error(field, rule_.message() or e.message)

    def validate_context(
        self,
        field: str,
        value: Any,
        data: Dict[str, Any],
        result: ValidationResult
    ) -> None:
        """Run context callbacks with the whole transformed record."""
        for validator in self.context_validators:
            error = run_callback(validator, value, data)
            if error is not None:
                result.add_error(field, error)

    async def validate_async(
        self,
        field: str,
        value: Any,
        result: ValidationResult,
        timeout: Optional[float] = None
    ) -> bool:
        """
        Await async callbacks in order, stopping at the first failure.

        Args:
            field: Error key for recorded failures
            value: Value handed to every callback
            result: Result receiving errors
            timeout: Seconds allowed for each callback, None for no limit

        Returns:
            True when every async callback passed
        """
        for validator in self.async_validators:
            try:
                outcome = await asyncio.wait_for(validator(value), timeout)
                error = failure_message(outcome)
            except RuleViolation as e:
                error = e.message
            except asyncio.TimeoutError:
                logger.info("Async validator timed out", field=field, timeout=timeout)
                error = result.message(MessageKey.ASYNC_TIMEOUT, field)

            if error is not None:
                result.add_error(field, error)
                return False
        return True
