"""
Schema: a map of named fields plus conditional and cross-field rules.

A run goes through these passes:

1. Transform every field of the shape. A failing transform records an
   error for the key and leaves the key out of the transformed record.
2. Validate every field against the transformed record.
3. For each ``when`` rule whose trigger value matches, build the sub-schema
   and merge its errors.
4. Run cross-field validators, only when passes 1 and 2 recorded no error.
   Errors from conditional sub-schemas do not block this pass.
5. Expose the transformed record as ``valid_data`` when nothing failed.

``validate_async`` runs the same passes and then the deferred (context and
async) validators of the top-level fields.
"""

import asyncio
import time
from typing import Any, Callable, Dict, List, Mapping, Optional

import structlog

from . import monitoring
from .core.custom import run_callback
from .core.exceptions import SchemaDefinitionError, TransformError
from .core.field import Field
from .core.result import CROSS_VALIDATION_KEY, ValidationResult
from .i18n.messages import MessageKey, Translator, get_translator

logger = structlog.get_logger(__name__)

CrossValidator = Callable[[Dict[str, Any]], Any]
SchemaFactory = Callable[[], 'Schema']


class ConditionalRule:
    """
    Sub-schema applied when ``trigger_field`` holds ``expected_value``.

    The match is strict: the transformed value must have the same type as
    the expected value and compare equal, so ``1`` does not trigger a rule
    expecting ``True`` or ``"1"``.
    """

    def __init__(self, trigger_field: str, expected_value: Any, factory: SchemaFactory):
        self.trigger_field = trigger_field
        self.expected_value = expected_value
        self.factory = factory

    def matches(self, record: Mapping[str, Any]) -> bool:
        if self.trigger_field not in record:
            return False
        actual = record[self.trigger_field]
        return type(actual) is type(self.expected_value) and actual == self.expected_value

    def build(self) -> 'Schema':
        schema = self.factory()
        if not isinstance(schema, Schema):
            raise SchemaDefinitionError(
                f"Conditional rule on '{self.trigger_field}' must build a Schema, "
                f"got {type(schema).__name__}"
            )
        return schema

    def __repr__(self) -> str:
        return f"ConditionalRule({self.trigger_field!r}, {self.expected_value!r})"


class Schema:
    """
    Validation schema for one record.

    Build once, then validate many times; ``validate`` never mutates the
    schema and may be called from several threads at once.

    Example:
        schema = Schema({
            'email': Text().required().trim().email(),
            'age': Number().integer().min(18),
        }).cross_validate(lambda data: ...)

        result = schema.validate({'email': ' a@b.com ', 'age': 21})
        if result.is_valid:
            save(result.valid_data)
    """

    def __init__(
        self,
        shape: Optional[Mapping[str, Field]] = None,
        locale: Optional[str] = None,
        translator: Optional[Translator] = None
    ):
        """
        Args:
            shape: Field map, see ``shape()``
            locale: Locale pinned for every run of this schema
            translator: Message catalogs to use instead of the process-wide
                translator
        """
        self._shape: Dict[str, Field] = dict(shape or {})
        self._cross_validators: List[CrossValidator] = []
        self._conditional_rules: List[ConditionalRule] = []
        self._locale = locale
        self._translator = translator

    # -- builders --------------------------------------------------------

    def shape(self, fields: Mapping[str, Field]) -> 'Schema':
        """Replace the whole field map."""
        self._shape = dict(fields)
        return self

    def when(self, field: str, expected_value: Any, factory: SchemaFactory) -> 'Schema':
        """
        Validate the record with ``factory()`` when ``field`` equals
        ``expected_value`` after transformation. Every matching rule runs.
        """
        self._conditional_rules.append(ConditionalRule(field, expected_value, factory))
        return self

    def cross_validate(self, validator: CrossValidator) -> 'Schema':
        """
        Add a validator receiving the whole transformed record.

        It fails by returning a message, an exception instance or False, or
        by raising RuleViolation.
        """
        self._cross_validators.append(validator)
        return self

    # -- accessors -------------------------------------------------------

    @property
    def fields(self) -> Dict[str, Field]:
        return dict(self._shape)

    @property
    def locale(self) -> Optional[str]:
        return self._locale

    def _translator_for(self, locale: Optional[str]) -> Translator:
        base = self._translator or get_translator()
        # The locale is resolved once so a run never changes language midway
        return base.for_locale(locale or self._locale or base.get_locale())

    # -- validation ------------------------------------------------------

    def validate(self, data: Optional[Mapping[str, Any]], locale: Optional[str] = None) -> ValidationResult:
        """
        Validate ``data``.

        Args:
            data: Record to validate; None is treated as an empty record
            locale: Locale for this run, overriding the schema's locale

        Returns:
            ValidationResult with every error and, when clean, the
            transformed record as ``valid_data``
        """
        started = time.perf_counter()
        result = ValidationResult(self._translator_for(locale))

        transformed = self._evaluate(data, result)
        result.set_valid_data(transformed)

        self._finish(result, started, 'sync')
        return result

    async def validate_async(
        self,
        data: Optional[Mapping[str, Any]],
        timeout: Optional[float] = None,
        locale: Optional[str] = None
    ) -> ValidationResult:
        """
        Validate ``data`` including context and async field validators.

        Deferred validators run for top-level fields that are present and
        passed every synchronous check. Fields are processed concurrently;
        within a field async validators run in order and stop at the first
        failure.

        Args:
            data: Record to validate
            timeout: Seconds allowed for each async validator, None for no limit
            locale: Locale for this run

        Returns:
            ValidationResult, with ``valid_data`` set only when no pass failed
        """
        started = time.perf_counter()
        result = ValidationResult(self._translator_for(locale))

        transformed = self._evaluate(data, result)

        pending = []
        for key, field in self._shape.items():
            rules = field.custom_rules
            if rules is None or not rules.has_deferred_validators():
                continue
            value = transformed.get(key)
            if value is None or result.has_field_errors(key):
                continue
            rules.validate_context(key, value, transformed, result)
            if rules.async_validators:
                pending.append(rules.validate_async(key, value, result, timeout))

        if pending:
            await asyncio.gather(*pending)

        result.set_valid_data(transformed)

        self._finish(result, started, 'async')
        return result

    def _evaluate(self, data: Optional[Mapping[str, Any]], result: ValidationResult) -> Dict[str, Any]:
        if data is None:
            data = {}
        if not isinstance(data, Mapping):
            raise TypeError(f"data must be a mapping, got {type(data).__name__}")

        transformed: Dict[str, Any] = {}
        for key, field in self._shape.items():
            try:
                transformed[key] = field.transform(data.get(key))
            except TransformError as e:
                logger.debug("Field transform failed", field=key, error=e.message)
                result.add_message(key, MessageKey.TRANSFORM, e.message)

        for key, field in self._shape.items():
            field.validate(key, transformed.get(key), result)

        field_errors_found = result.has_errors()

        for rule in self._conditional_rules:
            if rule.matches(transformed):
                logger.debug("Conditional rule matched", trigger=rule.trigger_field)
                sub_result = ValidationResult(result.translator)
                rule.build()._evaluate(transformed, sub_result)
                result.merge(sub_result)

        if not field_errors_found:
            for validator in self._cross_validators:
                error = run_callback(validator, transformed)
                if error is not None:
                    result.add_message(CROSS_VALIDATION_KEY, MessageKey.CROSS_VALIDATION, error)
        elif self._cross_validators:
            logger.debug("Cross-field validation skipped", reason="field errors")

        return transformed

    def _finish(self, result: ValidationResult, started: float, mode: str) -> None:
        duration = time.perf_counter() - started
        monitoring.record_run(result, duration, mode)
        logger.debug(
            "Schema validation finished",
            mode=mode,
            fields=len(self._shape),
            is_valid=result.is_valid,
            error_count=result.error_count(),
            locale=result.translator.get_locale(),
            duration_ms=round(duration * 1000, 3),
        )

    def __repr__(self) -> str:
        return f"Schema(fields={list(self._shape)!r})"
