"""
DateTime field: parses strings during transform, checks bounds during validate.
"""

from datetime import date, datetime, time, timezone
from typing import Any, Optional, Union

from dateutil import parser as dateutil_parser

from ..core.exceptions import TransformError
from ..core.field import Field
from ..core.result import ValidationResult
from ..i18n.messages import MessageKey

DEFAULT_DATE_FORMAT = '%Y-%m-%d'
ISO_FORMAT_NAME = 'ISO 8601'

DateBound = Union[str, date, datetime]


def _align_timezones(value: datetime, bound: datetime):
    # Naive datetimes are treated as UTC when compared with aware ones
    if value.tzinfo is None and bound.tzinfo is not None:
        value = value.replace(tzinfo=timezone.utc)
    elif bound.tzinfo is None and value.tzinfo is not None:
        bound = bound.replace(tzinfo=timezone.utc)
    return value, bound


class DateTime(Field):
    """
    Date/time field.

    Strings are parsed with ``format`` (strftime layout, default
    ``%Y-%m-%d``) or, after ``iso()``, as ISO 8601 with python-dateutil.
    ``datetime`` values pass through and ``date`` values become midnight
    datetimes. Anything else is a transform error.
    """

    type_message = MessageKey.DATE

    def __init__(self):
        super().__init__()
        self._format = DEFAULT_DATE_FORMAT
        self._iso = False
        self._min: Optional[DateBound] = None
        self._max: Optional[DateBound] = None

    def format(self, layout: str) -> 'DateTime':
        self._format = layout
        self._iso = False
        return self

    def iso(self) -> 'DateTime':
        self._iso = True
        return self

    def min(self, bound: DateBound) -> 'DateTime':
        self._min = bound
        return self

    def max(self, bound: DateBound) -> 'DateTime':
        self._max = bound
        return self

    @property
    def layout_name(self) -> str:
        return ISO_FORMAT_NAME if self._iso else self._format

    def parse(self, text: str) -> datetime:
        """
        Parse ``text`` with the configured layout.

        Raises:
            ValueError: When ``text`` does not match the layout
        """
        if self._iso:
            return dateutil_parser.isoparse(text)
        return datetime.strptime(text, self._format)

    def _parse(self, value: Any) -> datetime:
        if isinstance(value, datetime):
            return value
        if isinstance(value, date):
            return datetime.combine(value, time.min)
        if not isinstance(value, str):
            raise TransformError("date value must be a string or datetime")
        try:
            return self.parse(value)
        except (ValueError, OverflowError):
            raise TransformError(f"not a valid date format. Expected: {self.layout_name}")

    def transform(self, value: Any) -> Any:
        value = super().transform(value)
        if value is None:
            return None
        return self._parse(value)

    def _resolve_bound(self, bound: DateBound) -> datetime:
        if isinstance(bound, datetime):
            return bound
        if isinstance(bound, date):
            return datetime.combine(bound, time.min)
        return self.parse(bound)

    def accepts(self, value: Any) -> bool:
        return isinstance(value, datetime)

    def check(self, path: str, value: datetime, result: ValidationResult) -> None:
        label = self.get_label(path)

        if self._min is not None:
            try:
                lower = self._resolve_bound(self._min)
            except (ValueError, OverflowError):
                result.add_message(path, MessageKey.DATE_FORMAT, label, self.layout_name)
            else:
                current, lower = _align_timezones(value, lower)
                if current < lower:
                    result.add_message(path, MessageKey.DATE_MIN, label, self._min)

        if self._max is not None:
            try:
                upper = self._resolve_bound(self._max)
            except (ValueError, OverflowError):
                result.add_message(path, MessageKey.DATE_FORMAT, label, self.layout_name)
            else:
                current, upper = _align_timezones(value, upper)
                if current > upper:
                    result.add_message(path, MessageKey.DATE_MAX, label, self._max)
