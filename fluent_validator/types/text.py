"""
Text field: string constraints, formats and string transforms.
"""

import re
from typing import Any, List, Optional, Pattern

from ..core.exceptions import SchemaDefinitionError, TransformError
from ..core.field import Field
from ..core.result import ValidationResult
from ..i18n.messages import MessageKey
from ..rules import formats
from ..rules.password import PasswordPolicy, check_password
from ..rules.security import strip_html_tags


def _require_string(step: str):
    def decorator(fn):
        def wrapper(value: Any) -> str:
            if not isinstance(value, str):
                raise TransformError(f"{step} can only be applied to strings")
            return fn(value)
        wrapper.__name__ = fn.__name__
        return wrapper
    return decorator


@_require_string("trim")
def _trim(value: str) -> str:
    return value.strip()


@_require_string("lower")
def _lower(value: str) -> str:
    return value.lower()


@_require_string("upper")
def _upper(value: str) -> str:
    return value.upper()


class Text(Field):
    """
    String field.

    Constraint checks run in a fixed order: length, email, url, one_of,
    password, ip, phone, charset classes, starts/ends/contains, regex, MAC,
    hex, base64. Every failing check records its own error.

    Example:
        Text().required().trim().min(3).max(20)
    """

    type_message = MessageKey.STRING

    def __init__(self):
        super().__init__()
        self._min_length: Optional[int] = None
        self._max_length: Optional[int] = None
        self._email = False
        self._url = False
        self._allowed: List[str] = []
        self._password_policy: Optional[PasswordPolicy] = None
        self._ip_version: Optional[int] = None
        self._phone_country: Optional[str] = None
        self._alpha = False
        self._alphanumeric = False
        self._numeric = False
        self._starts_with: Optional[str] = None
        self._ends_with: Optional[str] = None
        self._contains: Optional[str] = None
        self._pattern: Optional[Pattern] = None
        self._mac = False
        self._hex = False
        self._base64 = False

    # -- constraint builders ---------------------------------------------

    def min(self, length: int) -> 'Text':
        self._min_length = length
        return self

    def max(self, length: int) -> 'Text':
        self._max_length = length
        return self

    def email(self) -> 'Text':
        self._email = True
        return self

    def url(self) -> 'Text':
        self._url = True
        return self

    def one_of(self, *values: str) -> 'Text':
        self._allowed = list(values)
        return self

    def password(self, policy: Optional[PasswordPolicy] = None, **options: Any) -> 'Text':
        """
        Enforce a password policy.

        Args:
            policy: Base policy, defaults to PasswordPolicy()
            **options: PasswordPolicy fields to override, e.g. ``min_length=12``
        """
        policy = policy or PasswordPolicy()
        try:
            self._password_policy = policy.with_options(**options) if options else policy
        except TypeError as e:
            raise SchemaDefinitionError(f"Invalid password option: {e}")
        return self

    def ip(self, version: int = 0) -> 'Text':
        if version not in (0, 4, 6):
            raise SchemaDefinitionError(f"IP version must be 0, 4 or 6, got {version}")
        self._ip_version = version
        return self

    def phone(self, country: str) -> 'Text':
        self._phone_country = country
        return self

    def alpha(self) -> 'Text':
        self._alpha = True
        return self

    def alphanumeric(self) -> 'Text':
        self._alphanumeric = True
        return self

    def numeric(self) -> 'Text':
        self._numeric = True
        return self

    def starts_with(self, prefix: str) -> 'Text':
        self._starts_with = prefix
        return self

    def ends_with(self, suffix: str) -> 'Text':
        self._ends_with = suffix
        return self

    def contains(self, fragment: str) -> 'Text':
        self._contains = fragment
        return self

    def regex(self, pattern: str) -> 'Text':
        """
        Require a match of ``pattern`` anywhere in the value.

        Raises:
            SchemaDefinitionError: If the pattern does not compile
        """
        try:
            self._pattern = re.compile(pattern)
        except re.error as e:
            raise SchemaDefinitionError(
                f"Invalid regex pattern '{pattern}': {e}",
                details={'pattern': pattern},
            )
        return self

    def mac(self) -> 'Text':
        self._mac = True
        return self

    def hex(self) -> 'Text':
        self._hex = True
        return self

    def base64(self) -> 'Text':
        self._base64 = True
        return self

    # -- transform builders ----------------------------------------------

    def trim(self) -> 'Text':
        return self.add_transform(_trim)

    def lower(self) -> 'Text':
        return self.add_transform(_lower)

    def upper(self) -> 'Text':
        return self.add_transform(_upper)

    def strip_tags(self, *allowed_tags: str) -> 'Text':
        """Remove HTML tags except ``allowed_tags``."""
        @_require_string("strip_tags")
        def _strip(value: str) -> str:
            return strip_html_tags(value, *allowed_tags)

        return self.add_transform(_strip)

    # -- validation ------------------------------------------------------

    def accepts(self, value: Any) -> bool:
        return isinstance(value, str)

    def check(self, path: str, value: str, result: ValidationResult) -> None:
        label = self.get_label(path)

        if self._min_length is not None and len(value) < self._min_length:
            result.add_message(path, MessageKey.MIN_LENGTH, label, self._min_length)

        if self._max_length is not None and len(value) > self._max_length:
            result.add_message(path, MessageKey.MAX_LENGTH, label, self._max_length)

        if self._email and not formats.is_valid_email(value):
            result.add_message(path, MessageKey.EMAIL, label)

        if self._url and not formats.is_valid_url(value):
            result.add_message(path, MessageKey.URL, label)

        if self._allowed and value not in self._allowed:
            result.add_message(path, MessageKey.ONE_OF, label, self._allowed)

        if self._password_policy is not None and value != "":
            for key, args in check_password(value, self._password_policy):
                result.add_message(path, key, label, *args)

        if self._ip_version is not None and not formats.is_valid_ip(value, self._ip_version):
            result.add_message(path, MessageKey.IP, label)

        if self._phone_country is not None and not formats.is_valid_phone(value, self._phone_country):
            result.add_message(path, MessageKey.PHONE, label, self._phone_country)

        if self._alpha and not formats.is_alpha(value):
            result.add_message(path, MessageKey.ALPHA, label)

        if self._alphanumeric and not formats.is_alphanumeric(value):
            result.add_message(path, MessageKey.ALPHANUMERIC, label)

        if self._numeric and not formats.is_numeric(value):
            result.add_message(path, MessageKey.NUMERIC_STRING, label)

        if self._starts_with is not None and not value.startswith(self._starts_with):
            result.add_message(path, MessageKey.STARTS_WITH, label, self._starts_with)

        if self._ends_with is not None and not value.endswith(self._ends_with):
            result.add_message(path, MessageKey.ENDS_WITH, label, self._ends_with)

        if self._contains is not None and self._contains not in value:
            result.add_message(path, MessageKey.CONTAINS, label, self._contains)

        if self._pattern is not None and not self._pattern.search(value):
            result.add_message(path, MessageKey.REGEX, label)

        if self._mac and not formats.is_valid_mac(value):
            result.add_message(path, MessageKey.MAC, label)

        if self._hex and not formats.is_hex(value):
            result.add_message(path, MessageKey.HEX, label)

        if self._base64 and not formats.is_base64(value):
            result.add_message(path, MessageKey.BASE64, label)
