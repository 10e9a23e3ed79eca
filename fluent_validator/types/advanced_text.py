"""
AdvancedText field: Text plus sanitizing transforms and script/domain checks.
"""

from typing import Any, Optional

from ..core.exceptions import SchemaDefinitionError
from ..core.result import ValidationResult
from ..i18n.messages import MessageKey
from ..rules import security
from .text import Text, _require_string


@_require_string("escape_html")
def _escape(value: str) -> str:
    return security.escape_html(value)


@_require_string("sanitize_filename")
def _sanitize_filename(value: str) -> str:
    return security.sanitize_filename(value)


class AdvancedText(Text):
    """
    Text with extra sanitizers and checks.

    The extra checks (Turkish characters, domain, charset) only run when the
    regular Text checks found nothing wrong with the value.

    Example:
        AdvancedText().strip_tags().filter_emoji().charset("latin")
    """

    def __init__(self):
        super().__init__()
        self._turkish_chars: Optional[bool] = None
        self._domain: Optional[bool] = None
        self._charset: Optional[str] = None

    def escape_html(self) -> 'AdvancedText':
        return self.add_transform(_escape)

    def sanitize_filename(self) -> 'AdvancedText':
        return self.add_transform(_sanitize_filename)

    def filter_emoji(self, remove: bool = True) -> 'AdvancedText':
        @_require_string("filter_emoji")
        def _filter(value: str) -> str:
            return security.filter_emoji(value, remove)

        return self.add_transform(_filter)

    def turkish_chars(self, allow: bool) -> 'AdvancedText':
        """
        Require (``allow=True``) or forbid (``allow=False``) Turkish letters.
        """
        self._turkish_chars = allow
        return self

    def domain(self, allow_subdomains: bool = True) -> 'AdvancedText':
        self._domain = allow_subdomains
        return self

    def charset(self, name: str) -> 'AdvancedText':
        if name not in security.CHARSET_VALIDATORS:
            raise SchemaDefinitionError(
                f"Unknown charset '{name}'. "
                f"Expected one of: {', '.join(sorted(security.CHARSET_VALIDATORS))}"
            )
        self._charset = name
        return self

    def check(self, path: str, value: Any, result: ValidationResult) -> None:
        before = len(result.errors.get(path, ()))
        super().check(path, value, result)
        if len(result.errors.get(path, ())) > before:
            return

        label = self.get_label(path)

        if self._turkish_chars is not None:
            present = security.has_turkish_chars(value)
            if self._turkish_chars and not present:
                result.add_message(path, MessageKey.TURKISH_CHARS, label)
            elif not self._turkish_chars and present:
                result.add_message(path, MessageKey.NO_TURKISH_CHARS, label)

        if self._domain is not None and not security.is_valid_domain(value, self._domain):
            result.add_message(path, MessageKey.DOMAIN, label)

        if self._charset is not None and not security.validate_charset(value, self._charset):
            result.add_message(path, MessageKey.CHARSET, label, self._charset)
