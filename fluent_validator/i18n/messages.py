"""
Message catalogs and the translator used to render validation errors.

Every error the engine records is produced through ``Translator.format`` with
a ``MessageKey`` and positional arguments (usually the field label first).
English and Turkish catalogs ship by default; applications can add locales or
override single messages with ``add_messages``.

Schemas pin a locale by taking a ``for_locale`` view of a translator for each
run. Views share catalogs but not the active locale, so concurrent
validations in different locales do not interfere. The process-wide default
translator is kept for callers that prefer a single global setting.
"""

import threading
from enum import Enum
from typing import Any, Dict, List, Mapping, Optional, Union

import structlog

from ..config.settings import get_settings

logger = structlog.get_logger(__name__)


class MessageKey(str, Enum):
    """Keys of every message the engine can emit."""

    REQUIRED = "validation.required"
    MIN = "validation.min"
    MAX = "validation.max"
    EMAIL = "validation.email"
    URL = "validation.url"
    IP = "validation.ip"
    UUID = "validation.uuid"
    IBAN = "validation.iban"
    CREDIT_CARD = "validation.credit_card"
    PHONE = "validation.phone"
    INTEGER = "validation.integer"
    NUMERIC = "validation.numeric"
    BOOLEAN = "validation.boolean"
    STRING = "validation.string"
    ARRAY = "validation.array"
    OBJECT = "validation.object"
    DATE = "validation.date"
    DATE_FORMAT = "validation.date_format"
    DATE_MIN = "validation.date_min"
    DATE_MAX = "validation.date_max"
    ONE_OF = "validation.one_of"
    MIN_LENGTH = "validation.min_length"
    MAX_LENGTH = "validation.max_length"
    MIN_ELEMENTS = "validation.min_elements"
    MAX_ELEMENTS = "validation.max_elements"
    PASSWORD = "validation.password"
    PASSWORD_MIN_LENGTH = "validation.password.min_length"
    PASSWORD_MAX_LENGTH = "validation.password.max_length"
    PASSWORD_UPPER = "validation.password.uppercase"
    PASSWORD_LOWER = "validation.password.lowercase"
    PASSWORD_NUMERIC = "validation.password.numeric"
    PASSWORD_SPECIAL = "validation.password.special"
    PASSWORD_UNIQUE = "validation.password.unique_chars"
    PASSWORD_REPEATING = "validation.password.repeating"
    PASSWORD_COMMON = "validation.password.common"
    PASSWORD_KEYBOARD = "validation.password.keyboard"
    PASSWORD_WEAK = "validation.password.weak"
    TURKISH_CHARS = "validation.turkish_chars"
    NO_TURKISH_CHARS = "validation.no_turkish_chars"
    DOMAIN = "validation.domain"
    CHARSET = "validation.charset"
    POSITIVE = "validation.positive"
    NEGATIVE = "validation.negative"
    MULTIPLE_OF = "validation.multiple_of"
    BETWEEN = "validation.between"
    UNIQUE = "validation.unique"
    ARRAY_CONTAINS = "validation.array_contains"
    NOT_EMPTY = "validation.not_empty"
    ALPHA = "validation.alpha"
    ALPHANUMERIC = "validation.alphanumeric"
    NUMERIC_STRING = "validation.numeric_string"
    STARTS_WITH = "validation.starts_with"
    ENDS_WITH = "validation.ends_with"
    CONTAINS = "validation.contains"
    REGEX = "validation.regex"
    MAC = "validation.mac"
    HEX = "validation.hex"
    BASE64 = "validation.base64"
    TRANSFORM = "validation.transform_error"
    CROSS_VALIDATION = "validation.cross_validation"
    ASYNC_TIMEOUT = "validation.async_timeout"


Messages = Dict[MessageKey, str]

ENGLISH_MESSAGES: Messages = {
    MessageKey.REQUIRED: "{} is required",
    MessageKey.MIN: "{} must be at least {}",
    MessageKey.MAX: "{} must be at most {}",
    MessageKey.EMAIL: "{} must be a valid email address",
    MessageKey.URL: "{} must be a valid URL",
    MessageKey.IP: "{} must be a valid IP address",
    MessageKey.UUID: "{} must be a valid UUID",
    MessageKey.IBAN: "{} must be a valid IBAN",
    MessageKey.CREDIT_CARD: "{} must be a valid credit card number",
    MessageKey.PHONE: "{} must be a valid {} phone number",
    MessageKey.INTEGER: "{} must be an integer",
    MessageKey.NUMERIC: "{} must be a numeric value",
    MessageKey.BOOLEAN: "{} must be a boolean value",
    MessageKey.STRING: "{} must be a string",
    MessageKey.ARRAY: "{} must be an array",
    MessageKey.OBJECT: "{} must be an object",
    MessageKey.DATE: "{} must be a valid date",
    MessageKey.DATE_FORMAT: "{} is not in a valid date format. Expected: {}",
    MessageKey.DATE_MIN: "{} cannot be before {}",
    MessageKey.DATE_MAX: "{} cannot be after {}",
    MessageKey.ONE_OF: "{} must be one of: {}",
    MessageKey.MIN_LENGTH: "{} must be at least {} characters long",
    MessageKey.MAX_LENGTH: "{} must be at most {} characters long",
    MessageKey.MIN_ELEMENTS: "{} must contain at least {} elements",
    MessageKey.MAX_ELEMENTS: "{} must contain at most {} elements",
    MessageKey.PASSWORD: "{} must meet password requirements",
    MessageKey.PASSWORD_MIN_LENGTH: "{} must be at least {} characters long",
    MessageKey.PASSWORD_MAX_LENGTH: "{} must be at most {} characters long",
    MessageKey.PASSWORD_UPPER: "{} must contain at least one uppercase letter",
    MessageKey.PASSWORD_LOWER: "{} must contain at least one lowercase letter",
    MessageKey.PASSWORD_NUMERIC: "{} must contain at least one number",
    MessageKey.PASSWORD_SPECIAL: "{} must contain at least one special character ({})",
    MessageKey.PASSWORD_UNIQUE: "{} must contain at least {} unique characters",
    MessageKey.PASSWORD_REPEATING: "{} cannot have more than {} repeating characters",
    MessageKey.PASSWORD_COMMON: "{} is too common, please choose a more secure password",
    MessageKey.PASSWORD_KEYBOARD: "{} cannot contain keyboard sequences",
    MessageKey.PASSWORD_WEAK: "{} is not strong enough, please choose a more complex password",
    MessageKey.TURKISH_CHARS: "{} must contain Turkish characters",
    MessageKey.NO_TURKISH_CHARS: "{} must not contain Turkish characters",
    MessageKey.DOMAIN: "{} must be a valid domain name",
    MessageKey.CHARSET: "{} must contain only '{}' characters",
    MessageKey.POSITIVE: "{} must be a positive number",
    MessageKey.NEGATIVE: "{} must be a negative number",
    MessageKey.MULTIPLE_OF: "{} must be a multiple of {}",
    MessageKey.BETWEEN: "{} must be between {} and {}",
    MessageKey.UNIQUE: "{} must contain unique elements",
    MessageKey.ARRAY_CONTAINS: "{} must contain {}",
    MessageKey.NOT_EMPTY: "{} cannot be empty",
    MessageKey.ALPHA: "{} must contain only letters",
    MessageKey.ALPHANUMERIC: "{} must contain only letters and numbers",
    MessageKey.NUMERIC_STRING: "{} must contain only digits",
    MessageKey.STARTS_WITH: "{} must start with '{}'",
    MessageKey.ENDS_WITH: "{} must end with '{}'",
    MessageKey.CONTAINS: "{} must contain '{}'",
    MessageKey.REGEX: "{} has an invalid format",
    MessageKey.MAC: "{} must be a valid MAC address",
    MessageKey.HEX: "{} must be a valid hexadecimal value",
    MessageKey.BASE64: "{} must be valid base64",
    MessageKey.TRANSFORM: "Transformation error: {}",
    MessageKey.CROSS_VALIDATION: "Cross-field validation failed: {}",
    MessageKey.ASYNC_TIMEOUT: "{} could not be validated in time",
}

TURKISH_MESSAGES: Messages = {
    MessageKey.REQUIRED: "{} alanı zorunludur",
    MessageKey.MIN: "{} alanı en az {} olmalıdır",
    MessageKey.MAX: "{} alanı en fazla {} olmalıdır",
    MessageKey.EMAIL: "{} alanı geçerli bir e-posta adresi olmalıdır",
    MessageKey.URL: "{} alanı geçerli bir URL olmalıdır",
    MessageKey.IP: "{} alanı geçerli bir IP adresi olmalıdır",
    MessageKey.UUID: "{} alanı geçerli bir UUID olmalıdır",
    MessageKey.IBAN: "{} alanı geçerli bir IBAN olmalıdır",
    MessageKey.CREDIT_CARD: "{} alanı geçerli bir kredi kartı numarası olmalıdır",
    MessageKey.PHONE: "{} alanı geçerli bir {} telefon numarası olmalıdır",
    MessageKey.INTEGER: "{} alanı tamsayı olmalıdır",
    MessageKey.NUMERIC: "{} alanı sayısal bir değer olmalıdır",
    MessageKey.BOOLEAN: "{} alanı boolean tipinde olmalıdır",
    MessageKey.STRING: "{} alanı metin tipinde olmalıdır",
    MessageKey.ARRAY: "{} alanı dizi (array) tipinde olmalıdır",
    MessageKey.OBJECT: "{} alanı nesne (object) tipinde olmalıdır",
    MessageKey.DATE: "{} alanı geçerli bir tarih olmalıdır",
    MessageKey.DATE_FORMAT: "{} geçerli bir tarih formatı değil. Beklenen: {}",
    MessageKey.DATE_MIN: "{} alanı {} tarihinden önce olamaz",
    MessageKey.DATE_MAX: "{} alanı {} tarihinden sonra olamaz",
    MessageKey.ONE_OF: "{} alanı şunlardan biri olmalıdır: {}",
    MessageKey.MIN_LENGTH: "{} alanı en az {} karakter olmalıdır",
    MessageKey.MAX_LENGTH: "{} alanı en fazla {} karakter olmalıdır",
    MessageKey.MIN_ELEMENTS: "{} alanında en az {} eleman olmalıdır",
    MessageKey.MAX_ELEMENTS: "{} alanında en fazla {} eleman olmalıdır",
    MessageKey.PASSWORD: "{} şifre gereksinimlerini karşılamalıdır",
    MessageKey.PASSWORD_MIN_LENGTH: "{} en az {} karakter olmalıdır",
    MessageKey.PASSWORD_MAX_LENGTH: "{} en fazla {} karakter olmalıdır",
    MessageKey.PASSWORD_UPPER: "{} en az bir büyük harf içermelidir",
    MessageKey.PASSWORD_LOWER: "{} en az bir küçük harf içermelidir",
    MessageKey.PASSWORD_NUMERIC: "{} en az bir rakam içermelidir",
    MessageKey.PASSWORD_SPECIAL: "{} en az bir özel karakter içermelidir ({})",
    MessageKey.PASSWORD_UNIQUE: "{} en az {} farklı karakter içermelidir",
    MessageKey.PASSWORD_REPEATING: "{} en fazla {} adet tekrar eden karakter içerebilir",
    MessageKey.PASSWORD_COMMON: "{} çok yaygın bir şifre, lütfen daha güvenli bir şifre seçin",
    MessageKey.PASSWORD_KEYBOARD: "{} klavye düzeninde sıralı karakterler içeremez",
    MessageKey.PASSWORD_WEAK: "{} yeterince karmaşık değil, lütfen daha güçlü bir şifre seçin",
    MessageKey.TURKISH_CHARS: "{} alanında Türkçe karakter bulunmalıdır",
    MessageKey.NO_TURKISH_CHARS: "{} alanında Türkçe karakter bulunmamalıdır",
    MessageKey.DOMAIN: "{} alanı geçerli bir alan adı olmalıdır",
    MessageKey.CHARSET: "{} alanı '{}' karakter setine uymalıdır",
    MessageKey.POSITIVE: "{} alanı pozitif bir sayı olmalıdır",
    MessageKey.NEGATIVE: "{} alanı negatif bir sayı olmalıdır",
    MessageKey.MULTIPLE_OF: "{} alanı {} sayısının katı olmalıdır",
    MessageKey.BETWEEN: "{} alanı {} ile {} arasında olmalıdır",
    MessageKey.UNIQUE: "{} alanındaki elemanlar benzersiz olmalıdır",
    MessageKey.ARRAY_CONTAINS: "{} alanı {} değerini içermelidir",
    MessageKey.NOT_EMPTY: "{} alanı boş olamaz",
    MessageKey.ALPHA: "{} alanı sadece harf içermelidir",
    MessageKey.ALPHANUMERIC: "{} alanı sadece harf ve rakam içermelidir",
    MessageKey.NUMERIC_STRING: "{} alanı sadece rakam içermelidir",
    MessageKey.STARTS_WITH: "{} alanı '{}' ile başlamalıdır",
    MessageKey.ENDS_WITH: "{} alanı '{}' ile bitmelidir",
    MessageKey.CONTAINS: "{} alanı '{}' içermelidir",
    MessageKey.REGEX: "{} alanının formatı geçersiz",
    MessageKey.MAC: "{} alanı geçerli bir MAC adresi olmalıdır",
    MessageKey.HEX: "{} alanı geçerli bir onaltılık değer olmalıdır",
    MessageKey.BASE64: "{} alanı geçerli bir base64 değeri olmalıdır",
    MessageKey.TRANSFORM: "Dönüşüm hatası: {}",
    MessageKey.CROSS_VALIDATION: "Çapraz alan doğrulaması başarısız: {}",
    MessageKey.ASYNC_TIMEOUT: "{} alanı zamanında doğrulanamadı",
}

DEFAULT_CATALOGS: Dict[str, Messages] = {
    'en': ENGLISH_MESSAGES,
    'tr': TURKISH_MESSAGES,
}


def _render_arg(arg: Any) -> Any:
    # 3.0 prints as "3", sequences as comma separated values
    if isinstance(arg, float) and arg.is_integer():
        return int(arg)
    if isinstance(arg, (list, tuple, set, frozenset)):
        return ", ".join(str(_render_arg(item)) for item in arg)
    return arg


def _coerce_key(key: Union[MessageKey, str]) -> Union[MessageKey, str]:
    if isinstance(key, MessageKey):
        return key
    try:
        return MessageKey(key)
    except ValueError:
        return key


class Translator:
    """
    Locale-aware message renderer.

    Catalogs are copied on construction, so ``add_messages`` on one
    translator never leaks into another.

    Example:
        translator = Translator('tr')
        translator.format(MessageKey.REQUIRED, 'E-posta')
        # 'E-posta alanı zorunludur'
    """

    def __init__(
        self,
        locale: Optional[str] = None,
        default_locale: Optional[str] = None,
        fallback: Optional[bool] = None,
        catalogs: Optional[Mapping[str, Mapping[Any, str]]] = None
    ):
        settings = get_settings()
        self._lock = threading.RLock()
        self._locale = locale or settings.LOCALE
        self._default_locale = default_locale or settings.DEFAULT_LOCALE
        self._fallback = settings.FALLBACK_ENABLED if fallback is None else fallback
        self._messages: Dict[str, Dict[Any, str]] = {}
        for name, catalog in (catalogs if catalogs is not None else DEFAULT_CATALOGS).items():
            self._messages[name] = {_coerce_key(key): text for key, text in catalog.items()}

    def set_locale(self, locale: str) -> None:
        with self._lock:
            self._locale = locale

    def get_locale(self) -> str:
        with self._lock:
            return self._locale

    @property
    def locale(self) -> str:
        return self.get_locale()

    @property
    def default_locale(self) -> str:
        return self._default_locale

    def set_default_locale(self, locale: str) -> None:
        with self._lock:
            self._default_locale = locale

    def set_fallback(self, enabled: bool) -> None:
        with self._lock:
            self._fallback = enabled

    def add_messages(self, locale: str, messages: Mapping[Any, str]) -> None:
        """
        Add or override messages for a locale, creating the locale if needed.

        Args:
            locale: Locale code such as ``de``
            messages: Mapping of MessageKey (or its string value) to template
        """
        with self._lock:
            catalog = self._messages.setdefault(locale, {})
            for key, text in messages.items():
                catalog[_coerce_key(key)] = text

    def has_locale(self, locale: str) -> bool:
        with self._lock:
            return locale in self._messages

    def available_locales(self) -> List[str]:
        with self._lock:
            return sorted(self._messages)

    def for_locale(self, locale: str) -> 'Translator':
        """Return a translator bound to another locale that shares this one's catalogs."""
        view = Translator.__new__(Translator)
        view._lock = self._lock
        view._messages = self._messages
        view._default_locale = self._default_locale
        view._fallback = self._fallback
        view._locale = locale
        return view

    def _lookup(self, key: Union[MessageKey, str]) -> Optional[str]:
        catalog = self._messages.get(self._locale)
        if catalog is not None and key in catalog:
            return catalog[key]
        if self._fallback and self._locale != self._default_locale:
            catalog = self._messages.get(self._default_locale)
            if catalog is not None and key in catalog:
                return catalog[key]
        return None

    def format(self, key: Union[MessageKey, str], *args: Any) -> str:
        """
        Render the message for ``key`` in the active locale.

        Falls back to the default locale when enabled; an unknown key renders
        as ``[key]``.
        """
        key = _coerce_key(key)
        with self._lock:
            template = self._lookup(key)

        if template is None:
            name = key.value if isinstance(key, MessageKey) else key
            logger.debug("Missing translation", key=name, locale=self._locale)
            return f"[{name}]"

        return template.format(*(_render_arg(arg) for arg in args))


_default_translator: Optional[Translator] = None
_default_lock = threading.Lock()


def get_translator() -> Translator:
    """Return the process-wide default translator."""
    global _default_translator
    with _default_lock:
        if _default_translator is None:
            _default_translator = Translator()
        return _default_translator


def reset_translator() -> Translator:
    """Discard the process-wide translator and build a fresh one from settings."""
    global _default_translator
    with _default_lock:
        _default_translator = Translator()
        return _default_translator


def set_locale(locale: str) -> None:
    get_translator().set_locale(locale)


def get_locale() -> str:
    return get_translator().get_locale()


def add_messages(locale: str, messages: Mapping[Any, str]) -> None:
    get_translator().add_messages(locale, messages)


def format_message(key: Union[MessageKey, str], *args: Any) -> str:
    """Render ``key`` with the process-wide translator."""
    return get_translator().format(key, *args)
