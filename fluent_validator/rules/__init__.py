"""Pure predicates and sanitizers used by the field variants."""

from .formats import (
    is_valid_email,
    is_valid_url,
    is_valid_ip,
    is_valid_phone,
    is_alpha,
    is_alphanumeric,
    is_numeric,
    is_valid_mac,
    is_hex,
    is_base64,
)
from .password import (
    PasswordPolicy,
    check_password,
    validate_password,
    calculate_entropy,
)
from .payment import is_valid_credit_card, is_valid_iban, luhn_check
from .uuid import is_valid_uuid
from .security import (
    strip_html_tags,
    escape_html,
    sanitize_filename,
    filter_emoji,
    validate_charset,
    has_turkish_chars,
    is_valid_domain,
)

__all__ = [
    'is_valid_email',
    'is_valid_url',
    'is_valid_ip',
    'is_valid_phone',
    'is_alpha',
    'is_alphanumeric',
    'is_numeric',
    'is_valid_mac',
    'is_hex',
    'is_base64',
    'PasswordPolicy',
    'check_password',
    'validate_password',
    'calculate_entropy',
    'is_valid_credit_card',
    'is_valid_iban',
    'luhn_check',
    'is_valid_uuid',
    'strip_html_tags',
    'escape_html',
    'sanitize_filename',
    'filter_emoji',
    'validate_charset',
    'has_turkish_chars',
    'is_valid_domain',
]
