"""
Sanitizers and text predicates used by AdvancedText fields.

Features:
- HTML tag stripping with an allow-list using bleach 6.0+
- HTML entity escaping
- Filename sanitization with Turkish transliteration
- Emoji filtering
- Charset, Turkish character and RFC 1035 domain checks
"""

import html
import re
import unicodedata
from typing import Callable, Dict

import bleach
import structlog

logger = structlog.get_logger(__name__)

MAX_FILENAME_LENGTH = 255

EMOJI_REGEX = re.compile(
    '['
    '\U0001F600-\U0001F64F'  # emoticons
    '\U0001F300-\U0001F5FF'  # symbols and pictographs
    '\U0001F680-\U0001F6FF'  # transport and map
    '\u2600-\u26FF'  # miscellaneous symbols
    '\u2700-\u27BF'  # dingbats
    ']'
)

UNSAFE_FILENAME_CHARS = re.compile(r'[^a-zA-Z0-9\-_.]')
CONSECUTIVE_DOTS = re.compile(r'\.{2,}')

TURKISH_CHAR_REGEX = re.compile('[çÇğĞıİöÖşŞüÜ]')
TURKISH_TRANSLITERATION = str.maketrans({
    'ç': 'c', 'Ç': 'C',
    'ğ': 'g', 'Ğ': 'G',
    'ı': 'i', 'İ': 'I',
    'ö': 'o', 'Ö': 'O',
    'ş': 's', 'Ş': 'S',
    'ü': 'u', 'Ü': 'U',
})

DOMAIN_REGEX = re.compile(r'[a-zA-Z0-9]([a-zA-Z0-9-]*[a-zA-Z0-9])?\.[a-zA-Z]{2,}')
SUBDOMAIN_REGEX = re.compile(r'([a-zA-Z0-9]([a-zA-Z0-9-]*[a-zA-Z0-9])?\.)+[a-zA-Z]{2,}')


def _is_latin(text: str) -> bool:
    return all(
        char.isalpha() and unicodedata.name(char, '').startswith('LATIN')
        for char in text
    )


CHARSET_VALIDATORS: Dict[str, Callable[[str], bool]] = {
    'latin': _is_latin,
    'alphanumeric': lambda text: re.fullmatch(r'[a-zA-Z0-9]+', text) is not None,
    'numeric': lambda text: re.fullmatch(r'[0-9]+', text) is not None,
    'alpha': lambda text: re.fullmatch(r'[a-zA-Z]+', text) is not None,
}


def strip_html_tags(text: str, *allowed_tags: str) -> str:
    """
    Remove HTML tags, keeping the text content.

    Args:
        text: Input possibly containing markup
        *allowed_tags: Tag names to keep (attributes are always dropped)

    Returns:
        Text with disallowed tags and comments removed
    """
    return bleach.clean(
        text,
        tags=set(allowed_tags),
        attributes={},
        strip=True,
        strip_comments=True,
    )


def escape_html(text: str) -> str:
    """Escape ``& < > " '`` as HTML entities."""
    return html.escape(text, quote=True)


def sanitize_filename(filename: str) -> str:
    """
    Make a string safe to use as a file name.

    Turkish letters are transliterated, everything outside ``[A-Za-z0-9-_.]``
    is dropped, runs of dots collapse to one, a leading or trailing dot is
    removed, and the result is truncated to 255 characters.
    """
    sanitized = filename.translate(TURKISH_TRANSLITERATION)
    sanitized = UNSAFE_FILENAME_CHARS.sub('', sanitized)
    sanitized = CONSECUTIVE_DOTS.sub('.', sanitized)
    if sanitized.startswith('.'):
        sanitized = sanitized[1:]
    if sanitized.endswith('.'):
        sanitized = sanitized[:-1]
    sanitized = sanitized[:MAX_FILENAME_LENGTH]

    if sanitized != filename:
        logger.debug(
            "Filename sanitized",
            length_change=len(filename) - len(sanitized)
        )
    return sanitized


def filter_emoji(text: str, remove: bool = True) -> str:
    """Remove emoji when ``remove`` is set, otherwise return ``text`` unchanged."""
    if not remove:
        return text
    return EMOJI_REGEX.sub('', text)


def validate_charset(text: str, charset: str) -> bool:
    """
    Check that every character of ``text`` belongs to a named set.

    Args:
        text: Input text
        charset: ``latin``, ``alphanumeric``, ``numeric`` or ``alpha``

    Returns:
        True when ``text`` is non-empty and entirely within the set; unknown
        set names never match
    """
    validator = CHARSET_VALIDATORS.get(charset)
    if validator is None or not text:
        return False
    return validator(text)


def has_turkish_chars(text: str) -> bool:
    return TURKISH_CHAR_REGEX.search(text) is not None


def is_valid_domain(domain: str, allow_subdomains: bool = True) -> bool:
    """
    Validate a domain name.

    Each label starts and ends with a letter or digit with hyphens only
    inside, and the TLD has at least two letters.

    Args:
        domain: Domain name
        allow_subdomains: Accept any number of labels before the TLD; when
            False exactly one label plus TLD is required

    Returns:
        True when the domain is valid
    """
    if not isinstance(domain, str):
        return False
    pattern = SUBDOMAIN_REGEX if allow_subdomains else DOMAIN_REGEX
    return pattern.fullmatch(domain) is not None
