"""
UUID format predicate.
"""

import re

UUID_PATTERNS = {
    0: re.compile(r'[0-9a-f]{8}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{12}', re.IGNORECASE),
    1: re.compile(r'[0-9a-f]{8}-[0-9a-f]{4}-1[0-9a-f]{3}-[89ab][0-9a-f]{3}-[0-9a-f]{12}', re.IGNORECASE),
    3: re.compile(r'[0-9a-f]{8}-[0-9a-f]{4}-3[0-9a-f]{3}-[89ab][0-9a-f]{3}-[0-9a-f]{12}', re.IGNORECASE),
    4: re.compile(r'[0-9a-f]{8}-[0-9a-f]{4}-4[0-9a-f]{3}-[89ab][0-9a-f]{3}-[0-9a-f]{12}', re.IGNORECASE),
    5: re.compile(r'[0-9a-f]{8}-[0-9a-f]{4}-5[0-9a-f]{3}-[89ab][0-9a-f]{3}-[0-9a-f]{12}', re.IGNORECASE),
}

SUPPORTED_UUID_VERSIONS = (0, 1, 2, 3, 4, 5)


def is_valid_uuid(value: str, version: int = 0) -> bool:
    """
    Validate the canonical 8-4-4-4-12 UUID form.

    Args:
        value: UUID text, hex digits in either case
        version: 1, 3, 4 or 5 to require that version (and the RFC 4122
            variant), 0 for any version

    Returns:
        True when ``value`` matches; versions without a pattern never match
    """
    if not isinstance(value, str):
        return False
    pattern = UUID_PATTERNS.get(version)
    if pattern is None:
        return False
    return pattern.fullmatch(value) is not None
