"""
Password policy checks and entropy estimation.

``check_password`` returns every violated requirement as a message key plus
arguments so the caller can render them in any locale; ``validate_password``
renders them directly.
"""

import math
import re
from dataclasses import dataclass, replace
from typing import Any, List, Optional, Tuple

from ..i18n.messages import MessageKey, Translator, get_translator

DEFAULT_SPECIAL_CHARS = '!@#$%^&*(),.?":{}|<>+-'

COMMON_PASSWORDS = frozenset({
    'password', '123456', 'qwerty', '111111', 'abc123',
    'letmein', 'admin', 'welcome', 'monkey', 'dragon',
})

KEYBOARD_PATTERNS = (
    'qwerty', 'asdfgh', 'zxcvbn',
    '123456', '654321',
    'abc', 'cba', 'xyz',
)

UPPERCASE_REGEX = re.compile(r'[A-Z]')
LOWERCASE_REGEX = re.compile(r'[a-z]')
DIGIT_REGEX = re.compile(r'[0-9]')
NON_ALNUM_REGEX = re.compile(r'[^a-zA-Z0-9]')

# Character pool contributions for entropy estimation
POOL_LOWERCASE = 26
POOL_UPPERCASE = 26
POOL_DIGITS = 10
POOL_SPECIAL = 32

Violation = Tuple[MessageKey, Tuple[Any, ...]]


@dataclass(frozen=True)
class PasswordPolicy:
    """Configurable password requirements."""

    min_length: int = 8
    max_length: int = 72
    require_uppercase: bool = True
    require_lowercase: bool = True
    require_numeric: bool = True
    require_special: bool = True
    special_chars: str = DEFAULT_SPECIAL_CHARS
    min_unique_chars: int = 6
    max_repeating: int = 3
    disallow_common: bool = True
    disallow_keyboard: bool = True
    min_entropy: float = 50.0

    def with_options(self, **options: Any) -> 'PasswordPolicy':
        """Return a copy with the given fields overridden."""
        return replace(self, **options)


def has_keyboard_pattern(password: str) -> bool:
    lowered = password.lower()
    return any(
        pattern in lowered or pattern[::-1] in lowered
        for pattern in KEYBOARD_PATTERNS
    )


def has_repeating_chars(password: str, max_repeats: int) -> bool:
    """True when some character repeats consecutively more than ``max_repeats`` times."""
    if max_repeats <= 0:
        return False

    run = 0
    previous = None
    for char in password:
        run = run + 1 if char == previous else 1
        if run > max_repeats:
            return True
        previous = char
    return False


def calculate_entropy(password: str) -> float:
    """
    Estimate entropy as ``length * log2(pool)``.

    The pool adds 26 for lowercase, 26 for uppercase, 10 for digits and 32 for
    anything else, counting each class once if present.
    """
    if not password:
        return 0.0

    pool = 0
    if LOWERCASE_REGEX.search(password):
        pool += POOL_LOWERCASE
    if UPPERCASE_REGEX.search(password):
        pool += POOL_UPPERCASE
    if DIGIT_REGEX.search(password):
        pool += POOL_DIGITS
    if NON_ALNUM_REGEX.search(password):
        pool += POOL_SPECIAL

    return len(password) * math.log2(pool)


def check_password(password: str, policy: Optional[PasswordPolicy] = None) -> List[Violation]:
    """
    Check ``password`` against every requirement of ``policy``.

    Args:
        password: Candidate password
        policy: Requirements, defaults to PasswordPolicy()

    Returns:
        List of ``(MessageKey, args)`` for every violated requirement, in
        check order; empty when the password is acceptable
    """
    policy = policy or PasswordPolicy()
    violations: List[Violation] = []

    if len(password) < policy.min_length:
        violations.append((MessageKey.PASSWORD_MIN_LENGTH, (policy.min_length,)))

    if len(password) > policy.max_length:
        violations.append((MessageKey.PASSWORD_MAX_LENGTH, (policy.max_length,)))

    if policy.require_uppercase and not UPPERCASE_REGEX.search(password):
        violations.append((MessageKey.PASSWORD_UPPER, ()))

    if policy.require_lowercase and not LOWERCASE_REGEX.search(password):
        violations.append((MessageKey.PASSWORD_LOWER, ()))

    if policy.require_numeric and not DIGIT_REGEX.search(password):
        violations.append((MessageKey.PASSWORD_NUMERIC, ()))

    if policy.require_special and not any(char in policy.special_chars for char in password):
        violations.append((MessageKey.PASSWORD_SPECIAL, (policy.special_chars,)))

    if len(set(password)) < policy.min_unique_chars:
        violations.append((MessageKey.PASSWORD_UNIQUE, (policy.min_unique_chars,)))

    if policy.disallow_keyboard and has_keyboard_pattern(password):
        violations.append((MessageKey.PASSWORD_KEYBOARD, ()))

    if policy.max_repeating > 0 and has_repeating_chars(password, policy.max_repeating):
        violations.append((MessageKey.PASSWORD_REPEATING, (policy.max_repeating,)))

    if policy.disallow_common and password.lower() in COMMON_PASSWORDS:
        violations.append((MessageKey.PASSWORD_COMMON, ()))

    if calculate_entropy(password) < policy.min_entropy:
        violations.append((MessageKey.PASSWORD_WEAK, ()))

    return violations


def validate_password(
    password: str,
    policy: Optional[PasswordPolicy] = None,
    translator: Optional[Translator] = None,
    label: str = "Password"
) -> List[str]:
    """
    Render the policy violations of ``password`` as messages.

    Returns:
        One message per violated requirement; empty when acceptable
    """
    translator = translator or get_translator()
    return [
        translator.format(key, label, *args)
        for key, args in check_password(password, policy)
    ]
