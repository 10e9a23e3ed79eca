"""Localized validation messages."""

from .messages import (
    MessageKey,
    Translator,
    ENGLISH_MESSAGES,
    TURKISH_MESSAGES,
    get_translator,
    reset_translator,
    set_locale,
    get_locale,
    add_messages,
    format_message,
)

__all__ = [
    'MessageKey',
    'Translator',
    'ENGLISH_MESSAGES',
    'TURKISH_MESSAGES',
    'get_translator',
    'reset_translator',
    'set_locale',
    'get_locale',
    'add_messages',
    'format_message',
]
