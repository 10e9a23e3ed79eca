"""
Fixtures shared by the unit tests: sample records and ready-made schemas.
"""

from typing import Any, Dict

import pytest

import fluent_validator as v
from fluent_validator.core.result import ValidationResult


@pytest.fixture
def run_field():
    """Return a helper that transforms and validates one value like a schema."""
    def _run(field, value: Any, path: str = 'field', locale: str = 'en') -> ValidationResult:
        result = ValidationResult(v.get_translator().for_locale(locale))
        transformed = field.transform(value)
        field.validate(path, transformed, result)
        return result

    return _run


@pytest.fixture
def registration_schema():
    """Username, e-mail and password with a matching-confirmation rule."""
    def passwords_match(data: Dict[str, Any]):
        if data.get('password') != data.get('password_confirm'):
            return "passwords do not match"
        return None

    return v.make().shape({
        'username': v.Text().required().min(3).max(20),
        'email': v.Text().required().trim().email(),
        'password': v.Text().password(),
        'password_confirm': v.Text().required(),
    }).cross_validate(passwords_match)


@pytest.fixture
def weak_registration():
    return {
        'username': 'jo',
        'email': ' a@b.com ',
        'password': 'Weak1',
        'password_confirm': 'Weak1',
    }


@pytest.fixture
def strong_registration():
    return {
        'username': 'johndoe',
        'email': ' a@b.com ',
        'password': 'Str0ng!Pass99',
        'password_confirm': 'Str0ng!Pass99',
    }


@pytest.fixture
def payment_schema():
    """Credit card details required only when the payment type asks for them."""
    return v.make().shape({
        'type': v.Text().required().one_of('credit_card', 'bank_transfer'),
    }).when('type', 'credit_card', lambda: v.make().shape({
        'card_number': v.CreditCard().required(),
    })).when('type', 'bank_transfer', lambda: v.make().shape({
        'iban': v.Iban().required().country('TR'),
    }))
