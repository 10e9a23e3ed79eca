"""
Unit tests for the marshmallow adapters.
"""

from datetime import datetime

import pytest
from marshmallow import Schema as MarshmallowSchema
from marshmallow import ValidationError as MarshmallowValidationError

import fluent_validator as v
from fluent_validator.integrations import FluentField, validate_with_schema


class SignupSchema(MarshmallowSchema):
    email = FluentField(v.Text().trim().email(), required=True)
    iban = FluentField(v.Iban().country('TR'))
    tags = FluentField(v.Array().unique().elements(v.Text().lower()))
    born = FluentField(v.DateTime())


class TestFluentField:
    """FluentField inside a marshmallow schema."""

    def test_load_returns_transformed_values(self):
        loaded = SignupSchema().load({
            'email': ' a@b.com ',
            'iban': 'TR330006100519786457841326',
            'tags': ['Admin', 'ops'],
            'born': '1990-05-01',
        })

        assert loaded == {
            'email': 'a@b.com',
            'iban': 'TR330006100519786457841326',
            'tags': ['admin', 'ops'],
            'born': datetime(1990, 5, 1),
        }

    def test_constraint_errors(self):
        with pytest.raises(MarshmallowValidationError) as exc_info:
            SignupSchema().load({'email': 'not-an-email', 'iban': 'DE89370400440532013000'})

        assert exc_info.value.messages == {
            'email': ['email must be a valid email address'],
            'iban': ['iban must be a valid IBAN'],
        }

    def test_transform_errors(self):
        with pytest.raises(MarshmallowValidationError) as exc_info:
            SignupSchema().load({'email': 'a@b.com', 'tags': 'admin'})

        assert exc_info.value.messages == {'tags': ['Transformation error: value must be an array']}

    def test_marshmallow_required_still_applies(self):
        with pytest.raises(MarshmallowValidationError) as exc_info:
            SignupSchema().load({})

        assert 'email' in exc_info.value.messages

    def test_nested_messages_are_flattened(self):
        with pytest.raises(MarshmallowValidationError) as exc_info:
            SignupSchema().load({'email': 'a@b.com', 'tags': ['a', 'a']})

        assert exc_info.value.messages == {'tags': ['tags must contain unique elements']}

    def test_locale(self):
        class TurkishSchema(MarshmallowSchema):
            email = FluentField(v.Text().email(), locale='tr')

        with pytest.raises(MarshmallowValidationError) as exc_info:
            TurkishSchema().load({'email': 'bad'})

        assert exc_info.value.messages == {'email': ['email alanı geçerli bir e-posta adresi olmalıdır']}

    def test_dump_serializes_datetimes(self):
        dumped = SignupSchema().dump({'email': 'a@b.com', 'born': datetime(1990, 5, 1)})
        assert dumped == {'email': 'a@b.com', 'born': '1990-05-01T00:00:00'}


class TestValidateWithSchema:
    """validate_with_schema wrapper."""

    @pytest.fixture
    def schema(self):
        return v.make().shape({
            'name': v.Text().required().trim(),
            'age': v.Number().integer().min(18),
        })

    def test_returns_valid_data(self, schema):
        assert validate_with_schema(schema, {'name': ' Ann ', 'age': 30}) == {'name': 'Ann', 'age': 30}

    def test_raises_with_messages_by_path(self, schema):
        with pytest.raises(MarshmallowValidationError) as exc_info:
            validate_with_schema(schema, {'age': 12})

        assert exc_info.value.messages == {
            'name': ['name is required'],
            'age': ['age must be at least 18'],
        }
        assert exc_info.value.valid_data == {}

    def test_locale(self, schema):
        with pytest.raises(MarshmallowValidationError) as exc_info:
            validate_with_schema(schema, {'name': 'Ann', 'age': 12}, locale='tr')

        assert exc_info.value.messages == {'age': ['age alanı en az 18 olmalıdır']}
