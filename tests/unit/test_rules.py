"""
Unit tests for the rule predicates and sanitizers.

Test Coverage Areas:
- Format predicates: email, URL, IP, phone, MAC, hex, base64
- Password policy checks and entropy estimation
- Luhn, credit card brand and IBAN mod-97 checks
- UUID version patterns
- HTML stripping/escaping, filename sanitization, emoji filter, charset and
  domain checks
"""

import math

import phonenumbers
import pytest

from fluent_validator.i18n.messages import MessageKey, Translator
from fluent_validator.rules import formats, security
from fluent_validator.rules.password import (
    PasswordPolicy,
    calculate_entropy,
    check_password,
    has_keyboard_pattern,
    has_repeating_chars,
    validate_password,
)
from fluent_validator.rules.payment import is_valid_credit_card, is_valid_iban, luhn_check
from fluent_validator.rules.uuid import is_valid_uuid


# ============================================================================
# FORMAT PREDICATES
# ============================================================================

class TestEmailValidation:
    """E-mail syntax checks."""

    @pytest.mark.parametrize('email', [
        'a@b.com',
        'user.name+tag@mail.co.uk',
        'first_last@company.org',
    ])
    def test_valid_addresses(self, email):
        assert formats.is_valid_email(email) is True

    @pytest.mark.parametrize('email', [
        '',
        'plainaddress',
        'a..b@mail.com',
        'user@domain.c',
        'user@',
        '@mail.com',
        'user name@mail.com',
    ])
    def test_invalid_addresses(self, email):
        assert formats.is_valid_email(email) is False

    def test_non_string_is_invalid(self):
        assert formats.is_valid_email(None) is False


class TestUrlValidation:
    """Absolute http(s) URL checks."""

    @pytest.mark.parametrize('url', [
        'https://mail.com',
        'http://sub.domain.org:8080/path/to?q=1',
    ])
    def test_valid_urls(self, url):
        assert formats.is_valid_url(url) is True

    @pytest.mark.parametrize('url', [
        'ftp://files.com',
        'mail.com',
        'https://exa mple.com',
        'https://',
    ])
    def test_invalid_urls(self, url):
        assert formats.is_valid_url(url) is False


class TestIpValidation:
    """IP address checks by version."""

    def test_any_version(self):
        assert formats.is_valid_ip('192.168.1.1') is True
        assert formats.is_valid_ip('::1') is True

    def test_version_restriction(self):
        assert formats.is_valid_ip('192.168.1.1', 4) is True
        assert formats.is_valid_ip('192.168.1.1', 6) is False
        assert formats.is_valid_ip('2001:db8::1', 6) is True
        assert formats.is_valid_ip('2001:db8::1', 4) is False

    def test_malformed(self):
        assert formats.is_valid_ip('256.1.1.1') is False
        assert formats.is_valid_ip('not-an-ip') is False


class TestPhoneValidation:
    """Phone checks with fixed TR/US patterns and phonenumbers elsewhere."""

    @pytest.mark.parametrize('phone', ['05551234567', '5551234567', '0555 123 45 67'])
    def test_turkish_numbers(self, phone):
        assert formats.is_valid_phone(phone, 'TR') is True

    def test_invalid_turkish_number(self):
        assert formats.is_valid_phone('04441234567', 'TR') is False

    @pytest.mark.parametrize('phone', ['(212) 555-1234', '+12125551234', '2125551234'])
    def test_us_numbers(self, phone):
        assert formats.is_valid_phone(phone, 'US') is True

    def test_invalid_us_number(self):
        assert formats.is_valid_phone('112-555-1234', 'US') is False

    def test_other_region_uses_phonenumbers(self):
        example = phonenumbers.example_number('DE')
        national = phonenumbers.format_number(example, phonenumbers.PhoneNumberFormat.NATIONAL)

        assert formats.is_valid_phone(national, 'DE') is True
        assert formats.is_valid_phone('123', 'DE') is False

    def test_country_code_is_case_insensitive(self):
        assert formats.is_valid_phone('05551234567', 'tr') is True

    def test_unknown_region(self):
        assert formats.is_valid_phone('05551234567', 'XX') is False


class TestCharacterClassPredicates:
    """Alpha, alphanumeric, numeric, MAC, hex and base64 checks."""

    def test_alpha(self):
        assert formats.is_alpha('abcXYZ') is True
        assert formats.is_alpha('abc1') is False
        assert formats.is_alpha('') is False

    def test_alphanumeric(self):
        assert formats.is_alphanumeric('abc123') is True
        assert formats.is_alphanumeric('abc-123') is False

    def test_numeric(self):
        assert formats.is_numeric('0123') is True
        assert formats.is_numeric('12.3') is False

    def test_mac(self):
        assert formats.is_valid_mac('00:1A:2B:3C:4D:5E') is True
        assert formats.is_valid_mac('00-1a-2b-3c-4d-5e') is True
        assert formats.is_valid_mac('00:1A:2B:3C:4D') is False

    def test_hex(self):
        assert formats.is_hex('deadBEEF') is True
        assert formats.is_hex('0xff') is False

    def test_base64(self):
        assert formats.is_base64('aGVsbG8=') is True
        assert formats.is_base64('') is True
        assert formats.is_base64('aGVsbG8') is False
        assert formats.is_base64('not base64!') is False

    def test_trailing_newline_does_not_match(self):
        assert formats.is_numeric('123\n') is False


# ============================================================================
# PASSWORD POLICY
# ============================================================================

class TestPasswordPolicy:
    """Password requirement checks."""

    def test_strong_password_passes(self):
        assert check_password('Str0ng!Pass99') == []

    def test_weak_password_reports_every_violation_in_order(self):
        keys = [key for key, _ in check_password('Weak1')]

        assert keys == [
            MessageKey.PASSWORD_MIN_LENGTH,
            MessageKey.PASSWORD_SPECIAL,
            MessageKey.PASSWORD_UNIQUE,
            MessageKey.PASSWORD_WEAK,
        ]

    def test_common_password_is_case_insensitive(self):
        keys = [key for key, _ in check_password('PassWord')]
        assert MessageKey.PASSWORD_COMMON in keys

    def test_keyboard_sequence(self):
        keys = [key for key, _ in check_password('Qwerty!Zx9#Lm')]
        assert MessageKey.PASSWORD_KEYBOARD in keys

    def test_reversed_keyboard_sequence(self):
        assert has_keyboard_pattern('ytrewq') is True
        assert has_keyboard_pattern('Mn8#Lp2!') is False

    def test_repeating_run(self):
        keys = [key for key, _ in check_password('Baaaa!9Xyq#2')]
        assert MessageKey.PASSWORD_REPEATING in keys

    def test_repeating_threshold(self):
        assert has_repeating_chars('aaa', 3) is False
        assert has_repeating_chars('aaaa', 3) is True
        assert has_repeating_chars('aaaa', 0) is False

    def test_max_length(self):
        policy = PasswordPolicy(max_length=10)
        keys = [key for key, _ in check_password('Str0ng!Pass99', policy)]
        assert keys == [MessageKey.PASSWORD_MAX_LENGTH]

    def test_disabled_requirements(self):
        policy = PasswordPolicy(
            min_length=4,
            require_uppercase=False,
            require_numeric=False,
            require_special=False,
            min_unique_chars=1,
            min_entropy=0,
        )
        assert check_password('mnop', policy) == []

    def test_with_options_returns_copy(self):
        base = PasswordPolicy()
        strict = base.with_options(min_length=16)

        assert strict.min_length == 16
        assert base.min_length == 8

    def test_validate_password_renders_messages(self):
        messages = validate_password('Weak1', translator=Translator('en'), label='Password')
        assert messages[0] == 'Password must be at least 8 characters long'


class TestEntropy:
    """Entropy estimation by character pool."""

    def test_empty(self):
        assert calculate_entropy('') == 0.0

    def test_lowercase_only(self):
        assert calculate_entropy('abcd') == pytest.approx(4 * math.log2(26))

    def test_all_classes(self):
        assert calculate_entropy('aA1!') == pytest.approx(4 * math.log2(94))

    def test_classes_counted_once(self):
        assert calculate_entropy('aaaa') == calculate_entropy('abcd')


# ============================================================================
# PAYMENT IDENTIFIERS
# ============================================================================

VALID_VISA = '4532015112830366'


class TestLuhnAndCreditCards:
    """Luhn checksum and brand patterns."""

    def test_known_valid_numbers(self):
        assert is_valid_credit_card(VALID_VISA, 'visa') is True
        assert is_valid_credit_card('5555555555554444', 'mastercard') is True
        assert is_valid_credit_card('378282246310005', 'amex') is True

    def test_any_single_digit_change_breaks_checksum(self):
        for position, char in enumerate(VALID_VISA):
            mutated = VALID_VISA[:position] + str((int(char) + 1) % 10) + VALID_VISA[position + 1:]
            assert luhn_check(mutated) is False, mutated

    def test_separators_are_ignored(self):
        assert is_valid_credit_card('4532 0151 1283 0366') is True
        assert is_valid_credit_card('4532-0151-1283-0366') is True

    def test_brand_mismatch(self):
        assert is_valid_credit_card(VALID_VISA, 'mastercard') is False
        assert is_valid_credit_card(VALID_VISA, 'unknown') is False

    def test_luhn_rejects_non_digits(self):
        assert luhn_check('4532a15112830366') is False
        assert luhn_check('') is False

    def test_empty_number(self):
        assert is_valid_credit_card('') is False
        assert is_valid_credit_card('----') is False


class TestIban:
    """IBAN mod-97 and country length checks."""

    def test_turkish_iban(self):
        assert is_valid_iban('TR330006100519786457841326', 'TR') is True

    def test_country_length_mismatch(self):
        assert is_valid_iban('DE89370400440532013000', 'TR') is False

    def test_without_country(self):
        assert is_valid_iban('DE89370400440532013000') is True
        assert is_valid_iban('GB82WEST12345698765432') is True

    def test_spaces_and_case_are_normalized(self):
        assert is_valid_iban('tr33 0006 1005 1978 6457 8413 26', 'tr') is True

    def test_bad_checksum(self):
        assert is_valid_iban('TR330006100519786457841327') is False

    def test_bad_format(self):
        assert is_valid_iban('1234') is False
        assert is_valid_iban('TRXX0006100519786457841326') is False

    def test_unknown_country(self):
        assert is_valid_iban('TR330006100519786457841326', 'ZZ') is False


# ============================================================================
# UUID
# ============================================================================

class TestUuid:
    """UUID patterns per version."""

    V4 = '550e8400-e29b-41d4-a716-446655440000'
    V1 = '6ba7b810-9dad-11d1-80b4-00c04fd430c8'

    def test_any_version(self):
        assert is_valid_uuid(self.V4) is True
        assert is_valid_uuid(self.V1, 0) is True

    def test_specific_version(self):
        assert is_valid_uuid(self.V4, 4) is True
        assert is_valid_uuid(self.V4, 1) is False
        assert is_valid_uuid(self.V1, 1) is True

    def test_uppercase(self):
        assert is_valid_uuid(self.V4.upper(), 4) is True

    def test_version_two_never_matches(self):
        assert is_valid_uuid(self.V4, 2) is False

    def test_malformed(self):
        assert is_valid_uuid('550e8400e29b41d4a716446655440000') is False
        assert is_valid_uuid('') is False


# ============================================================================
# SECURITY SANITIZERS
# ============================================================================

class TestSanitizers:
    """HTML, filename and emoji sanitizers."""

    def test_strip_all_tags(self):
        assert security.strip_html_tags('<b>Hello</b> <i>World</i>') == 'Hello World'

    def test_strip_keeps_allowed_tags(self):
        assert security.strip_html_tags('<b>Hello</b> <i>World</i>', 'b') == '<b>Hello</b> World'

    def test_strip_drops_attributes_and_comments(self):
        assert security.strip_html_tags('<b class="x">a</b><!-- note -->b', 'b') == '<b>a</b>b'

    def test_escape_html(self):
        assert security.escape_html('<a href=\'x\'>"&"</a>') == (
            '&lt;a href=&#x27;x&#x27;&gt;&quot;&amp;&quot;&lt;/a&gt;'
        )

    def test_sanitize_filename_transliterates(self):
        assert security.sanitize_filename('çalışma raporu.pdf') == 'calismaraporu.pdf'

    def test_sanitize_filename_path_traversal(self):
        assert security.sanitize_filename('../../etc/passwd') == 'etcpasswd'

    def test_sanitize_filename_truncates(self):
        assert len(security.sanitize_filename('a' * 300)) == 255

    def test_filter_emoji(self):
        assert security.filter_emoji('hi \U0001F600 there ☀') == 'hi  there '
        assert security.filter_emoji('hi \U0001F600', remove=False) == 'hi \U0001F600'


class TestTextPredicates:
    """Charset, Turkish character and domain checks."""

    def test_latin_charset(self):
        assert security.validate_charset('Ünïcode', 'latin') is True
        assert security.validate_charset('Привет', 'latin') is False
        assert security.validate_charset('abc1', 'latin') is False

    def test_other_charsets(self):
        assert security.validate_charset('abc123', 'alphanumeric') is True
        assert security.validate_charset('123', 'numeric') is True
        assert security.validate_charset('abc', 'alpha') is True
        assert security.validate_charset('ab c', 'alpha') is False

    def test_empty_or_unknown_charset(self):
        assert security.validate_charset('', 'alpha') is False
        assert security.validate_charset('abc', 'klingon') is False

    def test_turkish_chars(self):
        assert security.has_turkish_chars('şeker') is True
        assert security.has_turkish_chars('sugar') is False

    def test_domain_with_subdomains(self):
        assert security.is_valid_domain('api.mail.com') is True
        assert security.is_valid_domain('mail.com') is True

    def test_domain_without_subdomains(self):
        assert security.is_valid_domain('mail.com', allow_subdomains=False) is True
        assert security.is_valid_domain('api.mail.com', allow_subdomains=False) is False

    @pytest.mark.parametrize('domain', ['-bad.com', 'bad-.com', 'mail.c', 'mail', 'ma il.com'])
    def test_invalid_domains(self, domain):
        assert security.is_valid_domain(domain) is False
