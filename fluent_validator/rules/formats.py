"""
Format predicates for strings: e-mail, URL, IP, phone and simple charsets.

All functions are pure and return booleans; messages are chosen by the
field that calls them.

Key Features:
- E-mail syntax validation with a strict pattern plus email-validator 2.0+
- URL validation restricted to http and https
- IPv4/IPv6 validation via the ipaddress module
- Phone validation with fixed patterns for TR and US and phonenumbers for
  every other region
"""

import base64
import binascii
import ipaddress
import re

import phonenumbers
import structlog
from email_validator import EmailNotValidError, validate_email

logger = structlog.get_logger(__name__)

# Validation constants and patterns
EMAIL_REGEX = re.compile(
    r'^[a-zA-Z0-9]+([._+-][a-zA-Z0-9]+)*@[a-zA-Z0-9]+([.-][a-zA-Z0-9]+)*\.[a-zA-Z]{2,}$'
)

URL_REGEX = re.compile(
    r'^https?://'
    r'[a-zA-Z0-9]([a-zA-Z0-9-]*[a-zA-Z0-9])?'  # first label
    r'(\.[a-zA-Z0-9]([a-zA-Z0-9-]*[a-zA-Z0-9])?)+'  # remaining labels
    r'(:[0-9]+)?'  # optional port
    r'(/[^\s]*)?'  # path
    r'(\?[^\s]*)?$'  # query
)

PHONE_PATTERNS = {
    'TR': re.compile(r'^(05|5)[0-9]{9}$'),
    'US': re.compile(r'^(\+1|1)?[2-9]\d{2}[2-9]\d{2}\d{4}$'),
}

PHONE_SEPARATORS = re.compile(r'[\s\-()]')

ALPHA_REGEX = re.compile(r'^[a-zA-Z]+$')
ALPHANUMERIC_REGEX = re.compile(r'^[a-zA-Z0-9]+$')
NUMERIC_REGEX = re.compile(r'^[0-9]+$')
MAC_REGEX = re.compile(r'^([0-9A-Fa-f]{2}[:-]){5}([0-9A-Fa-f]{2})$')
HEX_REGEX = re.compile(r'^[0-9A-Fa-f]+$')


def is_valid_email(email: str) -> bool:
    """
    Validate e-mail address syntax.

    The address must match a conservative local@domain.tld pattern (no
    consecutive dots, alphabetic TLD of at least two characters) and pass
    email-validator's syntax checks. No DNS lookups are made.

    Args:
        email: Address to check

    Returns:
        True when the address is syntactically valid
    """
    if not isinstance(email, str) or not email:
        return False

    if '..' in email:
        return False

    tld = email.rsplit('.', 1)[-1]
    if '.' not in email or len(tld) < 2:
        return False

    if not EMAIL_REGEX.fullmatch(email):
        return False

    try:
        validate_email(email, check_deliverability=False)
    except EmailNotValidError as e:
        logger.debug("Email rejected by email-validator", reason=str(e))
        return False
    return True


def is_valid_url(url: str) -> bool:
    """Validate an absolute http(s) URL without whitespace."""
    if not isinstance(url, str) or not url:
        return False
    if any(ch.isspace() for ch in url):
        return False
    if not (url.startswith('http://') or url.startswith('https://')):
        return False
    return URL_REGEX.fullmatch(url) is not None


def is_valid_ip(ip: str, version: int = 0) -> bool:
    """
    Validate an IP address.

    Args:
        ip: Address text
        version: 4, 6 or 0 for either

    Returns:
        True when ``ip`` parses as an address of the requested version
    """
    if not isinstance(ip, str):
        return False
    try:
        address = ipaddress.ip_address(ip)
    except ValueError:
        return False

    if version == 0:
        return True
    if version == 4:
        return address.version == 4
    if version == 6:
        return address.version == 6
    return False


def is_valid_phone(phone: str, country_code: str) -> bool:
    """
    Validate a phone number for a country.

    TR and US numbers are matched against fixed national patterns after
    removing spaces, dashes and parentheses. Other ISO 3166 region codes
    are checked with phonenumbers.

    Args:
        phone: Phone number text
        country_code: ISO 3166-1 alpha-2 region code

    Returns:
        True when the number is valid for the region
    """
    if not isinstance(phone, str) or not phone or not country_code:
        return False

    region = country_code.upper()
    pattern = PHONE_PATTERNS.get(region)
    if pattern is not None:
        return pattern.fullmatch(PHONE_SEPARATORS.sub('', phone)) is not None

    if region not in phonenumbers.SUPPORTED_REGIONS:
        return False

    try:
        parsed = phonenumbers.parse(phone, region)
    except phonenumbers.NumberParseException as e:
        logger.debug("Phone number parse failed", region=region, reason=str(e))
        return False
    return phonenumbers.is_valid_number_for_region(parsed, region)


def is_alpha(value: str) -> bool:
    return ALPHA_REGEX.fullmatch(value) is not None


def is_alphanumeric(value: str) -> bool:
    return ALPHANUMERIC_REGEX.fullmatch(value) is not None


def is_numeric(value: str) -> bool:
    return NUMERIC_REGEX.fullmatch(value) is not None


def is_valid_mac(value: str) -> bool:
    return MAC_REGEX.fullmatch(value) is not None


def is_hex(value: str) -> bool:
    return HEX_REGEX.fullmatch(value) is not None


def is_base64(value: str) -> bool:
    """Strict standard-alphabet base64 with padding."""
    try:
        base64.b64decode(value, validate=True)
    except (binascii.Error, ValueError):
        return False
    return True
