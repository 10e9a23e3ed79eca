"""
Checksum predicates for payment identifiers: card numbers and IBANs.
"""

import re
from typing import Optional

NON_DIGIT_REGEX = re.compile(r'\D')

CARD_BRAND_PATTERNS = {
    'visa': re.compile(r'^4[0-9]{12}(?:[0-9]{3})?$'),
    'mastercard': re.compile(r'^5[1-5][0-9]{14}$'),
    'amex': re.compile(r'^3[47][0-9]{13}$'),
}

IBAN_FORMAT_REGEX = re.compile(r'[A-Z]{2}[0-9]{2}[A-Z0-9]{4,}')

# Fixed IBAN lengths per country (ISO 13616 registry)
IBAN_COUNTRY_LENGTHS = {
    'AD': 24, 'AE': 23, 'AT': 20, 'AZ': 28, 'BA': 20, 'BE': 16, 'BG': 22,
    'BH': 22, 'BR': 29, 'CH': 21, 'CY': 28, 'CZ': 24, 'DE': 22, 'DK': 18,
    'EE': 20, 'ES': 24, 'FI': 18, 'FR': 27, 'GB': 22, 'GE': 22, 'GR': 27,
    'HR': 21, 'HU': 28, 'IE': 22, 'IL': 23, 'IS': 26, 'IT': 27, 'KW': 30,
    'KZ': 20, 'LB': 28, 'LI': 21, 'LT': 20, 'LU': 20, 'LV': 21, 'MC': 27,
    'MT': 31, 'NL': 18, 'NO': 15, 'PL': 28, 'PT': 25, 'QA': 29, 'RO': 24,
    'RS': 22, 'SA': 24, 'SE': 24, 'SI': 19, 'SK': 24, 'SM': 27, 'TR': 26,
    'UA': 29,
}


def luhn_check(number: str) -> bool:
    """
    Luhn (mod 10) checksum.

    Digits are processed from the right; every second digit is doubled and
    reduced by 9 when above 9. Any non-digit character fails the check.
    """
    if not number or not number.isascii() or not number.isdigit():
        return False

    total = 0
    for index, char in enumerate(reversed(number)):
        digit = int(char)
        if index % 2 == 1:
            digit *= 2
            if digit > 9:
                digit -= 9
        total += digit
    return total % 10 == 0


def is_valid_credit_card(card_number: str, brand: Optional[str] = None) -> bool:
    """
    Validate a card number.

    Non-digit characters such as spaces and dashes are removed first. When a
    brand is given the number must also match that brand's pattern; an
    unknown brand never matches.

    Args:
        card_number: Card number text
        brand: ``visa``, ``mastercard``, ``amex`` or None for any

    Returns:
        True when the number passes the brand and Luhn checks
    """
    if not isinstance(card_number, str):
        return False

    number = NON_DIGIT_REGEX.sub('', card_number)

    if brand:
        pattern = CARD_BRAND_PATTERNS.get(brand.lower())
        if pattern is None or not pattern.match(number):
            return False

    return luhn_check(number)


def is_valid_iban(iban: str, country_code: Optional[str] = None) -> bool:
    """
    Validate an IBAN with the ISO 7064 mod-97 checksum.

    Args:
        iban: IBAN text, spaces allowed
        country_code: When given, the IBAN must have that country's length;
            a country missing from the length table never matches

    Returns:
        True when the remainder of the rearranged number modulo 97 is 1
    """
    if not isinstance(iban, str):
        return False

    iban = iban.replace(' ', '').upper()

    if country_code:
        expected_length = IBAN_COUNTRY_LENGTHS.get(country_code.upper())
        if expected_length is None or len(iban) != expected_length:
            return False

    if not IBAN_FORMAT_REGEX.fullmatch(iban):
        return False

    rearranged = iban[4:] + iban[:4]
    digits = ''.join(
        str(ord(char) - ord('A') + 10) if char.isalpha() else char
        for char in rearranged
    )
    return int(digits) % 97 == 1
