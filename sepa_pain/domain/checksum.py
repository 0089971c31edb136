"""Mod-97 check digits for IBANs and SEPA Creditor Identifiers (ISO 7064)"""

import re

from sepa_pain.domain.exceptions import InputError

SEPA_SCHEME = "0123456789ABCDEFGHIJKLMNOPQRSTUVWXYZ"

IBAN_PATTERN = re.compile(r"^[A-Z]{2}[0-9]{2}[A-Z0-9]{1,30}$")
CREDITOR_ID_PATTERN = re.compile(r"^[A-Z]{2}[0-9]{2}[A-Z0-9]{3}[A-Z0-9]+$")

# Country code + check digits + creditor business code
CREDITOR_ID_PREFIX_LENGTH = 7
IBAN_PREFIX_LENGTH = 4


def replace_chars(value: str) -> str:
    """
    Replace letters with numbers using the SEPA scheme A=10, B=11, ... Z=35.

    Digits pass through unchanged. Anything else raises InputError; stripping
    unwanted characters is the sanitizer's job, not this one.

    Example:
        "FR76" → "152776"
    """
    if not isinstance(value, str):
        raise InputError(f"Value must be a string, provided: {type(value).__name__}")

    digits = []
    for char in value.upper():
        index = SEPA_SCHEME.find(char)
        if index < 0:
            raise InputError(f"Invalid character {char!r} in {value!r}")
        digits.append(str(index))
    return "".join(digits)


def modulo97(digits: str) -> int:
    """Compute digits mod 97 with a running remainder, one digit at a time"""
    remainder = 0
    for char in digits:
        if not char.isdigit() or not char.isascii():
            raise InputError(f"Invalid digit {char!r} in {digits!r}")
        remainder = (remainder * 10 + int(char)) % 97
    return remainder


mod97 = modulo97


def _check_digits(rearranged: str) -> str:
    return f"{98 - modulo97(replace_chars(rearranged)):02d}"


def validate_iban(iban: str) -> bool:
    """True if the IBAN is well-formed and its check digits are correct (no country specific checks)"""
    if not isinstance(iban, str) or not IBAN_PATTERN.match(iban):
        return False
    rearranged = iban[IBAN_PREFIX_LENGTH:] + iban[:IBAN_PREFIX_LENGTH]
    return modulo97(replace_chars(rearranged)) == 1


def checksum_iban(iban: str) -> str:
    """
    Return the IBAN with corrected check digits.

    Example:
        DE00123456781234567890 → DE87123456781234567890
    """
    rearranged = iban[IBAN_PREFIX_LENGTH:] + iban[:2] + "00"
    return iban[:2] + _check_digits(rearranged) + iban[IBAN_PREFIX_LENGTH:]


def validate_creditor_id(creditor_id: str) -> bool:
    """True if the Creditor ID is well-formed and its check digits are correct"""
    if not isinstance(creditor_id, str) or not CREDITOR_ID_PATTERN.match(creditor_id):
        return False
    rearranged = creditor_id[CREDITOR_ID_PREFIX_LENGTH:] + creditor_id[:4]
    return modulo97(replace_chars(rearranged)) == 1


def checksum_creditor_id(creditor_id: str) -> str:
    """
    Return the Creditor ID with corrected check digits.

    The creditor business code (positions 5-7) is not part of the checksum.

    Example:
        DE00ZZZ09999999999 → DE98ZZZ09999999999
    """
    rearranged = creditor_id[CREDITOR_ID_PREFIX_LENGTH:] + creditor_id[:2] + "00"
    return creditor_id[:2] + _check_digits(rearranged) + creditor_id[4:]
