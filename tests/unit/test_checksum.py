"""Unit tests for IBAN and Creditor ID check digits"""

import pytest
from sepa_pain.domain.checksum import (
    checksum_creditor_id,
    checksum_iban,
    modulo97,
    replace_chars,
    validate_creditor_id,
    validate_iban,
)
from sepa_pain.domain.exceptions import InputError

VALID_IBANS = [
    "NL30ABNA8727958558",
    "DE64500105171488962235",
    "CH6389144234422115817",
    "FR0617569000706665685358G36",
    "FR7630006000011234567890189",
    "IT60X0542811101000000123456",
    "DE75512108001245126199",
    "DE43500105178994141576",
    "DE87123456781234567890",
]


def test_replace_chars_maps_letters_case_insensitively():
    """Test letters map to A=10 ... Z=35 regardless of case"""
    assert replace_chars("FR") == "1527"
    assert replace_chars("It") == "1829"
    assert replace_chars("de") == "1314"
    assert replace_chars("Es") == "1428"


def test_replace_chars_keeps_digits():
    """Test digits pass through unchanged"""
    assert replace_chars("FR7630006000011234567890189") == "15277630006000011234567890189"


@pytest.mark.parametrize("value", ["DE-1", "FR 76", "Ö1"])
def test_replace_chars_rejects_foreign_characters(value):
    """Test non alphanumeric characters raise instead of being skipped"""
    with pytest.raises(InputError):
        replace_chars(value)


def test_replace_chars_requires_string():
    """Test non string input is an input error"""
    with pytest.raises(InputError):
        replace_chars(None)


def test_modulo97_known_values():
    """Test digit-by-digit remainder for short and long inputs"""
    assert modulo97("4815163342") == 19
    assert modulo97("28041992") == 68
    assert modulo97("88512108001245126199") == 49
    assert modulo97("2") == 2


def test_modulo97_matches_integer_arithmetic():
    """Test running remainder equals Python big-int modulo"""
    digits = "131400123456781234567890"
    assert modulo97(digits) == int(digits) % 97


def test_modulo97_rejects_non_digits():
    """Test letters must be replaced before computing the remainder"""
    with pytest.raises(InputError):
        modulo97("12A4")


@pytest.mark.parametrize("iban", VALID_IBANS)
def test_validate_iban_accepts_valid(iban):
    """Test well known valid IBANs"""
    assert validate_iban(iban) is True


@pytest.mark.parametrize(
    "iban",
    [
        "DE54500105171488962235",  # wrong check digits
        "FR7630006011011234567890189",  # altered account number
        "nl30ABNA8727958558",  # lowercase country code
        "santander",
        "",
        None,
    ],
)
def test_validate_iban_rejects_invalid(iban):
    """Test wrong checksums and malformed values"""
    assert validate_iban(iban) is False


@pytest.mark.parametrize("iban", ["DE64500105171488962235", "IT60X0542811101000000123456"])
def test_validate_iban_detects_single_digit_substitution(iban):
    """Test every one-digit change after the country code is caught"""
    for position in range(2, len(iban)):
        if not iban[position].isdigit():
            continue
        for digit in "0123456789":
            if digit == iban[position]:
                continue
            altered = iban[:position] + digit + iban[position + 1 :]
            assert validate_iban(altered) is False, altered


def test_checksum_iban_corrects_check_digits():
    """Test recomputing check digits of IBANs with placeholder digits"""
    assert checksum_iban("FR8830006000011234567890189") == "FR7630006000011234567890189"
    assert checksum_iban("IT88X0542811101000000123456") == "IT60X0542811101000000123456"
    assert checksum_iban("DE88512108001245126199") == "DE75512108001245126199"


@pytest.mark.parametrize("iban", VALID_IBANS)
@pytest.mark.parametrize("placeholder", ["00", "42", "99"])
def test_checksum_iban_output_always_validates(iban, placeholder):
    """Test checksum ignores the existing check digits"""
    broken = iban[:2] + placeholder + iban[4:]
    fixed = checksum_iban(broken)

    assert fixed == iban
    assert validate_iban(fixed) is True


@pytest.mark.parametrize(
    "creditor_id",
    ["DE98ZZZ09999999999", "FR72ZZZ123456", "FI22ZZZ12345678"],
)
def test_validate_creditor_id_accepts_valid(creditor_id):
    """Test well known valid creditor identifiers"""
    assert validate_creditor_id(creditor_id) is True


@pytest.mark.parametrize("creditor_id", ["FR88ZZZ123456", "DE00ZZZ09999999999", "de98ZZZ09999999999", "", None])
def test_validate_creditor_id_rejects_invalid(creditor_id):
    """Test wrong check digits and malformed values"""
    assert validate_creditor_id(creditor_id) is False


def test_validate_creditor_id_ignores_business_code():
    """Test positions 5-7 are not part of the checksum"""
    assert validate_creditor_id("DE98ABC09999999999") is True


def test_checksum_creditor_id_corrects_check_digits():
    """Test recomputing check digits of creditor identifiers"""
    assert checksum_creditor_id("FR88ZZZ123456") == "FR72ZZZ123456"
    assert checksum_creditor_id("FI88ZZZ12345678") == "FI22ZZZ12345678"
    assert checksum_creditor_id("DE00ZZZ09999999999") == "DE98ZZZ09999999999"
