"""
Field validation rules for pain documents.

Every assertion raises ValidationError carrying the field name and the
offending value. Empty values pass the length checks; required-ness is
asserted separately where a field is mandatory.
"""

import re
from decimal import Decimal, InvalidOperation
from typing import Any, Iterable, Optional, Sequence

from sepa_pain.domain.checksum import validate_creditor_id, validate_iban
from sepa_pain.domain.exceptions import ValidationError
from sepa_pain.domain.sanitizer import IDENTIFIER_MAX_LENGTH
from sepa_pain.utils.date_utils import parse_date

SEPA_ID_SET1 = re.compile(r"^[A-Za-z0-9+?/\-:().,' ]{1,35}$")
SEPA_ID_SET2 = re.compile(r"^[A-Za-z0-9+?/\-:().,']{1,35}$")
CURRENCY_PATTERN = re.compile(r"^[A-Z]{3}$")

MIN_AMOUNT = Decimal("0.01")
MAX_AMOUNT = Decimal("999999999.99")
CENT = Decimal("0.01")

BIC_LENGTHS = (0, 8, 11)


def assert_condition(condition: Any, field: str, value: Any, message: str) -> None:
    """Raise with message unless condition is truthy"""
    if not condition:
        raise ValidationError(field, value, message)


def assert_fixed(value: Any, choices: Sequence[Any], field: str) -> None:
    """Value must be one of choices"""
    if value not in choices:
        raise ValidationError(
            field,
            value,
            f"{field} must have any value of: {' '.join(str(c) for c in choices)} (found: {value})",
        )


def assert_length(value: Optional[Any], minimum: Optional[int], maximum: Optional[int], field: str) -> None:
    """Length of value must be within [minimum, maximum]; either bound may be None"""
    if not value:
        return
    length = len(value)
    if (minimum is not None and length < minimum) or (maximum is not None and length > maximum):
        raise ValidationError(
            field,
            value,
            f"{field} has invalid string length, expected {minimum} <= len({value!r}) <= {maximum}",
        )


def assert_range(number: Any, minimum: Any, maximum: Any, field: str) -> None:
    """Number must be within [minimum, maximum]"""
    if number < minimum or number > maximum:
        raise ValidationError(field, number, f"{field} does not match range {minimum} <= {number} <= {maximum}")


def assert_iban(iban: Any, field: str) -> None:
    if not validate_iban(iban):
        raise ValidationError(field, iban, f'{field} has invalid IBAN "{iban}"')


def assert_creditor_id(creditor_id: Any, field: str) -> None:
    if not validate_creditor_id(creditor_id):
        raise ValidationError(field, creditor_id, f'{field} is invalid "{creditor_id}"')


def assert_date(value: Any, field: str) -> None:
    """Value must resolve to a real calendar date"""
    try:
        parse_date(value)
    except (TypeError, ValueError) as e:
        raise ValidationError(field, value, f"{field} has invalid date {value!r}") from e


def _assert_slashes(sepa_id: str, field: str) -> None:
    if sepa_id.startswith("/") or "//" in sepa_id:
        raise ValidationError(field, sepa_id, f'{field} must not start with "/" or contain "//" (found: "{sepa_id}")')


def assert_sepa_id_set1(sepa_id: Any, field: str) -> None:
    """Identifier charset 1: A-Z a-z 0-9, space and + ? / - : ( ) . , ' (1 to 35 characters)"""
    if not isinstance(sepa_id, str) or not SEPA_ID_SET1.match(sepa_id):
        raise ValidationError(field, sepa_id, f"{field} doesn't match sepa id charset type 1 (found: \"{sepa_id}\")")
    _assert_slashes(sepa_id, field)


def assert_sepa_id_set2(sepa_id: Any, field: str) -> None:
    """Identifier charset 2: same as charset 1 without the space"""
    if not isinstance(sepa_id, str) or not SEPA_ID_SET2.match(sepa_id):
        raise ValidationError(field, sepa_id, f"{field} doesn't match sepa id charset type 2 (found: \"{sepa_id}\")")
    _assert_slashes(sepa_id, field)


def assert_identifier(sepa_id: Any, field: str, charset: int, check_charset: bool = True) -> None:
    """
    Validate a SEPA identifier.

    With check_charset disabled only the structural rules remain: a string of
    at most 35 characters.
    """
    if check_charset:
        if charset == 1:
            assert_sepa_id_set1(sepa_id, field)
        else:
            assert_sepa_id_set2(sepa_id, field)
        return
    if not isinstance(sepa_id, str):
        raise ValidationError(field, sepa_id, f"{field} must be a string (found: {sepa_id!r})")
    assert_length(sepa_id, None, IDENTIFIER_MAX_LENGTH, field)


def to_decimal(amount: Any, field: str = "amount") -> Decimal:
    """Convert int, float, str or Decimal to Decimal without binary float noise"""
    if isinstance(amount, bool):
        raise ValidationError(field, amount, f"{field} is not a number")
    try:
        value = amount if isinstance(amount, Decimal) else Decimal(str(amount))
    except (InvalidOperation, TypeError, ValueError) as e:
        raise ValidationError(field, amount, f"{field} is not a number") from e
    if not value.is_finite():
        raise ValidationError(field, amount, f"{field} is not a number")
    return value


def assert_amount(amount: Any, field: str = "amount") -> Decimal:
    """Amount must be a number in [0.01, 999999999.99] with at most two fraction digits"""
    value = to_decimal(amount, field)
    assert_range(value, MIN_AMOUNT, MAX_AMOUNT, field)
    if value != value.quantize(CENT):
        raise ValidationError(field, amount, f"{field} has too many fractional digits")
    return value


def assert_currency(currency: Any, field: str = "currency") -> None:
    """ISO 4217 alphabetic code"""
    if not isinstance(currency, str) or not CURRENCY_PATTERN.match(currency):
        raise ValidationError(field, currency, f"{field} is not an ISO 4217 currency code (found: {currency!r})")


def assert_bic(bic: Optional[str], field: str) -> None:
    """BIC is empty, 8 or 11 characters"""
    assert_fixed(len(bic or ""), BIC_LENGTHS, field)


def assert_bic_country(bic: Optional[str], iban: Optional[str], field: str) -> None:
    """The BIC's country code (characters 5-6) must match the IBAN's country prefix"""
    if not bic:
        return
    if bic[4:6] != (iban or "")[:2]:
        raise ValidationError(field, bic, f"country mismatch in BIC/IBAN ({bic} / {iban})")


def assert_not_empty(items: Iterable[Any], field: str, message: str) -> None:
    if not list(items):
        raise ValidationError(field, items, message)
