"""Strip characters outside the SEPA text charset from free-text fields"""

import re
from typing import Optional

# Field length limits
NAME_MAX_LENGTH = 70
ADDRESS_MAX_LENGTH = 70
COUNTRY_MAX_LENGTH = 2
REMITTANCE_MAX_LENGTH = 140
IDENTIFIER_MAX_LENGTH = 35

INVALID_CHARACTERS = re.compile(r"[^A-Za-z0-9 .+?/:(),]")


def filter_invalid_characters(text: Optional[str]) -> Optional[str]:
    """
    Remove (not replace) every character outside A-Z a-z 0-9, space and . + ? / : ( ) ,

    Example:
        "Jean L'Och & Co@" → "Jean LOch  Co"
    """
    if not text:
        return text
    return INVALID_CHARACTERS.sub("", text)


def truncate(text: Optional[str], max_length: int) -> Optional[str]:
    """Cut text to max_length characters, passing None and empty values through"""
    if not text:
        return text
    return text[:max_length]


def sanitize(text: Optional[str], max_length: int) -> Optional[str]:
    """Truncate to the field maximum, then drop disallowed characters"""
    return filter_invalid_characters(truncate(text, max_length))
