"""
Serialize a document tree to text and apply bank compatibility fixups.

The fixups run on the final string, not on the tree. Some bank-side parsers
mishandle escaped ampersands, apostrophes and "@", and some consumers reject
files without an explicit XML declaration.
"""

import re

from lxml import etree

XML_VERSION = "1.0"
XML_ENCODING = "UTF-8"
XML_DECLARATION = f'<?xml version="{XML_VERSION}" encoding="{XML_ENCODING}"?>'

# Bare namespace-like attribute remnants such as xmlns:xmlns='...'
STRAY_ATTRIBUTE = re.compile(r"[\w:]*='[^']*'", re.ASCII)


def apply_bank_fixups(text: str) -> str:
    """
    Rewrite serialized XML for bank parsers.

    - drop single-quoted attribute remnants
    - "&amp;" becomes "+" (EPC best practice for the SEPA character set)
    - apostrophes and "@" are removed
    """
    text = STRAY_ATTRIBUTE.sub("", text)
    text = text.replace("&amp;", "+")
    text = text.replace("'", "")
    return text.replace("@", "")


def serialize(root: etree._Element) -> str:
    """Declaration + serialized tree + fixups"""
    body = etree.tostring(root, encoding="unicode")
    return apply_bank_fixups(XML_DECLARATION + body)
