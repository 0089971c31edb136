"""Unit tests for element helpers and string fixups"""

from decimal import Decimal
from lxml import etree
from sepa_pain.domain.formats import XSI_NAMESPACE, get_pain_format
from sepa_pain.infrastructure.xml.builder import XmlBuilder
from sepa_pain.infrastructure.xml.serializer import XML_DECLARATION, apply_bank_fixups, serialize


def _builder():
    return XmlBuilder(get_pain_format("pain.008.001.02"))


def test_create_document_declares_namespaces():
    """Test the root carries the default namespace and schema location"""
    builder = _builder()
    root = builder.create_document()

    assert root.tag == "{urn:iso:std:iso:20022:tech:xsd:pain.008.001.02}Document"
    assert root.nsmap[None] == "urn:iso:std:iso:20022:tech:xsd:pain.008.001.02"
    assert root.nsmap["xsi"] == XSI_NAMESPACE
    assert root.get(f"{{{XSI_NAMESPACE}}}schemaLocation").endswith(" pain.008.001.02.xsd")


def test_container_creates_nested_path():
    """Test container returns the innermost element"""
    builder = _builder()
    root = builder.create_document()

    node = builder.container(root, "PmtTpInf", "SvcLvl")

    assert etree.QName(node).localname == "SvcLvl"
    assert etree.QName(node.getparent()).localname == "PmtTpInf"


def test_required_emits_empty_element_for_missing_value():
    """Test required nodes are always present"""
    builder = _builder()
    root = builder.create_document()

    node = builder.required(root, "Nm", "")

    assert node.text is None
    assert len(root) == 1


def test_optional_skips_missing_value():
    """Test optional nodes only appear with a value"""
    builder = _builder()
    root = builder.create_document()

    assert builder.optional(root, "Purp", "Cd", None) is None
    assert builder.optional(root, "Purp", "Cd", "") is None
    assert len(root) == 0

    node = builder.optional(root, "Purp", "Cd", "SALA")
    assert node.text == "SALA"


def test_text_rendering_of_booleans_and_amounts():
    """Test booleans render lowercase and amounts with two decimals"""
    builder = _builder()
    root = builder.create_document()

    assert builder.required(root, "BtchBookg", True).text == "true"
    assert builder.required(root, "AmdmntInd", False).text == "false"
    assert builder.required(root, "CtrlSum", Decimal("50.2")).text == "50.20"
    assert builder.required(root, "NbOfTxs", 3).text == "3"


def test_bank_fixups():
    """Test ampersands, apostrophes, at signs and stray attributes are rewritten"""
    assert apply_bank_fixups("<Nm>A &amp; B</Nm>") == "<Nm>A + B</Nm>"
    assert apply_bank_fixups("<Nm>L'Och</Nm>") == "<Nm>LOch</Nm>"
    assert apply_bank_fixups("<Nm>a@b</Nm>") == "<Nm>ab</Nm>"
    assert apply_bank_fixups("<Document xmlns:xmlns='urn:x'>") == "<Document >"


def test_serialize_prepends_declaration():
    """Test output starts with the UTF-8 declaration and keeps non-ASCII text"""
    builder = _builder()
    root = builder.create_document()
    builder.required(root, "Nm", "Ελληνικά & Co")

    xml = serialize(root)

    assert xml.startswith(XML_DECLARATION)
    assert "<Nm>Ελληνικά + Co</Nm>" in xml
    assert 'xmlns="urn:iso:std:iso:20022:tech:xsd:pain.008.001.02"' in xml
