"""Namespaced element helpers over lxml"""

from decimal import Decimal
from typing import Any, Optional

from lxml import etree

from sepa_pain.domain.formats import XSI_NAMESPACE, PainFormat


def _text(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, Decimal):
        return f"{value:.2f}"
    return str(value)


class XmlBuilder:
    """
    Creates elements in the document namespace of one pain format.

    Three helpers cover every node the entities emit. Each takes the parent
    element followed by a path of tag names and returns the innermost element:

        container(pmt_inf, "PmtTpInf", "SvcLvl")     # <PmtTpInf><SvcLvl/></PmtTpInf>
        required(pmt_inf, "ChrgBr", "SLEV")          # always added, text may be empty
        optional(tx_inf, "Purp", "Cd", purpose)      # skipped when the value is empty
    """

    def __init__(self, pain_format: PainFormat):
        self.pain_format = pain_format
        self.namespace = pain_format.namespace

    def qname(self, tag: str) -> str:
        return f"{{{self.namespace}}}{tag}"

    def create_document(self) -> etree._Element:
        """Root <Document> with default namespace and schema location"""
        root = etree.Element(self.qname("Document"), nsmap={None: self.namespace, "xsi": XSI_NAMESPACE})
        root.set(f"{{{XSI_NAMESPACE}}}schemaLocation", self.pain_format.schema_location)
        return root

    def element(self, tag: str) -> etree._Element:
        """Detached element, attached later by the caller"""
        return etree.Element(self.qname(tag))

    def container(self, parent: etree._Element, *path: str) -> etree._Element:
        node = parent
        for tag in path:
            node = etree.SubElement(node, self.qname(tag))
        return node

    def required(self, parent: etree._Element, *path_and_value: Any) -> etree._Element:
        *path, value = path_and_value
        node = self.container(parent, *path)
        if value is not None and value != "":
            node.text = _text(value)
        return node

    def optional(self, parent: etree._Element, *path_and_value: Any) -> Optional[etree._Element]:
        value = path_and_value[-1]
        if value is None or value == "":
            return None
        return self.required(parent, *path_and_value)
