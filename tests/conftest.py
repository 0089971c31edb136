"""Pytest fixtures for testing"""

from datetime import date, datetime
from typing import Callable, List, Optional

import pytest
from lxml import etree

from sepa_pain.config import SepaOptions
from sepa_pain.domain.document import Document

# Test creditor identifier published by the Deutsche Bundesbank
CREDITOR_ID = "DE98ZZZ09999999999"
CREDITOR_IBAN = "DE87123456781234567890"
CREDITOR_BIC = "XMPLDEM0XXX"
DEBTOR_IBAN = "DE40987654329876543210"
DEBTOR_BIC = "CUSTDEM0XXX"
CREATED = datetime(2014, 2, 1, 8, 0, 0)


def _document(pain_format: str, options: Optional[SepaOptions]) -> Document:
    doc = Document(pain_format, options=options or SepaOptions())
    doc.group_header.id = "XMPL.20140201.TR0"
    doc.group_header.created = CREATED
    doc.group_header.initiator_name = "Example LLC"
    return doc


@pytest.fixture
def make_direct_debit_document() -> Callable[..., Document]:
    """Factory for a valid direct debit document with one payment info and one transaction"""

    def factory(
        pain_format: str = "pain.008.001.02",
        options: Optional[SepaOptions] = None,
        with_transaction: bool = True,
    ) -> Document:
        doc = _document(pain_format, options)

        info = doc.create_payment_info()
        info.collection_date = date(2014, 2, 10)
        info.creditor.iban = CREDITOR_IBAN
        info.creditor.bic = CREDITOR_BIC
        info.creditor.name = "Example LLC"
        info.creditor.id = CREDITOR_ID
        doc.add_payment_info(info)

        if with_transaction:
            tx = info.create_transaction()
            tx.debtor.name = "Example Customer"
            tx.debtor.iban = DEBTOR_IBAN
            tx.debtor.bic = DEBTOR_BIC
            tx.mandate_id = "XMPL.CUST487.2014"
            tx.mandate_signature_date = date(2014, 2, 1)
            tx.amount = 50.23
            tx.remittance_info = "INVOICE 54"
            tx.end2end_id = "XMPL.CUST487.INVOICE.54"
            info.add_transaction(tx)

        return doc

    return factory


@pytest.fixture
def make_transfer_document() -> Callable[..., Document]:
    """Factory for a valid credit transfer document with one payment info and one transaction"""

    def factory(
        pain_format: str = "pain.001.001.03",
        options: Optional[SepaOptions] = None,
        with_transaction: bool = True,
    ) -> Document:
        doc = _document(pain_format, options)

        info = doc.create_payment_info()
        info.requested_execution_date = date(2014, 2, 10)
        info.debtor.iban = CREDITOR_IBAN
        info.debtor.bic = DEBTOR_BIC
        info.debtor.name = "Example LLC"
        doc.add_payment_info(info)

        if with_transaction:
            tx = info.create_transaction()
            tx.creditor.name = "Example Customer"
            tx.creditor.iban = DEBTOR_IBAN
            tx.creditor.bic = DEBTOR_BIC
            tx.amount = 50.23
            tx.remittance_info = "INVOICE 54"
            tx.end2end_id = "XMPL.CUST487.INVOICE.54"
            info.add_transaction(tx)

        return doc

    return factory


@pytest.fixture
def select() -> Callable[[etree._Element, str], List[etree._Element]]:
    """
    XPath over a built document with the pain namespace bound to "p".

    Usage: select(doc.to_xml(), "/p:Document/p:CstmrDrctDbtInitn/p:GrpHdr/p:NbOfTxs")
    """

    def run(tree: etree._Element, path: str) -> List[etree._Element]:
        return tree.xpath(path, namespaces={"p": etree.QName(tree).namespace})

    return run
