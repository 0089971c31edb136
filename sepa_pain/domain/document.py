"""The pain document aggregate: one group header and an ordered list of payment info blocks"""

import logging
import time
from decimal import Decimal
from typing import List, Optional

from lxml import etree

from sepa_pain.config import SepaOptions, settings
from sepa_pain.domain.exceptions import StructuralError
from sepa_pain.domain.formats import PainFormat, get_pain_format
from sepa_pain.domain.group_header import GroupHeader
from sepa_pain.domain.payment_info import PaymentInfo
from sepa_pain.infrastructure.observability.logging import log_document_serialized
from sepa_pain.infrastructure.observability.metrics import record_document, serialization_duration_histogram
from sepa_pain.infrastructure.xml.builder import XmlBuilder
from sepa_pain.infrastructure.xml.serializer import serialize

logger = logging.getLogger(__name__)


class Document:
    """
    A SEPA credit transfer or direct debit initiation message.

    Usage:
        doc = Document("pain.008.001.02")
        doc.group_header.id = "XMPL.20140201.TR0"
        doc.group_header.initiator_name = "Example LLC"

        info = doc.create_payment_info()
        ...
        doc.add_payment_info(info)

        tx = info.create_transaction()
        ...
        info.add_transaction(tx)

        xml = doc.to_string()

    Add a payment info block to the document before adding transactions to
    it: ids are composed from the parent id at the time a child is added.
    """

    def __init__(self, pain_format: "str | PainFormat | None" = None, options: Optional[SepaOptions] = None):
        self.pain_format = get_pain_format(pain_format or settings.default_pain_format)
        self.options = options or SepaOptions.from_settings()
        self.group_header = GroupHeader(self.pain_format)
        self.payment_infos: List[PaymentInfo] = []

    @property
    def root_tag(self) -> str:
        return self.pain_format.root_tag

    def add_payment_info(self, payment_info: PaymentInfo) -> None:
        """Append a payment info block, prefixing its id (or its position) with the group header id"""
        if not isinstance(payment_info, PaymentInfo):
            raise StructuralError("Given payment is not a member of the PaymentInfo class")
        if payment_info.pain_format != self.pain_format:
            raise StructuralError(
                f"Payment info format {payment_info.pain_format.identifier} does not match "
                f"document format {self.pain_format.identifier}"
            )

        suffix = payment_info.id if payment_info.id else str(len(self.payment_infos))
        payment_info.id = f"{self.group_header.id}{self.options.id_separator}{suffix}"
        self.payment_infos.append(payment_info)
        logger.debug("Payment info added", extra={"payment_info_id": payment_info.id})

    def create_payment_info(self) -> PaymentInfo:
        """Factory for a payment info block bound to this document's format and options (not yet added)"""
        return PaymentInfo(self.pain_format, options=self.options)

    def normalize(self) -> None:
        """Recompute control sums and transaction counts bottom-up; called by to_xml()"""
        control_sum = Decimal("0")
        transaction_count = 0
        for payment_info in self.payment_infos:
            payment_info.normalize()
            control_sum += payment_info.control_sum
            transaction_count += payment_info.transaction_count
        self.group_header.control_sum = control_sum
        self.group_header.transaction_count = transaction_count

    def to_xml(self) -> etree._Element:
        """Normalize and build the <Document> element tree"""
        self.normalize()

        builder = XmlBuilder(self.pain_format)
        document = builder.create_document()
        root = builder.container(document, self.root_tag)
        root.append(self.group_header.to_xml(builder))
        for payment_info in self.payment_infos:
            root.append(payment_info.to_xml(builder))
        return document

    def to_string(self) -> str:
        """Serialize to XML text with declaration and bank compatibility fixups"""
        start_time = time.time()

        with serialization_duration_histogram.time():
            xml = serialize(self.to_xml())

        duration_ms = (time.time() - start_time) * 1000
        record_document(self.pain_format.identifier, self.pain_format.method.value, self.group_header.transaction_count)
        log_document_serialized(
            message_id=self.group_header.id,
            pain_format=self.pain_format.identifier,
            payment_info_count=len(self.payment_infos),
            transaction_count=self.group_header.transaction_count,
            control_sum=f"{self.group_header.control_sum:.2f}",
            duration_ms=duration_ms,
        )
        return xml

    def __str__(self) -> str:
        return self.to_string()
