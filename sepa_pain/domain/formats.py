"""Supported ISO-20022 pain formats and the XML shape each one implies"""

from dataclasses import dataclass
from enum import Enum
from typing import Dict

from sepa_pain.domain.exceptions import ConfigurationError

DOCUMENT_NAMESPACE_PREFIX = "urn:iso:std:iso:20022:tech:xsd:"
XSI_NAMESPACE = "http://www.w3.org/2001/XMLSchema-instance"
DEFAULT_PAIN_FORMAT = "pain.008.001.02"


class PaymentMethod(str, Enum):
    """PmtMtd code"""

    DIRECT_DEBIT = "DD"
    TRANSFER = "TRF"

    @property
    def transaction_tag(self) -> str:
        return "DrctDbtTxInf" if self is PaymentMethod.DIRECT_DEBIT else "CdtTrfTxInf"


@dataclass(frozen=True)
class PainFormat:
    """Descriptor of one pain message variant"""

    identifier: str
    root_tag: str
    method: PaymentMethod
    structural_version: int

    @property
    def namespace(self) -> str:
        return DOCUMENT_NAMESPACE_PREFIX + self.identifier

    @property
    def schema_location(self) -> str:
        return f"{self.namespace} {self.identifier}.xsd"

    @property
    def is_direct_debit(self) -> bool:
        return self.method is PaymentMethod.DIRECT_DEBIT

    @property
    def includes_grouping_nodes(self) -> bool:
        """GrpHdr carries BtchBookg and Grpg"""
        return self.structural_version == 2

    @property
    def includes_payment_totals(self) -> bool:
        """PmtInf carries BtchBookg, NbOfTxs and CtrlSum"""
        return self.structural_version >= 3

    @property
    def uses_bicfi(self) -> bool:
        return self.structural_version >= 8

    @property
    def dated_execution(self) -> bool:
        """ReqdExctnDt wraps the date in a Dt element"""
        return self.method is PaymentMethod.TRANSFER and self.structural_version >= 8


def _structural_version(identifier: str) -> int:
    # The direct debit family is numbered one behind the transfer family
    increment = 1 if identifier.startswith("pain.008") else 0
    return int(identifier[-2:]) + increment


def _pain_format(identifier: str, root_tag: str) -> PainFormat:
    method = PaymentMethod.TRANSFER if identifier.startswith("pain.001") else PaymentMethod.DIRECT_DEBIT
    return PainFormat(
        identifier=identifier,
        root_tag=root_tag,
        method=method,
        structural_version=_structural_version(identifier),
    )


PAIN_FORMATS: Dict[str, PainFormat] = {
    fmt.identifier: fmt
    for fmt in (
        _pain_format("pain.001.001.02", "pain.001.001.02"),
        _pain_format("pain.001.003.02", "pain.001.003.02"),
        _pain_format("pain.001.001.03", "CstmrCdtTrfInitn"),
        _pain_format("pain.001.003.03", "CstmrCdtTrfInitn"),
        _pain_format("pain.001.001.08", "CstmrCdtTrfInitn"),
        _pain_format("pain.001.001.09", "CstmrCdtTrfInitn"),
        _pain_format("pain.008.001.01", "pain.008.001.01"),
        _pain_format("pain.008.003.01", "pain.008.003.01"),
        _pain_format("pain.008.001.02", "CstmrDrctDbtInitn"),
        _pain_format("pain.008.003.02", "CstmrDrctDbtInitn"),
        _pain_format("pain.008.001.08", "CstmrDrctDbtInitn"),
    )
}


def get_pain_format(pain_format: "str | PainFormat") -> PainFormat:
    """Look up a pain format descriptor; unknown identifiers are a configuration error"""
    if isinstance(pain_format, PainFormat):
        return pain_format
    try:
        return PAIN_FORMATS[pain_format]
    except (KeyError, TypeError) as e:
        raise ConfigurationError(
            f"Unsupported pain format {pain_format!r}, expected one of: {', '.join(PAIN_FORMATS)}"
        ) from e
