"""One payment leg: a <DrctDbtTxInf> or <CdtTrfTxInf> element"""

from dataclasses import dataclass, field, replace
from datetime import date
from decimal import Decimal
from typing import Optional, Union

from lxml import etree

from sepa_pain.config import SepaOptions
from sepa_pain.domain import validators
from sepa_pain.domain.exceptions import ValidationError
from sepa_pain.domain.formats import PainFormat, get_pain_format
from sepa_pain.domain.models import Amendment, Party, PartyRole, StructuredRemittanceInfo
from sepa_pain.domain.sanitizer import IDENTIFIER_MAX_LENGTH, REMITTANCE_MAX_LENGTH, sanitize
from sepa_pain.infrastructure.observability.logging import log_validation_failure
from sepa_pain.infrastructure.observability.metrics import validation_failure_counter
from sepa_pain.infrastructure.xml.builder import XmlBuilder
from sepa_pain.utils.date_utils import to_iso_date_or_none

Amount = Union[Decimal, int, float, str]

NOT_PROVIDED = "NOTPROVIDED"


@dataclass
class Transaction:
    """
    A single payment between the payment info's own party and another party.

    For direct debits the other party is the debtor, for transfers it is the
    creditor. Use PaymentInfo.create_transaction() to get one bound to the
    right pain format and options.
    """

    pain_format: PainFormat
    options: SepaOptions = field(default_factory=SepaOptions.from_settings)
    id: str = ""
    end2end_id: str = NOT_PROVIDED
    currency: str = "EUR"
    amount: Amount = Decimal("0")
    purpose_code: Optional[str] = None
    mandate_id: str = ""
    mandate_signature_date: Optional[date] = None
    amendment: Optional[Amendment] = None
    creditor: Party = field(default_factory=lambda: Party(PartyRole.CREDITOR))
    debtor: Party = field(default_factory=lambda: Party(PartyRole.DEBTOR))
    remittance_info: str = ""
    structured_remittance_info: Optional[StructuredRemittanceInfo] = None

    def __post_init__(self) -> None:
        self.pain_format = get_pain_format(self.pain_format)
        self.other_role = PartyRole.DEBTOR if self.pain_format.is_direct_debit else PartyRole.CREDITOR

    @property
    def other_party(self) -> Party:
        return self.debtor if self.other_role is PartyRole.DEBTOR else self.creditor

    def validate(self) -> None:
        """Raise ValidationError on the first failing rule"""
        check_charset = self.options.charset_checks
        party = self.other_party

        validators.assert_identifier(self.end2end_id, "end2endId", charset=1, check_charset=check_charset)
        validators.assert_amount(self.amount)
        validators.assert_currency(self.currency)
        validators.assert_length(self.purpose_code, 1, 4, "purposeCode")

        if self.pain_format.is_direct_debit:
            validators.assert_identifier(self.mandate_id, "mandateId", charset=2, check_charset=check_charset)
            validators.assert_date(self.mandate_signature_date, "mandateSignatureDate")
            if self.amendment and self.amendment.original_mandate_id:
                validators.assert_identifier(
                    self.amendment.original_mandate_id,
                    "originalMandateId",
                    charset=2,
                    check_charset=check_charset,
                )
            if self.amendment and self.amendment.original_creditor_id:
                validators.assert_creditor_id(self.amendment.original_creditor_id, "originalCreditorId")
            if self.amendment and self.amendment.original_debtor_iban:
                validators.assert_iban(self.amendment.original_debtor_iban, "originalDebtorIBAN")

        validators.assert_iban(party.iban, party.field_name("iban"))
        validators.assert_bic(party.bic, party.field_name("bic"))
        validators.assert_bic_country(party.bic, party.iban, party.field_name("bic"))

    def sanitized(self) -> "Transaction":
        """Copy with identifiers and free text reduced to the SEPA charset and field lengths"""
        copy = replace(
            self,
            id=sanitize(self.id, IDENTIFIER_MAX_LENGTH),
            end2end_id=sanitize(self.end2end_id, IDENTIFIER_MAX_LENGTH) or NOT_PROVIDED,
            mandate_id=sanitize(self.mandate_id, IDENTIFIER_MAX_LENGTH),
            remittance_info=sanitize(self.remittance_info, REMITTANCE_MAX_LENGTH),
            creditor=self.creditor.sanitized(),
            debtor=self.debtor.sanitized(),
            amendment=self.amendment.sanitized() if self.amendment else None,
            structured_remittance_info=(
                self.structured_remittance_info.sanitized() if self.structured_remittance_info else None
            ),
        )
        return copy

    def to_xml(self, builder: XmlBuilder) -> etree._Element:
        """Validate (unless disabled), sanitize and build the transaction element"""
        if self.options.validations_enabled:
            try:
                self.validate()
            except ValidationError as e:
                validation_failure_counter.labels(entity="transaction").inc()
                log_validation_failure("transaction", e.field, self.pain_format.identifier, str(e))
                raise

        return self.sanitized()._build(builder)

    def _build(self, builder: XmlBuilder) -> etree._Element:
        fmt = self.pain_format
        party = self.other_party
        role = self.other_role
        amount = validators.to_decimal(self.amount)

        tx_inf = builder.element(fmt.method.transaction_tag)

        payment_id = builder.container(tx_inf, "PmtId")
        builder.required(payment_id, "InstrId", self.id)
        builder.required(payment_id, "EndToEndId", self.end2end_id)

        if fmt.is_direct_debit:
            builder.required(tx_inf, "InstdAmt", amount).set("Ccy", self.currency)

            mandate = builder.container(tx_inf, "DrctDbtTx", "MndtRltdInf")
            builder.required(mandate, "MndtId", self.mandate_id)
            builder.required(mandate, "DtOfSgntr", to_iso_date_or_none(self.mandate_signature_date))
            builder.required(mandate, "AmdmntInd", self.amendment is not None)
            if self.amendment is not None:
                self._build_amendment(builder, mandate)
        else:
            builder.required(tx_inf, "Amt", "InstdAmt", amount).set("Ccy", self.currency)

        if party.bic:
            builder.required(tx_inf, role.agent_tag, "FinInstnId", "BICFI" if fmt.uses_bicfi else "BIC", party.bic)
        else:
            builder.required(tx_inf, role.agent_tag, "FinInstnId", "Othr", "Id", NOT_PROVIDED)

        receiver = builder.container(tx_inf, role.value)
        builder.required(receiver, "Nm", party.name)
        if party.has_postal_address:
            postal_address = builder.container(receiver, "PstlAdr")
            builder.required(postal_address, "Ctry", party.country)
            builder.required(postal_address, "AdrLine", party.street)
            builder.required(postal_address, "AdrLine", party.city)

        builder.required(tx_inf, role.account_tag, "Id", "IBAN", party.iban)

        builder.optional(tx_inf, "Purp", "Cd", self.purpose_code)

        if self.structured_remittance_info is not None:
            info = self.structured_remittance_info
            reference = builder.container(tx_inf, "RmtInf", "Strd", "CdtrRefInf")
            reference_type = builder.container(reference, "Tp")
            builder.required(reference_type, "CdOrPrtry", "Cd", info.type_code)
            builder.optional(reference_type, "Issr", info.issuer)
            builder.required(reference, "Ref", info.reference)
        else:
            builder.required(tx_inf, "RmtInf", "Ustrd", self.remittance_info)

        return tx_inf

    def _build_amendment(self, builder: XmlBuilder, mandate: etree._Element) -> None:
        amendment = self.amendment
        details = builder.container(mandate, "AmdmntInfDtls")
        builder.optional(details, "OrgnlMndtId", amendment.original_mandate_id)
        if amendment.original_creditor_id or amendment.original_creditor_name:
            scheme = builder.container(details, "OrgnlCdtrSchmeId")
            builder.optional(scheme, "Nm", amendment.original_creditor_name)
            if amendment.original_creditor_id:
                other = builder.container(scheme, "Id", "PrvtId", "Othr")
                builder.required(other, "Id", amendment.original_creditor_id)
                builder.required(other, "SchmeNm", "Prtry", "SEPA")
        builder.optional(details, "OrgnlDbtrAcct", "Id", "IBAN", amendment.original_debtor_iban)
