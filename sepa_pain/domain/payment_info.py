"""A batch of transactions sharing method, dates and own party: the <PmtInf> element"""

import logging
from dataclasses import dataclass, field, replace
from datetime import date
from decimal import Decimal
from typing import List, Optional

from lxml import etree

from sepa_pain.config import SepaOptions
from sepa_pain.domain import validators
from sepa_pain.domain.exceptions import StructuralError, ValidationError
from sepa_pain.domain.formats import PainFormat, PaymentMethod, get_pain_format
from sepa_pain.domain.models import Party, PartyRole
from sepa_pain.domain.sanitizer import IDENTIFIER_MAX_LENGTH, sanitize
from sepa_pain.domain.transaction import Transaction
from sepa_pain.infrastructure.observability.logging import log_validation_failure
from sepa_pain.infrastructure.observability.metrics import validation_failure_counter
from sepa_pain.infrastructure.xml.builder import XmlBuilder
from sepa_pain.utils.date_utils import to_iso_date_or_none

logger = logging.getLogger(__name__)

# 'CORE' standard, 'COR1' expedited, 'B2B' business, 'SDCL'/'ONCL' scheme specific
LOCAL_INSTRUMENTS = ("CORE", "COR1", "B2B", "SDCL", "ONCL")
# 'FRST' first, 'RCUR' subsequent, 'OOFF' one off, 'FNAL' final
SEQUENCE_TYPES = ("FRST", "RCUR", "OOFF", "FNAL")
INSTRUCTION_PRIORITIES = ("HIGH", "NORM")


@dataclass
class PaymentInfo:
    """
    Wrapper for the <PmtInf> element.

    The own party is the creditor for direct debits and the debtor for
    transfers; it is resolved once from the pain format and decides which
    Party populates the header-level party node and which one is validated.
    """

    pain_format: PainFormat
    options: SepaOptions = field(default_factory=SepaOptions.from_settings)
    id: str = ""
    batch_booking: bool = True
    control_sum: Decimal = Decimal("0")
    local_instrumentation: str = "CORE"
    sequence_type: str = "FRST"
    collection_date: Optional[date] = None
    requested_execution_date: Optional[date] = None
    creditor: Party = field(default_factory=lambda: Party(PartyRole.CREDITOR))
    debtor: Party = field(default_factory=lambda: Party(PartyRole.DEBTOR))
    instruction_priority: str = "NORM"
    transactions: List[Transaction] = field(default_factory=list)

    def __post_init__(self) -> None:
        self.pain_format = get_pain_format(self.pain_format)
        self.own_role = PartyRole.CREDITOR if self.pain_format.is_direct_debit else PartyRole.DEBTOR

    @property
    def method(self) -> PaymentMethod:
        return self.pain_format.method

    @property
    def own_party(self) -> Party:
        return self.creditor if self.own_role is PartyRole.CREDITOR else self.debtor

    @property
    def transaction_count(self) -> int:
        return len(self.transactions)

    def normalize(self) -> None:
        """Recompute the control sum; amounts are summed regardless of currency"""
        self.control_sum = sum((validators.to_decimal(tx.amount) for tx in self.transactions), Decimal("0"))

    def create_transaction(self) -> Transaction:
        """Factory for a transaction bound to this block's format and options (not yet added)"""
        return Transaction(self.pain_format, options=self.options)

    def add_transaction(self, transaction: Transaction) -> None:
        """Append a transaction, prefixing its id (or its position) with this block's id"""
        if not isinstance(transaction, Transaction):
            raise StructuralError("Given transaction is not a member of the Transaction class")
        if transaction.pain_format != self.pain_format:
            raise StructuralError(
                f"Transaction format {transaction.pain_format.identifier} does not match "
                f"payment info format {self.pain_format.identifier}"
            )

        suffix = transaction.id if transaction.id else str(len(self.transactions))
        transaction.id = f"{self.id}{self.options.id_separator}{suffix}"
        self.transactions.append(transaction)
        logger.debug("Transaction added", extra={"payment_info_id": self.id, "transaction_id": transaction.id})

    def validate(self) -> None:
        """Raise ValidationError on the first failing rule"""
        party = self.own_party

        validators.assert_fixed(self.local_instrumentation, LOCAL_INSTRUMENTS, "localInstrumentation")
        validators.assert_fixed(self.sequence_type, SEQUENCE_TYPES, "sequenceType")
        validators.assert_fixed(self.instruction_priority, INSTRUCTION_PRIORITIES, "instructionPriority")

        if self.method is PaymentMethod.DIRECT_DEBIT:
            validators.assert_date(self.collection_date, "collectionDate")
        else:
            validators.assert_date(self.requested_execution_date, "requestedExecutionDate")

        if self.method is PaymentMethod.DIRECT_DEBIT:
            validators.assert_creditor_id(self.creditor.id, self.creditor.field_name("id"))
        elif party.id:
            validators.assert_creditor_id(party.id, party.field_name("id"))

        validators.assert_iban(party.iban, party.field_name("iban"))
        validators.assert_bic(party.bic, party.field_name("bic"))
        validators.assert_bic_country(party.bic, party.iban, party.field_name("bic"))
        validators.assert_length(party.category_purpose, 1, 4, party.field_name("category_purpose"))
        validators.assert_length(self.id, None, IDENTIFIER_MAX_LENGTH, "id")
        validators.assert_not_empty(self.transactions, "transactions", "must have at least one transaction")

    def to_xml(self, builder: XmlBuilder) -> etree._Element:
        """Validate (unless disabled), sanitize and build the <PmtInf> element including its transactions"""
        if self.options.validations_enabled:
            try:
                self.validate()
            except ValidationError as e:
                validation_failure_counter.labels(entity="payment_info").inc()
                log_validation_failure("payment_info", e.field, self.pain_format.identifier, str(e))
                raise

        return self.sanitized()._build(builder)

    def sanitized(self) -> "PaymentInfo":
        """Copy with id and party names reduced to the SEPA charset; transactions are shared"""
        return replace(
            self,
            id=sanitize(self.id, IDENTIFIER_MAX_LENGTH),
            creditor=self.creditor.sanitized(),
            debtor=self.debtor.sanitized(),
        )

    def _build(self, builder: XmlBuilder) -> etree._Element:
        fmt = self.pain_format
        party = self.own_party
        role = self.own_role
        is_direct_debit = self.method is PaymentMethod.DIRECT_DEBIT

        pmt_inf = builder.element("PmtInf")
        builder.required(pmt_inf, "PmtInfId", self.id)
        builder.required(pmt_inf, "PmtMtd", self.method.value)

        if fmt.includes_payment_totals:
            builder.required(pmt_inf, "BtchBookg", self.batch_booking)
            builder.required(pmt_inf, "NbOfTxs", self.transaction_count)
            builder.required(pmt_inf, "CtrlSum", self.control_sum)

        payment_type = builder.container(pmt_inf, "PmtTpInf")
        if not is_direct_debit:
            builder.required(payment_type, "InstrPrty", self.instruction_priority)
        builder.required(payment_type, "SvcLvl", "Cd", "SEPA")
        if is_direct_debit:
            builder.required(payment_type, "LclInstrm", "Cd", self.local_instrumentation)
            builder.required(payment_type, "SeqTp", self.sequence_type)
        builder.optional(payment_type, "CtgyPurp", "Cd", party.category_purpose)

        if is_direct_debit:
            builder.required(pmt_inf, "ReqdColltnDt", to_iso_date_or_none(self.collection_date))
        elif fmt.dated_execution:
            builder.required(pmt_inf, "ReqdExctnDt", "Dt", to_iso_date_or_none(self.requested_execution_date))
        else:
            builder.required(pmt_inf, "ReqdExctnDt", to_iso_date_or_none(self.requested_execution_date))

        emitter = builder.container(pmt_inf, role.value)
        builder.required(emitter, "Nm", party.name)
        if party.has_postal_address:
            postal_address = builder.container(emitter, "PstlAdr")
            builder.required(postal_address, "Ctry", party.country)
            builder.required(postal_address, "AdrLine", party.street)
            builder.required(postal_address, "AdrLine", party.city)
        if not is_direct_debit:
            builder.optional(emitter, "Id", "OrgId", "Othr", "Id", party.id)

        builder.required(pmt_inf, role.account_tag, "Id", "IBAN", party.iban)

        if party.bic:
            institution = builder.container(pmt_inf, role.agent_tag, "FinInstnId")
            builder.required(institution, "BICFI" if fmt.uses_bicfi else "BIC", party.bic)
            builder.optional(institution, "ClrSysMmbId", "MmbId", party.member_id)
        else:
            builder.required(pmt_inf, role.agent_tag, "FinInstnId", "Othr", "Id", "NOTPROVIDED")

        builder.required(pmt_inf, "ChrgBr", "SLEV")

        if is_direct_debit:
            scheme = builder.container(pmt_inf, "CdtrSchmeId", "Id", "PrvtId", "Othr")
            builder.required(scheme, "Id", self.creditor.id)
            builder.required(scheme, "SchmeNm", "Prtry", "SEPA")

        for transaction in self.transactions:
            pmt_inf.append(transaction.to_xml(builder))

        return pmt_inf

