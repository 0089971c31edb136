"""Domain models - value records shared by the payment entities"""

from dataclasses import dataclass, replace
from enum import Enum
from typing import Optional

from sepa_pain.domain.sanitizer import (
    ADDRESS_MAX_LENGTH,
    COUNTRY_MAX_LENGTH,
    IDENTIFIER_MAX_LENGTH,
    NAME_MAX_LENGTH,
    filter_invalid_characters,
    sanitize,
    truncate,
)


class PartyRole(str, Enum):
    """Which side of the payment a party stands on; the value is the XML tag stem"""

    CREDITOR = "Cdtr"
    DEBTOR = "Dbtr"

    @property
    def account_tag(self) -> str:
        return f"{self.value}Acct"

    @property
    def agent_tag(self) -> str:
        return f"{self.value}Agt"

    @property
    def field_prefix(self) -> str:
        return "creditor" if self is PartyRole.CREDITOR else "debtor"


@dataclass
class Party:
    """Name, address and bank account of a creditor or debtor"""

    role: PartyRole
    name: str = ""
    street: Optional[str] = None
    city: Optional[str] = None
    country: Optional[str] = None
    iban: str = ""
    bic: str = ""
    id: Optional[str] = None  # creditor identifier or organisation id
    category_purpose: Optional[str] = None
    member_id: Optional[str] = None  # clearing system member id, e.g. Italian ABI

    def field_name(self, attribute: str) -> str:
        """Diagnostic name such as "debtorIBAN" for error messages"""
        suffix = {"iban": "IBAN", "bic": "BIC", "id": "Id"}.get(attribute, attribute.replace("_", " ").title().replace(" ", ""))
        return self.role.field_prefix + suffix

    @property
    def has_postal_address(self) -> bool:
        return bool(self.street and self.city and self.country)

    def sanitized(self) -> "Party":
        """Copy with names and address cut to their maximum length and stripped of disallowed characters"""
        return replace(
            self,
            name=sanitize(self.name, NAME_MAX_LENGTH),
            street=sanitize(self.street, ADDRESS_MAX_LENGTH),
            city=sanitize(self.city, ADDRESS_MAX_LENGTH),
            country=truncate(self.country, COUNTRY_MAX_LENGTH),
        )


@dataclass
class Amendment:
    """Mandate amendment details; presence sets AmdmntInd to true"""

    original_mandate_id: Optional[str] = None
    original_creditor_id: Optional[str] = None
    original_creditor_name: Optional[str] = None
    original_debtor_iban: Optional[str] = None

    def sanitized(self) -> "Amendment":
        return replace(
            self,
            original_mandate_id=sanitize(self.original_mandate_id, IDENTIFIER_MAX_LENGTH),
            original_creditor_name=sanitize(self.original_creditor_name, NAME_MAX_LENGTH),
        )


@dataclass
class StructuredRemittanceInfo:
    """Creditor reference, e.g. an ISO 11649 RF reference"""

    reference: str
    type_code: str = "SCOR"
    issuer: Optional[str] = None

    def sanitized(self) -> "StructuredRemittanceInfo":
        return replace(
            self,
            reference=sanitize(self.reference, IDENTIFIER_MAX_LENGTH),
            issuer=sanitize(self.issuer, IDENTIFIER_MAX_LENGTH),
        )


@dataclass
class OrganisationId:
    """Initiating party organisation identifier (Italian CUC, Spanish CIF, ...)"""

    identifier: str
    issuer: Optional[str] = None

    def sanitized(self) -> "OrganisationId":
        return replace(
            self,
            identifier=filter_invalid_characters(self.identifier),
            issuer=filter_invalid_characters(self.issuer),
        )
