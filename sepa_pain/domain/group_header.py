"""Message-level header: the <GrpHdr> element"""

from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from typing import Optional

from lxml import etree

from sepa_pain.domain.formats import PainFormat, get_pain_format
from sepa_pain.domain.models import OrganisationId
from sepa_pain.domain.sanitizer import IDENTIFIER_MAX_LENGTH, filter_invalid_characters, sanitize
from sepa_pain.infrastructure.xml.builder import XmlBuilder
from sepa_pain.utils.date_utils import to_iso_datetime


def _now() -> datetime:
    return datetime.now().replace(microsecond=0)


@dataclass
class GroupHeader:
    """Header of a pain message; counts and control sum are set by Document.normalize()"""

    pain_format: PainFormat
    id: str = ""
    created: datetime = field(default_factory=_now)
    initiator_name: str = ""
    transaction_count: int = 0
    control_sum: Decimal = Decimal("0")
    batch_booking: bool = True
    grouping: str = "MIXD"
    organisation_id: Optional[OrganisationId] = None

    def __post_init__(self) -> None:
        self.pain_format = get_pain_format(self.pain_format)

    def to_xml(self, builder: XmlBuilder) -> etree._Element:
        fmt = self.pain_format
        grp_hdr = builder.element("GrpHdr")

        builder.required(grp_hdr, "MsgId", sanitize(self.id, IDENTIFIER_MAX_LENGTH))
        builder.required(grp_hdr, "CreDtTm", to_iso_datetime(self.created))

        if fmt.includes_grouping_nodes:
            builder.required(grp_hdr, "BtchBookg", self.batch_booking)

        builder.required(grp_hdr, "NbOfTxs", self.transaction_count)
        builder.required(grp_hdr, "CtrlSum", self.control_sum)

        if fmt.includes_grouping_nodes:
            builder.required(grp_hdr, "Grpg", self.grouping)

        initiating_party = builder.container(grp_hdr, "InitgPty")
        builder.required(initiating_party, "Nm", filter_invalid_characters(self.initiator_name))

        if self.organisation_id is not None:
            organisation = self.organisation_id.sanitized()
            other = builder.container(initiating_party, "Id", "OrgId", "Othr")
            builder.required(other, "Id", organisation.identifier)
            builder.optional(other, "Issr", organisation.issuer)

        return grp_hdr
