"""Country-specific extension fields (Italy CUC/ABI, Spain CIF)"""

from sepa_pain.domain.exceptions import ValidationError
from sepa_pain.domain.models import OrganisationId

# CBI issues the Italian CUC (Codice Unico CBI)
ITALIAN_CUC_ISSUER = "CBI"


def italian_cuc(cuc_number: str) -> OrganisationId:
    """Initiating party id for Italian CBI files, emitted with <Issr>CBI</Issr>"""
    return OrganisationId(identifier=cuc_number, issuer=ITALIAN_CUC_ISSUER)


def spanish_cif(cif_number: str) -> OrganisationId:
    """Initiating party id for Spanish files (Código de Identificación Fiscal)"""
    return OrganisationId(identifier=cif_number)


def extract_abi_code_from_iban(iban: str) -> str:
    """
    Return the ABI bank code of an Italian IBAN.

    Layout: IT + 2 check digits + 1 CIN letter + 5 ABI + 5 CAB + 12 account.

    Example:
        IT89N0326801607052353778761 → 03268
    """
    if not isinstance(iban, str) or not iban.startswith("IT") or len(iban) < 10:
        raise ValidationError("iban", iban, f"{iban!r} is not an Italian IBAN")
    return iban[5:10]
