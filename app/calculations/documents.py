"""
Document Checklist

Rule-based list of the paperwork a buyer needs to gather for a purchase,
driven by who is buying (employment, nationality, residence) and how
(mortgage, off-plan or ready property).
"""

import enum
from typing import Optional, Tuple
from dataclasses import dataclass

from app.calculations.errors import InvalidInputError


class BuyerType(str, enum.Enum):
    salaried = "salaried"
    self_employed = "self_employed"
    investor = "investor"
    other = "other"


class ResidenceStatus(str, enum.Enum):
    uae_resident = "uae_resident"
    non_resident = "non_resident"


LOCAL_NATIONALITY = "UAE"

INCOME_PROOF_DOCUMENTS = {
    BuyerType.salaried: (
        "Salary certificate (less than 1 month old)",
        "Last 6 months bank statements showing salary credits",
        "Employment contract",
        "Labor contract from Ministry of Labor (if applicable)",
    ),
    BuyerType.self_employed: (
        "Trade license copy",
        "Memorandum of Association",
        "Last 2 years audited financial statements",
        "Last 6 months personal and company bank statements",
        "Proof of business ownership",
    ),
    BuyerType.investor: (
        "Proof of investments (shares, bonds, etc.)",
        "Last 6 months investment account statements",
        "Last 6 months personal bank statements",
    ),
    BuyerType.other: (
        "Proof of income",
        "Last 6 months bank statements",
    ),
}

OFF_PLAN_DOCUMENTS = (
    "Sale and Purchase Agreement (SPA)",
    "Reservation form",
    "Developer payment plan",
    "Proof of payments made to developer",
    "OQOOD pre-registration receipt",
)

READY_PROPERTY_DOCUMENTS = (
    "Title deed copy (if available)",
    "DEWA connection proof",
    "Service charge payment receipts",
    "NOC from developer for resale",
    "Property layout/floor plan",
)

MORTGAGE_DOCUMENTS = (
    "Mortgage application form",
    "Mortgage pre-approval letter",
    "Life insurance application",
    "Property insurance application",
)

# Bank code -> name used on its forms
BANK_NAMES = {
    "EMIRATES_NBD": "Emirates NBD",
    "ADCB": "ADCB",
    "DIB": "DIB",
    "MASHREQ": "Mashreq",
}


@dataclass(frozen=True)
class BuyerProfile:
    """Who is buying and how the purchase is structured."""

    buyer_type: str
    nationality: str
    residence_status: str
    is_mortgage_required: bool = True
    selected_bank: Optional[str] = None
    is_off_plan: bool = False
    is_ready: bool = True


@dataclass(frozen=True)
class DocumentChecklist:
    """Required documents grouped by category, with guidance notes."""

    identity_documents: Tuple[str, ...]
    income_proof_documents: Tuple[str, ...]
    property_documents: Tuple[str, ...]
    bank_documents: Tuple[str, ...]
    visa_documents: Tuple[str, ...]
    additional_documents: Tuple[str, ...]
    notes: str


def _parse_choice(field: str, value, choices):
    if isinstance(value, choices):
        return value
    try:
        return choices(str(value).strip().lower())
    except ValueError:
        allowed = ", ".join(c.value for c in choices)
        raise InvalidInputError(
            field, f"unknown value {value!r}, expected one of {allowed}"
        )


def is_local(nationality: str) -> bool:
    return nationality.strip().upper() == LOCAL_NATIONALITY


def bank_name(selected_bank: Optional[str]) -> Optional[str]:
    """Display name of a bank code; unrecognised names pass through."""
    if not selected_bank:
        return None
    code = selected_bank.strip().upper().replace(" ", "_")
    return BANK_NAMES.get(code, selected_bank.strip())


def identity_documents(nationality: str, residence: ResidenceStatus) -> Tuple[str, ...]:
    documents = ["Passport copy"]
    if residence is ResidenceStatus.uae_resident:
        documents += ["UAE Residence Visa copy", "Emirates ID copy"]
    if is_local(nationality):
        documents += ["UAE National ID copy", "Family Book copy"]
    else:
        documents.append("Home country ID copy")
    return tuple(documents)


def property_documents(is_off_plan: bool, is_ready: bool) -> Tuple[str, ...]:
    documents = []
    if is_off_plan:
        documents += OFF_PLAN_DOCUMENTS
    if is_ready:
        documents += READY_PROPERTY_DOCUMENTS
    documents.append("Property valuation report (for mortgage)")
    return tuple(documents)


def bank_documents(
    is_mortgage_required: bool, selected_bank: Optional[str]
) -> Tuple[str, ...]:
    if not is_mortgage_required:
        return ()
    name = bank_name(selected_bank)
    if name in BANK_NAMES.values():
        specific = (
            f"{name} account statement (if existing customer)",
            f"{name} specific forms",
        )
    else:
        specific = (
            "Bank account statement (if existing customer)",
            "Bank specific forms",
        )
    return MORTGAGE_DOCUMENTS + specific


def visa_documents(nationality: str, residence: ResidenceStatus) -> Tuple[str, ...]:
    if is_local(nationality):
        return ()
    if residence is ResidenceStatus.uae_resident:
        return ("UAE Residence Visa copy", "Entry stamp page copy")
    return ("Visit visa copy (if in UAE)", "Entry stamp page copy (if in UAE)")


def additional_documents(
    buyer_type: BuyerType, is_mortgage_required: bool, is_off_plan: bool
) -> Tuple[str, ...]:
    documents = ["Signed DLD transfer forms", "Manager's cheque for DLD fees"]
    if is_mortgage_required:
        documents += [
            "Manager's cheque for down payment",
            "Credit card statement (if applicable)",
            "Liability letter from existing banks",
        ]
    if buyer_type is BuyerType.self_employed:
        documents += [
            "Power of Attorney (if applicable)",
            "Board resolution for property purchase (if company purchase)",
        ]
    if is_off_plan:
        documents.append("Escrow account details")
    return tuple(documents)


def checklist_notes(
    buyer_type: BuyerType,
    nationality: str,
    residence: ResidenceStatus,
    is_mortgage_required: bool,
    selected_bank: Optional[str],
) -> str:
    """Guidance paragraphs shown with the checklist."""
    profile = buyer_type.value.replace("_", " ")
    article = "an" if profile[0] in "aeiou" else "a"
    opening = (
        "This document checklist is personalized based on your profile "
        f"as {article} {profile} buyer"
    )
    if not is_local(nationality):
        opening += f" with {nationality.strip()} nationality"
    paragraphs = [opening + "."]

    if is_mortgage_required:
        lender = bank_name(selected_bank) or "your bank"
        paragraphs.append(
            f"For mortgage applications with {lender}, please ensure all documents "
            "are less than 1 month old unless specified otherwise.\n"
            "Pre-approval typically takes 3-5 working days, and final approval "
            "takes 7-10 working days."
        )

    if residence is ResidenceStatus.non_resident:
        paragraphs.append(
            "As a non-resident buyer, you may need to provide additional "
            "documentation and attestations from your home country.\n"
            "All foreign documents must be attested by the UAE embassy in your "
            "country and the Ministry of Foreign Affairs in the UAE."
        )

    paragraphs.append(
        "Please note that this checklist is a guide and additional documents may "
        "be requested by the authorities, developer, or bank during the process."
    )
    return "\n\n".join(paragraphs)


def generate_document_checklist(profile: BuyerProfile) -> DocumentChecklist:
    """
    Build the document checklist for a buyer.

    Args:
        profile: Buyer type, nationality, residence and purchase structure

    Returns:
        DocumentChecklist with each category in presentation order

    Raises:
        InvalidInputError: If the buyer type or residence status is unknown,
            or nationality is blank
    """
    buyer_type = _parse_choice("buyer_type", profile.buyer_type, BuyerType)
    residence = _parse_choice(
        "residence_status", profile.residence_status, ResidenceStatus
    )
    if not profile.nationality or not profile.nationality.strip():
        raise InvalidInputError("nationality", "is required")

    return DocumentChecklist(
        identity_documents=identity_documents(profile.nationality, residence),
        income_proof_documents=INCOME_PROOF_DOCUMENTS[buyer_type],
        property_documents=property_documents(profile.is_off_plan, profile.is_ready),
        bank_documents=bank_documents(
            profile.is_mortgage_required, profile.selected_bank
        ),
        visa_documents=visa_documents(profile.nationality, residence),
        additional_documents=additional_documents(
            buyer_type, profile.is_mortgage_required, profile.is_off_plan
        ),
        notes=checklist_notes(
            buyer_type,
            profile.nationality,
            residence,
            profile.is_mortgage_required,
            profile.selected_bank,
        ),
    )
