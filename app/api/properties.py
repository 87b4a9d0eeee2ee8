"""
Property catalog API endpoints.

Browse listings and run the calculators against a listing's price and size.
"""

from dataclasses import asdict
from datetime import date
from typing import Dict, List, Optional, Union

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel

from app.api.calculations import (
    CostBreakdownResponse,
    LoanResponse,
    RentVsBuyAssumptions,
    RentVsBuyResponse,
    ServiceChargeResponse,
    get_fee_schedule,
    rejected,
    run_cost_breakdown,
    run_loan,
    run_rent_vs_buy,
    run_service_charge,
)
from app.calculations import InvalidInputError
from app.calculations.comparison import (
    ComparedProperty,
    ComparisonInputs,
    compare_properties,
)
from app.calculations.documents import BuyerProfile, generate_document_checklist
from app.calculations.policy import FeeSchedule
from app.services.catalog import (
    PropertyCatalog,
    PropertyNotFoundError,
    PropertyRecord,
    get_property_catalog,
)

router = APIRouter()


class PropertyResponse(BaseModel):
    """Schema for property response."""

    id: str
    name: str
    location: str
    price: float
    size_sq_ft: Optional[float] = None
    bedrooms: Optional[int] = None
    bathrooms: Optional[int] = None
    property_type: Optional[str] = None
    community_name: Optional[str] = None
    is_furnished: bool = False
    year_built: Optional[int] = None


class PropertyListResponse(BaseModel):
    """Response for listing properties."""

    properties: List[PropertyResponse]
    total: int


def property_to_response(prop: PropertyRecord) -> PropertyResponse:
    """Convert a catalog record to the response schema."""
    return PropertyResponse(**asdict(prop))


def find_property(catalog: PropertyCatalog, property_id: str) -> PropertyRecord:
    try:
        return catalog.get(property_id)
    except PropertyNotFoundError:
        raise HTTPException(status_code=404, detail="Property not found")


@router.get("/", response_model=PropertyListResponse)
async def list_properties(
    property_type: Optional[str] = None,
    min_price: Optional[float] = None,
    max_price: Optional[float] = None,
    catalog: PropertyCatalog = Depends(get_property_catalog),
):
    """List properties with optional filtering."""
    properties = catalog.search(
        property_type=property_type, min_price=min_price, max_price=max_price
    )
    return PropertyListResponse(
        properties=[property_to_response(p) for p in properties],
        total=len(properties),
    )


class ComparisonInput(BaseModel):
    """Input for comparing two listings."""

    property1_id: str
    property2_id: str
    property_appreciation_rate_percent: float = 3.0
    holding_period_years: int = 5
    down_payment_percent: float = 20.0
    loan_term_years: int = 25
    interest_rate_percent: float = 3.5


class PropertyMetricsResponse(BaseModel):
    name: str
    price: float
    price_per_sq_ft: Optional[float] = None
    projected_value: float
    roi_percent: float
    total_cost_of_ownership: float


class ComparisonResponse(BaseModel):
    first: PropertyMetricsResponse
    second: PropertyMetricsResponse
    better_roi: str


@router.post("/compare", response_model=ComparisonResponse)
async def compare_properties_endpoint(
    inputs: ComparisonInput,
    catalog: PropertyCatalog = Depends(get_property_catalog),
    schedule: FeeSchedule = Depends(get_fee_schedule),
):
    """Compare ROI and ownership cost of two listings."""
    first = find_property(catalog, inputs.property1_id)
    second = find_property(catalog, inputs.property2_id)

    try:
        result = compare_properties(
            ComparedProperty(
                name=first.name, price=first.price, size_sq_ft=first.size_sq_ft
            ),
            ComparedProperty(
                name=second.name, price=second.price, size_sq_ft=second.size_sq_ft
            ),
            ComparisonInputs(
                property_appreciation_rate_percent=inputs.property_appreciation_rate_percent,
                holding_period_years=inputs.holding_period_years,
                down_payment_percent=inputs.down_payment_percent,
                loan_term_years=inputs.loan_term_years,
                interest_rate_percent=inputs.interest_rate_percent,
            ),
            schedule=schedule,
        )
    except InvalidInputError as e:
        raise rejected(e)

    return ComparisonResponse(**asdict(result))


@router.get("/{property_id}", response_model=PropertyResponse)
async def get_property(
    property_id: str,
    catalog: PropertyCatalog = Depends(get_property_catalog),
):
    """Get a property by ID."""
    return property_to_response(find_property(catalog, property_id))


class PropertyLoanInput(BaseModel):
    """Loan inputs for a listing; price comes from the catalog."""

    down_payment: float
    interest_rate_percent: float = 3.5
    term_years: int = 25


@router.post("/{property_id}/loan", response_model=LoanResponse)
async def property_loan(
    property_id: str,
    inputs: PropertyLoanInput,
    catalog: PropertyCatalog = Depends(get_property_catalog),
):
    """Calculate a mortgage on a listing."""
    prop = find_property(catalog, property_id)
    return run_loan(
        prop.price, inputs.down_payment, inputs.interest_rate_percent, inputs.term_years
    )


class PropertyCostBreakdownInput(BaseModel):
    down_payment_percent: float = 20.0
    loan_term_years: int = 25
    interest_rate_percent: float = 3.5


@router.post("/{property_id}/cost-breakdown", response_model=CostBreakdownResponse)
async def property_cost_breakdown(
    property_id: str,
    inputs: PropertyCostBreakdownInput,
    catalog: PropertyCatalog = Depends(get_property_catalog),
    schedule: FeeSchedule = Depends(get_fee_schedule),
):
    """Calculate upfront costs of buying a listing."""
    prop = find_property(catalog, property_id)
    return run_cost_breakdown(
        prop.price,
        inputs.down_payment_percent,
        inputs.loan_term_years,
        inputs.interest_rate_percent,
        schedule,
    )


class PropertyServiceChargeInput(BaseModel):
    """Amenities for a listing; type, size and age come from the catalog."""

    amenities: Union[Dict[str, bool], List[str]] = {}
    as_of_year: Optional[int] = None


@router.post("/{property_id}/service-charge", response_model=ServiceChargeResponse)
async def property_service_charge(
    property_id: str,
    inputs: PropertyServiceChargeInput,
    catalog: PropertyCatalog = Depends(get_property_catalog),
):
    """Estimate service charges for a listing."""
    prop = find_property(catalog, property_id)
    if prop.size_sq_ft is None:
        raise HTTPException(status_code=400, detail="Property size is not known")

    age_years = 0
    if prop.year_built is not None:
        as_of_year = inputs.as_of_year or date.today().year
        age_years = max(0, as_of_year - prop.year_built)

    return run_service_charge(
        prop.property_type or "", prop.size_sq_ft, age_years, inputs.amenities
    )


@router.post("/{property_id}/rent-vs-buy", response_model=RentVsBuyResponse)
async def property_rent_vs_buy(
    property_id: str,
    inputs: RentVsBuyAssumptions,
    catalog: PropertyCatalog = Depends(get_property_catalog),
):
    """Run the rent vs buy analysis on a listing."""
    prop = find_property(catalog, property_id)
    return run_rent_vs_buy(prop.price, inputs)


class DocumentChecklistInput(BaseModel):
    """Buyer profile for the document checklist."""

    buyer_type: str
    nationality: str
    residence_status: str
    is_mortgage_required: bool = True
    selected_bank: Optional[str] = None
    is_off_plan: bool = False
    is_ready: bool = True


class DocumentChecklistResponse(BaseModel):
    property_id: str
    property_name: str
    identity_documents: List[str]
    income_proof_documents: List[str]
    property_documents: List[str]
    bank_documents: List[str]
    visa_documents: List[str]
    additional_documents: List[str]
    notes: str


@router.post(
    "/{property_id}/document-checklist", response_model=DocumentChecklistResponse
)
async def property_document_checklist(
    property_id: str,
    inputs: DocumentChecklistInput,
    catalog: PropertyCatalog = Depends(get_property_catalog),
):
    """List the documents a buyer needs to purchase a listing."""
    prop = find_property(catalog, property_id)
    try:
        checklist = generate_document_checklist(BuyerProfile(**inputs.model_dump()))
    except InvalidInputError as e:
        raise rejected(e)

    return DocumentChecklistResponse(
        property_id=prop.id, property_name=prop.name, **asdict(checklist)
    )
