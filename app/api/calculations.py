"""
Financial calculation API endpoints.

These endpoints accept calculator inputs and return unrounded results.
Formatting for display is left to the client.
"""

import logging
import math
from dataclasses import asdict
from datetime import date
from typing import Dict, List, Optional, Union

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel

from app.calculations import InvalidInputError
from app.calculations.amortization import (
    LoanInputs,
    calculate_loan,
    calculate_total_interest,
    generate_amortization_schedule,
)
from app.calculations.costs import CostBreakdownInputs, calculate_cost_breakdown
from app.calculations.policy import DEFAULT_LIMITS, FeeSchedule
from app.calculations.rent_vs_buy import (
    RentVsBuyInputs,
    RentVsBuyResult,
    analyze_rent_vs_buy,
)
from app.calculations.service_charge import (
    ServiceChargeInputs,
    estimate_service_charge,
)
from app.calculations.validation import require_positive, require_between, require_whole_years
from app.config import get_settings

logger = logging.getLogger(__name__)

router = APIRouter()


def get_fee_schedule() -> FeeSchedule:
    """Fee schedule from settings."""
    return get_settings().fee_schedule()


def rejected(error: InvalidInputError) -> HTTPException:
    """Log a rejected input and convert it to a 400 response."""
    logger.info(f"Rejected calculator input: {error}")
    return HTTPException(status_code=400, detail=str(error))


# ============================================================================
# LOAN
# ============================================================================


class LoanInput(BaseModel):
    """Input for loan calculation."""

    property_price: float
    down_payment: float
    interest_rate_percent: float = 3.5
    term_years: int = 25


class LoanResponse(BaseModel):
    """Loan calculation results."""

    loan_amount: float
    monthly_payment: float
    total_interest: float
    total_payable: float
    loan_to_value_ratio: float
    first_month_principal: float
    first_month_interest: float
    last_month_principal: float
    last_month_interest: float
    number_of_payments: int


def run_loan(
    property_price: float, down_payment: float, interest_rate_percent: float, term_years: int
) -> LoanResponse:
    try:
        result = calculate_loan(
            LoanInputs(
                property_price=property_price,
                down_payment=down_payment,
                interest_rate_percent=interest_rate_percent,
                term_years=term_years,
            )
        )
    except InvalidInputError as e:
        raise rejected(e)
    return LoanResponse(**asdict(result))


@router.post("/loan", response_model=LoanResponse)
async def calculate_loan_endpoint(inputs: LoanInput):
    """Calculate mortgage payment and interest split."""
    return run_loan(
        inputs.property_price,
        inputs.down_payment,
        inputs.interest_rate_percent,
        inputs.term_years,
    )


# ============================================================================
# COST BREAKDOWN
# ============================================================================


class CostBreakdownInput(BaseModel):
    """Input for upfront cost breakdown."""

    property_price: float
    down_payment_percent: float = 20.0
    loan_term_years: int = 25
    interest_rate_percent: float = 3.5


class CostBreakdownResponse(BaseModel):
    """Itemised upfront costs and ownership totals."""

    registration_fee: float
    transfer_fee: float
    agency_fee: float
    mortgage_registration_fee: float
    valuation_fee: float
    mortgage_processing_fee: float
    title_deed_fee: float
    down_payment_amount: float
    loan_amount: float
    monthly_payment: float
    total_interest_paid: float
    total_fees: float
    total_upfront_costs: float
    total_cost_of_ownership: float


def run_cost_breakdown(
    property_price: float,
    down_payment_percent: float,
    loan_term_years: int,
    interest_rate_percent: float,
    schedule: FeeSchedule,
) -> CostBreakdownResponse:
    try:
        result = calculate_cost_breakdown(
            CostBreakdownInputs(
                property_price=property_price,
                down_payment_percent=down_payment_percent,
                loan_term_years=loan_term_years,
                interest_rate_percent=interest_rate_percent,
            ),
            schedule=schedule,
        )
    except InvalidInputError as e:
        raise rejected(e)
    return CostBreakdownResponse(**asdict(result))


@router.post("/cost-breakdown", response_model=CostBreakdownResponse)
async def calculate_cost_breakdown_endpoint(
    inputs: CostBreakdownInput,
    schedule: FeeSchedule = Depends(get_fee_schedule),
):
    """Calculate purchase fees and total cost of ownership."""
    return run_cost_breakdown(
        inputs.property_price,
        inputs.down_payment_percent,
        inputs.loan_term_years,
        inputs.interest_rate_percent,
        schedule,
    )


# ============================================================================
# SERVICE CHARGE
# ============================================================================


class ServiceChargeInput(BaseModel):
    """Input for service charge estimate."""

    property_type: str = "apartment"
    size_sq_ft: float
    age_years: float = 0
    amenities: Union[Dict[str, bool], List[str]] = {}


class ServiceChargeResponse(BaseModel):
    """Estimated service charge."""

    base_charge: float
    age_factor: float
    amenity_surcharge: float
    annual_estimate: float
    monthly_estimate: float


def run_service_charge(
    property_type: str,
    size_sq_ft: float,
    age_years: float,
    amenities: Union[Dict[str, bool], List[str]],
) -> ServiceChargeResponse:
    try:
        result = estimate_service_charge(
            ServiceChargeInputs(
                property_type=property_type,
                size_sq_ft=size_sq_ft,
                age_years=age_years,
                amenities=amenities,
            )
        )
    except InvalidInputError as e:
        raise rejected(e)
    return ServiceChargeResponse(**asdict(result))


@router.post("/service-charge", response_model=ServiceChargeResponse)
async def estimate_service_charge_endpoint(inputs: ServiceChargeInput):
    """Estimate annual and monthly service charges."""
    return run_service_charge(
        inputs.property_type, inputs.size_sq_ft, inputs.age_years, inputs.amenities
    )


# ============================================================================
# RENT VS BUY
# ============================================================================


class RentVsBuyAssumptions(BaseModel):
    """Rent vs buy assumptions, excluding the property price."""

    down_payment: float
    interest_rate_percent: float = 3.5
    loan_term_years: int = 25
    property_appreciation_rate_percent: float = 3.0
    annual_maintenance_cost: float = 5000.0
    annual_property_tax: float = 2000.0
    monthly_rent: float
    annual_rent_increase_rate_percent: float = 5.0
    security_deposit: float = 0.0
    investment_return_rate_percent: float = 7.0
    analysis_period_years: int = 10


class RentVsBuyInput(RentVsBuyAssumptions):
    """Input for rent vs buy analysis."""

    property_price: float


class YearProjectionResponse(BaseModel):
    year: int
    property_value: float
    loan_balance: float
    net_worth_buying: float
    net_worth_renting: float


class RentVsBuyResponse(BaseModel):
    """Rent vs buy outcome. break_even_years is null when never reached."""

    net_worth_after_buying: float
    net_worth_after_renting: float
    is_buying_better: bool
    break_even_years: Optional[int] = None
    total_cost_of_buying: float
    total_cost_of_renting: float
    monthly_mortgage_payment: float
    projected_property_value: float
    remaining_loan_balance: float
    yearly_projection: List[YearProjectionResponse]
    inputs: RentVsBuyInput


def rent_vs_buy_to_response(result: RentVsBuyResult) -> RentVsBuyResponse:
    """Convert the engine result to the response schema."""
    data = asdict(result)
    if math.isinf(result.break_even_years):
        data["break_even_years"] = None
    return RentVsBuyResponse(**data)


def run_rent_vs_buy(
    property_price: float, assumptions: RentVsBuyAssumptions
) -> RentVsBuyResponse:
    try:
        result = analyze_rent_vs_buy(
            RentVsBuyInputs(
                property_price=property_price,
                **assumptions.model_dump(include=set(RentVsBuyAssumptions.model_fields)),
            )
        )
    except InvalidInputError as e:
        raise rejected(e)
    return rent_vs_buy_to_response(result)


@router.post("/rent-vs-buy", response_model=RentVsBuyResponse)
async def analyze_rent_vs_buy_endpoint(inputs: RentVsBuyInput):
    """Compare net worth from buying against renting and investing."""
    return run_rent_vs_buy(inputs.property_price, inputs)


# ============================================================================
# AMORTIZATION SCHEDULE
# ============================================================================


class AmortizationInput(BaseModel):
    """Input for amortization calculation."""

    principal: float
    interest_rate_percent: float
    amortization_years: int
    start_date: Optional[date] = None


@router.post("/amortization")
async def calculate_amortization(inputs: AmortizationInput):
    """Generate loan amortization schedule."""
    try:
        require_positive("principal", inputs.principal)
        require_between(
            "interest_rate_percent",
            inputs.interest_rate_percent,
            0,
            DEFAULT_LIMITS.max_interest_rate_percent,
        )
        require_whole_years(
            "amortization_years", inputs.amortization_years, DEFAULT_LIMITS.max_term_years
        )
    except InvalidInputError as e:
        raise rejected(e)

    schedule = generate_amortization_schedule(
        principal=inputs.principal,
        annual_rate=inputs.interest_rate_percent / 100,
        amortization_months=inputs.amortization_years * 12,
        start_date=inputs.start_date,
    )

    return {
        "schedule": schedule,
        "total_interest": calculate_total_interest(schedule),
        "total_principal": sum(row["principal"] for row in schedule),
    }
