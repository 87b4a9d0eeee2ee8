"""
Upfront Cost Breakdown

Computes purchase fees, financing figures and total cost of ownership
for a property bought with a mortgage.
"""

from dataclasses import dataclass

from app.calculations.amortization import calculate_payment
from app.calculations.policy import (
    DEFAULT_FEE_SCHEDULE,
    DEFAULT_LIMITS,
    FeeSchedule,
    ValidationLimits,
)
from app.calculations.validation import (
    require_between,
    require_positive,
    require_whole_years,
)


@dataclass(frozen=True)
class CostBreakdownInputs:
    """Inputs for the upfront cost breakdown."""

    property_price: float
    down_payment_percent: float
    loan_term_years: int
    interest_rate_percent: float


@dataclass(frozen=True)
class CostBreakdownResult:
    """Fees, financing and ownership totals."""

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


def calculate_mortgage_processing_fee(
    loan_amount: float, schedule: FeeSchedule = DEFAULT_FEE_SCHEDULE
) -> float:
    """Processing fee scales with the loan amount up to the cap."""
    return min(
        loan_amount * schedule.mortgage_processing_fee_rate,
        schedule.mortgage_processing_fee_cap,
    )


def calculate_cost_breakdown(
    inputs: CostBreakdownInputs,
    schedule: FeeSchedule = DEFAULT_FEE_SCHEDULE,
    limits: ValidationLimits = DEFAULT_LIMITS,
) -> CostBreakdownResult:
    """
    Calculate the upfront costs and total cost of ownership.

    Args:
        inputs: Price, down payment percent and loan terms
        schedule: Fee schedule to apply
        limits: Input bounds

    Returns:
        CostBreakdownResult with every fee itemised

    Raises:
        InvalidInputError: If any input violates its constraint
    """
    require_positive("property_price", inputs.property_price)
    require_between("down_payment_percent", inputs.down_payment_percent, 0, 100)
    require_whole_years(
        "loan_term_years", inputs.loan_term_years, limits.max_term_years
    )
    require_between(
        "interest_rate_percent",
        inputs.interest_rate_percent,
        0,
        limits.max_interest_rate_percent,
    )

    price = inputs.property_price
    down_payment_amount = price * inputs.down_payment_percent / 100
    loan_amount = price - down_payment_amount

    registration_fee = price * schedule.registration_fee_rate
    transfer_fee = price * schedule.transfer_fee_rate
    agency_fee = price * schedule.agency_fee_rate
    mortgage_registration_fee = loan_amount * schedule.mortgage_registration_fee_rate
    valuation_fee = schedule.valuation_fee
    mortgage_processing_fee = calculate_mortgage_processing_fee(loan_amount, schedule)
    title_deed_fee = schedule.title_deed_fee

    number_of_payments = inputs.loan_term_years * 12
    monthly_payment = calculate_payment(
        loan_amount, inputs.interest_rate_percent / 100, number_of_payments
    )
    total_interest_paid = monthly_payment * number_of_payments - loan_amount
    if loan_amount <= 0:
        total_interest_paid = 0.0

    total_fees = (
        registration_fee
        + transfer_fee
        + agency_fee
        + mortgage_registration_fee
        + valuation_fee
        + mortgage_processing_fee
        + title_deed_fee
    )
    total_upfront_costs = down_payment_amount + total_fees

    return CostBreakdownResult(
        registration_fee=registration_fee,
        transfer_fee=transfer_fee,
        agency_fee=agency_fee,
        mortgage_registration_fee=mortgage_registration_fee,
        valuation_fee=valuation_fee,
        mortgage_processing_fee=mortgage_processing_fee,
        title_deed_fee=title_deed_fee,
        down_payment_amount=down_payment_amount,
        loan_amount=loan_amount,
        monthly_payment=monthly_payment,
        total_interest_paid=total_interest_paid,
        total_fees=total_fees,
        total_upfront_costs=total_upfront_costs,
        total_cost_of_ownership=total_upfront_costs + loan_amount + total_interest_paid,
    )
