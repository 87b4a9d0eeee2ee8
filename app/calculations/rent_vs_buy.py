"""
Rent vs Buy Analysis

Projects the net worth of buying a property with a mortgage against
renting it and investing the capital that buying would have consumed.

Accounting identity
-------------------
Both households have the same monthly budget. Each month the owner pays
mortgage (until the loan is repaid), maintenance and property tax; the
renter pays rent, stepped up once a year. Whichever household spends
less invests the difference. The renter additionally invests the down
payment on day one. Investments compound at the annual investment return,
applied monthly through the equivalent monthly rate.

    net_worth_buying(y)  = property value(y) - loan balance(y)
                           + owner's invested surplus(y)
    net_worth_renting(y) = renter's invested capital and surplus(y)

The security deposit is returned at the end of the tenancy and does not
enter either net worth; it is reported in the renting cost only.
"""

import math
from typing import List, Tuple
from dataclasses import dataclass

from app.calculations.amortization import (
    calculate_payment,
    calculate_remaining_balance,
)
from app.calculations.errors import InvalidInputError
from app.calculations.policy import DEFAULT_LIMITS, ValidationLimits
from app.calculations.validation import (
    require_between,
    require_non_negative,
    require_positive,
    require_whole_years,
)


@dataclass(frozen=True)
class RentVsBuyInputs:
    """Purchase, rental and analysis assumptions. Rates are percentages."""

    # Purchase
    property_price: float
    down_payment: float
    interest_rate_percent: float
    loan_term_years: int
    property_appreciation_rate_percent: float
    annual_maintenance_cost: float
    annual_property_tax: float

    # Rental
    monthly_rent: float
    annual_rent_increase_rate_percent: float
    security_deposit: float

    # Analysis
    investment_return_rate_percent: float
    analysis_period_years: int


@dataclass(frozen=True)
class YearProjection:
    """Net worth of both strategies at the end of one year."""

    year: int
    property_value: float
    loan_balance: float
    net_worth_buying: float
    net_worth_renting: float


@dataclass(frozen=True)
class RentVsBuyResult:
    """Outcome of the rent vs buy comparison."""

    net_worth_after_buying: float
    net_worth_after_renting: float
    is_buying_better: bool
    break_even_years: float  # whole years, or math.inf if never reached
    total_cost_of_buying: float
    total_cost_of_renting: float
    monthly_mortgage_payment: float
    projected_property_value: float
    remaining_loan_balance: float
    yearly_projection: Tuple[YearProjection, ...]
    inputs: RentVsBuyInputs


def annual_to_monthly_rate(annual_rate: float) -> float:
    """Convert an annual compounding rate to its equivalent monthly rate."""
    return ((1 + annual_rate) ** (1 / 12)) - 1


def project_property_value(
    property_price: float, appreciation_rate: float, years: int
) -> float:
    """Property value after compounding appreciation annually."""
    return property_price * (1 + appreciation_rate) ** years


def validate_rent_vs_buy_inputs(
    inputs: RentVsBuyInputs, limits: ValidationLimits = DEFAULT_LIMITS
) -> None:
    """Raise InvalidInputError if any assumption is out of bounds."""
    require_positive("property_price", inputs.property_price)
    require_non_negative("down_payment", inputs.down_payment)
    if inputs.down_payment > inputs.property_price:
        raise InvalidInputError(
            "down_payment", "cannot be greater than the property price"
        )
    require_between(
        "interest_rate_percent",
        inputs.interest_rate_percent,
        0,
        limits.max_interest_rate_percent,
    )
    require_whole_years(
        "loan_term_years", inputs.loan_term_years, limits.max_term_years
    )
    require_between(
        "property_appreciation_rate_percent",
        inputs.property_appreciation_rate_percent,
        limits.min_appreciation_rate_percent,
        limits.max_appreciation_rate_percent,
    )
    require_non_negative("annual_maintenance_cost", inputs.annual_maintenance_cost)
    require_non_negative("annual_property_tax", inputs.annual_property_tax)
    require_positive("monthly_rent", inputs.monthly_rent)
    require_between(
        "annual_rent_increase_rate_percent",
        inputs.annual_rent_increase_rate_percent,
        0,
        limits.max_rent_increase_rate_percent,
    )
    require_non_negative("security_deposit", inputs.security_deposit)
    require_between(
        "investment_return_rate_percent",
        inputs.investment_return_rate_percent,
        0,
        limits.max_investment_return_rate_percent,
    )
    require_whole_years(
        "analysis_period_years",
        inputs.analysis_period_years,
        limits.max_analysis_period_years,
    )


def analyze_rent_vs_buy(
    inputs: RentVsBuyInputs, limits: ValidationLimits = DEFAULT_LIMITS
) -> RentVsBuyResult:
    """
    Compare buying against renting over the analysis period.

    Returns:
        RentVsBuyResult including a per-year projection and the first
        year in which buying pulls ahead

    Raises:
        InvalidInputError: If any input violates its constraint
    """
    validate_rent_vs_buy_inputs(inputs, limits)

    loan_amount = inputs.property_price - inputs.down_payment
    annual_rate = inputs.interest_rate_percent / 100
    loan_months = inputs.loan_term_years * 12
    horizon_months = inputs.analysis_period_years * 12

    monthly_payment = calculate_payment(loan_amount, annual_rate, loan_months)
    monthly_maintenance = inputs.annual_maintenance_cost / 12
    monthly_tax = inputs.annual_property_tax / 12

    appreciation = inputs.property_appreciation_rate_percent / 100
    rent_growth = inputs.annual_rent_increase_rate_percent / 100
    monthly_return = annual_to_monthly_rate(inputs.investment_return_rate_percent / 100)

    owner_investments = 0.0
    renter_investments = inputs.down_payment
    mortgage_paid = 0.0
    rent_paid = 0.0
    projection: List[YearProjection] = []

    for month in range(1, horizon_months + 1):
        mortgage = monthly_payment if month <= loan_months else 0.0
        rent = inputs.monthly_rent * (1 + rent_growth) ** ((month - 1) // 12)
        owning_cost = mortgage + monthly_maintenance + monthly_tax
        difference = owning_cost - rent

        mortgage_paid += mortgage
        rent_paid += rent

        if difference > 0:
            renter_investments += difference
        elif difference < 0:
            owner_investments -= difference

        renter_investments *= 1 + monthly_return
        owner_investments *= 1 + monthly_return

        if month % 12 == 0:
            year = month // 12
            value = project_property_value(inputs.property_price, appreciation, year)
            balance = calculate_remaining_balance(
                loan_amount, annual_rate, loan_months, month
            )
            projection.append(
                YearProjection(
                    year=year,
                    property_value=value,
                    loan_balance=balance,
                    net_worth_buying=value - balance + owner_investments,
                    net_worth_renting=renter_investments,
                )
            )

    final = projection[-1]
    break_even_years = next(
        (p.year for p in projection if p.net_worth_buying > p.net_worth_renting),
        math.inf,
    )

    years = inputs.analysis_period_years
    total_cost_of_buying = (
        inputs.down_payment
        + mortgage_paid
        + inputs.annual_maintenance_cost * years
        + inputs.annual_property_tax * years
    )
    total_cost_of_renting = rent_paid + inputs.security_deposit

    return RentVsBuyResult(
        net_worth_after_buying=final.net_worth_buying,
        net_worth_after_renting=final.net_worth_renting,
        is_buying_better=final.net_worth_buying > final.net_worth_renting,
        break_even_years=break_even_years,
        total_cost_of_buying=total_cost_of_buying,
        total_cost_of_renting=total_cost_of_renting,
        monthly_mortgage_payment=monthly_payment,
        projected_property_value=final.property_value,
        remaining_loan_balance=final.loan_balance,
        yearly_projection=tuple(projection),
        inputs=inputs,
    )
