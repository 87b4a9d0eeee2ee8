"""
Loan Amortization Calculations

Implements fixed-rate mortgage payment and amortization schedule
calculations. Rates passed to the low-level helpers are decimals
(0.035 for 3.5%); the LoanInputs record takes percentages as entered
by the user.
"""

from typing import Iterator, List, Dict, Optional
from datetime import date
from dataclasses import dataclass
from dateutil.relativedelta import relativedelta

from app.calculations.policy import DEFAULT_LIMITS, ValidationLimits
from app.calculations.errors import InvalidInputError
from app.calculations.validation import (
    require_between,
    require_non_negative,
    require_positive,
    require_whole_years,
)


@dataclass(frozen=True)
class LoanInputs:
    """Inputs for a single mortgage calculation."""

    property_price: float
    down_payment: float
    interest_rate_percent: float
    term_years: int


@dataclass(frozen=True)
class LoanResult:
    """Derived figures for a fixed-rate amortizing mortgage."""

    loan_amount: float
    monthly_payment: float
    total_interest: float
    total_payable: float
    loan_to_value_ratio: float  # percent
    first_month_principal: float
    first_month_interest: float
    last_month_principal: float
    last_month_interest: float
    number_of_payments: int


def calculate_payment(
    principal: float, annual_rate: float, amortization_months: int
) -> float:
    """
    Calculate monthly loan payment.

    Args:
        principal: Loan principal amount
        annual_rate: Annual interest rate as decimal (e.g., 0.05 for 5%)
        amortization_months: Total amortization period in months

    Returns:
        Monthly payment amount (positive number)
    """
    if principal <= 0:
        return 0.0
    if amortization_months <= 0:
        return 0.0

    monthly_rate = annual_rate / 12

    if monthly_rate == 0:
        return principal / amortization_months

    growth = (1 + monthly_rate) ** amortization_months
    payment = principal * (monthly_rate * growth) / (growth - 1)

    return payment


def calculate_remaining_balance(
    principal: float,
    annual_rate: float,
    amortization_months: int,
    payments_completed: int,
) -> float:
    """Calculate remaining loan balance after N payments."""
    if principal <= 0:
        return 0.0

    payments_completed = max(0, min(payments_completed, amortization_months))
    if payments_completed == amortization_months:
        return 0.0

    monthly_rate = annual_rate / 12
    payment = calculate_payment(principal, annual_rate, amortization_months)

    if monthly_rate == 0:
        return max(0.0, principal - payment * payments_completed)

    balance = principal * ((1 + monthly_rate) ** payments_completed) - payment * (
        ((1 + monthly_rate) ** payments_completed - 1) / monthly_rate
    )

    return max(0.0, balance)


def iter_amortization(
    principal: float, annual_rate: float, amortization_months: int
) -> Iterator[Dict]:
    """
    Run the amortization recurrence one period at a time.

    balance_0 is the principal; each period charges interest on the
    opening balance and applies the rest of the level payment to principal.
    Values are not rounded.
    """
    monthly_rate = annual_rate / 12
    payment = calculate_payment(principal, annual_rate, amortization_months)
    balance = principal

    for period in range(1, amortization_months + 1):
        interest = balance * monthly_rate
        principal_pmt = payment - interest
        ending_balance = balance - principal_pmt

        yield {
            "period": period,
            "beginning_balance": balance,
            "payment": payment,
            "interest": interest,
            "principal": principal_pmt,
            "ending_balance": ending_balance,
        }

        balance = ending_balance


def generate_amortization_schedule(
    principal: float,
    annual_rate: float,
    amortization_months: int,
    start_date: Optional[date] = None,
) -> List[Dict]:
    """
    Generate a full amortization schedule.

    Args:
        principal: Loan principal amount
        annual_rate: Annual interest rate as decimal
        amortization_months: Amortization period in months
        start_date: Date of first payment

    Returns:
        List of amortization rows
    """
    if start_date is None:
        start_date = date.today()

    schedule = []
    for row in iter_amortization(principal, annual_rate, amortization_months):
        period_date = start_date + relativedelta(months=row["period"] - 1)
        schedule.append({**row, "date": period_date.isoformat()})

    return schedule


def calculate_total_interest(schedule: List[Dict]) -> float:
    """Calculate total interest paid over loan term."""
    return sum(row["interest"] for row in schedule)


def validate_loan_inputs(
    inputs: LoanInputs, limits: ValidationLimits = DEFAULT_LIMITS
) -> None:
    """Raise InvalidInputError if the loan inputs are out of bounds."""
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
    require_whole_years("term_years", inputs.term_years, limits.max_term_years)


def calculate_loan(
    inputs: LoanInputs, limits: ValidationLimits = DEFAULT_LIMITS
) -> LoanResult:
    """
    Calculate payment, interest and first/last month split for a mortgage.

    Raises:
        InvalidInputError: If any input violates its constraint
    """
    validate_loan_inputs(inputs, limits)

    loan_amount = inputs.property_price - inputs.down_payment
    annual_rate = inputs.interest_rate_percent / 100
    number_of_payments = inputs.term_years * 12
    ltv = loan_amount / inputs.property_price * 100

    if loan_amount == 0:
        return LoanResult(
            loan_amount=0.0,
            monthly_payment=0.0,
            total_interest=0.0,
            total_payable=0.0,
            loan_to_value_ratio=0.0,
            first_month_principal=0.0,
            first_month_interest=0.0,
            last_month_principal=0.0,
            last_month_interest=0.0,
            number_of_payments=number_of_payments,
        )

    monthly_payment = calculate_payment(loan_amount, annual_rate, number_of_payments)
    total_payable = monthly_payment * number_of_payments
    total_interest = total_payable - loan_amount

    first_month_interest = loan_amount * (annual_rate / 12)
    first_month_principal = monthly_payment - first_month_interest

    last_row = None
    for last_row in iter_amortization(loan_amount, annual_rate, number_of_payments):
        pass

    return LoanResult(
        loan_amount=loan_amount,
        monthly_payment=monthly_payment,
        total_interest=total_interest,
        total_payable=total_payable,
        loan_to_value_ratio=ltv,
        first_month_principal=first_month_principal,
        first_month_interest=first_month_interest,
        last_month_principal=last_row["principal"],
        last_month_interest=last_row["interest"],
        number_of_payments=number_of_payments,
    )
