"""
Property Comparison

Side-by-side comparison of two properties under the same appreciation
and financing assumptions.
"""

from typing import Optional
from dataclasses import dataclass

from app.calculations.costs import CostBreakdownInputs, calculate_cost_breakdown
from app.calculations.policy import (
    DEFAULT_FEE_SCHEDULE,
    DEFAULT_LIMITS,
    FeeSchedule,
    ValidationLimits,
)
from app.calculations.rent_vs_buy import project_property_value
from app.calculations.validation import (
    require_between,
    require_positive,
    require_whole_years,
)


@dataclass(frozen=True)
class ComparedProperty:
    """A property as seen by the comparison."""

    name: str
    price: float
    size_sq_ft: Optional[float] = None


@dataclass(frozen=True)
class ComparisonInputs:
    """Shared assumptions applied to both properties."""

    property_appreciation_rate_percent: float
    holding_period_years: int
    down_payment_percent: float = 20.0
    loan_term_years: int = 25
    interest_rate_percent: float = 3.5


@dataclass(frozen=True)
class PropertyMetrics:
    """Derived metrics for one property."""

    name: str
    price: float
    price_per_sq_ft: Optional[float]
    projected_value: float
    roi_percent: float
    total_cost_of_ownership: float


@dataclass(frozen=True)
class PropertyComparisonResult:
    first: PropertyMetrics
    second: PropertyMetrics
    better_roi: str  # name of the property with the higher ROI


def evaluate_property(
    prop: ComparedProperty,
    inputs: ComparisonInputs,
    schedule: FeeSchedule = DEFAULT_FEE_SCHEDULE,
    limits: ValidationLimits = DEFAULT_LIMITS,
) -> PropertyMetrics:
    """Projected value, ROI and ownership cost of a single property."""
    require_positive("price", prop.price)
    if prop.size_sq_ft is not None:
        require_positive("size_sq_ft", prop.size_sq_ft)

    growth = project_property_value(
        1.0,
        inputs.property_appreciation_rate_percent / 100,
        inputs.holding_period_years,
    )
    costs = calculate_cost_breakdown(
        CostBreakdownInputs(
            property_price=prop.price,
            down_payment_percent=inputs.down_payment_percent,
            loan_term_years=inputs.loan_term_years,
            interest_rate_percent=inputs.interest_rate_percent,
        ),
        schedule=schedule,
        limits=limits,
    )

    return PropertyMetrics(
        name=prop.name,
        price=prop.price,
        price_per_sq_ft=prop.price / prop.size_sq_ft if prop.size_sq_ft else None,
        projected_value=prop.price * growth,
        # Depends only on the shared growth, so equal assumptions give equal ROI
        roi_percent=(growth - 1) * 100,
        total_cost_of_ownership=costs.total_cost_of_ownership,
    )


def compare_properties(
    first: ComparedProperty,
    second: ComparedProperty,
    inputs: ComparisonInputs,
    schedule: FeeSchedule = DEFAULT_FEE_SCHEDULE,
    limits: ValidationLimits = DEFAULT_LIMITS,
) -> PropertyComparisonResult:
    """
    Compare two properties.

    Ties in ROI go to the first property.

    Raises:
        InvalidInputError: If a price, size or assumption is out of range
    """
    require_between(
        "property_appreciation_rate_percent",
        inputs.property_appreciation_rate_percent,
        limits.min_appreciation_rate_percent,
        limits.max_appreciation_rate_percent,
    )
    require_whole_years(
        "holding_period_years",
        inputs.holding_period_years,
        limits.max_analysis_period_years,
    )

    first_metrics = evaluate_property(first, inputs, schedule, limits)
    second_metrics = evaluate_property(second, inputs, schedule, limits)

    if second_metrics.roi_percent > first_metrics.roi_percent:
        better_roi = second_metrics.name
    else:
        better_roi = first_metrics.name

    return PropertyComparisonResult(
        first=first_metrics,
        second=second_metrics,
        better_roi=better_roi,
    )
