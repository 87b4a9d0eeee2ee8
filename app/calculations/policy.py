"""
Policy Constants

Fee schedules, service-charge rates and input bounds used by the calculators.
These are policy values, not derived quantities; update them here.
"""

from typing import Dict
from dataclasses import dataclass, field


# Upfront fees on purchase
REGISTRATION_FEE_RATE = 0.04  # of property price
TRANSFER_FEE_RATE = 0.02  # of property price
AGENCY_FEE_RATE = 0.02  # of property price
MORTGAGE_REGISTRATION_FEE_RATE = 0.0025  # of loan amount
VALUATION_FEE = 3000.0
MORTGAGE_PROCESSING_FEE_RATE = 0.01  # of loan amount
MORTGAGE_PROCESSING_FEE_CAP = 10000.0
TITLE_DEED_FEE = 580.0

# Service charge, currency per 1000 sq ft per year
SERVICE_CHARGE_BASE_RATES = {
    "apartment": 12.0,
    "villa": 8.0,
    "townhouse": 10.0,
}
NEW_BUILDING_MAX_AGE = 2  # strictly below
NEW_BUILDING_FACTOR = 1.10
OLD_BUILDING_MIN_AGE = 10  # strictly above
OLD_BUILDING_FACTOR = 0.90
AMENITY_SURCHARGES = {
    "pool": 500.0,
    "gym": 300.0,
    "concierge": 800.0,
    "security": 400.0,
    "parking": 200.0,
    "playground": 150.0,
}


@dataclass(frozen=True)
class FeeSchedule:
    """Upfront fee schedule applied by the cost breakdown."""

    registration_fee_rate: float = REGISTRATION_FEE_RATE
    transfer_fee_rate: float = TRANSFER_FEE_RATE
    agency_fee_rate: float = AGENCY_FEE_RATE
    mortgage_registration_fee_rate: float = MORTGAGE_REGISTRATION_FEE_RATE
    valuation_fee: float = VALUATION_FEE
    mortgage_processing_fee_rate: float = MORTGAGE_PROCESSING_FEE_RATE
    mortgage_processing_fee_cap: float = MORTGAGE_PROCESSING_FEE_CAP
    title_deed_fee: float = TITLE_DEED_FEE


@dataclass(frozen=True)
class ServiceChargePolicy:
    """Rates and adjustments for the service charge estimate."""

    base_rates: Dict[str, float] = field(
        default_factory=lambda: dict(SERVICE_CHARGE_BASE_RATES)
    )
    new_building_max_age: float = NEW_BUILDING_MAX_AGE
    new_building_factor: float = NEW_BUILDING_FACTOR
    old_building_min_age: float = OLD_BUILDING_MIN_AGE
    old_building_factor: float = OLD_BUILDING_FACTOR
    amenity_surcharges: Dict[str, float] = field(
        default_factory=lambda: dict(AMENITY_SURCHARGES)
    )


@dataclass(frozen=True)
class ValidationLimits:
    """Sane bounds for calculator inputs."""

    max_interest_rate_percent: float = 100.0
    max_term_years: int = 35
    min_appreciation_rate_percent: float = -20.0
    max_appreciation_rate_percent: float = 20.0
    max_rent_increase_rate_percent: float = 20.0
    max_investment_return_rate_percent: float = 30.0
    max_analysis_period_years: int = 30


DEFAULT_FEE_SCHEDULE = FeeSchedule()
DEFAULT_SERVICE_CHARGE_POLICY = ServiceChargePolicy()
DEFAULT_LIMITS = ValidationLimits()
