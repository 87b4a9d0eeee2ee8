"""
Service Charge Estimate

Annual community service charge estimated from property type, size,
building age and amenities.
"""

import enum
from collections.abc import Iterable, Mapping
from typing import Dict, Union
from dataclasses import dataclass, field

from app.calculations.errors import InvalidInputError
from app.calculations.policy import DEFAULT_SERVICE_CHARGE_POLICY, ServiceChargePolicy
from app.calculations.validation import require_non_negative, require_positive


class PropertyType(str, enum.Enum):
    """Property types with a published service charge rate."""

    apartment = "apartment"
    villa = "villa"
    townhouse = "townhouse"


class Amenity(str, enum.Enum):
    """Amenities that carry a flat annual surcharge."""

    pool = "pool"
    gym = "gym"
    concierge = "concierge"
    security = "security"
    parking = "parking"
    playground = "playground"


@dataclass(frozen=True)
class ServiceChargeInputs:
    """Inputs for the service charge estimate."""

    property_type: str
    size_sq_ft: float
    age_years: float
    # Either name -> flag, or a collection of names that are all present
    amenities: Union[Dict[str, bool], Iterable] = field(default_factory=dict)


@dataclass(frozen=True)
class ServiceChargeResult:
    """Annual and monthly service charge with its components."""

    base_charge: float
    age_factor: float
    amenity_surcharge: float
    annual_estimate: float
    monthly_estimate: float


def parse_property_type(value) -> PropertyType:
    """Accept a PropertyType or its name in any case."""
    if isinstance(value, PropertyType):
        return value
    try:
        return PropertyType(str(value).strip().lower())
    except ValueError:
        allowed = ", ".join(t.value for t in PropertyType)
        raise InvalidInputError(
            "property_type", f"unknown type {value!r}, expected one of {allowed}"
        )


def age_adjustment_factor(
    age_years: float, policy: ServiceChargePolicy = DEFAULT_SERVICE_CHARGE_POLICY
) -> float:
    """Newer buildings cost more to service, older ones less."""
    if age_years < policy.new_building_max_age:
        return policy.new_building_factor
    if age_years > policy.old_building_min_age:
        return policy.old_building_factor
    return 1.0


def calculate_amenity_surcharge(
    amenities: Union[Dict[str, bool], Iterable],
    policy: ServiceChargePolicy = DEFAULT_SERVICE_CHARGE_POLICY,
) -> float:
    """
    Sum the flat surcharge of every amenity flagged True.

    A plain collection of names such as {"pool", "gym"} marks each listed
    amenity as present.
    """
    if isinstance(amenities, Mapping):
        flags = amenities.items()
    elif isinstance(amenities, Iterable) and not isinstance(amenities, (str, bytes)):
        flags = dict.fromkeys(amenities, True).items()
    else:
        raise InvalidInputError(
            "amenities", "expected a mapping of flags or a collection of names"
        )

    total = 0.0
    for name, enabled in flags:
        key = name.value if isinstance(name, Amenity) else str(name).lower()
        if key not in policy.amenity_surcharges:
            raise InvalidInputError("amenities", f"unknown amenity {name!r}")
        if enabled:
            total += policy.amenity_surcharges[key]
    return total


def estimate_service_charge(
    inputs: ServiceChargeInputs,
    policy: ServiceChargePolicy = DEFAULT_SERVICE_CHARGE_POLICY,
) -> ServiceChargeResult:
    """
    Estimate the annual service charge.

    base = size * rate / 1000, scaled by the age factor, then amenity
    surcharges are added on top.

    Raises:
        InvalidInputError: If the type or an amenity is unknown, or size/age
            are out of range
    """
    property_type = parse_property_type(inputs.property_type)
    require_positive("size_sq_ft", inputs.size_sq_ft)
    require_non_negative("age_years", inputs.age_years)

    base_rate = policy.base_rates[property_type.value]
    base_charge = inputs.size_sq_ft * (base_rate / 1000)
    age_factor = age_adjustment_factor(inputs.age_years, policy)
    amenity_surcharge = calculate_amenity_surcharge(inputs.amenities, policy)

    annual_estimate = base_charge * age_factor + amenity_surcharge

    return ServiceChargeResult(
        base_charge=base_charge,
        age_factor=age_factor,
        amenity_surcharge=amenity_surcharge,
        annual_estimate=annual_estimate,
        monthly_estimate=annual_estimate / 12,
    )
