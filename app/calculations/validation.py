"""
Input validation helpers shared by the calculators.

Every check raises InvalidInputError naming the offending field, so callers
can surface the message directly.
"""

import math

from app.calculations.errors import InvalidInputError


def require_finite(field: str, value: float) -> None:
    if value is None or not math.isfinite(value):
        raise InvalidInputError(field, "must be a finite number")


def require_positive(field: str, value: float) -> None:
    require_finite(field, value)
    if value <= 0:
        raise InvalidInputError(field, "must be greater than zero")


def require_non_negative(field: str, value: float) -> None:
    require_finite(field, value)
    if value < 0:
        raise InvalidInputError(field, "cannot be negative")


def require_between(field: str, value: float, low: float, high: float) -> None:
    """Check that low <= value <= high."""
    require_finite(field, value)
    if value < low or value > high:
        raise InvalidInputError(field, f"must be between {low:g} and {high:g}")


def require_whole_years(field: str, value: int, maximum: int) -> None:
    """Check that value is an integer number of years in 1..maximum."""
    if isinstance(value, bool) or not isinstance(value, int):
        raise InvalidInputError(field, "must be a whole number of years")
    if value <= 0 or value > maximum:
        raise InvalidInputError(field, f"must be between 1 and {maximum} years")
