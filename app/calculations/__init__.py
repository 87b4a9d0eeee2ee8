"""
Financial Calculation Engine

Pure calculation modules for the property calculators: mortgage
amortization, upfront costs, service charges, rent vs buy, property
comparison and the buyer document checklist. Nothing here performs I/O or
keeps state between calls.
"""

from app.calculations import (
    amortization,
    comparison,
    costs,
    documents,
    policy,
    rent_vs_buy,
    service_charge,
)
from app.calculations.errors import InvalidInputError

__all__ = [
    "amortization",
    "comparison",
    "costs",
    "documents",
    "policy",
    "rent_vs_buy",
    "service_charge",
    "InvalidInputError",
]
