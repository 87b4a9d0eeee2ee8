"""
Application services module.
"""

from app.services.catalog import (
    PropertyCatalog,
    PropertyNotFoundError,
    PropertyRecord,
    get_property_catalog,
)

__all__ = [
    "PropertyCatalog",
    "PropertyNotFoundError",
    "PropertyRecord",
    "get_property_catalog",
]
