"""
Property catalog service.

Supplies property records to the calculators. The catalog is read-only
and held in memory; it is seeded with the demo listings on first use.
"""

import logging
from typing import Dict, Iterable, List, Optional
from dataclasses import dataclass

logger = logging.getLogger(__name__)


class PropertyNotFoundError(LookupError):
    """Raised when a property id is not in the catalog."""

    def __init__(self, property_id: str):
        self.property_id = property_id
        super().__init__(f"Property not found: {property_id}")


@dataclass(frozen=True)
class PropertyRecord:
    """A property listing."""

    id: str
    name: str
    location: str
    price: float
    size_sq_ft: Optional[float] = None
    bedrooms: Optional[int] = None
    bathrooms: Optional[int] = None
    property_type: Optional[str] = None
    community_name: Optional[str] = None
    is_furnished: bool = False
    year_built: Optional[int] = None


DEMO_PROPERTIES = [
    PropertyRecord(
        id="1",
        name="Luxury Apartment in Downtown",
        location="Downtown Dubai",
        price=1500000.0,
        size_sq_ft=1200.0,
        bedrooms=2,
        bathrooms=2,
        property_type="apartment",
        community_name="Downtown Dubai",
        is_furnished=True,
        year_built=2020,
    ),
    PropertyRecord(
        id="2",
        name="Spacious Villa in Arabian Ranches",
        location="Arabian Ranches",
        price=3500000.0,
        size_sq_ft=3500.0,
        bedrooms=4,
        bathrooms=4,
        property_type="villa",
        community_name="Arabian Ranches",
        is_furnished=False,
        year_built=2018,
    ),
    PropertyRecord(
        id="3",
        name="Modern Townhouse in Dubai Hills",
        location="Dubai Hills Estate",
        price=2800000.0,
        size_sq_ft=2200.0,
        bedrooms=3,
        bathrooms=3,
        property_type="townhouse",
        community_name="Dubai Hills Estate",
        is_furnished=False,
        year_built=2021,
    ),
    PropertyRecord(
        id="4",
        name="Beachfront Apartment in JBR",
        location="Jumeirah Beach Residence",
        price=2200000.0,
        size_sq_ft=1500.0,
        bedrooms=2,
        bathrooms=3,
        property_type="apartment",
        community_name="Jumeirah Beach Residence",
        is_furnished=True,
        year_built=2010,
    ),
    PropertyRecord(
        id="5",
        name="Penthouse in Marina",
        location="Dubai Marina",
        price=5000000.0,
        size_sq_ft=3000.0,
        bedrooms=4,
        bathrooms=5,
        property_type="penthouse",
        community_name="Dubai Marina",
        is_furnished=True,
        year_built=2015,
    ),
]


class PropertyCatalog:
    """In-memory property lookup."""

    def __init__(self, properties: Iterable[PropertyRecord] = ()):
        self._properties: Dict[str, PropertyRecord] = {}
        for prop in properties:
            if prop.id in self._properties:
                raise ValueError(f"Duplicate property id: {prop.id}")
            self._properties[prop.id] = prop

    def __len__(self) -> int:
        return len(self._properties)

    def get(self, property_id: str) -> PropertyRecord:
        """
        Look up a property by id.

        Raises:
            PropertyNotFoundError: If the id is unknown
        """
        prop = self._properties.get(property_id)
        if prop is None:
            logger.warning(f"Property lookup miss: {property_id}")
            raise PropertyNotFoundError(property_id)
        return prop

    def search(
        self,
        property_type: Optional[str] = None,
        min_price: Optional[float] = None,
        max_price: Optional[float] = None,
    ) -> List[PropertyRecord]:
        """List properties, optionally filtered by type and price range."""
        results = []
        for prop in self._properties.values():
            if property_type and (prop.property_type or "").lower() != property_type.lower():
                continue
            if min_price is not None and prop.price < min_price:
                continue
            if max_price is not None and prop.price > max_price:
                continue
            results.append(prop)
        return results


# Singleton instance
_catalog: Optional[PropertyCatalog] = None


def get_property_catalog() -> PropertyCatalog:
    """Get the property catalog singleton."""
    global _catalog
    if _catalog is None:
        _catalog = PropertyCatalog(DEMO_PROPERTIES)
        logger.info(f"Property catalog loaded with {len(_catalog)} listings")
    return _catalog
