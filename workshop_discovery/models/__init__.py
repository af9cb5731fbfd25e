"""
Pydantic models for workshop discovery.
All data contracts are defined here for strict validation.
"""

from .geo import Coordinates, MapBounds, MapViewport
from .workshop import PlainTag, StructuredTag, Specialty, Workshop, parse_specialty
from .filters import FilterCriteria, SortOption
from .results import (
    MatchField,
    SearchResult,
    RankedWorkshop,
    DiscoveryMetadata,
    DiscoveryRun,
)

__all__ = [
    # Geo
    "Coordinates",
    "MapBounds",
    "MapViewport",
    # Workshop
    "PlainTag",
    "StructuredTag",
    "Specialty",
    "Workshop",
    "parse_specialty",
    # Filters
    "FilterCriteria",
    "SortOption",
    # Results
    "MatchField",
    "SearchResult",
    "RankedWorkshop",
    "DiscoveryMetadata",
    "DiscoveryRun",
]
