"""
Workshop discovery: text search, filtering and proximity ranking of workshops.
"""
from typing import Optional, Sequence

from .models import (
    Coordinates,
    FilterCriteria,
    MapBounds,
    MapViewport,
    RankedWorkshop,
    SearchResult,
    Workshop,
)
from .pipeline import (
    discover,
    distance,
    radius_from_zoom,
    run_discovery,
    within_bounds,
    WorkshopFilter,
    WorkshopSearch,
)

__version__ = "0.1.0"


def search(query: Optional[str], workshops: Sequence[Workshop]) -> list[SearchResult]:
    """Rank workshops by relevance to a query using the default configuration."""
    return WorkshopSearch().search(query, workshops)


def filter_workshops(
    workshops: Sequence[Workshop],
    criteria: Optional[FilterCriteria] = None,
) -> list[Workshop]:
    """Apply filter criteria using the default configuration."""
    return WorkshopFilter().filter(workshops, criteria)


__all__ = [
    "Coordinates",
    "FilterCriteria",
    "MapBounds",
    "MapViewport",
    "RankedWorkshop",
    "SearchResult",
    "Workshop",
    "discover",
    "distance",
    "filter_workshops",
    "radius_from_zoom",
    "run_discovery",
    "search",
    "within_bounds",
]
