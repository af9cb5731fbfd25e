"""
Discovery orchestrator - search, filter, proximity sort and map radius.
"""
import logging
import math
import uuid
from datetime import datetime
from typing import NamedTuple, Optional, Sequence

from ..config import Config, get_config
from ..models.filters import FilterCriteria
from ..models.geo import Coordinates, MapViewport
from ..models.results import DiscoveryMetadata, DiscoveryRun, RankedWorkshop, SearchResult
from ..models.workshop import Workshop

from .filter import WorkshopFilter, sort_workshops
from .geo import distances_from
from .search import WorkshopSearch


logger = logging.getLogger(__name__)


class _StageCounts(NamedTuple):
    after_search: int
    after_filter: int
    after_radius: int


def _run_stages(
    query: Optional[str],
    workshops: Sequence[Workshop],
    criteria: Optional[FilterCriteria],
    user_location: Optional[Coordinates],
    viewport: Optional[MapViewport],
    map_mode: bool,
    config: Config,
) -> tuple[list[RankedWorkshop], _StageCounts]:
    workshops = list(workshops)

    # Step 1: Text search (blank query passes everything through unscored)
    search_results: dict[int, SearchResult] = {}
    if query and query.strip():
        results = WorkshopSearch(config.search).search(query, workshops)
        search_results = {id(r.workshop): r for r in results}
        working = [r.workshop for r in results]
    else:
        working = workshops
    after_search = len(working)

    # Step 2: Filter constraints
    working = WorkshopFilter(config.filters).filter(working, criteria)
    after_filter = len(working)

    # Step 3: Proximity sort, then the filter sheet's ordering if one was picked
    user_distances: dict[int, float] = {}
    if user_location is not None:
        distances = distances_from(user_location, working)
        user_distances = {
            id(w): float(d) for w, d in zip(working, distances) if not math.isnan(d)
        }
        # Workshops that can't be placed go last, in their current order
        working = sorted(
            working,
            key=lambda w: (id(w) not in user_distances, user_distances.get(id(w), 0.0)),
        )
    if criteria is not None:
        working = sort_workshops(working, criteria.sort)

    # Step 4: Map radius
    if map_mode and viewport is not None:
        center_distances = distances_from(viewport.center, working)
        working = [
            w for w, d in zip(working, center_distances)
            if not math.isnan(d) and d <= viewport.radius_km
        ]
        logger.info(f"Within {viewport.radius_km:.1f} km of map centre: {len(working)} workshops")
    after_radius = len(working)

    ranked = []
    for rank, workshop in enumerate(working, 1):
        result = search_results.get(id(workshop))
        ranked.append(RankedWorkshop(
            rank=rank,
            workshop=workshop,
            score=result.score if result else None,
            matches=list(result.matches) if result else [],
            distance_km=user_distances.get(id(workshop)),
        ))

    return ranked, _StageCounts(after_search, after_filter, after_radius)


def discover(
    query: Optional[str],
    workshops: Sequence[Workshop],
    criteria: Optional[FilterCriteria] = None,
    user_location: Optional[Coordinates] = None,
    viewport: Optional[MapViewport] = None,
    map_mode: bool = False,
) -> list[RankedWorkshop]:
    """
    Produce the ordered workshop list for one discovery request.

    Pipeline steps:
    1. Text search when the query is not blank (top results only)
    2. Category, rating and price filters
    3. Sort by distance to the user when their location is known
    4. Drop workshops outside the map radius in map mode

    Each step only removes or reorders workshops. Identical inputs always
    give identical output.
    """
    ranked, _ = _run_stages(
        query, workshops, criteria, user_location, viewport, map_mode, get_config()
    )
    return ranked


def run_discovery(
    query: Optional[str],
    workshops: Sequence[Workshop],
    criteria: Optional[FilterCriteria] = None,
    user_location: Optional[Coordinates] = None,
    viewport: Optional[MapViewport] = None,
    map_mode: bool = False,
) -> DiscoveryRun:
    """
    Run discovery and return the results with run metadata.

    Same ranking as discover(); adds per-stage counts and warnings for
    debugging why a workshop was or wasn't shown.
    """
    config = get_config()
    run_id = str(uuid.uuid4())[:8]
    started_at = datetime.now()
    criteria = criteria or FilterCriteria()

    logger.info(f"Starting discovery run {run_id} with {len(workshops)} workshops")

    ranked, counts = _run_stages(
        query, workshops, criteria, user_location, viewport, map_mode, config
    )

    warnings = []
    if criteria.max_price is not None and criteria.max_price >= config.filters.price_sentinel:
        warnings.append(
            f"max_price {criteria.max_price:g} is at or above {config.filters.price_sentinel:g}; "
            "treated as no upper bound"
        )
    if map_mode and viewport is None:
        warnings.append("Map mode without a viewport; radius filter skipped")
    if user_location is not None:
        unplaced = sum(1 for r in ranked if r.distance_km is None)
        if unplaced:
            warnings.append(f"{unplaced} workshops have no coordinates")

    metadata = DiscoveryMetadata(
        run_id=run_id,
        started_at=started_at,
        completed_at=datetime.now(),
        query=query or "",
        filters=criteria,
        map_mode=map_mode,
        total_workshops=len(workshops),
        after_search=counts.after_search,
        after_filter=counts.after_filter,
        after_radius=counts.after_radius,
        warnings=warnings,
    )

    logger.info(f"Discovery run {run_id} completed: {len(ranked)} workshops")
    return DiscoveryRun(metadata=metadata, results=ranked)
