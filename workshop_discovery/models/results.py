"""
Result models - search matches, ranked workshops and run exports.
"""
from datetime import datetime
from typing import Any, Literal, Optional

from pydantic import BaseModel, Field

from .filters import FilterCriteria
from .workshop import Workshop


MatchField = Literal["name", "tag", "location"]


class SearchResult(BaseModel):
    """A workshop with its text relevance score."""
    workshop: Workshop
    score: float = Field(ge=0)
    matches: list[MatchField] = Field(
        default_factory=list,
        description="Fields that matched at least one query token",
    )


class RankedWorkshop(BaseModel):
    """A workshop in its final position for one discovery request."""
    rank: int
    workshop: Workshop
    score: Optional[float] = Field(default=None, description="Relevance score; None when no query was given")
    matches: list[MatchField] = Field(default_factory=list)
    distance_km: Optional[float] = Field(
        default=None,
        description="Distance to the user; None when either position is unknown",
    )

    @property
    def distance_label(self) -> Optional[str]:
        """Card label such as '850 m' or '1.2 km'."""
        if self.distance_km is None:
            return None
        from ..pipeline.geo import format_distance

        return format_distance(self.distance_km)


class DiscoveryMetadata(BaseModel):
    """Metadata for a discovery run."""
    run_id: str = Field(description="Unique run identifier")
    started_at: datetime
    completed_at: Optional[datetime] = None

    # Request info
    query: str = ""
    filters: FilterCriteria = Field(default_factory=FilterCriteria)
    map_mode: bool = False

    # Stage counts
    total_workshops: int = 0
    after_search: int = 0
    after_filter: int = 0
    after_radius: int = 0

    warnings: list[str] = Field(default_factory=list)


class DiscoveryRun(BaseModel):
    """
    Complete output of a discovery run.
    Includes the data needed to debug why a workshop was or wasn't shown.
    """
    metadata: DiscoveryMetadata
    results: list[RankedWorkshop] = Field(default_factory=list)

    def to_minimal_export(self) -> dict[str, Any]:
        """Export minimal version for logging or analytics."""
        return {
            "metadata": {
                "run_id": self.metadata.run_id,
                "query": self.metadata.query,
                "exported_at": datetime.now().isoformat(),
            },
            "results": [
                {
                    "rank": r.rank,
                    "id": r.workshop.id,
                    "name": r.workshop.name,
                    "score": r.score,
                    "matches": list(r.matches),
                    "distance": r.distance_label,
                }
                for r in self.results
            ],
        }
