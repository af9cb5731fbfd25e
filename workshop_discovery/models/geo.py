"""
Geographic models - coordinates, map bounds and the map viewport.
"""
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


def _geo_config():
    from ..config import get_config

    return get_config().geo


class Coordinates(BaseModel):
    """A point in degrees. Range is not validated; callers supply sane values."""
    model_config = ConfigDict(frozen=True)

    lat: float
    lng: float


class MapBounds(BaseModel):
    """
    Visible map box in degrees.
    When west > east the box crosses the antimeridian.
    """
    model_config = ConfigDict(frozen=True)

    north: float
    south: float
    east: float
    west: float


class MapViewport(BaseModel):
    """Map centre plus the search radius derived from the current zoom."""
    model_config = ConfigDict(frozen=True)

    center: Coordinates
    radius_m: float = Field(
        default_factory=lambda: _geo_config().default_radius_m,
        description="Search radius in meters",
    )

    @property
    def radius_km(self) -> float:
        return self.radius_m / 1000

    @classmethod
    def initial(cls, user_location: Optional[Coordinates] = None) -> "MapViewport":
        """
        Viewport before the map has reported anything.
        Centred on the user, or on the fallback location when theirs is unknown.
        """
        geo = _geo_config()
        center = user_location or Coordinates(lat=geo.fallback_lat, lng=geo.fallback_lng)
        return cls(center=center, radius_m=geo.default_radius_m)

    @classmethod
    def from_zoom(cls, center: Coordinates, zoom: float) -> "MapViewport":
        """Build a viewport the way the map reports it: centre and zoom level."""
        from ..pipeline.geo import radius_from_zoom

        return cls(center=center, radius_m=radius_from_zoom(zoom))
