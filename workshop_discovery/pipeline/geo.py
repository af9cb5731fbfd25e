"""
Geographic helpers - haversine distance, zoom to radius, bounds checks.
"""
import math
from typing import Optional, Sequence

import numpy as np

from ..config import get_config
from ..models.geo import Coordinates, MapBounds
from ..models.workshop import Workshop


def _haversine_km(lat1, lng1, lat2, lng2, earth_radius_km: float):
    """Haversine over scalars or numpy arrays (degrees in, km out)."""
    lat1_rad = np.radians(lat1)
    lat2_rad = np.radians(lat2)
    dlat = lat2_rad - lat1_rad
    dlng = np.radians(lng2) - np.radians(lng1)
    a = np.sin(dlat / 2) ** 2 + np.cos(lat1_rad) * np.cos(lat2_rad) * np.sin(dlng / 2) ** 2
    # Rounding can push a a hair outside [0, 1]
    a = np.clip(a, 0.0, 1.0)
    return earth_radius_km * 2 * np.arcsin(np.sqrt(a))


def distance(a: Coordinates, b: Coordinates) -> float:
    """Great-circle distance between two points in kilometers."""
    earth_radius_km = get_config().geo.earth_radius_km
    return float(_haversine_km(a.lat, a.lng, b.lat, b.lng, earth_radius_km))


def distances_from(origin: Coordinates, workshops: Sequence[Workshop]) -> np.ndarray:
    """
    Distance in km from origin to every workshop.
    Workshops without usable coordinates get NaN.
    """
    if not workshops:
        return np.empty(0)

    lat_arr = np.full(len(workshops), np.nan)
    lng_arr = np.full(len(workshops), np.nan)
    for i, workshop in enumerate(workshops):
        coords = workshop.coordinates
        if coords is not None:
            lat_arr[i] = coords.lat
            lng_arr[i] = coords.lng

    valid = ~np.isnan(lat_arr) & ~np.isnan(lng_arr)
    distances = np.full(len(workshops), np.nan)
    distances[valid] = _haversine_km(
        origin.lat, origin.lng, lat_arr[valid], lng_arr[valid], get_config().geo.earth_radius_km
    )
    return distances


def radius_from_zoom(zoom: float) -> float:
    """
    Search radius in meters for a map zoom level.

    Halves with every zoom step past the reference zoom and is clamped to
    the configured [min, max] range, so any zoom value is accepted.
    """
    geo = get_config().geo
    # Anything past +/-64 doublings is far outside the clamp range anyway.
    # Clamped before any float conversion so huge ints can't overflow.
    zoom = min(max(zoom, geo.reference_zoom - 64), geo.reference_zoom + 64)
    if math.isnan(zoom):
        return geo.max_radius_m

    radius = geo.base_radius_m * 2.0 ** (geo.reference_zoom - zoom)
    return min(max(radius, geo.min_radius_m), geo.max_radius_m)


def within_bounds(point: Optional[Coordinates], bounds: MapBounds) -> bool:
    """Check if a point is inside the visible map bounds."""
    if point is None:
        return False

    if not (bounds.south <= point.lat <= bounds.north):
        return False

    if bounds.west <= bounds.east:
        return bounds.west <= point.lng <= bounds.east

    # Box wraps the antimeridian: [west, 180] or [-180, east]
    return point.lng >= bounds.west or point.lng <= bounds.east


def format_distance(km: float) -> str:
    """Human-readable distance, meters below 1 km."""
    if km < 1:
        return f"{km * 1000:.0f} m"
    return f"{km:.1f} km"
