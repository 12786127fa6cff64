from __future__ import annotations

import math

from src.domain.models import GeoPoint

EARTH_RADIUS_M = 6371000.0
EARTH_RADIUS_KM = 6371.0


def haversine_distance_m(a: GeoPoint, b: GeoPoint) -> float:
    """Great-circle distance in meters."""

    lat1 = math.radians(a.lat)
    lon1 = math.radians(a.lon)
    lat2 = math.radians(b.lat)
    lon2 = math.radians(b.lon)

    dlat = lat2 - lat1
    dlon = lon2 - lon1

    s = (
        math.sin(dlat / 2.0) ** 2
        + math.cos(lat1) * math.cos(lat2) * math.sin(dlon / 2.0) ** 2
    )
    # Rounding can push s a hair above 1 for antipodal points.
    return 2.0 * EARTH_RADIUS_M * math.asin(math.sqrt(min(1.0, s)))


def haversine_distance_km(a: GeoPoint, b: GeoPoint) -> float:
    """Great-circle distance in kilometers."""

    return haversine_distance_m(a, b) / 1000.0


def is_finite_point(lat: float | None, lon: float | None) -> bool:
    if lat is None or lon is None:
        return False
    return math.isfinite(lat) and math.isfinite(lon)


def interpolate(a: GeoPoint, b: GeoPoint, t: float) -> GeoPoint:
    """Linear interpolation in lat/lon space (no geodesic correction)."""

    t = max(0.0, min(1.0, float(t)))
    return GeoPoint(
        lat=a.lat + (b.lat - a.lat) * t,
        lon=a.lon + (b.lon - a.lon) * t,
    )
