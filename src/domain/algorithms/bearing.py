"""Planar 8-point compass bearings.

The angle is `atan2(dlon, dlat)` on raw degrees, not a spherical bearing. At
the regional scale of a bus network the skew is small enough for display.
"""

from __future__ import annotations

import math
from enum import Enum

from src.domain.models import GeoPoint


class CompassDirection(str, Enum):
    NORTH = "North"
    NORTHEAST = "Northeast"
    EAST = "East"
    SOUTHEAST = "Southeast"
    SOUTH = "South"
    SOUTHWEST = "Southwest"
    WEST = "West"
    NORTHWEST = "Northwest"


# Clockwise from North; index i covers [45*i - 22.5, 45*i + 22.5).
_SECTORS: tuple[CompassDirection, ...] = (
    CompassDirection.NORTH,
    CompassDirection.NORTHEAST,
    CompassDirection.EAST,
    CompassDirection.SOUTHEAST,
    CompassDirection.SOUTH,
    CompassDirection.SOUTHWEST,
    CompassDirection.WEST,
    CompassDirection.NORTHWEST,
)


def planar_angle_deg(origin: GeoPoint, target: GeoPoint) -> float:
    """Angle in (-180, 180], clockwise from north."""

    return math.degrees(
        math.atan2(target.lon - origin.lon, target.lat - origin.lat)
    )


def compass_sector(angle_deg: float) -> CompassDirection:
    index = math.floor((angle_deg + 22.5) / 45.0) % 8
    return _SECTORS[index]


def bearing_degrees(origin: GeoPoint, target: GeoPoint) -> float:
    return planar_angle_deg(origin, target) % 360.0


def direction(
    origin: GeoPoint | None, target: GeoPoint | None
) -> CompassDirection | None:
    if origin is None or target is None:
        return None
    return compass_sector(planar_angle_deg(origin, target))
