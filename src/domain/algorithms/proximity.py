from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable

from src.domain.models import (
    GeoPoint,
    RankedVehicle,
    ReferencePoint,
    RouteGraph,
    Stop,
    StopDistance,
    Vehicle,
    VehicleDistance,
)

from .geo_utils import haversine_distance_km, is_finite_point


def _vehicle_distance_km(ref: ReferencePoint, vehicle: Vehicle) -> float | None:
    if not is_finite_point(vehicle.lat, vehicle.lon):
        return None
    try:
        location = GeoPoint(lat=vehicle.lat, lon=vehicle.lon)
    except ValueError:
        return None
    return haversine_distance_km(ref.location, location)


@dataclass(slots=True)
class ProximityIndex:
    """Distance queries against an observer's reference point.

    All queries are linear scans; the fleet and stop sets are small. Items with
    unusable coordinates are left out of the affected result only.
    """

    radius_km: float = 2.0
    limit: int = 5

    def nearby_stops(
        self,
        ref: ReferencePoint | None,
        stops: Iterable[Stop],
        *,
        radius_km: float | None = None,
        limit: int | None = None,
    ) -> tuple[StopDistance, ...]:
        if ref is None:
            return ()

        radius = self.radius_km if radius_km is None else float(radius_km)
        max_count = self.limit if limit is None else int(limit)
        if max_count <= 0:
            return ()

        scored: list[StopDistance] = []
        for stop in stops:
            d = haversine_distance_km(ref.location, stop.location)
            if d <= radius:
                scored.append(StopDistance(stop=stop, distance_km=d))

        scored.sort(key=lambda x: (x.distance_km, x.stop.id))
        return tuple(scored[:max_count])

    def nearest_vehicle(
        self, ref: ReferencePoint | None, vehicles: Iterable[Vehicle]
    ) -> VehicleDistance | None:
        if ref is None:
            return None

        best: tuple[float, str, Vehicle] | None = None
        for vehicle in vehicles:
            d = _vehicle_distance_km(ref, vehicle)
            if d is None:
                continue
            key = (d, vehicle.id, vehicle)
            if best is None or key[:2] < best[:2]:
                best = key

        if best is None:
            return None
        d, _, vehicle = best
        return VehicleDistance(vehicle=vehicle.snapshot(), distance_km=d)

    def distance_sorted_vehicles(
        self,
        ref: ReferencePoint | None,
        vehicles: Iterable[Vehicle],
        graph: RouteGraph,
    ) -> tuple[RankedVehicle, ...]:
        if ref is None:
            return ()

        ranked: list[RankedVehicle] = []
        for vehicle in vehicles:
            d = _vehicle_distance_km(ref, vehicle)
            if d is None:
                continue
            ranked.append(
                RankedVehicle(
                    vehicle=vehicle.snapshot(),
                    route=graph.route(vehicle.route_id),
                    distance_km=d,
                )
            )

        ranked.sort(key=lambda x: (x.distance_km, x.vehicle.vehicle_id))
        return tuple(ranked)
