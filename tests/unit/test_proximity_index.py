from __future__ import annotations

import math

import pytest

from src.domain.algorithms.geo_utils import EARTH_RADIUS_KM
from src.domain.algorithms.proximity import ProximityIndex
from src.domain.models import (
    GeoPoint,
    ReferencePoint,
    RouteGraph,
    Stop,
    TransitRoute,
    Vehicle,
)

REF = ReferencePoint(location=GeoPoint(lat=30.0, lon=75.0), accuracy_m=10.0)


def _north_of_ref(km: float) -> GeoPoint:
    return GeoPoint(lat=REF.lat + math.degrees(km / EARTH_RADIUS_KM), lon=REF.lon)


def _stop(stop_id: str, km: float) -> Stop:
    return Stop(id=stop_id, name=stop_id, location=_north_of_ref(km))


def _vehicle(vehicle_id: str, km: float, route_id: str | None = "R1") -> Vehicle:
    p = _north_of_ref(km)
    return Vehicle(id=vehicle_id, route_id=route_id, lat=p.lat, lon=p.lon)


def test_nearby_stops_respects_radius_and_sorts_ascending() -> None:
    stops = [_stop("far", 2.5), _stop("edge", 1.9), _stop("close", 0.3)]

    out = ProximityIndex().nearby_stops(REF, stops)

    assert [r.stop.id for r in out] == ["close", "edge"]
    assert out[0].distance_km == pytest.approx(0.3, rel=1e-6)
    assert out[1].distance_km == pytest.approx(1.9, rel=1e-6)


def test_nearby_stops_truncates_to_limit_with_per_query_override() -> None:
    stops = [_stop(f"S{i}", 0.1 * (i + 1)) for i in range(8)]
    index = ProximityIndex()

    assert len(index.nearby_stops(REF, stops)) == 5
    assert [r.stop.id for r in index.nearby_stops(REF, stops, limit=2)] == ["S0", "S1"]
    assert len(index.nearby_stops(REF, stops, radius_km=0.25)) == 2


def test_nearby_stops_without_reference_is_empty() -> None:
    assert ProximityIndex().nearby_stops(None, [_stop("S", 0.1)]) == ()


def test_instance_defaults_are_configurable() -> None:
    stops = [_stop("S0", 0.5), _stop("S1", 2.5), _stop("S2", 2.8)]
    index = ProximityIndex(radius_km=3.0, limit=2)

    assert [r.stop.id for r in index.nearby_stops(REF, stops)] == ["S0", "S1"]


def test_nearest_vehicle_breaks_ties_by_id() -> None:
    vehicles = [_vehicle("b", 1.0), _vehicle("a", 1.0), _vehicle("c", 3.0)]

    found = ProximityIndex().nearest_vehicle(REF, vehicles)

    assert found is not None
    assert found.vehicle.vehicle_id == "a"
    assert found.distance_km == pytest.approx(1.0, rel=1e-6)


def test_nearest_vehicle_skips_non_finite_positions() -> None:
    broken = Vehicle(id="a", route_id="R1", lat=float("nan"), lon=75.0)
    vehicles = [broken, _vehicle("z", 4.0)]

    found = ProximityIndex().nearest_vehicle(REF, vehicles)

    assert found is not None
    assert found.vehicle.vehicle_id == "z"


def test_nearest_vehicle_none_cases() -> None:
    index = ProximityIndex()
    assert index.nearest_vehicle(None, [_vehicle("a", 1.0)]) is None
    assert index.nearest_vehicle(REF, []) is None


def test_distance_sorted_vehicles_resolves_routes() -> None:
    route = TransitRoute(id="R1", number="PB-1", stops=())
    graph = RouteGraph.from_routes([route])
    vehicles = [
        _vehicle("v3", 5.0),
        _vehicle("v1", 0.5, route_id="ghost"),
        _vehicle("v2", 2.0),
        Vehicle(id="v0", route_id="R1", lat=float("inf"), lon=75.0),
    ]

    ranked = ProximityIndex().distance_sorted_vehicles(REF, vehicles, graph)

    assert [r.vehicle.vehicle_id for r in ranked] == ["v1", "v2", "v3"]
    assert ranked[0].route is None
    assert ranked[1].route == route
    assert ranked == tuple(sorted(ranked, key=lambda r: r.distance_km))


def test_distance_sorted_vehicles_without_reference_is_empty() -> None:
    graph = RouteGraph()
    vehicles = [_vehicle("a", 1.0)]
    assert ProximityIndex().distance_sorted_vehicles(None, vehicles, graph) == ()
