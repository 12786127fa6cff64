from __future__ import annotations

import math

from src.domain.algorithms.geo_utils import (
    haversine_distance_km,
    haversine_distance_m,
    interpolate,
    is_finite_point,
)
from src.domain.models.geo import GeoPoint


def test_haversine_zero_for_identical_points() -> None:
    p = GeoPoint(lat=31.634, lon=74.8723)
    assert haversine_distance_m(p, p) == 0.0
    assert haversine_distance_km(p, p) == 0.0


def test_haversine_is_symmetric_and_reasonable_scale() -> None:
    # Rough sanity check: 1 degree of latitude is about 111km.
    a = GeoPoint(lat=0.0, lon=0.0)
    b = GeoPoint(lat=1.0, lon=0.0)

    d1 = haversine_distance_m(a, b)
    d2 = haversine_distance_m(b, a)

    assert abs(d1 - d2) < 1e-6
    assert 100_000.0 < d1 < 120_000.0


def test_km_and_m_variants_agree() -> None:
    a = GeoPoint(lat=31.634, lon=74.8723)
    b = GeoPoint(lat=30.7333, lon=76.7794)

    assert math.isclose(
        haversine_distance_km(a, b) * 1000.0, haversine_distance_m(a, b)
    )
    # Amritsar to Chandigarh is roughly 200 km as the crow flies.
    assert 180.0 < haversine_distance_km(a, b) < 230.0


def test_haversine_handles_antipodal_points() -> None:
    d = haversine_distance_km(
        GeoPoint(lat=0.0, lon=0.0), GeoPoint(lat=0.0, lon=180.0)
    )
    assert math.isclose(d, math.pi * 6371.0, rel_tol=1e-9)


def test_interpolate_is_linear_and_clamped() -> None:
    a = GeoPoint(lat=10.0, lon=20.0)
    b = GeoPoint(lat=12.0, lon=24.0)

    mid = interpolate(a, b, 0.5)
    assert (mid.lat, mid.lon) == (11.0, 22.0)
    assert interpolate(a, b, 0.0) == a
    assert interpolate(a, b, 1.5) == b


def test_is_finite_point() -> None:
    assert is_finite_point(1.0, 2.0)
    assert not is_finite_point(float("nan"), 2.0)
    assert not is_finite_point(1.0, float("inf"))
    assert not is_finite_point(None, 2.0)
