from __future__ import annotations

from src.app.services.formatting import format_distance, format_location
from src.domain.models.geo import GeoPoint, ReferencePoint


def test_format_distance_units() -> None:
    assert format_distance(None) == "—"
    assert format_distance(0.85) == "850 m"
    assert format_distance(0.0) == "0 m"
    assert format_distance(1.0) == "1.0 km"
    assert format_distance(12.345) == "12.3 km"


def test_format_location() -> None:
    assert format_location(None) == "Location unavailable"

    ref = ReferencePoint(location=GeoPoint(lat=31.634, lon=74.8723))
    assert format_location(ref) == "31.6340, 74.8723"

    with_accuracy = ReferencePoint(
        location=GeoPoint(lat=31.634, lon=74.8723), accuracy_m=12.4
    )
    assert format_location(with_accuracy) == "31.6340, 74.8723 (±12 m)"
