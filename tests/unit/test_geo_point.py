import pytest
from src.domain.models.geo import GeoPoint, ReferencePoint


def test_geo_point_accepts_valid_coordinates() -> None:
    p = GeoPoint(lat=31.634, lon=74.8723)
    assert p.lat == 31.634
    assert p.lon == 74.8723


@pytest.mark.parametrize(
    ("lat", "lon"),
    [
        (-90.0001, 0.0),
        (90.0001, 0.0),
        (0.0, -180.0001),
        (0.0, 180.0001),
        (float("nan"), 0.0),
        (0.0, float("inf")),
    ],
)
def test_geo_point_rejects_out_of_range_coordinates(lat: float, lon: float) -> None:
    with pytest.raises(ValueError):
        GeoPoint(lat=lat, lon=lon)


def test_reference_point_exposes_coordinates() -> None:
    ref = ReferencePoint(location=GeoPoint(lat=30.9, lon=75.85), accuracy_m=12.0)
    assert (ref.lat, ref.lon, ref.accuracy_m) == (30.9, 75.85, 12.0)
