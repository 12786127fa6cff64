from __future__ import annotations

from pydantic import BaseModel, Field


class GeoPointSchema(BaseModel):
    lat: float = Field(..., ge=-90.0, le=90.0)
    lon: float = Field(..., ge=-180.0, le=180.0)


class LocationUpdateSchema(BaseModel):
    lat: float = Field(..., ge=-90.0, le=90.0)
    lon: float = Field(..., ge=-180.0, le=180.0)
    accuracy_m: float | None = Field(default=None, ge=0.0)


class LocationResponseSchema(BaseModel):
    delivered_to: int
    display: str


class StopSchema(BaseModel):
    stop_id: str
    name: str
    location: GeoPointSchema


class TransitRouteSchema(BaseModel):
    route_id: str
    number: str | None = None
    name: str | None = None
    color: str | None = None
    color_class: str | None = None
    stops: list[StopSchema] = []


class VehicleSchema(BaseModel):
    vehicle_id: str
    route_id: str | None = None
    lat: float
    lon: float
    next_stop: str | None = None
    status: str
    speed_kmh: float | None = None
    heading: float | None = None
    passengers: int | None = None
    capacity: int | None = None


class NearbyStopSchema(BaseModel):
    stop: StopSchema
    distance_km: float
    distance_text: str


class NearestVehicleSchema(BaseModel):
    vehicle: VehicleSchema
    distance_km: float
    distance_text: str


class TrackedVehicleSchema(BaseModel):
    vehicle: VehicleSchema
    route: TransitRouteSchema | None = None
    distance_km: float
    distance_text: str
    direction: str | None = None


class TrackingStatusSchema(BaseModel):
    running: bool
    tick_interval_s: float
