from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, Query

from src.adapters.api.dependencies import get_location_provider, get_tracking_service
from src.adapters.api.schemas.tracking import (
    GeoPointSchema,
    LocationResponseSchema,
    LocationUpdateSchema,
    NearbyStopSchema,
    NearestVehicleSchema,
    StopSchema,
    TrackedVehicleSchema,
    TrackingStatusSchema,
    TransitRouteSchema,
    VehicleSchema,
)
from src.adapters.location.push_location_provider import PushLocationProvider
from src.app.services.formatting import format_distance, format_location
from src.app.services.tracking_service import TrackingService
from src.domain.models import (
    GeoPoint,
    ReferencePoint,
    Stop,
    TransitRoute,
    VehicleSnapshot,
)

router = APIRouter(prefix="/tracking", tags=["tracking"])


def _stop_to_schema(stop: Stop) -> StopSchema:
    return StopSchema(
        stop_id=stop.id,
        name=stop.name,
        location=GeoPointSchema(lat=stop.location.lat, lon=stop.location.lon),
    )


def _route_to_schema(route: TransitRoute) -> TransitRouteSchema:
    return TransitRouteSchema(
        route_id=route.id,
        number=route.number,
        name=route.name,
        color=route.color,
        color_class=route.color_class,
        stops=[_stop_to_schema(s) for s in route.stops],
    )


def _vehicle_to_schema(v: VehicleSnapshot) -> VehicleSchema:
    return VehicleSchema(
        vehicle_id=v.vehicle_id,
        route_id=v.route_id,
        lat=v.lat,
        lon=v.lon,
        next_stop=v.next_stop,
        status=v.status.value,
        speed_kmh=v.speed_kmh,
        heading=v.heading,
        passengers=v.passengers,
        capacity=v.capacity,
    )


def _status(service: TrackingService) -> TrackingStatusSchema:
    return TrackingStatusSchema(
        running=service.is_running, tick_interval_s=service.tick_interval_s
    )


@router.get("/routes", response_model=list[TransitRouteSchema])
def list_routes(
    service: TrackingService = Depends(get_tracking_service),
) -> list[TransitRouteSchema]:
    return [_route_to_schema(r) for r in service.routes()]


@router.get("/vehicles", response_model=list[VehicleSchema])
def list_vehicles(
    service: TrackingService = Depends(get_tracking_service),
) -> list[VehicleSchema]:
    return [_vehicle_to_schema(v) for v in service.vehicles()]


@router.post("/tick", response_model=list[VehicleSchema])
def tick(
    dt_s: float | None = Query(default=None, gt=0.0, le=86_400.0),
    service: TrackingService = Depends(get_tracking_service),
) -> list[VehicleSchema]:
    return [_vehicle_to_schema(v) for v in service.tick(dt_s)]


@router.post("/start", response_model=TrackingStatusSchema)
async def start_tracking(
    service: TrackingService = Depends(get_tracking_service),
) -> TrackingStatusSchema:
    await service.start()
    return _status(service)


@router.post("/stop", response_model=TrackingStatusSchema)
async def stop_tracking(
    service: TrackingService = Depends(get_tracking_service),
) -> TrackingStatusSchema:
    await service.stop()
    return _status(service)


@router.put("/location", response_model=LocationResponseSchema)
def update_location(
    req: LocationUpdateSchema,
    provider: PushLocationProvider = Depends(get_location_provider),
) -> LocationResponseSchema:
    ref = ReferencePoint(
        location=GeoPoint(lat=req.lat, lon=req.lon), accuracy_m=req.accuracy_m
    )
    delivered = provider.publish(ref)
    return LocationResponseSchema(delivered_to=delivered, display=format_location(ref))


@router.delete("/location", response_model=LocationResponseSchema)
def clear_location(
    provider: PushLocationProvider = Depends(get_location_provider),
) -> LocationResponseSchema:
    delivered = provider.publish(None)
    return LocationResponseSchema(delivered_to=delivered, display=format_location(None))


@router.get("/stops/nearby", response_model=list[NearbyStopSchema])
def nearby_stops(
    radius_km: float | None = Query(default=None, gt=0.0),
    limit: int | None = Query(default=None, ge=1),
    service: TrackingService = Depends(get_tracking_service),
) -> list[NearbyStopSchema]:
    return [
        NearbyStopSchema(
            stop=_stop_to_schema(row.stop),
            distance_km=row.distance_km,
            distance_text=format_distance(row.distance_km),
        )
        for row in service.nearby_stops(radius_km=radius_km, limit=limit)
    ]


@router.get("/vehicles/nearest", response_model=NearestVehicleSchema)
def nearest_vehicle(
    service: TrackingService = Depends(get_tracking_service),
) -> NearestVehicleSchema:
    found = service.nearest_vehicle()
    if found is None:
        raise HTTPException(status_code=404, detail="No vehicle or location available")
    return NearestVehicleSchema(
        vehicle=_vehicle_to_schema(found.vehicle),
        distance_km=found.distance_km,
        distance_text=format_distance(found.distance_km),
    )


@router.get("/vehicles/by-distance", response_model=list[TrackedVehicleSchema])
def vehicles_by_distance(
    service: TrackingService = Depends(get_tracking_service),
) -> list[TrackedVehicleSchema]:
    return [
        TrackedVehicleSchema(
            vehicle=_vehicle_to_schema(row.vehicle),
            route=_route_to_schema(row.route) if row.route is not None else None,
            distance_km=row.distance_km,
            distance_text=format_distance(row.distance_km),
            direction=row.direction.value if row.direction is not None else None,
        )
        for row in service.distance_tracker()
    ]
