from __future__ import annotations

from dataclasses import dataclass

from .route import TransitRoute
from .stop import Stop
from .vehicle import VehicleSnapshot


@dataclass(frozen=True, slots=True)
class StopDistance:
    stop: Stop
    distance_km: float


@dataclass(frozen=True, slots=True)
class VehicleDistance:
    vehicle: VehicleSnapshot
    distance_km: float


@dataclass(frozen=True, slots=True)
class RankedVehicle:
    vehicle: VehicleSnapshot
    route: TransitRoute | None
    distance_km: float
