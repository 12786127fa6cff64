from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class VehicleStatus(str, Enum):
    ON_TIME = "on-time"
    DELAYED = "delayed"
    ONLINE = "online"
    OFFLINE = "offline"


@dataclass(slots=True)
class Progress:
    """Position along a route as (segment start stop index, fraction).

    `direction` is only consulted by the bounce traversal policy.
    """

    segment_index: int = 0
    t: float = 0.0
    direction: int = 1


@dataclass(frozen=True, slots=True)
class VehicleSnapshot:
    vehicle_id: str
    route_id: str | None
    lat: float
    lon: float
    next_stop: str | None
    status: VehicleStatus
    speed_kmh: float | None = None
    heading: float | None = None
    passengers: int | None = None
    capacity: int | None = None


@dataclass(slots=True)
class Vehicle:
    """Mutable simulated vehicle.

    Live position fields are overwritten by the simulator on each tick; readers
    outside the fleet lock should work with `snapshot()` instead.
    """

    id: str
    route_id: str | None
    lat: float
    lon: float
    speed_kmh: float | None = None
    heading: float | None = None
    passengers: int | None = None
    capacity: int | None = None
    status: VehicleStatus = VehicleStatus.ON_TIME
    next_stop: str | None = None
    progress: Progress | None = None

    def snapshot(self) -> VehicleSnapshot:
        return VehicleSnapshot(
            vehicle_id=self.id,
            route_id=self.route_id,
            lat=self.lat,
            lon=self.lon,
            next_stop=self.next_stop,
            status=self.status,
            speed_kmh=self.speed_kmh,
            heading=self.heading,
            passengers=self.passengers,
            capacity=self.capacity,
        )
