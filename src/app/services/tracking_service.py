from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass, field
from typing import Callable

from src.app.ports.output import ILocationProvider
from src.domain.algorithms.bearing import CompassDirection, direction
from src.domain.algorithms.geo_utils import is_finite_point
from src.domain.algorithms.motion import MotionSimulator
from src.domain.algorithms.proximity import ProximityIndex
from src.domain.models import (
    FleetState,
    GeoPoint,
    ReferencePoint,
    StopDistance,
    TransitRoute,
    VehicleDistance,
    VehicleSnapshot,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class TrackedVehicle:
    """One dashboard row: a vehicle ranked by distance from the observer."""

    vehicle: VehicleSnapshot
    route: TransitRoute | None
    distance_km: float
    direction: CompassDirection | None


@dataclass(slots=True)
class TrackingService:
    """Drives the simulation and answers proximity queries for the UI layer.

    - `tick()` advances every vehicle once; `start()`/`stop()` run it
      periodically on the event loop.
    - While tracking, observer locations pushed by the location provider
      update the shared reference point.
    - Reads return immutable snapshots taken under the fleet lock.
    """

    state: FleetState
    simulator: MotionSimulator
    proximity: ProximityIndex = field(default_factory=ProximityIndex)
    location_provider: ILocationProvider | None = None
    tick_interval_s: float = 5.0

    _task: asyncio.Task | None = field(default=None, init=False, repr=False)
    _unsubscribe: Callable[[], None] | None = field(
        default=None, init=False, repr=False
    )

    @property
    def is_running(self) -> bool:
        return self._task is not None and not self._task.done()

    def tick(self, dt_s: float | None = None) -> tuple[VehicleSnapshot, ...]:
        elapsed = self.tick_interval_s if dt_s is None else float(dt_s)
        with self.state.lock:
            return self.simulator.tick(self.state.vehicles(), elapsed)

    def update_reference(self, ref: ReferencePoint | None) -> None:
        with self.state.lock:
            self.state.reference = ref

    def reference(self) -> ReferencePoint | None:
        with self.state.lock:
            return self.state.reference

    def routes(self) -> tuple[TransitRoute, ...]:
        return self.state.graph.routes()

    def vehicles(self) -> tuple[VehicleSnapshot, ...]:
        return self.state.snapshots()

    def nearby_stops(
        self, *, radius_km: float | None = None, limit: int | None = None
    ) -> tuple[StopDistance, ...]:
        with self.state.lock:
            ref = self.state.reference
        return self.proximity.nearby_stops(
            ref, self.state.graph.all_stops(), radius_km=radius_km, limit=limit
        )

    def nearest_vehicle(self) -> VehicleDistance | None:
        with self.state.lock:
            return self.proximity.nearest_vehicle(
                self.state.reference, self.state.vehicles()
            )

    def distance_tracker(self) -> tuple[TrackedVehicle, ...]:
        with self.state.lock:
            ref = self.state.reference
            ranked = self.proximity.distance_sorted_vehicles(
                ref, self.state.vehicles(), self.state.graph
            )

        out: list[TrackedVehicle] = []
        for row in ranked:
            v = row.vehicle
            target = (
                GeoPoint(lat=v.lat, lon=v.lon)
                if is_finite_point(v.lat, v.lon)
                else None
            )
            out.append(
                TrackedVehicle(
                    vehicle=v,
                    route=row.route,
                    distance_km=row.distance_km,
                    direction=direction(
                        ref.location if ref is not None else None, target
                    ),
                )
            )
        return tuple(out)

    async def start(self) -> None:
        if self.is_running:
            return

        if self.location_provider is not None and self._unsubscribe is None:
            self._unsubscribe = self.location_provider.subscribe(
                self.update_reference
            )

        self._task = asyncio.create_task(self._run(), name="tracking-tick-loop")
        logger.info("Tracking started (interval=%ss)", self.tick_interval_s)

    async def stop(self) -> None:
        task = self._task
        self._task = None

        unsubscribe = self._unsubscribe
        self._unsubscribe = None
        if unsubscribe is not None:
            unsubscribe()

        if task is None:
            return

        task.cancel()
        try:
            await task
        except asyncio.CancelledError:
            pass
        logger.info("Tracking stopped")

    async def _run(self) -> None:
        while True:
            await asyncio.sleep(self.tick_interval_s)
            try:
                self.tick()
            except Exception:
                # A bad tick must not kill the loop; the next one retries.
                logger.exception("Tracking tick failed")
