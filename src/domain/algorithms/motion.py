from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import Iterable

from src.domain.models import (
    Progress,
    RouteGraph,
    TraversalPolicy,
    Vehicle,
    VehicleSnapshot,
)

from .bearing import bearing_degrees
from .geo_utils import haversine_distance_m, interpolate

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class MotionSimulator:
    """Advances vehicles along their route polylines.

    Each vehicle keeps a `Progress` (segment start index, fraction `t`). A tick
    of `dt_s` seconds moves it by `dt_s * speed` metres; the segment time is
    floored at one second so that coincident stops cannot stall the loop.

    A tick that covers more than the rest of the current segment carries the
    remaining seconds into the following segments, so `t` stays in `[0, 1)`
    however coarse the tick is. Whole circuits of the route are dropped first,
    so a tick costs at most about one circuit of segments.
    """

    graph: RouteGraph
    policy: TraversalPolicy = TraversalPolicy.CYCLIC
    min_speed_kmh: float = 15.0
    max_speed_kmh: float = 40.0

    def __post_init__(self) -> None:
        if self.min_speed_kmh <= 0.0:
            raise ValueError(f"min_speed_kmh must be positive: {self.min_speed_kmh}")
        if self.min_speed_kmh > self.max_speed_kmh:
            raise ValueError(
                f"Invalid speed range: [{self.min_speed_kmh}, {self.max_speed_kmh}]"
            )

    def effective_speed_kmh(self, speed_kmh: float | None) -> float:
        if speed_kmh is None or not math.isfinite(speed_kmh) or speed_kmh <= 0.0:
            return self.min_speed_kmh
        return max(self.min_speed_kmh, min(self.max_speed_kmh, float(speed_kmh)))

    def tick(
        self, vehicles: Iterable[Vehicle], dt_s: float
    ) -> tuple[VehicleSnapshot, ...]:
        """Advance every movable vehicle by `dt_s` seconds.

        Returns snapshots of the vehicles that moved; frozen vehicles (missing
        route, fewer than two stops) are left untouched and omitted.
        """

        out: list[VehicleSnapshot] = []
        for vehicle in vehicles:
            if self.step(vehicle, dt_s):
                out.append(vehicle.snapshot())
        return tuple(out)

    def _leg_count(self, stop_count: int) -> int:
        if self.policy is TraversalPolicy.CYCLIC:
            return stop_count
        return 2 * (stop_count - 1)

    def circuit_s(self, route_id: str, mps: float) -> float:
        """Seconds for one full circuit of the route at `mps` metres/second.

        Cyclic routes close back to the first stop; bounce routes go out and
        back. Segment times are floored at one second as in `step`.
        """

        stops = self.graph.stops_of(route_id)
        legs = [(stops[i], stops[i + 1]) for i in range(len(stops) - 1)]
        if self.policy is TraversalPolicy.CYCLIC:
            legs.append((stops[-1], stops[0]))
        total = sum(
            max(1.0, haversine_distance_m(a.location, b.location) / mps)
            for a, b in legs
        )
        return total if self.policy is TraversalPolicy.CYCLIC else 2.0 * total

    def step(self, vehicle: Vehicle, dt_s: float) -> bool:
        route_id = vehicle.route_id
        if route_id is None or not self.graph.is_traversable(route_id):
            logger.debug(
                "Skipping vehicle %s: route %r not traversable", vehicle.id, route_id
            )
            return False

        stops = self.graph.stops_of(route_id)
        progress = vehicle.progress
        if progress is None or not (0 <= progress.segment_index < len(stops)):
            progress = Progress()
            vehicle.progress = progress
            vehicle.lat = stops[0].location.lat
            vehicle.lon = stops[0].location.lon

        speed_kmh = self.effective_speed_kmh(vehicle.speed_kmh)
        mps = speed_kmh * 1000.0 / 3600.0

        remaining_s = max(0.0, float(dt_s)) if math.isfinite(dt_s) else 0.0
        if remaining_s >= self._leg_count(len(stops)):
            # Whole circuits end where they started.
            remaining_s = math.fmod(remaining_s, self.circuit_s(route_id, mps))
        while True:
            a, b = self.graph.segment(
                route_id, progress.segment_index, self.policy, progress.direction
            )
            segment_s = max(1.0, haversine_distance_m(a.location, b.location) / mps)
            needed_s = (1.0 - progress.t) * segment_s
            if remaining_s < needed_s:
                progress.t += remaining_s / segment_s
                remaining_s = 0.0
                if progress.t < 1.0:
                    break
            else:
                remaining_s -= needed_s
            progress.t = 0.0
            self.graph.advance(route_id, progress, self.policy)

        a, b = self.graph.segment(
            route_id, progress.segment_index, self.policy, progress.direction
        )
        position = interpolate(a.location, b.location, progress.t)
        vehicle.lat = position.lat
        vehicle.lon = position.lon
        vehicle.next_stop = b.name
        if a.location != b.location:
            vehicle.heading = bearing_degrees(a.location, b.location)
        return True
