from __future__ import annotations

import os
from functools import lru_cache

from src.adapters.location.push_location_provider import PushLocationProvider
from src.adapters.persistence.local_seed_repository import LocalSeedRepository
from src.app.ports.output import ISeedRepository
from src.app.services.tracking_service import TrackingService
from src.domain.algorithms.motion import MotionSimulator
from src.domain.algorithms.proximity import ProximityIndex
from src.domain.models import FleetState, RouteGraph, TraversalPolicy


def build_tracking_service(
    *,
    seed_repository: ISeedRepository | None = None,
    location_provider: PushLocationProvider | None = None,
) -> TrackingService:
    seed = (seed_repository or LocalSeedRepository()).load_seed()
    graph = RouteGraph.from_routes(seed.routes)
    state = FleetState(graph=graph, vehicles_by_id={v.id: v for v in seed.vehicles})

    simulator = MotionSimulator(
        graph=graph,
        policy=TraversalPolicy(
            (os.getenv("TRACKING_TRAVERSAL_POLICY") or "cyclic").strip().lower()
        ),
        min_speed_kmh=float(os.getenv("TRACKING_MIN_SPEED_KMH") or 15.0),
        max_speed_kmh=float(os.getenv("TRACKING_MAX_SPEED_KMH") or 40.0),
    )
    proximity = ProximityIndex()
    service = TrackingService(
        state=state,
        simulator=simulator,
        proximity=proximity,
        location_provider=location_provider,
    )

    # Allow tuning via env without changing code.
    if os.getenv("TRACKING_NEARBY_RADIUS_KM"):
        proximity.radius_km = float(os.environ["TRACKING_NEARBY_RADIUS_KM"])
    if os.getenv("TRACKING_NEARBY_LIMIT"):
        proximity.limit = int(os.environ["TRACKING_NEARBY_LIMIT"])
    if os.getenv("TRACKING_TICK_INTERVAL_S"):
        service.tick_interval_s = float(os.environ["TRACKING_TICK_INTERVAL_S"])

    return service


@lru_cache(maxsize=1)
def get_location_provider() -> PushLocationProvider:
    return PushLocationProvider()


@lru_cache(maxsize=1)
def get_tracking_service() -> TrackingService:
    return build_tracking_service(location_provider=get_location_provider())
