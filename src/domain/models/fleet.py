from __future__ import annotations

import threading
from dataclasses import dataclass, field

from .geo import ReferencePoint
from .route import RouteGraph
from .vehicle import Vehicle, VehicleSnapshot


@dataclass(slots=True)
class FleetState:
    """Owned container for everything the engine mutates.

    Tick drivers, location callbacks and readers may run on different threads
    (FastAPI runs sync endpoints on a threadpool), so every access goes through
    `lock`.
    """

    graph: RouteGraph
    vehicles_by_id: dict[str, Vehicle] = field(default_factory=dict)
    reference: ReferencePoint | None = None
    lock: threading.RLock = field(default_factory=threading.RLock, repr=False)

    def vehicles(self) -> tuple[Vehicle, ...]:
        # Deterministic iteration order for tie-breaking and listings.
        return tuple(self.vehicles_by_id[k] for k in sorted(self.vehicles_by_id))

    def snapshots(self) -> tuple[VehicleSnapshot, ...]:
        with self.lock:
            return tuple(v.snapshot() for v in self.vehicles())
