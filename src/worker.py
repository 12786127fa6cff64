from __future__ import annotations

import logging
import os
import time

from src.adapters.api.dependencies import build_tracking_service
from src.domain.models import VehicleSnapshot

logger = logging.getLogger("bustrack.worker")


def _snapshot_to_dict(v: VehicleSnapshot) -> dict:
    return {
        "vehicle_id": v.vehicle_id,
        "route_id": v.route_id,
        "lat": round(v.lat, 6),
        "lon": round(v.lon, 6),
        "next_stop": v.next_stop,
        "status": v.status.value,
    }


def main() -> None:
    """Headless tick driver: advances the fleet and logs positions."""

    logging.basicConfig(
        level=(os.getenv("LOG_LEVEL") or "INFO").upper(),
        format="%(asctime)s %(levelname)s %(name)s %(message)s",
    )

    service = build_tracking_service()

    loop = os.getenv("WORKER_LOOP", "1").strip().lower() not in {"0", "false", "no"}

    while True:
        started = time.monotonic()
        for snapshot in service.tick():
            logger.info("position %s", _snapshot_to_dict(snapshot))

        if not loop:
            return

        elapsed = time.monotonic() - started
        time.sleep(max(0.0, service.tick_interval_s - elapsed))


if __name__ == "__main__":
    main()
