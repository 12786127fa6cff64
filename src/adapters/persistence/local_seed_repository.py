from __future__ import annotations

import json
import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Mapping

from src.app.ports.output import FleetSeed, ISeedRepository
from src.domain.exceptions import SeedDataError
from src.domain.models import GeoPoint, Stop, TransitRoute, Vehicle, VehicleStatus

logger = logging.getLogger(__name__)


def _required_str(row: Mapping[str, Any], key: str, where: str) -> str:
    value = str(row.get(key) or "").strip()
    if not value:
        raise SeedDataError(f"{where}: missing '{key}'")
    return value


def _optional_str(row: Mapping[str, Any], key: str) -> str | None:
    return str(row.get(key) or "").strip() or None


def _optional_float(row: Mapping[str, Any], key: str, where: str) -> float | None:
    raw = row.get(key)
    if raw is None or raw == "":
        return None
    try:
        return float(raw)
    except (TypeError, ValueError) as exc:
        raise SeedDataError(f"{where}: '{key}' is not a number: {raw!r}") from exc


def _optional_int(row: Mapping[str, Any], key: str, where: str) -> int | None:
    value = _optional_float(row, key, where)
    return int(value) if value is not None else None


def _location(row: Mapping[str, Any], where: str) -> GeoPoint:
    # Accept both 'lon' and the 'lng' spelling used by map front-ends.
    lon_key = "lon" if "lon" in row else "lng"
    lat = _optional_float(row, "lat", where)
    lon = _optional_float(row, lon_key, where)
    if lat is None or lon is None:
        raise SeedDataError(f"{where}: missing coordinates")
    try:
        return GeoPoint(lat=lat, lon=lon)
    except ValueError as exc:
        raise SeedDataError(f"{where}: {exc}") from exc


def _parse_stop(row: Mapping[str, Any], where: str) -> Stop:
    if not isinstance(row, Mapping):
        raise SeedDataError(f"{where}: stop entries must be objects")
    stop_id = _required_str(row, "id", where)
    where = f"{where} stop {stop_id!r}"
    return Stop(
        id=stop_id,
        name=_optional_str(row, "name") or stop_id,
        location=_location(row, where),
    )


def _parse_route(row: Mapping[str, Any]) -> TransitRoute:
    if not isinstance(row, Mapping):
        raise SeedDataError(f"route entries must be objects, got {row!r}")
    route_id = _required_str(row, "id", "route")
    where = f"route {route_id!r}"
    raw_stops = row.get("stops") or []
    if not isinstance(raw_stops, list):
        raise SeedDataError(f"{where}: 'stops' must be a list")
    return TransitRoute(
        id=route_id,
        stops=tuple(_parse_stop(s, where) for s in raw_stops),
        number=_optional_str(row, "number"),
        name=_optional_str(row, "name"),
        color=_optional_str(row, "color"),
        color_class=_optional_str(row, "route_class"),
    )


def _parse_vehicle(row: Mapping[str, Any]) -> Vehicle:
    if not isinstance(row, Mapping):
        raise SeedDataError(f"vehicle entries must be objects, got {row!r}")
    vehicle_id = _required_str(row, "id", "vehicle")
    where = f"vehicle {vehicle_id!r}"
    location = _location(row, where)

    raw_status = _optional_str(row, "status") or VehicleStatus.ON_TIME.value
    try:
        status = VehicleStatus(raw_status)
    except ValueError as exc:
        raise SeedDataError(f"{where}: unknown status {raw_status!r}") from exc

    return Vehicle(
        id=vehicle_id,
        route_id=_optional_str(row, "route_id"),
        lat=location.lat,
        lon=location.lon,
        speed_kmh=_optional_float(row, "speed", where),
        heading=_optional_float(row, "heading", where),
        passengers=_optional_int(row, "passengers", where),
        capacity=_optional_int(row, "capacity", where),
        status=status,
    )


@dataclass(slots=True)
class LocalSeedRepository(ISeedRepository):
    """Loads routes, stops and vehicles from a JSON seed file.

    Env vars:
      - SEED_PATH: path to the seed file (default: data/seed.json)

    Layout:
      {"routes": [{"id", "number", "name", "color", "route_class",
                   "stops": [{"id", "name", "lat", "lon"}]}],
       "vehicles": [{"id", "route_id", "lat", "lon", "speed", "heading",
                     "passengers", "capacity", "status"}]}

    Vehicles may reference unknown routes; the simulator simply skips them.
    """

    path: str | Path | None = None

    def _path(self) -> Path:
        value = self.path or os.getenv("SEED_PATH") or "data/seed.json"
        return Path(value)

    def load_seed(self) -> FleetSeed:
        path = self._path()
        if not path.exists():
            raise SeedDataError(f"Seed file not found: {path}")

        try:
            with path.open("r", encoding="utf-8") as fp:
                raw = json.load(fp)
        except json.JSONDecodeError as exc:
            raise SeedDataError(f"Malformed seed file {path}: {exc}") from exc

        if not isinstance(raw, dict):
            raise SeedDataError(f"Seed file {path} must contain a JSON object")

        routes = tuple(_parse_route(r) for r in raw.get("routes") or [])
        vehicles = tuple(_parse_vehicle(v) for v in raw.get("vehicles") or [])

        for kind, ids in (
            ("route", [r.id for r in routes]),
            ("vehicle", [v.id for v in vehicles]),
        ):
            dupes = sorted({i for i in ids if ids.count(i) > 1})
            if dupes:
                raise SeedDataError(f"Duplicate {kind} ids: {', '.join(dupes)}")

        logger.info(
            "Loaded seed from %s: %d routes, %d vehicles",
            path,
            len(routes),
            len(vehicles),
        )
        return FleetSeed(routes=routes, vehicles=vehicles)
