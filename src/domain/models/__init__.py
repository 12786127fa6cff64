from .fleet import FleetState
from .geo import GeoPoint, ReferencePoint
from .proximity import RankedVehicle, StopDistance, VehicleDistance
from .route import RouteGraph, TransitRoute, TraversalPolicy
from .stop import Stop
from .vehicle import Progress, Vehicle, VehicleSnapshot, VehicleStatus

__all__ = [
    "FleetState",
    "GeoPoint",
    "Progress",
    "RankedVehicle",
    "ReferencePoint",
    "RouteGraph",
    "Stop",
    "StopDistance",
    "TransitRoute",
    "TraversalPolicy",
    "Vehicle",
    "VehicleDistance",
    "VehicleSnapshot",
    "VehicleStatus",
]
