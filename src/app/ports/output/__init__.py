from .location_provider import ILocationProvider, LocationCallback
from .seed_repository import FleetSeed, ISeedRepository

__all__ = [
    "FleetSeed",
    "ILocationProvider",
    "ISeedRepository",
    "LocationCallback",
]
