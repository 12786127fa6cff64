from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass

from src.domain.models import TransitRoute, Vehicle


@dataclass(frozen=True, slots=True)
class FleetSeed:
    routes: tuple[TransitRoute, ...]
    vehicles: tuple[Vehicle, ...]


class ISeedRepository(ABC):
    """Port for loading the static routes/stops/vehicles seed at startup."""

    @abstractmethod
    def load_seed(self) -> FleetSeed:
        raise NotImplementedError
