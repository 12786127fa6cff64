from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Callable

from src.domain.models import ReferencePoint

LocationCallback = Callable[[ReferencePoint | None], None]


class ILocationProvider(ABC):
    """Port for push-style observer location updates.

    `None` is pushed when the observer's location becomes unavailable.
    """

    @abstractmethod
    def subscribe(self, callback: LocationCallback) -> Callable[[], None]:
        """Register a callback and return a handle that unsubscribes it."""
