from __future__ import annotations

import logging
import threading
from dataclasses import dataclass, field
from typing import Callable

from src.app.ports.output import ILocationProvider, LocationCallback
from src.domain.models import ReferencePoint

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class PushLocationProvider(ILocationProvider):
    """In-process location feed.

    Whoever receives device positions (the HTTP layer, a test) calls
    `publish()`; every current subscriber is invoked synchronously. Once an
    unsubscribe handle returns, that callback is never invoked again.
    """

    _subscribers: list[LocationCallback] = field(
        default_factory=list, init=False, repr=False
    )
    _lock: threading.RLock = field(
        default_factory=threading.RLock, init=False, repr=False
    )
    _last: ReferencePoint | None = field(default=None, init=False)

    @property
    def last(self) -> ReferencePoint | None:
        return self._last

    def subscribe(self, callback: LocationCallback) -> Callable[[], None]:
        with self._lock:
            self._subscribers.append(callback)

        def unsubscribe() -> None:
            with self._lock:
                if callback in self._subscribers:
                    self._subscribers.remove(callback)

        return unsubscribe

    def publish(self, ref: ReferencePoint | None) -> int:
        """Push a location to all subscribers; returns how many received it."""

        # Held while dispatching so an unsubscribe cannot race a delivery.
        with self._lock:
            self._last = ref
            subscribers = list(self._subscribers)
            for callback in subscribers:
                callback(ref)
        logger.debug(
            "Published location %s to %d subscribers", ref, len(subscribers)
        )
        return len(subscribers)
