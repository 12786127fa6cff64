from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

from .stop import Stop
from .vehicle import Progress


class TraversalPolicy(str, Enum):
    CYCLIC = "cyclic"
    BOUNCE_AT_ENDS = "bounce"


@dataclass(frozen=True, slots=True)
class TransitRoute:
    """A fixed transit line: an ordered stop sequence plus display metadata."""

    id: str
    stops: tuple[Stop, ...] = ()
    number: str | None = None
    name: str | None = None
    color: str | None = None  # hex, with or without '#'
    color_class: str | None = None

    @property
    def is_traversable(self) -> bool:
        return len(self.stops) >= 2


@dataclass(slots=True)
class RouteGraph:
    """Ordered stop sequences keyed by route id."""

    routes_by_id: dict[str, TransitRoute] = field(default_factory=dict)

    @classmethod
    def from_routes(
        cls, routes: tuple[TransitRoute, ...] | list[TransitRoute]
    ) -> RouteGraph:
        return cls(routes_by_id={r.id: r for r in routes})

    def route(self, route_id: str | None) -> TransitRoute | None:
        if route_id is None:
            return None
        return self.routes_by_id.get(route_id)

    def routes(self) -> tuple[TransitRoute, ...]:
        routes = list(self.routes_by_id.values())
        routes.sort(key=lambda r: (r.number or "", r.name or "", r.id))
        return tuple(routes)

    def stops_of(self, route_id: str | None) -> tuple[Stop, ...]:
        route = self.route(route_id)
        return route.stops if route is not None else ()

    def is_traversable(self, route_id: str | None) -> bool:
        route = self.route(route_id)
        return route is not None and route.is_traversable

    def all_stops(self) -> tuple[Stop, ...]:
        """Unique stops across all routes; the first occurrence of an id wins."""

        seen: set[str] = set()
        out: list[Stop] = []
        for route in self.routes_by_id.values():
            for stop in route.stops:
                if stop.id in seen:
                    continue
                seen.add(stop.id)
                out.append(stop)
        return tuple(out)

    def segment(
        self,
        route_id: str,
        index: int,
        policy: TraversalPolicy = TraversalPolicy.CYCLIC,
        direction: int = 1,
    ) -> tuple[Stop, Stop]:
        stops = self.stops_of(route_id)
        n = len(stops)
        if n < 2:
            raise ValueError(f"Route {route_id!r} has fewer than 2 stops")
        if not (0 <= index < n):
            raise IndexError(
                f"Segment index {index} out of range for route {route_id!r}"
            )

        if policy is TraversalPolicy.CYCLIC:
            return stops[index], stops[(index + 1) % n]

        # Bounce: the end stops always point back into the route.
        if index == n - 1:
            direction = -1
        elif index == 0:
            direction = 1
        return stops[index], stops[index + direction]

    def advance(
        self,
        route_id: str,
        progress: Progress,
        policy: TraversalPolicy = TraversalPolicy.CYCLIC,
    ) -> None:
        """Move `progress` to the start of the following segment."""

        n = len(self.stops_of(route_id))
        if n < 2:
            return

        if policy is TraversalPolicy.CYCLIC:
            progress.segment_index = (progress.segment_index + 1) % n
            progress.direction = 1
            return

        direction = progress.direction if progress.direction in (1, -1) else 1
        if progress.segment_index == n - 1:
            direction = -1
        elif progress.segment_index == 0:
            direction = 1

        index = progress.segment_index + direction
        if index == n - 1:
            direction = -1
        elif index == 0:
            direction = 1
        progress.segment_index = index
        progress.direction = direction
