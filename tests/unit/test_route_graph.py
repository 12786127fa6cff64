from __future__ import annotations

import pytest

from src.domain.models import (
    GeoPoint,
    Progress,
    RouteGraph,
    Stop,
    TransitRoute,
    TraversalPolicy,
)


def _stop(stop_id: str, lon: float) -> Stop:
    return Stop(id=stop_id, name=f"Stop {stop_id}", location=GeoPoint(lat=0.0, lon=lon))


def _graph() -> RouteGraph:
    return RouteGraph.from_routes(
        [
            TransitRoute(
                id="R1",
                number="2",
                stops=(_stop("A", 0.0), _stop("B", 0.1), _stop("C", 0.2)),
            ),
            TransitRoute(id="R2", number="1", stops=(_stop("C", 0.2), _stop("D", 0.3))),
            TransitRoute(id="R3", number="3", stops=(_stop("E", 1.0),)),
        ]
    )


def test_stops_of_unknown_route_is_empty() -> None:
    graph = _graph()
    assert [s.id for s in graph.stops_of("R1")] == ["A", "B", "C"]
    assert graph.stops_of("missing") == ()
    assert graph.stops_of(None) == ()


def test_routes_sorted_for_listing() -> None:
    assert [r.id for r in _graph().routes()] == ["R2", "R1", "R3"]


def test_all_stops_unique_by_id() -> None:
    assert [s.id for s in _graph().all_stops()] == ["A", "B", "C", "D", "E"]


def test_is_traversable_requires_two_stops() -> None:
    graph = _graph()
    assert graph.is_traversable("R1")
    assert not graph.is_traversable("R3")
    assert not graph.is_traversable("missing")


def test_cyclic_segment_wraps_to_first_stop() -> None:
    graph = _graph()
    a, b = graph.segment("R1", 2, TraversalPolicy.CYCLIC)
    assert (a.id, b.id) == ("C", "A")


def test_bounce_segment_points_back_at_the_ends() -> None:
    graph = _graph()
    a, b = graph.segment("R1", 2, TraversalPolicy.BOUNCE_AT_ENDS, direction=1)
    assert (a.id, b.id) == ("C", "B")
    a, b = graph.segment("R1", 0, TraversalPolicy.BOUNCE_AT_ENDS, direction=-1)
    assert (a.id, b.id) == ("A", "B")
    a, b = graph.segment("R1", 1, TraversalPolicy.BOUNCE_AT_ENDS, direction=-1)
    assert (a.id, b.id) == ("B", "A")


def test_segment_rejects_short_routes_and_bad_indices() -> None:
    graph = _graph()
    with pytest.raises(ValueError):
        graph.segment("R3", 0)
    with pytest.raises(IndexError):
        graph.segment("R1", 3)


@pytest.mark.parametrize(
    ("policy", "expected"),
    [
        (TraversalPolicy.CYCLIC, [1, 2, 0, 1, 2, 0]),
        (TraversalPolicy.BOUNCE_AT_ENDS, [1, 2, 1, 0, 1, 2]),
    ],
)
def test_advance_sequence(policy: TraversalPolicy, expected: list[int]) -> None:
    graph = _graph()
    progress = Progress()
    seen = []
    for _ in expected:
        graph.advance("R1", progress, policy)
        seen.append(progress.segment_index)
    assert seen == expected


def test_bounce_direction_follows_segment() -> None:
    graph = _graph()
    progress = Progress()
    nexts = []
    for _ in range(4):
        graph.advance("R1", progress, TraversalPolicy.BOUNCE_AT_ENDS)
        _, b = graph.segment(
            "R1",
            progress.segment_index,
            TraversalPolicy.BOUNCE_AT_ENDS,
            progress.direction,
        )
        nexts.append(b.id)
    assert nexts == ["C", "B", "A", "B"]
