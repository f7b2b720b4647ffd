# app/navigation.py
"""
Core API used by the presentation layer.

    load_roads(doc)                                  -> RoadGraph
    find_route(graph, start, end, points_index)      -> RouteFound | RouteFailed

Nothing here raises for a user action; every failure is a RouteFailed.
"""

from collections.abc import Iterable, Iterator, Mapping
from typing import Any

from campus_route.app.hooks import NoopHooks, RoutingHooks
from campus_route.app.outcomes import ErrorKind, RouteFailed, RouteFound, RouteOutcome
from campus_route.app.protocols import DistanceFn, PathEngine
from campus_route.domain.entities.geography import PointOfInterest
from campus_route.domain.entities.graph import RoadGraph
from campus_route.domain.routing.distances import haversine_m
from campus_route.domain.routing.graph_builder import DuplicateEdgePolicy, GraphBuilder
from campus_route.domain.routing.nearest import nearest_distance_m
from campus_route.domain.routing.shortest_path import dijkstra_heap
from campus_route.io.geojson import GeometryError, parse_points, parse_roads


class PointsIndex:
    """Name lookup over points of interest; the first feature with a name wins."""

    def __init__(self, points: Iterable[PointOfInterest]):
        self._points = tuple(points)
        self._by_name: dict[str, PointOfInterest] = {}
        for p in self._points:
            self._by_name.setdefault(p.name, p)

    @classmethod
    def from_geojson(cls, doc: Mapping[str, Any] | None) -> "PointsIndex":
        return cls(parse_points(doc))

    def names(self) -> list[str]:
        """Selectable names in document order (duplicates kept)."""
        return [p.name for p in self._points]

    def lookup(self, name: str) -> PointOfInterest | None:
        return self._by_name.get(name)

    def __iter__(self) -> Iterator[PointOfInterest]:
        return iter(self._points)

    def __len__(self) -> int:
        return len(self._points)


def load_roads(
    doc: Mapping[str, Any] | None,
    *,
    distance: DistanceFn = haversine_m,
    duplicates: DuplicateEdgePolicy = DuplicateEdgePolicy.LAST_WRITE,
    hooks: RoutingHooks | None = None,
) -> RoadGraph:
    """Roads document -> graph. A missing or malformed document gives an empty graph."""
    if doc is None:
        return RoadGraph.empty()
    try:
        roads = parse_roads(doc)
    except GeometryError as exc:
        (hooks or NoopHooks()).source_failed(layer="roads", name=None, error=exc)
        return RoadGraph.empty()
    return GraphBuilder(distance, duplicates).build(roads)


def find_route(
    graph: RoadGraph,
    start_name: str | None,
    end_name: str | None,
    points_index: PointsIndex,
    *,
    distance: DistanceFn = haversine_m,
    engine: PathEngine = dijkstra_heap,
) -> RouteOutcome:
    if not start_name or not end_name:
        return RouteFailed(ErrorKind.SELECTION_INCOMPLETE)

    start_poi, end_poi = points_index.lookup(start_name), points_index.lookup(end_name)
    for name, poi in ((start_name, start_poi), (end_name, end_poi)):
        if poi is None:
            return RouteFailed(ErrorKind.POINT_NOT_FOUND, f"no point named {name!r}")
        if poi.coordinate is None:
            return RouteFailed(ErrorKind.POINT_NOT_FOUND, f"point {name!r} has no geometry")

    snap_a = nearest_distance_m(graph, start_poi.coordinate, distance)
    snap_b = nearest_distance_m(graph, end_poi.coordinate, distance)
    if snap_a is None or snap_b is None:
        return RouteFailed(ErrorKind.UNREACHABLE)

    (node_a, da), (node_b, db) = snap_a, snap_b
    path = engine(graph, node_a, node_b)
    if path is None:
        return RouteFailed(ErrorKind.NO_PATH, "nodes are not connected")
    if not path.is_meaningful:
        return RouteFailed(ErrorKind.NO_PATH, "start and end snap to the same node")
    return RouteFound(path, start_snap_m=da, end_snap_m=db)
