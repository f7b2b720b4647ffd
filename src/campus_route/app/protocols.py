from collections.abc import Mapping
from typing import Any, Protocol, runtime_checkable

from campus_route.domain.entities.geography import Coordinate, Path
from campus_route.domain.entities.graph import RoadGraph


# ------------- Routing core --------------------
@runtime_checkable
class DistanceFn(Protocol):
    """
    Distance in meters between (a_lat, a_lng) and (b_lat, b_lng).
    The b_* arguments may be numpy arrays; the result then broadcasts.
    """

    def __call__(self, a_lat, a_lng, b_lat, b_lng): ...


@runtime_checkable
class PathEngine(Protocol):
    """
    Responsibilities:
      • Minimum-total-weight path between two nodes of a RoadGraph.
      • Return None when either node is unknown or no path connects them.
    Must not mutate the graph.
    """

    def __call__(self, graph: RoadGraph, start: Coordinate, end: Coordinate) -> Path | None: ...


# ------------- Boundary collaborators --------------------
@runtime_checkable
class GeometrySource(Protocol):
    """Fetch one named geometry layer as a decoded GeoJSON document."""

    def fetch(self, name: str) -> Mapping[str, Any]: ...


@runtime_checkable
class RoutePresenter(Protocol):
    """
    Responsibilities:
      • Draw a computed route.
      • Clear a previously drawn route.
      • Show a user-facing message.
    """

    def render_route(self, path: Path) -> None: ...
    def clear_route(self) -> None: ...
    def notify(self, message: str) -> None: ...
