from dataclasses import dataclass
from enum import Enum

from campus_route.domain.entities.geography import Path


class ErrorKind(Enum):
    GEOMETRY_UNAVAILABLE = "geometry_unavailable"
    SELECTION_INCOMPLETE = "selection_incomplete"
    POINT_NOT_FOUND = "point_not_found"
    UNREACHABLE = "unreachable"
    NO_PATH = "no_path"

    @property
    def message(self) -> str:
        return _MESSAGES[self]


_MESSAGES = {
    ErrorKind.GEOMETRY_UNAVAILABLE: "Map data is unavailable.",
    ErrorKind.SELECTION_INCOMPLETE: "Select both start and end points!",
    ErrorKind.POINT_NOT_FOUND: "Invalid points selected!",
    ErrorKind.UNREACHABLE: "Selected points are not connected to the road network!",
    ErrorKind.NO_PATH: "No valid path found between selected points.",
}


@dataclass(frozen=True)
class RouteFound:
    path: Path
    start_snap_m: float = 0.0  # point -> nearest node
    end_snap_m: float = 0.0
    ok = True


@dataclass(frozen=True)
class RouteFailed:
    kind: ErrorKind
    detail: str | None = None
    ok = False

    @property
    def message(self) -> str:
        return self.kind.message


RouteOutcome = RouteFound | RouteFailed
