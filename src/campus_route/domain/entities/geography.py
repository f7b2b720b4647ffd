from __future__ import annotations

import math
from collections.abc import Iterator, Sequence
from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from campus_route.domain.entities.graph import RoadGraph


# Graph node identity. Two coordinates are the same node only when both
# components are exactly equal; there is no tolerance.
@dataclass(frozen=True, order=True)
class Coordinate:
    lat: float
    lng: float

    @classmethod
    def from_lnglat(cls, pair: Sequence[float]) -> Coordinate:
        """Build from a source-document pair, which is (lng, lat)."""
        lng, lat = float(pair[0]), float(pair[1])
        if not (math.isfinite(lat) and math.isfinite(lng)):
            raise ValueError(f"non-finite position {list(pair)!r}")
        return cls(lat, lng)

    def to_lnglat(self) -> list[float]:
        return [self.lng, self.lat]


@dataclass(frozen=True)
class RoadFeature:
    coordinates: tuple[Coordinate, ...]
    name: str | None = None

    def pairs(self) -> Iterator[tuple[Coordinate, Coordinate]]:
        cs = self.coordinates
        for i in range(len(cs) - 1):
            yield cs[i], cs[i + 1]


@dataclass(frozen=True)
class PointOfInterest:
    name: str
    coordinate: Coordinate | None  # None => feature without usable geometry


@dataclass(frozen=True)
class Segment:
    start: Coordinate
    end: Coordinate
    length_m: float


@dataclass(frozen=True)
class Path:
    coordinates: tuple[Coordinate, ...]
    total_length_m: float

    def __len__(self) -> int:
        return len(self.coordinates)

    @property
    def start(self) -> Coordinate:
        return self.coordinates[0]

    @property
    def end(self) -> Coordinate:
        return self.coordinates[-1]

    @property
    def is_meaningful(self) -> bool:
        # a single-node path is a valid engine result but not a route
        return len(self.coordinates) >= 2

    def segments(self, graph: RoadGraph) -> Iterator[Segment]:
        cs = self.coordinates
        for i in range(len(cs) - 1):
            yield Segment(cs[i], cs[i + 1], graph.weight(cs[i], cs[i + 1]))

    def to_latlngs(self) -> list[tuple[float, float]]:
        return [(c.lat, c.lng) for c in self.coordinates]
