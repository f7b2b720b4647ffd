from collections.abc import Iterable
from dataclasses import dataclass
from enum import Enum

from campus_route.app.protocols import DistanceFn
from campus_route.domain.entities.geography import Coordinate, RoadFeature
from campus_route.domain.entities.graph import RoadGraph
from campus_route.domain.routing.distances import coord_distance, haversine_m


class DuplicateEdgePolicy(Enum):
    LAST_WRITE = "last_write"  # later feature overwrites the stored weight
    MIN = "min"  # keep the shortest weight seen


@dataclass(frozen=True)
class BuildStats:
    features: int
    segments: int
    degenerate: int  # zero-length segments skipped
    duplicates: int  # segments already present in the graph
    conflicting: int  # duplicates whose weight differed from the stored one


class GraphBuilder:
    """Turn road polylines into a RoadGraph; one edge per consecutive vertex pair."""

    def __init__(
        self,
        distance: DistanceFn = haversine_m,
        duplicates: DuplicateEdgePolicy = DuplicateEdgePolicy.LAST_WRITE,
    ):
        self.distance, self.duplicates = distance, duplicates

    def build(self, roads: Iterable[RoadFeature]) -> RoadGraph:
        return self.build_with_stats(roads)[0]

    def build_with_stats(self, roads: Iterable[RoadFeature]) -> tuple[RoadGraph, BuildStats]:
        """Build a graph and report what was counted while building it."""
        adj: dict[Coordinate, dict[Coordinate, float]] = {}
        n_feat = n_seg = n_deg = n_dup = n_conf = 0

        for road in roads:
            n_feat += 1
            for a, b in road.pairs():
                n_seg += 1
                if a == b:
                    n_deg += 1
                    continue
                d = coord_distance(self.distance, a, b)
                nbrs_a = adj.setdefault(a, {})
                nbrs_b = adj.setdefault(b, {})

                old = nbrs_a.get(b)
                if old is not None:
                    n_dup += 1
                    if old != d:
                        n_conf += 1
                    if self.duplicates is DuplicateEdgePolicy.MIN:
                        d = min(old, d)

                nbrs_a[b] = d
                nbrs_b[a] = d

        return RoadGraph(adj), BuildStats(n_feat, n_seg, n_deg, n_dup, n_conf)


def build_graph(
    roads: Iterable[RoadFeature],
    *,
    distance: DistanceFn = haversine_m,
    duplicates: DuplicateEdgePolicy = DuplicateEdgePolicy.LAST_WRITE,
) -> RoadGraph:
    return GraphBuilder(distance, duplicates).build(roads)
