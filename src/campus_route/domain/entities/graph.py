from __future__ import annotations

from collections.abc import Iterator, Mapping
from types import MappingProxyType

import numpy as np

from campus_route.domain.entities.geography import Coordinate

Adjacency = Mapping[Coordinate, Mapping[Coordinate, float]]


class RoadGraph:
    """
    Undirected weighted walking network.

    Nodes are exact `Coordinate` values; every edge is stored in both
    endpoints' adjacency with the same weight (meters). Instances are
    read-only once constructed, so they can be shared between queries
    and replaced wholesale on reload.
    """

    __slots__ = ("_adj", "_nodes", "_node_array")

    def __init__(self, adjacency: Adjacency):
        frozen = {u: MappingProxyType(dict(nbrs)) for u, nbrs in adjacency.items()}
        self._adj: Mapping[Coordinate, Mapping[Coordinate, float]] = MappingProxyType(frozen)
        self._nodes: tuple[Coordinate, ...] = tuple(frozen)
        self._node_array: np.ndarray | None = None

    # ---------------- constructors ----------------

    @classmethod
    def empty(cls) -> RoadGraph:
        return cls({})

    @classmethod
    def from_adjacency(cls, adjacency: Adjacency) -> RoadGraph:
        """Build from a hand-written adjacency map, checking the graph invariants."""
        for u, nbrs in adjacency.items():
            for v, w in nbrs.items():
                if u == v:
                    raise ValueError(f"self-loop at {u}")
                if w < 0:
                    raise ValueError(f"negative weight {w} on {u} -> {v}")
                back = adjacency.get(v, {}).get(u)
                if back is None or back != w:
                    raise ValueError(f"asymmetric edge {u} -> {v} ({w} vs {back})")
        return cls(adjacency)

    # ---------------- read access ----------------

    @property
    def nodes(self) -> tuple[Coordinate, ...]:
        return self._nodes

    @property
    def edge_count(self) -> int:
        return sum(len(nbrs) for nbrs in self._adj.values()) // 2

    def neighbors(self, node: Coordinate) -> Mapping[Coordinate, float]:
        return self._adj[node]

    def weight(self, a: Coordinate, b: Coordinate) -> float:
        return self._adj[a][b]

    def has_edge(self, a: Coordinate, b: Coordinate) -> bool:
        return a in self._adj and b in self._adj[a]

    def edges(self) -> Iterator[tuple[Coordinate, Coordinate, float]]:
        """Yield each undirected edge once."""
        seen: set[Coordinate] = set()
        for u, nbrs in self._adj.items():
            for v, w in nbrs.items():
                if v not in seen:
                    yield u, v, w
            seen.add(u)

    def node_array(self) -> np.ndarray:
        """(n, 2) float array of (lat, lng), rows in `nodes` order."""
        if self._node_array is None:
            arr = np.array([(c.lat, c.lng) for c in self._nodes], dtype=float).reshape(-1, 2)
            arr.setflags(write=False)
            self._node_array = arr
        return self._node_array

    def __contains__(self, node: object) -> bool:
        return node in self._adj

    def __len__(self) -> int:
        return len(self._nodes)

    def __iter__(self) -> Iterator[Coordinate]:
        return iter(self._nodes)

    def __repr__(self) -> str:
        return f"RoadGraph(nodes={len(self)}, edges={self.edge_count})"
