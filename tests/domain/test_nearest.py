import math
import random

import pytest

from campus_route.domain.entities.geography import Coordinate as C
from campus_route.domain.entities.graph import RoadGraph
from campus_route.domain.routing.distances import euclidean
from campus_route.domain.routing.nearest import nearest_distance_m, nearest_node


def _haversine_ref(a: C, b: C) -> float:
    # independent scalar implementation
    r = 6371000.0
    p1, p2 = math.radians(a.lat), math.radians(b.lat)
    dp, dl = math.radians(b.lat - a.lat), math.radians(b.lng - a.lng)
    s = math.sin(dp / 2) ** 2 + math.cos(p1) * math.cos(p2) * math.sin(dl / 2) ** 2
    return 2 * r * math.asin(math.sqrt(s))


def _chain(nodes: list[C]) -> RoadGraph:
    adj: dict[C, dict[C, float]] = {n: {} for n in nodes}
    for a, b in zip(nodes, nodes[1:]):
        adj[a][b] = adj[b][a] = 1.0
    return RoadGraph.from_adjacency(adj)


@pytest.fixture
def campus_nodes() -> list[C]:
    rng = random.Random(7)
    # distinct nodes on a 1e-4 degree lattice inside the campus bounds
    cells = rng.sample(range(40 * 60), 60)
    return [C(12.3345 + (k // 60) * 1e-4, 76.6167 + (k % 60) * 1e-4) for k in cells]


def test_empty_graph_has_no_nearest():
    assert nearest_node(RoadGraph.empty(), C(0.0, 0.0)) is None
    assert nearest_distance_m(RoadGraph.empty(), C(0.0, 0.0)) is None


def test_matches_brute_force(campus_nodes):
    g = _chain(campus_nodes)
    rng = random.Random(11)
    for _ in range(25):
        # offset by a quarter cell so no target is equidistant to two lattice nodes
        t = C(
            12.3345 + (rng.randrange(40) + 0.27) * 1e-4,
            76.6167 + (rng.randrange(60) + 0.31) * 1e-4,
        )
        expected = min(campus_nodes, key=lambda n: _haversine_ref(t, n))
        assert nearest_node(g, t) == expected


def test_node_itself_is_its_own_nearest(campus_nodes):
    g = _chain(campus_nodes)
    for n in campus_nodes[:10]:
        node, d = nearest_distance_m(g, n)
        assert node == n
        assert d == pytest.approx(0.0, abs=1e-6)


def test_nan_node_never_wins():
    bad = C(0.0, float("nan"))
    exact = C(12.335, 76.617)
    g = _chain([bad, exact, C(12.335, 76.618)])
    assert nearest_node(g, exact) == exact
    assert nearest_node(g, C(12.3351, 76.6179)) == C(12.335, 76.618)


def test_all_nan_distances_give_none():
    g = _chain([C(0.0, float("nan")), C(float("nan"), 1.0)])
    assert nearest_node(g, C(0.0, 0.0)) is None
    assert nearest_distance_m(g, C(0.0, 0.0)) is None


def test_tie_goes_to_first_node_in_graph_order():
    left, right = C(0.0, -1.0), C(0.0, 1.0)
    g = _chain([left, right])
    assert nearest_node(g, C(0.0, 0.0), euclidean) == left

    g2 = _chain([right, left])
    assert nearest_node(g2, C(0.0, 0.0), euclidean) == right
