import numpy as np

from campus_route.app.protocols import DistanceFn
from campus_route.domain.entities.geography import Coordinate
from campus_route.domain.entities.graph import RoadGraph
from campus_route.domain.routing.distances import haversine_m


def nearest_node(
    graph: RoadGraph, target: Coordinate, distance: DistanceFn = haversine_m
) -> Coordinate | None:
    """
    Snap `target` onto the closest graph node by exhaustive comparison.

    Returns None for an empty graph, or when no node has a comparable
    distance. Equal distances resolve to the node that comes first in
    `graph.nodes` (nanargmin keeps the first minimum); NaN distances never win.
    """
    if len(graph) == 0:
        return None
    pts = graph.node_array()
    d = np.asarray(distance(target.lat, target.lng, pts[:, 0], pts[:, 1]), dtype=float)
    if np.isnan(d).all():
        return None
    return graph.nodes[int(np.nanargmin(d))]


def nearest_distance_m(
    graph: RoadGraph, target: Coordinate, distance: DistanceFn = haversine_m
) -> tuple[Coordinate, float] | None:
    """Like nearest_node, also returning the snap distance."""
    node = nearest_node(graph, target, distance)
    if node is None:
        return None
    return node, float(distance(target.lat, target.lng, node.lat, node.lng))
