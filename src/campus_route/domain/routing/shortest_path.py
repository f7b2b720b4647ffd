import heapq
import itertools
import math

from campus_route.domain.entities.geography import Coordinate, Path
from campus_route.domain.entities.graph import RoadGraph

INF = math.inf


def reconstruct_path(
    previous: dict[Coordinate, Coordinate], start: Coordinate, end: Coordinate
) -> list[Coordinate] | None:
    """Walk predecessor links back from end; None if the chain misses start."""
    path = [end]
    step = end
    while step != start:
        step = previous.get(step)
        if step is None:
            return None
        path.append(step)
    path.reverse()
    return path


def _finish(previous, dist, start, end) -> Path | None:
    if dist.get(end, INF) == INF:
        return None
    nodes = reconstruct_path(previous, start, end)
    if nodes is None:
        return None
    return Path(tuple(nodes), dist[end])


def dijkstra_heap(graph: RoadGraph, start: Coordinate, end: Coordinate) -> Path | None:
    """
    Dijkstra with a binary heap and lazy deletion, O(E log V).
    Equal keys pop in push order.
    """
    if start is None or end is None or start not in graph or end not in graph:
        return None

    dist: dict[Coordinate, float] = {start: 0.0}
    previous: dict[Coordinate, Coordinate] = {}
    settled: set[Coordinate] = set()
    counter = itertools.count()
    heap = [(0.0, next(counter), start)]

    while heap:
        d, _, u = heapq.heappop(heap)
        if u in settled:
            continue
        if u == end:
            break
        settled.add(u)
        for v, w in graph.neighbors(u).items():
            alt = d + w
            if alt < dist.get(v, INF):
                dist[v] = alt
                previous[v] = u
                heapq.heappush(heap, (alt, next(counter), v))

    return _finish(previous, dist, start, end)


def dijkstra_scan(graph: RoadGraph, start: Coordinate, end: Coordinate) -> Path | None:
    """
    Dijkstra selecting the minimum by scanning every unvisited node, O(V^2).
    Ties go to the first node in graph order.
    """
    if start is None or end is None or start not in graph or end not in graph:
        return None

    dist = dict.fromkeys(graph.nodes, INF)
    dist[start] = 0.0
    previous: dict[Coordinate, Coordinate] = {}
    unvisited = dict.fromkeys(graph.nodes)  # ordered set

    while unvisited:
        current = min(unvisited, key=dist.__getitem__)
        if dist[current] == INF:
            break  # rest is unreachable
        if current == end:
            break
        del unvisited[current]
        for v, w in graph.neighbors(current).items():
            alt = dist[current] + w
            if alt < dist[v]:
                dist[v] = alt
                previous[v] = current

    return _finish(previous, dist, start, end)


def shortest_path(graph: RoadGraph, start: Coordinate, end: Coordinate) -> Path | None:
    return dijkstra_heap(graph, start, end)
