# app/navigator.py
import time
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

from campus_route.app.hooks import NoopHooks, RoutingHooks
from campus_route.app.navigation import PointsIndex, find_route
from campus_route.app.outcomes import ErrorKind, RouteFailed, RouteFound, RouteOutcome
from campus_route.app.protocols import DistanceFn, GeometrySource, PathEngine, RoutePresenter
from campus_route.domain.entities.graph import RoadGraph
from campus_route.domain.routing.graph_builder import GraphBuilder
from campus_route.io.loader import GeometryBundle, load_geometry


@dataclass(frozen=True)
class NetworkSnapshot:
    graph: RoadGraph
    points: PointsIndex | None
    buildings: dict[str, Any] | None = None
    missing: frozenset[str] = field(default_factory=frozenset)

    @property
    def routable(self) -> bool:
        return "roads" not in self.missing and "points" not in self.missing


EMPTY = NetworkSnapshot(RoadGraph.empty(), None, None, frozenset({"roads", "buildings", "points"}))


class CampusNavigator:
    """
    Owns the current network snapshot and answers route requests.

    A reload builds a complete new snapshot before swapping it in, so a
    query holding the previous snapshot keeps a valid graph.
    """

    def __init__(
        self,
        *,
        builder: GraphBuilder,
        engine: PathEngine,
        distance: DistanceFn,
        hooks: RoutingHooks | None = None,
        layers: Mapping[str, str] | None = None,
    ):
        self.builder, self.engine, self.distance = builder, engine, distance
        self.hooks = hooks or NoopHooks()
        self.layers = dict(layers) if layers else None
        self._snapshot = EMPTY

    @property
    def snapshot(self) -> NetworkSnapshot:
        return self._snapshot

    @property
    def graph(self) -> RoadGraph:
        return self._snapshot.graph

    @property
    def points(self) -> PointsIndex | None:
        return self._snapshot.points

    # ---------------- loading ----------------

    def load(self, bundle: GeometryBundle) -> NetworkSnapshot:
        graph = RoadGraph.empty()
        if bundle.roads is not None:
            t0 = time.perf_counter()
            graph, stats = self.builder.build_with_stats(bundle.roads)
            self.hooks.graph_built(
                nodes=len(graph),
                edges=graph.edge_count,
                stats=stats,
                wall_ms=(time.perf_counter() - t0) * 1000,
            )
        points = PointsIndex(bundle.points) if bundle.points is not None else None
        snap = NetworkSnapshot(graph, points, bundle.buildings, bundle.missing)
        self._snapshot = snap  # single swap
        return snap

    async def reload(self, source: GeometrySource) -> NetworkSnapshot:
        bundle = await load_geometry(source, self.layers, hooks=self.hooks)
        return self.load(bundle)

    # ---------------- routing ----------------

    def find_route(self, start_name: str | None, end_name: str | None) -> RouteOutcome:
        snap = self._snapshot  # pin one snapshot for the whole query
        t0 = time.perf_counter()
        self.hooks.route_request(start=start_name, end=end_name)

        if not start_name or not end_name:
            outcome = RouteFailed(ErrorKind.SELECTION_INCOMPLETE)
        elif not snap.routable:
            outcome = RouteFailed(
                ErrorKind.GEOMETRY_UNAVAILABLE, f"missing layers: {sorted(snap.missing)}"
            )
        else:
            outcome = find_route(
                snap.graph,
                start_name,
                end_name,
                snap.points,
                distance=self.distance,
                engine=self.engine,
            )

        self.hooks.route_result(
            start=start_name,
            end=end_name,
            outcome=outcome,
            wall_ms=(time.perf_counter() - t0) * 1000,
        )
        return outcome

    def navigate(
        self, start_name: str | None, end_name: str | None, presenter: RoutePresenter
    ) -> RouteOutcome:
        outcome = self.find_route(start_name, end_name)
        if isinstance(outcome, RouteFound):
            presenter.render_route(outcome.path)
            return outcome
        if outcome.kind is ErrorKind.NO_PATH:
            presenter.clear_route()
        presenter.notify(outcome.message)
        return outcome
