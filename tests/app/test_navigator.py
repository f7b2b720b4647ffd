import asyncio

import pytest

from campus_route.app.build import build
from campus_route.app.hooks import NoopHooks
from campus_route.app.outcomes import ErrorKind, RouteFound
from campus_route.domain.entities.geography import Coordinate as C
from campus_route.io.geojson import parse_roads
from campus_route.io.loader import GeometryBundle
from campus_route.io.sources import MemoryGeometrySource


def fc(*features):
    return {"type": "FeatureCollection", "features": list(features)}


def line(*lnglats):
    geom = {"type": "LineString", "coordinates": [list(p) for p in lnglats]}
    return {"type": "Feature", "properties": {}, "geometry": geom}


def point(name, lng, lat):
    geom = {"type": "Point", "coordinates": [lng, lat]}
    return {"type": "Feature", "properties": {"name": name}, "geometry": geom}


ROADS_V1 = fc(line((0.0, 0.0), (1.0, 0.0), (1.0, 1.0)))
ROADS_V2 = fc(line((0.0, 0.0), (1.0, 1.0)))  # shortcut
POINTS = fc(point("Gate", 0.0, 0.0), point("Canteen", 1.0, 0.0), point("Library", 1.0, 1.0))
BUILDINGS = fc()

CFG = {"name": "test", "graph": {"metric": "euclidean"}}


class FakePresenter:
    def __init__(self):
        self.rendered, self.cleared, self.messages = [], 0, []

    def render_route(self, path):
        self.rendered.append(path)

    def clear_route(self):
        self.cleared += 1

    def notify(self, message):
        self.messages.append(message)


class TraceHooks(NoopHooks):
    def __init__(self):
        self.trace = []

    def graph_built(self, *, nodes, edges, stats, wall_ms):
        self.trace.append(("graph_built", nodes, edges))

    def route_result(self, *, start, end, outcome, wall_ms):
        self.trace.append(("route_result", start, end, outcome.ok))


def _source(roads=ROADS_V1, points=POINTS):
    docs = {"buildings1": BUILDINGS}
    if roads is not None:
        docs["roads1"] = roads
    if points is not None:
        docs["points1"] = points
    return MemoryGeometrySource(docs)


@pytest.fixture
def app():
    a = build(CFG, source=_source(), use_logging=False)
    asyncio.run(a.reload())
    return a


def test_route_before_load_is_geometry_unavailable():
    a = build(CFG, source=_source(), use_logging=False)
    out = a.navigator.find_route("Gate", "Library")
    assert out.kind is ErrorKind.GEOMETRY_UNAVAILABLE


def test_reload_and_route(app):
    nav = app.navigator
    assert len(nav.graph) == 3
    assert nav.points.names() == ["Gate", "Canteen", "Library"]
    out = nav.find_route("Gate", "Library")
    assert isinstance(out, RouteFound)
    assert out.path.coordinates == (C(0.0, 0.0), C(0.0, 1.0), C(1.0, 1.0))
    assert nav.find_route("Gate", "Canteen").path.total_length_m == 1.0


def test_missing_points_layer_is_geometry_unavailable():
    a = build(CFG, source=_source(points=None), use_logging=False)
    snap = asyncio.run(a.reload())
    assert snap.points is None
    assert snap.missing == frozenset({"points"})
    out = a.navigator.find_route("Gate", "Library")
    assert out.kind is ErrorKind.GEOMETRY_UNAVAILABLE


def test_missing_roads_layer_gives_empty_graph():
    a = build(CFG, source=_source(roads=None), use_logging=False)
    snap = asyncio.run(a.reload())
    assert len(snap.graph) == 0
    assert a.navigator.find_route("Gate", "Library").kind is ErrorKind.GEOMETRY_UNAVAILABLE


def test_selection_checked_before_geometry():
    a = build(CFG, source=_source(), use_logging=False)
    assert a.navigator.find_route(None, "Gate").kind is ErrorKind.SELECTION_INCOMPLETE


def test_reload_replaces_snapshot_without_touching_old_graph(app):
    nav = app.navigator
    old = nav.snapshot
    old_path = nav.find_route("Gate", "Library").path

    nav.load(GeometryBundle(parse_roads(ROADS_V2), BUILDINGS, list(old.points)))
    assert nav.snapshot is not old
    # previous graph still answers with its own topology
    assert nav.engine(old.graph, C(0.0, 0.0), C(1.0, 1.0)).coordinates == old_path.coordinates
    assert len(old.graph) == 3

    new = nav.find_route("Gate", "Library").path
    assert new.coordinates == (C(0.0, 0.0), C(1.0, 1.0))
    assert new.total_length_m == pytest.approx(2**0.5)


def test_navigate_forwards_only_success(app):
    presenter = FakePresenter()
    app.navigator.navigate("Gate", "Library", presenter)
    assert len(presenter.rendered) == 1
    assert presenter.messages == []

    app.navigator.navigate("Gate", "Gate", presenter)  # same node
    assert len(presenter.rendered) == 1
    assert presenter.cleared == 1
    assert presenter.messages == ["No valid path found between selected points."]

    app.navigator.navigate("Gate", None, presenter)
    assert presenter.cleared == 1
    assert presenter.messages[-1] == "Select both start and end points!"


def test_hooks_see_build_and_results():
    hooks = TraceHooks()
    a = build(CFG, source=_source(), use_logging=False)
    a.navigator.hooks = hooks
    asyncio.run(a.reload())
    a.navigator.find_route("Gate", "Library")
    a.navigator.find_route("Gate", "Nowhere")
    assert hooks.trace == [
        ("graph_built", 3, 2),
        ("route_result", "Gate", "Library", True),
        ("route_result", "Gate", "Nowhere", False),
    ]
