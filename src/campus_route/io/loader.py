# io/loader.py
import asyncio
import time
from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from typing import Any

from campus_route.app.hooks import NoopHooks, RoutingHooks
from campus_route.app.protocols import GeometrySource
from campus_route.domain.entities.geography import PointOfInterest, RoadFeature
from campus_route.io.geojson import parse_points, parse_roads

DEFAULT_LAYERS = {"roads": "roads1", "buildings": "buildings1", "points": "points1"}


@dataclass(frozen=True)
class GeometryBundle:
    roads: list[RoadFeature] | None
    buildings: dict[str, Any] | None  # passed through for the map; routing ignores it
    points: list[PointOfInterest] | None
    missing: frozenset[str] = field(default_factory=frozenset)


_PARSERS: dict[str, Callable[[Any], Any]] = {
    "roads": parse_roads,
    "buildings": lambda doc: doc,
    "points": parse_points,
}


def _fetch_layer(source: GeometrySource, layer: str, name: str):
    return _PARSERS[layer](source.fetch(name))


async def _guarded(source, layer, name, hooks: RoutingHooks):
    try:
        return await asyncio.to_thread(_fetch_layer, source, layer, name)
    except Exception as exc:
        # one failed layer must not abort the others
        hooks.source_failed(layer=layer, name=name, error=exc)
        return None


async def load_geometry(
    source: GeometrySource,
    layers: Mapping[str, str] | None = None,
    *,
    hooks: RoutingHooks | None = None,
) -> GeometryBundle:
    """
    Fetch roads, buildings and points concurrently and wait for all three.
    A layer that fails to fetch or parse comes back as None and is listed in
    `missing`; the bundle is only returned once every fetch has finished.
    """
    hooks = hooks or NoopHooks()
    names = {**DEFAULT_LAYERS, **(layers or {})}
    order = ("roads", "buildings", "points")

    t0 = time.perf_counter()
    hooks.load_start(layers=names)
    roads, buildings, points = await asyncio.gather(
        *(_guarded(source, layer, names[layer], hooks) for layer in order)
    )
    got = dict(zip(order, (roads, buildings, points)))
    missing = frozenset(k for k, v in got.items() if v is None)
    hooks.load_end(
        loaded=sorted(set(order) - missing),
        missing=sorted(missing),
        wall_ms=(time.perf_counter() - t0) * 1000,
    )
    return GeometryBundle(roads, buildings, points, missing)
