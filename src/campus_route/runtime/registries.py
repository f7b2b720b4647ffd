# runtime/registries.py
from collections.abc import Callable
from functools import partial

from campus_route.app.protocols import DistanceFn, GeometrySource, PathEngine
from campus_route.config.models import (
    EngineModel,
    FileSourceModel,
    GraphModel,
    HttpSourceModel,
    SourceUnion,
)
from campus_route.domain.routing.distances import equirectangular_m, euclidean, haversine_m
from campus_route.domain.routing.graph_builder import DuplicateEdgePolicy, GraphBuilder
from campus_route.domain.routing.shortest_path import dijkstra_heap, dijkstra_scan
from campus_route.io.sources import FileGeometrySource, HttpGeometrySource

MetricFactory = Callable[[GraphModel], DistanceFn]
EngineFactory = Callable[[EngineModel], PathEngine]
SourceFactory = Callable[[SourceUnion], GeometrySource]

_metric_registry: dict[str, MetricFactory] = {}
_engine_registry: dict[str, EngineFactory] = {}
_source_registry: dict[str, SourceFactory] = {}


# ------------------- Distance metrics ---------------------------


def register_metric(kind: str):
    def deco(fn: MetricFactory):
        _metric_registry[kind] = fn
        return fn

    return deco


def make_metric(cfg: GraphModel) -> DistanceFn:
    try:
        factory = _metric_registry[cfg.metric]
    except KeyError:
        raise ValueError(f"Unknown metric {cfg.metric!r}")
    return factory(cfg)


@register_metric("haversine")
def _make_haversine(cfg: GraphModel):
    return partial(haversine_m, radius_m=cfg.earth_radius_m)


@register_metric("equirectangular")
def _make_equirect(cfg: GraphModel):
    return partial(equirectangular_m, radius_m=cfg.earth_radius_m)


@register_metric("euclidean")
def _make_euclidean(cfg: GraphModel):
    return euclidean


def make_builder(cfg: GraphModel) -> GraphBuilder:
    return GraphBuilder(make_metric(cfg), DuplicateEdgePolicy(cfg.duplicate_edges))


# --------------------- Path engines ---------------------


def register_engine(kind: str):
    def deco(fn: EngineFactory):
        _engine_registry[kind] = fn
        return fn

    return deco


def make_engine(cfg: EngineModel) -> PathEngine:
    try:
        factory = _engine_registry[cfg.kind]
    except KeyError:
        raise ValueError(f"Unknown engine kind {cfg.kind!r}")
    return factory(cfg)


@register_engine("heap")
def _make_heap(cfg: EngineModel):
    return dijkstra_heap


@register_engine("scan")
def _make_scan(cfg: EngineModel):
    return dijkstra_scan


# ---------------------- Geometry sources ----------------------------


def register_source(kind: str):
    def deco(fn: SourceFactory):
        _source_registry[kind] = fn
        return fn

    return deco


def make_source(cfg: SourceUnion) -> GeometrySource:
    try:
        factory = _source_registry[cfg.kind]
    except KeyError:
        raise ValueError(f"Unknown source kind {cfg.kind!r}")
    return factory(cfg)


@register_source("file")
def _make_file(cfg: FileSourceModel):
    return FileGeometrySource(cfg.root, cfg.suffix)


@register_source("http")
def _make_http(cfg: HttpSourceModel):
    return HttpGeometrySource(cfg.base_url, cfg.suffix, cfg.timeout_s)
