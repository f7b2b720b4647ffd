# io/geojson.py
# GeoJSON documents carry positions as [lng, lat]; the domain uses (lat, lng).
from collections.abc import Iterator, Mapping
from typing import Any

from campus_route.domain.entities.geography import Coordinate, Path, PointOfInterest, RoadFeature


class GeometryError(ValueError):
    """A geometry document does not have the expected GeoJSON shape."""


def _features(doc: Mapping[str, Any] | None) -> list[Mapping[str, Any]]:
    if doc is None:
        return []
    if not isinstance(doc, Mapping):
        raise GeometryError(f"expected a JSON object, got {type(doc).__name__}")
    if doc.get("type") != "FeatureCollection":
        raise GeometryError(f"expected a FeatureCollection, got {doc.get('type')!r}")
    feats = doc.get("features")
    if not isinstance(feats, list):
        raise GeometryError("FeatureCollection has no 'features' list")
    return feats


def _coord(pos, where: str) -> Coordinate:
    try:
        return Coordinate.from_lnglat(pos)
    except (TypeError, ValueError, IndexError) as exc:
        raise GeometryError(f"bad position {pos!r} in {where}") from exc


def _lines(geom: Mapping[str, Any]) -> Iterator[list]:
    kind = geom.get("type")
    if kind == "LineString":
        yield geom.get("coordinates") or []
    elif kind == "MultiLineString":
        yield from geom.get("coordinates") or []


def parse_roads(doc: Mapping[str, Any] | None) -> list[RoadFeature]:
    roads: list[RoadFeature] = []
    for i, feat in enumerate(_features(doc)):
        geom = feat.get("geometry") or {}
        name = (feat.get("properties") or {}).get("name")
        for line in _lines(geom):
            coords = tuple(_coord(p, f"road feature {i}") for p in line)
            roads.append(RoadFeature(coords, name=name))
    return roads


def parse_points(doc: Mapping[str, Any] | None) -> list[PointOfInterest]:
    points: list[PointOfInterest] = []
    for i, feat in enumerate(_features(doc)):
        name = (feat.get("properties") or {}).get("name")
        if name is None:
            continue
        geom = feat.get("geometry") or {}
        coord = None
        if geom.get("type") == "Point" and geom.get("coordinates"):
            coord = _coord(geom["coordinates"], f"point feature {i}")
        points.append(PointOfInterest(str(name), coord))
    return points


def route_to_feature(path: Path) -> dict[str, Any]:
    """Path -> GeoJSON LineString feature, positions back in [lng, lat] order."""
    return {
        "type": "Feature",
        "geometry": {
            "type": "LineString",
            "coordinates": [c.to_lnglat() for c in path.coordinates],
        },
        "properties": {"length_m": path.total_length_m},
    }
