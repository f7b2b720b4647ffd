# io/sources.py
import json
from pathlib import Path
from typing import Any

import requests

from campus_route.app.protocols import GeometrySource


class FileGeometrySource(GeometrySource):
    """Reads `<root>/<name><suffix>` from disk."""

    def __init__(self, root: str | Path, suffix: str = ".geojson"):
        self.root, self.suffix = Path(root), suffix

    def path_for(self, name: str) -> Path:
        return self.root / f"{name}{self.suffix}"

    def fetch(self, name: str) -> dict[str, Any]:
        with open(self.path_for(name), encoding="utf-8") as f:
            return json.load(f)


class HttpGeometrySource(GeometrySource):
    """GETs `<base_url>/<name><suffix>`; non-2xx responses raise."""

    def __init__(self, base_url: str, suffix: str = ".geojson", timeout_s: float = 5.0):
        self.base_url, self.suffix, self.timeout = base_url.rstrip("/"), suffix, timeout_s

    def url_for(self, name: str) -> str:
        return f"{self.base_url}/{name}{self.suffix}"

    def fetch(self, name: str) -> dict[str, Any]:
        response = requests.get(self.url_for(name), timeout=self.timeout)
        response.raise_for_status()
        return response.json()


class MemoryGeometrySource(GeometrySource):
    """Serves prebuilt documents; a missing name raises KeyError."""

    def __init__(self, docs: dict[str, Any]):
        self.docs = docs

    def fetch(self, name: str) -> dict[str, Any]:
        return self.docs[name]
