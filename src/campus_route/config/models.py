import json
import os
from typing import Annotated, Literal

from pydantic import BaseModel, ConfigDict, Field, ValidationInfo, field_validator


class LogModel(BaseModel):
    model_config = ConfigDict(extra="forbid")
    level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"
    debug: bool = False


# ----------------- GEOMETRY SOURCES ---------------------


class FileSourceModel(BaseModel):
    model_config = ConfigDict(extra="forbid")
    kind: Literal["file"] = "file"
    root: str = "geojson"
    suffix: str = ".geojson"

    @field_validator("root")
    @classmethod
    def _expand(cls, v: str) -> str:
        return os.path.expandvars(os.path.expanduser(v))


class HttpSourceModel(BaseModel):
    model_config = ConfigDict(extra="forbid")
    kind: Literal["http"] = "http"
    base_url: str
    suffix: str = ".geojson"
    timeout_s: float = 5.0

    @field_validator("timeout_s")
    def _positive(cls, v: float, info: ValidationInfo) -> float:
        if v <= 0:
            raise ValueError(f"{info.field_name} must be > 0")
        return v


SourceUnion = Annotated[FileSourceModel | HttpSourceModel, Field(discriminator="kind")]


class LayersModel(BaseModel):
    model_config = ConfigDict(extra="forbid")
    roads: str = "roads1"
    buildings: str = "buildings1"
    points: str = "points1"


# ----------------- ROUTING ---------------------


class GraphModel(BaseModel):
    model_config = ConfigDict(extra="forbid")
    metric: Literal["haversine", "equirectangular", "euclidean"] = "haversine"
    # what to do when two features describe the same segment
    duplicate_edges: Literal["last_write", "min"] = "last_write"
    earth_radius_m: float = 6_371_000.0

    @field_validator("earth_radius_m")
    def _positive(cls, v: float, info: ValidationInfo) -> float:
        if v <= 0:
            raise ValueError(f"{info.field_name} must be > 0")
        return v


class EngineModel(BaseModel):
    model_config = ConfigDict(extra="forbid")
    kind: Literal["heap", "scan"] = "heap"


# ------------------------------------------------------------------


class AppModel(BaseModel):
    model_config = ConfigDict(extra="forbid")
    name: str = "campus"
    source: SourceUnion = Field(default_factory=FileSourceModel)
    layers: LayersModel = LayersModel()
    graph: GraphModel = GraphModel()
    engine: EngineModel = EngineModel()
    log: LogModel = LogModel()


def load_config(path: str) -> AppModel:
    with open(os.path.expanduser(path), encoding="utf-8") as f:
        return AppModel.model_validate(json.load(f))
