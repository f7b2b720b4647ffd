# campus_route/app/build.py
from collections.abc import Mapping
from dataclasses import dataclass

from campus_route.app.hooks import NoopHooks, RoutingHooks
from campus_route.app.navigator import CampusNavigator, NetworkSnapshot
from campus_route.app.protocols import GeometrySource
from campus_route.config.models import AppModel
from campus_route.io.route_logging import RouteLogging  # JSON logs
from campus_route.runtime.registries import make_builder, make_engine, make_metric, make_source


@dataclass
class App:
    config: AppModel
    source: GeometrySource
    navigator: CampusNavigator
    hooks: RoutingHooks

    async def reload(self) -> NetworkSnapshot:
        return await self.navigator.reload(self.source)


def build(
    cfg: AppModel | Mapping,
    *,
    source: GeometrySource | None = None,
    use_logging: bool = True,
) -> App:
    # 0) Validate config
    model = cfg if isinstance(cfg, AppModel) else AppModel.model_validate(cfg)

    # 1) Hooks
    hooks = (
        RouteLogging(name=model.name, level=model.log.level, debug=model.log.debug)
        if use_logging
        else NoopHooks()
    )

    # 2) Routing core
    distance = make_metric(model.graph)
    builder = make_builder(model.graph)
    engine = make_engine(model.engine)

    # 3) Geometry source (an explicit one wins over config)
    source = source or make_source(model.source)

    navigator = CampusNavigator(
        builder=builder,
        engine=engine,
        distance=distance,
        hooks=hooks,
        layers=model.layers.model_dump(),
    )
    return App(model, source, navigator, hooks)
