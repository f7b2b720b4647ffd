# app/hooks.py
from typing import Protocol


class RoutingHooks(Protocol):
    def load_start(self, *, layers): ...
    def source_failed(self, *, layer, name, error): ...
    def load_end(self, *, loaded, missing, wall_ms): ...
    def graph_built(self, *, nodes, edges, stats, wall_ms): ...
    def route_request(self, *, start, end): ...
    def route_result(self, *, start, end, outcome, wall_ms): ...


class NoopHooks:
    def load_start(self, **_):
        pass

    def source_failed(self, **_):
        pass

    def load_end(self, **_):
        pass

    def graph_built(self, **_):
        pass

    def route_request(self, **_):
        pass

    def route_result(self, **_):
        pass
