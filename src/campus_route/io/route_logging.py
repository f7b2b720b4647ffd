# io/route_logging.py
import json
import logging
import sys

from campus_route.app.hooks import NoopHooks
from campus_route.app.outcomes import RouteFound


def _default_json_logger(name="campus_route", level="INFO"):
    logger = logging.getLogger(name)
    if not logger.handlers:
        h = logging.StreamHandler(sys.stdout)

        class _JsonFormatter(logging.Formatter):
            def format(self, record: logging.LogRecord) -> str:
                payload = {
                    "level": record.levelname,
                    "msg": record.getMessage(),
                    "logger": record.name,
                }
                extra = getattr(record, "extra", None)
                if isinstance(extra, dict):
                    payload.update(extra)
                return json.dumps(payload, default=str)

        h.setFormatter(_JsonFormatter())
        logger.addHandler(h)
        logger.setLevel(level)
    return logger


class RouteLogging(NoopHooks):
    """
    Shapes loader, builder and navigation hook calls into one JSON log line each.
    """

    def __init__(
        self,
        name: str = "campus",
        level: str = "INFO",
        debug: bool = False,
        logger: logging.Logger | None = None,
    ):
        self.name, self.debug = name, debug
        self.log = logger or _default_json_logger(level=level)

    def _emit(self, level: str, msg: str, **extra):
        payload = {"app": self.name}
        self.log.log(getattr(logging, level), msg, extra={"extra": {**payload, **extra}})

    # --------------- geometry loading -----------------------------

    def load_start(self, *, layers):
        self._emit("INFO", "load_start", layers=dict(layers))

    def source_failed(self, *, layer, name, error):
        self._emit(
            "ERROR",
            "source_failed",
            layer=layer,
            name=name,
            error=str(error),
            error_type=type(error).__name__,
        )

    def load_end(self, *, loaded, missing, wall_ms):
        level = "WARNING" if missing else "INFO"
        self._emit(level, "load_end", loaded=loaded, missing=missing, wall_ms=round(wall_ms, 3))

    def graph_built(self, *, nodes, edges, stats, wall_ms):
        extra = {"nodes": nodes, "edges": edges, "wall_ms": round(wall_ms, 3)}
        if stats is not None:
            extra.update(
                segments=stats.segments,
                degenerate=stats.degenerate,
                duplicates=stats.duplicates,
                conflicting=stats.conflicting,
            )
        # same segment described twice with different lengths
        level = "WARNING" if stats is not None and stats.conflicting else "INFO"
        self._emit(level, "graph_built", **extra)

    # --------------- routing -----------------------------

    def route_request(self, *, start, end):
        if self.debug:
            self._emit("DEBUG", "route_request", start=start, end=end)

    def route_result(self, *, start, end, outcome, wall_ms):
        extra = {"start": start, "end": end, "wall_ms": round(wall_ms, 3)}
        if isinstance(outcome, RouteFound):
            extra.update(
                result="success",
                nodes=len(outcome.path),
                length_m=round(outcome.path.total_length_m, 3),
            )
        else:
            extra.update(result=outcome.kind.value, detail=outcome.detail)
        self._emit("INFO", "route_result", **extra)
