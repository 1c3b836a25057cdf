# io/analysis_logging.py
import json
import logging
import sys

from transfer_audit.analysis.hooks import NoopHooks


def _default_json_logger(name="transfer_audit.run", level="INFO"):
    logger = logging.getLogger(name)
    if not logger.handlers:
        h = logging.StreamHandler(sys.stderr)

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
                return json.dumps(payload)

        h.setFormatter(_JsonFormatter())
        logger.addHandler(h)
        logger.setLevel(level)
        logger.propagate = False
    return logger


class AnalysisLogging(NoopHooks):
    """
    Structured progress and lifecycle logs for one transfer analysis run.
    """

    def __init__(
        self,
        run_id: str = "local",
        level: str = "INFO",
        logger: logging.Logger | None = None,
    ):
        self.run_id = run_id
        self.log = logger or _default_json_logger(level=level)

    def _emit(self, level: str, msg: str, **extra):
        payload = {"run_id": self.run_id}
        self.log.log(getattr(logging, level), msg, extra={"extra": {**payload, **extra}})

    def run_start(self, *, stops: int, radius_m: float, street_radius_m: float, jobs: int):
        self._emit(
            "INFO",
            "Analyzing transfers (this can be time consuming)",
            stops=stops,
            radius_m=radius_m,
            street_radius_m=street_radius_m,
            jobs=jobs,
        )

    def stops_analyzed(self, *, count: int, total: int):
        self._emit("INFO", f"{count} stops analyzed", count=count, total=total)

    def run_end(self, *, stops: int, too_long: int, not_found: int, wall_ms: float):
        self._emit(
            "INFO",
            f"Done analyzing transfers. {not_found} transfers could not be routed "
            f"and {too_long} transfers had a too long routing distance",
            stops=stops,
            too_long=too_long,
            not_found=not_found,
            wall_ms=round(wall_ms, 1),
        )

    def error(self, *, stop, exc: BaseException, **extra):
        self._emit("ERROR", "analysis_error", stop=str(stop), error=repr(exc), **extra)
