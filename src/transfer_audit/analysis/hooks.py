# analysis/hooks.py
from typing import Protocol


class AnalysisHooks(Protocol):
    def run_start(self, *, stops, radius_m, street_radius_m, jobs): ...
    def stops_analyzed(self, *, count, total): ...
    def run_end(self, *, stops, too_long, not_found, wall_ms): ...
    def error(self, *, stop, exc: BaseException, **kw): ...


class NoopHooks:
    def run_start(self, **_):
        pass

    def stops_analyzed(self, **_):
        pass

    def run_end(self, **_):
        pass

    def error(self, **_):
        pass
