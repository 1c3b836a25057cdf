# analysis/transfer_analyzer.py
"""
Analysis of the transfers between nearby stops generated by routing over the street
network. Reports both nearby stops that cannot be routed between and pairs whose street
distance is unusually long compared to the direct distance (ranked by the ratio between
the two). Both lists are meant for improving the street data used for transfers. Runtime
grows with the number of stops and the search radius.
"""

import logging
import time
from collections.abc import Callable
from concurrent.futures import ThreadPoolExecutor, as_completed
from dataclasses import dataclass, field

from transfer_audit.analysis.hooks import AnalysisHooks, NoopHooks
from transfer_audit.app.protocols import AnnotationSink, NearbyStopFinder, StopIndex
from transfer_audit.domain.entities.geography import TransitStop
from transfer_audit.domain.findings import (
    RoutingNotFound,
    RoutingTooLong,
    rank_not_found,
    rank_too_long,
)
from transfer_audit.errors import ConfigurationError
from transfer_audit.runtime.registries import make_nearby_finder

logger = logging.getLogger(__name__)

FinderFactory = Callable[[str, StopIndex, float], NearbyStopFinder]


@dataclass
class TransferReport:
    too_long: list[RoutingTooLong] = field(default_factory=list)
    not_found: list[RoutingNotFound] = field(default_factory=list)
    stops_analyzed: int = 0

    @property
    def too_long_count(self) -> int:
        return len(self.too_long)

    @property
    def not_found_count(self) -> int:
        return len(self.not_found)

    def as_dict(self) -> dict[str, int]:
        return {
            "stops_analyzed": self.stops_analyzed,
            "too_long": self.too_long_count,
            "not_found": self.not_found_count,
        }


class DirectTransferAnalyzer:
    RADIUS_MULTIPLIER = 5

    def __init__(
        self,
        radius_m: float,
        *,
        sink: AnnotationSink | None = None,
        hooks: AnalysisHooks | None = None,
        jobs: int = 1,
        progress_every: int = 1000,
        finder_factory: FinderFactory | None = None,
    ):
        if not radius_m > 0:
            raise ConfigurationError(f"radius_m must be > 0, got {radius_m!r}")
        if jobs < 1:
            raise ConfigurationError(f"jobs must be >= 1, got {jobs!r}")
        if progress_every < 1:
            raise ConfigurationError(f"progress_every must be >= 1, got {progress_every!r}")
        self.radius_m = float(radius_m)
        self.sink = sink
        self.hooks = hooks or NoopHooks()
        self.jobs = jobs
        self.progress_every = progress_every
        self.finder_factory = finder_factory or make_nearby_finder

    @property
    def street_radius_m(self) -> float:
        return self.radius_m * self.RADIUS_MULTIPLIER

    # ------------------------------------------------------------

    def analyze(self, graph: StopIndex) -> TransferReport:
        t0 = time.perf_counter()
        stops = graph.index().stops()

        euclidean = self.finder_factory("euclidean", graph, self.radius_m)
        streets = self.finder_factory("streets", graph, self.street_radius_m)

        self.hooks.run_start(
            stops=len(stops),
            radius_m=self.radius_m,
            street_radius_m=self.street_radius_m,
            jobs=self.jobs,
        )

        if self.jobs == 1 or len(stops) < 2:
            per_stop = self._run_sequential(stops, euclidean, streets)
        else:
            per_stop = self._run_parallel(stops, euclidean, streets)

        report = TransferReport(stops_analyzed=len(stops))
        for too_long, not_found in per_stop:
            report.too_long.extend(too_long)
            report.not_found.extend(not_found)

        # Street/direct ratio, worst first; then direct distance, closest first
        report.too_long = rank_too_long(report.too_long)
        report.not_found = rank_not_found(report.not_found)
        self._emit(report)

        self.hooks.run_end(
            stops=len(stops),
            too_long=report.too_long_count,
            not_found=report.not_found_count,
            wall_ms=(time.perf_counter() - t0) * 1000,
        )
        return report

    def analyze_stop(
        self,
        origin: TransitStop,
        euclidean: NearbyStopFinder,
        streets: NearbyStopFinder,
    ) -> tuple[list[RoutingTooLong], list[RoutingNotFound]]:
        stops_euclidean = {s.stop: s.distance_m for s in euclidean.find_nearby_stops(origin)}
        stops_streets = {s.stop: s.distance_m for s in streets.find_nearby_stops(origin)}

        too_long: list[RoutingTooLong] = []
        not_found: list[RoutingNotFound] = []
        for dest, direct_m in stops_euclidean.items():
            if dest == origin:
                continue
            if dest in stops_streets:
                info = RoutingTooLong(origin, dest, direct_m, stops_streets[dest])
                if info.reportable:
                    too_long.append(info)
            else:
                not_found.append(RoutingNotFound(origin, dest, direct_m))
        return too_long, not_found

    # ------------- Helpers -----------------------------

    def _tick(self, count: int, total: int) -> None:
        if count % self.progress_every == 0:
            self.hooks.stops_analyzed(count=count, total=total)

    def _run_sequential(self, stops, euclidean, streets):
        out = []
        for n, origin in enumerate(stops, start=1):
            self._tick(n, len(stops))
            try:
                out.append(self.analyze_stop(origin, euclidean, streets))
            except Exception as exc:
                self.hooks.error(stop=origin, exc=exc, analyzed=n - 1)
                raise
        return out

    def _run_parallel(self, stops, euclidean, streets):
        results: list = [None] * len(stops)
        done = 0
        with ThreadPoolExecutor(max_workers=self.jobs) as pool:
            futures = {
                pool.submit(self.analyze_stop, origin, euclidean, streets): i
                for i, origin in enumerate(stops)
            }
            for fut in as_completed(futures):
                i = futures[fut]
                try:
                    results[i] = fut.result()
                except Exception as exc:
                    pool.shutdown(wait=True, cancel_futures=True)
                    self.hooks.error(stop=stops[i], exc=exc, analyzed=done)
                    raise
                done += 1
                self._tick(done, len(stops))
        return results

    def _emit(self, report: TransferReport) -> None:
        if self.sink is None:
            return
        for info in report.too_long:
            self.sink.report_routing_too_long(
                info.origin,
                info.destination,
                info.direct_distance_m,
                info.street_distance_m,
                info.ratio,
            )
        for info in report.not_found:
            self.sink.report_could_not_be_routed(
                info.origin, info.destination, info.direct_distance_m
            )
