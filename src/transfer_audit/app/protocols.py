from typing import Protocol, runtime_checkable

from transfer_audit.domain.entities.geography import Point, StopAtDistance, TransitStop


# ------------- Graph & search --------------------
@runtime_checkable
class StopIndex(Protocol):
    """
    Responsibilities:
      • Enumerate every transit stop of the graph.
      • Answer planar radius queries around a point.
    Units: meters for coordinates/distances.
    """

    def index(self) -> "StopIndex": ...
    def stops(self) -> list[TransitStop]: ...
    def stops_within(self, p: Point, radius_m: float) -> list[StopAtDistance]: ...


@runtime_checkable
class NearbyStopFinder(Protocol):
    """
    Return every stop reachable from ``origin`` within the finder's radius,
    with the measured distance. The origin itself may be included. Order is
    not significant.
    """

    radius_m: float

    def find_nearby_stops(self, origin: TransitStop) -> list[StopAtDistance]: ...


# ------------- Reporting --------------------


@runtime_checkable
class AnnotationSink(Protocol):
    """Fire-and-forget channel for transfer findings."""

    def report_routing_too_long(
        self,
        origin: TransitStop,
        destination: TransitStop,
        direct_distance_m: float,
        street_distance_m: float,
        ratio: float,
    ) -> None: ...

    def report_could_not_be_routed(
        self,
        origin: TransitStop,
        destination: TransitStop,
        direct_distance_m: float,
    ) -> None: ...
