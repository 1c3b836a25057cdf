from dataclasses import dataclass


# Core geometry types used by the stop searches
@dataclass(frozen=True)
class Point:
    x: float  # meters in projected CRS
    y: float


@dataclass(frozen=True)
class TransitStop:
    stop_id: str
    point: Point
    node: object  # graph node key
    name: str = ""

    def __str__(self) -> str:
        return f"{self.name} ({self.stop_id})" if self.name else self.stop_id


@dataclass(frozen=True)
class StopAtDistance:
    stop: TransitStop
    distance_m: float
