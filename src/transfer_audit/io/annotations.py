# transfer_audit/io/annotations.py

from dataclasses import dataclass


# Base type for graph annotations (report records, never fed back into the graph)
@dataclass
class Annotation:
    run_id: str
    seq: int  # emission order within one run
    name: str  # stable annotation name

    def message(self) -> str:
        return self.name


@dataclass
class TransferRoutingDistanceTooLong(Annotation):
    origin_id: str
    origin_name: str
    destination_id: str
    destination_name: str
    direct_distance_m: float
    street_distance_m: float
    ratio: float

    def message(self) -> str:
        return (
            f"Routing distance between stop {self.origin_id} and stop {self.destination_id} "
            f"is {self.ratio:.1f} times the direct distance "
            f"(street {self.street_distance_m:.0f} m, direct {self.direct_distance_m:.0f} m)"
        )


@dataclass
class TransferCouldNotBeRouted(Annotation):
    origin_id: str
    origin_name: str
    destination_id: str
    destination_name: str
    direct_distance_m: float

    def message(self) -> str:
        return (
            f"Transfer between stop {self.origin_id} and stop {self.destination_id} "
            f"could not be routed (direct distance {self.direct_distance_m:.0f} m)"
        )
