from transfer_audit.app.protocols import NearbyStopFinder
from transfer_audit.domain.entities.geography import StopAtDistance, TransitStop
from transfer_audit.domain.graph import TransitGraph


class EuclideanNearbyStopFinder(NearbyStopFinder):
    """Direct mode: straight-line distance from the origin's coordinate."""

    def __init__(self, graph: TransitGraph, radius_m: float):
        self.G, self.radius_m = graph, radius_m

    def find_nearby_stops(self, origin: TransitStop) -> list[StopAtDistance]:
        return self.G.stops_within(origin.point, self.radius_m)


class StreetNearbyStopFinder(NearbyStopFinder):
    """Street-routed mode: shortest path length over ``length_m`` edges."""

    def __init__(self, graph: TransitGraph, radius_m: float):
        self.G, self.radius_m = graph, radius_m

    def find_nearby_stops(self, origin: TransitStop) -> list[StopAtDistance]:
        out = []
        for node, L in self.G.street_distances(origin, self.radius_m).items():
            stop = self.G.stop_at(node)
            if stop is not None:
                out.append(StopAtDistance(stop, float(L)))
        return out
