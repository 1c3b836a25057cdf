# runtime/registries.py
from collections.abc import Callable

from transfer_audit.app.protocols import NearbyStopFinder
from transfer_audit.domain.search.nearby_stop_finders import (
    EuclideanNearbyStopFinder,
    StreetNearbyStopFinder,
)

NearbyFinderFactory = Callable[..., NearbyStopFinder]

_nearby_finder_registry: dict[str, NearbyFinderFactory] = {}


# ------------------- Nearby stop finders ---------------------------


def register_nearby_finder(kind: str):
    def deco(fn: NearbyFinderFactory):
        _nearby_finder_registry[kind] = fn
        return fn

    return deco


def make_nearby_finder(kind: str, graph, radius_m: float) -> NearbyStopFinder:
    try:
        factory = _nearby_finder_registry[kind]
    except KeyError:
        raise ValueError(f"Unknown nearby finder kind {kind!r}") from None
    return factory(graph, radius_m)


@register_nearby_finder("euclidean")
def _make_euclidean(graph, radius_m):
    return EuclideanNearbyStopFinder(graph, radius_m)


@register_nearby_finder("streets")
def _make_streets(graph, radius_m):
    return StreetNearbyStopFinder(graph, radius_m)
