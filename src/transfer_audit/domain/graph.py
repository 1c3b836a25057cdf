# transfer_audit/domain/graph.py
from __future__ import annotations

import logging

import networkx as nx
import numpy as np

from transfer_audit.domain.entities.geography import Point, StopAtDistance, TransitStop
from transfer_audit.errors import GraphError

logger = logging.getLogger(__name__)


class TransitGraph:
    """
    Street network with transit stops as nodes.

    Transit-stop nodes carry ``stop_id``, ``x``, ``y`` (meters, projected CRS) and
    optionally ``name``; street nodes need no attributes. Edge attribute: ``length_m``.
    The graph is never mutated by the analysis.
    """

    def __init__(self, G: nx.Graph):
        self.G = G
        self._stops: list[TransitStop] | None = None
        self._by_node: dict[object, TransitStop] = {}
        self._xy: np.ndarray | None = None

    @classmethod
    def from_networkx(cls, G: nx.Graph) -> TransitGraph:
        for n, data in G.nodes(data=True):
            if data.get("stop_id") is not None and ("x" not in data or "y" not in data):
                raise GraphError(f"stop node {n!r} has no x/y coordinates")
        for u, v, data in G.edges(data=True):
            L = data.get("length_m")
            if L is None or L < 0:
                raise GraphError(f"edge {u!r}-{v!r} needs a non-negative length_m, got {L!r}")
        return cls(G)

    # ------------- Stop index --------------------------

    def index(self) -> TransitGraph:
        if self._stops is not None:
            return self
        stops = []
        for n, data in self.G.nodes(data=True):
            if data.get("stop_id") is None:
                continue
            stop = TransitStop(
                stop_id=str(data["stop_id"]),
                point=Point(float(data["x"]), float(data["y"])),
                node=n,
                name=str(data.get("name") or ""),
            )
            stops.append(stop)
            self._by_node[n] = stop
        self._xy = np.array([(s.point.x, s.point.y) for s in stops], dtype=float).reshape(-1, 2)
        self._stops = stops
        logger.info("Indexed %d transit stops", len(stops))
        return self

    def stops(self) -> list[TransitStop]:
        return list(self.index()._stops)

    def stop_at(self, node) -> TransitStop | None:
        return self.index()._by_node.get(node)

    # ------------- Searches --------------------------

    def stops_within(self, p: Point, radius_m: float) -> list[StopAtDistance]:
        """All stops whose planar distance to ``p`` is at most ``radius_m``."""
        self.index()
        if len(self._stops) == 0:
            return []
        d = np.hypot(self._xy[:, 0] - p.x, self._xy[:, 1] - p.y)
        hits = np.flatnonzero(d <= radius_m)
        return [StopAtDistance(self._stops[i], float(d[i])) for i in hits]

    def street_distances(self, origin: TransitStop, cutoff_m: float) -> dict[object, float]:
        return nx.single_source_dijkstra_path_length(
            self.G, origin.node, cutoff=cutoff_m, weight="length_m"
        )
