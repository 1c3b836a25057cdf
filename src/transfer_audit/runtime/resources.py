# transfer_audit/runtime/resources.py
import json
import pickle
from functools import lru_cache

import networkx as nx

from transfer_audit.domain.graph import TransitGraph
from transfer_audit.errors import GraphError

_FLOAT_ATTRS = ("x", "y", "length_m")


def _coerce_numeric(G: nx.Graph) -> nx.Graph:
    # graphml without key types stores everything as str
    for _, data in G.nodes(data=True):
        for k in _FLOAT_ATTRS:
            if k in data:
                data[k] = float(data[k])
    for _, _, data in G.edges(data=True):
        if "length_m" in data:
            data["length_m"] = float(data["length_m"])
    return G


@lru_cache(maxsize=8)
def load_graph_from_path(file: str, fmt: str) -> TransitGraph:
    if fmt == "pickle":
        with open(file, "rb") as f:
            obj = pickle.load(f)
        if isinstance(obj, TransitGraph):
            return obj
        if isinstance(obj, nx.Graph):
            return TransitGraph.from_networkx(obj)
        raise GraphError(f"{file}: expected a networkx graph, got {type(obj).__name__}")
    if fmt == "graphml":
        return TransitGraph.from_networkx(_coerce_numeric(nx.read_graphml(file)))
    if fmt == "json":
        with open(file, encoding="utf-8") as f:
            doc = json.load(f)
        return TransitGraph.from_networkx(_coerce_numeric(nx.node_link_graph(doc, edges="links")))
    raise ValueError(f"Unsupported graph fmt {fmt!r}")
