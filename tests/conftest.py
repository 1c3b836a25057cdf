"""Pytest configuration and fixtures."""

import networkx as nx
import pytest

from transfer_audit.domain.graph import TransitGraph


def make_street_graph() -> nx.Graph:
    """
    Three stops around a short street detour.

        S1 (0,0) --10-- n1 --300-- n2 --10-- S2 (60,0)
        S3 (0,80) is not linked to any street.
    """
    G = nx.Graph()
    G.add_node("s1", x=0.0, y=0.0, stop_id="S1", name="Central")
    G.add_node("s2", x=60.0, y=0.0, stop_id="S2", name="Market")
    G.add_node("s3", x=0.0, y=80.0, stop_id="S3")
    G.add_node("n1", x=0.0, y=-10.0)
    G.add_node("n2", x=60.0, y=-10.0)
    G.add_edge("s1", "n1", length_m=10.0)
    G.add_edge("n1", "n2", length_m=300.0)
    G.add_edge("n2", "s2", length_m=10.0)
    return G


@pytest.fixture
def street_graph() -> TransitGraph:
    return TransitGraph.from_networkx(make_street_graph())
