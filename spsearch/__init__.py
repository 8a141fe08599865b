"""spsearch: single-pair shortest path search.

Dijkstra's algorithm driven by an unordered node-record set that serves as
both the frontier and the visited set.

Primary API:
    dijkstra() - distance and record chain from a source to a destination
    shortest_path() - the same result as a `Path`, or None if unreachable
    NodeRecordSet - keyed node -> (predecessor, distance) collection
    StrictMultiDiGraph, NetworkXGraph - graph collaborators (NetworkX based)
    load_graph() - read an edge list, node-link JSON or YAML graph file

Example:
    from spsearch import StrictMultiDiGraph, shortest_path

    g = StrictMultiDiGraph()
    for n in ("S", "A", "T"):
        g.add_node(n)
    g.add_edge("S", "A", cost=1)
    g.add_edge("A", "T", cost=2)

    path = shortest_path(g, "S", "T")   # S -> A -> T, cost 3.0
"""

from __future__ import annotations

from spsearch import cli, logging
from spsearch._version import __version__
from spsearch.config import SEARCH_CONFIG, SearchConfig
from spsearch.graph import Graph, NetworkXGraph, StrictMultiDiGraph
from spsearch.io import load_graph
from spsearch.path import Path
from spsearch.record_set import NodeRecordSet
from spsearch.search import build_path_to, dijkstra, shortest_distance, shortest_path
from spsearch.types import NO_ID, NodeRecord

__all__ = [
    "__version__",
    # Search
    "dijkstra",
    "shortest_path",
    "shortest_distance",
    "build_path_to",
    # Records
    "NodeRecordSet",
    "NodeRecord",
    "NO_ID",
    "Path",
    # Graphs
    "Graph",
    "StrictMultiDiGraph",
    "NetworkXGraph",
    "load_graph",
    # Configuration
    "SearchConfig",
    "SEARCH_CONFIG",
    # Utilities
    "cli",
    "logging",
]
