"""Adapter exposing any NetworkX graph through the search queries.

Example:
    >>> import networkx as nx
    >>> from spsearch.graph.adapter import NetworkXGraph
    >>> from spsearch.search import dijkstra
    >>>
    >>> G = nx.Graph()
    >>> G.add_edge("A", "B", cost=2)
    >>> dijkstra(NetworkXGraph(G), "A", "B", build_path=False)
    (2.0, None)
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, List, Optional, Union

from spsearch.config import MULTI_EDGE_MODES, SEARCH_CONFIG
from spsearch.graph.base import resolve_weight
from spsearch.types import Distance, NodeID

if TYPE_CHECKING:
    import networkx as nx

    NxGraph = Union[nx.Graph, nx.DiGraph, nx.MultiGraph, nx.MultiDiGraph]
else:
    NxGraph = Any


class NetworkXGraph:
    """Read-only view of a NetworkX graph implementing `Graph`.

    Directed graphs expose successors; undirected graphs expose every
    adjacent node, so each edge can be walked both ways.

    Args:
        graph: Any NetworkX graph class (simple or multi, directed or not).
        weight: Edge attribute holding the weight. Defaults to
            ``SEARCH_CONFIG.weight_attr``.
        multi_edge: ``"min"`` or ``"first"``; how parallel edges of a
            multigraph resolve to one weight.
        default_weight: Weight of edges without the attribute.

    Raises:
        ValueError: If ``multi_edge`` is unknown.
    """

    def __init__(
        self,
        graph: NxGraph,
        weight: Optional[str] = None,
        multi_edge: Optional[str] = None,
        default_weight: Optional[float] = None,
    ) -> None:
        self.graph = graph
        self.weight = weight or SEARCH_CONFIG.weight_attr
        self.multi_edge = multi_edge or SEARCH_CONFIG.multi_edge
        self.default_weight = (
            SEARCH_CONFIG.default_weight if default_weight is None else default_weight
        )
        if self.multi_edge not in MULTI_EDGE_MODES:
            raise ValueError(
                f"Unknown multi_edge mode '{self.multi_edge}'; "
                f"expected one of {MULTI_EDGE_MODES}."
            )

    def _adjacency(self, node: NodeID):
        try:
            return self.graph.adj[node]
        except KeyError:
            raise KeyError(f"Node '{node}' is not in the graph.") from None

    def neighbor_count(self, node: NodeID) -> int:
        return len(self._adjacency(node))

    def neighbors(self, node: NodeID) -> List[NodeID]:
        return list(self._adjacency(node))

    def edge_weight(self, u: NodeID, v: NodeID) -> Distance:
        adjacency = self._adjacency(u)
        if v not in adjacency:
            raise KeyError(f"No edge from '{u}' to '{v}'.")
        if self.graph.is_multigraph():
            parallel = adjacency[v].values()
        else:
            parallel = [adjacency[v]]
        return resolve_weight(
            parallel, self.weight, self.default_weight, self.multi_edge, u, v
        )

    def __contains__(self, node: object) -> bool:
        return node in self.graph

    def __repr__(self) -> str:
        return (
            f"NetworkXGraph({type(self.graph).__name__}, nodes={self.graph.number_of_nodes()}, "
            f"weight={self.weight!r})"
        )
