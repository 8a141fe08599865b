"""Strict multi-directed graph that can be searched directly.

`StrictMultiDiGraph` extends `networkx.MultiDiGraph` with explicit node
management, unique integer edge keys and predictable errors. It also
implements the `spsearch.graph.base.Graph` queries, so it can be handed to
`spsearch.search.dijkstra` without an adapter.
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional, Tuple

import networkx as nx

from spsearch.config import MULTI_EDGE_MODES, SEARCH_CONFIG
from spsearch.graph.base import AttrDict, resolve_weight
from spsearch.types import NO_ID, Distance, NodeID

EdgeID = Any
EdgeTuple = Tuple[NodeID, NodeID, EdgeID, Dict[str, Any]]


class StrictMultiDiGraph(nx.MultiDiGraph):
    """A multi-directed graph with strict rules and unique edge IDs.

    This class enforces:
      - No automatic creation of missing nodes when adding an edge.
      - No duplicate nodes and no duplicate edge keys (ValueError).
      - Removing non-existent nodes or edges raises ValueError.
      - ``NO_ID`` cannot be used as a node.

    Weights are read from ``weight_attr`` (default ``SEARCH_CONFIG.weight_attr``);
    edges without it weigh ``default_weight``. Parallel edges resolve to a
    single weight according to ``multi_edge``. All three are fixed when the
    graph is created.
    """

    def __init__(
        self,
        *args,
        weight_attr: Optional[str] = None,
        multi_edge: Optional[str] = None,
        default_weight: Optional[float] = None,
        **kwargs,
    ) -> None:
        self._edges: Dict[EdgeID, EdgeTuple] = {}
        # Only advances; removed edges do not give their IDs back
        self._next_edge_id: int = 0
        super().__init__(*args, **kwargs)
        self.weight_attr = weight_attr or SEARCH_CONFIG.weight_attr
        self.multi_edge = multi_edge or SEARCH_CONFIG.multi_edge
        self.default_weight = (
            SEARCH_CONFIG.default_weight if default_weight is None else default_weight
        )
        if self.multi_edge not in MULTI_EDGE_MODES:
            raise ValueError(
                f"Unknown multi_edge mode '{self.multi_edge}'; "
                f"expected one of {MULTI_EDGE_MODES}."
            )

    def new_edge_key(self, u: NodeID, v: NodeID, key: Optional[int] = None) -> int:  # type: ignore[override]
        """Return a new unique integer edge ID (signature matches NetworkX)."""
        next_edge_id = self._next_edge_id
        self._next_edge_id += 1
        return next_edge_id

    #
    # Node management
    #
    def add_node(self, node_for_adding: NodeID, **attr: Any) -> None:
        """Add a single node, disallowing duplicates.

        Raises:
            ValueError: If the node already exists or is ``NO_ID``.
        """
        if node_for_adding is NO_ID:
            raise ValueError("NO_ID cannot be used as a node.")
        if node_for_adding in self:
            raise ValueError(f"Node '{node_for_adding}' already exists in this graph.")
        super().add_node(node_for_adding, **attr)

    def remove_node(self, n: NodeID) -> None:
        """Remove a node and all incident edges.

        Raises:
            ValueError: If the node does not exist.
        """
        if n not in self:
            raise ValueError(f"Node '{n}' does not exist.")
        to_delete = [
            e_id for e_id, (s, t, _, _) in self._edges.items() if s == n or t == n
        ]
        for e_id in to_delete:
            del self._edges[e_id]
        super().remove_node(n)

    #
    # Edge management
    #
    def add_edge(  # pyright: ignore[reportIncompatibleMethodOverride]
        self,
        u_for_edge: NodeID,
        v_for_edge: NodeID,
        key: Optional[EdgeID] = None,
        **attr: Any,
    ) -> EdgeID:
        """Add a directed edge between two existing nodes.

        Args:
            u_for_edge: Source node.
            v_for_edge: Target node.
            key: Unique edge key; generated when None.
            **attr: Edge attributes, typically the weight attribute.

        Returns:
            The key of the new edge.

        Raises:
            ValueError: If either node is missing or the key is taken.
        """
        if u_for_edge not in self:
            raise ValueError(f"Source node '{u_for_edge}' does not exist.")
        if v_for_edge not in self:
            raise ValueError(f"Target node '{v_for_edge}' does not exist.")

        if key is None:
            key = self.new_edge_key(u_for_edge, v_for_edge)
        else:
            if key in self._edges:
                raise ValueError(f"Edge with id '{key}' already exists.")
            if isinstance(key, int) and key >= self._next_edge_id:
                self._next_edge_id = key + 1

        super().add_edge(u_for_edge, v_for_edge, key=key, **attr)
        self._edges[key] = (
            u_for_edge,
            v_for_edge,
            key,
            self[u_for_edge][v_for_edge][key],
        )
        return key

    def remove_edge_by_id(self, key: EdgeID) -> None:
        """Remove a directed edge by its unique key.

        Raises:
            ValueError: If no edge with this key exists.
        """
        if key not in self._edges:
            raise ValueError(f"Edge with id='{key}' not found.")
        src_node, dst_node, _, _ = self._edges.pop(key)
        super().remove_edge(src_node, dst_node, key=key)

    #
    # Convenience methods
    #
    def get_nodes(self) -> Dict[NodeID, Dict[str, Any]]:
        """Return all nodes and their attributes."""
        return dict(self.nodes(data=True))

    def get_edges(self) -> Dict[EdgeID, EdgeTuple]:
        """Return ``edge_key -> (source, target, key, attributes)`` for all edges."""
        return self._edges

    def edges_between(self, u: NodeID, v: NodeID) -> List[EdgeID]:
        """List all edge keys from ``u`` to ``v`` (empty if none)."""
        if u not in self.succ or v not in self.succ[u]:
            return []
        return list(self.succ[u][v].keys())

    def to_dict(self) -> Dict[str, Any]:
        """Return the node-link dictionary of this graph."""
        # Import here to avoid circular import
        from spsearch.io import graph_to_node_link

        return graph_to_node_link(self)

    #
    # Search queries
    #
    def neighbor_count(self, node: NodeID) -> int:
        """Number of distinct successors of ``node``.

        Raises:
            KeyError: If ``node`` is not in the graph.
        """
        if node not in self._succ:
            raise KeyError(f"Node '{node}' is not in the graph.")
        return len(self._succ[node])

    def neighbors(self, node: NodeID) -> List[NodeID]:  # type: ignore[override]
        """Distinct successors of ``node`` in edge insertion order.

        Raises:
            KeyError: If ``node`` is not in the graph.
        """
        if node not in self._succ:
            raise KeyError(f"Node '{node}' is not in the graph.")
        return list(self._succ[node])

    def edge_weight(self, u: NodeID, v: NodeID) -> Distance:
        """Weight of ``u -> v``, collapsing parallel edges per ``multi_edge``.

        Raises:
            KeyError: If there is no edge from ``u`` to ``v``.
            ValueError: If the weight is negative.
        """
        parallel: Dict[EdgeID, AttrDict] = self._succ.get(u, {}).get(v, {})
        return resolve_weight(
            parallel.values(),
            self.weight_attr,
            self.default_weight,
            self.multi_edge,
            u,
            v,
        )
