"""The read-only graph interface consumed by the shortest-path search."""

from __future__ import annotations

import math
from typing import Any, Iterable, List, Mapping, Protocol, runtime_checkable

from spsearch.types import Distance, NodeID

AttrDict = Mapping[str, Any]


@runtime_checkable
class Graph(Protocol):
    """Graph collaborator of `spsearch.search.dijkstra`.

    Only three queries are used and none of them may mutate the graph.
    ``edge_weight(u, v)`` is only called for ``v`` in ``neighbors(u)``.
    """

    def neighbor_count(self, node: NodeID) -> int: ...

    def neighbors(self, node: NodeID) -> List[NodeID]: ...

    def edge_weight(self, u: NodeID, v: NodeID) -> Distance: ...


def resolve_weight(
    parallel_edges: Iterable[AttrDict],
    weight_attr: str,
    default_weight: float,
    multi_edge: str,
    u: NodeID,
    v: NodeID,
) -> Distance:
    """Collapse the attribute dicts of parallel edges ``u -> v`` to one weight.

    Args:
        parallel_edges: Attribute dicts of every edge from ``u`` to ``v``.
        weight_attr: Attribute holding the weight.
        default_weight: Weight of an edge without ``weight_attr``.
        multi_edge: ``"min"`` for the lightest edge, ``"first"`` for the
            first one in insertion order.
        u: Source node (for error messages).
        v: Target node (for error messages).

    Returns:
        The edge weight.

    Raises:
        KeyError: If there is no edge from ``u`` to ``v``.
        ValueError: If a weight is negative or NaN.
    """
    best: Distance = math.inf
    seen = False
    for attr in parallel_edges:
        weight = attr.get(weight_attr, default_weight)
        if weight is None:
            weight = default_weight
        weight = float(weight)
        if math.isnan(weight) or weight < 0:
            raise ValueError(
                f"Edge '{u}' -> '{v}' has unsupported weight {weight}; "
                "weights must be non-negative."
            )
        if not seen:
            best = weight
            seen = True
            if multi_edge == "first":
                break
        elif weight < best:
            best = weight
    if not seen:
        raise KeyError(f"No edge from '{u}' to '{v}'.")
    return best
