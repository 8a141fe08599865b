"""Single-source, single-destination shortest path (Dijkstra).

The frontier and the visited set are both `NodeRecordSet` instances. Each
iteration scans the whole frontier for its minimum, moves that node to the
visited set and relaxes its outgoing edges. There is no heap and no
decrease-key; the frontier record of a node is overwritten in place when a
shorter candidate distance is found.

Example:
    >>> from spsearch.graph import StrictMultiDiGraph
    >>> from spsearch.search import dijkstra
    >>> g = StrictMultiDiGraph()
    >>> for n in "SAT":
    ...     g.add_node(n)
    >>> _ = g.add_edge("S", "A", cost=1)
    >>> _ = g.add_edge("A", "T", cost=2)
    >>> distance, chain = dijkstra(g, "S", "T")
    >>> distance, chain.nodes()
    (3.0, ['S', 'A', 'T'])
"""

from __future__ import annotations

import math
from typing import List, Optional, Tuple

from spsearch.config import SEARCH_CONFIG
from spsearch.graph.base import Graph
from spsearch.logging import get_logger
from spsearch.path import Path
from spsearch.record_set import NodeRecordSet
from spsearch.types import NO_ID, Distance, NodeID

logger = get_logger(__name__)


def build_path_to(visited: NodeRecordSet, node: NodeID) -> NodeRecordSet:
    """Reconstruct the path from the search origin to ``node``.

    Follows predecessor links in ``visited`` back to the record whose
    predecessor is ``NO_ID`` (the origin), then emits the records forward. The
    origin is emitted as ``(NO_ID, 0.0)``; every other node keeps the
    predecessor and distance stored in ``visited``.

    Args:
        visited: Visited set produced by the search.
        node: Last node of the path.

    Returns:
        A new NodeRecordSet whose insertion order is origin -> ``node``. The
        caller owns it.

    Raises:
        KeyError: If ``node`` (or a node on its predecessor chain) is not in
            ``visited``.
    """
    stack: List[NodeID] = []
    current = node
    while True:
        if not visited.contains(current):
            raise KeyError(f"Node '{current}' is not in the visited set.")
        stack.append(current)
        previous = visited.predecessor(current)
        if previous is NO_ID:
            break
        if len(stack) > len(visited):
            raise ValueError(f"Predecessor chain of '{node}' contains a cycle.")
        current = previous

    chain = NodeRecordSet()
    origin = stack.pop()
    chain.insert(origin, NO_ID, 0.0)
    while stack:
        current = stack.pop()
        chain.insert(current, visited.predecessor(current), visited.distance(current))
    return chain


def dijkstra(
    graph: Graph,
    source: NodeID,
    destination: NodeID,
    build_path: bool = True,
    trace: Optional[bool] = None,
) -> Tuple[Distance, Optional[NodeRecordSet]]:
    """Compute the shortest distance (and path) from ``source`` to ``destination``.

    Args:
        graph: Object implementing ``neighbor_count``, ``neighbors`` and
            ``edge_weight``. Edge weights must be non-negative.
        source: Origin node.
        destination: Target node.
        build_path: If False, skip path reconstruction and return None as the
            path even when the destination is reachable.
        trace: Log every settled node at DEBUG level. Defaults to
            ``SEARCH_CONFIG.trace``.

    Returns:
        ``(distance, chain)``. ``chain`` is a NodeRecordSet ordered from
        ``source`` to ``destination`` (owned by the caller), or None. When the
        destination is unreachable the result is ``(math.inf, None)``.

    Raises:
        ValueError: If ``source`` or ``destination`` is ``NO_ID``.
    """
    if source is NO_ID or destination is NO_ID:
        raise ValueError("NO_ID is not a valid source or destination.")
    if trace is None:
        trace = SEARCH_CONFIG.trace

    logger.debug(f"Shortest path search {source!r} -> {destination!r} started")

    frontier = NodeRecordSet()
    visited = NodeRecordSet()
    try:
        frontier.insert(source, NO_ID, 0.0)

        while not frontier.is_empty():
            current = frontier.min()
            current_distance = frontier.distance(current)
            visited.insert(current, frontier.predecessor(current), current_distance)
            frontier.remove(current)

            if trace:
                logger.debug(
                    f"Settled {current!r} at distance {current_distance} "
                    f"(frontier={len(frontier)}, visited={len(visited)})"
                )

            if current == destination:
                logger.debug(
                    f"Reached {destination!r} at distance {current_distance} "
                    f"after settling {len(visited)} nodes"
                )
                chain = build_path_to(visited, destination) if build_path else None
                return current_distance, chain

            count = graph.neighbor_count(current)
            neighbors = graph.neighbors(current)
            if len(neighbors) != count:
                raise ValueError(
                    f"Graph reported {count} neighbors of '{current}' "
                    f"but enumerated {len(neighbors)}."
                )
            for neighbor in neighbors:
                if visited.contains(neighbor):
                    continue
                candidate = current_distance + graph.edge_weight(current, neighbor)
                if candidate < frontier.distance(neighbor):
                    frontier.update_or_insert(neighbor, current, candidate)

        logger.debug(
            f"{destination!r} unreachable from {source!r} "
            f"({len(visited)} nodes settled)"
        )
        return math.inf, None
    finally:
        frontier.destroy()
        visited.destroy()


def shortest_path(
    graph: Graph, source: NodeID, destination: NodeID
) -> Optional[Path]:
    """Return the shortest `Path` from ``source`` to ``destination``, or None.

    None means the destination is unreachable.
    """
    distance, chain = dijkstra(graph, source, destination, build_path=True)
    if chain is None:
        return None
    with chain:
        return Path.from_chain(chain)


def shortest_distance(graph: Graph, source: NodeID, destination: NodeID) -> Distance:
    """Return the shortest distance, ``math.inf`` if unreachable."""
    distance, _ = dijkstra(graph, source, destination, build_path=False)
    return distance
