"""Lightweight representation of a single shortest path.

`Path` is the caller-facing projection of the record chain produced by
`spsearch.search.build_path_to`: the node sequence, the cumulative distance
at each node, and the total cost.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from functools import cached_property
from typing import TYPE_CHECKING, Any, Dict, Iterator, List, Tuple

from spsearch.types import NO_ID, Distance, NodeID

if TYPE_CHECKING:
    from spsearch.graph.base import Graph
    from spsearch.record_set import NodeRecordSet


@dataclass
class Path:
    """A single source -> destination path.

    Attributes:
        nodes: Node sequence, source first.
        cost: Total distance of the path.
        distances: Cumulative distance at each node (``distances[0] == 0``).
    """

    nodes: Tuple[NodeID, ...]
    cost: Distance
    distances: Tuple[Distance, ...] = field(default=(), repr=False)

    def __post_init__(self) -> None:
        if not self.nodes:
            raise ValueError("A path needs at least one node.")
        if self.distances and len(self.distances) != len(self.nodes):
            raise ValueError(
                f"Got {len(self.distances)} distances for {len(self.nodes)} nodes."
            )

    @classmethod
    def from_chain(cls, chain: "NodeRecordSet") -> Path:
        """Build a Path from a record chain ordered source -> destination.

        Raises:
            ValueError: If the chain is empty, does not start at an origin
                record, or a record's predecessor is not the previous node.
        """
        records = chain.records()
        if not records:
            raise ValueError("Cannot build a path from an empty chain.")
        if records[0].predecessor is not NO_ID:
            raise ValueError(
                f"Chain starts at '{records[0].node}', which is not a search origin."
            )
        for prev, rec in zip(records, records[1:]):
            if rec.predecessor != prev.node:
                raise ValueError(
                    f"Chain is broken at '{rec.node}': predecessor is "
                    f"'{rec.predecessor}', expected '{prev.node}'."
                )
        return cls(
            nodes=tuple(r.node for r in records),
            cost=records[-1].distance,
            distances=tuple(r.distance for r in records),
        )

    def __getitem__(self, idx: int) -> NodeID:
        return self.nodes[idx]

    def __iter__(self) -> Iterator[NodeID]:
        return iter(self.nodes)

    def __len__(self) -> int:
        return len(self.nodes)

    def __lt__(self, other: Any) -> bool:
        """Order paths by cost."""
        if not isinstance(other, Path):
            return NotImplemented
        return self.cost < other.cost

    @property
    def src_node(self) -> NodeID:
        """First node of the path."""
        return self.nodes[0]

    @property
    def dst_node(self) -> NodeID:
        """Last node of the path."""
        return self.nodes[-1]

    @cached_property
    def edges(self) -> Tuple[Tuple[NodeID, NodeID], ...]:
        """Consecutive ``(u, v)`` pairs along the path."""
        return tuple(zip(self.nodes, self.nodes[1:]))

    def is_valid_in(self, graph: "Graph", rel_tol: float = 1e-9) -> bool:
        """Check the path against a graph.

        Every consecutive pair must be an edge of ``graph`` and the edge
        weights must sum to ``cost``.
        """
        total: Distance = 0.0
        for u, v in self.edges:
            if v not in graph.neighbors(u):
                return False
            total += graph.edge_weight(u, v)
        if total == self.cost:
            return True
        return abs(total - self.cost) <= rel_tol * max(abs(total), abs(self.cost))

    def to_dict(self) -> Dict[str, Any]:
        """JSON-friendly dictionary with the node list and the cost."""
        nodes: List[Any] = list(self.nodes)
        return {"nodes": nodes, "cost": self.cost}

    def __str__(self) -> str:
        return " -> ".join(str(n) for n in self.nodes)
