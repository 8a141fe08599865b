"""Unordered collection of node records used as frontier and visited set.

`NodeRecordSet` maps a node identifier to a ``(predecessor, distance)`` pair.
The shortest-path search keeps two of them: the frontier (tentative
distances) and the visited set (final distances). A reconstructed path is
also returned as a `NodeRecordSet`, where insertion order is the order of the
nodes along the path.

Lookups of absent nodes never raise: ``distance()`` returns ``math.inf`` and
``predecessor()`` returns ``NO_ID``. The relaxation step of the search relies
on this exactly.
"""

from __future__ import annotations

import math
from typing import Dict, Iterator, List, Optional

from spsearch.types import NO_ID, Distance, NodeID, NodeRecord


class NodeRecordSet:
    """Keyed set of `NodeRecord` objects, unique per node.

    Records are kept in insertion order. Updating an existing record keeps its
    position; removing and re-inserting moves it to the end.

    ``min()`` scans all records and returns the first one (in insertion order)
    with the smallest distance. There is no heap and no decrease-key.

    After ``destroy()`` every operation raises ValueError.
    """

    def __init__(self) -> None:
        self._records: Optional[Dict[NodeID, NodeRecord]] = {}

    #
    # Lifetime
    #
    def destroy(self) -> None:
        """Release all records and invalidate the set.

        Calling ``destroy()`` again is a no-op.
        """
        if self._records is not None:
            self._records.clear()
            self._records = None

    @property
    def destroyed(self) -> bool:
        """True once ``destroy()`` has been called."""
        return self._records is None

    def __enter__(self) -> NodeRecordSet:
        self._live()
        return self

    def __exit__(self, *exc_info) -> None:
        self.destroy()

    def _live(self) -> Dict[NodeID, NodeRecord]:
        records = self._records
        if records is None:
            raise ValueError("Operation on a destroyed NodeRecordSet.")
        return records

    #
    # Queries
    #
    def is_empty(self) -> bool:
        """Return True if the set holds no records."""
        return not self._live()

    def contains(self, node: NodeID) -> bool:
        """Return True if a record for ``node`` exists."""
        return node in self._live()

    def contains_edge(self, source: NodeID, destination: NodeID) -> bool:
        """Return True if ``destination`` is present with ``source`` as predecessor.

        Args:
            source: Expected predecessor.
            destination: Node whose record is checked.

        Returns:
            True iff the edge ``(source, destination)`` is recorded.
        """
        record = self._live().get(destination)
        return record is not None and record.predecessor == source

    def distance(self, node: NodeID) -> Distance:
        """Return the stored distance of ``node``, or ``math.inf`` if absent."""
        record = self._live().get(node)
        if record is None:
            return math.inf
        return record.distance

    def predecessor(self, node: NodeID) -> NodeID:
        """Return the stored predecessor of ``node``, or ``NO_ID`` if absent."""
        record = self._live().get(node)
        if record is None:
            return NO_ID
        return record.predecessor

    def min(self) -> NodeID:
        """Return a node with the smallest distance, or ``NO_ID`` if empty.

        Ties go to the record inserted first.
        """
        best: Optional[NodeRecord] = None
        for record in self._live().values():
            if best is None or record.distance < best.distance:
                best = record
        if best is None:
            return NO_ID
        return best.node

    def get(self, node: NodeID) -> Optional[NodeRecord]:
        """Return a copy of the record for ``node``, or None if absent."""
        record = self._live().get(node)
        if record is None:
            return None
        return NodeRecord(record.node, record.predecessor, record.distance)

    #
    # Mutation
    #
    def insert(self, node: NodeID, predecessor: NodeID, distance: Distance) -> None:
        """Append a new record.

        Args:
            node: Node to insert. Must not already be present.
            predecessor: Previous node on the path (``NO_ID`` for the origin).
            distance: Distance from the origin.

        Raises:
            ValueError: If ``node`` is ``NO_ID`` or already present.
        """
        records = self._live()
        if node is NO_ID:
            raise ValueError("NO_ID is not a valid node identifier.")
        if node in records:
            raise ValueError(f"Node '{node}' already exists in this record set.")
        records[node] = NodeRecord(node, predecessor, distance)

    def update_or_insert(
        self, node: NodeID, predecessor: NodeID, distance: Distance
    ) -> None:
        """Overwrite the record for ``node`` in place, or append a new one.

        Afterwards ``contains(node)`` holds and ``distance(node)`` and
        ``predecessor(node)`` return the given values.
        """
        record = self._live().get(node)
        if record is None:
            self.insert(node, predecessor, distance)
            return
        record.predecessor = predecessor
        record.distance = distance

    def remove(self, node: NodeID) -> None:
        """Delete the record for ``node``. Absent nodes are ignored."""
        self._live().pop(node, None)

    #
    # Python protocol
    #
    def __len__(self) -> int:
        return len(self._live())

    def __contains__(self, node: object) -> bool:
        return self.contains(node)

    def __iter__(self) -> Iterator[NodeRecord]:
        return iter(list(self._live().values()))

    def records(self) -> List[NodeRecord]:
        """Return copies of all records in insertion order."""
        return [
            NodeRecord(r.node, r.predecessor, r.distance)
            for r in self._live().values()
        ]

    def nodes(self) -> List[NodeID]:
        """Return node identifiers in insertion order."""
        return list(self._live())

    def __repr__(self) -> str:
        if self._records is None:
            return "NodeRecordSet(<destroyed>)"
        body = ", ".join(
            f"{r.node!r}: ({r.predecessor!r}, {r.distance!r})"
            for r in self._records.values()
        )
        return f"NodeRecordSet({{{body}}})"
