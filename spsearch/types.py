"""Core type definitions shared by the record set and the search engine."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Hashable, Union

#: Any hashable value identifies a node.
NodeID = Hashable

#: Numeric path length (sum of edge weights).
Distance = Union[int, float]


class _NoId:
    """Sentinel meaning "no node" or "no predecessor".

    A single instance exists (``NO_ID``). It is never a valid node identifier:
    it hashes by identity and compares equal only to itself.
    """

    _instance: "_NoId | None" = None

    def __new__(cls) -> "_NoId":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "NO_ID"

    def __bool__(self) -> bool:
        return False

    def __reduce__(self) -> str:
        return "NO_ID"


NO_ID: Any = _NoId()


@dataclass
class NodeRecord:
    """One entry of a NodeRecordSet.

    Attributes:
        node: Node identifier.
        predecessor: Previous node on the best known path, or ``NO_ID`` for
            the origin of the search.
        distance: Best known distance from the origin.
    """

    node: NodeID
    predecessor: NodeID
    distance: Distance

    @property
    def is_origin(self) -> bool:
        """Return True if this record denotes the origin of a search."""
        return self.predecessor is NO_ID
