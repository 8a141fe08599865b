"""Graph collaborators for the shortest-path search.

`Graph` is the protocol the search consumes. `StrictMultiDiGraph` is a
NetworkX multigraph that implements it directly, and `NetworkXGraph` adapts
any other NetworkX graph.
"""

from spsearch.graph.adapter import NetworkXGraph
from spsearch.graph.base import Graph
from spsearch.graph.strict_multidigraph import StrictMultiDiGraph

__all__ = ["Graph", "NetworkXGraph", "StrictMultiDiGraph"]
