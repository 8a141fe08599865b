"""Cross-check the search against NetworkX on random graphs."""

import math
import random

import networkx as nx
import pytest

from spsearch.graph.adapter import NetworkXGraph
from spsearch.graph.strict_multidigraph import StrictMultiDiGraph
from spsearch.path import Path
from spsearch.search import dijkstra


def random_graph(seed: int, num_nodes: int = 30, num_edges: int = 90):
    """Return (StrictMultiDiGraph, nx.MultiDiGraph) with identical edges."""
    rng = random.Random(seed)
    labels = [f"n{i}" for i in range(num_nodes)]
    g = StrictMultiDiGraph()
    gnx = nx.MultiDiGraph()
    for node in labels:
        g.add_node(node)
        gnx.add_node(node)
    for _ in range(num_edges):
        src = rng.choice(labels)
        dst = rng.choice(labels)
        cost = rng.randint(0, 10)
        g.add_edge(src, dst, cost=cost)
        gnx.add_edge(src, dst, cost=cost)
    return g, gnx


@pytest.mark.parametrize("seed", range(8))
def test_distances_match_networkx(seed):
    g, gnx = random_graph(seed)
    rng = random.Random(seed + 100)
    nodes = list(g.nodes)
    for _ in range(15):
        src, dst = rng.choice(nodes), rng.choice(nodes)
        distance, chain = dijkstra(g, src, dst)
        try:
            expected = nx.dijkstra_path_length(gnx, src, dst, weight="cost")
        except nx.NetworkXNoPath:
            assert distance == math.inf
            assert chain is None
            continue

        assert distance == expected
        path = Path.from_chain(chain)
        assert path.src_node == src
        assert path.dst_node == dst
        assert path.cost == distance
        assert path.is_valid_in(g)


@pytest.mark.parametrize("seed", range(4))
def test_adapter_and_strict_graph_agree(seed):
    g, gnx = random_graph(seed, num_nodes=20, num_edges=60)
    adapted = NetworkXGraph(gnx)
    for src in list(g.nodes)[:5]:
        for dst in list(g.nodes)[-5:]:
            assert dijkstra(g, src, dst, build_path=False) == dijkstra(
                adapted, src, dst, build_path=False
            )


def test_undirected_grid_matches_manhattan_distance():
    grid = nx.grid_2d_graph(6, 6)
    adapted = NetworkXGraph(grid, weight="cost", default_weight=1.0)
    distance, chain = dijkstra(adapted, (0, 0), (5, 5))
    assert distance == 10
    assert len(chain) == 11
