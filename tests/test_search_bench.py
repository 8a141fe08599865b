import random

import pytest

from spsearch.graph.strict_multidigraph import StrictMultiDiGraph
from spsearch.search import dijkstra

random.seed(0)


@pytest.fixture
def graph1():
    """Random 200-node graph with ~2000 edges (parallel edges included)."""
    labels = [str(i) for i in range(200)]
    g = StrictMultiDiGraph()
    for node in labels:
        g.add_node(node)
    for _ in range(2000):
        src = random.choice(labels)
        dst = random.choice(labels)
        if src == dst:
            continue
        g.add_edge(src, dst, cost=random.randint(1, 10))
    return g


def test_bench_dijkstra_1(benchmark, graph1):
    """Benchmark a single search from "0" to "199"."""

    def run_search():
        dijkstra(graph1, "0", "199")

    benchmark(run_search)
