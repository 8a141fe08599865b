"""Command-line interface for spsearch."""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from time import perf_counter
from typing import Any, Dict, List, Optional

from spsearch.graph.strict_multidigraph import StrictMultiDiGraph
from spsearch.io import load_graph
from spsearch.logging import get_logger, set_global_log_level
from spsearch.search import dijkstra
from spsearch.types import NodeID

logger = get_logger(__name__)

EXIT_OK = 0
EXIT_ERROR = 1
EXIT_UNREACHABLE = 2


def _format_table(
    headers: List[str],
    rows: List[List[str]],
    min_width: int = 8,
) -> str:
    """Format rows as a simple ASCII table (empty string when no rows)."""
    if not rows:
        return ""

    all_data = [headers] + rows
    col_widths = [
        max(max(len(str(row[i])) for row in all_data), min_width)
        for i in range(len(headers))
    ]

    def format_row(row_data: List[str]) -> str:
        return "   " + " | ".join(
            f"{str(item):<{col_widths[i]}}" for i, item in enumerate(row_data)
        )

    lines = [format_row(headers)]
    lines.append("   " + "-+-".join("-" * width for width in col_widths))
    lines.extend(format_row(row) for row in rows)
    return "\n".join(lines)


def _format_distance(value: float) -> str:
    """Return a distance with up to three decimals, trailing zeros trimmed.

    Examples:
        3.0 -> "3"; 0.125 -> "0.125"; inf -> "inf".
    """
    if value == float("inf"):
        return "inf"
    s = f"{value:.3f}"
    if "." in s:
        s = s.rstrip("0").rstrip(".")
    return s


def _resolve_node(graph: StrictMultiDiGraph, token: str) -> NodeID:
    """Map a command-line token to a node of ``graph``.

    Graph files may carry numeric node IDs (YAML, JSON), so a token that is
    not a node as-is is retried as an int and as a float.

    Raises:
        KeyError: If no matching node exists.
    """
    if token in graph:
        return token
    for convert in (int, float):
        try:
            candidate = convert(token)
        except ValueError:
            continue
        if candidate in graph:
            return candidate
    raise KeyError(f"Node '{token}' is not in the graph.")


def _find_path(
    graph_path: Path,
    source: str,
    destination: str,
    as_json: bool,
    with_path: bool,
) -> int:
    """Load a graph, run the search and print the result.

    Returns:
        Process exit code: 0 when a path exists, 2 when unreachable.
    """
    logger.info(f"Loading graph from: {graph_path}")
    graph = load_graph(graph_path)
    src = _resolve_node(graph, source)
    dst = _resolve_node(graph, destination)

    start = perf_counter()
    distance, chain = dijkstra(graph, src, dst, build_path=with_path)
    elapsed = perf_counter() - start
    logger.info(f"Search {src!r} -> {dst!r} finished in {elapsed * 1000.0:.1f} ms")

    nodes: Optional[List[Any]] = None
    if chain is not None:
        with chain:
            nodes = chain.nodes()

    reachable = distance != float("inf")
    if as_json:
        payload: Dict[str, Any] = {
            "source": src,
            "destination": dst,
            "distance": distance if reachable else None,
            "path": nodes,
        }
        print(json.dumps(payload, indent=2, default=str))
    elif not reachable:
        print(f"{dst} is unreachable from {src}")
    else:
        print(f"Distance: {_format_distance(distance)}")
        if nodes is not None:
            print("Path: " + " -> ".join(str(n) for n in nodes))

    return EXIT_OK if reachable else EXIT_UNREACHABLE


def _inspect_graph(graph_path: Path) -> None:
    """Print node/edge counts and a per-node degree table."""
    logger.info(f"Inspecting graph: {graph_path}")
    graph = load_graph(graph_path)

    print(f"Graph: {graph_path}")
    print(f"  Nodes: {graph.number_of_nodes()}")
    print(f"  Edges: {graph.number_of_edges()}")

    rows = [
        [
            str(node),
            str(graph.neighbor_count(node)),
            str(graph.in_degree(node)),
            str(graph.out_degree(node)),
        ]
        for node in graph.nodes
    ]
    table = _format_table(["Node", "Neighbors", "In edges", "Out edges"], rows)
    if table:
        print(table)


def main(argv: Optional[List[str]] = None) -> None:
    """Entry point for the ``spsearch`` command.

    Args:
        argv: Optional list of command-line arguments. If ``None``, ``sys.argv``
            is used.
    """
    parser = argparse.ArgumentParser(
        prog="spsearch",
        description="Find shortest paths in weighted graphs.",
    )
    parser.add_argument(
        "--verbose", "-v", action="store_true", help="Enable debug logging"
    )
    parser.add_argument(
        "--quiet", action="store_true", help="Only log warnings and errors"
    )

    subparsers = parser.add_subparsers(
        dest="command",
        required=True,
        title="Available commands",
        metavar="{path,inspect}",
        help="Available commands",
    )

    path_parser = subparsers.add_parser(
        "path", help="Shortest path between two nodes"
    )
    path_parser.add_argument(
        "graph", type=Path, help="Graph file (.yaml, .json or edge list)"
    )
    path_parser.add_argument("source", help="Source node")
    path_parser.add_argument("destination", help="Destination node")
    path_parser.add_argument(
        "--json",
        action="store_true",
        help="Print the result as JSON (info logging is suppressed)",
    )
    path_parser.add_argument(
        "--no-path",
        action="store_true",
        help="Only compute the distance, skip path reconstruction",
    )

    inspect_parser = subparsers.add_parser("inspect", help="Summarize a graph file")
    inspect_parser.add_argument(
        "graph", type=Path, help="Graph file (.yaml, .json or edge list)"
    )

    effective_args = sys.argv[1:] if argv is None else argv
    if not effective_args:
        parser.print_help()
        raise SystemExit(0)

    args = parser.parse_args(effective_args)

    if args.verbose:
        set_global_log_level(logging.DEBUG)
        logger.debug("Debug logging enabled")
    elif args.quiet or getattr(args, "json", False):
        # Log records share stdout with the JSON document
        set_global_log_level(logging.WARNING)
    else:
        set_global_log_level(logging.INFO)

    try:
        if args.command == "path":
            code = _find_path(
                args.graph,
                args.source,
                args.destination,
                as_json=args.json,
                with_path=not args.no_path,
            )
            sys.exit(code)
        elif args.command == "inspect":
            _inspect_graph(args.graph)
    except FileNotFoundError:
        logger.error(f"Graph file not found: {args.graph}")
        print(f"ERROR: Graph file not found: {args.graph}")
        sys.exit(EXIT_ERROR)
    except (KeyError, ValueError, RuntimeError) as e:
        logger.error(f"Failed to run {args.command}: {type(e).__name__}: {e}")
        print(f"ERROR: {type(e).__name__}: {e}")
        sys.exit(EXIT_ERROR)


if __name__ == "__main__":
    main()
