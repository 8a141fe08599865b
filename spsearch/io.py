"""Graph loaders and exporters.

Three input formats build a `StrictMultiDiGraph`:

- edge lists: one edge per line, columns such as ``src dst cost``;
- node-link dictionaries (JSON), as produced by ``graph_to_node_link``;
- YAML documents with ``nodes`` and ``edges`` sections.

``load_graph`` picks the format from the file suffix.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional, Sequence, Union

import yaml

from spsearch.config import SEARCH_CONFIG
from spsearch.graph.strict_multidigraph import StrictMultiDiGraph
from spsearch.logging import get_logger
from spsearch.types import NodeID

logger = get_logger(__name__)


def normalize_yaml_dict_keys(data: Dict[Any, Any]) -> Dict[str, Any]:
    """Return ``data`` with every key converted to a string.

    YAML 1.1 reads keys such as ``yes``, ``on`` or ``true`` as booleans; they
    become "True"/"False" here, so schema checks see predictable names.
    """
    return {str(key): value for key, value in data.items()}


def graph_to_node_link(graph: StrictMultiDiGraph) -> Dict[str, Any]:
    """Convert a StrictMultiDiGraph into a node-link dict.

    The returned dict has the following structure::

        {
            "graph": { ... graph attributes ... },
            "nodes": [{"id": node_id, "attr": { ... }}, ...],
            "links": [
                {"source": <node index>, "target": <node index>,
                 "key": <edge_id>, "attr": { ... }},
                ...
            ]
        }

    Args:
        graph: The graph to convert.

    Returns:
        Node-link dictionary suitable for JSON serialization.
    """
    node_dict = graph.get_nodes()
    node_list = list(node_dict.keys())
    node_map = {node_id: i for i, node_id in enumerate(node_list)}

    return {
        "graph": dict(graph.graph),
        "nodes": [
            {"id": node_id, "attr": dict(node_dict[node_id])} for node_id in node_list
        ],
        "links": [
            {
                "source": node_map[src],
                "target": node_map[dst],
                "key": edge_id,
                "attr": dict(edge_attrs),
            }
            for edge_id, (src, dst, _, edge_attrs) in graph.get_edges().items()
        ],
    }


def node_link_to_graph(data: Dict[str, Any]) -> StrictMultiDiGraph:
    """Rebuild a StrictMultiDiGraph from its node-link dict.

    Args:
        data: Dictionary in the format returned by ``graph_to_node_link``.

    Returns:
        The reconstructed graph.

    Raises:
        ValueError: If a link refers to an unknown node index.
    """
    graph = StrictMultiDiGraph(**data.get("graph", {}))

    node_map: Dict[int, NodeID] = {}
    for idx, node_obj in enumerate(data.get("nodes", [])):
        node_id = node_obj["id"]
        graph.add_node(node_id, **node_obj.get("attr", {}))
        node_map[idx] = node_id

    for edge_obj in data.get("links", []):
        try:
            src_id = node_map[edge_obj["source"]]
            dst_id = node_map[edge_obj["target"]]
        except KeyError as exc:
            raise ValueError(f"Link {edge_obj} refers to unknown node index {exc}.") from None
        graph.add_edge(
            src_id, dst_id, key=edge_obj.get("key"), **edge_obj.get("attr", {})
        )

    return graph


def _coerce_weight(value: Any, weight_attr: str, where: str) -> float:
    try:
        return float(value)
    except (TypeError, ValueError):
        raise ValueError(
            f"Invalid {weight_attr} '{value}' in {where}; expected a number."
        ) from None


def edgelist_to_graph(
    lines: Iterable[str],
    columns: Optional[Sequence[str]] = None,
    separator: Optional[str] = " ",
    graph: Optional[StrictMultiDiGraph] = None,
    source: str = "src",
    target: str = "dst",
    key: str = "key",
    weight_attr: Optional[str] = None,
) -> StrictMultiDiGraph:
    """Build or extend a StrictMultiDiGraph from an edge list.

    Each line is split by ``separator`` and mapped onto ``columns``. The
    ``source``/``target`` tokens become node IDs (created on first use), a
    ``key`` token becomes the edge ID, the weight column is converted to float
    and every other token is kept as a string attribute. Blank lines and lines
    starting with ``#`` are skipped.

    Args:
        lines: Edge lines.
        columns: Column names; defaults to ``SEARCH_CONFIG.edgelist_columns``.
        separator: Token separator; None splits on any whitespace.
        graph: Graph to extend; a new one is created when None.
        source: Column holding the source node.
        target: Column holding the target node.
        key: Column holding an explicit edge ID, if any.
        weight_attr: Column holding the weight; defaults to
            ``SEARCH_CONFIG.weight_attr``.

    Returns:
        The updated (or new) graph.

    Raises:
        RuntimeError: If a line has the wrong number of tokens.
        ValueError: If a weight is not numeric.
    """
    if columns is None:
        columns = SEARCH_CONFIG.edgelist_columns
    weight_attr = weight_attr or SEARCH_CONFIG.weight_attr
    if graph is None:
        graph = StrictMultiDiGraph(weight_attr=weight_attr)

    for lineno, line in enumerate(lines, start=1):
        line = line.rstrip("\r\n")
        if not line.strip() or line.lstrip().startswith("#"):
            continue
        tokens = line.split(separator)
        if len(tokens) != len(columns):
            raise RuntimeError(
                f"Line '{line}' does not match expected columns {list(columns)} "
                "(token count mismatch)."
            )

        line_dict = dict(zip(columns, tokens))
        src_id = line_dict[source]
        dst_id = line_dict[target]
        edge_key = line_dict.get(key)

        attr_dict: Dict[str, Any] = {
            k: v for k, v in line_dict.items() if k not in (source, target, key)
        }
        if weight_attr in attr_dict:
            attr_dict[weight_attr] = _coerce_weight(
                attr_dict[weight_attr], weight_attr, f"line {lineno}"
            )

        if src_id not in graph:
            graph.add_node(src_id)
        if dst_id not in graph:
            graph.add_node(dst_id)
        graph.add_edge(src_id, dst_id, key=edge_key, **attr_dict)

    return graph


def graph_to_edgelist(
    graph: StrictMultiDiGraph,
    columns: Optional[List[str]] = None,
    separator: str = " ",
    source_col: str = "src",
    target_col: str = "dst",
    key_col: str = "key",
) -> List[str]:
    """Export a StrictMultiDiGraph as edge-list lines.

    Default columns are ``[source_col, target_col, key_col]`` followed by the
    sorted attribute names. Missing values become empty strings.
    """
    edge_dicts: List[Dict[str, str]] = []
    all_attr_keys = set()

    for edge_id, (src, dst, _, edge_attrs) in graph.get_edges().items():
        row = {
            source_col: str(src),
            target_col: str(dst),
            key_col: str(edge_id) if edge_id is not None else "",
        }
        for attr_key, attr_val in edge_attrs.items():
            row[attr_key] = str(attr_val)
            all_attr_keys.add(attr_key)
        edge_dicts.append(row)

    if columns is None:
        columns = [source_col, target_col, key_col] + sorted(all_attr_keys)

    return [
        separator.join(row_dict.get(col, "") for col in columns)
        for row_dict in edge_dicts
    ]


def graph_from_yaml(text: str, weight_attr: Optional[str] = None) -> StrictMultiDiGraph:
    """Build a StrictMultiDiGraph from a YAML document.

    Format::

        directed: true          # optional; false adds reverse edges
        nodes: [S, A, B, T]     # optional; endpoints are added on demand
        edges:
          - [S, A, 1]           # source, target, weight
          - [A, B]              # weight defaults at query time
          - {source: B, target: T, cost: 1, label: x}

    Args:
        text: YAML document.
        weight_attr: Attribute used for list-form weights; defaults to
            ``SEARCH_CONFIG.weight_attr``.

    Returns:
        The graph.

    Raises:
        ValueError: If the document does not follow the format.
    """
    weight_attr = weight_attr or SEARCH_CONFIG.weight_attr
    data = yaml.safe_load(text) or {}
    if not isinstance(data, dict):
        raise ValueError("Graph YAML must be a mapping with 'nodes' and 'edges'.")
    data = normalize_yaml_dict_keys(data)

    unknown = set(data) - {"directed", "nodes", "edges"}
    if unknown:
        raise ValueError(f"Unrecognized top-level key(s) in graph YAML: {sorted(unknown)}")

    directed = data.get("directed", True)
    if not isinstance(directed, bool):
        raise ValueError(f"'directed' must be a boolean, got {directed!r}.")

    graph = StrictMultiDiGraph(weight_attr=weight_attr)
    for node in data.get("nodes") or []:
        graph.add_node(node)

    for idx, entry in enumerate(data.get("edges") or []):
        where = f"edge #{idx}"
        if isinstance(entry, (list, tuple)):
            if len(entry) not in (2, 3):
                raise ValueError(
                    f"{where}: expected [source, target] or [source, target, weight]."
                )
            src, dst = entry[0], entry[1]
            attrs: Dict[str, Any] = {}
            if len(entry) == 3:
                attrs[weight_attr] = _coerce_weight(entry[2], weight_attr, where)
        elif isinstance(entry, dict):
            entry = normalize_yaml_dict_keys(entry)
            if "source" not in entry or "target" not in entry:
                raise ValueError(f"{where}: mapping needs 'source' and 'target'.")
            src, dst = entry["source"], entry["target"]
            attrs = {k: v for k, v in entry.items() if k not in ("source", "target")}
            if weight_attr in attrs:
                attrs[weight_attr] = _coerce_weight(attrs[weight_attr], weight_attr, where)
        else:
            raise ValueError(f"{where}: expected a list or a mapping, got {entry!r}.")

        for node in (src, dst):
            if node not in graph:
                graph.add_node(node)
        graph.add_edge(src, dst, **attrs)
        if not directed and src != dst:
            # An explicit key names the forward edge only
            reverse_attrs = {k: v for k, v in attrs.items() if k != "key"}
            graph.add_edge(dst, src, **reverse_attrs)

    return graph


def load_graph(path: Union[str, Path]) -> StrictMultiDiGraph:
    """Load a graph file, choosing the format from its suffix.

    ``.yaml``/``.yml`` files use ``graph_from_yaml``, ``.json`` files use
    ``node_link_to_graph``, anything else is read as a whitespace-separated
    edge list with ``SEARCH_CONFIG.edgelist_columns``.

    Raises:
        FileNotFoundError: If the file does not exist.
    """
    path = Path(path)
    text = path.read_text()
    suffix = path.suffix.lower()
    if suffix in (".yaml", ".yml"):
        graph = graph_from_yaml(text)
    elif suffix == ".json":
        graph = node_link_to_graph(json.loads(text))
    else:
        graph = edgelist_to_graph(text.splitlines(), separator=None)
    logger.debug(
        f"Loaded graph from {path}: {graph.number_of_nodes()} nodes, "
        f"{graph.number_of_edges()} edges"
    )
    return graph
