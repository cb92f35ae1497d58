"""
YAML graph description compiler for wgraph_core.

This module compiles a small YAML (or already-parsed dict) description into a
`DirectedGraph` or `UndirectedGraph`.

YAML schema:

directed: true            # optional, defaults to false
vertices: [1, 2, 3, 4]    # optional; edges create missing vertices
edges:
  - [1, 2]                # weight defaults to config.default_weight
  - [2, 3, 2.5]
  - {from: 3, to: 4, weight: 1}

Notes:
- Vertex values are taken as parsed by YAML (ints stay ints, strings stay
  strings), so all vertices of one graph should share a comparable type.
- `graph_to_dict` / `dump_yaml` produce the same schema, listing every vertex
  and each logical edge once.
"""

from __future__ import annotations

from typing import Any, Dict, List

import yaml

from .config import GraphConfig
from .errors import InvalidArgument, InvalidFormat, MalformedRecord
from .graph import DirectedGraph, UndirectedGraph, WeightedGraph


def _edge_fields(entry: Any) -> tuple:
    if isinstance(entry, dict):
        if "from" not in entry or "to" not in entry:
            raise MalformedRecord(f"Edge entry needs 'from' and 'to': {entry!r}")
        return entry["from"], entry["to"], entry.get("weight")
    if isinstance(entry, (list, tuple)) and len(entry) in (2, 3):
        weight = entry[2] if len(entry) == 3 else None
        return entry[0], entry[1], weight
    raise MalformedRecord(f"Ill-formed edge entry: {entry!r}")


def compile_from_dict(spec: Dict[str, Any], config: GraphConfig | None = None) -> WeightedGraph:
    """
    Compile a YAML-parsed dictionary into a graph.

    Args:
        spec: Parsed YAML dictionary
        config: Optional config for the resulting graph

    Returns:
        WeightedGraph: DirectedGraph when `directed` is true, else UndirectedGraph

    Raises:
        InvalidFormat: If `spec` is not a mapping or its sections have the wrong shape
        MalformedRecord: If a vertex or edge entry cannot be interpreted
    """
    if not isinstance(spec, dict):
        raise InvalidFormat(f"Graph description must be a mapping, got {type(spec).__name__}")

    directed = bool(spec.get("directed", False))
    g: WeightedGraph = DirectedGraph(config=config) if directed else UndirectedGraph(config=config)

    vertices = spec.get("vertices", []) or []
    edges = spec.get("edges", []) or []
    if not isinstance(vertices, list) or not isinstance(edges, list):
        raise InvalidFormat("'vertices' and 'edges' must be lists")

    for vertex in vertices:
        if vertex is None:
            raise MalformedRecord("Vertex entries must not be empty")
        try:
            g.add_vertex(vertex)
        except (InvalidArgument, TypeError) as exc:
            raise MalformedRecord(f"Invalid vertex entry {vertex!r}: {exc}") from exc

    for entry in edges:
        source, target, weight = _edge_fields(entry)
        if source is None or target is None:
            raise MalformedRecord(f"Edge endpoints must not be empty: {entry!r}")
        try:
            g.add_edge(source, target, weight)
        except (InvalidArgument, TypeError, ValueError) as exc:
            raise MalformedRecord(f"Invalid edge entry {entry!r}: {exc}") from exc

    return g


def compile_from_yaml(yaml_text: str, config: GraphConfig | None = None) -> WeightedGraph:
    """Compile from YAML text into a graph."""
    try:
        data = yaml.safe_load(yaml_text) or {}
    except yaml.YAMLError as exc:
        raise InvalidFormat(f"Cannot parse YAML graph description: {exc}") from exc
    return compile_from_dict(data, config=config)


def compile_from_file(path: str, config: GraphConfig | None = None) -> WeightedGraph:
    """Compile from a YAML file path into a graph."""
    with open(path, "r", encoding="utf-8") as f:
        txt = f.read()
    return compile_from_yaml(txt, config=config)


def graph_to_dict(graph: WeightedGraph) -> Dict[str, Any]:
    """Describe `graph` using the compiler schema."""
    edges: List[List[Any]] = [
        [source, target, weight] for source, target, weight in graph.edges()
    ]
    return {
        "directed": graph.is_directed(),
        "vertices": graph.get_all_vertices(),
        "edges": edges,
    }


def dump_yaml(graph: WeightedGraph) -> str:
    """Render `graph` as YAML text accepted by `compile_from_yaml`."""
    return yaml.safe_dump(graph_to_dict(graph), sort_keys=False)
