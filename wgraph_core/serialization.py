"""
Textual snapshot format for weighted graphs.

Layout:

    <D|U> <vertexCount> <edgeCount>
    <vertex>                      -- vertexCount lines
    <from> <to> <weight>          -- edgeCount lines

Directed snapshots list edges exactly as stored. Undirected snapshots list each
logical edge once with from <= to. Weights use repr(float) so a snapshot
round-trips exactly. Vertices are written with str() and read back through a
caller-supplied `vertex_type`, so they must not contain whitespace.
"""

from __future__ import annotations

from typing import Any, Callable, IO, List

from .config import GraphConfig
from .enums import GraphKind
from .errors import InvalidArgument, InvalidFormat, MalformedRecord
from .graph import DirectedGraph, UndirectedGraph, WeightedGraph


def serialize(graph: WeightedGraph) -> str:
    """Render `graph` as snapshot text (newline-terminated)."""
    lines = [f"{graph.kind.token} {graph.vertex_count} {graph.edge_count}"]
    lines.extend(str(vertex) for vertex in graph.get_all_vertices())
    for source, target, weight in graph.edges():
        lines.append(f"{source} {target} {weight!r}")
    return "\n".join(lines) + "\n"


def write_snapshot(graph: WeightedGraph, stream: IO[str]) -> None:
    stream.write(serialize(graph))


def _parse_header(line: str) -> tuple[GraphKind, int, int]:
    fields = line.split()
    if len(fields) != 3:
        raise InvalidFormat(f"Invalid graph header: {line!r}")
    try:
        kind = GraphKind.from_token(fields[0])
    except InvalidArgument as exc:
        raise InvalidFormat(f"Invalid graph type token: {fields[0]!r}") from exc
    try:
        vertex_count = int(fields[1])
        edge_count = int(fields[2])
    except ValueError as exc:
        raise InvalidFormat(f"Invalid graph counts: {line!r}") from exc
    if vertex_count < 0 or edge_count < 0:
        raise InvalidFormat(f"Negative graph counts: {line!r}")
    return kind, vertex_count, edge_count


def _parse_value(token: str, vertex_type: Callable[[str], Any], what: str) -> Any:
    try:
        return vertex_type(token)
    except (TypeError, ValueError) as exc:
        raise MalformedRecord(f"Cannot parse {what} {token!r}") from exc


def deserialize(
    text: str,
    vertex_type: Callable[[str], Any] = int,
    config: GraphConfig | None = None,
) -> WeightedGraph:
    """
    Build a graph from snapshot text.

    Args:
        text: Snapshot produced by `serialize` (blank lines are ignored)
        vertex_type: Converter applied to each vertex token
        config: Optional config for the resulting graph

    Returns:
        A DirectedGraph or UndirectedGraph according to the header token

    Raises:
        InvalidFormat: If the header is missing or invalid
        MalformedRecord: If a vertex or edge record is missing or unparsable
    """
    lines: List[str] = [line.strip() for line in text.splitlines() if line.strip()]
    if not lines:
        raise InvalidFormat("Empty graph snapshot")

    kind, vertex_count, edge_count = _parse_header(lines[0])
    if len(lines) < 1 + vertex_count + edge_count:
        raise MalformedRecord(
            f"Expected {vertex_count} vertex and {edge_count} edge records, "
            f"found {len(lines) - 1} lines"
        )

    graph: WeightedGraph
    if kind == GraphKind.DIRECTED:
        graph = DirectedGraph(config=config)
    else:
        graph = UndirectedGraph(config=config)

    vertex_lines = lines[1 : 1 + vertex_count]
    edge_lines = lines[1 + vertex_count : 1 + vertex_count + edge_count]

    for line in vertex_lines:
        fields = line.split()
        if len(fields) != 1:
            raise MalformedRecord(f"Invalid vertex record: {line!r}")
        graph.add_vertex(_parse_value(fields[0], vertex_type, "vertex"))

    for line in edge_lines:
        fields = line.split()
        if len(fields) != 3:
            raise MalformedRecord(f"Invalid edge record: {line!r}")
        source = _parse_value(fields[0], vertex_type, "edge source")
        target = _parse_value(fields[1], vertex_type, "edge target")
        weight = _parse_value(fields[2], float, "edge weight")
        try:
            graph.add_edge(source, target, weight)
        except InvalidArgument as exc:
            raise MalformedRecord(f"Invalid edge record: {line!r}") from exc

    return graph


def read_snapshot(
    stream: IO[str],
    vertex_type: Callable[[str], Any] = int,
    config: GraphConfig | None = None,
) -> WeightedGraph:
    return deserialize(stream.read(), vertex_type=vertex_type, config=config)


def save(graph: WeightedGraph, path: str) -> None:
    """Write a snapshot of `graph` to a file path."""
    with open(path, "w", encoding="utf-8") as f:
        write_snapshot(graph, f)


def load(
    path: str,
    vertex_type: Callable[[str], Any] = int,
    config: GraphConfig | None = None,
) -> WeightedGraph:
    """Read a snapshot from a file path."""
    with open(path, "r", encoding="utf-8") as f:
        return read_snapshot(f, vertex_type=vertex_type, config=config)
