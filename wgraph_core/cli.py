"""
wgraph CLI

Usage modes:
- Default run: load a snapshot (or YAML description), run one algorithm,
  print the result as JSON
- Validation: check the graph storage invariants, print issues
- Stats: compute structural statistics
- Export: write GraphML for external tools
"""

from __future__ import annotations

import argparse
import json
import logging
import math
import sys
from typing import Any, Callable, Dict, List

from . import __version__
from . import connectivity, partial_order, shortest_path, topological
from .compiler import compile_from_file
from .containers import OrderedMap
from .errors import GraphError, VertexNotFound
from .graph import WeightedGraph
from .metrics import graph_statistics
from .serialization import load

logger = logging.getLogger("wgraph")

VERTEX_TYPES: Dict[str, Callable[[str], Any]] = {"int": int, "str": str, "float": float}


def _jsonable(value: Any) -> Any:
    if isinstance(value, OrderedMap):
        return {str(k): _jsonable(v) for k, v in value.items()}
    if isinstance(value, WeightedGraph):
        return {
            "directed": value.is_directed(),
            "vertices": value.get_all_vertices(),
            "edges": [[s, t, _jsonable(w)] for s, t, w in value.edges()],
        }
    if isinstance(value, dict):
        return {k: _jsonable(v) for k, v in value.items()}
    if isinstance(value, list):
        return [_jsonable(v) for v in value]
    if isinstance(value, float) and math.isinf(value):
        return None
    return value


ALGORITHMS: Dict[str, Callable[[WeightedGraph, argparse.Namespace], Any]] = {
    "components": lambda g, a: connectivity.find_components_bfs(g),
    "dijkstra": lambda g, a: shortest_path.dijkstra(g, a.source),
    "path": lambda g, a: shortest_path.find_shortest_path(g, a.source, a.target),
    "bellman-ford": lambda g, a: shortest_path.bellman_ford(g, a.source),
    "bfs": lambda g, a: shortest_path.bfs_shortest_path(g, a.source),
    "diameter": lambda g, a: shortest_path.graph_diameter(g),
    "radius": lambda g, a: shortest_path.graph_radius(g),
    "center": lambda g, a: shortest_path.find_graph_center(g),
    "kahn": lambda g, a: topological.kahn_sort(g),
    "dfs-sort": lambda g, a: topological.dfs_sort(g),
    "sources": lambda g, a: topological.find_sources(g),
    "sinks": lambda g, a: topological.find_sinks(g),
    "hasse": lambda g, a: partial_order.build_hasse_diagram(g),
    "minimal": lambda g, a: partial_order.find_minimal_elements(g),
    "maximal": lambda g, a: partial_order.find_maximal_elements(g),
    "levels": lambda g, a: partial_order.get_levels(g),
    "lattice": lambda g, a: partial_order.is_lattice(g),
}

# Algorithms that take --source (and --target for "path")
SOURCE_ALGORITHMS = {"dijkstra", "path", "bellman-ford", "bfs"}


def parse_args(argv: List[str] | None = None) -> argparse.Namespace:
    p = argparse.ArgumentParser(
        prog="wgraph",
        description="Load a weighted graph and run graph algorithms on it",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter,
    )

    # Utilities / meta
    p.add_argument("--version", action="store_true", help="Print version and exit")
    p.add_argument("-v", "--verbose", action="count", default=0, help="Increase verbosity (-v, -vv)")

    # Primary input
    p.add_argument("path", nargs="?", help="Path to a graph snapshot (or YAML with --yaml)")
    p.add_argument("--yaml", action="store_true", help="Treat the input as a YAML graph description")
    p.add_argument("--vertex-type", choices=sorted(VERTEX_TYPES), default="int", help="Vertex type in snapshots")

    # Execution
    p.add_argument("--algorithm", choices=sorted(ALGORITHMS), default=None, help="Algorithm to run")
    p.add_argument("--source", type=str, default=None, help="Source vertex")
    p.add_argument("--target", type=str, default=None, help="Target vertex (for 'path')")
    p.add_argument("--out", type=str, default="", help="Optional output JSON file path")

    # Analysis / export
    p.add_argument("--validate", action="store_true", help="Check graph storage invariants")
    p.add_argument("--stats", action="store_true", help="Print structural statistics")
    p.add_argument("--export-graphml", type=str, default="", help="Export graph to GraphML at given path")

    return p.parse_args(argv)


def setup_logging(verbosity: int) -> None:
    level = logging.WARNING
    if verbosity == 1:
        level = logging.INFO
    elif verbosity >= 2:
        level = logging.DEBUG
    logging.basicConfig(level=level, format="[%(levelname)s] %(message)s")


def load_graph(args: argparse.Namespace) -> WeightedGraph:
    if args.yaml:
        logger.info("Compiling graph from %s", args.path)
        return compile_from_file(args.path)
    logger.info("Loading snapshot from %s", args.path)
    return load(args.path, vertex_type=VERTEX_TYPES[args.vertex_type])


def resolve_vertex(g: WeightedGraph, token: str) -> Any:
    """
    Map a command-line token onto a vertex of `g`.

    YAML graphs may hold ints, floats or strings, so each interpretation of the
    token is tried against the graph.

    Raises:
        VertexNotFound: If no interpretation names a vertex of `g`
    """
    for convert in (int, float, str):
        try:
            candidate = convert(token)
        except ValueError:
            continue
        try:
            if g.has_vertex(candidate):
                return candidate
        except TypeError:
            # token type not comparable with this graph's vertices
            continue
    raise VertexNotFound(token)


def emit(payload: Any, out_path: str) -> None:
    text = json.dumps(payload, indent=2)
    if out_path:
        with open(out_path, "w", encoding="utf-8") as f:
            f.write(text)
    else:
        print(text)


def main(argv: List[str] | None = None) -> int:
    args = parse_args(argv)
    setup_logging(args.verbose)

    if args.version:
        print(__version__)
        return 0

    if not args.path:
        print("error: missing graph path", file=sys.stderr)
        return 2

    try:
        g = load_graph(args)
    except OSError as exc:
        logger.error("Cannot read %s: %s", args.path, exc)
        return 2
    except GraphError as exc:
        logger.error("Cannot load graph: %s", exc)
        return 1
    logger.debug("Loaded %r", g)

    if args.validate:
        issues = g.validate_integrity()
        logger.info("Validation issues: %d", sum(len(v) for v in issues.values()))
        emit({"issues": issues}, args.out)
        return 1 if issues else 0

    if args.stats:
        emit(_jsonable(graph_statistics(g)), args.out)
        return 0

    if args.export_graphml:
        logger.info("Exporting GraphML to %s", args.export_graphml)
        g.export_graphml(args.export_graphml)
        if not args.algorithm:
            return 0

    if not args.algorithm:
        # Provide a minimal graph summary
        emit({"vertices": g.vertex_count, "edges": g.edge_count}, args.out)
        return 0

    if args.algorithm in SOURCE_ALGORITHMS:
        if args.source is None:
            print(f"error: --source is required for '{args.algorithm}'", file=sys.stderr)
            return 2
        if args.algorithm == "path" and args.target is None:
            print("error: --target is required for 'path'", file=sys.stderr)
            return 2

    logger.info("Running %s", args.algorithm)
    try:
        if args.source is not None:
            args.source = resolve_vertex(g, args.source)
        if args.target is not None:
            args.target = resolve_vertex(g, args.target)
        result = ALGORITHMS[args.algorithm](g, args)
    except GraphError as exc:
        logger.error("%s failed: %s", args.algorithm, exc)
        return 1

    emit({"algorithm": args.algorithm, "result": _jsonable(result)}, args.out)
    return 0


if __name__ == "__main__":
    sys.exit(main())
