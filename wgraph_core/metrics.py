"""
Structural statistics for weighted graphs.

This module provides:
- Degree helpers (per-vertex degrees and the degree distribution)
- Edge density
- A combined `graph_statistics` summary used by the command-line front end
"""

from __future__ import annotations

from typing import Any, Dict

from .connectivity import count_components
from .graph import WeightedGraph
from .partial_order import is_partial_order
from .topological import find_sinks, find_sources, is_acyclic


def degree_map(graph: WeightedGraph) -> Dict[Any, int]:
    """Return vertex -> degree (self-loops count once)."""
    return {vertex: graph.degree(vertex) for vertex in graph.get_all_vertices()}


def degree_distribution(graph: WeightedGraph) -> Dict[int, int]:
    """Return degree -> number of vertices with that degree."""
    distribution: Dict[int, int] = {}
    for degree in degree_map(graph).values():
        distribution[degree] = distribution.get(degree, 0) + 1
    return dict(sorted(distribution.items()))


def density(graph: WeightedGraph) -> float:
    """
    Fraction of possible (non-loop) edges that are present.

    Directed graphs allow n(n-1) edges, undirected graphs n(n-1)/2.
    """
    n = graph.vertex_count
    if n < 2:
        return 0.0
    possible = n * (n - 1)
    if not graph.is_directed():
        possible //= 2
    loops = sum(1 for s, t, _ in graph.edges() if s == t)
    return (graph.edge_count - loops) / possible


def total_weight(graph: WeightedGraph) -> float:
    """Sum of weights over logical edges."""
    return float(sum(weight for _, _, weight in graph.edges()))


def graph_statistics(graph: WeightedGraph) -> Dict[str, Any]:
    """
    Summarize a graph for monitoring and reporting.

    Returns:
        Dictionary with basic counts, degree metrics, and kind-specific facts
        (component count for undirected graphs; acyclicity, sources, sinks and
        partial-order status for directed graphs)
    """
    degrees = list(degree_map(graph).values())
    stats: Dict[str, Any] = {
        "basic_stats": {
            "kind": graph.kind.name,
            "vertices": graph.vertex_count,
            "edges": graph.edge_count,
            "total_weight": total_weight(graph),
        },
        "degree_metrics": {
            "max_degree": max(degrees) if degrees else 0,
            "min_degree": min(degrees) if degrees else 0,
            "avg_degree": sum(degrees) / len(degrees) if degrees else 0.0,
            "degree_distribution": degree_distribution(graph),
            "density": density(graph),
        },
    }

    if graph.is_directed():
        stats["order_metrics"] = {
            "acyclic": is_acyclic(graph),
            "partial_order": is_partial_order(graph),
            "sources": len(find_sources(graph)),
            "sinks": len(find_sinks(graph)),
        }
    else:
        stats["connectivity_metrics"] = {
            "components": count_components(graph),
        }
    return stats
