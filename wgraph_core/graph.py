"""
Weighted graph data structures for wgraph_core.

This module defines the graph abstraction shared by every algorithm:
- WeightedGraph: vertex set plus adjacency-of-adjacency map with edge weights,
  parameterized by a `directed` flag that selects mirroring behaviour
- DirectedGraph / UndirectedGraph: fixed-kind conveniences
"""

from __future__ import annotations

import math
from typing import Any, Dict, Iterator, List, Tuple

import networkx as nx

from .config import GraphConfig
from .containers import OrderedMap, OrderedSet
from .enums import GraphKind
from .errors import EdgeNotFound, InvalidArgument, VertexNotFound


class WeightedGraph:
    """
    Weighted graph over mutually comparable vertices.

    Storage is a vertex `OrderedSet` and an `OrderedMap` from each vertex to an
    `OrderedMap` of neighbor -> weight. Directed graphs record an edge (u, v)
    only under u; undirected graphs mirror it under both endpoints with equal
    weight and count the pair once.

    Vertex and edge counts are maintained incrementally. `get_all_vertices()`
    serves a cached vertex list that every structural mutation invalidates.

    Attributes:
        directed: True for one-directional edges, False for mirrored edges
        config: Storage and tolerance settings shared with algorithms
    """

    def __init__(self, directed: bool = False, config: GraphConfig | None = None):
        """
        Initialize an empty graph.

        Args:
            directed: Edge semantics (see class docstring)
            config: Optional GraphConfig; a default one is created otherwise
        """
        self.directed = directed
        self.config = config or GraphConfig()
        self._vertices = OrderedSet(**self.config.tree_options())
        self._adjacency = OrderedMap(**self.config.tree_options())
        self._vertex_count = 0
        self._edge_count = 0
        self._cached_vertices: List[Any] | None = None

    # ----- helpers -----
    def _invalidate_cache(self) -> None:
        self._cached_vertices = None

    def _neighbors(self, vertex: Any) -> OrderedMap:
        return self._adjacency.get(vertex)

    def _require_vertex(self, vertex: Any) -> None:
        if not self.has_vertex(vertex):
            raise VertexNotFound(vertex)

    def _check_weight(self, weight: Any) -> float:
        weight = float(weight)
        if math.isnan(weight):
            raise InvalidArgument("Edge weight must not be NaN")
        return weight

    def _empty_like(self) -> "WeightedGraph":
        if type(self) is WeightedGraph:
            return WeightedGraph(self.directed, self.config)
        return type(self)(config=self.config)

    # ----- properties -----
    @property
    def kind(self) -> GraphKind:
        return GraphKind.DIRECTED if self.directed else GraphKind.UNDIRECTED

    @property
    def vertex_count(self) -> int:
        return self._vertex_count

    @property
    def edge_count(self) -> int:
        return self._edge_count

    def is_directed(self) -> bool:
        return self.directed

    def get_vertex_count(self) -> int:
        return self._vertex_count

    def get_edge_count(self) -> int:
        return self._edge_count

    # ----- mutation -----
    def add_vertex(self, vertex: Any) -> None:
        """Add a vertex; no-op if it already exists."""
        if isinstance(vertex, float) and math.isnan(vertex):
            raise InvalidArgument("Vertex must not be NaN")
        if self._vertices.contains(vertex):
            return
        self._vertices.add(vertex)
        self._adjacency.put(vertex, OrderedMap(**self.config.tree_options()))
        self._vertex_count += 1
        self._invalidate_cache()

    def add_edge(self, source: Any, target: Any, weight: float | None = None) -> None:
        """
        Add an edge or update its weight.

        Missing endpoints are created. The edge count grows only the first
        time the logical edge appears.

        Args:
            source: Edge origin
            target: Edge destination
            weight: Edge weight, `config.default_weight` when omitted
        """
        weight = self._check_weight(
            self.config.default_weight if weight is None else weight
        )
        self.add_vertex(source)
        self.add_vertex(target)

        out = self._neighbors(source)
        if not out.contains_key(target):
            self._edge_count += 1
        out.put(target, weight)
        if not self.directed:
            self._neighbors(target).put(source, weight)
        self._invalidate_cache()

    def remove_vertex(self, vertex: Any) -> None:
        """
        Remove a vertex and every edge incident to it.

        No-op if the vertex does not exist.
        """
        if not self.has_vertex(vertex):
            return

        out = self._neighbors(vertex)
        self._edge_count -= len(out)
        if self.directed:
            for other in self._vertices:
                if other == vertex:
                    continue
                incoming = self._neighbors(other)
                if incoming.contains_key(vertex):
                    incoming.remove(vertex)
                    self._edge_count -= 1
        else:
            for neighbor in out.keys():
                if neighbor != vertex:
                    self._neighbors(neighbor).remove(vertex)

        self._adjacency.remove(vertex)
        self._vertices.remove(vertex)
        self._vertex_count -= 1
        self._invalidate_cache()

    def remove_edge(self, source: Any, target: Any) -> None:
        """Remove an edge (and its mirror when undirected); no-op if absent."""
        if not self.has_edge(source, target):
            return
        self._neighbors(source).remove(target)
        if not self.directed:
            self._neighbors(target).remove(source)
        self._edge_count -= 1
        self._invalidate_cache()

    def set_edge_weight(self, source: Any, target: Any, weight: float) -> None:
        """
        Update the weight of an existing edge.

        Raises:
            EdgeNotFound: If the edge does not exist
        """
        if not self.has_edge(source, target):
            raise EdgeNotFound(source, target)
        weight = self._check_weight(weight)
        self._neighbors(source).put(target, weight)
        if not self.directed:
            self._neighbors(target).put(source, weight)

    def clear(self) -> None:
        self._vertices.clear()
        self._adjacency.clear()
        self._vertex_count = 0
        self._edge_count = 0
        self._invalidate_cache()

    def balance(self) -> None:
        """Rebalance every internal ordered container."""
        self._vertices.balance()
        self._adjacency.balance()
        for neighbors in self._adjacency.values():
            neighbors.balance()

    # ----- queries -----
    def has_vertex(self, vertex: Any) -> bool:
        # NaN is unordered and can never be stored
        if isinstance(vertex, float) and math.isnan(vertex):
            return False
        return self._vertices.contains(vertex)

    def has_edge(self, source: Any, target: Any) -> bool:
        if not self.has_vertex(source) or not self.has_vertex(target):
            return False
        return self._neighbors(source).contains_key(target)

    def get_edge_weight(self, source: Any, target: Any) -> float:
        """
        Weight of the edge source -> target.

        Raises:
            EdgeNotFound: If the edge does not exist
        """
        if not self.has_edge(source, target):
            raise EdgeNotFound(source, target)
        return self._neighbors(source).get(target)

    def get_adjacent_vertices(self, vertex: Any) -> List[Any]:
        """
        Out-neighbors (directed) or neighbors (undirected) in ascending order.

        Raises:
            VertexNotFound: If the vertex does not exist
        """
        self._require_vertex(vertex)
        return self._neighbors(vertex).keys()

    def get_all_vertices(self) -> List[Any]:
        """Snapshot of all vertices in ascending order."""
        if self._cached_vertices is None:
            self._cached_vertices = self._vertices.to_list()
        return list(self._cached_vertices)

    def edges(self) -> Iterator[Tuple[Any, Any, float]]:
        """
        Yield every logical edge once as (source, target, weight).

        Undirected edges are reported with source <= target.
        """
        for source, neighbors in self._adjacency.items():
            for target, weight in neighbors.items():
                if not self.directed and target < source:
                    continue
                yield source, target, weight

    def out_degree(self, vertex: Any) -> int:
        self._require_vertex(vertex)
        return len(self._neighbors(vertex))

    def in_degree(self, vertex: Any) -> int:
        self._require_vertex(vertex)
        if not self.directed:
            return len(self._neighbors(vertex))
        return sum(
            1 for other in self._vertices if self._neighbors(other).contains_key(vertex)
        )

    def degree(self, vertex: Any) -> int:
        """Number of incident logical edges; a self-loop counts once."""
        if not self.directed:
            return self.out_degree(vertex)
        loop = 1 if self.has_edge(vertex, vertex) else 0
        return self.out_degree(vertex) + self.in_degree(vertex) - loop

    def copy(self) -> "WeightedGraph":
        clone = self._empty_like()
        for vertex in self._vertices:
            clone.add_vertex(vertex)
        for source, target, weight in self.edges():
            clone.add_edge(source, target, weight)
        return clone

    # ----- presentation -----
    def describe(self) -> str:
        """
        Human-readable adjacency listing.

        Weights are shown in parentheses only when they differ from 1.0.
        """
        header = "Directed Graph: " if self.directed else "Undirected Graph: "
        lines = [f"{header}{self._vertex_count} vertices, {self._edge_count} edges"]
        for vertex in self.get_all_vertices():
            parts = []
            for target, weight in self._neighbors(vertex).items():
                parts.append(f"{target}" if weight == 1.0 else f"{target}({weight:g})")
            lines.append(f"{vertex}: " + ", ".join(parts))
        return "\n".join(lines)

    def validate_integrity(self) -> Dict[str, List[str]]:
        """
        Check the storage invariants of the graph.

        Checks:
        - Every vertex has an adjacency entry and vice versa
        - Every neighbor is a known vertex
        - Undirected edges are mirrored with equal weights
        - Vertex and edge counters match the stored structure

        Returns:
            Dictionary of issues by category (empty categories removed)
        """
        issues = {
            "adjacency_issues": [],
            "dangling_edges": [],
            "symmetry_issues": [],
            "count_issues": [],
        }

        for vertex in self._vertices:
            if not self._adjacency.contains_key(vertex):
                issues["adjacency_issues"].append(
                    f"Vertex {vertex!r} has no adjacency entry"
                )
        for vertex in self._adjacency:
            if not self._vertices.contains(vertex):
                issues["adjacency_issues"].append(
                    f"Adjacency entry for unknown vertex {vertex!r}"
                )

        stored = 0
        loops = 0
        for source, neighbors in self._adjacency.items():
            for target, weight in neighbors.items():
                stored += 1
                if source == target:
                    loops += 1
                if not self._vertices.contains(target):
                    issues["dangling_edges"].append(
                        f"Edge {source!r} -> {target!r} references unknown vertex"
                    )
                    continue
                if not self.directed:
                    mirror = self._adjacency.get_or_default(target)
                    if mirror is None or not mirror.contains_key(source):
                        issues["symmetry_issues"].append(
                            f"Edge {source!r} - {target!r} is not mirrored"
                        )
                    elif mirror.get(source) != weight:
                        issues["symmetry_issues"].append(
                            f"Edge {source!r} - {target!r} has mismatched weights"
                        )

        expected_edges = stored if self.directed else (stored - loops) // 2 + loops
        if self._vertex_count != len(self._vertices):
            issues["count_issues"].append(
                f"Vertex counter {self._vertex_count} != {len(self._vertices)} stored"
            )
        if self._edge_count != expected_edges:
            issues["count_issues"].append(
                f"Edge counter {self._edge_count} != {expected_edges} stored"
            )

        return {k: v for k, v in issues.items() if v}  # Remove empty categories

    # ----- networkx interop -----
    def to_networkx(self) -> "nx.Graph":
        """
        Convert to a NetworkX DiGraph (directed) or Graph (undirected).

        Edge weights are stored under the "weight" attribute.
        """
        G = nx.DiGraph() if self.directed else nx.Graph()
        G.add_nodes_from(self.get_all_vertices())
        for source, target, weight in self.edges():
            G.add_edge(source, target, weight=weight)
        return G

    @classmethod
    def from_networkx(
        cls, G: "nx.Graph", config: GraphConfig | None = None
    ) -> "WeightedGraph":
        """
        Build a graph from a NetworkX graph, reading the "weight" attribute.

        Called on `WeightedGraph` itself, the result is a DirectedGraph or an
        UndirectedGraph to match `G.is_directed()`.
        """
        directed = G.is_directed()
        if cls is WeightedGraph:
            graph = DirectedGraph(config=config) if directed else UndirectedGraph(config=config)
        else:
            graph = cls(config=config)
            if graph.directed != directed:
                raise InvalidArgument(
                    f"{cls.__name__} cannot be built from a "
                    f"{'directed' if directed else 'undirected'} NetworkX graph"
                )
        for node in G.nodes:
            graph.add_vertex(node)
        for source, target, data in G.edges(data=True):
            graph.add_edge(source, target, data.get("weight", graph.config.default_weight))
        return graph

    def export_graphml(self, filepath: str) -> None:
        """
        Export the graph to GraphML format.

        Args:
            filepath: Path where to save the GraphML file
        """
        nx.write_graphml(self.to_networkx(), filepath)

    # ----- dunder protocol -----
    def __len__(self) -> int:
        return self._vertex_count

    def __contains__(self, vertex: Any) -> bool:
        return self.has_vertex(vertex)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, WeightedGraph):
            return NotImplemented
        return (
            self.directed == other.directed
            and self._vertices == other._vertices
            and self._edge_count == other._edge_count
            and all(
                other.has_edge(s, t) and other.get_edge_weight(s, t) == w
                for s, t, w in self.edges()
            )
        )

    def __str__(self) -> str:
        return self.describe()

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(vertices={self._vertex_count}, "
            f"edges={self._edge_count})"
        )


class DirectedGraph(WeightedGraph):
    """Weighted graph with one-directional edges."""

    def __init__(self, config: GraphConfig | None = None):
        super().__init__(directed=True, config=config)

    def get_incoming_vertices(self, vertex: Any) -> List[Any]:
        """
        Vertices with an edge into `vertex`, found by scanning all vertices.

        Raises:
            VertexNotFound: If the vertex does not exist
        """
        self._require_vertex(vertex)
        return [
            other
            for other in self.get_all_vertices()
            if other != vertex and self.has_edge(other, vertex)
        ]


class UndirectedGraph(WeightedGraph):
    """Weighted graph with mirrored edges."""

    def __init__(self, config: GraphConfig | None = None):
        super().__init__(directed=False, config=config)
