"""
Shortest-path algorithms over weighted graphs.

Distance maps are `OrderedMap`s holding an entry for every vertex, with
`math.inf` for vertices unreachable from the source.

- dijkstra / dijkstra_with_path: non-negative weights, binary-heap frontier
- bellman_ford: arbitrary weights on directed graphs, negative-cycle check
- bfs_shortest_path: hop counts
- reconstruct_path: path recovery from a distance map alone
- graph_diameter / graph_radius / find_graph_center: eccentricity measures
"""

from __future__ import annotations

import math
from typing import Any, List

from .containers import OrderedMap, OrderedSet, PriorityQueue, Queue
from .errors import (
    CannotReconstructPath,
    InvalidArgument,
    NegativeCycleDetected,
    VertexNotFound,
)
from .graph import WeightedGraph


def _initial_distances(graph: WeightedGraph, start: Any) -> OrderedMap:
    distances = OrderedMap(**graph.config.tree_options())
    for vertex in graph.get_all_vertices():
        distances.put(vertex, math.inf)
    distances.put(start, 0.0)
    return distances


def _run_dijkstra(
    graph: WeightedGraph, start: Any, end: Any = None, stop_at_end: bool = False
) -> tuple[OrderedMap, OrderedMap]:
    distances = _initial_distances(graph, start)
    previous = OrderedMap(**graph.config.tree_options())
    visited = OrderedSet(**graph.config.tree_options())
    frontier = PriorityQueue()
    frontier.push(start, 0.0)

    while not frontier.is_empty():
        u, d_u = frontier.pop()
        # Skip outdated entries
        if u in visited or d_u > distances.get(u):
            continue
        if stop_at_end and u == end:
            break
        visited.add(u)

        for v in graph.get_adjacent_vertices(u):
            if v in visited:
                continue
            alt = d_u + graph.get_edge_weight(u, v)
            if alt < distances.get(v):
                distances.put(v, alt)
                previous.put(v, u)
                frontier.push(v, alt)

    return distances, previous


def dijkstra(graph: WeightedGraph, start: Any) -> OrderedMap:
    """
    Single-source shortest distances for non-negative edge weights.

    Results on graphs with negative weights are undefined; use
    `bellman_ford` instead.

    Raises:
        VertexNotFound: If `start` is not in the graph
    """
    if not graph.has_vertex(start):
        raise VertexNotFound(start)
    distances, _ = _run_dijkstra(graph, start)
    return distances


def dijkstra_with_path(graph: WeightedGraph, start: Any, end: Any) -> List[Any]:
    """
    Shortest path from `start` to `end` as a vertex list.

    The search stops as soon as `end` is settled. The path is rebuilt by
    walking predecessors back from `end`.

    Returns:
        [start, ..., end], or [] if `end` is unreachable

    Raises:
        VertexNotFound: If either endpoint is not in the graph
        CannotReconstructPath: If the predecessor chain is broken
    """
    for vertex in (start, end):
        if not graph.has_vertex(vertex):
            raise VertexNotFound(vertex)

    distances, previous = _run_dijkstra(graph, start, end, stop_at_end=True)
    if math.isinf(distances.get(end)):
        return []

    path = [end]
    current = end
    while current != start:
        if not previous.contains_key(current):
            raise CannotReconstructPath(
                f"No predecessor recorded for {current!r} on path {start!r} -> {end!r}"
            )
        current = previous.get(current)
        path.append(current)
    path.reverse()
    return path


def find_shortest_path(graph: WeightedGraph, start: Any, end: Any) -> List[Any]:
    """Alias of `dijkstra_with_path`."""
    return dijkstra_with_path(graph, start, end)


def bellman_ford(graph: WeightedGraph, start: Any) -> OrderedMap:
    """
    Single-source shortest distances allowing negative weights.

    Relaxes every edge up to |V| - 1 times (stopping early once a pass makes
    no change), then performs one more pass: any further improvement means a
    negative cycle is reachable from `start`.

    Raises:
        InvalidArgument: If the graph is undirected
        VertexNotFound: If `start` is not in the graph
        NegativeCycleDetected: If a negative cycle is reachable from `start`
    """
    if not graph.is_directed():
        raise InvalidArgument("Bellman-Ford requires a directed graph")
    if not graph.has_vertex(start):
        raise VertexNotFound(start)

    distances = _initial_distances(graph, start)
    edges = list(graph.edges())

    for _ in range(graph.vertex_count - 1):
        changed = False
        for source, target, weight in edges:
            d_source = distances.get(source)
            if d_source < math.inf and d_source + weight < distances.get(target):
                distances.put(target, d_source + weight)
                changed = True
        if not changed:
            break

    for source, target, weight in edges:
        d_source = distances.get(source)
        if d_source < math.inf and d_source + weight < distances.get(target):
            raise NegativeCycleDetected(
                f"Graph contains a negative cycle reachable from {start!r}"
            )

    return distances


def bfs_shortest_path(graph: WeightedGraph, start: Any) -> OrderedMap:
    """
    Hop-count distances from `start`, ignoring weights.

    Raises:
        VertexNotFound: If `start` is not in the graph
    """
    if not graph.has_vertex(start):
        raise VertexNotFound(start)

    distances = _initial_distances(graph, start)
    queue = Queue()
    queue.enqueue(start)
    while not queue.is_empty():
        current = queue.dequeue()
        current_dist = distances.get(current)
        for neighbor in graph.get_adjacent_vertices(current):
            if math.isinf(distances.get(neighbor)):
                distances.put(neighbor, current_dist + 1.0)
                queue.enqueue(neighbor)
    return distances


def reconstruct_path(
    graph: WeightedGraph,
    start: Any,
    end: Any,
    distances: OrderedMap,
    tolerance: float | None = None,
) -> List[Any]:
    """
    Recover a shortest path using only a distance map.

    Walking back from `end`, each step picks the first vertex `p` (in vertex
    order) with an edge p -> current and dist[p] + w(p, current) equal to
    dist[current] within `tolerance`.

    Args:
        tolerance: Matching slack; defaults to graph.config.distance_tolerance

    Returns:
        [start, ..., end], or [] if `end` is unreachable

    Raises:
        VertexNotFound: If either endpoint is not in the graph
        CannotReconstructPath: If no consistent predecessor exists for a vertex
    """
    for vertex in (start, end):
        if not graph.has_vertex(vertex):
            raise VertexNotFound(vertex)
    if tolerance is None:
        tolerance = graph.config.distance_tolerance

    end_dist = distances.get(end)
    if math.isinf(end_dist) or end_dist < 0:
        return []

    path = [end]
    current = end
    # a consistent chain never revisits a vertex, so |V| steps bound the walk
    for _ in range(graph.vertex_count):
        if current == start:
            path.reverse()
            return path
        target_dist = distances.get(current)
        predecessor = None
        for candidate in graph.get_all_vertices():
            if candidate == current or not graph.has_edge(candidate, current):
                continue
            candidate_dist = distances.get_or_default(candidate, math.inf)
            if math.isinf(candidate_dist):
                continue
            if math.isclose(
                candidate_dist + graph.get_edge_weight(candidate, current),
                target_dist,
                rel_tol=0.0,
                abs_tol=tolerance,
            ):
                predecessor = candidate
                break
        if predecessor is None:
            raise CannotReconstructPath(
                f"No predecessor of {current!r} matches distance {target_dist}"
            )
        path.append(predecessor)
        current = predecessor

    if current == start:
        path.reverse()
        return path
    raise CannotReconstructPath(f"Distances do not lead back to {start!r}")


def eccentricity(graph: WeightedGraph, vertex: Any) -> float:
    """Largest finite Dijkstra distance from `vertex` (0.0 if none)."""
    ecc = 0.0
    for distance in dijkstra(graph, vertex).values():
        if distance < math.inf and distance > ecc:
            ecc = distance
    return ecc


def graph_diameter(graph: WeightedGraph) -> float:
    """Maximum finite shortest-path distance over all sources (0.0 when empty)."""
    diameter = 0.0
    for vertex in graph.get_all_vertices():
        diameter = max(diameter, eccentricity(graph, vertex))
    return diameter


def graph_radius(graph: WeightedGraph) -> float:
    """Minimum eccentricity over all vertices (0.0 when empty)."""
    radius = math.inf
    for vertex in graph.get_all_vertices():
        radius = min(radius, eccentricity(graph, vertex))
    return 0.0 if math.isinf(radius) else radius


def find_graph_center(graph: WeightedGraph) -> List[Any]:
    """All vertices whose eccentricity equals the graph radius."""
    eccentricities = OrderedMap(**graph.config.tree_options())
    for vertex in graph.get_all_vertices():
        eccentricities.put(vertex, eccentricity(graph, vertex))
    if eccentricities.is_empty():
        return []
    radius = min(eccentricities.values())
    return [vertex for vertex, ecc in eccentricities.items() if ecc == radius]
