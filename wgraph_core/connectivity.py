"""
Connected-component analysis for undirected graphs.

Components are discovered by seeding a breadth-first or depth-first traversal
from every unvisited vertex, taking seeds in ascending vertex order. Both
traversals yield the same partition; only the order inside a component may
differ.
"""

from __future__ import annotations

from typing import Any, List

from .containers import OrderedSet, Queue, Stack
from .errors import InvalidArgument, VertexNotFound
from .graph import WeightedGraph


def _require_undirected(graph: WeightedGraph) -> None:
    if graph.is_directed():
        raise InvalidArgument("Connected components require an undirected graph")


def _bfs_component(graph: WeightedGraph, start: Any, visited: OrderedSet) -> List[Any]:
    component: List[Any] = []
    queue = Queue()
    queue.enqueue(start)
    visited.add(start)
    while not queue.is_empty():
        current = queue.dequeue()
        component.append(current)
        for neighbor in graph.get_adjacent_vertices(current):
            if neighbor not in visited:
                visited.add(neighbor)
                queue.enqueue(neighbor)
    return component


def _dfs_component(graph: WeightedGraph, start: Any, visited: OrderedSet) -> List[Any]:
    component: List[Any] = []
    stack = Stack()
    stack.push(start)
    while not stack.is_empty():
        current = stack.pop()
        if current in visited:
            continue
        visited.add(current)
        component.append(current)
        for neighbor in graph.get_adjacent_vertices(current):
            if neighbor not in visited:
                stack.push(neighbor)
    return component


def _scratch_set(graph: WeightedGraph) -> OrderedSet:
    return OrderedSet(**graph.config.tree_options())


def find_components_bfs(graph: WeightedGraph) -> List[List[Any]]:
    """
    Partition the vertices into connected components using BFS.

    Returns:
        List of components, each a list of vertices in discovery order
    """
    _require_undirected(graph)
    visited = _scratch_set(graph)
    components = []
    for vertex in graph.get_all_vertices():
        if vertex not in visited:
            components.append(_bfs_component(graph, vertex, visited))
    return components


def find_components_dfs(graph: WeightedGraph) -> List[List[Any]]:
    """
    Partition the vertices into connected components using iterative DFS.

    Returns:
        List of components, each a list of vertices in discovery order
    """
    _require_undirected(graph)
    visited = _scratch_set(graph)
    components = []
    for vertex in graph.get_all_vertices():
        if vertex not in visited:
            components.append(_dfs_component(graph, vertex, visited))
    return components


def is_connected(graph: WeightedGraph) -> bool:
    """True for the empty graph or a graph with exactly one component."""
    _require_undirected(graph)
    if graph.vertex_count == 0:
        return True
    return len(find_components_bfs(graph)) == 1


def get_component_for_vertex(graph: WeightedGraph, vertex: Any) -> List[Any]:
    """BFS component containing `vertex`; raises VertexNotFound if absent."""
    _require_undirected(graph)
    if not graph.has_vertex(vertex):
        raise VertexNotFound(vertex)
    return _bfs_component(graph, vertex, _scratch_set(graph))


def get_component_size(graph: WeightedGraph, vertex: Any) -> int:
    return len(get_component_for_vertex(graph, vertex))


def count_components(graph: WeightedGraph) -> int:
    return len(find_components_bfs(graph))


def find_largest_component(graph: WeightedGraph) -> List[Any]:
    """Largest component; ties go to the first found. Empty graph -> []."""
    largest: List[Any] = []
    for component in find_components_bfs(graph):
        if len(component) > len(largest):
            largest = component
    return largest


def find_smallest_component(graph: WeightedGraph) -> List[Any]:
    """Smallest component; ties go to the first found. Empty graph -> []."""
    smallest: List[Any] | None = None
    for component in find_components_bfs(graph):
        if smallest is None or len(component) < len(smallest):
            smallest = component
    return smallest or []


def are_connected(graph: WeightedGraph, first: Any, second: Any) -> bool:
    """True if `second` lies in the BFS component of `first`."""
    _require_undirected(graph)
    if not graph.has_vertex(first) or not graph.has_vertex(second):
        return False
    return second in get_component_for_vertex(graph, first)
