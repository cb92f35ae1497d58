"""
Topological ordering of directed graphs.

- kahn_sort: in-degree peeling with a FIFO queue of zero in-degree vertices
- dfs_sort: reverse DFS postorder with temporary marks for back-edge detection
- is_acyclic, find_sources, find_sinks
"""

from __future__ import annotations

from typing import Any, List

from .containers import OrderedMap, OrderedSet, Queue
from .errors import CycleDetected, InvalidArgument
from .graph import WeightedGraph


def _require_directed(graph: WeightedGraph) -> None:
    if not graph.is_directed():
        raise InvalidArgument("Topological ordering requires a directed graph")


def kahn_sort(graph: WeightedGraph) -> List[Any]:
    """
    Topological order via Kahn's algorithm.

    Zero in-degree vertices are emitted in FIFO order of discovery, starting
    from the initial sources in ascending vertex order.

    Raises:
        InvalidArgument: If the graph is undirected
        CycleDetected: If fewer than |V| vertices could be emitted
    """
    _require_directed(graph)
    if graph.vertex_count == 0:
        return []

    in_degree = OrderedMap(**graph.config.tree_options())
    vertices = graph.get_all_vertices()
    for vertex in vertices:
        in_degree.put(vertex, 0)
    for source in vertices:
        for target in graph.get_adjacent_vertices(source):
            in_degree.put(target, in_degree.get(target) + 1)

    queue = Queue()
    for vertex, degree in in_degree.items():
        if degree == 0:
            queue.enqueue(vertex)

    result: List[Any] = []
    while not queue.is_empty():
        current = queue.dequeue()
        result.append(current)
        for neighbor in graph.get_adjacent_vertices(current):
            degree = in_degree.get(neighbor) - 1
            in_degree.put(neighbor, degree)
            if degree == 0:
                queue.enqueue(neighbor)

    if len(result) != graph.vertex_count:
        raise CycleDetected("Graph contains a cycle - topological sort not possible")
    return result


def dfs_sort(graph: WeightedGraph) -> List[Any]:
    """
    Topological order as reverse DFS postorder.

    The traversal keeps an explicit stack of (vertex, neighbor iterator)
    frames; a vertex is temporarily marked while its frame is open, and
    reaching a marked vertex again is a back-edge.

    Raises:
        InvalidArgument: If the graph is undirected
        CycleDetected: On the first back-edge found
    """
    _require_directed(graph)
    visited = OrderedSet(**graph.config.tree_options())
    temp_mark = OrderedSet(**graph.config.tree_options())
    postorder: List[Any] = []

    for root in graph.get_all_vertices():
        if root in visited:
            continue
        temp_mark.add(root)
        stack = [(root, iter(graph.get_adjacent_vertices(root)))]
        while stack:
            vertex, neighbors = stack[-1]
            for neighbor in neighbors:
                if neighbor in temp_mark:
                    raise CycleDetected(
                        "Graph contains a cycle - topological sort not possible"
                    )
                if neighbor not in visited:
                    temp_mark.add(neighbor)
                    stack.append((neighbor, iter(graph.get_adjacent_vertices(neighbor))))
                    break
            else:
                stack.pop()
                temp_mark.remove(vertex)
                visited.add(vertex)
                postorder.append(vertex)

    postorder.reverse()
    return postorder


def is_acyclic(graph: WeightedGraph) -> bool:
    """True iff `kahn_sort` succeeds."""
    try:
        kahn_sort(graph)
    except CycleDetected:
        return False
    return True


def find_sources(graph: WeightedGraph) -> List[Any]:
    """Vertices with no incoming edge from another vertex."""
    _require_directed(graph)
    vertices = graph.get_all_vertices()
    return [
        vertex
        for vertex in vertices
        if not any(other != vertex and graph.has_edge(other, vertex) for other in vertices)
    ]


def find_sinks(graph: WeightedGraph) -> List[Any]:
    """Vertices with no outgoing edges."""
    _require_directed(graph)
    return [
        vertex
        for vertex in graph.get_all_vertices()
        if not graph.get_adjacent_vertices(vertex)
    ]
