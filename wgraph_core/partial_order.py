"""
Partial-order and lattice analysis over directed graphs.

A directed graph is read as the relation "u <= v iff v is reachable from u".
It is a partial order when the relation is antisymmetric (no pair of distinct
vertices joined by edges in both directions) and acyclic; reflexivity is
assumed.

Queries answer in terms of reachability. Each public entry point computes the
transitive closure (one BFS per vertex) once and shares it across its pairwise
checks instead of re-running a BFS for every comparison.
"""

from __future__ import annotations

from typing import Any, List

from .containers import OrderedMap, OrderedSet, Queue
from .errors import InvalidArgument, NoUniqueElement, NotAPartialOrder, VertexNotFound
from .graph import DirectedGraph, WeightedGraph
from .topological import is_acyclic


def _require_directed(graph: WeightedGraph) -> None:
    if not graph.is_directed():
        raise InvalidArgument("Partial-order analysis requires a directed graph")


def _require_partial_order(graph: WeightedGraph) -> None:
    if not is_partial_order(graph):
        raise NotAPartialOrder("Graph is not a partial order")


def reachable_vertices(graph: WeightedGraph, start: Any) -> OrderedSet:
    """Vertices reachable from `start`, including `start` (empty if absent)."""
    reachable = OrderedSet(**graph.config.tree_options())
    if not graph.has_vertex(start):
        return reachable
    queue = Queue()
    queue.enqueue(start)
    reachable.add(start)
    while not queue.is_empty():
        current = queue.dequeue()
        for neighbor in graph.get_adjacent_vertices(current):
            if neighbor not in reachable:
                reachable.add(neighbor)
                queue.enqueue(neighbor)
    return reachable


def transitive_closure(graph: WeightedGraph) -> OrderedMap:
    """Map each vertex to the OrderedSet of vertices reachable from it."""
    closure = OrderedMap(**graph.config.tree_options())
    for vertex in graph.get_all_vertices():
        closure.put(vertex, reachable_vertices(graph, vertex))
    return closure


def _leq(closure: OrderedMap, a: Any, b: Any) -> bool:
    return a == b or b in closure.get(a)


def is_less_or_equal(graph: WeightedGraph, a: Any, b: Any) -> bool:
    """True if a == b or `b` is reachable from `a`."""
    if a == b:
        return True
    return b in reachable_vertices(graph, a)


def check_antisymmetry(graph: WeightedGraph) -> bool:
    """False if two distinct vertices are joined by edges in both directions."""
    for u in graph.get_all_vertices():
        for v in graph.get_adjacent_vertices(u):
            if v != u and graph.has_edge(v, u):
                return False
    return True


def is_partial_order(graph: WeightedGraph) -> bool:
    """Antisymmetric and acyclic."""
    _require_directed(graph)
    return check_antisymmetry(graph) and is_acyclic(graph)


def build_hasse_diagram(graph: WeightedGraph) -> DirectedGraph:
    """
    Covering relation of a partial order as a new DirectedGraph.

    An edge u -> v is kept when u < v and no w satisfies u < w < v. All
    vertices are copied; edges carry `config.default_weight`.

    Raises:
        NotAPartialOrder: If the graph is not a partial order
    """
    _require_partial_order(graph)
    closure = transitive_closure(graph)
    hasse = DirectedGraph(config=graph.config)
    vertices = graph.get_all_vertices()
    for vertex in vertices:
        hasse.add_vertex(vertex)

    for u in vertices:
        above_u = closure.get(u)
        for v in above_u:
            if v == u:
                continue
            covering = True
            for w in above_u:
                if w == u or w == v:
                    continue
                if v in closure.get(w):
                    covering = False
                    break
            if covering:
                hasse.add_edge(u, v)
    return hasse


def _minimal(closure: OrderedMap, vertices: List[Any]) -> List[Any]:
    return [
        vertex
        for vertex in vertices
        if not any(other != vertex and _leq(closure, other, vertex) for other in vertices)
    ]


def _maximal(closure: OrderedMap, vertices: List[Any]) -> List[Any]:
    return [
        vertex
        for vertex in vertices
        if not any(other != vertex and _leq(closure, vertex, other) for other in vertices)
    ]


def find_minimal_elements(graph: WeightedGraph) -> List[Any]:
    """Elements with nothing strictly below them, in vertex order."""
    _require_partial_order(graph)
    return _minimal(transitive_closure(graph), graph.get_all_vertices())


def find_maximal_elements(graph: WeightedGraph) -> List[Any]:
    """Elements with nothing strictly above them, in vertex order."""
    _require_partial_order(graph)
    return _maximal(transitive_closure(graph), graph.get_all_vertices())


def find_least_element(graph: WeightedGraph) -> Any:
    """
    The unique minimal element.

    Raises:
        NoUniqueElement: Unless exactly one minimal element exists
    """
    minimal = find_minimal_elements(graph)
    if len(minimal) != 1:
        raise NoUniqueElement(f"No unique least element (found {len(minimal)} minimal)")
    return minimal[0]


def find_greatest_element(graph: WeightedGraph) -> Any:
    """
    The unique maximal element.

    Raises:
        NoUniqueElement: Unless exactly one maximal element exists
    """
    maximal = find_maximal_elements(graph)
    if len(maximal) != 1:
        raise NoUniqueElement(f"No unique greatest element (found {len(maximal)} maximal)")
    return maximal[0]


def is_minimal_element(graph: WeightedGraph, element: Any) -> bool:
    """True if no other vertex has an edge into `element`."""
    _require_directed(graph)
    if not graph.has_vertex(element):
        raise VertexNotFound(element)
    return not any(
        other != element and graph.has_edge(other, element)
        for other in graph.get_all_vertices()
    )


def is_maximal_element(graph: WeightedGraph, element: Any) -> bool:
    """True if `element` has no edge to another vertex."""
    _require_directed(graph)
    if not graph.has_vertex(element):
        raise VertexNotFound(element)
    return not any(other != element for other in graph.get_adjacent_vertices(element))


def _dedupe_equivalent(closure: OrderedMap, candidates: List[Any]) -> List[Any]:
    # drop candidates mutually reachable with one already kept
    result: List[Any] = []
    for candidate in candidates:
        if not any(
            _leq(closure, kept, candidate) and _leq(closure, candidate, kept)
            for kept in result
        ):
            result.append(candidate)
    return result


def _maximal_in_subset(closure: OrderedMap, subset: List[Any]) -> List[Any]:
    candidates = [
        candidate
        for candidate in subset
        if not any(
            other != candidate
            and _leq(closure, candidate, other)
            and not _leq(closure, other, candidate)
            for other in subset
        )
    ]
    return _dedupe_equivalent(closure, candidates)


def _minimal_in_subset(closure: OrderedMap, subset: List[Any]) -> List[Any]:
    candidates = [
        candidate
        for candidate in subset
        if not any(
            other != candidate
            and _leq(closure, other, candidate)
            and not _leq(closure, candidate, other)
            for other in subset
        )
    ]
    return _dedupe_equivalent(closure, candidates)


def _infimum(closure: OrderedMap, vertices: List[Any], a: Any, b: Any) -> List[Any]:
    if a == b:
        return [a]
    lower_bounds = [c for c in vertices if _leq(closure, c, a) and _leq(closure, c, b)]
    return _maximal_in_subset(closure, lower_bounds)


def _supremum(closure: OrderedMap, vertices: List[Any], a: Any, b: Any) -> List[Any]:
    if a == b:
        return [a]
    upper_bounds = [c for c in vertices if _leq(closure, a, c) and _leq(closure, b, c)]
    return _minimal_in_subset(closure, upper_bounds)


def _require_elements(graph: WeightedGraph, a: Any, b: Any) -> None:
    _require_directed(graph)
    for element in (a, b):
        if not graph.has_vertex(element):
            raise VertexNotFound(element)


def find_infimum(graph: WeightedGraph, a: Any, b: Any) -> List[Any]:
    """
    Greatest lower bounds of `a` and `b`.

    Returns every maximal common lower bound; a lattice yields exactly one,
    and an empty list means no common lower bound exists.

    Raises:
        VertexNotFound: If either element is absent
    """
    _require_elements(graph, a, b)
    return _infimum(transitive_closure(graph), graph.get_all_vertices(), a, b)


def find_supremum(graph: WeightedGraph, a: Any, b: Any) -> List[Any]:
    """
    Least upper bounds of `a` and `b`.

    Returns every minimal common upper bound; a lattice yields exactly one,
    and an empty list means no common upper bound exists.

    Raises:
        VertexNotFound: If either element is absent
    """
    _require_elements(graph, a, b)
    return _supremum(transitive_closure(graph), graph.get_all_vertices(), a, b)


def is_lattice(graph: WeightedGraph) -> bool:
    """True if the graph is a partial order where every pair has a unique meet and join."""
    if not is_partial_order(graph):
        return False
    closure = transitive_closure(graph)
    vertices = graph.get_all_vertices()
    for i, a in enumerate(vertices):
        for b in vertices[i + 1 :]:
            if len(_infimum(closure, vertices, a, b)) != 1:
                return False
            if len(_supremum(closure, vertices, a, b)) != 1:
                return False
    return True


def get_levels(graph: WeightedGraph) -> List[List[Any]]:
    """
    Layered decomposition of a partial order.

    Level 0 holds the minimal elements; each later level holds the unplaced
    vertices whose direct predecessors all sit in earlier levels.

    Raises:
        NotAPartialOrder: If the graph is not a partial order
    """
    _require_partial_order(graph)
    if graph.vertex_count == 0:
        return []

    vertices = graph.get_all_vertices()
    minimal = _minimal(transitive_closure(graph), vertices)
    levels = [minimal]
    placed = OrderedSet(minimal, **graph.config.tree_options())

    while len(placed) < graph.vertex_count:
        next_level = [
            vertex
            for vertex in vertices
            if vertex not in placed
            and all(
                other in placed
                for other in vertices
                if other != vertex and graph.has_edge(other, vertex)
            )
        ]
        if not next_level:
            # acyclic input always makes progress
            raise NotAPartialOrder("Graph is not a partial order")
        for vertex in next_level:
            placed.add(vertex)
        levels.append(next_level)
    return levels
