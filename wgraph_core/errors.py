"""
Exception taxonomy for wgraph_core.

Every failure raised by the library derives from `GraphError`, and additionally
from the closest builtin exception so callers can keep using familiar
`except KeyError` / `except IndexError` / `except ValueError` clauses.
"""

from __future__ import annotations

from typing import Any


class GraphError(Exception):
    """Base class for all wgraph_core errors."""


class _LookupMessage:
    """Mixin that keeps KeyError subclasses from repr-quoting their message."""

    def __str__(self) -> str:
        return str(self.args[0]) if self.args else ""


class VertexNotFound(_LookupMessage, GraphError, KeyError):
    """A vertex required by the operation is not in the graph."""

    def __init__(self, vertex: Any):
        super().__init__(f"Vertex {vertex!r} does not exist")
        self.vertex = vertex


class EdgeNotFound(_LookupMessage, GraphError, KeyError):
    """An edge weight was queried or updated on a non-existent edge."""

    def __init__(self, source: Any, target: Any):
        super().__init__(f"Edge {source!r} -> {target!r} does not exist")
        self.source = source
        self.target = target


class KeyNotFound(_LookupMessage, GraphError, KeyError):
    """Container lookup miss."""

    def __init__(self, key: Any):
        super().__init__(f"Key {key!r} not found")
        self.key = key


class IndexOutOfRange(GraphError, IndexError):
    """Positional access beyond the bounds of a sequence view."""

    def __init__(self, index: int, length: int):
        super().__init__(f"Index {index} is out of range for length {length}")
        self.index = index
        self.length = length


class EmptyContainer(GraphError, IndexError):
    """Pop/peek on an empty stack, queue, priority queue or tree."""


class CycleDetected(GraphError, ValueError):
    """Topological ordering was requested on a cyclic graph."""


class NegativeCycleDetected(GraphError, ValueError):
    """Bellman-Ford found a negative cycle reachable from the source."""


class CannotReconstructPath(GraphError, RuntimeError):
    """Predecessor chain is inconsistent with the recorded distances."""


class NoUniqueElement(GraphError, ValueError):
    """A least/greatest element was requested but is not unique."""


class NotAPartialOrder(GraphError, ValueError):
    """The relation is not antisymmetric or not acyclic."""


class InvalidFormat(GraphError, ValueError):
    """Serialized input does not start with a valid header."""


class MalformedRecord(GraphError, ValueError):
    """A vertex or edge record could not be parsed."""


class InvalidArgument(GraphError, ValueError):
    """A parameter is outside its allowed domain."""
