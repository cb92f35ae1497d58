"""
Enumerations shared across wgraph_core.

- GraphKind: directed vs undirected graphs, with their snapshot header tokens
- TraversalOrder: binary tree traversal orders, with their short format codes
"""

from enum import Enum

from .errors import InvalidArgument


class GraphKind(Enum):
    """
    Mutation semantics of a weighted graph.

    - DIRECTED: an edge (u, v) is stored only under u
    - UNDIRECTED: an edge (u, v) is mirrored under both endpoints
    """

    DIRECTED = "D"
    """Edges are one-directional."""

    UNDIRECTED = "U"
    """Edges are mirrored; one logical edge per unordered pair."""

    @property
    def token(self) -> str:
        """Header token used by the textual snapshot format."""
        return self.value

    @classmethod
    def from_token(cls, token: str) -> "GraphKind":
        for kind in cls:
            if kind.value == token:
                return kind
        raise InvalidArgument(f"Unknown graph kind token: {token!r}")


class TraversalOrder(Enum):
    """
    Depth-first traversal orders of a binary tree.

    The codes name the visiting order of root (K), left (L) and right (P)
    subtrees.
    """

    PRE_ORDER = "KLP"
    """Root, left subtree, right subtree."""

    IN_ORDER = "LKP"
    """Left subtree, root, right subtree (ascending keys)."""

    POST_ORDER = "LPK"
    """Left subtree, right subtree, root."""

    @classmethod
    def from_code(cls, code: str) -> "TraversalOrder":
        for order in cls:
            if order.value == code:
                return order
        raise InvalidArgument(f"Unknown traversal format: {code!r}")
