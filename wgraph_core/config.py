"""
Configuration objects for wgraph_core.

Exposes the tunable parameters shared by graphs, their ordered containers, and
the algorithms that run over them.
"""

from __future__ import annotations
from dataclasses import dataclass

from .errors import InvalidArgument


@dataclass
class GraphConfig:
    """
    Configuration for `WeightedGraph` storage and algorithm tolerances.

    Containers created by a graph inherit the balancing settings; algorithms
    read the tolerance from the graph they run on.
    """

    # Weight used when add_edge is called without one
    default_weight: float = 1.0

    # Scapegoat-style rebuilding of ordered containers on insert/remove.
    # When disabled the containers are plain BSTs and only balance() rebuilds.
    auto_balance: bool = True

    # Weight-balance factor; a subtree holding more than alpha of its parent's
    # nodes triggers a rebuild once an insertion gets too deep
    balance_alpha: float = 0.7

    # Slack allowed when matching dist[p] + w(p, v) against dist[v]
    distance_tolerance: float = 1e-9

    def __post_init__(self):
        if not 0.5 < self.balance_alpha < 1.0:
            raise InvalidArgument(
                f"balance_alpha must be in (0.5, 1.0), got {self.balance_alpha}"
            )
        if self.distance_tolerance < 0:
            raise InvalidArgument(
                f"distance_tolerance must be non-negative, got {self.distance_tolerance}"
            )

    def tree_options(self) -> dict:
        """Keyword arguments for containers owned by a graph with this config."""
        return {"auto_balance": self.auto_balance, "alpha": self.balance_alpha}
