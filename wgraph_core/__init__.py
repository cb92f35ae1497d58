"""
wgraph_core Package.

In-memory weighted graphs built on ordered, self-balancing tree containers,
including:

- Ordered containers (BinaryTree, OrderedSet, OrderedMap, SortedSequence)
- Directed and undirected weighted graphs
- Connectivity, shortest-path, topological and partial-order algorithms
- Text snapshots and YAML graph descriptions
"""

# wgraph_core Package

__version__ = "0.1.0"

from .config import GraphConfig
from .enums import GraphKind, TraversalOrder
from .errors import (
    GraphError,
    VertexNotFound,
    EdgeNotFound,
    KeyNotFound,
    IndexOutOfRange,
    EmptyContainer,
    CycleDetected,
    NegativeCycleDetected,
    NoUniqueElement,
    NotAPartialOrder,
    InvalidFormat,
    MalformedRecord,
    InvalidArgument,
    CannotReconstructPath,
)
from .tree import BinaryTree
from .containers import OrderedSet, OrderedMap, SortedSequence, Stack, Queue, PriorityQueue
from .graph import WeightedGraph, DirectedGraph, UndirectedGraph
from .serialization import serialize, deserialize, save, load
from .compiler import compile_from_yaml, compile_from_file, compile_from_dict
from .metrics import graph_statistics
