"""
Ordered containers and scratch-state helpers for wgraph_core.

- OrderedSet / OrderedMap: BST-backed set and key -> value map, iterated in
  ascending key order; graph storage and algorithm scratch state use both
- SortedSequence: positional view over a BST with a lazily rebuilt cache
- Stack / Queue / PriorityQueue: work lists used by the traversal algorithms
"""

from __future__ import annotations

import heapq
import itertools
from collections import deque
from typing import Any, Iterable, Iterator, List, Optional, Tuple

from .errors import EmptyContainer, IndexOutOfRange, KeyNotFound
from .tree import BinaryTree


class OrderedSet:
    """Set of mutually comparable keys kept in ascending order."""

    def __init__(self, items: Optional[Iterable[Any]] = None, **tree_options):
        self._tree = BinaryTree(**tree_options)
        if items is not None:
            for item in items:
                self._tree.insert(item)

    def _options(self) -> dict:
        return {"auto_balance": self._tree.auto_balance, "alpha": self._tree.alpha}

    def add(self, value: Any) -> None:
        self._tree.insert(value)

    def remove(self, value: Any) -> None:
        """Remove `value`; absent values are ignored."""
        self._tree.remove(value)

    def contains(self, value: Any) -> bool:
        return self._tree.contains(value)

    def is_empty(self) -> bool:
        return self._tree.is_empty()

    def clear(self) -> None:
        self._tree.clear()

    def balance(self) -> None:
        self._tree.balance()

    def height(self) -> int:
        return self._tree.height()

    def first(self) -> Any:
        return self._tree.min()

    def last(self) -> Any:
        return self._tree.max()

    def copy(self) -> "OrderedSet":
        clone = OrderedSet(**self._options())
        clone._tree = self._tree.copy()
        return clone

    def union(self, other: "OrderedSet") -> "OrderedSet":
        result = self.copy()
        for value in other:
            result.add(value)
        return result

    def intersection(self, other: "OrderedSet") -> "OrderedSet":
        return OrderedSet((v for v in self if other.contains(v)), **self._options())

    def difference(self, other: "OrderedSet") -> "OrderedSet":
        return OrderedSet((v for v in self if not other.contains(v)), **self._options())

    def to_list(self) -> List[Any]:
        return list(self._tree)

    def __len__(self) -> int:
        return len(self._tree)

    def __contains__(self, value: Any) -> bool:
        return self._tree.contains(value)

    def __iter__(self) -> Iterator[Any]:
        return iter(self._tree)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, OrderedSet):
            return NotImplemented
        return len(self) == len(other) and all(v in other for v in self)

    def __repr__(self) -> str:
        return f"OrderedSet({self.to_list()!r})"


class OrderedMap:
    """
    Key -> value map stored as a BST ordered by key.

    Putting an existing key replaces its value. Lookups on missing keys raise
    `KeyNotFound`; removals of missing keys are no-ops.
    """

    def __init__(self, items: Optional[Iterable[Tuple[Any, Any]]] = None, **tree_options):
        self._tree = BinaryTree(**tree_options)
        if items is not None:
            for key, value in items:
                self._tree.insert(key, value)

    def put(self, key: Any, value: Any) -> None:
        self._tree.insert(key, value)

    def get(self, key: Any) -> Any:
        """Value for `key`; raises KeyNotFound when absent."""
        return self._tree.find(key)

    def get_or_default(self, key: Any, default: Any = None) -> Any:
        try:
            return self._tree.find(key)
        except KeyNotFound:
            return default

    def remove(self, key: Any) -> None:
        self._tree.remove(key)

    def contains_key(self, key: Any) -> bool:
        return self._tree.contains(key)

    def contains_value(self, value: Any) -> bool:
        return any(v == value for _, v in self._tree.items())

    def keys(self) -> List[Any]:
        return list(self._tree)

    def values(self) -> List[Any]:
        return [v for _, v in self._tree.items()]

    def items(self) -> List[Tuple[Any, Any]]:
        return list(self._tree.items())

    def is_empty(self) -> bool:
        return self._tree.is_empty()

    def clear(self) -> None:
        self._tree.clear()

    def balance(self) -> None:
        self._tree.balance()

    def height(self) -> int:
        return self._tree.height()

    def copy(self) -> "OrderedMap":
        clone = OrderedMap()
        clone._tree = self._tree.copy()
        return clone

    def __getitem__(self, key: Any) -> Any:
        return self._tree.find(key)

    def __setitem__(self, key: Any, value: Any) -> None:
        self._tree.insert(key, value)

    def __delitem__(self, key: Any) -> None:
        self._tree.remove(key)

    def __len__(self) -> int:
        return len(self._tree)

    def __contains__(self, key: Any) -> bool:
        return self._tree.contains(key)

    def __iter__(self) -> Iterator[Any]:
        return iter(self._tree)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, OrderedMap):
            return NotImplemented
        if len(self) != len(other):
            return False
        for key, value in self._tree.items():
            if key not in other or other[key] != value:
                return False
        return True

    def __repr__(self) -> str:
        return f"OrderedMap({dict(self._tree.items())!r})"


class SortedSequence:
    """
    Sorted, duplicate-free sequence with positional access.

    The in-order list is cached and rebuilt lazily after mutations.
    """

    def __init__(self, items: Optional[Iterable[Any]] = None, **tree_options):
        self._tree = BinaryTree(items, **tree_options)
        self._cache: Optional[List[Any]] = None

    def _sequence(self) -> List[Any]:
        if self._cache is None:
            self._cache = list(self._tree)
        return self._cache

    def add(self, value: Any) -> None:
        self._tree.insert(value)
        self._cache = None

    def remove(self, value: Any) -> None:
        self._tree.remove(value)
        self._cache = None

    def clear(self) -> None:
        self._tree.clear()
        self._cache = None

    def contains(self, value: Any) -> bool:
        return self._tree.contains(value)

    def get(self, index: int) -> Any:
        seq = self._sequence()
        if index < 0 or index >= len(seq):
            raise IndexOutOfRange(index, len(seq))
        return seq[index]

    def first(self) -> Any:
        return self.get(0)

    def last(self) -> Any:
        return self.get(len(self) - 1)

    def index_of(self, value: Any) -> int:
        seq = self._sequence()
        for index, item in enumerate(seq):
            if not (item < value or value < item):
                return index
        return -1

    def subsequence(self, start: int, end: int) -> List[Any]:
        """Elements from `start` through `end`, both inclusive."""
        seq = self._sequence()
        if start < 0 or start >= len(seq):
            raise IndexOutOfRange(start, len(seq))
        if end < start or end >= len(seq):
            raise IndexOutOfRange(end, len(seq))
        return seq[start : end + 1]

    def __getitem__(self, index: int) -> Any:
        return self.get(index)

    def __len__(self) -> int:
        return len(self._tree)

    def __contains__(self, value: Any) -> bool:
        return self._tree.contains(value)

    def __iter__(self) -> Iterator[Any]:
        return iter(list(self._sequence()))

    def __repr__(self) -> str:
        return f"SortedSequence({self._sequence()!r})"


class Stack:
    """LIFO work list."""

    def __init__(self):
        self._items: List[Any] = []

    def push(self, value: Any) -> None:
        self._items.append(value)

    def pop(self) -> Any:
        if not self._items:
            raise EmptyContainer("Stack is empty")
        return self._items.pop()

    def peek(self) -> Any:
        if not self._items:
            raise EmptyContainer("Stack is empty")
        return self._items[-1]

    def is_empty(self) -> bool:
        return not self._items

    def __len__(self) -> int:
        return len(self._items)


class Queue:
    """FIFO work list."""

    def __init__(self):
        self._items: deque = deque()

    def enqueue(self, value: Any) -> None:
        self._items.append(value)

    def dequeue(self) -> Any:
        if not self._items:
            raise EmptyContainer("Queue is empty")
        return self._items.popleft()

    def peek(self) -> Any:
        if not self._items:
            raise EmptyContainer("Queue is empty")
        return self._items[0]

    def is_empty(self) -> bool:
        return not self._items

    def __len__(self) -> int:
        return len(self._items)


class PriorityQueue:
    """
    Min-priority queue of (priority, item) entries.

    Entries with equal priority come out in insertion order, so items never
    need to be comparable themselves.
    """

    def __init__(self):
        self._heap: List[Tuple[float, int, Any]] = []
        self._counter = itertools.count()

    def push(self, item: Any, priority: float) -> None:
        heapq.heappush(self._heap, (priority, next(self._counter), item))

    def pop(self) -> Tuple[Any, float]:
        """Remove and return (item, priority) with the smallest priority."""
        if not self._heap:
            raise EmptyContainer("Priority queue is empty")
        priority, _, item = heapq.heappop(self._heap)
        return item, priority

    def peek(self) -> Tuple[Any, float]:
        if not self._heap:
            raise EmptyContainer("Priority queue is empty")
        priority, _, item = self._heap[0]
        return item, priority

    def is_empty(self) -> bool:
        return not self._heap

    def clear(self) -> None:
        self._heap.clear()

    def __len__(self) -> int:
        return len(self._heap)
