"""
Binary search tree underlying every ordered container in wgraph_core.

The tree stores one node per key, optionally carrying a value, and keeps keys
in strictly ascending in-order sequence. Only `<` is required of keys; equality
is derived as `not a < b and not b < a`.

Balancing:
- `balance()` flattens the tree in order and rebuilds it by midpoint
  splitting, giving a tree of height ceil(log2(n + 1)).
- With `auto_balance` enabled the tree additionally follows the scapegoat
  rule: an insertion landing deeper than floor(log_{1/alpha}(n)) rebuilds the
  highest alpha-unbalanced ancestor on its path using the same midpoint
  builder, and a tree shrunk below alpha of its peak size is rebuilt whole.

All structural walks are iterative so degenerate trees never hit the
interpreter recursion limit.
"""

from __future__ import annotations

import math
from typing import Any, Callable, Iterator, List, Optional, Tuple

from .enums import TraversalOrder
from .errors import EmptyContainer, InvalidArgument, KeyNotFound, MalformedRecord


class _Node:
    __slots__ = ("key", "value", "left", "right")

    def __init__(self, key: Any, value: Any = None):
        self.key = key
        self.value = value
        self.left: Optional[_Node] = None
        self.right: Optional[_Node] = None


def _build_balanced(items: List[Tuple[Any, Any]], start: int, end: int) -> Optional[_Node]:
    """Build a minimum-height subtree from items[start..end] (inclusive)."""
    if start > end:
        return None
    mid = (start + end) // 2
    node = _Node(*items[mid])
    # depth of this recursion is logarithmic in the slice length
    node.left = _build_balanced(items, start, mid - 1)
    node.right = _build_balanced(items, mid + 1, end)
    return node


def _subtree_size(node: Optional[_Node]) -> int:
    count = 0
    stack = [node] if node is not None else []
    while stack:
        current = stack.pop()
        count += 1
        if current.left is not None:
            stack.append(current.left)
        if current.right is not None:
            stack.append(current.right)
    return count


def _in_order_nodes(node: Optional[_Node]) -> Iterator[_Node]:
    stack: List[_Node] = []
    current = node
    while stack or current is not None:
        while current is not None:
            stack.append(current)
            current = current.left
        current = stack.pop()
        yield current
        current = current.right


def _pre_order_nodes(node: Optional[_Node]) -> Iterator[_Node]:
    stack = [node] if node is not None else []
    while stack:
        current = stack.pop()
        yield current
        if current.right is not None:
            stack.append(current.right)
        if current.left is not None:
            stack.append(current.left)


def _post_order_nodes(node: Optional[_Node]) -> Iterator[_Node]:
    # reversed (root, right, left) pre-order is (left, right, root)
    stack = [node] if node is not None else []
    output: List[_Node] = []
    while stack:
        current = stack.pop()
        output.append(current)
        if current.left is not None:
            stack.append(current.left)
        if current.right is not None:
            stack.append(current.right)
    return reversed(output)


def _copy_nodes(node: Optional[_Node]) -> Optional[_Node]:
    if node is None:
        return None
    root = _Node(node.key, node.value)
    stack = [(node, root)]
    while stack:
        src, dst = stack.pop()
        if src.left is not None:
            dst.left = _Node(src.left.key, src.left.value)
            stack.append((src.left, dst.left))
        if src.right is not None:
            dst.right = _Node(src.right.key, src.right.value)
            stack.append((src.right, dst.right))
    return root


def _same_shape(a: Optional[_Node], b: Optional[_Node]) -> bool:
    stack = [(a, b)]
    while stack:
        x, y = stack.pop()
        if x is None or y is None:
            if x is not y:
                return False
            continue
        if x.key < y.key or y.key < x.key:
            return False
        stack.append((x.left, y.left))
        stack.append((x.right, y.right))
    return True


class BinaryTree:
    """
    Ordered associative container backed by a binary search tree.

    Used directly (keys only) as the storage of `OrderedSet` and with values as
    the storage of `OrderedMap`. Inserting an existing key replaces its value.

    Attributes:
        auto_balance: Whether scapegoat rebuilding runs on insert/remove
        alpha: Weight-balance factor in (0.5, 1.0)
    """

    def __init__(self, keys=None, *, auto_balance: bool = True, alpha: float = 0.7):
        if not 0.5 < alpha < 1.0:
            raise InvalidArgument(f"alpha must be in (0.5, 1.0), got {alpha}")
        self.auto_balance = auto_balance
        self.alpha = alpha
        self._root: Optional[_Node] = None
        self._size = 0
        self._max_size = 0
        if keys is not None:
            for key in keys:
                self.insert(key)

    # ----- core operations -----
    def insert(self, key: Any, value: Any = None) -> bool:
        """
        Insert a key, or replace the value stored under an existing key.

        Returns:
            True if a new node was created, False if an existing key was updated
        """
        path: List[_Node] = []
        node = self._root
        while node is not None:
            if key < node.key:
                path.append(node)
                node = node.left
            elif node.key < key:
                path.append(node)
                node = node.right
            else:
                node.value = value
                return False

        new_node = _Node(key, value)
        if not path:
            self._root = new_node
        elif key < path[-1].key:
            path[-1].left = new_node
        else:
            path[-1].right = new_node

        self._size += 1
        self._max_size = max(self._max_size, self._size)
        if self.auto_balance and len(path) > self._depth_bound(self._size):
            self._rebuild_scapegoat(path, new_node)
        return True

    def remove(self, key: Any) -> bool:
        """
        Remove a key if present.

        A node with two children takes the content of its in-order successor,
        which is then unlinked. Removing an absent key is a no-op.

        Returns:
            True if a node was removed
        """
        parent: Optional[_Node] = None
        node = self._root
        while node is not None:
            if key < node.key:
                parent, node = node, node.left
            elif node.key < key:
                parent, node = node, node.right
            else:
                break
        if node is None:
            return False

        if node.left is not None and node.right is not None:
            successor_parent = node
            successor = node.right
            while successor.left is not None:
                successor_parent = successor
                successor = successor.left
            node.key, node.value = successor.key, successor.value
            if successor_parent is node:
                successor_parent.right = successor.right
            else:
                successor_parent.left = successor.right
        else:
            child = node.left if node.left is not None else node.right
            if parent is None:
                self._root = child
            elif parent.left is node:
                parent.left = child
            else:
                parent.right = child

        self._size -= 1
        if self.auto_balance and self._size < self.alpha * self._max_size:
            self.balance()
        return True

    def _find_node(self, key: Any) -> Optional[_Node]:
        node = self._root
        while node is not None:
            if key < node.key:
                node = node.left
            elif node.key < key:
                node = node.right
            else:
                return node
        return None

    def contains(self, key: Any) -> bool:
        return self._find_node(key) is not None

    def find(self, key: Any) -> Any:
        """
        Return the value stored under `key`.

        Raises:
            KeyNotFound: If the key is absent
        """
        node = self._find_node(key)
        if node is None:
            raise KeyNotFound(key)
        return node.value

    def count(self) -> int:
        return self._size

    def is_empty(self) -> bool:
        return self._root is None

    def clear(self) -> None:
        self._root = None
        self._size = 0
        self._max_size = 0

    def min(self) -> Any:
        """Smallest key; raises EmptyContainer on an empty tree."""
        if self._root is None:
            raise EmptyContainer("Tree is empty")
        node = self._root
        while node.left is not None:
            node = node.left
        return node.key

    def max(self) -> Any:
        """Largest key; raises EmptyContainer on an empty tree."""
        if self._root is None:
            raise EmptyContainer("Tree is empty")
        node = self._root
        while node.right is not None:
            node = node.right
        return node.key

    def height(self) -> int:
        """Number of nodes on the longest root-to-leaf path (0 when empty)."""
        if self._root is None:
            return 0
        height = 0
        level = [self._root]
        while level:
            height += 1
            level = [
                child
                for node in level
                for child in (node.left, node.right)
                if child is not None
            ]
        return height

    # ----- balancing -----
    def balance(self) -> None:
        """Rebuild the whole tree into minimum-height shape."""
        items = [(n.key, n.value) for n in _in_order_nodes(self._root)]
        self._root = _build_balanced(items, 0, len(items) - 1)
        self._max_size = self._size

    def _depth_bound(self, size: int) -> int:
        return int(math.floor(math.log(size) / math.log(1.0 / self.alpha)))

    def _rebuild_scapegoat(self, path: List[_Node], inserted: _Node) -> None:
        child = inserted
        child_size = 1
        for index in range(len(path) - 1, -1, -1):
            parent = path[index]
            sibling = parent.right if parent.left is child else parent.left
            parent_size = child_size + 1 + _subtree_size(sibling)
            if child_size > self.alpha * parent_size:
                items = [(n.key, n.value) for n in _in_order_nodes(parent)]
                rebuilt = _build_balanced(items, 0, len(items) - 1)
                if index == 0:
                    self._root = rebuilt
                elif path[index - 1].left is parent:
                    path[index - 1].left = rebuilt
                else:
                    path[index - 1].right = rebuilt
                return
            child = parent
            child_size = parent_size
        self.balance()

    # ----- traversal -----
    def traverse_in_order(self, visit: Callable[[Any], Any]) -> None:
        for node in _in_order_nodes(self._root):
            visit(node.key)

    def traverse_pre_order(self, visit: Callable[[Any], Any]) -> None:
        for node in _pre_order_nodes(self._root):
            visit(node.key)

    def traverse_post_order(self, visit: Callable[[Any], Any]) -> None:
        for node in _post_order_nodes(self._root):
            visit(node.key)

    def traverse(self, order: TraversalOrder, visit: Callable[[Any], Any]) -> None:
        if order == TraversalOrder.PRE_ORDER:
            self.traverse_pre_order(visit)
        elif order == TraversalOrder.IN_ORDER:
            self.traverse_in_order(visit)
        else:
            self.traverse_post_order(visit)

    def keys(self, order: TraversalOrder = TraversalOrder.IN_ORDER) -> List[Any]:
        result: List[Any] = []
        self.traverse(order, result.append)
        return result

    def items(self) -> Iterator[Tuple[Any, Any]]:
        """Ascending (key, value) pairs."""
        for node in _in_order_nodes(self._root):
            yield node.key, node.value

    # ----- functional helpers -----
    def copy(self) -> "BinaryTree":
        clone = BinaryTree(auto_balance=self.auto_balance, alpha=self.alpha)
        clone._root = _copy_nodes(self._root)
        clone._size = self._size
        clone._max_size = self._max_size
        return clone

    def _empty_like(self) -> "BinaryTree":
        return BinaryTree(auto_balance=self.auto_balance, alpha=self.alpha)

    def map(self, func: Callable[[Any], Any]) -> "BinaryTree":
        """New tree holding func(key) for every key, inserted in pre-order."""
        result = self._empty_like()
        self.traverse_pre_order(lambda key: result.insert(func(key)))
        return result

    def where(self, predicate: Callable[[Any], bool]) -> "BinaryTree":
        result = self._empty_like()
        for node in _pre_order_nodes(self._root):
            if predicate(node.key):
                result.insert(node.key, node.value)
        return result

    def reduce(self, func: Callable[[Any, Any], Any], initial: Any) -> Any:
        """Left fold over keys in ascending order."""
        result = initial
        for node in _in_order_nodes(self._root):
            result = func(result, node.key)
        return result

    def merge(self, other: "BinaryTree") -> None:
        """Insert every entry of `other`; its values win on shared keys."""
        for node in _pre_order_nodes(other._root):
            self.insert(node.key, node.value)

    def extract_subtree(self, key: Any) -> "BinaryTree":
        """Deep copy of the subtree rooted at `key` (empty if key is absent)."""
        result = self._empty_like()
        node = self._find_node(key)
        if node is not None:
            result._root = _copy_nodes(node)
            result._size = _subtree_size(result._root)
            result._max_size = result._size
        return result

    def contains_subtree(self, subtree: "BinaryTree") -> bool:
        """True if `subtree` is structurally identical to one of our subtrees."""
        if subtree._root is None:
            return True
        node = self._find_node(subtree._root.key)
        if node is None:
            return False
        return _same_shape(node, subtree._root)

    # ----- serialization -----
    def serialize(self, order: TraversalOrder = TraversalOrder.PRE_ORDER) -> str:
        """Space-separated keys in the requested traversal order."""
        if isinstance(order, str):
            order = TraversalOrder.from_code(order)
        return " ".join(str(key) for key in self.keys(order))

    @classmethod
    def deserialize(
        cls, text: str, key_type: Callable[[str], Any] = int, **options
    ) -> "BinaryTree":
        """
        Rebuild a tree by inserting keys in token order.

        Feeding back pre-order output restores the original shape exactly
        when auto-balancing is disabled.

        Raises:
            MalformedRecord: If a token cannot be converted by `key_type`
        """
        tree = cls(**options)
        for token in text.split():
            try:
                key = key_type(token)
            except (TypeError, ValueError) as exc:
                raise MalformedRecord(f"Cannot parse tree key {token!r}") from exc
            tree.insert(key)
        return tree

    # ----- dunder protocol -----
    def __len__(self) -> int:
        return self._size

    def __contains__(self, key: Any) -> bool:
        return self.contains(key)

    def __iter__(self) -> Iterator[Any]:
        for node in _in_order_nodes(self._root):
            yield node.key

    def __repr__(self) -> str:
        return f"BinaryTree({self.keys()!r})"
