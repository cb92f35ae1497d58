"""
Unit tests for the BinaryTree ordered container.

These tests cover insertion, removal and lookup, the three traversal orders,
manual and automatic balancing, the functional helpers (map/where/reduce/merge),
subtree extraction, and the space-separated key serialization.
"""

import math

import pytest

from wgraph_core.enums import TraversalOrder
from wgraph_core.errors import (
    EmptyContainer,
    InvalidArgument,
    KeyNotFound,
    MalformedRecord,
)
from wgraph_core.tree import BinaryTree


def plain_tree(keys):
    """Unbalanced tree whose shape follows insertion order exactly."""
    return BinaryTree(keys, auto_balance=False)


class TestBinaryTreeBasics:
    """Test insert, lookup and removal semantics."""

    def test_empty_tree(self):
        tree = BinaryTree()
        assert tree.is_empty()
        assert len(tree) == 0
        assert tree.count() == 0
        assert tree.height() == 0
        assert tree.keys() == []

    def test_insert_reports_new_keys(self):
        tree = BinaryTree()
        assert tree.insert(5) is True
        assert tree.insert(5) is False
        assert len(tree) == 1

    def test_insert_replaces_value(self):
        tree = BinaryTree()
        tree.insert("a", 1)
        tree.insert("a", 2)
        assert tree.find("a") == 2
        assert len(tree) == 1

    def test_find_missing_key_raises(self):
        tree = BinaryTree([1, 2, 3])
        with pytest.raises(KeyNotFound, match="Key 7 not found"):
            tree.find(7)

    def test_key_not_found_is_a_key_error(self):
        tree = BinaryTree()
        with pytest.raises(KeyError):
            tree.find("missing")

    def test_contains(self):
        tree = BinaryTree([4, 2, 6])
        assert tree.contains(2)
        assert 6 in tree
        assert 5 not in tree

    def test_min_max(self):
        tree = BinaryTree([7, 3, 9, 1])
        assert tree.min() == 1
        assert tree.max() == 9

    def test_min_max_on_empty_tree_raise(self):
        tree = BinaryTree()
        with pytest.raises(EmptyContainer):
            tree.min()
        with pytest.raises(EmptyContainer):
            tree.max()

    def test_insertion_order_does_not_change_in_order_output(self):
        a = BinaryTree([5, 1, 9, 3, 7])
        b = BinaryTree([9, 7, 5, 3, 1])
        assert a.keys() == b.keys() == [1, 3, 5, 7, 9]
        assert list(a) == [1, 3, 5, 7, 9]

    def test_clear(self):
        tree = BinaryTree([1, 2, 3])
        tree.clear()
        assert tree.is_empty()
        assert len(tree) == 0

    def test_invalid_alpha_rejected(self):
        with pytest.raises(InvalidArgument):
            BinaryTree(alpha=0.5)
        with pytest.raises(InvalidArgument):
            BinaryTree(alpha=1.0)


class TestBinaryTreeRemoval:
    """Test removal of leaves, single-child and two-child nodes."""

    def test_remove_absent_key_is_noop(self):
        tree = BinaryTree([1, 2])
        assert tree.remove(3) is False
        assert tree.keys() == [1, 2]

    def test_remove_leaf(self):
        tree = plain_tree([5, 3, 8])
        assert tree.remove(8) is True
        assert tree.keys() == [3, 5]

    def test_remove_node_with_one_child(self):
        tree = plain_tree([5, 3, 1])
        tree.remove(3)
        assert tree.keys() == [1, 5]
        assert tree.serialize() == "5 1"

    def test_remove_node_with_two_children_uses_successor(self):
        tree = plain_tree([5, 3, 8, 1, 4, 7, 9])
        tree.remove(5)
        assert tree.keys() == [1, 3, 4, 7, 8, 9]
        # successor 7 takes the root position
        assert tree.serialize() == "7 3 1 4 8 9"

    def test_remove_root_until_empty(self):
        tree = BinaryTree([2, 1, 3])
        for key in [2, 1, 3]:
            tree.remove(key)
        assert tree.is_empty()

    def test_remove_values_follow_keys(self):
        tree = BinaryTree(auto_balance=False)
        for key in [5, 3, 8, 7]:
            tree.insert(key, str(key))
        tree.remove(5)
        assert dict(tree.items()) == {3: "3", 7: "7", 8: "8"}


class TestBinaryTreeTraversal:
    """Test traversal orders and their format codes."""

    def setup_method(self):
        self.tree = plain_tree([5, 3, 8, 1, 4])

    def test_pre_order(self):
        assert self.tree.keys(TraversalOrder.PRE_ORDER) == [5, 3, 1, 4, 8]

    def test_in_order(self):
        assert self.tree.keys(TraversalOrder.IN_ORDER) == [1, 3, 4, 5, 8]

    def test_post_order(self):
        assert self.tree.keys(TraversalOrder.POST_ORDER) == [1, 4, 3, 8, 5]

    def test_traverse_calls_visitor(self):
        seen = []
        self.tree.traverse_post_order(seen.append)
        assert seen == [1, 4, 3, 8, 5]

    def test_serialize_with_format_codes(self):
        assert self.tree.serialize("KLP") == "5 3 1 4 8"
        assert self.tree.serialize("LKP") == "1 3 4 5 8"
        assert self.tree.serialize("LPK") == "1 4 3 8 5"

    def test_unknown_format_code_rejected(self):
        with pytest.raises(InvalidArgument):
            self.tree.serialize("XYZ")

    def test_serialize_empty_tree(self):
        assert BinaryTree().serialize() == ""


class TestBinaryTreeSerialization:
    """Test deserialize and its shape-preserving pre-order round trip."""

    def test_pre_order_round_trip_preserves_shape(self):
        tree = plain_tree([50, 30, 70, 20, 40, 60, 80, 35])
        restored = BinaryTree.deserialize(tree.serialize(), auto_balance=False)
        assert restored.serialize() == tree.serialize()
        assert restored.contains_subtree(tree)
        assert tree.contains_subtree(restored)

    def test_deserialize_with_key_type(self):
        tree = BinaryTree.deserialize("b a c", key_type=str)
        assert tree.keys() == ["a", "b", "c"]

    def test_deserialize_bad_token_raises(self):
        with pytest.raises(MalformedRecord, match="Cannot parse tree key"):
            BinaryTree.deserialize("1 2 x")

    def test_deserialize_empty_text(self):
        assert BinaryTree.deserialize("   ").is_empty()


class TestBinaryTreeBalancing:
    """Test manual balance() and scapegoat auto-balancing."""

    def test_balance_produces_minimum_height(self):
        tree = plain_tree(range(1, 16))
        assert tree.height() == 15
        tree.balance()
        assert tree.height() == 4
        assert tree.keys() == list(range(1, 16))

    def test_balance_empty_tree(self):
        tree = BinaryTree(auto_balance=False)
        tree.balance()
        assert tree.height() == 0

    def test_sorted_insertion_stays_logarithmic(self):
        n = 1000
        tree = BinaryTree(range(n))
        bound = math.floor(math.log(n) / math.log(1 / tree.alpha)) + 1
        assert tree.height() <= 2 * bound
        assert tree.keys() == list(range(n))

    def test_reverse_sorted_insertion_stays_logarithmic(self):
        n = 500
        tree = BinaryTree(range(n, 0, -1), alpha=0.6)
        bound = math.floor(math.log(n) / math.log(1 / 0.6)) + 1
        assert tree.height() <= 2 * bound

    def test_mass_removal_keeps_keys_and_shrinks_height(self):
        tree = BinaryTree(range(256))
        for key in range(200):
            tree.remove(key)
        assert tree.keys() == list(range(200, 256))
        assert tree.height() <= 10

    def test_auto_balance_disabled_degenerates(self):
        tree = plain_tree(range(50))
        assert tree.height() == 50


class TestBinaryTreeFunctional:
    """Test map/where/reduce/merge and subtree helpers."""

    def test_map_builds_new_tree(self):
        tree = BinaryTree([3, 1, 2])
        doubled = tree.map(lambda k: k * 2)
        assert doubled.keys() == [2, 4, 6]
        assert tree.keys() == [1, 2, 3]

    def test_map_collapses_duplicates(self):
        tree = BinaryTree([1, 2, 3, 4])
        assert tree.map(lambda k: k % 2).keys() == [0, 1]

    def test_where_filters(self):
        tree = BinaryTree(range(10))
        assert tree.where(lambda k: k % 3 == 0).keys() == [0, 3, 6, 9]

    def test_reduce_folds_in_order(self):
        tree = BinaryTree(["b", "c", "a"])
        assert tree.reduce(lambda acc, k: acc + k, "") == "abc"

    def test_merge_inserts_other_entries(self):
        left = BinaryTree([1, 3])
        left.merge(BinaryTree([2, 3, 4]))
        assert left.keys() == [1, 2, 3, 4]

    def test_copy_is_independent(self):
        tree = BinaryTree([1, 2, 3])
        clone = tree.copy()
        clone.insert(4)
        assert 4 not in tree
        assert clone.keys() == [1, 2, 3, 4]

    def test_extract_subtree(self):
        tree = plain_tree([5, 3, 8, 1, 4])
        sub = tree.extract_subtree(3)
        assert sub.keys() == [1, 3, 4]
        assert len(sub) == 3
        assert tree.contains_subtree(sub)

    def test_extract_missing_subtree_is_empty(self):
        tree = BinaryTree([1, 2])
        assert tree.extract_subtree(9).is_empty()

    def test_contains_subtree_rejects_different_shape(self):
        tree = plain_tree([5, 3, 8, 1, 4])
        assert not tree.contains_subtree(plain_tree([3, 1]))
        assert not tree.contains_subtree(plain_tree([7]))
        assert tree.contains_subtree(BinaryTree())
