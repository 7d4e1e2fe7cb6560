"""Unit tests for tree-to-fiber conversion.

Covers relation linking, sibling order, value separation and the input
checks that guard conversion.
"""

import sys
import unittest
from pathlib import Path

import pytest

# Add parent directory to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from sodautils.tree import Fiber, FiberTree, tree_to_fiber, walk_through_fiber
from sodautils.errors import InvalidInputError


def sample_forest():
    """Forest used across tests.

    Structure:
    A
    ├── B
    └── C
        └── D
    E
    """
    return [
        {"id": "A", "children": [
            {"id": "B"},
            {"id": "C", "children": [{"id": "D"}]},
        ]},
        {"id": "E"},
    ]


class TestTreeToFiber(unittest.TestCase):
    """Test relation linking produced by tree_to_fiber."""

    def setUp(self):
        self.root = tree_to_fiber(sample_forest())

    def test_root_is_first_top_level_node(self):
        self.assertEqual(self.root["id"], "A")
        self.assertIsNone(self.root.parent)
        self.assertTrue(self.root.is_root)

    def test_child_is_first_child(self):
        self.assertEqual(self.root.child["id"], "B")

    def test_sibling_links_follow_original_order(self):
        b = self.root.child
        c = b.sibling
        self.assertEqual(c["id"], "C")
        self.assertIsNone(c.sibling)
        self.assertEqual(self.root.sibling["id"], "E")
        self.assertIsNone(self.root.sibling.sibling)

    def test_parent_links(self):
        d = self.root.child.sibling.child
        self.assertEqual(d["id"], "D")
        self.assertIs(d.parent, self.root.child.sibling)
        self.assertIs(d.parent.parent, self.root)
        # Top-level siblings have no parent either
        self.assertIsNone(self.root.sibling.parent)

    def test_leaf_fibers_have_no_child(self):
        b = self.root.child
        self.assertIsNone(b.child)
        self.assertTrue(b.is_leaf)
        self.assertFalse(self.root.is_leaf)

    def test_value_excludes_children(self):
        self.assertEqual(dict(self.root.value), {"id": "A"})
        self.assertNotIn("children", self.root.value)

    def test_membership_checks_value_keys(self):
        self.assertIn("id", self.root)
        self.assertNotIn("children", self.root)
        self.assertNotIn("missing", self.root)

    def test_value_is_read_only(self):
        with self.assertRaises(TypeError):
            self.root.value["id"] = "Z"

    def test_to_dict_returns_copy(self):
        copy = self.root.to_dict()
        copy["id"] = "Z"
        self.assertEqual(self.root["id"], "A")

    def test_every_fiber_shares_one_arena(self):
        arena = self.root.tree
        self.assertIsInstance(arena, FiberTree)
        self.assertEqual(len(arena), 5)
        for fiber in arena:
            self.assertIs(fiber.tree, arena)

    def test_arena_order_is_pre_order(self):
        ids = [fiber["id"] for fiber in self.root.tree]
        self.assertEqual(ids, ["A", "B", "C", "D", "E"])

    def test_top_level(self):
        ids = [fiber["id"] for fiber in self.root.tree.top_level()]
        self.assertEqual(ids, ["A", "E"])

    def test_input_is_not_mutated(self):
        forest = sample_forest()
        tree_to_fiber(forest)
        self.assertEqual(forest, sample_forest())


class TestFiberHelpers(unittest.TestCase):
    """Test navigation helpers on Fiber."""

    def setUp(self):
        self.root = tree_to_fiber(sample_forest())
        self.d = self.root.tree[3]

    def test_ancestors(self):
        self.assertEqual([f["id"] for f in self.d.ancestors()], ["C", "A"])
        self.assertEqual(list(self.root.ancestors()), [])

    def test_children(self):
        self.assertEqual([f["id"] for f in self.root.children()], ["B", "C"])
        self.assertEqual(list(self.d.children()), [])

    def test_depth(self):
        self.assertEqual(self.root.depth, 0)
        self.assertEqual(self.d.depth, 2)

    def test_identity_semantics(self):
        other = tree_to_fiber([{"id": "A"}])
        self.assertNotEqual(self.root, other)
        self.assertEqual(len({self.root, other}), 2)

    def test_repr_mentions_index(self):
        self.assertIn("index=3", repr(self.d))


class TestConversionErrors(unittest.TestCase):
    """Test input checks."""

    def test_empty_forest(self):
        with self.assertRaises(InvalidInputError):
            tree_to_fiber([])

    def test_empty_forest_is_value_error(self):
        with self.assertRaises(ValueError):
            tree_to_fiber([])

    def test_single_mapping_instead_of_forest(self):
        with self.assertRaises(InvalidInputError):
            tree_to_fiber({"id": "A"})

    def test_non_mapping_node(self):
        with self.assertRaises(InvalidInputError):
            tree_to_fiber([{"id": "A", "children": ["B"]}])

    def test_children_must_be_sequence(self):
        with self.assertRaises(InvalidInputError):
            tree_to_fiber([{"id": "A", "children": {"id": "B"}}])

    def test_empty_or_none_children_are_leaves(self):
        root = tree_to_fiber([{"id": "A", "children": []}, {"id": "B", "children": None}])
        self.assertTrue(root.is_leaf)
        self.assertTrue(root.sibling.is_leaf)


def test_custom_children_key():
    """Children can live under any key."""
    root = tree_to_fiber([{"name": "x", "items": [{"name": "y"}]}], children_key="items")
    assert root.child["name"] == "y"
    assert "items" not in root.value


def test_tuple_forest_is_accepted():
    root = tree_to_fiber(({"id": 1}, {"id": 2}))
    assert root.sibling["id"] == 2


def count_nodes(forest):
    total = 0
    for node in forest:
        total += 1 + count_nodes(node.get("children") or [])
    return total


@pytest.mark.parametrize("forest", [
    [{"id": 1}],
    sample_forest(),
    [{"id": i, "children": [{"id": (i, j)} for j in range(i)]} for i in range(6)],
])
def test_conversion_preserves_count(forest):
    """Walking the converted tree visits every input node exactly once."""
    visited = []
    walk_through_fiber(tree_to_fiber(forest), visited.append)
    assert len(visited) == count_nodes(forest)
    assert len(set(map(id, visited))) == len(visited)


@pytest.mark.slow
def test_deep_chain_converts_without_recursion():
    """A chain far deeper than the recursion limit converts and walks."""
    depth = sys.getrecursionlimit() * 5
    node = {"id": depth - 1}
    for i in range(depth - 2, -1, -1):
        node = {"id": i, "children": [node]}

    root = tree_to_fiber([node])
    visited = []
    walk_through_fiber(root, lambda fiber: visited.append(fiber["id"]))
    assert visited == list(range(depth))
    assert isinstance(root.tree[-1], Fiber)
    assert root.tree[-1].is_leaf
