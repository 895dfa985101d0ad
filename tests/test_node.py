"""Unit tests for the tree engine.

Covers weights, rotations and their path-length checks, insertion and
deletion (including successor/predecessor promotion), bulk building from
sorted input, and the structural verifier.
"""

import unittest

from treeset.core.node import (
    Branch,
    branch,
    build_from_sorted,
    contains,
    delete,
    insert,
    leaf,
    maximum,
    maybe_rotate_left,
    maybe_rotate_right,
    minimum,
    nth,
    rotate_left,
    rotate_right,
    verify,
    weight,
)
from treeset.render import render_tree
from treeset.testing import path_length, rebuilt_branches, rotation_would_help, tree_height


def _insert_all(elements, tree=None):
    for element in elements:
        tree = insert(tree, element)
    return tree


class TestBranches(unittest.TestCase):
    """Test branch construction and weights."""

    def test_weight_of_empty_tree(self):
        """Empty tree weighs nothing."""
        self.assertEqual(weight(None), 0)

    def test_leaf(self):
        """A leaf has no children and weight 1."""
        self.assertEqual(leaf(5), Branch(None, 5, 1, None))

    def test_branch_derives_weight(self):
        """Weight is recomputed from the children."""
        tree = branch(leaf(1), 2, branch(leaf(3), 4, None))
        self.assertEqual(tree.weight, 4)
        self.assertEqual(tree.right.weight, 2)


class TestRotations(unittest.TestCase):
    """Test rotation primitives and the path-length checks."""

    def setUp(self):
        #     b              d
        #    / \            / \
        #   a   d    <->   b   e
        #      / \        / \
        #     c   e      a   c
        self.right_heavy = branch(leaf("a"), "b", branch(leaf("c"), "d", leaf("e")))
        self.left_heavy = branch(branch(leaf("a"), "b", leaf("c")), "d", leaf("e"))

    def test_rotate_left(self):
        self.assertEqual(rotate_left(self.right_heavy), self.left_heavy)

    def test_rotate_right(self):
        self.assertEqual(rotate_right(self.left_heavy), self.right_heavy)

    def test_rotations_rederive_weights(self):
        rotated = rotate_left(self.right_heavy)
        self.assertEqual(rotated.weight, 5)
        self.assertEqual(rotated.left.weight, 3)
        self.assertEqual(verify(rotated), [])

    def test_maybe_rotate_left_only_when_path_length_drops(self):
        """Outer grandchild must outweigh the opposite child."""
        chain = branch(None, 1, branch(None, 2, leaf(3)))
        rotated = maybe_rotate_left(chain)
        self.assertEqual(render_tree(rotated), "((1)2(3))")
        self.assertLess(path_length(rotated), path_length(chain))

        # Equal weights: rotating would not help
        self.assertIs(maybe_rotate_left(self.right_heavy), self.right_heavy)

    def test_maybe_rotate_right_only_when_path_length_drops(self):
        chain = branch(branch(leaf(1), 2, None), 3, None)
        self.assertEqual(render_tree(maybe_rotate_right(chain)), "((1)2(3))")
        self.assertIs(maybe_rotate_right(self.left_heavy), self.left_heavy)

    def test_maybe_rotate_on_leaf(self):
        tree = leaf(1)
        self.assertIs(maybe_rotate_left(tree), tree)
        self.assertIs(maybe_rotate_right(tree), tree)


class TestInsert(unittest.TestCase):
    """Test insertion and its rebalancing."""

    def test_insert_into_empty(self):
        self.assertEqual(insert(None, 1), leaf(1))

    def test_insert_balanced_order(self):
        tree = _insert_all([4, 2, 6, 1, 3, 5, 7])
        self.assertEqual(render_tree(tree), "(((1)2(3))4((5)6(7)))")

    def test_insert_ascending_rotates_into_balance(self):
        """Sequential inserts end up perfectly balanced for 1..7."""
        tree = _insert_all(range(1, 8))
        self.assertEqual(render_tree(tree), "(((1)2(3))4((5)6(7)))")

    def test_insert_descending(self):
        tree = _insert_all(range(7, 0, -1))
        self.assertEqual(render_tree(tree), "(((1)2(3))4((5)6(7)))")

    def test_insert_duplicate_returns_same_tree(self):
        tree = _insert_all([2, 1, 3])
        self.assertIs(insert(tree, 3), tree)

    def test_insert_does_not_modify_input(self):
        before = _insert_all([2, 1, 3])
        snapshot = render_tree(before)
        insert(before, 4)
        self.assertEqual(render_tree(before), snapshot)

    def test_insert_shares_untouched_subtrees(self):
        tree = build_from_sorted(range(1, 8))
        updated = insert(tree, 8)
        self.assertIs(updated.left, tree.left)

    def test_insert_with_key(self):
        tree = _insert_all(["b", "a"])
        tree = insert(tree, "B", key=str.lower)
        self.assertEqual(weight(tree), 2)
        tree = insert(tree, "C", key=str.lower)
        self.assertEqual(render_tree(tree), "((a)b(C))")
        self.assertEqual(verify(tree, key=str.lower), [])


class TestDelete(unittest.TestCase):
    """Test deletion with successor/predecessor promotion."""

    def test_delete_from_empty(self):
        self.assertIsNone(delete(None, 1))

    def test_delete_leaf_children(self):
        tree = branch(leaf(1), 2, leaf(3))
        self.assertEqual(delete(tree, 1), Branch(None, 2, 2, Branch(None, 3, 1, None)))
        self.assertEqual(delete(tree, 3), Branch(Branch(None, 1, 1, None), 2, 2, None))

    def test_delete_smallest_from_balanced(self):
        tree = build_from_sorted(range(1, 8))
        self.assertEqual(render_tree(delete(tree, 1)), "((2(3))4((5)6(7)))")

    def test_delete_promotes_from_heavier_side(self):
        tree = build_from_sorted(range(1, 10))
        self.assertEqual(render_tree(tree), "(((1)2(3(4)))5((6)7(8(9))))")

        # Right side heavier: successor 8 replaces 7
        tree = delete(tree, 7)
        self.assertEqual(render_tree(tree), "(((1)2(3(4)))5((6)8(9)))")

        # Left side heavier: predecessor 4 replaces 5
        tree = delete(tree, 5)
        self.assertEqual(render_tree(tree), "(((1)2(3))4((6)8(9)))")

    def test_delete_node_with_single_child(self):
        tree = branch(None, 1, leaf(2))
        self.assertEqual(delete(tree, 1), leaf(2))

    def test_delete_last_element(self):
        self.assertIsNone(delete(leaf(1), 1))

    def test_delete_absent_returns_same_tree(self):
        tree = build_from_sorted(range(1, 8))
        self.assertIs(delete(tree, 42), tree)

    def test_delete_keeps_invariants(self):
        tree = build_from_sorted(range(50))
        for element in range(0, 50, 3):
            tree = delete(tree, element)
            self.assertEqual(verify(tree), [])
        self.assertEqual(weight(tree), 50 - len(range(0, 50, 3)))


class TestQueries(unittest.TestCase):
    """Test min/max, membership and positional access."""

    def test_minimum_and_maximum(self):
        tree = branch(leaf(1), 2, leaf(3))
        self.assertEqual(minimum(tree), 1)
        self.assertEqual(maximum(tree), 3)

    def test_minimum_and_maximum_of_empty(self):
        self.assertIsNone(minimum(None))
        self.assertIsNone(maximum(None))

    def test_contains(self):
        tree = leaf(2)
        self.assertFalse(contains(tree, 1))
        self.assertTrue(contains(tree, 2))
        self.assertFalse(contains(tree, 3))
        self.assertFalse(contains(None, 1))

    def test_nth(self):
        tree = build_from_sorted(range(10, 20))
        self.assertEqual([nth(tree, i) for i in range(10)], list(range(10, 20)))

    def test_nth_out_of_range(self):
        tree = build_from_sorted(range(3))
        with self.assertRaises(IndexError):
            nth(tree, 3)
        with self.assertRaises(IndexError):
            nth(tree, -1)
        with self.assertRaises(IndexError):
            nth(None, 0)


class TestBuildFromSorted(unittest.TestCase):
    """Test O(n) bulk building."""

    def test_empty(self):
        self.assertIsNone(build_from_sorted([]))

    def test_matches_balanced_inserts(self):
        self.assertEqual(
            build_from_sorted(range(1, 8)),
            _insert_all([4, 2, 6, 1, 3, 5, 7]),
        )

    def test_minimal_height(self):
        for n in (1, 2, 3, 7, 8, 100, 1023, 1024):
            tree = build_from_sorted(range(n))
            self.assertEqual(tree_height(tree), n.bit_length())
            self.assertEqual(weight(tree), n)

    def test_accepts_iterators(self):
        tree = build_from_sorted(iter([1, 2, 3]))
        self.assertEqual(render_tree(tree), "((1)2(3))")

    def test_unsorted_input_is_not_repaired(self):
        """Trusting unsorted input silently breaks ordering."""
        tree = build_from_sorted([3, 1, 2])
        self.assertNotEqual(verify(tree), [])


class TestVerify(unittest.TestCase):
    """Test the structural verifier."""

    def test_valid_tree(self):
        self.assertEqual(verify(build_from_sorted(range(20))), [])
        self.assertEqual(verify(None), [])

    def test_detects_bad_weight(self):
        tree = Branch(leaf(1), 2, 5, None)
        problems = verify(tree)
        self.assertEqual(len(problems), 1)
        self.assertIn("weight", problems[0])

    def test_detects_order_violation_deep_in_tree(self):
        # 3 sits in the right subtree of 4
        tree = branch(leaf(1), 4, branch(leaf(3), 6, leaf(7)))
        problems = verify(tree)
        self.assertEqual(len(problems), 1)
        self.assertIn("3", problems[0])


class TestDegenerateShapes(unittest.TestCase):
    """Zig-zag input defeats single rotations; nothing may recurse per level."""

    def test_zigzag_inserts_build_a_chain(self):
        n = 1200
        order = []
        low, high = 1, n
        while low <= high:
            order.append(low)
            if low != high:
                order.append(high)
            low += 1
            high -= 1

        tree = _insert_all(order)
        self.assertEqual(weight(tree), n)
        self.assertEqual(tree_height(tree), n)
        self.assertEqual(verify(tree), [])

        # Deeper than the default recursion limit, yet everything still works
        self.assertTrue(contains(tree, n // 2))
        self.assertEqual(len(render_tree(tree)), 2 * n + sum(len(str(i)) for i in range(1, n + 1)))
        tree = delete(tree, order[-1])
        self.assertEqual(weight(tree), n - 1)


class TestRotationLocality(unittest.TestCase):
    """Rotation checks only run on the branches an update rebuilds."""

    def test_rebuilt_path_after_insert(self):
        before = build_from_sorted(range(1, 8))
        after = insert(before, 8)
        self.assertEqual(sorted(rebuilt_branches(before, after)), [4, 6, 7, 8])
        self.assertEqual(rotation_would_help(after), [])

    def test_shortening_rotation_can_survive_off_the_path(self):
        elements = [15, 19, 6, 46, 25, 30, 9, 5, 4, 1, 25, 35, 58, 18, 51, 48, 3, 14, 33, 34,
                    23, 17, 49, 11, 52, 6, 16, 13, 60, 59, 1, 53, 41, 51, 16, 51, 17, 12, 10]
        tree = None
        for element in elements:
            before = tree
            tree = insert(tree, element)
            # Anything that admits a shorter shape was either already there or rebuilt now
            self.assertLessEqual(
                set(rotation_would_help(tree)),
                set(rotation_would_help(before)) | set(rebuilt_branches(before, tree)),
            )

        self.assertEqual(verify(tree), [])
        self.assertEqual(weight(tree), len(set(elements)))
        # (((12)13)14) is left behind by an earlier rotation and never revisited
        self.assertIn(14, rotation_would_help(tree))

    def test_delete_leaves_other_subtrees_shared(self):
        before = build_from_sorted(range(40))
        after = delete(before, 0)
        rebuilt = set(rebuilt_branches(before, after))
        self.assertNotIn(0, rebuilt)
        self.assertLessEqual(set(rotation_would_help(after)), rebuilt)


if __name__ == "__main__":
    unittest.main()
