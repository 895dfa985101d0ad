"""Test fixtures for TreeSet consumers.

These helpers inspect the shape of a set's tree so that test suites can
check ordering, weights and balance without reaching into private state.
"""

from typing import Any, Callable, List, Optional, Tuple

from ..core.node import Branch, Tree, weight, verify
from ..tree_set import TreeSet


def _root_of(tree_or_set) -> Tree:
    if isinstance(tree_or_set, TreeSet):
        return tree_or_set.root
    return tree_or_set


def _branches(root: Tree) -> List[Tuple[Branch, int]]:
    """Every branch with its depth (root = 1)."""
    found = []
    stack = [(root, 1)] if root is not None else []
    while stack:
        node, depth = stack.pop()
        found.append((node, depth))
        if node.left is not None:
            stack.append((node.left, depth + 1))
        if node.right is not None:
            stack.append((node.right, depth + 1))
    return found


def tree_height(tree_or_set) -> int:
    """Number of branches on the longest root-to-leaf path (0 when empty)."""
    return max((depth for _, depth in _branches(_root_of(tree_or_set))), default=0)


def path_length(tree_or_set) -> int:
    """Sum of the depths of all elements, counting the root as depth 0."""
    return sum(depth - 1 for _, depth in _branches(_root_of(tree_or_set)))


def rotation_would_help(tree_or_set) -> List[Any]:
    """Elements whose branch would get a shorter path length by rotating.

    An empty list means no single rotation anywhere in the tree reduces
    its total path length.
    """
    candidates = []
    for node, _ in _branches(_root_of(tree_or_set)):
        left_outer = weight(node.left.left) if node.left is not None else 0
        right_outer = weight(node.right.right) if node.right is not None else 0
        if left_outer > weight(node.right) or right_outer > weight(node.left):
            candidates.append(node.element)
    return candidates


def rebuilt_branches(before, after) -> List[Any]:
    """Elements whose branch in ``after`` is not shared with ``before``.

    Updates copy only the branches they rebuild and reuse every other
    subtree as is, so this lists what an insert or delete actually touched.
    Sharing is by identity: ``before`` must be the tree the update started
    from.
    """
    shared = {id(node) for node, _ in _branches(_root_of(before))}
    return [node.element for node, _ in _branches(_root_of(after)) if id(node) not in shared]


def assert_valid_tree(tree_or_set, key: Optional[Callable[[Any], Any]] = None) -> None:
    """Assert the ordering and weight invariants.

    For a TreeSet the set's own key is used and its size is checked
    against the root weight as well.

    Raises:
        AssertionError: Listing every problem found
    """
    if isinstance(tree_or_set, TreeSet):
        key = tree_or_set.key
        if len(tree_or_set) != weight(tree_or_set.root):
            raise AssertionError(
                f"size {len(tree_or_set)} does not match root weight {weight(tree_or_set.root)}"
            )
    problems = verify(_root_of(tree_or_set), key)
    if problems:
        raise AssertionError("; ".join(problems))
