"""Tree engine for TreeSet.

A tree is either ``None`` (empty) or an immutable :class:`Branch`. Every
function here returns a new tree and never modifies a branch in place, so
older versions of a tree stay valid and untouched subtrees are shared.

Balance comes from path-length reduction: after a change below a branch,
the branch is rotated only when that strictly lowers the sum of depths of
all its elements::

         d            b
        / \\   right  / \\
       b   E  ===>  A   d
      / \\     <===     / \\
     A   C    left    C   E

    rotate right when weight(A) > weight(E)
    rotate left  when weight(E) > weight(A)   (mirror image)

The check is local. An insert or delete only checks the branches it
rebuilds on its way back up, one direction each, and does not recheck
the lower branch a rotation creates. A branch elsewhere in the tree may
therefore still admit a rotation that would shorten it.
"""

from typing import Any, Callable, Iterable, List, NamedTuple, Optional, Sequence, Tuple


class Branch(NamedTuple):
    """Non-empty tree node.

    ``weight`` is the number of elements in the subtree rooted here. It is
    always derived from the children by :func:`branch`, never patched.
    """
    left: Optional["Branch"]
    element: Any
    weight: int
    right: Optional["Branch"]


Tree = Optional[Branch]
KeyFunc = Optional[Callable[[Any], Any]]

EMPTY: Tree = None


def _identity(element: Any) -> Any:
    return element


def weight(tree: Tree) -> int:
    """Return the number of elements in ``tree`` (0 when empty)."""
    if tree is None:
        return 0
    return tree.weight


def branch(left: Tree, element: Any, right: Tree) -> Branch:
    """Build a branch, deriving its weight from its children."""
    return Branch(left, element, 1 + weight(left) + weight(right), right)


def leaf(element: Any) -> Branch:
    """Build a branch with no children."""
    return Branch(None, element, 1, None)


def rotate_left(tree: Branch) -> Branch:
    """Lift the right child of ``tree`` into its place.

    ``tree.right`` must not be empty.
    """
    pivot = tree.right
    return branch(branch(tree.left, tree.element, pivot.left), pivot.element, pivot.right)


def rotate_right(tree: Branch) -> Branch:
    """Lift the left child of ``tree`` into its place.

    ``tree.left`` must not be empty.
    """
    pivot = tree.left
    return branch(pivot.left, pivot.element, branch(pivot.right, tree.element, tree.right))


def maybe_rotate_left(tree: Branch) -> Branch:
    """Rotate left only if that reduces the path length of ``tree``."""
    if tree.right is not None and weight(tree.right.right) > weight(tree.left):
        return rotate_left(tree)
    return tree


def maybe_rotate_right(tree: Branch) -> Branch:
    """Rotate right only if that reduces the path length of ``tree``."""
    if tree.left is not None and weight(tree.left.left) > weight(tree.right):
        return rotate_right(tree)
    return tree


def insert(tree: Tree, element: Any, key: KeyFunc = None) -> Branch:
    """Return a tree that also contains ``element``.

    If an equal element is already present the input tree is returned
    unchanged, so inserting is idempotent.

    Args:
        tree: Tree to insert into
        element: Element to add
        key: Ordering key (identity when None)

    Returns:
        The new root
    """
    if key is None:
        key = _identity
    target = key(element)

    # Descend, remembering which side we took at every branch
    path: List[Tuple[Branch, bool]] = []
    node = tree
    while node is not None:
        pivot = key(node.element)
        if target < pivot:
            path.append((node, True))
            node = node.left
        elif pivot < target:
            path.append((node, False))
            node = node.right
        else:
            return tree

    # Rebuild upwards. Growing a side can only make the opposite rotation
    # worthwhile: a bigger left subtree may call for a right rotation.
    rebuilt = leaf(element)
    for parent, went_left in reversed(path):
        if went_left:
            rebuilt = maybe_rotate_right(branch(rebuilt, parent.element, parent.right))
        else:
            rebuilt = maybe_rotate_left(branch(parent.left, parent.element, rebuilt))
    return rebuilt


def delete(tree: Tree, element: Any, key: KeyFunc = None) -> Tree:
    """Return a tree without ``element``.

    Deleting an absent element returns the input tree unchanged.

    A matched branch with two children is replaced by the nearest element
    from its heavier side: the maximum of the left subtree when it holds
    more elements than the right one, otherwise the minimum of the right.

    Args:
        tree: Tree to delete from
        element: Element to remove
        key: Ordering key (identity when None)

    Returns:
        The new root (None when the last element was removed)
    """
    if key is None:
        key = _identity
    target = key(element)

    path: List[Tuple[Branch, bool]] = []
    node = tree
    while node is not None:
        pivot = key(node.element)
        if target < pivot:
            path.append((node, True))
            node = node.left
        elif pivot < target:
            path.append((node, False))
            node = node.right
        else:
            break
    else:
        return tree

    rebuilt = _remove_pivot(node, key)

    # Shrinking a side can only make the rotation towards it worthwhile
    for parent, went_left in reversed(path):
        if went_left:
            rebuilt = maybe_rotate_left(branch(rebuilt, parent.element, parent.right))
        else:
            rebuilt = maybe_rotate_right(branch(parent.left, parent.element, rebuilt))
    return rebuilt


def _remove_pivot(node: Branch, key: Callable[[Any], Any]) -> Tree:
    """Remove the element stored at ``node`` itself."""
    if node.right is None:
        return node.left
    if node.left is None:
        return node.right

    if node.left.weight > node.right.weight:
        replacement = maximum(node.left)
        return branch(delete(node.left, replacement, key), replacement, node.right)

    replacement = minimum(node.right)
    return branch(node.left, replacement, delete(node.right, replacement, key))


def minimum(tree: Tree) -> Any:
    """Return the smallest element, or None for an empty tree."""
    if tree is None:
        return None
    while tree.left is not None:
        tree = tree.left
    return tree.element


def maximum(tree: Tree) -> Any:
    """Return the largest element, or None for an empty tree."""
    if tree is None:
        return None
    while tree.right is not None:
        tree = tree.right
    return tree.element


def contains(tree: Tree, element: Any, key: KeyFunc = None) -> bool:
    """Check whether an element equal to ``element`` is in the tree."""
    if key is None:
        key = _identity
    target = key(element)

    node = tree
    while node is not None:
        pivot = key(node.element)
        if target < pivot:
            node = node.left
        elif pivot < target:
            node = node.right
        else:
            return True
    return False


def nth(tree: Tree, index: int) -> Any:
    """Return the element at ascending position ``index``.

    Raises:
        IndexError: If index is outside 0 <= index < weight(tree)
    """
    if index < 0 or index >= weight(tree):
        raise IndexError(f"index {index} out of range for {weight(tree)} elements")

    node = tree
    while True:
        left_weight = weight(node.left)
        if index < left_weight:
            node = node.left
        elif index == left_weight:
            return node.element
        else:
            index -= left_weight + 1
            node = node.right


def build_from_sorted(items: Iterable[Any]) -> Tree:
    """Build a minimal-height tree from ascending, duplicate-free items.

    Runs in O(n) without any rotation. The input is trusted: unsorted or
    duplicated items produce a tree that silently breaks the ordering
    invariant.

    Args:
        items: Ascending sequence without duplicates

    Returns:
        Root of the new tree
    """
    if not isinstance(items, Sequence):
        items = list(items)

    def _build(offset: int, count: int) -> Tree:
        if count == 0:
            return None
        left_count = (count - 1) // 2
        pivot = offset + left_count
        return Branch(
            _build(offset, left_count),
            items[pivot],
            count,
            _build(pivot + 1, count - 1 - left_count),
        )

    return _build(0, len(items))


def verify(tree: Tree, key: KeyFunc = None) -> List[str]:
    """Check the ordering and weight invariants of a tree.

    Works with an explicit stack so that arbitrarily deep (corrupt) trees
    can be checked.

    Args:
        tree: Tree to check
        key: Ordering key (identity when None)

    Returns:
        List of problems found (empty if the tree is valid)
    """
    if key is None:
        key = _identity

    problems = []
    # (node, lower bound, upper bound); None means unbounded
    stack: List[Tuple[Branch, Any, Any]] = []
    if tree is not None:
        stack.append((tree, None, None))

    while stack:
        node, low, high = stack.pop()
        here = key(node.element)

        expected = 1 + weight(node.left) + weight(node.right)
        if node.weight != expected:
            problems.append(
                f"weight of {node.element!r} is {node.weight}, expected {expected}"
            )

        if low is not None and not (key(low) < here):
            problems.append(f"{node.element!r} is not greater than ancestor {low!r}")
        if high is not None and not (here < key(high)):
            problems.append(f"{node.element!r} is not less than ancestor {high!r}")

        if node.left is not None:
            stack.append((node.left, low, node.element))
        if node.right is not None:
            stack.append((node.right, node.element, high))

    return problems
