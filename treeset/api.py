"""Functional API for TreeSet.

This module provides plain functions named after the set operations, for
callers who prefer ``union(a, b)`` to ``a.union(b)``. Each one wraps the
corresponding TreeSet method; none of them modify their arguments.
"""

from typing import Any, Callable, Iterable, List, Optional, Union

from .config import CollectMode, TraversalStrategy, TreeSetConfig
from .core.collector import Command, FoldResult, Instruction
from .core.traverser import Traversal
from .render import render_set
from .tree_set import TreeSet


def empty(key: Optional[Callable[[Any], Any]] = None,
          config: Optional[TreeSetConfig] = None) -> TreeSet:
    """Create an empty set.

    Example:
        >>> size(empty())
        0
    """
    return TreeSet.empty(key=key, config=config)


def build(items: Iterable[Any],
          *,
          already_sorted: bool,
          key: Optional[Callable[[Any], Any]] = None,
          config: Optional[TreeSetConfig] = None) -> TreeSet:
    """Bulk build a set.

    ``already_sorted`` has no default on purpose: passing True promises
    ascending, duplicate-free input and skips the sort.

    Example:
        >>> render(build(range(1, 8), already_sorted=True))
        'TreeSet<(((1)2(3))4((5)6(7)))>'
    """
    return TreeSet.build(items, already_sorted=already_sorted, key=key, config=config)


def insert(tree_set: TreeSet, element: Any) -> TreeSet:
    return tree_set.insert(element)


def delete(tree_set: TreeSet, element: Any) -> TreeSet:
    return tree_set.delete(element)


def size(tree_set: TreeSet) -> int:
    return tree_set.size


def is_empty(tree_set: TreeSet) -> bool:
    return tree_set.is_empty()


def contains(tree_set: TreeSet, element: Any) -> bool:
    return tree_set.contains(element)


def minimum(tree_set: TreeSet) -> Any:
    """Smallest element, or None for an empty set."""
    return tree_set.first()


def maximum(tree_set: TreeSet) -> Any:
    """Largest element, or None for an empty set."""
    return tree_set.last()


def union(a: TreeSet, b: Iterable[Any]) -> TreeSet:
    return a.union(b)


def intersection(a: TreeSet, b: Iterable[Any]) -> TreeSet:
    return a.intersection(b)


def difference(a: TreeSet, b: Iterable[Any]) -> TreeSet:
    """Elements of ``a`` that are not in ``b``."""
    return a.difference(b)


def is_equal(a: TreeSet, b: Iterable[Any]) -> bool:
    return a.is_equal(b)


def is_subset(a: TreeSet, b: Iterable[Any]) -> bool:
    """Check that every element of ``a`` is in ``b``.

    Example:
        >>> is_subset(build([], already_sorted=True), build([1], already_sorted=True))
        True
    """
    return a.is_subset(b)


def is_disjoint(a: TreeSet, b: Iterable[Any]) -> bool:
    return a.is_disjoint(b)


def traverse(tree_set: TreeSet,
             strategy: Union[TraversalStrategy, str, None] = None) -> Traversal:
    """Start a traversal (ascending, descending or level_order)."""
    return tree_set.traverse(strategy)


def fold(tree_set: TreeSet,
         acc: Any,
         fun: Callable[[Any, Any], Command],
         *,
         instruction: Instruction = Instruction.CONT) -> FoldResult:
    """Reduce over the ascending order, starting with ``instruction``."""
    return tree_set.fold(acc, fun, instruction=instruction)


def slice_set(tree_set: TreeSet, start: int, count: int) -> List[Any]:
    """Return ``count`` ascending elements starting at offset ``start``."""
    return tree_set.slice(start, count)


def collect(elements: Iterable[Any],
            seed: Optional[TreeSet] = None,
            mode: Optional[CollectMode] = None) -> TreeSet:
    """Collect elements into a set, extending ``seed`` when given.

    Example:
        >>> render(collect([1, 3, 5, 7], seed=build([2, 4, 6], already_sorted=True)))
        'TreeSet<(((1)2(3))4((5)6(7)))>'
    """
    if seed is None:
        seed = TreeSet.empty()
    return seed.collector(mode).feed(elements).done()


def render(tree_set: TreeSet) -> str:
    return render_set(tree_set)


__all__ = [
    "empty",
    "build",
    "insert",
    "delete",
    "size",
    "is_empty",
    "contains",
    "minimum",
    "maximum",
    "union",
    "intersection",
    "difference",
    "is_equal",
    "is_subset",
    "is_disjoint",
    "traverse",
    "fold",
    "slice_set",
    "collect",
    "render",
]
