"""Ordered set facade for TreeSet.

TreeSet wraps a path-length balanced tree with its element count and
exposes set operations. It is a persistent value: insert, delete and the
set algebra return new sets and leave the receiver untouched.

Union, intersection and difference walk both trees from the largest
element down in lock step, as in the merge step of merge sort, so they
cost O(|a| + |b|). The merged elements come out in descending order and
are reversed once before the O(n) bulk build. Equality, subset and
disjointness walk both trees upwards and stop as soon as the answer is
known.
"""

import logging
import operator
from collections.abc import Iterable, Set
from typing import Any, Callable, Generic, Iterator, List, Optional, TypeVar, Union

from .config import CollectMode, TraversalStrategy, TreeSetConfig
from .core.collector import Command, FoldResult, Instruction, SetCollector, create_collector, fold, slice_tree
from .core.node import (
    Tree,
    _identity,
    build_from_sorted,
    contains,
    delete,
    insert,
    maximum,
    minimum,
    nth,
    verify,
    weight,
)
from .core.traverser import (
    DONE,
    AscendingTraversal,
    DescendingTraversal,
    LevelOrderTraversal,
    Step,
    Traversal,
    create_traversal,
)
from .errors import ConfigurationError, InvariantViolationError, OrderingMismatchError
from .render import render_set

T = TypeVar("T")

logger = logging.getLogger(__name__)


def _checked_config(config: Optional[TreeSetConfig]) -> TreeSetConfig:
    if config is None:
        return TreeSetConfig.default()
    errors = config.validate()
    if errors:
        raise ConfigurationError(f"Invalid configuration: {'; '.join(errors)}")
    return config


def _sorted_unique(items: Iterable, key: Optional[Callable[[Any], Any]]) -> List[Any]:
    """Sort items and drop all but the first of each run of equal elements."""
    ordered = sorted(items, key=key)
    if key is None:
        key = _identity

    unique: List[Any] = []
    last = None
    for element in ordered:
        current = key(element)
        # Sorted, so "not last < current" means equal
        if unique and not (last < current):
            continue
        unique.append(element)
        last = current
    return unique


def _drain(step: Step) -> Iterator[Any]:
    while step is not DONE:
        yield step.element
        step = step.state.advance()


class TreeSet(Set, Generic[T]):
    """Ordered set backed by a path-length balanced binary search tree.

    Elements must be totally ordered by ``<`` (on ``key(element)`` when a
    key function is given). No hashing is involved.

    Example:
        >>> s = TreeSet([4, 2, 6, 1, 3, 5, 7])
        >>> str(s)
        'TreeSet<(((1)2(3))4((5)6(7)))>'
        >>> list(s.delete(4) | TreeSet([9]))
        [1, 2, 3, 5, 6, 7, 9]
    """

    def __init__(self,
                 iterable: Iterable[T] = (),
                 *,
                 key: Optional[Callable[[T], Any]] = None,
                 config: Optional[TreeSetConfig] = None):
        """Build a set from arbitrary (unsorted, possibly repeating) elements.

        Args:
            iterable: Initial elements
            key: Ordering key; elements with equal keys are the same element
            config: Configuration shared with every derived set

        Raises:
            ConfigurationError: If config fails validation
        """
        self._key = key
        self._config = _checked_config(config)
        self._root: Tree = build_from_sorted(_sorted_unique(iterable, key))
        self._size = weight(self._root)
        self._verify()

    # Construction

    @classmethod
    def _from_root(cls, root: Tree, key, config: TreeSetConfig) -> "TreeSet[T]":
        tree_set = cls.__new__(cls)
        tree_set._key = key
        tree_set._config = config
        tree_set._root = root
        tree_set._size = weight(root)
        return tree_set

    @classmethod
    def empty(cls,
              *,
              key: Optional[Callable[[T], Any]] = None,
              config: Optional[TreeSetConfig] = None) -> "TreeSet[T]":
        """Create an empty set."""
        return cls._from_root(None, key, _checked_config(config))

    @classmethod
    def build(cls,
              items: Iterable[T],
              *,
              already_sorted: bool,
              key: Optional[Callable[[T], Any]] = None,
              config: Optional[TreeSetConfig] = None) -> "TreeSet[T]":
        """Bulk build a set.

        With ``already_sorted=False`` the items are deduplicated and sorted
        first, O(n log n). With ``already_sorted=True`` they are used as
        they are, O(n); the caller guarantees they are ascending and free of
        duplicates. That guarantee is not checked (unless the config enables
        invariant checking) and breaking it yields a set whose membership
        and algebra results are meaningless.

        Args:
            items: Elements to build from
            already_sorted: Whether items are ascending and duplicate-free
            key: Ordering key
            config: Configuration shared with every derived set

        Returns:
            New TreeSet
        """
        config = _checked_config(config)
        if already_sorted:
            ordered = items
        else:
            ordered = _sorted_unique(items, key)
        root = build_from_sorted(ordered)
        logger.debug("Built %s of %d elements (already_sorted=%s)",
                     cls.__name__, weight(root), already_sorted)

        tree_set = cls._from_root(root, key, config)
        tree_set._verify()
        return tree_set

    def build_like(self, items: Iterable[T], *, already_sorted: bool) -> "TreeSet[T]":
        """Bulk build a set with this set's key and config."""
        return type(self).build(items, already_sorted=already_sorted,
                                key=self._key, config=self._config)

    def _from_iterable(self, iterable: Iterable[T]) -> "TreeSet[T]":
        # Used by the collections.abc.Set mixin methods
        return self.build_like(iterable, already_sorted=False)

    def _wrap(self, root: Tree) -> "TreeSet[T]":
        if root is self._root:
            return self
        tree_set = self._from_root(root, self._key, self._config)
        tree_set._verify()
        return tree_set

    def _verify(self) -> None:
        if not self._config.check_invariants:
            return
        problems = verify(self._root, self._key)
        if problems:
            logger.error("%s invariant check failed: %s",
                         type(self).__name__, "; ".join(problems))
            raise InvariantViolationError(problems)

    # Accessors

    @property
    def root(self) -> Tree:
        """Root of the underlying tree (None when empty)."""
        return self._root

    @property
    def key(self) -> Optional[Callable[[T], Any]]:
        return self._key

    @property
    def config(self) -> TreeSetConfig:
        return self._config

    @property
    def size(self) -> int:
        """Number of elements, O(1)."""
        return self._size

    def __len__(self) -> int:
        return self._size

    def is_empty(self) -> bool:
        return self._root is None

    def _order_key(self) -> Callable[[Any], Any]:
        return _identity if self._key is None else self._key

    # Updates

    def insert(self, element: T) -> "TreeSet[T]":
        """Return a set that also contains ``element``."""
        return self._wrap(insert(self._root, element, self._key))

    def delete(self, element: T) -> "TreeSet[T]":
        """Return a set without ``element``."""
        return self._wrap(delete(self._root, element, self._key))

    # Queries

    def contains(self, element: Any) -> bool:
        """Membership test by tree descent, O(height)."""
        return contains(self._root, element, self._key)

    def __contains__(self, element: Any) -> bool:
        return self.contains(element)

    def first(self) -> Optional[T]:
        """Smallest element, or None when the set is empty."""
        return minimum(self._root)

    def last(self) -> Optional[T]:
        """Largest element, or None when the set is empty."""
        return maximum(self._root)

    # Traversal

    def ascending(self) -> AscendingTraversal:
        return AscendingTraversal.start(self._root)

    def descending(self) -> DescendingTraversal:
        return DescendingTraversal.start(self._root)

    def level_order(self) -> LevelOrderTraversal:
        return LevelOrderTraversal.start(self._root)

    def traverse(self, strategy: Union[TraversalStrategy, str, None] = None) -> Traversal:
        """Start a traversal in the given order (config default when None)."""
        if strategy is None:
            strategy = self._config.strategy
        return create_traversal(strategy, self._root)

    def __iter__(self) -> Iterator[T]:
        return iter(self.ascending())

    def __reversed__(self) -> Iterator[T]:
        return iter(self.descending())

    # Set algebra

    def _compatible(self, other: Any) -> bool:
        return isinstance(other, TreeSet) and other._key is self._key

    def _coerce(self, other: Iterable) -> "TreeSet[T]":
        if isinstance(other, TreeSet):
            if other._key is not self._key:
                raise OrderingMismatchError(
                    "Cannot combine sets ordered by different key functions"
                )
            return other
        return self.build_like(other, already_sorted=False)

    def union(self, other: Iterable[T]) -> "TreeSet[T]":
        """Elements in either set. O(|self| + |other|)."""
        other = self._coerce(other)
        key = self._order_key()
        a = self.descending().advance()
        b = other.descending().advance()
        items: List[T] = []

        while a is not DONE and b is not DONE:
            a_key, b_key = key(a.element), key(b.element)
            if b_key < a_key:
                items.append(a.element)
                a = a.state.advance()
            elif a_key < b_key:
                items.append(b.element)
                b = b.state.advance()
            else:
                items.append(a.element)
                a = a.state.advance()
                b = b.state.advance()

        # At most one side still has elements
        items.extend(_drain(a))
        items.extend(_drain(b))
        items.reverse()
        return self.build_like(items, already_sorted=True)

    def intersection(self, other: Iterable[T]) -> "TreeSet[T]":
        """Elements in both sets. O(|self| + |other|)."""
        other = self._coerce(other)
        key = self._order_key()
        a = self.descending().advance()
        b = other.descending().advance()
        items: List[T] = []

        while a is not DONE and b is not DONE:
            a_key, b_key = key(a.element), key(b.element)
            if b_key < a_key:
                a = a.state.advance()
            elif a_key < b_key:
                b = b.state.advance()
            else:
                items.append(a.element)
                a = a.state.advance()
                b = b.state.advance()

        items.reverse()
        return self.build_like(items, already_sorted=True)

    def difference(self, other: Iterable[T]) -> "TreeSet[T]":
        """Elements of this set that are not in ``other``. O(|self| + |other|)."""
        other = self._coerce(other)
        key = self._order_key()
        a = self.descending().advance()
        b = other.descending().advance()
        items: List[T] = []

        while a is not DONE and b is not DONE:
            a_key, b_key = key(a.element), key(b.element)
            if b_key < a_key:
                # Nothing left in other can match a's head
                items.append(a.element)
                a = a.state.advance()
            elif a_key < b_key:
                b = b.state.advance()
            else:
                a = a.state.advance()
                b = b.state.advance()

        items.extend(_drain(a))
        items.reverse()
        return self.build_like(items, already_sorted=True)

    def is_equal(self, other: Iterable[T]) -> bool:
        """Check that both sets hold the same elements."""
        other = self._coerce(other)
        if self._size != other._size:
            return False

        key = self._order_key()
        a = self.ascending().advance()
        b = other.ascending().advance()
        while a is not DONE and b is not DONE:
            a_key, b_key = key(a.element), key(b.element)
            if a_key < b_key or b_key < a_key:
                return False
            a = a.state.advance()
            b = b.state.advance()
        return a is DONE and b is DONE

    def is_subset(self, other: Iterable[T]) -> bool:
        """Check that every element of this set is in ``other``."""
        other = self._coerce(other)
        if self._size > other._size:
            return False

        key = self._order_key()
        a = self.ascending().advance()
        b = other.ascending().advance()
        while a is not DONE:
            if b is DONE:
                return False
            a_key, b_key = key(a.element), key(b.element)
            if a_key < b_key:
                # a's head was skipped over in other
                return False
            if b_key < a_key:
                b = b.state.advance()
            else:
                a = a.state.advance()
                b = b.state.advance()
        return True

    def is_disjoint(self, other: Iterable[T]) -> bool:
        """Check that the sets share no element."""
        other = self._coerce(other)
        key = self._order_key()
        a = self.ascending().advance()
        b = other.ascending().advance()
        while a is not DONE and b is not DONE:
            a_key, b_key = key(a.element), key(b.element)
            if a_key < b_key:
                a = a.state.advance()
            elif b_key < a_key:
                b = b.state.advance()
            else:
                return False
        return True

    def isdisjoint(self, other: Iterable[T]) -> bool:
        return self.is_disjoint(other)

    # Operators. Sets ordered by a different key fall back to the generic
    # collections.abc.Set behaviour, which only relies on membership.

    def __eq__(self, other: Any) -> bool:
        if self._compatible(other):
            return self.is_equal(other)
        return Set.__eq__(self, other)

    def __le__(self, other: Any) -> bool:
        if self._compatible(other):
            return self.is_subset(other)
        return Set.__le__(self, other)

    def __lt__(self, other: Any) -> bool:
        if self._compatible(other):
            return self._size < other._size and self.is_subset(other)
        return Set.__lt__(self, other)

    def __ge__(self, other: Any) -> bool:
        if self._compatible(other):
            return other.is_subset(self)
        return Set.__ge__(self, other)

    def __gt__(self, other: Any) -> bool:
        if self._compatible(other):
            return other._size < self._size and other.is_subset(self)
        return Set.__gt__(self, other)

    def __or__(self, other: Any) -> "TreeSet[T]":
        if not isinstance(other, Set):
            return NotImplemented
        return self.union(other)

    __ror__ = __or__

    def __and__(self, other: Any) -> "TreeSet[T]":
        if not isinstance(other, Set):
            return NotImplemented
        return self.intersection(other)

    __rand__ = __and__

    def __sub__(self, other: Any) -> "TreeSet[T]":
        if not isinstance(other, Set):
            return NotImplemented
        return self.difference(other)

    def __rsub__(self, other: Any) -> "TreeSet[T]":
        if not isinstance(other, Set):
            return NotImplemented
        return self.build_like(other, already_sorted=False).difference(self)

    def __hash__(self) -> int:
        if self._key is None:
            return self._hash()
        # Equality goes through the key, so the hash must too
        return hash(frozenset(self._key(element) for element in self))

    # Sequence protocols

    def fold(self,
             acc: Any,
             fun: Callable[[T, Any], Command],
             *,
             instruction: Instruction = Instruction.CONT) -> FoldResult:
        """Reduce over the ascending order.

        ``fun(element, acc)`` returns ``(instruction, acc)``; CONT asks for
        the next element, HALT stops, SUSPEND pauses and the returned
        FoldResult.resume continues later.
        """
        return fold(self.ascending(), (instruction, acc), fun)

    def slice(self, start: int, count: int) -> List[T]:
        """Return ``count`` ascending elements starting at offset ``start``."""
        return slice_tree(self._root, start, count)

    def __getitem__(self, index: Union[int, "slice"]) -> Union[T, List[T]]:
        """Positional access in ascending order.

        Integers (negative ones count from the end) return one element;
        slices with step 1 return a list.
        """
        if isinstance(index, slice):
            start, stop, step = index.indices(self._size)
            if step != 1:
                raise ValueError("TreeSet slices only support a step of 1")
            return self.slice(start, max(0, stop - start))

        position = operator.index(index)
        if position < 0:
            position += self._size
        return nth(self._root, position)

    def collector(self, mode: Optional[CollectMode] = None) -> SetCollector:
        """Create a collector that extends this set."""
        if mode is None:
            mode = self._config.collect_mode
        return create_collector(self, mode)

    # Rendering

    def __str__(self) -> str:
        return render_set(self)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({list(self)!r})"
