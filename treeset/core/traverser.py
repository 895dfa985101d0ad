"""Traversal strategies for TreeSet.

Traversals are pull-based state machines rather than generators. A state
is an immutable value; calling ``advance()`` returns either :data:`DONE`
or a :class:`Next` holding one element and the state that resumes after
it. Because ``advance()`` has no side effects, a state may be advanced any
number of times and always yields the same step. The pending work is kept
in persistent cons cells ``(head, rest)`` so that states share structure
instead of copying stacks.

Memory use is O(height) for the ascending and descending orders and
O(width of a level) for level order.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Iterator, Optional, Tuple, Union

from ..config import TraversalStrategy
from .node import Tree


class Done:
    """Terminal step: the traversal has no more elements."""

    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "DONE"

    def __bool__(self) -> bool:
        return False


DONE = Done()


@dataclass(frozen=True)
class Next:
    """One step of a traversal: an element and the state after it."""
    element: Any
    state: "Traversal"


Step = Union[Done, Next]

# Persistent stack: None or (head, rest)
Cons = Optional[Tuple[Any, Any]]


def _reverse(cells: Cons) -> Cons:
    reversed_cells = None
    while cells is not None:
        head, cells = cells
        reversed_cells = (head, reversed_cells)
    return reversed_cells


class Traversal(ABC):
    """Abstract base class for traversal states."""

    @abstractmethod
    def advance(self) -> Step:
        """Return the next step of the traversal.

        Returns:
            DONE when exhausted, else Next(element, following_state)
        """
        pass

    def __iter__(self) -> Iterator[Any]:
        """Drive the state machine as an ordinary Python iterator."""
        step = self.advance()
        while step is not DONE:
            yield step.element
            step = step.state.advance()


@dataclass(frozen=True)
class AscendingTraversal(Traversal):
    """In-order traversal from the smallest element to the largest.

    Descends left pushing (element, right subtree) frames; when it runs off
    the tree it pops a frame, emits its element and continues in the stored
    right subtree.
    """
    tree: Tree
    stack: Cons = None

    @classmethod
    def start(cls, root: Tree) -> "AscendingTraversal":
        return cls(root, None)

    def advance(self) -> Step:
        tree, stack = self.tree, self.stack
        while tree is not None:
            stack = ((tree.element, tree.right), stack)
            tree = tree.left
        if stack is None:
            return DONE
        (element, right), rest = stack
        return Next(element, AscendingTraversal(right, rest))


@dataclass(frozen=True)
class DescendingTraversal(Traversal):
    """Mirror of AscendingTraversal, from the largest element down."""
    tree: Tree
    stack: Cons = None

    @classmethod
    def start(cls, root: Tree) -> "DescendingTraversal":
        return cls(root, None)

    def advance(self) -> Step:
        tree, stack = self.tree, self.stack
        while tree is not None:
            stack = ((tree.left, tree.element), stack)
            tree = tree.right
        if stack is None:
            return DONE
        (left, element), rest = stack
        return Next(element, DescendingTraversal(left, rest))


@dataclass(frozen=True)
class LevelOrderTraversal(Traversal):
    """Level-by-level traversal, left to right within a level.

    ``front`` holds the subtrees still to visit; children discovered while
    visiting them are pushed onto ``back`` (newest first). When ``front``
    runs dry, the reversed ``back`` becomes the new front.
    """
    front: Cons
    back: Cons = None

    @classmethod
    def start(cls, root: Tree) -> "LevelOrderTraversal":
        if root is None:
            return cls(None, None)
        return cls((root, None), None)

    def advance(self) -> Step:
        front, back = self.front, self.back
        if front is None:
            if back is None:
                return DONE
            front, back = _reverse(back), None

        node, rest = front
        if node.left is not None:
            back = (node.left, back)
        if node.right is not None:
            back = (node.right, back)
        return Next(node.element, LevelOrderTraversal(rest, back))


_STRATEGY_CLASSES = {
    TraversalStrategy.ASCENDING: AscendingTraversal,
    TraversalStrategy.DESCENDING: DescendingTraversal,
    TraversalStrategy.LEVEL_ORDER: LevelOrderTraversal,
}

_STRATEGY_NAMES = {
    'ascending': TraversalStrategy.ASCENDING,
    'asc': TraversalStrategy.ASCENDING,
    'preorder': TraversalStrategy.ASCENDING,
    'descending': TraversalStrategy.DESCENDING,
    'desc': TraversalStrategy.DESCENDING,
    'postorder': TraversalStrategy.DESCENDING,
    'level_order': TraversalStrategy.LEVEL_ORDER,
    'level': TraversalStrategy.LEVEL_ORDER,
    'bfs': TraversalStrategy.LEVEL_ORDER,
    'depthfirst': TraversalStrategy.LEVEL_ORDER,
}


def parse_strategy(strategy: Union[TraversalStrategy, str]) -> TraversalStrategy:
    """Parse a strategy from an enum member or one of its names.

    Raises:
        ValueError: If the name is not recognized
    """
    if isinstance(strategy, TraversalStrategy):
        return strategy

    strategy_lower = strategy.lower() if isinstance(strategy, str) else str(strategy)
    if strategy_lower not in _STRATEGY_NAMES:
        raise ValueError(
            f"Unknown traversal strategy: {strategy}. "
            f"Choose from: {', '.join(_STRATEGY_NAMES.keys())}"
        )
    return _STRATEGY_NAMES[strategy_lower]


def create_traversal(strategy: Union[TraversalStrategy, str], root: Tree) -> Traversal:
    """Create the initial traversal state for a tree.

    Args:
        strategy: Traversal order, as enum or name (ascending, descending,
            level_order and their aliases)
        root: Tree to traverse

    Returns:
        Traversal state positioned before the first element

    Raises:
        ValueError: If strategy name is not recognized
    """
    return _STRATEGY_CLASSES[parse_strategy(strategy)].start(root)
