"""Sequence protocols for TreeSet.

Three ways of moving elements in and out of a set without going through
the set algebra:

- ``fold``: reduce over the ascending order with early termination and
  the ability to pause and resume.
- ``slice_tree``: a contiguous run of the ascending order, located by
  subtree weights instead of counting elements one by one.
- Collectors: build a set from a stream of elements, either by inserting
  each one or by buffering and bulk building, with a halt signal that
  discards partial work.
"""

import functools
import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Any, Callable, Iterable, List, Optional, Tuple

from ..config import CollectMode
from ..errors import CollectorClosedError
from .node import Branch, Tree
from .traverser import DONE, AscendingTraversal

if TYPE_CHECKING:
    from ..tree_set import TreeSet

logger = logging.getLogger(__name__)


class Instruction(Enum):
    """What a fold callback asks for next."""
    CONT = "cont"         # Feed me the next element
    HALT = "halt"         # Stop now, keep the accumulator
    SUSPEND = "suspend"   # Pause; resume later from this point


class FoldStatus(Enum):
    """How a fold ended."""
    DONE = "done"             # Every element was consumed
    HALTED = "halted"         # The callback asked to stop
    SUSPENDED = "suspended"   # Paused; FoldResult.resume continues it


Command = Tuple[Instruction, Any]


@dataclass(frozen=True)
class FoldResult:
    """Outcome of a fold.

    ``resume`` is only set for suspended folds; calling it with a new
    command continues from the element after the last one consumed.
    """
    status: FoldStatus
    acc: Any
    resume: Optional[Callable[[Command], "FoldResult"]] = None


def fold(state: AscendingTraversal,
         command: Command,
         fun: Callable[[Any, Any], Command]) -> FoldResult:
    """Reduce over a traversal, driven by the callback's instructions.

    Args:
        state: Traversal to consume (usually AscendingTraversal.start(root))
        command: Initial (instruction, accumulator) pair
        fun: Callback ``fun(element, acc) -> (instruction, acc)``

    Returns:
        FoldResult describing where the fold stopped

    Example:
        >>> def take_two(element, acc):
        ...     acc = acc + [element]
        ...     return (Instruction.HALT if len(acc) == 2 else Instruction.CONT, acc)
        >>> fold(AscendingTraversal.start(root), (Instruction.CONT, []), take_two).acc
        [1, 2]
    """
    while True:
        instruction, acc = command
        if instruction is Instruction.HALT:
            return FoldResult(FoldStatus.HALTED, acc)
        if instruction is Instruction.SUSPEND:
            return FoldResult(
                FoldStatus.SUSPENDED, acc,
                resume=functools.partial(_resume, state, fun)
            )
        if instruction is not Instruction.CONT:
            raise ValueError(f"Unknown fold instruction: {instruction!r}")

        step = state.advance()
        if step is DONE:
            return FoldResult(FoldStatus.DONE, acc)
        command = fun(step.element, acc)
        state = step.state


def _resume(state: AscendingTraversal,
            fun: Callable[[Any, Any], Command],
            command: Command) -> FoldResult:
    return fold(state, command, fun)


def slice_tree(tree: Tree, start: int, count: int) -> List[Any]:
    """Return ``count`` ascending elements beginning at offset ``start``.

    Whole subtrees that lie before the offset are skipped by weight, so the
    cost is O(height + count) rather than O(start + count).

    Args:
        tree: Tree to slice
        start: Number of leading elements to skip
        count: Maximum number of elements to return

    Returns:
        List of at most ``count`` elements (shorter near the end)

    Raises:
        ValueError: If start or count is negative
    """
    if start < 0:
        raise ValueError(f"start cannot be negative, got {start}")
    if count < 0:
        raise ValueError(f"count cannot be negative, got {count}")

    result: List[Any] = []
    pending: List[Branch] = []
    node = tree
    remaining = start

    while count > 0:
        if node is not None:
            if remaining > 0 and node.weight <= remaining:
                # Entire subtree lies before the slice
                remaining -= node.weight
                node = None
            else:
                pending.append(node)
                node = node.left
            continue

        if not pending:
            break
        node = pending.pop()
        if remaining > 0:
            remaining -= 1
        else:
            result.append(node.element)
            count -= 1
        node = node.right

    return result


class Halted(Enum):
    """Sentinel returned by a halted collector instead of a set."""
    HALTED = "halted"


HALTED = Halted.HALTED


class SetCollector(ABC):
    """Abstract base class for collectors that gather elements into a set.

    A collector starts from a seed set, accepts elements through ``put``
    (or ``feed`` for many), and is closed by exactly one of ``done``, which
    returns the resulting set, or ``halt``, which throws the partial work
    away and returns :data:`HALTED`.
    """

    def __init__(self, seed: "TreeSet"):
        """Initialize collector with the set to extend.

        Args:
            seed: Set whose elements the result starts with
        """
        self.seed = seed
        self.count = 0
        self._closed = False

    @abstractmethod
    def _accept(self, element: Any) -> None:
        pass

    @abstractmethod
    def _finish(self) -> "TreeSet":
        pass

    @abstractmethod
    def _discard(self) -> None:
        pass

    def put(self, element: Any) -> "SetCollector":
        """Add one element. Returns the collector for chaining."""
        self._check_open()
        self._accept(element)
        self.count += 1
        return self

    def feed(self, elements: Iterable[Any]) -> "SetCollector":
        """Add every element of an iterable."""
        for element in elements:
            self.put(element)
        return self

    def done(self) -> "TreeSet":
        """Close the collector and return the collected set."""
        self._check_open()
        self._closed = True
        result = self._finish()
        logger.debug("%s collected %d elements into %d",
                     self.__class__.__name__, self.count, len(result))
        return result

    def halt(self) -> Halted:
        """Close the collector, discarding everything collected so far."""
        self._check_open()
        self._closed = True
        self._discard()
        logger.debug("%s halted after %d elements", self.__class__.__name__, self.count)
        return HALTED

    @property
    def closed(self) -> bool:
        return self._closed

    def _check_open(self) -> None:
        if self._closed:
            raise CollectorClosedError(f"{self.__class__.__name__} is already closed")


class InsertCollector(SetCollector):
    """Collects by inserting each element into the set as it arrives."""

    def __init__(self, seed: "TreeSet"):
        super().__init__(seed)
        self._current = seed

    def _accept(self, element: Any) -> None:
        self._current = self._current.insert(element)

    def _finish(self) -> "TreeSet":
        return self._current

    def _discard(self) -> None:
        self._current = self.seed


class BuildCollector(SetCollector):
    """Collects into a plain list and bulk builds the set once at the end."""

    def __init__(self, seed: "TreeSet"):
        super().__init__(seed)
        self._buffer: List[Any] = []

    def _accept(self, element: Any) -> None:
        self._buffer.append(element)

    def _finish(self) -> "TreeSet":
        if not self._buffer:
            return self.seed
        return self.seed.union(self.seed.build_like(self._buffer, already_sorted=False))

    def _discard(self) -> None:
        self._buffer = []


def create_collector(seed: "TreeSet", mode: CollectMode) -> SetCollector:
    """Create a collector by mode.

    Args:
        seed: Set whose elements the result starts with
        mode: CollectMode.INSERT or CollectMode.BUILD

    Returns:
        SetCollector instance

    Raises:
        ValueError: If mode is not recognized
    """
    collectors = {
        CollectMode.INSERT: InsertCollector,
        CollectMode.BUILD: BuildCollector,
    }
    if mode not in collectors:
        raise ValueError(
            f"Unknown collect mode: {mode}. "
            f"Choose from: {', '.join(m.value for m in collectors)}"
        )
    return collectors[mode](seed)
