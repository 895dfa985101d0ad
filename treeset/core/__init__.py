"""Core components of TreeSet.

This package contains the tree engine, the traversal state machines and
the sequence protocols that the TreeSet facade is built from.
"""

from .node import Branch, Tree, EMPTY, weight, branch, leaf
from .traverser import (
    Traversal,
    AscendingTraversal,
    DescendingTraversal,
    LevelOrderTraversal,
    DONE,
    Next,
    create_traversal,
)
from .collector import (
    SetCollector,
    InsertCollector,
    BuildCollector,
    Instruction,
    FoldStatus,
    FoldResult,
    HALTED,
    fold,
    slice_tree,
    create_collector,
)

__all__ = [
    "Branch",
    "Tree",
    "EMPTY",
    "weight",
    "branch",
    "leaf",
    "Traversal",
    "AscendingTraversal",
    "DescendingTraversal",
    "LevelOrderTraversal",
    "DONE",
    "Next",
    "create_traversal",
    "SetCollector",
    "InsertCollector",
    "BuildCollector",
    "Instruction",
    "FoldStatus",
    "FoldResult",
    "HALTED",
    "fold",
    "slice_tree",
    "create_collector",
]
