"""TreeSet - ordered sets on path-length balanced trees.

TreeSet stores totally ordered elements in an immutable binary search tree
that rotates only when a rotation shortens the total path length. It gives
O(log n) membership with cheap ordered iteration, and linear-time merges
for the set algebra.

Two ways in:
━━━━━━━━━━━━━━━━━━━━━━━━━━
Object style:
    from treeset import TreeSet
    TreeSet([3, 1, 2]) | TreeSet([4])

Functional style:
    from treeset import api
    api.union(api.build([1, 2], already_sorted=True), api.empty())
━━━━━━━━━━━━━━━━━━━━━━━━━━
"""

import logging

__version__ = "0.3.0"

from .config import (
    TraversalStrategy,
    CollectMode,
    RenderConfig,
    TreeSetConfig,
)
from .errors import (
    TreeSetError,
    ConfigurationError,
    OrderingMismatchError,
    InvariantViolationError,
    CollectorClosedError,
)
from .core.traverser import (
    Traversal,
    AscendingTraversal,
    DescendingTraversal,
    LevelOrderTraversal,
    DONE,
    Next,
    create_traversal,
)
from .core.collector import (
    SetCollector,
    InsertCollector,
    BuildCollector,
    Instruction,
    FoldStatus,
    FoldResult,
    HALTED,
)
from .tree_set import TreeSet
from .render import render_tree, render_set
from . import api

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    "__version__",
    # Facade
    "TreeSet",
    "api",
    # Config
    "TraversalStrategy",
    "CollectMode",
    "RenderConfig",
    "TreeSetConfig",
    # Errors
    "TreeSetError",
    "ConfigurationError",
    "OrderingMismatchError",
    "InvariantViolationError",
    "CollectorClosedError",
    # Traversal
    "Traversal",
    "AscendingTraversal",
    "DescendingTraversal",
    "LevelOrderTraversal",
    "DONE",
    "Next",
    "create_traversal",
    # Sequence protocols
    "SetCollector",
    "InsertCollector",
    "BuildCollector",
    "Instruction",
    "FoldStatus",
    "FoldResult",
    "HALTED",
    # Rendering
    "render_tree",
    "render_set",
]
