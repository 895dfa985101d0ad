"""Configuration system for TreeSet.

This module defines the knobs that sit around the tree engine: which
traversal order a set walks by default, how collectors gather elements,
how sets are rendered, and whether structural results are verified.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, List


class TraversalStrategy(Enum):
    """Order in which a traversal visits the elements of a tree.

    The values keep the historical names of the three orders. LEVEL_ORDER
    used to be called "depthfirst" even though it walks the tree level by
    level.
    """
    ASCENDING = "preorder"       # Smallest element first
    DESCENDING = "postorder"     # Largest element first
    LEVEL_ORDER = "depthfirst"   # Root, then each level left to right


class CollectMode(Enum):
    """How a collector turns a stream of elements into a set."""
    INSERT = "insert"   # Insert each element as it arrives
    BUILD = "build"     # Buffer everything, then bulk build once


@dataclass
class RenderConfig:
    """Configuration for the human-readable rendering of a set."""

    name: str = "TreeSet"                          # Wrapper name, as in Name<...>
    formatter: Callable[[Any], str] = str          # Element to text

    def validate(self) -> List[str]:
        errors = []
        if not isinstance(self.name, str):
            errors.append("render name must be a string")
        elif "<" in self.name or ">" in self.name:
            errors.append("render name cannot contain '<' or '>'")
        if not callable(self.formatter):
            errors.append("render formatter must be callable")
        return errors


@dataclass
class TreeSetConfig:
    """Complete configuration shared by a set and every set derived from it.

    Sets produced by insert, delete and the set algebra operations carry
    the configuration of the set the operation was called on.
    """

    # Order used by TreeSet.traverse() when no strategy is given
    strategy: TraversalStrategy = TraversalStrategy.ASCENDING

    # Default collector behaviour for TreeSet.collector()
    collect_mode: CollectMode = CollectMode.INSERT

    # Rendering
    render: RenderConfig = field(default_factory=RenderConfig)

    # Verify order and weight invariants after every structural operation
    check_invariants: bool = False

    @classmethod
    def default(cls) -> 'TreeSetConfig':
        """Create the configuration used when none is given."""
        return cls()

    @classmethod
    def debug(cls) -> 'TreeSetConfig':
        """Create a configuration that verifies every structural result.

        Verification walks the whole tree, turning O(log n) updates into
        O(n) ones. Use it to track down callers that pass unsorted input
        with ``already_sorted=True``.

        Returns:
            TreeSetConfig with invariant checking enabled
        """
        return cls(check_invariants=True)

    def validate(self) -> List[str]:
        """Validate configuration for consistency.

        Returns:
            List of validation errors (empty if valid)
        """
        errors = []

        if not isinstance(self.strategy, TraversalStrategy):
            errors.append(f"strategy must be a TraversalStrategy, got {self.strategy!r}")

        if not isinstance(self.collect_mode, CollectMode):
            errors.append(f"collect_mode must be a CollectMode, got {self.collect_mode!r}")

        if not isinstance(self.render, RenderConfig):
            errors.append("render must be a RenderConfig")
        else:
            errors.extend(self.render.validate())

        return errors
