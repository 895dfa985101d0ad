"""Human-readable rendering of trees and sets.

A branch renders as ``(<left><element><right>)`` and an empty subtree as
nothing, so the set built from 1..7 renders as
``TreeSet<(((1)2(3))4((5)6(7)))>``.
"""

from typing import TYPE_CHECKING, Any, Callable, List, Union

from .core.node import Tree

if TYPE_CHECKING:
    from .tree_set import TreeSet


def render_tree(root: Tree, formatter: Callable[[Any], str] = str) -> str:
    """Render a tree without the set wrapper.

    Uses an explicit stack, so degenerate (deep) trees render without
    hitting the recursion limit.

    Args:
        root: Tree to render
        formatter: Converts each element to text

    Returns:
        Rendering of the tree ("" for an empty tree)
    """
    parts: List[str] = []
    # Pending work: literal text or a subtree still to expand
    stack: List[Union[str, Tree]] = [root]

    while stack:
        item = stack.pop()
        if item is None:
            continue
        if isinstance(item, str):
            parts.append(item)
            continue
        # Pushed in reverse so they pop in reading order
        stack.append(")")
        stack.append(item.right)
        stack.append(str(formatter(item.element)))
        stack.append(item.left)
        stack.append("(")

    return "".join(parts)


def render_set(tree_set: "TreeSet") -> str:
    """Render a set as ``Name<tree>`` using its RenderConfig."""
    render = tree_set.config.render
    return f"{render.name}<{render_tree(tree_set.root, render.formatter)}>"
