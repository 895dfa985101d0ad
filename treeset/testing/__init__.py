"""Testing utilities for TreeSet consumers."""

from .fixtures import (
    assert_valid_tree,
    path_length,
    rebuilt_branches,
    rotation_would_help,
    tree_height,
)

__all__ = [
    'assert_valid_tree',
    'path_length',
    'rebuilt_branches',
    'rotation_would_help',
    'tree_height',
]
