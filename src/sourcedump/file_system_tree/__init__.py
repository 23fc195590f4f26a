"""Ignore-aware directory traversal.

This package provides the walker that lists files and renders an indented tree
for a directory, skipping hidden entries and anything matched by exclusion rules.
"""

from .directory_entry import DirectoryEntry, is_hidden_name
from .tree_walker import TraversalResult, TreeWalker, generate_tree, list_files

__all__ = [
    "DirectoryEntry",
    "TraversalResult",
    "TreeWalker",
    "generate_tree",
    "is_hidden_name",
    "list_files",
]
