"""Dump a source tree into a single text document.

This package walks a directory, filters entries through simple ignore rules,
and produces a file listing, an indented directory tree, and the concatenated
contents of files with selected extensions.
"""

from importlib.metadata import PackageNotFoundError, version

from sourcedump.exclusion_rules.ignore_rules import IgnoreRuleSet, build_ignore_rule_set
from sourcedump.file_system_tree.tree_walker import TreeWalker, generate_tree, list_files

# Expose the version for both programmatic use and CLI
try:
    __version__ = version("sourcedump")
except PackageNotFoundError:
    __version__ = "unknown"

__all__ = [
    "IgnoreRuleSet",
    "TreeWalker",
    "build_ignore_rule_set",
    "generate_tree",
    "list_files",
]
