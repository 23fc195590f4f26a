"""Recursive, ignore-aware directory traversal.

This module provides the TreeWalker class, which produces both a flat list of
root-relative file paths and an indented tree rendering for a directory. Both
outputs are built by separate traversals that apply the same filtering, so a
path is either present in both or in neither.
"""

import os
import stat
from dataclasses import dataclass
from typing import Iterator, List, Optional, Tuple

from pathspec.util import normalize_file

from sourcedump.exclusion_rules.base_rules import BaseExclusionRules
from sourcedump.file_system_tree.directory_entry import DirectoryEntry, is_hidden_name
from sourcedump.types import PathType

INDENT_UNIT = "  "
ENTRY_MARKER = "- "


@dataclass(frozen=True)
class TraversalResult:
    """Outputs of a complete traversal.

    Attributes:
        files: Root-relative file paths, in traversal order.
        tree: The rendered tree, one line per file or directory.
    """

    files: Tuple[str, ...]
    tree: str


class TreeWalker:
    """Depth-first walker that filters hidden and excluded entries.

    Children are visited in the order ``os.listdir`` returns them; nothing is
    sorted. An entry whose name starts with ``.`` is skipped before the exclusion
    rules are consulted. An entry matched by the rules is skipped together with
    its whole subtree, since the walker only recurses into directories that pass
    both checks.

    Filesystem errors (unreadable directories, entries vanishing mid-walk,
    dangling symbolic links) are not caught. They propagate to the caller and
    abort the traversal.

    Attributes:
        root_path (str): The traversal root. Relative paths are computed against it.
        rule_set (Optional[BaseExclusionRules]): Rules for excluding entries.

    Example:
        >>> import tempfile
        >>> from pathlib import Path
        >>> from sourcedump.exclusion_rules.ignore_rules import IgnoreRuleSet
        >>> with tempfile.TemporaryDirectory() as tmpdir:
        ...     _ = (Path(tmpdir) / "src").mkdir()
        ...     _ = (Path(tmpdir) / "src" / "a.txt").write_text("a")
        ...     _ = (Path(tmpdir) / "src" / ".hidden").write_text("h")
        ...     _ = (Path(tmpdir) / "node_modules").mkdir()
        ...     _ = (Path(tmpdir) / "node_modules" / "x.js").write_text("x")
        ...     walker = TreeWalker(tmpdir, IgnoreRuleSet(["node_modules"]))
        ...     files = walker.list_files()
        ...     tree = walker.generate_tree()
        >>> files
        ['src/a.txt']
        >>> print(tree, end="")
        - src
          - a.txt
    """

    def __init__(self, root_path: PathType, rule_set: Optional[BaseExclusionRules] = None) -> None:
        self.root_path = os.fspath(root_path)
        self.rule_set = rule_set

    def relative_path(self, path: PathType) -> str:
        """Return ``path`` relative to the root, always with ``/`` separators."""
        return normalize_file(os.path.relpath(path, self.root_path))

    def scan(self, directory: Optional[PathType] = None) -> Iterator[DirectoryEntry]:
        """Yield the visible, non-excluded children of one directory.

        Args:
            directory: Directory to enumerate. Defaults to the root.

        Yields:
            DirectoryEntry for each child that is neither hidden nor excluded.

        Raises:
            OSError: If the directory cannot be listed or a child cannot be stat'ed.
        """
        directory = self.root_path if directory is None else os.fspath(directory)
        for name in os.listdir(directory):
            if is_hidden_name(name):
                continue
            path = os.path.join(directory, name)
            relative_path = self.relative_path(path)
            if self.rule_set is not None and self.rule_set.exclude(relative_path):
                continue
            is_dir = stat.S_ISDIR(os.stat(path).st_mode)
            yield DirectoryEntry(name=name, path=path, relative_path=relative_path, is_dir=is_dir)

    def iterate_files(self, directory: Optional[PathType] = None) -> Iterator[str]:
        """Yield root-relative paths of all files below ``directory``.

        Args:
            directory: Directory to start from. Defaults to the root.

        Yields:
            Relative file paths, depth-first, in directory-read order.
        """
        for entry in self.scan(directory):
            if entry.is_dir:
                yield from self.iterate_files(entry.path)
            else:
                yield entry.relative_path

    def list_files(self, directory: Optional[PathType] = None) -> List[str]:
        return list(self.iterate_files(directory))

    def stream_tree(self, directory: Optional[PathType] = None, depth: int = 0) -> Iterator[str]:
        """Generate the tree rendering one line at a time.

        Each line is ``depth`` two-space indents, ``"- "``, the entry's base name
        and a newline. A directory's children follow its own line directly, one
        level deeper, before its next sibling.

        Args:
            directory: Directory to render. Defaults to the root.
            depth: Indentation level of the directory's children.

        Yields:
            Newline-terminated lines of the tree rendering.

        Raises:
            ValueError: If depth is negative.
        """
        if depth < 0:
            raise ValueError(f"depth must be non-negative, got {depth}")
        for entry in self.scan(directory):
            yield f"{INDENT_UNIT * depth}{ENTRY_MARKER}{entry.name}\n"
            if entry.is_dir:
                yield from self.stream_tree(entry.path, depth + 1)

    def generate_tree(self, directory: Optional[PathType] = None, depth: int = 0) -> str:
        return "".join(self.stream_tree(directory, depth))

    def walk(self) -> TraversalResult:
        """Run both traversals over the root and return their outputs."""
        return TraversalResult(files=tuple(self.list_files()), tree=self.generate_tree())


def list_files(directory: PathType, root_dir: PathType, rule_set: Optional[BaseExclusionRules]) -> List[str]:
    """List files below ``directory`` as paths relative to ``root_dir``.

    Args:
        directory: Directory to start from, usually the root itself.
        root_dir: The traversal root.
        rule_set: Exclusion rules applied to every root-relative path.

    Returns:
        Relative file paths in traversal order.
    """
    return TreeWalker(root_dir, rule_set).list_files(directory)


def generate_tree(
    directory: PathType, depth: int, root_dir: PathType, rule_set: Optional[BaseExclusionRules]
) -> str:
    """Render the tree below ``directory``, starting at indentation ``depth``.

    Args:
        directory: Directory to render, usually the root itself.
        depth: Indentation level for the directory's children.
        root_dir: The traversal root.
        rule_set: Exclusion rules applied to every root-relative path.

    Returns:
        The rendered tree text.
    """
    return TreeWalker(root_dir, rule_set).generate_tree(directory, depth)
