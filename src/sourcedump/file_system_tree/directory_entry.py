"""Value type describing one entry seen while enumerating a directory."""

from dataclasses import dataclass

HIDDEN_PREFIX = "."


def is_hidden_name(name: str) -> bool:
    """Return True for dot-prefixed names such as ``.git`` or ``.env``.

    Example:
        >>> is_hidden_name(".git")
        True
        >>> is_hidden_name("src")
        False
    """
    return name.startswith(HIDDEN_PREFIX)


@dataclass(frozen=True)
class DirectoryEntry:
    """A filesystem entry that survived hidden-name and exclusion filtering.

    Entries are produced one at a time during traversal and discarded once they
    have been recorded or recursed into; no tree of entries is ever kept.

    Attributes:
        name: Base name of the entry.
        path: Path of the entry, joined onto the directory being enumerated.
        relative_path: Path relative to the traversal root, using ``/`` separators.
        is_dir: True if the entry is a directory (symbolic links are followed).
    """

    name: str
    path: str
    relative_path: str
    is_dir: bool
