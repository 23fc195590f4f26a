"""Ignore rules combining a root's .gitignore with caller-supplied patterns.

The pattern language is intentionally small. A pattern excludes a relative path
when it equals the path, when it is a literal prefix of the path, or when it is
found anywhere in the path as a regular expression. There is no negation, no
``**`` handling and no anchoring apart from dropping a single leading ``/`` from
lines read out of the ignore file.
"""

import re
from pathlib import Path
from typing import Iterable, List, Optional, Tuple

from sourcedump.types import PathType

from .base_rules import BaseExclusionRules

IGNORE_FILE_NAME = ".gitignore"

# Only "\n" and "\r\n" end a line; a lone "\r" stays part of the pattern.
_LINE_BREAK = re.compile(r"\r?\n")


def _compile(pattern: str) -> Optional[re.Pattern[str]]:
    try:
        return re.compile(pattern)
    except re.error:
        return None


def parse_ignore_lines(text: str) -> List[str]:
    """Extract patterns from the text of an ignore file.

    Blank lines and lines starting with ``#`` are dropped. A line starting with
    ``/`` loses exactly that one character. Nothing else is trimmed, so trailing
    whitespace remains part of the pattern.

    Args:
        text: Raw contents of the ignore file.

    Returns:
        The patterns in file order.

    Example:
        >>> parse_ignore_lines("# deps\\nnode_modules\\n\\n/build\\r\\n")
        ['node_modules', 'build']
    """
    patterns: List[str] = []
    for line in _LINE_BREAK.split(text):
        if not line or line.startswith("#"):
            continue
        patterns.append(line[1:] if line.startswith("/") else line)
    return patterns


def read_ignore_file(root_dir: PathType) -> Optional[str]:
    """Read ``<root_dir>/.gitignore`` if it exists.

    Line endings are left untouched so that :func:`parse_ignore_lines` sees the
    file exactly as written.

    Args:
        root_dir: The traversal root.

    Returns:
        The file's text, or None when there is no ignore file.

    Raises:
        OSError: If the ignore file exists but cannot be read.
    """
    path = Path(root_dir) / IGNORE_FILE_NAME
    if not path.exists():
        return None
    with open(path, "r", encoding="utf-8", errors="replace", newline="") as f:
        return f.read()


class IgnoreRuleSet(BaseExclusionRules):
    """An immutable, ordered collection of ignore patterns.

    Every pattern is compiled as a regular expression once, when the set is
    created. A pattern that is not a valid regular expression is remembered as
    such and only ever takes part in the exact and prefix checks.

    Attributes:
        patterns (Tuple[str, ...]): The patterns in insertion order.

    Example:
        >>> rules = IgnoreRuleSet(["node_modules", r"\\.log$", "[unclosed"])
        >>> rules.matches("node_modules/x.js")
        True
        >>> rules.matches("logs/app.log")
        True
        >>> rules.matches("[unclosed/file.txt")
        True
        >>> rules.matches("src/main.py")
        False
        >>> rules.invalid_patterns
        ('[unclosed',)
    """

    def __init__(self, patterns: Iterable[str] = ()) -> None:
        self._patterns: Tuple[str, ...] = tuple(patterns)
        self._compiled: Tuple[Optional[re.Pattern[str]], ...] = tuple(_compile(p) for p in self._patterns)

    @property
    def patterns(self) -> Tuple[str, ...]:
        return self._patterns

    @property
    def invalid_patterns(self) -> Tuple[str, ...]:
        """Patterns that could not be compiled as regular expressions."""
        return tuple(p for p, regex in zip(self._patterns, self._compiled) if regex is None)

    def matches(self, relative_path: str) -> bool:
        """Check whether any pattern excludes a root-relative path.

        Args:
            relative_path: Path relative to the traversal root, with ``/`` separators.

        Returns:
            bool: True if some pattern equals the path, is a prefix of it, or matches
                somewhere inside it as a regular expression.
        """
        for pattern, regex in zip(self._patterns, self._compiled):
            if relative_path == pattern or relative_path.startswith(pattern):
                return True
            if regex is not None and regex.search(relative_path) is not None:
                return True
        return False

    def exclude(self, path: str) -> bool:
        return self.matches(path)

    def __len__(self) -> int:
        return len(self._patterns)

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({list(self._patterns)!r})"


def build_ignore_rule_set(root_dir: PathType, caller_patterns: Iterable[str] = ()) -> IgnoreRuleSet:
    """Build the rule set used for one traversal root.

    Patterns from ``<root_dir>/.gitignore`` come first, followed by
    ``caller_patterns`` exactly as given. A missing ignore file contributes nothing.

    Args:
        root_dir: The traversal root whose ignore file should be read.
        caller_patterns: Additional patterns, appended without any transformation.

    Returns:
        IgnoreRuleSet: The combined, read-only rule set.

    Raises:
        OSError: If the ignore file exists but cannot be read.

    Example:
        >>> import tempfile
        >>> with tempfile.TemporaryDirectory() as tmpdir:
        ...     _ = (Path(tmpdir) / ".gitignore").write_text("# cache\\n/build\\n")
        ...     rules = build_ignore_rule_set(tmpdir, ["dist"])
        >>> rules.patterns
        ('build', 'dist')
    """
    content = read_ignore_file(root_dir)
    patterns = parse_ignore_lines(content) if content is not None else []
    patterns.extend(caller_patterns)
    return IgnoreRuleSet(patterns)
