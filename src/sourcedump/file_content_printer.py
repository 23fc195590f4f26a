"""File content printer for the source code section of a dump.

This module selects files by extension and wraps each selected file's text in a
fenced block labelled with its relative path.
"""

import os
from enum import Enum
from pathlib import Path
from typing import Callable, FrozenSet, Iterable, Iterator, Optional

from .types import PathType

FENCE = "```"


class ContentDecision(str, Enum):
    """Outcome reported for each listed file while contents are emitted.

    Values:
        PROCESSED: The file matched a target extension and its content was emitted.
        SKIPPED: The file's extension is not a target; nothing was emitted.
    """

    PROCESSED = "processed"
    SKIPPED = "skipped"


ProgressCallback = Callable[[ContentDecision, str], None]


def normalize_extension(extension: str) -> str:
    """Lowercase an extension and give it a leading dot.

    Example:
        >>> normalize_extension("PY")
        '.py'
        >>> normalize_extension(".Md")
        '.md'
    """
    extension = extension.lower()
    return extension if extension.startswith(".") else f".{extension}"


def is_target_file(path: PathType, target_extensions: Iterable[str]) -> bool:
    """Check whether a path's lowercased extension is one of the targets.

    Args:
        path: File path; only its final suffix is considered.
        target_extensions: Extensions including the leading dot, in lower case.

    Returns:
        bool: True if the extension is a target.

    Example:
        >>> is_target_file("src/App.TS", {".ts"})
        True
        >>> is_target_file("Makefile", {".ts"})
        False
    """
    return os.path.splitext(os.fspath(path))[1].lower() in target_extensions


class FileContentPrinter:
    """Streams fenced file contents for the files of a traversal.

    Each target file is emitted as::

        ```file:<relative path>
        <content>
        ```

    followed by a blank line. Files are read whole, as text, with line endings
    preserved exactly as stored.

    Attributes:
        root_path (Path): Directory the relative paths are resolved against.
        target_extensions (FrozenSet[str]): Normalized target extensions.
        encoding (str): The encoding to use when reading files.
        errors (str): How to handle decode errors when reading files.

    Example:
        >>> printer = FileContentPrinter(".", ["py"])
        >>> printer.format_start("pkg/mod.py")
        '```file:pkg/mod.py\\n'
        >>> printer.is_target("pkg/mod.py"), printer.is_target("README.md")
        (True, False)
    """

    def __init__(
        self,
        root_path: PathType,
        target_extensions: Iterable[str] = (),
        encoding: str = "utf-8",
        errors: str = "replace",
    ) -> None:
        """Initialize the FileContentPrinter.

        Args:
            root_path: Directory the relative paths are resolved against.
            target_extensions: Extensions whose files are emitted, with or without a
                leading dot, in any case.
            encoding: The encoding to use when reading files. Defaults to "utf-8".
            errors: One of "strict", "ignore" or "replace". Defaults to "replace".

        Raises:
            ValueError: If errors is not one of "strict", "ignore", or "replace".
            LookupError: If the specified encoding is not available.
        """
        if errors not in ("strict", "ignore", "replace"):
            raise ValueError(f"Invalid error handler '{errors}'. Must be one of: strict, ignore, replace")

        # Validate encoding early to fail fast
        try:
            "test".encode(encoding).decode(encoding)
        except LookupError as e:
            raise LookupError(f"Encoding '{encoding}' is not available") from e

        self.root_path = Path(root_path)
        self.target_extensions: FrozenSet[str] = frozenset(normalize_extension(e) for e in target_extensions)
        self.encoding = encoding
        self.errors = errors

    def is_target(self, relative_path: str) -> bool:
        return is_target_file(relative_path, self.target_extensions)

    def format_start(self, relative_path: str) -> str:
        return f"{FENCE}file:{relative_path}\n"

    def format_end(self) -> str:
        return f"\n{FENCE}\n\n"

    def read_content(self, relative_path: str) -> str:
        """Read a file's full text.

        Raises:
            OSError: If the file cannot be read.
            UnicodeDecodeError: If errors is "strict" and the file cannot be decoded.
        """
        with open(self.root_path / relative_path, "r", encoding=self.encoding, errors=self.errors, newline="") as f:
            return f.read()

    def yield_file_contents(self, files: Iterable[str], progress: Optional[ProgressCallback] = None) -> Iterator[str]:
        """Yield fenced blocks for every target file in ``files``.

        Args:
            files: Relative file paths, in the order they should appear.
            progress: Optional callback receiving a ContentDecision and the relative
                path once each file has been handled.

        Yields:
            Output fragments: the opening fence, the content, the closing fence.
        """
        for relative_path in files:
            if not self.is_target(relative_path):
                if progress is not None:
                    progress(ContentDecision.SKIPPED, relative_path)
                continue

            yield self.format_start(relative_path)
            yield self.read_content(relative_path)
            yield self.format_end()
            if progress is not None:
                progress(ContentDecision.PROCESSED, relative_path)
