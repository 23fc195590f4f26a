"""Source dump assembly with streaming support.

This module combines the ignore rules, the tree walker and the content printer
into the three-section document written by the command-line tool:

    ## Find Output
    <one relative file path per line>

    ## Directory Tree
    <indented tree>

    ## Source Code
    <fenced contents of files with target extensions>
"""

from pathlib import Path
from typing import Iterable, Iterator, List, Optional

from sourcedump.exclusion_rules.ignore_rules import IgnoreRuleSet, build_ignore_rule_set
from sourcedump.file_content_printer import FileContentPrinter, ProgressCallback
from sourcedump.file_system_tree.tree_walker import TreeWalker
from sourcedump.types import PathType

FILE_LIST_HEADER = "## Find Output\n"
TREE_HEADER = "\n## Directory Tree\n"
CONTENTS_HEADER = "\n## Source Code\n"


class StreamingSourceDump:
    """Streaming producer of a source dump document.

    Each section is produced by its own generator so output can be written as it
    is generated. The file list is computed once, on first use, and reused for the
    source code section; the tree is rendered by a separate traversal with the same
    rules.

    Streaming properties:
    - Each section can only be streamed once
    - Any filesystem error aborts the stream that hit it and propagates unchanged

    Attributes:
        directory (Path): The traversal root.
        rule_set (IgnoreRuleSet): Rules built from the root's .gitignore and the
            caller's exclude patterns.

    Example:
        >>> import tempfile
        >>> with tempfile.TemporaryDirectory() as tmpdir:
        ...     _ = (Path(tmpdir) / "main.py").write_text("print(1)")
        ...     dump = StreamingSourceDump(tmpdir, target_extensions=["py"])
        ...     text = "".join(dump.stream_file_list())
        ...     text += "".join(dump.stream_tree())
        ...     text += "".join(dump.stream_contents())
        >>> print(text, end="")
        ## Find Output
        main.py
        <BLANKLINE>
        ## Directory Tree
        - main.py
        <BLANKLINE>
        ## Source Code
        ```file:main.py
        print(1)
        ```
        <BLANKLINE>
    """

    def __init__(
        self,
        directory: PathType,
        *,
        target_extensions: Iterable[str] = (),
        exclude_patterns: Iterable[str] = (),
        encoding: str = "utf-8",
        errors: str = "replace",
    ) -> None:
        """Initialize a source dump for a directory.

        Args:
            directory: Directory to process. Can be any path-like object.
            target_extensions: Extensions whose file contents are included.
            exclude_patterns: Extra ignore patterns, appended after those read from
                the directory's .gitignore.
            encoding: The encoding to use when reading files.
            errors: How to handle decode errors when reading files.

        Raises:
            ValueError: If directory is not a directory or errors is invalid.
            LookupError: If the encoding is not available.
            OSError: If the directory's .gitignore exists but cannot be read.
        """
        self.directory = Path(directory)
        if not self.directory.is_dir():
            raise ValueError(f"'{directory}' is not a valid directory")

        self.rule_set: IgnoreRuleSet = build_ignore_rule_set(self.directory, exclude_patterns)
        self._walker = TreeWalker(self.directory, self.rule_set)
        self._content_printer = FileContentPrinter(
            self.directory, target_extensions, encoding=encoding, errors=errors
        )

        self._files: Optional[List[str]] = None
        self._file_list_complete = False
        self._tree_complete = False
        self._contents_complete = False

    @property
    def files(self) -> List[str]:
        """Relative paths of all listed files, computed on first access."""
        if self._files is None:
            self._files = self._walker.list_files()
        return self._files

    @property
    def streaming_complete(self) -> bool:
        return self._file_list_complete and self._tree_complete and self._contents_complete

    def stream_file_list(self) -> Iterator[str]:
        """Stream the file listing section.

        Raises:
            RuntimeError: If the file list has already been streamed.
            OSError: If the traversal fails.
        """
        if self._file_list_complete:
            raise RuntimeError("File list has already been streamed")

        yield FILE_LIST_HEADER
        for relative_path in self.files:
            yield f"{relative_path}\n"
        self._file_list_complete = True

    def stream_tree(self) -> Iterator[str]:
        """Stream the directory tree section line by line.

        Raises:
            RuntimeError: If the tree has already been streamed.
            OSError: If the traversal fails.
        """
        if self._tree_complete:
            raise RuntimeError("Tree has already been streamed")

        yield TREE_HEADER
        yield from self._walker.stream_tree()
        self._tree_complete = True

    def stream_contents(self, progress: Optional[ProgressCallback] = None) -> Iterator[str]:
        """Stream the source code section.

        Args:
            progress: Optional callback told about every listed file, whether its
                content was emitted or skipped for its extension.

        Raises:
            RuntimeError: If contents have already been streamed.
            OSError: If the traversal or a file read fails.
        """
        if self._contents_complete:
            raise RuntimeError("Contents have already been streamed")

        yield CONTENTS_HEADER
        yield from self._content_printer.yield_file_contents(self.files, progress)
        self._contents_complete = True

    def stream(self, progress: Optional[ProgressCallback] = None) -> Iterator[str]:
        """Stream all three sections in document order."""
        yield from self.stream_file_list()
        yield from self.stream_tree()
        yield from self.stream_contents(progress)


class SourceDump(StreamingSourceDump):
    """Source dump that builds the whole document during initialization.

    Memory Usage Note:
        The complete document, including every emitted file's content, is held in
        memory. Use StreamingSourceDump to write large dumps incrementally.

    Example:
        >>> import tempfile
        >>> with tempfile.TemporaryDirectory() as tmpdir:
        ...     _ = (Path(tmpdir) / "notes.txt").write_text("hi")
        ...     dump = SourceDump(tmpdir)
        >>> dump.document.splitlines()[:2]
        ['## Find Output', 'notes.txt']
    """

    def __init__(
        self,
        directory: PathType,
        *,
        target_extensions: Iterable[str] = (),
        exclude_patterns: Iterable[str] = (),
        encoding: str = "utf-8",
        errors: str = "replace",
        progress: Optional[ProgressCallback] = None,
    ) -> None:
        super().__init__(
            directory,
            target_extensions=target_extensions,
            exclude_patterns=exclude_patterns,
            encoding=encoding,
            errors=errors,
        )
        self._document = "".join(self.stream(progress))

    @property
    def document(self) -> str:
        return self._document
