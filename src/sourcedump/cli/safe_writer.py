"""Interrupt-aware output writing for the sourcedump CLI."""

import errno
import os
import types
from typing import Optional, Type, Union

from sourcedump.cli.signal_handler import interrupt_monitor
from sourcedump.types import PathType


class SafeWriter:
    """Writes UTF-8 text to a file descriptor, stopping cleanly on interruption.

    A path target is created or truncated when the writer is constructed, and the
    descriptor is closed again by :meth:`close`. An integer target (such as
    ``sys.stdout.fileno()``) is written to but never closed.

    Attributes:
        target: The path or file descriptor given at construction.
        fd: The file descriptor being written to.
    """

    def __init__(self, target: Union[int, PathType]) -> None:
        """Initialize the writer.

        Args:
            target: A file descriptor, or a path to create or truncate.

        Raises:
            TypeError: If target is neither an int nor path-like.
            OSError: If the output file cannot be opened.
        """
        self.target = target
        self._closed = False

        if isinstance(target, int):
            self.fd = target
            self._owns_fd = False
        elif isinstance(target, (str, os.PathLike)):
            self.fd = os.open(target, os.O_WRONLY | os.O_CREAT | os.O_TRUNC, 0o666)
            self._owns_fd = True
        else:
            raise TypeError(f"Expected int, str, or PathLike, got {type(target).__name__}")

    @property
    def closed(self) -> bool:
        return self._closed

    def write(self, data: str) -> None:
        """Write all of ``data``, retrying after partial writes.

        Raises:
            BrokenPipeError: If an interruption was recorded or the pipe is broken.
            OSError: If any other I/O error occurs.
            ValueError: If the writer has been closed.
        """
        if self._closed:
            raise ValueError("Cannot write to closed SafeWriter")

        if interrupt_monitor.interrupted:
            raise BrokenPipeError()

        view = memoryview(data.encode("utf-8"))
        try:
            while view:
                written = os.write(self.fd, view)
                view = view[written:]
        except OSError as e:
            if e.errno == errno.EPIPE:
                raise BrokenPipeError() from e
            raise

    def close(self) -> None:
        """Close the descriptor if this writer opened it. Safe to call twice."""
        if self._closed:
            return

        self._closed = True
        if self._owns_fd:
            try:
                os.close(self.fd)
            except OSError as e:
                if e.errno != errno.EPIPE:
                    raise

    def __enter__(self) -> "SafeWriter":
        return self

    def __exit__(
        self,
        exc_type: Optional[Type[BaseException]],
        exc_val: Optional[BaseException],
        exc_tb: Optional[types.TracebackType],
    ) -> None:
        try:
            self.close()
        except OSError:
            # An exception from the with block takes precedence over a close failure
            if exc_type is None:
                raise
