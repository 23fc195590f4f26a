"""Unit tests for the SafeWriter class in the sourcedump CLI."""

import errno
import os
from unittest.mock import MagicMock, patch

import pytest

from sourcedump.cli.safe_writer import SafeWriter


@pytest.fixture
def mock_monitor():
    """Replace the interrupt monitor seen by SafeWriter."""
    with patch("sourcedump.cli.safe_writer.interrupt_monitor") as mock:
        mock.interrupted = False
        yield mock


def test_safe_writer_init_with_fd():
    writer = SafeWriter(3)

    assert writer.target == 3
    assert writer.fd == 3
    assert not writer._owns_fd
    assert not writer.closed


def test_safe_writer_init_with_path(tmp_path):
    output = tmp_path / "out.md"
    writer = SafeWriter(output)
    try:
        assert writer.target == output
        assert writer._owns_fd
        assert output.exists()
    finally:
        writer.close()


def test_safe_writer_init_with_path_string(tmp_path):
    with SafeWriter(str(tmp_path / "out.md")) as writer:
        writer.write("x")
    assert (tmp_path / "out.md").read_text() == "x"


def test_safe_writer_init_with_invalid_type():
    with pytest.raises(TypeError) as excinfo:
        SafeWriter(42.0)  # type: ignore[arg-type]

    assert "Expected int, str, or PathLike" in str(excinfo.value)


def test_safe_writer_init_missing_directory(tmp_path):
    with pytest.raises(FileNotFoundError):
        SafeWriter(tmp_path / "missing" / "out.md")


def test_safe_writer_truncates_existing_file(tmp_path):
    output = tmp_path / "out.md"
    output.write_text("old content that is longer")
    with SafeWriter(output) as writer:
        writer.write("new")
    assert output.read_text() == "new"


def test_safe_writer_write(mock_monitor):
    with patch("os.write", return_value=9) as mock_write:
        writer = SafeWriter(3)
        writer.write("test data")

        assert mock_write.call_count == 1
        fd, data = mock_write.call_args[0]
        assert fd == 3
        assert bytes(data) == b"test data"


def test_safe_writer_write_encodes_utf8(tmp_path):
    output = tmp_path / "out.md"
    with SafeWriter(output) as writer:
        writer.write("café ✓\n")
    assert output.read_bytes() == "café ✓\n".encode("utf-8")


def test_safe_writer_does_not_translate_newlines(tmp_path):
    output = tmp_path / "out.md"
    with SafeWriter(output) as writer:
        writer.write("a\r\nb\n")
    assert output.read_bytes() == b"a\r\nb\n"


def test_safe_writer_retries_partial_writes(mock_monitor):
    chunks = []

    def partial_write(fd, data):
        chunks.append(bytes(data[:4]))
        return min(4, len(data))

    with patch("os.write", side_effect=partial_write):
        SafeWriter(3).write("0123456789")

    assert b"".join(chunks) == b"0123456789"
    assert len(chunks) == 3


def test_safe_writer_write_after_close():
    writer = SafeWriter(3)
    writer.close()

    with pytest.raises(ValueError) as excinfo:
        writer.write("test data")

    assert "Cannot write to closed SafeWriter" in str(excinfo.value)


def test_safe_writer_write_after_interruption(mock_monitor):
    mock_monitor.interrupted = True

    with patch("os.write") as mock_write:
        with pytest.raises(BrokenPipeError):
            SafeWriter(3).write("test data")
        mock_write.assert_not_called()


def test_safe_writer_write_with_os_error(mock_monitor):
    with patch("os.write", side_effect=OSError(errno.EIO, "Input/output error")):
        with pytest.raises(OSError) as excinfo:
            SafeWriter(3).write("test data")

    assert excinfo.value.errno == errno.EIO


def test_safe_writer_write_with_epipe(mock_monitor):
    with patch("os.write", side_effect=OSError(errno.EPIPE, "Broken pipe")):
        with pytest.raises(BrokenPipeError):
            SafeWriter(3).write("test data")


def test_safe_writer_close_fd_only():
    with patch("os.close") as mock_close:
        writer = SafeWriter(3)
        writer.close()

        mock_close.assert_not_called()
        assert writer.closed


def test_safe_writer_close_twice(tmp_path):
    writer = SafeWriter(tmp_path / "out.md")
    with patch("os.close", wraps=os.close) as mock_close:
        writer.close()
        writer.close()

    mock_close.assert_called_once_with(writer.fd)
    assert writer.closed


def test_safe_writer_close_ignores_epipe(tmp_path):
    writer = SafeWriter(tmp_path / "out.md")
    fd = writer.fd
    try:
        with patch("os.close", side_effect=OSError(errno.EPIPE, "Broken pipe")):
            writer.close()
        assert writer.closed
    finally:
        os.close(fd)


def test_safe_writer_close_reraises_other_errors(tmp_path):
    writer = SafeWriter(tmp_path / "out.md")
    fd = writer.fd
    try:
        with patch("os.close", side_effect=OSError(errno.EIO, "Input/output error")):
            with pytest.raises(OSError):
                writer.close()
    finally:
        os.close(fd)


def test_context_manager_prefers_original_exception(tmp_path):
    writer = SafeWriter(tmp_path / "out.md")
    fd = writer.fd
    try:
        with patch("os.close", side_effect=OSError(errno.EIO, "Input/output error")):
            with pytest.raises(RuntimeError, match="boom"):
                with writer:
                    raise RuntimeError("boom")
    finally:
        os.close(fd)


def test_context_manager_closes(tmp_path):
    mock_close = MagicMock()
    with patch("os.close", mock_close):
        with SafeWriter(tmp_path / "out.md") as writer:
            fd = writer.fd
    mock_close.assert_called_once_with(fd)
    os.close(fd)
