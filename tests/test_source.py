"""Tests for the batch input source."""

from pathlib import Path

import pytest

from msh.errors import StartupError
from msh.source import BatchSource


class TestBatchSource:
    """Verify reading a script file."""

    def test_reads_lines_then_none(self, tmp_path: Path) -> None:
        """Lines come back in order with their newlines, then None."""
        script = tmp_path / "script"
        script.write_text("echo a\n\necho b")
        with BatchSource(script) as source:
            assert source.read_line() == "echo a\n"
            assert source.read_line() == "\n"
            assert source.read_line() == "echo b"
            assert source.read_line() is None
            assert source.read_line() is None

    def test_empty_file(self, tmp_path: Path) -> None:
        """An empty script is immediately at end of input."""
        script = tmp_path / "empty"
        script.write_text("")
        with BatchSource(script) as source:
            assert source.read_line() is None

    def test_directory_is_not_a_script(self, tmp_path: Path) -> None:
        """Opening a directory fails at startup."""
        with pytest.raises(StartupError):
            BatchSource(tmp_path)

    def test_close(self, tmp_path: Path) -> None:
        """close() releases the file; reading afterwards fails."""
        script = tmp_path / "script"
        script.write_text("exit\n")
        source = BatchSource(script)
        source.close()
        with pytest.raises(ValueError, match="closed"):
            source.read_line()
