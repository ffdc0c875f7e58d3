"""Input sources — where the next command line comes from.

The loop only needs "the next raw line, or None at end of input".
Two sources provide that:

- ``InteractiveSource`` prompts before every read.  By default it reads
  with ``input()``, which picks up readline line editing and completion
  when ``readline`` is loaded.
- ``BatchSource`` reads a script file line by line with no prompt.

The two are chosen once at startup and never mixed.
"""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path
from typing import TYPE_CHECKING, Protocol, Self, TextIO

from msh.errors import StartupError

if TYPE_CHECKING:
    from types import TracebackType


class LineSource(Protocol):
    """Anything that yields raw command lines."""

    def read_line(self) -> str | None:
        """Return the next raw line, or None at end of input."""
        ...


class InteractiveSource:
    """Read lines from the terminal, prompting before each one."""

    def __init__(self, *, prompt: str, reader: Callable[[str], str] = input) -> None:
        """Create an interactive source.

        Args:
            prompt: Text shown before every read.
            reader: Callable that shows the prompt and returns one line,
                raising ``EOFError`` at end of input.

        """
        self._prompt = prompt
        self._reader = reader

    def read_line(self) -> str | None:
        """Prompt and read one line; None on Ctrl+D / end of input."""
        try:
            return self._reader(self._prompt)
        except EOFError:
            return None


class BatchSource:
    """Read lines from a script file, without prompting."""

    def __init__(self, path: str | Path) -> None:
        """Open *path* read-only.

        Raises:
            StartupError: If the file cannot be opened.

        """
        self._path = Path(path)
        try:
            self._handle: TextIO = self._path.open(encoding="utf-8", errors="replace")
        except OSError as e:
            msg = f"cannot open batch file {self._path}: {e.strerror}"
            raise StartupError(msg) from e

    @property
    def path(self) -> Path:
        """Return the script path."""
        return self._path

    def read_line(self) -> str | None:
        """Return the next line of the script, or None at end of file."""
        line = self._handle.readline()
        return line if line else None

    def close(self) -> None:
        """Close the script file."""
        self._handle.close()

    def __enter__(self) -> Self:
        """Return the source itself."""
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        """Close the script file."""
        self.close()
