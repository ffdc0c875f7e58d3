"""Tab completer for interactive mode.

The completer separates **what to complete** (pure logic, testable)
from **how to wire it** (readline integration in the REPL).

- First word: built-in names plus executables on the search path.
- Later words: file system paths, relative to the working directory
  unless the word starts with ``/``.  Directories get a trailing ``/``.

The ``complete(text, state)`` method is the readline callback.  It
delegates to ``completions(text, line)``.
"""

from __future__ import annotations

import os
import readline
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from msh.shell import Shell


class Completer:
    """Context-aware tab completer for the shell."""

    def __init__(self, shell: Shell) -> None:
        """Create a completer attached to a shell instance."""
        self._shell = shell

    def complete(self, text: str, state: int) -> str | None:
        """Readline callback — return the *state*-th candidate for *text*.

        Args:
            text: The partial word being completed.
            state: Index into the candidate list (0, 1, 2, …).

        Returns:
            The candidate at *state*, or ``None`` when exhausted.

        """
        line = readline.get_line_buffer()
        candidates = self.completions(text, line)
        if state < len(candidates):
            return candidates[state]
        return None

    def completions(self, text: str, line: str) -> list[str]:
        """Return completion candidates based on context.

        Args:
            text: The partial word under the cursor.
            line: The full input line so far.

        Returns:
            Sorted list of matching candidates.

        """
        words = line.lstrip().split()

        # No words yet, or still typing the first word → command completion
        if not words or (len(words) == 1 and not line.endswith((" ", "\t"))):
            return [cmd for cmd in self._shell.command_names if cmd.startswith(text)]

        return self._complete_paths(text)

    @staticmethod
    def _complete_paths(text: str) -> list[str]:
        """Complete file system paths.

        Split the partial path into a directory and a name prefix, list
        the directory, and filter by prefix.
        """
        # Split "foo/ba" into dir="foo/" prefix="ba"
        last_slash = text.rfind("/")
        directory = text[: last_slash + 1]
        prefix = text[last_slash + 1 :]

        try:
            entries = os.listdir(directory or ".")
        except (OSError, ValueError):
            return []

        candidates: list[str] = []
        for entry in entries:
            if not entry.startswith(prefix):
                continue
            if entry.startswith(".") and not prefix.startswith("."):
                continue
            full = f"{directory}{entry}"
            if os.path.isdir(full):
                full += "/"
            candidates.append(full)

        return sorted(candidates)
