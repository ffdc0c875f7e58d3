"""Built-in commands — handled by the shell itself, never by a child.

Only three names are built in, matched exactly and case-sensitively:

- ``exit`` / ``quit`` — stop the shell.  Valid only with no arguments.
- ``cd PATH`` — change the shell's working directory.  Valid only with
  exactly one argument.

A built-in called with the wrong number of arguments raises
``BuiltinUsageError`` and changes nothing.  ``cd`` on a bad path raises
``ChangeDirectoryError`` and leaves the directory unchanged.

The working directory is process-wide state: every child inherits it.
``WorkingDirectory`` makes that state explicit.  The shell creates one,
hands it to the built-ins (the only code that changes it) and to the
executor (which only reads it).
"""

from __future__ import annotations

import os
from collections.abc import Callable
from enum import StrEnum
from typing import TYPE_CHECKING, TypeAlias

from msh.errors import BuiltinUsageError, ChangeDirectoryError
from msh.logging import Logger, LogLevel

if TYPE_CHECKING:
    from msh.tokenizer import TokenSequence

_SOURCE = "builtins"

_EXIT_TOKENS = 1
_CD_TOKENS = 2


class BuiltinResult(StrEnum):
    """What the loop should do after a built-in finishes."""

    CONTINUE = "continue"
    EXIT = "exit"


_Handler: TypeAlias = "Callable[[TokenSequence], BuiltinResult]"


class WorkingDirectory:
    """The shell's current working directory."""

    @property
    def path(self) -> str:
        """Return the absolute path of the current directory."""
        return os.getcwd()

    def change(self, path: str) -> None:
        """Change the process working directory to *path*.

        Raises:
            ChangeDirectoryError: If the path is missing, not a directory,
                or not accessible.  The directory is left unchanged.

        """
        try:
            os.chdir(path)
        except (OSError, ValueError) as e:
            msg = f"cd {path!r}: {e}"
            raise ChangeDirectoryError(msg) from e


class Builtins:
    """Dispatch table for the shell's built-in commands."""

    def __init__(self, *, cwd: WorkingDirectory, logger: Logger) -> None:
        """Create the built-in table.

        Args:
            cwd: The working-directory state ``cd`` mutates.
            logger: Audit log for built-in activity.

        """
        self._cwd = cwd
        self._logger = logger
        self._commands: dict[str, _Handler] = {
            "exit": self._cmd_exit,
            "quit": self._cmd_exit,
            "cd": self._cmd_cd,
        }

    @property
    def names(self) -> list[str]:
        """Return the built-in command names, sorted."""
        return sorted(self._commands)

    def is_builtin(self, name: str | None) -> bool:
        """Return True if *name* is exactly a built-in command name."""
        return name in self._commands

    def run(self, tokens: TokenSequence) -> BuiltinResult:
        """Run the built-in named by ``tokens[0]``.

        Raises:
            KeyError: If token 0 is not a built-in.
            BuiltinUsageError: If the argument count is wrong.
            ChangeDirectoryError: If ``cd`` fails.

        """
        handler = self._commands[tokens[0]]
        return handler(tokens)

    def _cmd_exit(self, tokens: TokenSequence) -> BuiltinResult:
        """Stop the shell; takes no arguments."""
        if len(tokens) != _EXIT_TOKENS:
            msg = f"{tokens[0]}: expected no arguments, got {len(tokens.args)}"
            raise BuiltinUsageError(msg)
        self._logger.log(LogLevel.INFO, f"{tokens[0]} requested", source=_SOURCE)
        return BuiltinResult.EXIT

    def _cmd_cd(self, tokens: TokenSequence) -> BuiltinResult:
        """Change directory; takes exactly one path."""
        if len(tokens) != _CD_TOKENS:
            msg = f"cd: expected 1 argument, got {len(tokens.args)}"
            raise BuiltinUsageError(msg)
        self._cwd.change(tokens[1])
        self._logger.log(LogLevel.INFO, f"cwd is now {self._cwd.path}", source=_SOURCE)
        return BuiltinResult.CONTINUE
