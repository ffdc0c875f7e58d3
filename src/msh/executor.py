"""Executor — run an external command as a child process.

For each external command the shell does exactly this:

1. **Resolve** the command name against the fixed search path.  If
   nothing matches, report and stop; no child is created.
2. **Fork.**  If fork itself fails, report and stop.
3. **In the child:** scan for ``> file``, open it and point stdout and
   stderr at it, then ``execv`` the resolved path with the remaining
   tokens as argv.  Any failure here is reported on the child's stderr
   and the child exits with status 1.  The child never returns into
   the shell's loop.
4. **In the parent:** wait for that pid and no other.  The exit status
   is written to the audit log but never shown to the user.

There is no timeout.  A child that never exits blocks the shell.
"""

from __future__ import annotations

import os
import sys
from typing import TYPE_CHECKING, NoReturn

from msh.errors import ExecError, RedirectionError, SpawnError
from msh.logging import Logger, LogLevel
from msh.redirection import apply_redirection, open_redirection, parse_redirection
from msh.resolver import ResolvedCommand, resolve

if TYPE_CHECKING:
    from msh.builtins import WorkingDirectory
    from msh.config import ShellConfig
    from msh.tokenizer import TokenSequence

_SOURCE = "executor"

_CHILD_FAILURE = 1


class Executor:
    """Resolve, fork, exec, and wait for external commands."""

    def __init__(self, *, config: ShellConfig, cwd: WorkingDirectory, logger: Logger) -> None:
        """Create an executor.

        Args:
            config: Supplies the search path and the error message.
            cwd: The working directory every child inherits.
            logger: Audit log for resolution and process events.

        """
        self._config = config
        self._cwd = cwd
        self._logger = logger

    def run(self, tokens: TokenSequence) -> int:
        """Run *tokens* as an external command and wait for it.

        Args:
            tokens: A non-empty token sequence whose command is not a built-in.

        Returns:
            The child's exit code (negative signal number if it was killed).

        Raises:
            CommandNotFoundError: If resolution fails.
            SpawnError: If the child process cannot be created.

        """
        command = resolve(tokens, search_path=self._config.search_path)
        self._logger.log(
            LogLevel.DEBUG, f"{tokens[0]} resolved to {command.path}", source=_SOURCE
        )
        return self._spawn(command)

    def _spawn(self, command: ResolvedCommand) -> int:
        """Fork a child for *command* and reap exactly that child."""
        # Buffered output would otherwise be written twice, once per process.
        sys.stdout.flush()
        sys.stderr.flush()
        try:
            pid = os.fork()
        except OSError as e:
            msg = f"fork failed for {command.path}: {e.strerror}"
            raise SpawnError(msg) from e

        if pid == 0:
            self._run_child(command)

        self._logger.log(
            LogLevel.INFO,
            f"spawned {command.path} as pid {pid} in {self._cwd.path}",
            source=_SOURCE,
        )
        _, status = os.waitpid(pid, 0)
        code = os.waitstatus_to_exitcode(status)
        self._logger.log(LogLevel.INFO, f"pid {pid} exited with {code}", source=_SOURCE)
        return code

    def _run_child(self, command: ResolvedCommand) -> NoReturn:
        """Replace the child with the program, or exit 1 trying."""
        try:
            argv, redirection = parse_redirection(command.tokens.argv)
            if redirection is not None:
                apply_redirection(open_redirection(redirection))
            try:
                os.execv(command.path, argv)
            except (OSError, ValueError) as e:
                msg = f"execv {command.path!r}: {e}"
                raise ExecError(msg) from e
        except (RedirectionError, ExecError):
            os.write(2, self._config.error_message.encode())
        finally:
            # Never let the child unwind into the parent's loop.
            os._exit(_CHILD_FAILURE)
