"""The shell — one input line through tokenize, dispatch, and execute.

``Shell.execute`` is the body of the read-parse-dispatch loop for a
single line:

1. Clean the raw line (strip the newline, bound the length).
2. Tokenize it.  No tokens means nothing to do.
3. Optionally dump the tokens (``debug_tokens``).
4. Dispatch: a built-in runs in-process; anything else goes to the
   executor, which resolves it and runs it in a child.

Design choices:
    - **One error boundary.**  Components raise ``ShellError``
      subclasses; ``execute`` is the only place they are caught.  Every
      one of them produces the same fixed message on stderr, plus an
      audit-log entry with the real cause.  The loop always continues.
    - **Returns a sentinel, not ``sys.exit``.**  ``exit``/``quit`` make
      ``execute`` return ``EXIT_SENTINEL`` and the REPL ends the loop,
      which keeps the shell testable.
    - **Tokens live for one call.**  Nothing parsed from a line is kept
      on the instance, so nothing leaks from one line into the next.
"""

from __future__ import annotations

import sys
from typing import TYPE_CHECKING, TextIO

from msh.builtins import BuiltinResult, Builtins, WorkingDirectory
from msh.config import ShellConfig
from msh.errors import ShellError
from msh.executor import Executor
from msh.logging import Logger, LogLevel
from msh.resolver import executables
from msh.tokenizer import clean_line, format_tokens, tokenize

if TYPE_CHECKING:
    from msh.tokenizer import TokenSequence

_SOURCE = "shell"


class Shell:
    """Command interpreter for one session."""

    EXIT_SENTINEL = "__EXIT__"

    def __init__(
        self,
        *,
        config: ShellConfig | None = None,
        logger: Logger | None = None,
        stdout: TextIO | None = None,
        stderr: TextIO | None = None,
    ) -> None:
        """Create a shell.

        Args:
            config: Session configuration (defaults to ``ShellConfig()``).
            logger: Audit log (a fresh one if not given).
            stdout: Stream for the token dump (defaults to ``sys.stdout``).
            stderr: Stream for the error message (defaults to ``sys.stderr``).

        """
        self._config = config or ShellConfig()
        self._logger = logger or Logger()
        self._stdout = stdout
        self._stderr = stderr
        self._cwd = WorkingDirectory()
        self._builtins = Builtins(cwd=self._cwd, logger=self._logger)
        self._executor = Executor(config=self._config, cwd=self._cwd, logger=self._logger)

    @property
    def config(self) -> ShellConfig:
        """Return the session configuration."""
        return self._config

    @property
    def logger(self) -> Logger:
        """Return the audit log."""
        return self._logger

    @property
    def cwd(self) -> WorkingDirectory:
        """Return the working-directory state."""
        return self._cwd

    @property
    def command_names(self) -> list[str]:
        """Return built-in names plus every executable on the search path."""
        names = set(self._builtins.names)
        names.update(executables(search_path=self._config.search_path))
        return sorted(names)

    def execute(self, line: str) -> str:
        """Process one raw input line.

        Args:
            line: The line as read, trailing newline allowed.

        Returns:
            ``EXIT_SENTINEL`` if the shell should stop, otherwise ``""``.

        """
        tokens = tokenize(
            clean_line(line, max_size=self._config.max_command_size),
            max_tokens=self._config.max_tokens,
        )
        if not tokens:
            return ""

        if self._config.debug_tokens:
            self._write(self._stdout or sys.stdout, format_tokens(tokens) + "\n")

        try:
            return self._dispatch(tokens)
        except ShellError as e:
            self._logger.log(
                LogLevel.ERROR, f"{type(e).__name__}: {e}", source=_SOURCE
            )
            self._write(self._stderr or sys.stderr, self._config.error_message)
            return ""

    def _dispatch(self, tokens: TokenSequence) -> str:
        """Route *tokens* to a built-in or the executor."""
        if self._builtins.is_builtin(tokens.command):
            result = self._builtins.run(tokens)
            return self.EXIT_SENTINEL if result is BuiltinResult.EXIT else ""
        self._executor.run(tokens)
        return ""

    @staticmethod
    def _write(stream: TextIO, text: str) -> None:
        """Write *text* and flush."""
        stream.write(text)
        stream.flush()
