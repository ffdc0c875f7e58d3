"""Top-level loop and startup.

Startup picks the input source from the command-line arguments:

- no arguments → interactive mode, prompt before every read;
- one argument → batch mode, read that file, no prompt;
- more → usage error, exit 1 without entering the loop.

The loop itself is the classic read-eval cycle:

    1. **Read** — ask the source for the next raw line.
    2. **Eval** — pass it to ``shell.execute()``.
    3. **Loop** — until end of input or the exit sentinel.

Both end-of-input and ``exit``/``quit`` end with status 0.  Per-command
errors never change the exit status.

The helper functions (``select_source``, ``run_loop``) are testable on
their own.  ``main()`` is the I/O entrypoint.
"""

from __future__ import annotations

import os
import readline
import sys
from typing import TYPE_CHECKING

from msh.completer import Completer
from msh.config import ShellConfig
from msh.errors import StartupError
from msh.logging import Logger, LogLevel
from msh.shell import Shell
from msh.source import BatchSource, InteractiveSource, LineSource

if TYPE_CHECKING:
    from collections.abc import Sequence

_SOURCE = "repl"

_MAX_ARGS = 1


def select_source(args: Sequence[str], config: ShellConfig) -> LineSource:
    """Choose the input source from the startup arguments.

    Args:
        args: Command-line arguments, program name excluded.
        config: Supplies the interactive prompt.

    Returns:
        An interactive source for no arguments, a batch source for one.

    Raises:
        StartupError: For two or more arguments, or an unopenable file.

    """
    if len(args) > _MAX_ARGS:
        msg = f"usage: msh [batch-file] (got {len(args)} arguments)"
        raise StartupError(msg)
    if args:
        return BatchSource(args[0])
    return InteractiveSource(prompt=config.prompt)


def run_loop(shell: Shell, source: LineSource) -> int:
    """Feed lines from *source* to *shell* until end of input or exit.

    With a log file configured, the audit log is flushed after every line.

    Returns:
        The shell's exit status, always 0.

    """
    while True:
        line = source.read_line()
        if line is None:
            shell.logger.log(LogLevel.INFO, "end of input", source=_SOURCE)
            break
        result = shell.execute(line)
        _flush_log(shell.logger, shell.config)
        if result == Shell.EXIT_SENTINEL:
            break
    return 0


def _enable_completion(shell: Shell) -> None:
    """Wire up tab completion via readline."""
    completer = Completer(shell)
    readline.set_completer(completer.complete)
    readline.set_completer_delims(" \t")
    readline.parse_and_bind("tab: complete")


def main(argv: Sequence[str] | None = None) -> int:
    """Start the shell and run it to completion.

    Args:
        argv: Arguments after the program name (defaults to ``sys.argv[1:]``).

    Returns:
        0 on a normal end, 1 on a startup error.

    """
    args = list(sys.argv[1:] if argv is None else argv)
    config = ShellConfig.from_environ(os.environ)
    logger = Logger()

    try:
        source = select_source(args, config)
    except StartupError as e:
        logger.log(LogLevel.ERROR, str(e), source=_SOURCE)
        sys.stderr.write(config.error_message)
        sys.stderr.flush()
        _flush_log(logger, config)
        return 1

    shell = Shell(config=config, logger=logger)
    try:
        if isinstance(source, BatchSource):
            logger.log(LogLevel.INFO, f"batch mode: {source.path}", source=_SOURCE)
            with source:
                status = run_loop(shell, source)
        else:
            logger.log(LogLevel.INFO, "interactive mode", source=_SOURCE)
            _enable_completion(shell)
            status = run_loop(shell, source)
    finally:
        _flush_log(logger, config)
    return status


def _flush_log(logger: Logger, config: ShellConfig) -> None:
    """Move pending audit entries to ``config.log_path`` if one is set."""
    if config.log_path is None:
        return
    try:
        logger.flush(config.log_path)
    except OSError:
        sys.stderr.write(config.error_message)
        sys.stderr.flush()
