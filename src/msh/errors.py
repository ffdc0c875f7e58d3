"""Error taxonomy for the shell.

Every failure the shell can hit is an exception raised where it
happens and caught at one boundary (``Shell.execute`` for per-command
errors, ``repl.main`` for startup errors).  The operator only ever sees
one fixed message; the exception type and its detail text exist for
the audit log and for tests.

Hierarchy::

    ShellError
    ├── StartupError          bad invocation or unreadable batch file
    ├── BuiltinUsageError     wrong argument count for exit/quit/cd
    ├── ChangeDirectoryError  chdir failed
    ├── CommandNotFoundError  no executable in the search path
    ├── SpawnError            fork failed
    ├── RedirectionError      malformed ``>`` or unopenable target
    └── ExecError             program image could not be loaded
"""


class ShellError(Exception):
    """Base class for every error the shell reports."""


class StartupError(ShellError):
    """Raise when the shell cannot start (usage or batch file errors)."""


class BuiltinUsageError(ShellError):
    """Raise when a built-in is called with the wrong number of arguments."""


class ChangeDirectoryError(ShellError):
    """Raise when ``cd`` cannot change to the requested directory."""


class CommandNotFoundError(ShellError):
    """Raise when no search-path candidate is an executable file."""


class SpawnError(ShellError):
    """Raise when the child process could not be created."""


class RedirectionError(ShellError):
    """Raise for a malformed redirection or an unopenable target file."""


class ExecError(ShellError):
    """Raise when the child cannot replace itself with the program."""
