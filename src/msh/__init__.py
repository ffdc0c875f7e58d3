"""msh — a minimal POSIX-subset shell.

The shell reads one line at a time from a terminal or a batch file,
splits it into tokens, and either handles it itself (``exit``,
``quit``, ``cd``) or resolves the command to an executable and runs it
as a child process.

Re-exports the main entry points so callers can write::

    from msh import Shell, ShellConfig, main
"""

from msh.config import ShellConfig
from msh.repl import main
from msh.shell import Shell

__all__ = ["Shell", "ShellConfig", "main"]

__version__ = "0.1.0"
